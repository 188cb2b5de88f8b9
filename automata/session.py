import logging
from typing import Dict, Iterable, List, Set, Tuple, Union

from .dfa import DFA
from .fsa_base import AutomatonKind, FiniteAutomaton
from .fsa_errors import AutomatonError, InvalidKind, InvalidTransition
from .nfa import NFA

logger = logging.getLogger(__name__)

AUTOMATON_CLASSES = {
    AutomatonKind.DFA: DFA,
    AutomatonKind.NFA: NFA,
}


def parse_kind(value: Union[str, AutomatonKind]) -> AutomatonKind:
    if isinstance(value, AutomatonKind):
        return value
    try:
        return AutomatonKind(str(value).strip().lower())
    except ValueError:
        raise InvalidKind(value) from None


def _split_targets(to_states: Union[str, Iterable[str]]) -> List[str]:
    # Form input sends "A, B" for several destinations
    if isinstance(to_states, str):
        to_states = to_states.split(',')
    elif not isinstance(to_states, (list, tuple, set, frozenset)):
        to_states = [to_states]
    return [str(state).strip() for state in to_states if str(state).strip()]


class AutomatonSession:
    """
    Owns the live automaton edited by one user.

    Construction calls never raise: a rejected step returns
    ``{'success': False, 'error': code, 'message': text}`` and leaves the
    automaton exactly as it was.
    """

    def __init__(self, kind: Union[str, AutomatonKind] = AutomatonKind.NFA):
        self.kind = parse_kind(kind)
        self.automaton: FiniteAutomaton = AUTOMATON_CLASSES[self.kind]()

    @classmethod
    def from_definition(cls, definition: Dict, default_kind: str = AutomatonKind.NFA.value) -> Tuple['AutomatonSession', List[Dict]]:
        """
        Builds a session by replaying a definition as construction calls.

        Args:
            definition: Dict with keys:
                - type: 'dfa' or 'nfa' (default_kind when missing)
                - states: List of {'name', 'start', 'accept'} dicts or plain names
                - transitions: List of {'from', 'symbol', 'to'} dicts, 'to'
                  being a state name, a comma separated string or a list

        Returns:
            Tuple (session, construction_errors). Each error names the
            rejected step and its position in the definition.

        Raises:
            ValueError: If the definition itself is malformed or the type is unknown
        """
        if not isinstance(definition, dict):
            raise ValueError('Automaton definition must be a dictionary')

        states = definition.get('states', [])
        transitions = definition.get('transitions', [])
        if not isinstance(states, list):
            raise ValueError('states must be a list')
        if not isinstance(transitions, list):
            raise ValueError('transitions must be a list')

        session = cls(definition.get('type') or default_kind)
        errors = []

        for index, state in enumerate(states):
            if isinstance(state, str):
                state = {'name': state}
            if not isinstance(state, dict):
                raise ValueError(f'State at index {index} must be a name or a dictionary')
            is_start = state.get('start', False)
            is_accept = state.get('accept', False)
            # Only JSON booleans; the string "false" is rejected
            if not isinstance(is_start, bool) or not isinstance(is_accept, bool):
                raise ValueError(f'start and accept of the state at index {index} must be true or false')
            result = session.add_state(state.get('name'), is_start=is_start, is_accept=is_accept)
            if not result['success']:
                errors.append(dict(result, step='add_state', index=index))

        for index, transition in enumerate(transitions):
            if not isinstance(transition, dict):
                raise ValueError(f'Transition at index {index} must be a dictionary')
            result = session.add_transition(
                transition.get('from'),
                transition.get('symbol'),
                transition.get('to', []),
            )
            if not result['success']:
                errors.append(dict(result, step='add_transition', index=index))

        return session, errors

    def _apply(self, operation, *args, **kwargs) -> Dict:
        try:
            operation(*args, **kwargs)
        except AutomatonError as e:
            logger.info('Rejected %s: %s', operation.__name__, e)
            return {'success': False, 'error': e.code, 'message': str(e)}
        return {'success': True}

    def switch_kind(self, kind: Union[str, AutomatonKind]) -> Dict:
        """Replaces the automaton with an empty one of the given kind."""
        try:
            self.kind = parse_kind(kind)
        except InvalidKind as e:
            return {'success': False, 'error': e.code, 'message': str(e)}
        self.automaton = AUTOMATON_CLASSES[self.kind]()
        return {'success': True}

    def add_state(self, name, is_start: bool = False, is_accept: bool = False) -> Dict:
        name = '' if name is None else str(name).strip()
        return self._apply(self.automaton.add_state, name, is_start=is_start, is_accept=is_accept)

    def add_transition(self, from_state, symbol, to_states) -> Dict:
        from_state = '' if from_state is None else str(from_state).strip()
        symbol = '' if symbol is None else str(symbol).strip()
        targets = _split_targets(to_states if to_states is not None else [])

        if self.kind is AutomatonKind.DFA:
            if len(targets) != 1:
                error = InvalidTransition(
                    f"DFA transitions need exactly one destination state, got {len(targets)}"
                )
                logger.info('Rejected add_transition: %s', error)
                return {'success': False, 'error': error.code, 'message': str(error)}
            return self._apply(self.automaton.add_transition, from_state, symbol, targets[0])

        return self._apply(self.automaton.add_transition, from_state, symbol, targets)

    def remove_state(self, name: str) -> Dict:
        return self._apply(self.automaton.remove_state, name)

    def remove_transition(self, from_state: str, symbol: str, to_state: str) -> Dict:
        return self._apply(self.automaton.remove_transition, from_state, symbol, to_state)

    def epsilon_closure(self, states: Iterable[str]) -> Set[str]:
        if self.kind is AutomatonKind.NFA:
            return self.automaton.epsilon_closure(states)
        # DFAs have no epsilon moves
        return {states} if isinstance(states, str) else set(states)

    def simulate(self, input_symbols: Iterable[str]) -> bool:
        return self.automaton.simulate(input_symbols)

    def simulate_steps(self, input_symbols: Iterable[str]):
        return self.automaton.simulate_steps(input_symbols)

    def snapshot(self) -> Dict:
        snapshot = self.automaton.to_dict()
        snapshot['edges'] = self.automaton.edges()
        return snapshot
