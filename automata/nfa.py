from typing import Dict, FrozenSet, Iterable, List, Set, Union

from .fsa_base import EPSILON, AutomatonKind, Edge, FiniteAutomaton
from .fsa_errors import MissingTargetState, UnknownTransition
from .fsa_simulation import (
    epsilon_closure,
    epsilon_closure_with_edges,
    move,
    no_start_state_event,
    no_transition_event,
    start_event,
    step_event,
    summary_event,
)


class NFA(FiniteAutomaton):
    """
    Non-deterministic finite automaton with epsilon transitions.

    The transition table maps state -> symbol -> set of next states.
    Transitions labelled EPSILON are followed without consuming input;
    an empty or blank symbol passed to add_transition means EPSILON.
    """

    kind = AutomatonKind.NFA

    @property
    def transitions(self) -> Dict[str, Dict[str, FrozenSet[str]]]:
        return {
            state: {symbol: frozenset(targets) for symbol, targets in row.items()}
            for state, row in self._transitions.items()
        }

    def edges(self) -> List[Edge]:
        return sorted(
            (from_state, symbol, to_state)
            for from_state, row in self._transitions.items()
            for symbol, targets in row.items()
            for to_state in targets
        )

    def _transitions_for_dict(self) -> Dict:
        return {
            state: {symbol: sorted(targets) for symbol, targets in sorted(row.items())}
            for state, row in sorted(self._transitions.items())
        }

    def add_transition(self, from_state: str, symbol: str, to_states: Union[str, Iterable[str]]) -> bool:
        """
        Adds transitions from one state to one or several states.

        Args:
            from_state: Source state
            symbol: Input symbol; empty or blank means epsilon
            to_states: A single destination state or an iterable of them

        Returns:
            True once the destinations have been merged into the table

        Raises:
            UnknownState: If the source or any destination has not been added
            MissingTargetState: If no destination was given
        """
        targets = [to_states] if isinstance(to_states, str) else list(to_states)
        if not symbol or not symbol.strip():
            symbol = EPSILON

        self._require_state(from_state, 'from')
        if not targets:
            raise MissingTargetState(from_state)
        for target in targets:
            self._require_state(target, 'to')

        self._transitions.setdefault(from_state, {}).setdefault(symbol, set()).update(targets)
        return True

    def remove_transition(self, from_state: str, symbol: str, to_state: str) -> bool:
        if not symbol or not symbol.strip():
            symbol = EPSILON
        targets = self._transitions.get(from_state, {}).get(symbol)
        if not targets or to_state not in targets:
            raise UnknownTransition(from_state, symbol, to_state)

        targets.discard(to_state)
        if not targets:
            del self._transitions[from_state][symbol]
        self._prune_row(from_state)
        return True

    def _drop_transitions_touching(self, name: str) -> None:
        self._transitions.pop(name, None)
        for from_state in list(self._transitions):
            row = self._transitions[from_state]
            for symbol in list(row):
                row[symbol].discard(name)
                if not row[symbol]:
                    del row[symbol]
            self._prune_row(from_state)

    def epsilon_closure(self, states: Iterable[str]) -> Set[str]:
        """
        All states reachable from ``states`` using zero or more epsilon
        transitions, including the given states themselves.
        """
        return epsilon_closure(self._transitions, states)

    def simulate(self, input_symbols: Iterable[str]) -> bool:
        """
        Subset simulation: tracks the set of active states instead of
        backtracking, so the cost is linear in the input length.
        """
        if self._start_state is None:
            return False

        active = self.epsilon_closure({self._start_state})
        for symbol in input_symbols:
            # The epsilon marker is never a consumable input symbol
            if symbol == EPSILON:
                return False
            moved, _ = move(self._transitions, self.epsilon_closure(active), symbol)
            if not moved:
                return False
            active = self.epsilon_closure(moved)

        return not active.isdisjoint(self._accept_states)

    def simulate_steps(self, input_symbols: Iterable[str]):
        """
        Generator version of simulate for step-by-step animation.

        Yields:
            'start' with the closure of the start state and the epsilon edges
            walked to reach it, one 'step' per consumed symbol (symbol edges
            taken, then epsilon edges walked while closing the new set), a
            'rejected' event when no state can move, and a final 'summary'
        """
        if self._start_state is None:
            yield no_start_state_event()
            yield summary_event(False, [], 0)
            return

        active, epsilon_edges = epsilon_closure_with_edges(self._transitions, {self._start_state})
        yield start_event(active, epsilon_edges)

        consumed = 0
        for position, symbol in enumerate(input_symbols):
            moved, taken = (set(), []) if symbol == EPSILON else move(self._transitions, active, symbol)
            if not moved:
                yield no_transition_event(position, symbol, active)
                yield summary_event(False, active, consumed)
                return

            next_active, epsilon_edges = epsilon_closure_with_edges(self._transitions, moved)
            yield step_event(position, symbol, active, taken, next_active, epsilon_edges)
            active = next_active
            consumed += 1

        yield summary_event(not active.isdisjoint(self._accept_states), active, consumed)
