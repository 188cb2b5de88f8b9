import logging
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .fsa_errors import DuplicateState, EmptyStateName, InvalidStateName, UnknownState

logger = logging.getLogger(__name__)

EPSILON = 'ε'

# (from_state, symbol, to_state)
Edge = Tuple[str, str, str]


class AutomatonKind(str, Enum):
    DFA = 'dfa'
    NFA = 'nfa'


class FiniteAutomaton:
    """
    State bookkeeping shared by DFA and NFA.

    Subclasses own the shape of the transition table (a scalar destination
    per symbol for DFA, a set of destinations for NFA) and implement
    add_transition, remove_transition, simulate and simulate_steps on top
    of it. Every state referenced by the table, the start state or the
    accept set is always a member of ``states``.
    """

    kind: AutomatonKind

    def __init__(self):
        self._states: Set[str] = set()
        self._transitions: Dict[str, Dict] = {}
        self._start_state: Optional[str] = None
        self._accept_states: Set[str] = set()

    # Introspection

    @property
    def states(self) -> frozenset:
        return frozenset(self._states)

    @property
    def alphabet(self) -> frozenset:
        return frozenset(
            symbol
            for row in self._transitions.values()
            for symbol in row
            if symbol != EPSILON
        )

    @property
    def start_state(self) -> Optional[str]:
        return self._start_state

    @property
    def accept_states(self) -> frozenset:
        return frozenset(self._accept_states)

    def edges(self) -> List[Edge]:
        raise NotImplementedError

    def to_dict(self) -> Dict:
        """
        Snapshot of the automaton for listing and table views.

        Returns:
            Dict with the keys states, alphabet, transitions, startingState,
            acceptingStates. Lists are sorted so the output is stable.
        """
        return {
            'type': self.kind.value,
            'states': sorted(self._states),
            'alphabet': sorted(self.alphabet),
            'transitions': self._transitions_for_dict(),
            'startingState': self._start_state,
            'acceptingStates': sorted(self._accept_states),
        }

    def _transitions_for_dict(self) -> Dict:
        raise NotImplementedError

    # Construction

    def add_state(self, name: str, is_start: bool = False, is_accept: bool = False) -> bool:
        """
        Adds a state to the automaton.

        Args:
            name: Unique, non-blank state identifier
            is_start: Make this the start state, replacing any previous one
            is_accept: Flag this state as accepting

        Returns:
            True once the state has been added

        Raises:
            InvalidStateName: If the name is not a string
            EmptyStateName: If the name is empty or blank
            DuplicateState: If a state with this name already exists
        """
        if name is not None and not isinstance(name, str):
            raise InvalidStateName(name)
        if not name or not name.strip():
            raise EmptyStateName()
        if name in self._states:
            raise DuplicateState(name)

        self._states.add(name)
        if is_start:
            if self._start_state is not None:
                logger.warning("Changing start state from '%s' to '%s'", self._start_state, name)
            self._start_state = name
        if is_accept:
            self._accept_states.add(name)
        return True

    def remove_state(self, name: str) -> bool:
        """
        Removes a state together with every transition into or out of it.
        """
        self._require_state(name)

        self._drop_transitions_touching(name)
        self._states.discard(name)
        self._accept_states.discard(name)
        if self._start_state == name:
            self._start_state = None
        return True

    def _drop_transitions_touching(self, name: str) -> None:
        raise NotImplementedError

    def _require_state(self, name: str, role: Optional[str] = None) -> None:
        if name not in self._states:
            raise UnknownState(name, role)

    def _prune_row(self, from_state: str) -> None:
        if from_state in self._transitions and not self._transitions[from_state]:
            del self._transitions[from_state]

    # Simulation

    def simulate(self, input_symbols: Iterable[str]) -> bool:
        raise NotImplementedError

    def simulate_steps(self, input_symbols: Iterable[str]):
        raise NotImplementedError

    def __repr__(self):
        return (
            f"{type(self).__name__}(states={sorted(self._states)!r}, "
            f"start={self._start_state!r}, accept={sorted(self._accept_states)!r})"
        )
