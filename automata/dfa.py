import logging
from typing import Dict, Iterable, List

from .fsa_base import EPSILON, AutomatonKind, Edge, FiniteAutomaton
from .fsa_errors import EmptySymbol, UnknownTransition
from .fsa_simulation import (
    no_start_state_event,
    no_transition_event,
    start_event,
    step_event,
    summary_event,
)

logger = logging.getLogger(__name__)


class DFA(FiniteAutomaton):
    """
    Deterministic finite automaton.

    The transition table maps state -> symbol -> exactly one next state.
    Adding a transition for a (state, symbol) pair that already has one
    replaces the previous destination.
    """

    kind = AutomatonKind.DFA

    @property
    def transitions(self) -> Dict[str, Dict[str, str]]:
        return {state: dict(row) for state, row in self._transitions.items()}

    def edges(self) -> List[Edge]:
        return sorted(
            (from_state, symbol, to_state)
            for from_state, row in self._transitions.items()
            for symbol, to_state in row.items()
        )

    def _transitions_for_dict(self) -> Dict:
        return {state: dict(sorted(row.items())) for state, row in sorted(self._transitions.items())}

    def add_transition(self, from_state: str, symbol: str, to_state: str) -> bool:
        """
        Records transitions[from_state][symbol] = to_state.

        Raises:
            UnknownState: If either endpoint has not been added
            EmptySymbol: If the symbol is empty or EPSILON (DFAs have no epsilon moves)
        """
        self._require_state(from_state, 'from')
        self._require_state(to_state, 'to')
        if not symbol or symbol == EPSILON:
            raise EmptySymbol()

        row = self._transitions.setdefault(from_state, {})
        previous = row.get(symbol)
        if previous is not None and previous != to_state:
            logger.info("Overwriting transition %s --%s--> %s with %s", from_state, symbol, previous, to_state)
        row[symbol] = to_state
        return True

    def remove_transition(self, from_state: str, symbol: str, to_state: str) -> bool:
        if self._transitions.get(from_state, {}).get(symbol) != to_state:
            raise UnknownTransition(from_state, symbol, to_state)

        del self._transitions[from_state][symbol]
        self._prune_row(from_state)
        return True

    def _drop_transitions_touching(self, name: str) -> None:
        self._transitions.pop(name, None)
        for from_state in list(self._transitions):
            row = self._transitions[from_state]
            for symbol in [s for s, to_state in row.items() if to_state == name]:
                del row[symbol]
            self._prune_row(from_state)

    def simulate(self, input_symbols: Iterable[str]) -> bool:
        """
        Folds the transition function over the input.

        Rejects as soon as a symbol has no transition from the current
        state; otherwise accepts iff the final state is accepting.
        """
        current = self._start_state
        if current is None:
            return False

        for symbol in input_symbols:
            current = self._transitions.get(current, {}).get(symbol)
            if current is None:
                return False

        return current in self._accept_states

    def simulate_steps(self, input_symbols: Iterable[str]):
        """
        Generator version of simulate yielding one event per consumed symbol.

        Yields:
            'start', then one 'step' per symbol, a 'rejected' event if a
            transition is missing, and a final 'summary'
        """
        current = self._start_state
        if current is None:
            yield no_start_state_event()
            yield summary_event(False, [], 0)
            return

        yield start_event([current])

        consumed = 0
        for position, symbol in enumerate(input_symbols):
            next_state = self._transitions.get(current, {}).get(symbol)
            if next_state is None:
                yield no_transition_event(position, symbol, [current])
                yield summary_event(False, [current], consumed)
                return

            yield step_event(position, symbol, [current], [(current, symbol, next_state)], [next_state])
            current = next_state
            consumed += 1

        yield summary_event(current in self._accept_states, [current], consumed)
