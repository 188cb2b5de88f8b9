from typing import Dict, Iterable, List, Optional, Set, Tuple

from .fsa_base import EPSILON, Edge
from .fsa_errors import REJECT_NO_START_STATE, REJECT_NO_TRANSITION


def epsilon_closure(transitions: Dict[str, Dict[str, Set[str]]], states: Iterable[str]) -> Set[str]:
    """
    Compute epsilon closure of a set of states.

    Args:
        transitions: Set-valued transition table (state -> symbol -> states)
        states: Set of states to compute closure for

    Returns:
        The given states plus every state reachable from them through
        zero or more epsilon transitions
    """
    closure, _ = epsilon_closure_with_edges(transitions, states)
    return closure


def epsilon_closure_with_edges(transitions: Dict[str, Dict[str, Set[str]]],
                               states: Iterable[str]) -> Tuple[Set[str], List[Edge]]:
    """
    Epsilon closure that also reports the epsilon edges walked to build it.

    Depth-first over an explicit stack; each state is expanded once, so
    epsilon cycles (including self loops) terminate.

    Returns:
        Tuple (closure, edges) where edges lists (src, 'ε', dst) for every
        epsilon transition that added a new state to the closure
    """
    if isinstance(states, str):
        states = [states]

    closure = set(states)
    stack = sorted(closure, reverse=True)
    edges: List[Edge] = []

    while stack:
        current = stack.pop()
        for next_state in sorted(transitions.get(current, {}).get(EPSILON, ())):
            if next_state not in closure:
                closure.add(next_state)
                edges.append((current, EPSILON, next_state))
                stack.append(next_state)

    return closure, edges


def move(transitions: Dict[str, Dict[str, Set[str]]], states: Iterable[str],
         symbol: str) -> Tuple[Set[str], List[Edge]]:
    """
    Union of the destinations of ``symbol`` over ``states``, with the edges taken.
    """
    destinations: Set[str] = set()
    taken: List[Edge] = []
    for state in sorted(states):
        for next_state in sorted(transitions.get(state, {}).get(symbol, ())):
            destinations.add(next_state)
            taken.append((state, symbol, next_state))
    return destinations, taken


# Trace events. Every simulate_steps generator yields one 'start' event,
# one 'step' per consumed symbol, at most one 'rejected' and a final 'summary'.

def start_event(states: Iterable[str], epsilon_transitions: Optional[List[Edge]] = None) -> Dict:
    return {
        'type': 'start',
        'states': sorted(states),
        'epsilon_transitions': list(epsilon_transitions or []),
    }


def step_event(position: int, symbol: str, from_states: Iterable[str], transitions: List[Edge],
               to_states: Iterable[str], epsilon_transitions: Optional[List[Edge]] = None) -> Dict:
    return {
        'type': 'step',
        'position': position,
        'symbol': symbol,
        'from_states': sorted(from_states),
        'transitions': list(transitions),
        'epsilon_transitions': list(epsilon_transitions or []),
        'to_states': sorted(to_states),
    }


def no_transition_event(position: int, symbol: str, states: Iterable[str]) -> Dict:
    states = sorted(states)
    if len(states) == 1:
        message = f"No transition defined for symbol '{symbol}' from state '{states[0]}'"
    else:
        message = f"No transition defined for symbol '{symbol}' from states {states}"
    return {
        'type': 'rejected',
        'position': position,
        'symbol': symbol,
        'reason': REJECT_NO_TRANSITION,
        'message': message,
    }


def no_start_state_event() -> Dict:
    return {
        'type': 'rejected',
        'position': 0,
        'symbol': None,
        'reason': REJECT_NO_START_STATE,
        'message': 'Automaton has no start state',
    }


def summary_event(accepted: bool, final_states: Iterable[str], consumed: int) -> Dict:
    return {
        'type': 'summary',
        'accepted': accepted,
        'final_states': sorted(final_states),
        'consumed': consumed,
    }


def trace_to_path(events: Iterable[Dict]) -> List[Edge]:
    """
    Flattens a trace into the ordered list of edges an animator highlights.

    Epsilon edges walked while closing a state set come after the symbol
    edges of the same step, and the start event's epsilon edges come first.
    """
    path: List[Edge] = []
    for event in events:
        if event['type'] == 'start':
            path.extend(tuple(edge) for edge in event['epsilon_transitions'])
        elif event['type'] == 'step':
            path.extend(tuple(edge) for edge in event['transitions'])
            path.extend(tuple(edge) for edge in event['epsilon_transitions'])
    return path


def trace_result(events: Iterable[Dict]) -> bool:
    """Consumes a trace and returns the summary's verdict."""
    accepted = False
    for event in events:
        if event['type'] == 'summary':
            accepted = event['accepted']
    return accepted
