import itertools
import unittest

from automata.dfa import DFA
from automata.fsa_base import EPSILON
from automata.fsa_errors import REJECT_NO_START_STATE, REJECT_NO_TRANSITION
from automata.fsa_simulation import (
    epsilon_closure,
    epsilon_closure_with_edges,
    move,
    trace_result,
    trace_to_path,
)
from automata.nfa import NFA
from automata.tests.test_nfa import build_nfa, random_nfa


class TestClosureHelpers(unittest.TestCase):
    def setUp(self):
        # Raw set-valued table, as stored by NFA
        self.transitions = {
            'A': {EPSILON: {'B', 'C'}},
            'B': {EPSILON: {'A'}, 'x': {'D'}},
            'C': {'x': {'D', 'E'}},
        }

    def test_epsilon_closure(self):
        self.assertEqual(epsilon_closure(self.transitions, {'A'}), {'A', 'B', 'C'})
        self.assertEqual(epsilon_closure(self.transitions, {'D'}), {'D'})

    def test_closure_edges_reach_each_new_state_once(self):
        closure, edges = epsilon_closure_with_edges(self.transitions, {'A'})

        self.assertEqual(closure, {'A', 'B', 'C'})
        self.assertEqual(sorted(edges), [('A', EPSILON, 'B'), ('A', EPSILON, 'C')])

    def test_move(self):
        destinations, taken = move(self.transitions, {'B', 'C'}, 'x')

        self.assertEqual(destinations, {'D', 'E'})
        self.assertEqual(taken, [('B', 'x', 'D'), ('C', 'x', 'D'), ('C', 'x', 'E')])

        self.assertEqual(move(self.transitions, {'A'}, 'x'), (set(), []))


class TestDfaSteps(unittest.TestCase):
    def setUp(self):
        self.dfa = DFA()
        self.dfa.add_state('S0', is_start=True)
        self.dfa.add_state('S1', is_accept=True)
        self.dfa.add_transition('S0', 'a', 'S1')
        self.dfa.add_transition('S1', 'b', 'S0')

    def test_accepted_trace(self):
        events = list(self.dfa.simulate_steps('aba'))

        self.assertEqual([e['type'] for e in events], ['start', 'step', 'step', 'step', 'summary'])
        self.assertEqual(events[0]['states'], ['S0'])
        self.assertEqual(events[1], {
            'type': 'step',
            'position': 0,
            'symbol': 'a',
            'from_states': ['S0'],
            'transitions': [('S0', 'a', 'S1')],
            'epsilon_transitions': [],
            'to_states': ['S1'],
        })
        self.assertEqual(events[-1], {'type': 'summary', 'accepted': True, 'final_states': ['S1'], 'consumed': 3})
        self.assertEqual(trace_to_path(events), [('S0', 'a', 'S1'), ('S1', 'b', 'S0'), ('S0', 'a', 'S1')])

    def test_missing_transition_trace(self):
        events = list(self.dfa.simulate_steps('ab b'))

        rejected = events[-2]
        self.assertEqual(rejected['type'], 'rejected')
        self.assertEqual(rejected['reason'], REJECT_NO_TRANSITION)
        self.assertEqual(rejected['position'], 2)
        self.assertEqual(rejected['symbol'], ' ')
        self.assertEqual(events[-1], {'type': 'summary', 'accepted': False, 'final_states': ['S0'], 'consumed': 2})

    def test_no_start_state(self):
        events = list(DFA().simulate_steps('a'))

        self.assertEqual(events[0]['reason'], REJECT_NO_START_STATE)
        self.assertFalse(events[-1]['accepted'])

    def test_trace_is_lazy(self):
        steps = self.dfa.simulate_steps(itertools.cycle('ab'))

        # An infinite input is fine as long as the caller stops pulling
        first = list(itertools.islice(steps, 4))
        self.assertEqual([e['type'] for e in first], ['start', 'step', 'step', 'step'])


class TestNfaSteps(unittest.TestCase):
    def test_epsilon_edges_reported(self):
        nfa = build_nfa(['S', 'A', 'B', 'F'], [('S', '', 'A'), ('A', 'x', 'B'), ('B', '', 'F')], 'S', {'F'})

        events = list(nfa.simulate_steps('x'))

        self.assertEqual(events[0], {
            'type': 'start',
            'states': ['A', 'S'],
            'epsilon_transitions': [('S', EPSILON, 'A')],
        })
        step = events[1]
        self.assertEqual(step['from_states'], ['A', 'S'])
        self.assertEqual(step['transitions'], [('A', 'x', 'B')])
        self.assertEqual(step['epsilon_transitions'], [('B', EPSILON, 'F')])
        self.assertEqual(step['to_states'], ['B', 'F'])
        self.assertTrue(events[-1]['accepted'])
        self.assertEqual(trace_to_path(events), [('S', EPSILON, 'A'), ('A', 'x', 'B'), ('B', EPSILON, 'F')])

    def test_rejected_when_no_state_moves(self):
        nfa = build_nfa(['S', 'A', 'B'], [('S', 'a', ['A', 'B'])], 'S', {'A', 'B'})

        events = list(nfa.simulate_steps('aa'))

        self.assertEqual(events[1]['to_states'], ['A', 'B'])
        self.assertEqual(events[2]['type'], 'rejected')
        self.assertEqual(events[2]['position'], 1)
        self.assertEqual(events[-1], {'type': 'summary', 'accepted': False, 'final_states': ['A', 'B'], 'consumed': 1})

    def test_no_start_state(self):
        events = list(NFA().simulate_steps(''))
        self.assertEqual(events[0]['reason'], REJECT_NO_START_STATE)

    def test_trace_agrees_with_simulate(self):
        words = [''.join(p) for n in range(4) for p in itertools.product('ab', repeat=n)]
        for seed in range(15):
            nfa = random_nfa(seed)
            for word in words:
                with self.subTest(seed=seed, word=word):
                    events = list(nfa.simulate_steps(word))
                    self.assertEqual(events[-1]['type'], 'summary')
                    self.assertEqual(trace_result(events), nfa.simulate(word))

    def test_each_step_starts_where_the_previous_ended(self):
        nfa = random_nfa(7)
        steps = [e for e in nfa.simulate_steps('abab') if e['type'] == 'step']
        for previous, current in zip(steps, steps[1:]):
            self.assertEqual(previous['to_states'], current['from_states'])


if __name__ == '__main__':
    unittest.main()
