from django.test import TestCase
from fsa_engine.automaton import (
    AutomatonKind,
    AutomatonModel,
    Severity,
    StateNode,
    TransitionEdge,
)
from fsa_engine.fsa_validation import validate


def make_model(kind=AutomatonKind.DFA, states=None, transitions=None, alphabet=()):
    if states is None:
        states = [
            StateNode('q0', 'q0', is_initial=True),
            StateNode('q1', 'q1', is_accept=True),
            StateNode('q2', 'q2'),
        ]
    return AutomatonModel(kind=kind, states=states, transitions=transitions or [], alphabet=alphabet)


class TestInitialAndAcceptStates(TestCase):
    """Checks that apply to every kind of automaton"""

    def test_valid_dfa(self):
        model = make_model(transitions=[
            TransitionEdge('t1', 'q0', 'q1', ['0']),
            TransitionEdge('t2', 'q0', 'q0', ['1']),
        ], alphabet=['0', '1'])
        result = validate(model)

        self.assertTrue(result.valid)
        self.assertEqual(result.diagnostics, [])

    def test_no_initial_state(self):
        for kind in (AutomatonKind.DFA, AutomatonKind.NFA):
            model = make_model(kind=kind, states=[StateNode('q0', 'q0', is_accept=True)])
            result = validate(model)

            self.assertFalse(result.valid)
            self.assertEqual(len(result.errors), 1)
            self.assertEqual(result.errors[0].message, 'No initial state defined')

    def test_multiple_initial_states_name_all_offenders(self):
        # The restriction holds for NFAs too
        for kind in (AutomatonKind.DFA, AutomatonKind.NFA):
            model = make_model(kind=kind, states=[
                StateNode('q0', 'q0', is_initial=True),
                StateNode('q1', 'q1', is_initial=True, is_accept=True),
                StateNode('q2', 'q2', is_initial=True),
            ])
            result = validate(model)

            self.assertFalse(result.valid)
            self.assertEqual(len(result.errors), 1)
            self.assertEqual(result.errors[0].affected_states, ('q0', 'q1', 'q2'))

    def test_missing_accept_state_is_only_a_warning(self):
        model = make_model(states=[StateNode('q0', 'q0', is_initial=True)])
        result = validate(model)

        self.assertTrue(result.valid)
        self.assertEqual(len(result.diagnostics), 1)
        self.assertEqual(result.diagnostics[0].severity, Severity.WARNING)
        self.assertEqual(result.warnings[0].message, 'No accept states defined')


class TestDeterminismChecks(TestCase):
    def test_duplicate_symbol_from_one_state(self):
        model = make_model(transitions=[
            TransitionEdge('t1', 'q0', 'q1', ['0']),
            TransitionEdge('t2', 'q0', 'q2', ['0']),
        ])
        result = validate(model)

        self.assertFalse(result.valid)
        self.assertEqual(len(result.diagnostics), 1)
        error = result.diagnostics[0]
        self.assertEqual(error.severity, Severity.ERROR)
        self.assertEqual(error.affected_states, ('q0',))
        self.assertEqual(error.affected_transitions, ('t1', 't2'))
        self.assertIn('"0"', error.message)

    def test_symbol_reuse_across_states_is_legal(self):
        model = make_model(transitions=[
            TransitionEdge('t1', 'q0', 'q1', ['0']),
            TransitionEdge('t2', 'q1', 'q2', ['0']),
            TransitionEdge('t3', 'q2', 'q0', ['0']),
        ])
        self.assertTrue(validate(model).valid)

    def test_one_error_per_state_and_symbol(self):
        model = make_model(transitions=[
            TransitionEdge('t1', 'q0', 'q1', ['0', '1']),
            TransitionEdge('t2', 'q0', 'q2', ['0', '1']),
            TransitionEdge('t3', 'q1', 'q1', ['0']),
            TransitionEdge('t4', 'q1', 'q2', ['0']),
        ])
        result = validate(model)

        self.assertEqual(len(result.errors), 3)
        self.assertEqual(
            [(e.affected_states, e.affected_transitions) for e in result.errors],
            [(('q0',), ('t1', 't2')), (('q0',), ('t1', 't2')), (('q1',), ('t3', 't4'))]
        )

    def test_epsilon_in_dfa(self):
        model = make_model(transitions=[TransitionEdge('t1', 'q0', 'q1', ['ε'])])
        result = validate(model)

        self.assertFalse(result.valid)
        self.assertEqual(len(result.errors), 1)
        self.assertEqual(result.errors[0].affected_transitions, ('t1',))
        self.assertEqual(result.errors[0].affected_states, ('q0',))

    def test_epsilon_edges_reported_together(self):
        model = make_model(transitions=[
            TransitionEdge('t1', 'q0', 'q1', ['ε']),
            TransitionEdge('t2', 'q1', 'q2', ['a', 'ε']),
        ])
        result = validate(model)

        self.assertEqual(len(result.errors), 1)
        self.assertIn('found 2', result.errors[0].message)
        self.assertEqual(result.errors[0].affected_transitions, ('t1', 't2'))
        self.assertEqual(result.errors[0].affected_states, ('q0', 'q1'))

    def test_nfa_allows_epsilon_and_branching(self):
        model = make_model(kind=AutomatonKind.NFA, transitions=[
            TransitionEdge('t1', 'q0', 'q1', ['0']),
            TransitionEdge('t2', 'q0', 'q2', ['0']),
            TransitionEdge('t3', 'q1', 'q2', ['ε']),
        ])
        self.assertTrue(validate(model).valid)


class TestAlphabetChecks(TestCase):
    def test_symbol_outside_alphabet(self):
        model = make_model(kind=AutomatonKind.NFA, transitions=[
            TransitionEdge('t1', 'q0', 'q1', ['x']),
            TransitionEdge('t2', 'q1', 'q2', ['ε']),
        ], alphabet=['0', '1'])
        result = validate(model)

        self.assertFalse(result.valid)
        self.assertEqual(len(result.errors), 1)
        self.assertEqual(result.errors[0].affected_transitions, ('t1',))
        self.assertIn('"x"', result.errors[0].message)

    def test_all_offending_symbols_listed(self):
        model = make_model(kind=AutomatonKind.NFA, transitions=[
            TransitionEdge('t1', 'q0', 'q1', ['x', '0', 'y']),
        ], alphabet=['0', '1'])
        result = validate(model)

        self.assertEqual(len(result.errors), 1)
        self.assertIn('"x", "y"', result.errors[0].message)

    def test_epsilon_exempt_even_in_dfa(self):
        model = make_model(transitions=[
            TransitionEdge('t1', 'q0', 'q1', ['ε']),
        ], alphabet=['0', '1'])
        result = validate(model)

        # Only the DFA epsilon error, no alphabet error
        self.assertEqual(len(result.errors), 1)
        self.assertIn('ε-transitions', result.errors[0].message)

    def test_empty_alphabet_is_unconstrained(self):
        model = make_model(kind=AutomatonKind.NFA, transitions=[
            TransitionEdge('t1', 'q0', 'q1', ['anything']),
        ])
        self.assertTrue(validate(model).valid)


class TestTransitionIntegrity(TestCase):
    def test_each_dangling_endpoint_is_its_own_error(self):
        model = make_model(transitions=[
            TransitionEdge('t1', 'q0', 'ghost', ['0']),
            TransitionEdge('t2', 'nowhere', 'elsewhere', ['1']),
        ])
        result = validate(model)

        self.assertFalse(result.valid)
        self.assertEqual(len(result.errors), 3)
        self.assertEqual(
            [e.affected_transitions for e in result.errors],
            [('t1',), ('t2',), ('t2',)]
        )
        self.assertIn('invalid target state: ghost', result.errors[0].message)
        self.assertIn('invalid source state: nowhere', result.errors[1].message)

    def test_edge_without_symbols(self):
        model = make_model(kind=AutomatonKind.NFA, transitions=[
            TransitionEdge('t1', 'q0', 'q1', []),
        ])
        result = validate(model)

        self.assertFalse(result.valid)
        self.assertEqual(len(result.errors), 1)
        self.assertIn('has no symbols', result.errors[0].message)

    def test_self_loops_and_parallel_edges_allowed(self):
        model = make_model(kind=AutomatonKind.NFA, transitions=[
            TransitionEdge('t1', 'q0', 'q0', ['0']),
            TransitionEdge('t2', 'q0', 'q1', ['0']),
            TransitionEdge('t3', 'q0', 'q1', ['0']),
        ])
        self.assertTrue(validate(model).valid)


class TestValidatorBehaviour(TestCase):
    def test_validate_is_idempotent(self):
        model = make_model(transitions=[
            TransitionEdge('t1', 'q0', 'q1', ['0']),
            TransitionEdge('t2', 'q0', 'q2', ['0', 'ε']),
            TransitionEdge('t3', 'q2', 'ghost', []),
        ], alphabet=['1'])

        self.assertEqual(validate(model), validate(model))

    def test_warnings_never_block_validity(self):
        model = make_model(kind=AutomatonKind.NFA, states=[
            StateNode('q0', 'q0', is_initial=True),
        ], transitions=[TransitionEdge('t1', 'q0', 'q0', ['a'])])
        result = validate(model)

        self.assertTrue(result.valid)
        self.assertEqual(len(result.warnings), 1)

    def test_pushdown_kind_is_validated_without_raising(self):
        model = make_model(kind=AutomatonKind.PDA, transitions=[
            TransitionEdge('t1', 'q0', 'q1', ['0']),
        ])
        self.assertTrue(validate(model).valid)

    def test_model_is_not_modified(self):
        model = make_model(transitions=[TransitionEdge('t1', 'q0', 'q1', ['ε'])])
        before = (model.states, model.transitions, model.alphabet)
        validate(model)
        self.assertEqual((model.states, model.transitions, model.alphabet), before)
