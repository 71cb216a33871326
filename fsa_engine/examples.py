from typing import List, NamedTuple, Optional

from .automaton import AutomatonKind, AutomatonModel, StateNode, TransitionEdge


class AutomatonExample(NamedTuple):
    """A ready-made automaton offered by the editor's examples panel"""
    id: str
    name: str
    description: str
    category: AutomatonKind
    difficulty: str
    automaton: AutomatonModel


DIFFICULTIES = ('beginner', 'intermediate', 'advanced')


def _state(state_id, label, x, y, initial=False, accept=False):
    return StateNode(state_id, label, initial, accept, {'x': x, 'y': y})


def _edge(edge_id, source, target, *symbols):
    return TransitionEdge(edge_id, source, target, symbols)


AUTOMATON_EXAMPLES: List[AutomatonExample] = [
    AutomatonExample(
        id='dfa-even-zeros',
        name='Even number of 0s',
        description='Accepts strings with an even number of 0s',
        category=AutomatonKind.DFA,
        difficulty='beginner',
        automaton=AutomatonModel(
            kind=AutomatonKind.DFA,
            states=[
                _state('1', 'q0', 200, 200, initial=True, accept=True),
                _state('2', 'q1', 400, 200),
            ],
            transitions=[
                _edge('t1', '1', '2', '0'),
                _edge('t2', '2', '1', '0'),
                _edge('t3', '1', '1', '1'),
                _edge('t4', '2', '2', '1'),
            ],
            alphabet=['0', '1'],
        ),
    ),
    AutomatonExample(
        id='dfa-contains-01',
        name='Contains substring "01"',
        description='Accepts strings that contain "01" as a substring',
        category=AutomatonKind.DFA,
        difficulty='beginner',
        automaton=AutomatonModel(
            kind=AutomatonKind.DFA,
            states=[
                _state('1', 'q0', 150, 200, initial=True),
                _state('2', 'q1', 300, 200),
                _state('3', 'q2', 450, 200, accept=True),
            ],
            transitions=[
                _edge('t1', '1', '1', '1'),
                _edge('t2', '1', '2', '0'),
                _edge('t3', '2', '2', '0'),
                _edge('t4', '2', '3', '1'),
                _edge('t5', '3', '3', '0', '1'),
            ],
            alphabet=['0', '1'],
        ),
    ),
    AutomatonExample(
        id='dfa-divisible-by-3',
        name='Binary divisible by 3',
        description='Accepts binary numbers divisible by 3',
        category=AutomatonKind.DFA,
        difficulty='intermediate',
        automaton=AutomatonModel(
            kind=AutomatonKind.DFA,
            states=[
                _state('1', 'q0', 250, 150, initial=True, accept=True),
                _state('2', 'q1', 400, 100),
                _state('3', 'q2', 400, 250),
            ],
            transitions=[
                _edge('t1', '1', '1', '0'),
                _edge('t2', '1', '2', '1'),
                _edge('t3', '2', '3', '0'),
                _edge('t4', '2', '1', '1'),
                _edge('t5', '3', '2', '0'),
                _edge('t6', '3', '3', '1'),
            ],
            alphabet=['0', '1'],
        ),
    ),
    AutomatonExample(
        id='nfa-ends-with-01',
        name='Ends with "01"',
        description='NFA that accepts strings ending with "01"',
        category=AutomatonKind.NFA,
        difficulty='beginner',
        automaton=AutomatonModel(
            kind=AutomatonKind.NFA,
            states=[
                _state('1', 'q0', 150, 200, initial=True),
                _state('2', 'q1', 300, 200),
                _state('3', 'q2', 450, 200, accept=True),
            ],
            transitions=[
                _edge('t1', '1', '1', '0', '1'),
                _edge('t2', '1', '2', '0'),
                _edge('t3', '2', '3', '1'),
            ],
            alphabet=['0', '1'],
        ),
    ),
    AutomatonExample(
        id='nfa-third-from-end-is-1',
        name='Third symbol from end is 1',
        description='NFA that accepts strings where the third symbol from the end is 1',
        category=AutomatonKind.NFA,
        difficulty='intermediate',
        automaton=AutomatonModel(
            kind=AutomatonKind.NFA,
            states=[
                _state('1', 'q0', 100, 200, initial=True),
                _state('2', 'q1', 250, 200),
                _state('3', 'q2', 400, 200),
                _state('4', 'q3', 550, 200, accept=True),
            ],
            transitions=[
                _edge('t1', '1', '1', '0', '1'),
                _edge('t2', '1', '2', '1'),
                _edge('t3', '2', '3', '0', '1'),
                _edge('t4', '3', '4', '0', '1'),
            ],
            alphabet=['0', '1'],
        ),
    ),
    AutomatonExample(
        id='nfa-epsilon',
        name='NFA with ε-transitions',
        description='Demonstrates epsilon transitions (accepts "a" or "ab")',
        category=AutomatonKind.NFA,
        difficulty='intermediate',
        automaton=AutomatonModel(
            kind=AutomatonKind.NFA,
            states=[
                _state('1', 'q0', 150, 200, initial=True),
                _state('2', 'q1', 300, 200, accept=True),
                _state('3', 'q2', 450, 200, accept=True),
            ],
            transitions=[
                _edge('t1', '1', '2', 'a'),
                _edge('t2', '2', '3', 'ε'),
                _edge('t3', '3', '3', 'b'),
            ],
            alphabet=['a', 'b'],
        ),
    ),
    AutomatonExample(
        id='dfa-starts-and-ends-same',
        name='Starts and ends with same symbol',
        description='DFA accepting strings that start and end with the same symbol',
        category=AutomatonKind.DFA,
        difficulty='advanced',
        automaton=AutomatonModel(
            kind=AutomatonKind.DFA,
            states=[
                _state('1', 'q0', 200, 200, initial=True),
                _state('2', 'q1', 350, 100, accept=True),
                _state('3', 'q2', 500, 100),
                _state('4', 'q3', 350, 300, accept=True),
                _state('5', 'q4', 500, 300),
            ],
            transitions=[
                _edge('t1', '1', '2', '0'),
                _edge('t2', '1', '4', '1'),
                _edge('t3', '2', '2', '0'),
                _edge('t4', '2', '3', '1'),
                _edge('t5', '3', '2', '0'),
                _edge('t6', '3', '3', '1'),
                _edge('t7', '4', '5', '0'),
                _edge('t8', '4', '4', '1'),
                _edge('t9', '5', '5', '0'),
                _edge('t10', '5', '4', '1'),
            ],
            alphabet=['0', '1'],
        ),
    ),
]


def get_examples_by_category(category) -> List[AutomatonExample]:
    category = AutomatonKind(category)
    return [e for e in AUTOMATON_EXAMPLES if e.category == category]


def get_examples_by_difficulty(difficulty: str) -> List[AutomatonExample]:
    return [e for e in AUTOMATON_EXAMPLES if e.difficulty == difficulty]


def get_example_by_id(example_id: str) -> Optional[AutomatonExample]:
    for example in AUTOMATON_EXAMPLES:
        if example.id == example_id:
            return example
    return None
