from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Tuple


EPSILON = 'ε'


class FSAEngineError(Exception):
    """Base class for errors raised by the automaton engine"""


class InvalidModelError(FSAEngineError):
    """Raised when a model breaks the engine's preconditions"""


class AutomatonKind(str, Enum):
    DFA = 'DFA'
    NFA = 'NFA'
    PDA = 'PDA'


class Severity(str, Enum):
    ERROR = 'error'
    WARNING = 'warning'


@dataclass(frozen=True)
class StateNode:
    """A state of the automaton. label and position are display-only."""
    id: str
    label: str = ''
    is_initial: bool = False
    is_accept: bool = False
    position: Optional[Dict[str, Any]] = field(default=None, compare=False)


@dataclass(frozen=True)
class TransitionEdge:
    """A directed edge labelled with one or more symbols."""
    id: str
    source: str
    target: str
    symbols: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'symbols', tuple(self.symbols))

    @property
    def is_epsilon(self) -> bool:
        return EPSILON in self.symbols


@dataclass(frozen=True)
class AutomatonModel:
    """
    Declarative description of an automaton.

    States and transitions are kept in declared order; every lookup the
    engine performs walks them in that order.
    """
    kind: AutomatonKind = AutomatonKind.DFA
    states: Tuple[StateNode, ...] = ()
    transitions: Tuple[TransitionEdge, ...] = ()
    alphabet: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'kind', AutomatonKind(self.kind))
        object.__setattr__(self, 'states', tuple(self.states))
        object.__setattr__(self, 'transitions', tuple(self.transitions))
        object.__setattr__(self, 'alphabet', tuple(self.alphabet))

    def state_ids(self) -> List[str]:
        return [state.id for state in self.states]

    def get_state(self, state_id: str) -> Optional[StateNode]:
        for state in self.states:
            if state.id == state_id:
                return state
        return None

    def initial_states(self) -> List[StateNode]:
        return [state for state in self.states if state.is_initial]

    def accept_states(self) -> List[StateNode]:
        return [state for state in self.states if state.is_accept]

    def outgoing(self, state_id: str) -> List[TransitionEdge]:
        return [t for t in self.transitions if t.source == state_id]

    def label_of(self, state_id: str) -> str:
        state = self.get_state(state_id)
        if state is None:
            return state_id
        return state.label or state.id


def check_model(model: AutomatonModel) -> None:
    """
    Enforce the preconditions simulation relies on.

    Raises:
        InvalidModelError: if the kind is stack-based or state ids repeat
    """
    if model.kind == AutomatonKind.PDA:
        raise InvalidModelError('Pushdown automata cannot be simulated')

    check_state_ids(model.states)


def check_state_ids(states) -> None:
    """Raises InvalidModelError if two states share an id"""
    seen = set()
    duplicates = []
    for state in states:
        if state.id in seen and state.id not in duplicates:
            duplicates.append(state.id)
        seen.add(state.id)

    if duplicates:
        raise InvalidModelError(f"Duplicate state ids: {', '.join(duplicates)}")


@dataclass(frozen=True)
class Configuration:
    """One snapshot of a simulation run."""
    active_states: Tuple[str, ...]
    consumed_prefix: str
    remaining_suffix: str
    transition_used: Optional[TransitionEdge] = None

    @property
    def is_stuck(self) -> bool:
        return len(self.active_states) == 0


@dataclass(frozen=True)
class Trace:
    """
    Ordered configurations of one run. Index 0 is before any input is read;
    index k follows the k-th symbol, or is the step at which the run got stuck.
    """
    input_string: str
    configurations: Tuple[Configuration, ...]

    def __len__(self) -> int:
        return len(self.configurations)

    def __getitem__(self, index):
        return self.configurations[index]

    def __iter__(self) -> Iterator[Configuration]:
        return iter(self.configurations)

    @property
    def final(self) -> Optional[Configuration]:
        if not self.configurations:
            return None
        return self.configurations[-1]


@dataclass(frozen=True)
class Diagnostic:
    message: str
    severity: Severity
    affected_states: Tuple[str, ...] = ()
    affected_transitions: Tuple[str, ...] = ()

    @property
    def is_error(self) -> bool:
        return self.severity == Severity.ERROR


class ValidationResult(NamedTuple):
    """Outcome of validating a model"""
    valid: bool
    diagnostics: List[Diagnostic]

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity == Severity.WARNING]
