import logging
from typing import Iterable, List, NamedTuple, Optional, Set, Tuple

from .automaton import (
    EPSILON,
    AutomatonKind,
    AutomatonModel,
    Configuration,
    Trace,
    TransitionEdge,
    ValidationResult,
    check_model,
)
from .fsa_validation import validate

logger = logging.getLogger(__name__)


def epsilon_closure(model: AutomatonModel, seeds: Iterable[str]) -> Set[str]:
    """
    Compute epsilon closure of a set of states.

    Args:
        model: The automaton
        seeds: States to compute closure for

    Returns:
        Set of states reachable from any seed via zero or more epsilon transitions
    """
    closure = set(seeds)
    stack = list(closure)

    while stack:
        current = stack.pop()

        for transition in _get_transitions(model, current, EPSILON):
            if transition.target not in closure:
                closure.add(transition.target)
                stack.append(transition.target)

    return closure


def simulate(model: AutomatonModel, input_string: str) -> Trace:
    """
    Runs the automaton over the input string and records every step.

    DFAs follow a single active state; NFAs follow the epsilon-closed set of
    active states. A run that cannot consume the next symbol ends with a stuck
    configuration (no active states) whose remaining suffix still starts at
    the symbol that could not be read.

    Args:
        model: The automaton to run
        input_string: Input symbols, one character per symbol

    Returns:
        Trace whose first configuration precedes any input

    Raises:
        InvalidModelError: for pushdown automata or duplicate state ids
    """
    check_model(model)

    if model.kind == AutomatonKind.DFA:
        trace = simulate_deterministic(model, input_string)
    else:
        trace = simulate_nondeterministic(model, input_string)

    logger.debug(
        'Simulated %s over %r in %d steps (stuck=%s)',
        model.kind.value, input_string, len(trace), trace.final.is_stuck,
    )
    return trace


def simulate_deterministic(model: AutomatonModel, input_string: str) -> Trace:
    """
    Simulates the model as a DFA.

    Models that fail validation still run: with several initial states the
    first declared one is used, and when a state has several edges for a
    symbol the first edge in declared order is taken.

    Args:
        model: The automaton to run
        input_string: The input string to simulate

    Returns:
        Trace of single-state configurations
    """
    initial_states = model.initial_states()
    if not initial_states:
        return _stuck_at_start(input_string)

    current_state = initial_states[0].id
    steps = [Configuration((current_state,), '', input_string)]

    for position, symbol in enumerate(input_string):
        transition = _first_transition(model, current_state, symbol)

        if transition is None:
            steps.append(_stuck(input_string, position))
            break

        current_state = transition.target
        steps.append(Configuration(
            active_states=(current_state,),
            consumed_prefix=input_string[:position + 1],
            remaining_suffix=input_string[position + 1:],
            transition_used=transition,
        ))

    return Trace(input_string, tuple(steps))


def simulate_nondeterministic(model: AutomatonModel, input_string: str) -> Trace:
    """
    Simulates the model as an NFA, tracking every active state at once.

    Epsilon moves are saturated before the first symbol and after each one.
    transition_used on a step is the first edge, in declared order, that
    contributed to it.

    Args:
        model: The automaton to run
        input_string: The input string to simulate

    Returns:
        Trace whose active states are ordered by state declaration
    """
    initial_states = model.initial_states()
    if not initial_states:
        return _stuck_at_start(input_string)

    current_states = epsilon_closure(model, {initial_states[0].id})
    steps = [Configuration(_ordered(model, current_states), '', input_string)]

    for position, symbol in enumerate(input_string):
        next_states, transition_used = _move(model, current_states, symbol)

        if not next_states:
            steps.append(_stuck(input_string, position))
            break

        current_states = epsilon_closure(model, next_states)
        steps.append(Configuration(
            active_states=_ordered(model, current_states),
            consumed_prefix=input_string[:position + 1],
            remaining_suffix=input_string[position + 1:],
            transition_used=transition_used,
        ))

    return Trace(input_string, tuple(steps))


def is_accepted(model: AutomatonModel, trace: Trace) -> bool:
    """
    Checks the verdict of a finished run.

    A run is accepted when all input was consumed and at least one of the
    final active states is an accept state. Stuck runs always leave input
    behind, so they are always rejected.
    """
    final = trace.final
    if final is None or final.remaining_suffix:
        return False

    for state_id in final.active_states:
        state = model.get_state(state_id)
        if state is not None and state.is_accept:
            return True

    return False


ACCEPTED = 'accepted'
REJECTED = 'rejected'
ERROR = 'error'


class InputVerdict(NamedTuple):
    """Outcome of one stored test input"""
    input: str
    result: str


class BatchResult(NamedTuple):
    """Verdicts for a list of test inputs with per-outcome counts"""
    results: List[InputVerdict]
    accepted: int
    rejected: int
    errors: int


def run_all(model: AutomatonModel, inputs: Iterable[str]) -> BatchResult:
    """
    Runs a list of test inputs against the model, the way the editor's test
    suite panel does.

    Inputs are stripped of surrounding whitespace and repeats are skipped, so
    each distinct input is reported once, in first-seen order. A model with
    validation errors cannot give a trustworthy verdict, so every input is
    marked 'error' instead of being run.

    Args:
        model: The automaton to run
        inputs: Test input strings

    Returns:
        BatchResult with one InputVerdict per distinct input and the counts

    Raises:
        InvalidModelError: for pushdown automata or duplicate state ids
    """
    check_model(model)
    valid = validate(model).valid

    results = []
    for input_string in dict.fromkeys(s.strip() for s in inputs):
        if not valid:
            results.append(InputVerdict(input_string, ERROR))
            continue

        accepted = is_accepted(model, simulate(model, input_string))
        results.append(InputVerdict(input_string, ACCEPTED if accepted else REJECTED))

    return BatchResult(
        results=results,
        accepted=sum(1 for r in results if r.result == ACCEPTED),
        rejected=sum(1 for r in results if r.result == REJECTED),
        errors=sum(1 for r in results if r.result == ERROR),
    )


class SimulationEngine:
    """
    Engine bound to one caller-owned model.

    The model is only read, never modified, so one engine may serve any
    number of runs.
    """

    def __init__(self, model: AutomatonModel):
        self.model = model

    def validate(self) -> ValidationResult:
        return validate(self.model)

    def closure(self, seeds: Iterable[str]) -> Set[str]:
        return epsilon_closure(self.model, seeds)

    def simulate(self, input_string: str) -> Trace:
        return simulate(self.model, input_string)

    def is_accepted(self, trace: Trace) -> bool:
        return is_accepted(self.model, trace)

    def run(self, input_string: str) -> Tuple[Trace, bool]:
        trace = self.simulate(input_string)
        return trace, self.is_accepted(trace)

    def run_all(self, inputs: Iterable[str]) -> BatchResult:
        return run_all(self.model, inputs)


def _get_transitions(model: AutomatonModel, state: str, symbol: str) -> List[TransitionEdge]:
    """
    Get all edges leaving a state on a symbol, in declared order.

    Args:
        model: The automaton
        state: Current state
        symbol: Input symbol (or EPSILON)

    Returns:
        List of matching edges
    """
    return [
        t for t in model.transitions
        if t.source == state and symbol in t.symbols
    ]


def _first_transition(model: AutomatonModel, state: str, symbol: str) -> Optional[TransitionEdge]:
    # An epsilon in the input names no real symbol
    if symbol == EPSILON:
        return None
    for transition in model.transitions:
        if transition.source == state and symbol in transition.symbols:
            return transition
    return None


def _move(model: AutomatonModel, states: Set[str], symbol: str) -> Tuple[Set[str], Optional[TransitionEdge]]:
    """
    Union of targets reachable from any active state on one symbol, plus the
    first contributing edge.
    """
    next_states = set()
    first_used = None

    if symbol == EPSILON:
        return next_states, first_used

    for transition in model.transitions:
        if transition.source in states and symbol in transition.symbols:
            next_states.add(transition.target)
            if first_used is None:
                first_used = transition

    return next_states, first_used


def _ordered(model: AutomatonModel, states: Set[str]) -> Tuple[str, ...]:
    """Orders states by declaration; ids naming no declared state come last"""
    declared = [state_id for state_id in dict.fromkeys(model.state_ids()) if state_id in states]
    unknown = sorted(states.difference(declared))
    return tuple(declared + unknown)


def _stuck(input_string: str, position: int) -> Configuration:
    return Configuration(
        active_states=(),
        consumed_prefix=input_string[:position],
        remaining_suffix=input_string[position:],
    )


def _stuck_at_start(input_string: str) -> Trace:
    return Trace(input_string, (Configuration((), '', input_string),))
