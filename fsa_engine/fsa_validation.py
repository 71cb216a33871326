from typing import Dict, List

from .automaton import (
    EPSILON,
    AutomatonKind,
    AutomatonModel,
    Diagnostic,
    Severity,
    ValidationResult,
)


def validate(model: AutomatonModel) -> ValidationResult:
    """
    Runs every structural check against the model.

    The checks never raise; each finding is returned as a Diagnostic. Warnings
    are informational only, so the model is valid iff there are no errors.

    Args:
        model: The automaton to check

    Returns:
        ValidationResult with:
            - valid: True if no diagnostic has severity 'error'
            - diagnostics: All findings, in check order
    """
    diagnostics = []
    diagnostics.extend(_check_initial_states(model))
    diagnostics.extend(_check_accept_states(model))

    if model.kind == AutomatonKind.DFA:
        diagnostics.extend(_check_no_epsilon(model))
        diagnostics.extend(_check_determinism(model))

    if model.alphabet:
        diagnostics.extend(_check_alphabet(model))

    diagnostics.extend(_check_transition_integrity(model))

    valid = not any(d.severity == Severity.ERROR for d in diagnostics)
    return ValidationResult(valid=valid, diagnostics=diagnostics)


def _check_initial_states(model: AutomatonModel) -> List[Diagnostic]:
    initial_states = model.initial_states()

    if len(initial_states) == 0:
        return [Diagnostic('No initial state defined', Severity.ERROR)]

    # Multi-start automata are rejected for NFAs too
    if len(initial_states) > 1:
        return [Diagnostic(
            'Multiple initial states defined (only one allowed)',
            Severity.ERROR,
            affected_states=_unique(s.id for s in initial_states),
        )]

    return []


def _check_accept_states(model: AutomatonModel) -> List[Diagnostic]:
    if not model.accept_states():
        return [Diagnostic('No accept states defined', Severity.WARNING)]
    return []


def _check_no_epsilon(model: AutomatonModel) -> List[Diagnostic]:
    """
    A DFA may not contain epsilon transitions. All offending edges are
    reported together in a single diagnostic.
    """
    epsilon_transitions = [t for t in model.transitions if t.is_epsilon]
    if not epsilon_transitions:
        return []

    return [Diagnostic(
        f'DFA cannot have ε-transitions (found {len(epsilon_transitions)})',
        Severity.ERROR,
        affected_states=_unique(t.source for t in epsilon_transitions),
        affected_transitions=_unique(t.id for t in epsilon_transitions),
    )]


def _check_determinism(model: AutomatonModel) -> List[Diagnostic]:
    """
    For each state, groups outgoing edges by symbol. A symbol reachable through
    more than one edge of the same state breaks determinism. Reusing a symbol
    on edges of different states is fine.
    """
    diagnostics = []

    for state in model.states:
        symbol_to_transitions: Dict[str, List[str]] = {}

        for transition in model.outgoing(state.id):
            for symbol in transition.symbols:
                symbol_to_transitions.setdefault(symbol, []).append(transition.id)

        for symbol, transition_ids in symbol_to_transitions.items():
            if len(transition_ids) > 1:
                diagnostics.append(Diagnostic(
                    f'State {state.label or state.id} has {len(transition_ids)} transitions '
                    f'for symbol "{symbol}" (DFA allows only one)',
                    Severity.ERROR,
                    affected_states=(state.id,),
                    affected_transitions=_unique(transition_ids),
                ))

    return diagnostics


def _check_alphabet(model: AutomatonModel) -> List[Diagnostic]:
    diagnostics = []
    alphabet = set(model.alphabet)

    for transition in model.transitions:
        invalid = _unique(
            s for s in transition.symbols
            if s != EPSILON and s not in alphabet
        )
        if not invalid:
            continue

        symbols = ', '.join(f'"{s}"' for s in invalid)
        diagnostics.append(Diagnostic(
            f'Transition {model.label_of(transition.source)} → {model.label_of(transition.target)} '
            f'uses symbols not in alphabet: {symbols}',
            Severity.ERROR,
            affected_states=(transition.source,),
            affected_transitions=(transition.id,),
        ))

    return diagnostics


def _check_transition_integrity(model: AutomatonModel) -> List[Diagnostic]:
    """
    Every edge endpoint must name a declared state and every edge needs at
    least one symbol. Each dangling endpoint is reported separately.
    """
    diagnostics = []
    state_ids = set(model.state_ids())

    for transition in model.transitions:
        if transition.source not in state_ids:
            diagnostics.append(Diagnostic(
                f'Transition references invalid source state: {transition.source}',
                Severity.ERROR,
                affected_transitions=(transition.id,),
            ))

        if transition.target not in state_ids:
            diagnostics.append(Diagnostic(
                f'Transition references invalid target state: {transition.target}',
                Severity.ERROR,
                affected_transitions=(transition.id,),
            ))

        if len(transition.symbols) == 0:
            diagnostics.append(Diagnostic(
                f'Transition from {model.label_of(transition.source)} to '
                f'{model.label_of(transition.target)} has no symbols',
                Severity.ERROR,
                affected_transitions=(transition.id,),
            ))

    return diagnostics


def _unique(items) -> tuple:
    """Drops repeats while keeping first-seen order"""
    return tuple(dict.fromkeys(items))
