"""
Conversion between AutomatonModel and the editor's JSON document.

The document is the export/import and storage format:

    {
        'type': 'DFA' | 'NFA' | 'PDA',
        'states': [{'id', 'label', 'isInitial', 'isAccept', 'position'}, ...],
        'transitions': [{'id', 'from', 'to', 'symbols'}, ...],
        'alphabet': [symbol, ...]
    }

View-only fields travel with the model and are written back unchanged.
"""
from typing import Any, Dict, List

from .automaton import (
    AutomatonKind,
    AutomatonModel,
    Configuration,
    Diagnostic,
    InvalidModelError,
    StateNode,
    Trace,
    TransitionEdge,
    ValidationResult,
    check_state_ids,
)

REQUIRED_KEYS = ['type', 'states', 'transitions', 'alphabet']


def model_from_document(document: Dict[str, Any]) -> AutomatonModel:
    """
    Builds a model from a stored or uploaded document.

    Raises:
        InvalidModelError: if the document does not have the expected shape
            or two states share an id
    """
    if not isinstance(document, dict):
        raise InvalidModelError('Automaton must be a dictionary')

    for key in REQUIRED_KEYS:
        if key not in document:
            raise InvalidModelError(f'Missing required key: {key}')

    try:
        kind = AutomatonKind(document['type'])
    except ValueError:
        raise InvalidModelError(f"Unknown automaton type: {document['type']}")

    if not isinstance(document['states'], list):
        raise InvalidModelError('states must be a list')

    if not isinstance(document['transitions'], list):
        raise InvalidModelError('transitions must be a list')

    if not isinstance(document['alphabet'], list):
        raise InvalidModelError('alphabet must be a list')

    states = [_state_from_document(s) for s in document['states']]
    check_state_ids(states)

    return AutomatonModel(
        kind=kind,
        states=states,
        transitions=[_transition_from_document(t) for t in document['transitions']],
        alphabet=[_require_str(s, 'alphabet symbol') for s in document['alphabet']],
    )


def model_to_document(model: AutomatonModel) -> Dict[str, Any]:
    states = []
    for state in model.states:
        data = {
            'id': state.id,
            'label': state.label,
            'isInitial': state.is_initial,
            'isAccept': state.is_accept,
        }
        if state.position is not None:
            data['position'] = dict(state.position)
        states.append(data)

    return {
        'type': model.kind.value,
        'states': states,
        'transitions': [_transition_to_document(t) for t in model.transitions],
        'alphabet': list(model.alphabet),
    }


def diagnostic_to_document(diagnostic: Diagnostic) -> Dict[str, Any]:
    return {
        'message': diagnostic.message,
        'type': diagnostic.severity.value,
        'affectedStates': list(diagnostic.affected_states),
        'affectedTransitions': list(diagnostic.affected_transitions),
    }


def validation_to_document(result: ValidationResult) -> Dict[str, Any]:
    return {
        'valid': result.valid,
        'diagnostics': [diagnostic_to_document(d) for d in result.diagnostics],
    }


def configuration_to_document(configuration: Configuration) -> Dict[str, Any]:
    data = {
        'activeStates': list(configuration.active_states),
        'consumedInput': configuration.consumed_prefix,
        'remainingInput': configuration.remaining_suffix,
        'transitionUsed': None,
    }
    if configuration.transition_used is not None:
        data['transitionUsed'] = _transition_to_document(configuration.transition_used)
    return data


def trace_to_document(trace: Trace) -> List[Dict[str, Any]]:
    return [configuration_to_document(c) for c in trace]


def _state_from_document(data: Any) -> StateNode:
    if not isinstance(data, dict):
        raise InvalidModelError('Each state must be a dictionary')
    for key in ('id', 'label', 'isInitial', 'isAccept'):
        if key not in data:
            raise InvalidModelError(f'State is missing required key: {key}')

    position = data.get('position')
    if position is not None and not isinstance(position, dict):
        raise InvalidModelError(f"Position of state {data['id']} must be a dictionary")

    return StateNode(
        id=_require_str(data['id'], 'state id'),
        label=_require_str(data['label'], 'state label'),
        is_initial=_require_bool(data['isInitial'], 'isInitial'),
        is_accept=_require_bool(data['isAccept'], 'isAccept'),
        position=position,
    )


def _transition_from_document(data: Any) -> TransitionEdge:
    if not isinstance(data, dict):
        raise InvalidModelError('Each transition must be a dictionary')

    for key in ('id', 'from', 'to', 'symbols'):
        if key not in data:
            raise InvalidModelError(f'Transition is missing required key: {key}')

    if not isinstance(data['symbols'], list):
        raise InvalidModelError(f"Symbols of transition {data['id']} must be a list")

    return TransitionEdge(
        id=_require_str(data['id'], 'transition id'),
        source=_require_str(data['from'], 'transition source'),
        target=_require_str(data['to'], 'transition target'),
        symbols=[_require_str(s, 'transition symbol') for s in data['symbols']],
    )


def _transition_to_document(transition: TransitionEdge) -> Dict[str, Any]:
    return {
        'id': transition.id,
        'from': transition.source,
        'to': transition.target,
        'symbols': list(transition.symbols),
    }


def _require_str(value: Any, what: str) -> str:
    if not isinstance(value, str):
        raise InvalidModelError(f'{what} must be a string, got {type(value).__name__}')
    return value


def _require_bool(value: Any, what: str) -> bool:
    if not isinstance(value, bool):
        raise InvalidModelError(f'{what} must be a boolean, got {type(value).__name__}')
    return value


def batch_to_document(batch) -> Dict[str, Any]:
    return {
        'results': [{'input': r.input, 'result': r.result} for r in batch.results],
        'accepted': batch.accepted,
        'rejected': batch.rejected,
        'errors': batch.errors,
    }
