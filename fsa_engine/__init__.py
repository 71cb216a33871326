from .automaton import (
    EPSILON,
    AutomatonKind,
    AutomatonModel,
    Configuration,
    Diagnostic,
    FSAEngineError,
    InvalidModelError,
    Severity,
    StateNode,
    Trace,
    TransitionEdge,
    ValidationResult,
)
from .fsa_simulation import (
    BatchResult,
    InputVerdict,
    SimulationEngine,
    epsilon_closure,
    is_accepted,
    run_all,
    simulate,
)
from .fsa_validation import validate

__all__ = [
    'EPSILON',
    'AutomatonKind',
    'AutomatonModel',
    'BatchResult',
    'Configuration',
    'Diagnostic',
    'FSAEngineError',
    'InputVerdict',
    'InvalidModelError',
    'Severity',
    'SimulationEngine',
    'StateNode',
    'Trace',
    'TransitionEdge',
    'ValidationResult',
    'epsilon_closure',
    'is_accepted',
    'run_all',
    'simulate',
    'validate',
]
