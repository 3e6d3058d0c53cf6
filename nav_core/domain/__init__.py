"""
Domain Module: Gate crossing and course scoring logic.

Implements:
- Crossing classification and the per-gate transition table
- Gate wrapper (marker inputs, derived geometry, lifecycle)
- Course evaluation per vehicle pose update
- Course construction from marker names and per-tick world binding
"""

from .crossing import (
    Active,
    Crossed,
    Invalid,
    Lifecycle,
    GateCrossingStateMachine,
    classify,
    advance,
    advance_state,
    is_terminal,
)
from .gate import Gate
from .course_evaluator import CourseEvaluator
from .course_builder import (
    GateSpec,
    CourseConfig,
    WorldState,
    NavigationScorer,
    build_course,
)

__all__ = [
    # Crossing state machine
    'Active',
    'Crossed',
    'Invalid',
    'Lifecycle',
    'GateCrossingStateMachine',
    'classify',
    'advance',
    'advance_state',
    'is_terminal',
    # Course
    'Gate',
    'CourseEvaluator',
    # Construction
    'GateSpec',
    'CourseConfig',
    'WorldState',
    'NavigationScorer',
    'build_course',
]
