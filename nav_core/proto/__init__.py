"""
Protocol Module: Value types exchanged with the core.

- Pose: world-frame position + yaw
- GateState: per-gate classification / outcome
- GateStatus: per-gate diagnostics snapshot
"""

from .pose import (
    Pose,
    Vector3,
    pose_from_xyz,
)
from .gate_state import (
    GateState,
    GateStatus,
)

__all__ = [
    'Pose',
    'Vector3',
    'pose_from_xyz',
    'GateState',
    'GateStatus',
]
