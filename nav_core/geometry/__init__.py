"""
Geometry Module: Gate frames and yaw-only transforms.

Key pieces:
- GateGeometry: gate pose and width derived from two markers
- world_to_local / local_to_world: projection into a gate frame
"""

from .frame import (
    UNIT_Z,
    yaw_rotation,
    world_to_local,
    local_to_world,
    wrap_angle,
)
from .gate_geometry import (
    GateGeometry,
    recompute,
)

__all__ = [
    'UNIT_Z',
    'yaw_rotation',
    'world_to_local',
    'local_to_world',
    'wrap_angle',
    'GateGeometry',
    'recompute',
]
