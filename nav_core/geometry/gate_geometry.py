"""
Gate Geometry.

Derives a gate's center pose and width from its two marker positions.
The gate frame's +X axis is the forward-crossing direction: the
left->right marker vector rotated 90 degrees about +Z.
"""

from dataclasses import dataclass
from typing import Sequence
import math
import numpy as np

from nav_core.proto.pose import Pose
from .frame import UNIT_Z


@dataclass(frozen=True)
class GateGeometry:
    """
    Derived gate geometry.

    Attributes:
        pose: Gate center, yaw pointing in the forward-crossing direction
        width: Distance between the two markers (m)
    """

    pose: Pose
    width: float

    @property
    def is_degenerate(self) -> bool:
        """Check if markers coincide (heading undefined)."""
        return self.width == 0.0 or not self.pose.has_valid_yaw


def recompute(
    left_marker_position: Sequence[float],
    right_marker_position: Sequence[float]
) -> GateGeometry:
    """
    Compute gate pose and width from marker positions.

    Args:
        left_marker_position: Left marker (x, y, z) in world frame
        right_marker_position: Right marker (x, y, z) in world frame

    Returns:
        GateGeometry. Coincident markers give width 0 and NaN yaw.

    Algorithm:
        1. v1 = normalize(left - right)
        2. v2 = unitZ x v1 (forward-crossing direction)
        3. center = (left + right) / 2
        4. yaw = atan2(v2.y, v2.x)
        5. width = |left - right|
    """
    left = np.asarray(left_marker_position, dtype=float)
    right = np.asarray(right_marker_position, dtype=float)

    separation = left - right
    width = float(np.linalg.norm(separation))

    center = (left + right) / 2.0

    if width > 0.0:
        v1 = separation / width
        v2 = np.cross(UNIT_Z, v1)
        yaw = math.atan2(v2[1], v2[0])
    else:
        yaw = float('nan')

    return GateGeometry(
        pose=Pose(position=tuple(center), yaw=yaw),
        width=width,
    )
