"""
Pose Schema.

World-frame position plus heading, shared by gate geometry and vehicle
updates. Orientation is yaw-only: roll and pitch never affect gate
classification, so they are not carried.
"""

from dataclasses import dataclass
from typing import Tuple
import math


Vector3 = Tuple[float, float, float]


@dataclass(frozen=True)
class Pose:
    """
    Position and heading in the world frame.

    Attributes:
        position: (x, y, z) in meters
        yaw: Rotation about the vertical axis (rad). NaN when undefined
             (e.g. a gate whose markers coincide).
    """

    position: Vector3
    yaw: float = 0.0

    def __post_init__(self):
        """Normalize position to a float tuple."""
        if len(self.position) != 3:
            raise ValueError(f"Position must have 3 components: {self.position}")
        object.__setattr__(
            self, 'position', tuple(float(c) for c in self.position)
        )

    @property
    def x(self) -> float:
        return self.position[0]

    @property
    def y(self) -> float:
        return self.position[1]

    @property
    def z(self) -> float:
        return self.position[2]

    @property
    def has_valid_yaw(self) -> bool:
        """Check if heading is defined."""
        return not math.isnan(self.yaw)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'x': self.x,
            'y': self.y,
            'z': self.z,
            'yaw': self.yaw if self.has_valid_yaw else None,
        }


def pose_from_xyz(x: float, y: float, z: float = 0.0, yaw: float = 0.0) -> Pose:
    """
    Create a pose from scalar coordinates.

    Args:
        x: X coordinate (m)
        y: Y coordinate (m)
        z: Z coordinate (m)
        yaw: Heading (rad)

    Returns:
        Pose
    """
    return Pose(position=(x, y, z), yaw=yaw)
