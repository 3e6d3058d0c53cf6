"""
Yaw-only frame transforms.

A gate frame is a pose (origin + heading about +Z). Projecting a world
point into that frame is the only trigonometry classification needs.
"""

from typing import Sequence
import numpy as np

from nav_core.proto.pose import Pose


UNIT_Z = np.array([0.0, 0.0, 1.0])


def yaw_rotation(yaw: float) -> np.ndarray:
    """
    Rotation matrix about the vertical axis.

    Args:
        yaw: Heading (rad)

    Returns:
        3x3 rotation matrix (local -> world)
    """
    c = np.cos(yaw)
    s = np.sin(yaw)
    return np.array([
        [c, -s, 0.0],
        [s, c, 0.0],
        [0.0, 0.0, 1.0],
    ])


def world_to_local(frame: Pose, point: Sequence[float]) -> np.ndarray:
    """
    Express a world point in a yaw-only local frame.

    Args:
        frame: Frame origin and heading in world coordinates
        point: (x, y, z) in world coordinates

    Returns:
        (x, y, z) in the local frame. NaN components if the frame yaw is NaN.
    """
    offset = np.asarray(point, dtype=float) - np.asarray(frame.position, dtype=float)
    # Inverse of a rotation is its transpose
    return yaw_rotation(frame.yaw).T @ offset


def local_to_world(frame: Pose, point: Sequence[float]) -> np.ndarray:
    """
    Express a local-frame point in world coordinates.

    Args:
        frame: Frame origin and heading in world coordinates
        point: (x, y, z) in the local frame

    Returns:
        (x, y, z) in world coordinates
    """
    local = np.asarray(point, dtype=float)
    return yaw_rotation(frame.yaw) @ local + np.asarray(frame.position, dtype=float)


def wrap_angle(angle: float) -> float:
    """Wrap an angle to [-pi, pi)."""
    return float((angle + np.pi) % (2.0 * np.pi) - np.pi)
