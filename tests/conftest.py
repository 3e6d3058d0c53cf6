"""
Pytest configuration and shared fixtures for navigation scoring tests.

Provides reusable gates, courses, world states and vehicle paths.
"""

import sys
from pathlib import Path
from typing import Dict, List, Tuple

import pytest

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from nav_core.proto import Pose, pose_from_xyz
from nav_core.domain import Gate, CourseEvaluator, WorldState
from nav_core.metrics import get_metrics


# =============================================================================
# Metrics
# =============================================================================


@pytest.fixture(autouse=True)
def clean_metrics():
    """Start every test with zeroed global metrics."""
    get_metrics().reset()
    yield


# =============================================================================
# Gate Fixtures
# =============================================================================


@pytest.fixture
def origin_markers() -> Tuple[Tuple[float, float, float], Tuple[float, float, float]]:
    """
    Markers for a gate at the origin, width 10, forward along +X.

    Returns:
        (left, right) marker positions
    """
    return (0.0, -5.0, 0.0), (0.0, 5.0, 0.0)


@pytest.fixture
def origin_gate(origin_markers) -> Gate:
    """Gate at the origin, width 10, forward along +X."""
    left, right = origin_markers
    return Gate(left, right, name="origin")


@pytest.fixture
def three_gate_markers() -> List[Tuple[Tuple[float, float, float], Tuple[float, float, float]]]:
    """
    Three gates along +X at x = 10, 30, 50.

    Returns:
        List of (left, right) marker positions
    """
    return [
        ((10.0, -5.0, 0.0), (10.0, 5.0, 0.0)),
        ((30.0, -4.0, 0.0), (30.0, 4.0, 0.0)),
        ((50.0, -6.0, 0.0), (50.0, 6.0, 0.0)),
    ]


@pytest.fixture
def three_gate_course(three_gate_markers) -> CourseEvaluator:
    """Course of three gates along +X."""
    return CourseEvaluator([
        Gate(left, right, name=f"gate_{i}")
        for i, (left, right) in enumerate(three_gate_markers)
    ])


# =============================================================================
# World Fixtures
# =============================================================================


@pytest.fixture
def course_description() -> Dict:
    """Course description with three gates and a vehicle name."""
    return {
        "vehicle": "wamv",
        "gates": [
            {"left_marker": "red_0", "right_marker": "green_0", "name": "gate_0"},
            {"left_marker": "red_1", "right_marker": "green_1", "name": "gate_1"},
            {"left_marker": "red_2", "right_marker": "green_2", "name": "gate_2"},
        ],
    }


@pytest.fixture
def world(three_gate_markers) -> WorldState:
    """World containing the markers of the three-gate course (no vehicle)."""
    state = WorldState()
    for i, (left, right) in enumerate(three_gate_markers):
        state.set_model_pose(f"red_{i}", Pose(position=left))
        state.set_model_pose(f"green_{i}", Pose(position=right))
    return state


# =============================================================================
# Helper Functions
# =============================================================================


def straight_path(x_start: float, x_end: float, step: float = 1.0, y: float = 0.0) -> List[Pose]:
    """
    Vehicle poses along a line parallel to X.

    Args:
        x_start: First x coordinate
        x_end: Last x coordinate (inclusive)
        step: Spacing (sign is taken from the direction of travel)
        y: Lateral offset

    Returns:
        List of poses
    """
    direction = 1.0 if x_end >= x_start else -1.0
    n = int(round(abs(x_end - x_start) / step))
    return [
        pose_from_xyz(x_start + direction * i * step, y)
        for i in range(n + 1)
    ]
