"""
Gate State Schema.

Per-gate crossing state and the diagnostics record exposed to external
renderers and score reporters.
"""

from dataclasses import dataclass
from typing import Optional
from enum import IntEnum

from .pose import Pose


class GateState(IntEnum):
    """Vehicle position relative to a gate, or the gate's final outcome."""
    VEHICLE_BEFORE = 0   # Inside the door, on the approach side
    VEHICLE_AFTER = 1    # Inside the door, on/past the gate plane
    VEHICLE_OUTSIDE = 2  # Laterally outside the door
    CROSSED = 3          # Forward transit completed (terminal)
    INVALID = 4          # Backward transit (terminal)

    @property
    def is_terminal(self) -> bool:
        """Check if no further transitions are possible."""
        return self in (GateState.CROSSED, GateState.INVALID)


@dataclass
class GateStatus:
    """
    Snapshot of one gate for diagnostics.

    Attributes:
        index: Position of the gate in the course
        name: Optional human-readable gate label
        state: Current state (None before the first vehicle pose)
        pose: Gate center and forward heading
        width: Distance between the markers (m)
    """

    index: int
    name: Optional[str]
    state: Optional[GateState]
    pose: Pose
    width: float

    @property
    def is_resolved(self) -> bool:
        """Check if the gate reached a terminal state."""
        return self.state is not None and self.state.is_terminal

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'index': self.index,
            'name': self.name,
            'state': self.state.name if self.state is not None else None,
            'pose': self.pose.to_dict(),
            'width': self.width,
        }
