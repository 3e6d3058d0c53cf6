"""
Gate: mutable wrapper around marker inputs, derived geometry and lifecycle.

Marker positions are inputs written by whatever tracks the world state.
Geometry is re-derived from them only while the gate is live; once the
lifecycle is terminal both geometry and state are frozen.
"""

import logging
from typing import Optional, Sequence

from nav_core.proto.pose import Pose, Vector3
from nav_core.proto.gate_state import GateState, GateStatus
from nav_core.geometry import GateGeometry, recompute
from nav_core.metrics import get_metrics
from .crossing import GateCrossingStateMachine, Lifecycle, is_terminal

logger = logging.getLogger(__name__)


class Gate:
    """
    A doorway between two markers.

    Usage:
        gate = Gate((0.0, -5.0, 0.0), (0.0, 5.0, 0.0), name="gate_1")
        gate.evaluate(pose_from_xyz(-1.0, 0.0))
        gate.evaluate(pose_from_xyz(1.0, 0.0))
        assert gate.state == GateState.CROSSED
    """

    def __init__(
        self,
        left_marker_position: Sequence[float],
        right_marker_position: Sequence[float],
        name: Optional[str] = None,
        state_machine: Optional[GateCrossingStateMachine] = None
    ):
        """
        Initialize gate and compute its initial geometry.

        Args:
            left_marker_position: Left marker (x, y, z) in world frame
            right_marker_position: Right marker (x, y, z) in world frame
            name: Optional label for logs and diagnostics
            state_machine: Shared state machine (a new one if None)
        """
        self.name = name
        self.left_marker_position: Vector3 = tuple(left_marker_position)
        self.right_marker_position: Vector3 = tuple(right_marker_position)
        self.state_machine = state_machine or GateCrossingStateMachine()
        self.metrics = get_metrics()

        self._lifecycle: Optional[Lifecycle] = None
        self._geometry: GateGeometry = recompute(
            self.left_marker_position, self.right_marker_position
        )
        self._report_degenerate(was_degenerate=False)

    @property
    def label(self) -> str:
        return self.name or "gate"

    @property
    def geometry(self) -> GateGeometry:
        return self._geometry

    @property
    def pose(self) -> Pose:
        return self._geometry.pose

    @property
    def width(self) -> float:
        return self._geometry.width

    @property
    def lifecycle(self) -> Optional[Lifecycle]:
        return self._lifecycle

    @property
    def state(self) -> Optional[GateState]:
        """Current state (None before the first vehicle pose)."""
        return self._lifecycle.state if self._lifecycle is not None else None

    @property
    def is_resolved(self) -> bool:
        """Check if the gate is crossed or invalidated."""
        return is_terminal(self._lifecycle)

    def set_marker_positions(
        self,
        left_marker_position: Sequence[float],
        right_marker_position: Sequence[float]
    ):
        """
        Store fresh marker positions.

        Geometry is not touched here; it is re-derived on the next
        refresh() while the gate is live.
        """
        self.left_marker_position = tuple(left_marker_position)
        self.right_marker_position = tuple(right_marker_position)

    def refresh(self) -> GateGeometry:
        """
        Re-derive geometry from the current marker positions.

        Returns:
            Current geometry (unchanged if the gate is resolved)
        """
        if self.is_resolved:
            return self._geometry

        was_degenerate = self._geometry.is_degenerate
        self._geometry = recompute(
            self.left_marker_position, self.right_marker_position
        )
        self._report_degenerate(was_degenerate)
        self.metrics.record_histogram('gate_width_m', self._geometry.width)
        return self._geometry

    def _report_degenerate(self, was_degenerate: bool):
        """Count and warn when the markers come to coincide."""
        if self._geometry.is_degenerate and not was_degenerate:
            self.metrics.increment('degenerate_gates')
            logger.warning(f"{self.label}: Markers coincide, gate heading undefined")

    def evaluate(self, vehicle_pose: Pose) -> Optional[GateState]:
        """
        Refresh geometry, classify the vehicle and advance the state.

        Args:
            vehicle_pose: Vehicle pose in world frame

        Returns:
            State after this evaluation
        """
        if self.is_resolved:
            self.metrics.increment_skip('gate_resolved')
            return self.state

        geometry = self.refresh()
        self._lifecycle = self.state_machine.step(
            self._lifecycle, geometry, vehicle_pose, self.label
        )
        return self.state

    def status(self, index: int = 0) -> GateStatus:
        """Snapshot for diagnostics."""
        return GateStatus(
            index=index,
            name=self.name,
            state=self.state,
            pose=self.pose,
            width=self.width,
        )

    def __repr__(self) -> str:
        state = self.state.name if self.state is not None else None
        return f"Gate(name={self.name!r}, state={state}, width={self.width:.2f})"
