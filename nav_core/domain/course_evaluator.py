"""
Course Evaluator.

Owns an ordered list of gates and advances every live gate once per
vehicle pose update. Order is presentation order only: each gate is
evaluated independently.

Single-threaded: callers must serialize on_vehicle_pose_update() and any
marker refresh.
"""

import logging
from typing import Iterable, List, Optional

from nav_core.proto.pose import Pose
from nav_core.proto.gate_state import GateState, GateStatus
from nav_core.metrics import get_metrics
from .crossing import GateCrossingStateMachine
from .gate import Gate

logger = logging.getLogger(__name__)


class CourseEvaluator:
    """
    Per-tick driver over a course of gates.

    Usage:
        evaluator = CourseEvaluator([
            Gate((0.0, -5.0, 0.0), (0.0, 5.0, 0.0), name="gate_1"),
            Gate((20.0, -5.0, 0.0), (20.0, 5.0, 0.0), name="gate_2"),
        ])

        for vehicle_pose in trajectory:
            evaluator.on_vehicle_pose_update(vehicle_pose)

        print(evaluator.gate_states())
    """

    def __init__(self, gates: Optional[Iterable[Gate]] = None):
        """
        Initialize evaluator.

        Args:
            gates: Gates in course order (may be added later with add_gate)
        """
        self.state_machine = GateCrossingStateMachine()
        self.metrics = get_metrics()
        self._gates: List[Gate] = []

        for gate in gates or []:
            self.add_gate(gate)

    def add_gate(self, gate: Gate) -> Gate:
        """
        Append a gate to the course.

        Args:
            gate: Gate to append. Unnamed gates are labelled by position.

        Returns:
            The gate
        """
        if gate.name is None:
            gate.name = f"gate_{len(self._gates)}"
        gate.state_machine = self.state_machine
        self._gates.append(gate)
        logger.debug(f"Added {gate.label} (width={gate.width:.2f}m)")
        return gate

    @property
    def gates(self) -> List[Gate]:
        return list(self._gates)

    def __len__(self) -> int:
        return len(self._gates)

    def on_vehicle_pose_update(self, vehicle_pose: Pose):
        """
        Advance every live gate against a new vehicle pose.

        Resolved gates are left untouched by Gate.evaluate(): their
        geometry is not refreshed and their state does not change.

        Args:
            vehicle_pose: Vehicle pose in world frame
        """
        self.metrics.increment('pose_updates')

        for gate in self._gates:
            gate.evaluate(vehicle_pose)

    def gate_states(self) -> List[Optional[GateState]]:
        """Current state of every gate, in course order."""
        return [gate.state for gate in self._gates]

    def statuses(self) -> List[GateStatus]:
        """Diagnostics snapshot of every gate, in course order."""
        return [gate.status(index) for index, gate in enumerate(self._gates)]

    @property
    def num_crossed(self) -> int:
        return sum(1 for gate in self._gates if gate.state == GateState.CROSSED)

    @property
    def num_invalid(self) -> int:
        return sum(1 for gate in self._gates if gate.state == GateState.INVALID)

    @property
    def all_resolved(self) -> bool:
        """Check if every gate is crossed or invalidated."""
        return all(gate.is_resolved for gate in self._gates)
