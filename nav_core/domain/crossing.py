"""
Gate Crossing State Machine.

Classifies a vehicle against a gate frame and folds successive
classifications into a per-gate lifecycle:

    Active(BEFORE) --AFTER--> Crossed
    Active(AFTER) --BEFORE--> Invalid
    Active(x) --y--> Active(y)      (any other classification)

Crossed and Invalid are terminal. The lifecycle variants are immutable
values; the transition functions are pure. GateCrossingStateMachine adds
logging and metrics around them.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from nav_core.proto.pose import Pose
from nav_core.proto.gate_state import GateState
from nav_core.geometry import GateGeometry, world_to_local
from nav_core.metrics import get_metrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Active:
    """Gate still live; tracks the latest classification."""
    position_class: GateState

    @property
    def state(self) -> GateState:
        return self.position_class


@dataclass(frozen=True)
class Crossed:
    """Forward transit completed."""

    @property
    def state(self) -> GateState:
        return GateState.CROSSED


@dataclass(frozen=True)
class Invalid:
    """Backward transit; gate permanently invalidated."""

    @property
    def state(self) -> GateState:
        return GateState.INVALID


Lifecycle = Union[Active, Crossed, Invalid]


def is_terminal(lifecycle: Optional[Lifecycle]) -> bool:
    """Check if a lifecycle can no longer change."""
    return isinstance(lifecycle, (Crossed, Invalid))


def classify(
    gate_pose: Pose,
    gate_width: float,
    vehicle_position: Sequence[float]
) -> GateState:
    """
    Classify a vehicle position relative to a gate.

    Args:
        gate_pose: Gate center and forward heading
        gate_width: Distance between markers (m)
        vehicle_position: Vehicle (x, y, z) in world frame

    Returns:
        VEHICLE_OUTSIDE if |local_y| > width/2, else VEHICLE_AFTER if
        local_x >= 0, else VEHICLE_BEFORE.

    Notes:
        - The gate plane itself (local_x == 0) counts as AFTER
        - The door edge (|local_y| == width/2) counts as inside
        - NaN geometry fails the inside test and yields VEHICLE_OUTSIDE
    """
    local = world_to_local(gate_pose, vehicle_position)
    local_x = float(local[0])
    local_y = float(local[1])

    # Written as the inside test so NaN falls through to OUTSIDE
    if abs(local_y) <= gate_width / 2.0:
        if local_x >= 0.0:
            return GateState.VEHICLE_AFTER
        return GateState.VEHICLE_BEFORE

    return GateState.VEHICLE_OUTSIDE


def advance_state(
    previous: Optional[GateState],
    position_class: GateState
) -> GateState:
    """
    Apply the crossing transition table.

    Args:
        previous: State before this observation (None if never observed)
        position_class: Current classification (BEFORE, AFTER or OUTSIDE)

    Returns:
        Next state. Terminal states are returned unchanged.
    """
    if previous is not None and previous.is_terminal:
        return previous

    if previous == GateState.VEHICLE_BEFORE and position_class == GateState.VEHICLE_AFTER:
        return GateState.CROSSED

    if previous == GateState.VEHICLE_AFTER and position_class == GateState.VEHICLE_BEFORE:
        return GateState.INVALID

    return position_class


def advance(
    lifecycle: Optional[Lifecycle],
    position_class: GateState
) -> Lifecycle:
    """
    Apply the transition table to a lifecycle value.

    Args:
        lifecycle: Current lifecycle (None before the first observation)
        position_class: Current classification

    Returns:
        Next lifecycle. Terminal lifecycles are returned as-is.
    """
    if is_terminal(lifecycle):
        return lifecycle

    previous = lifecycle.state if lifecycle is not None else None
    next_state = advance_state(previous, position_class)

    if next_state == GateState.CROSSED:
        return Crossed()
    if next_state == GateState.INVALID:
        return Invalid()
    return Active(next_state)


class GateCrossingStateMachine:
    """
    Classify-then-advance driver for one gate evaluation.

    Usage:
        machine = GateCrossingStateMachine()
        lifecycle = None
        for vehicle_pose in poses:
            lifecycle = machine.step(lifecycle, geometry, vehicle_pose)
            if lifecycle.state == GateState.CROSSED:
                break

    The transition logic lives in the module-level pure functions; this
    class only adds logging and counters.
    """

    def __init__(self):
        """Initialize state machine."""
        self.metrics = get_metrics()

    def classify(self, geometry: GateGeometry, vehicle_pose: Pose) -> GateState:
        """Classify a vehicle pose against gate geometry."""
        return classify(geometry.pose, geometry.width, vehicle_pose.position)

    def advance(
        self,
        lifecycle: Optional[Lifecycle],
        position_class: GateState,
        label: str = "gate"
    ) -> Lifecycle:
        """
        Advance a lifecycle and report terminal transitions.

        Args:
            lifecycle: Current lifecycle (None before the first observation)
            position_class: Current classification
            label: Gate label for log messages

        Returns:
            Next lifecycle
        """
        next_lifecycle = advance(lifecycle, position_class)

        if next_lifecycle is not lifecycle:
            if isinstance(next_lifecycle, Crossed):
                self.metrics.increment('gates_crossed')
                logger.info(f"{label}: New gate crossed!")
            elif isinstance(next_lifecycle, Invalid):
                self.metrics.increment('gates_invalidated')
                logger.info(f"{label}: Transited the gate in the wrong direction. "
                            f"Gate invalidated!")

        return next_lifecycle

    def step(
        self,
        lifecycle: Optional[Lifecycle],
        geometry: GateGeometry,
        vehicle_pose: Pose,
        label: str = "gate"
    ) -> Lifecycle:
        """
        Classify the vehicle and advance the lifecycle.

        Args:
            lifecycle: Current lifecycle (None before the first observation)
            geometry: Current gate geometry
            vehicle_pose: Vehicle pose in world frame
            label: Gate label for log messages

        Returns:
            Next lifecycle. Terminal lifecycles are returned without
            classifying.
        """
        if is_terminal(lifecycle):
            self.metrics.increment_skip('gate_resolved')
            return lifecycle

        self.metrics.increment('gate_evaluations')
        position_class = self.classify(geometry, vehicle_pose)

        logger.debug(f"{label}: {position_class.name}")

        return self.advance(lifecycle, position_class, label)
