"""
Course construction and world binding.

Turns a course description (vehicle name + marker-name pairs) into a
CourseEvaluator, and drives it once per simulation tick from a world
state table. Configuration problems are fatal: they raise ValueError
during construction, and NavigationScorer turns that into a disabled
scorer rather than a crash.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from nav_core.proto.pose import Pose
from nav_core.proto.gate_state import GateStatus
from nav_core.metrics import get_metrics
from .gate import Gate
from .course_evaluator import CourseEvaluator

logger = logging.getLogger(__name__)


@dataclass
class GateSpec:
    """
    One gate in a course description.

    Attributes:
        left_marker: Name of the model marking the left edge
        right_marker: Name of the model marking the right edge
        name: Optional gate label
    """

    left_marker: str
    right_marker: str
    name: Optional[str] = None


@dataclass
class CourseConfig:
    """
    Course description.

    Attributes:
        vehicle: Name of the scored vehicle model
        gates: Gates in course order
    """

    vehicle: str
    gates: List[GateSpec] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> 'CourseConfig':
        """
        Parse a course description.

        Args:
            data: Dict with 'vehicle' and 'gates' (list of dicts with
                  'left_marker', 'right_marker' and optional 'name')

        Returns:
            CourseConfig

        Raises:
            ValueError: If a required element is missing
        """
        if not data.get('vehicle'):
            raise ValueError("Unable to find <vehicle> element")

        if 'gates' not in data:
            raise ValueError("Unable to find <gates> element")

        gate_entries = data['gates'] or []
        if not gate_entries:
            raise ValueError("Unable to find <gate> element")

        gates = []
        for i, entry in enumerate(gate_entries):
            for key in ('left_marker', 'right_marker'):
                if not entry.get(key):
                    raise ValueError(f"Unable to find <{key}> element in gate {i}")
            gates.append(GateSpec(
                left_marker=entry['left_marker'],
                right_marker=entry['right_marker'],
                name=entry.get('name'),
            ))

        return cls(vehicle=data['vehicle'], gates=gates)


class WorldState:
    """
    Model name -> world pose table.

    Stands in for the live simulation: markers and the vehicle are looked
    up by name, and may move (or appear) between ticks.
    """

    def __init__(self, model_poses: Optional[Dict[str, Pose]] = None):
        """
        Initialize world state.

        Args:
            model_poses: Initial poses by model name
        """
        self._models: Dict[str, Pose] = dict(model_poses or {})

    def set_model_pose(self, name: str, pose: Pose):
        self._models[name] = pose

    def remove_model(self, name: str):
        self._models.pop(name, None)

    def get_model_pose(self, name: str) -> Optional[Pose]:
        """Pose of a model, or None if it does not exist."""
        return self._models.get(name)

    def has_model(self, name: str) -> bool:
        return name in self._models


def build_course(config: CourseConfig, world: WorldState) -> CourseEvaluator:
    """
    Resolve marker names and build the course.

    Args:
        config: Course description
        world: World state used to resolve marker names

    Returns:
        CourseEvaluator with one gate per GateSpec

    Raises:
        ValueError: If a marker model does not exist
    """
    evaluator = CourseEvaluator()

    for spec in config.gates:
        left = world.get_model_pose(spec.left_marker)
        if left is None:
            raise ValueError(f"Unable to find model [{spec.left_marker}]")

        right = world.get_model_pose(spec.right_marker)
        if right is None:
            raise ValueError(f"Unable to find model [{spec.right_marker}]")

        evaluator.add_gate(Gate(left.position, right.position, name=spec.name))

    logger.info(f"Course built with {len(evaluator)} gates")
    return evaluator


class NavigationScorer:
    """
    Per-tick scoring driver bound to a world state.

    Usage:
        scorer = NavigationScorer(CourseConfig.from_dict(course), world)

        while simulating:
            step_world(world)
            scorer.update()

        for status in scorer.statuses():
            print(status.to_dict())

    Each update() looks up the vehicle (skipping the tick if it has not
    spawned yet), copies current marker positions into the gates and
    advances the course.
    """

    def __init__(self, config: Optional[CourseConfig], world: WorldState):
        """
        Initialize scorer and build the course.

        Args:
            config: Course description (None if it could not be parsed)
            world: World state providing marker and vehicle poses

        A course that cannot be built leaves the scorer disabled.
        """
        self.config = config
        self.world = world
        self.metrics = get_metrics()
        self.evaluator: Optional[CourseEvaluator] = None
        self._specs: List[GateSpec] = list(config.gates) if config else []
        self._missing_markers: Set[str] = set()

        if config is not None:
            try:
                self.evaluator = build_course(config, world)
            except ValueError as e:
                logger.error(f"{e}. Score has been disabled")

        if self.enabled:
            logger.info("Navigation scoring loaded")

    @property
    def enabled(self) -> bool:
        return self.evaluator is not None

    @classmethod
    def from_dict(cls, data: dict, world: WorldState) -> 'NavigationScorer':
        """
        Build a scorer from a raw course description.

        A malformed description is logged and yields a disabled scorer.
        """
        try:
            config = CourseConfig.from_dict(data)
        except ValueError as e:
            logger.error(f"{e}. Score has been disabled")
            config = None
        return cls(config, world)

    def update(self) -> bool:
        """
        Advance the course by one tick.

        Returns:
            True if gates were evaluated, False if the tick was skipped
        """
        if not self.enabled:
            self.metrics.increment_skip('scoring_disabled')
            return False

        vehicle_pose = self.world.get_model_pose(self.config.vehicle)
        if vehicle_pose is None:
            # The vehicle might not be spawned yet
            self.metrics.increment_skip('vehicle_unavailable')
            logger.debug(f"Vehicle [{self.config.vehicle}] not available yet")
            return False

        self._refresh_markers()
        self.evaluator.on_vehicle_pose_update(vehicle_pose)
        return True

    def _refresh_markers(self):
        """Copy current marker positions into every live gate."""
        for gate, spec in zip(self.evaluator.gates, self._specs):
            if gate.is_resolved:
                continue

            left = self.world.get_model_pose(spec.left_marker)
            right = self.world.get_model_pose(spec.right_marker)
            if left is None or right is None:
                # Keep last known positions if a marker disappeared
                self.metrics.increment_skip('marker_unavailable')
                if gate.label not in self._missing_markers:
                    self._missing_markers.add(gate.label)
                    logger.warning(f"{gate.label}: Marker missing, keeping last position")
                continue

            if gate.label in self._missing_markers:
                self._missing_markers.discard(gate.label)
                logger.info(f"{gate.label}: Markers available again")
            gate.set_marker_positions(left.position, right.position)

    def statuses(self) -> List[GateStatus]:
        """Diagnostics snapshot (empty if scoring is disabled)."""
        if not self.enabled:
            return []
        return self.evaluator.statuses()
