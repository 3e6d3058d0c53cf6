"""
Navigation scoring demo.
Builds the sample course, drives a simulated vehicle through it tick by
tick, and prints the resulting gate states.
"""

import sys
import json
import logging
import argparse
from typing import List

import numpy as np

import config
from nav_core.proto import Pose, GateState
from nav_core.geometry import local_to_world
from nav_core.domain import NavigationScorer, WorldState
from nav_core.metrics import get_metrics

logger = logging.getLogger(__name__)


def create_world(course: dict) -> WorldState:
    """Create a world state with every marker of the course."""
    world = WorldState()
    for name, position in course["markers"].items():
        world.set_model_pose(name, Pose(position=position))
    return world


def plan_path(scorer: NavigationScorer, approach_m: float = 3.0) -> List[np.ndarray]:
    """
    Waypoints through the center of every gate, in course order.

    Each gate contributes a point on its approach side and one past it.
    """
    waypoints = []
    for gate in scorer.evaluator.gates:
        waypoints.append(local_to_world(gate.pose, (-approach_m, 0.0, 0.0)))
        waypoints.append(local_to_world(gate.pose, (approach_m, 0.0, 0.0)))
    return waypoints


def interpolate(waypoints: List[np.ndarray], step_m: float) -> List[np.ndarray]:
    """Sample a polyline every step_m meters."""
    samples = [waypoints[0]]
    for start, end in zip(waypoints[:-1], waypoints[1:]):
        length = float(np.linalg.norm(end - start))
        n = max(1, int(np.ceil(length / step_m)))
        for i in range(1, n + 1):
            samples.append(start + (end - start) * (i / n))
    return samples


def run(args) -> int:
    """Run the demo. Returns process exit code."""
    course = config.SAMPLE_COURSE
    world = create_world(course)
    scorer = NavigationScorer.from_dict(course, world)

    if not scorer.enabled:
        return 1

    waypoints = plan_path(scorer)
    if args.reverse:
        waypoints = waypoints[::-1]

    step_m = config.SCORING_CONFIG["vehicle_speed_m_s"] * config.SCORING_CONFIG["tick_dt_s"]
    path = interpolate(waypoints, step_m)

    log_every = config.SCORING_CONFIG["log_every_n_updates"]
    vehicle = course["vehicle"]

    for tick in range(args.spawn_delay + len(path)):
        if tick >= args.spawn_delay:
            position = path[tick - args.spawn_delay]
            world.set_model_pose(vehicle, Pose(position=tuple(position)))

        scorer.update()

        if tick % log_every == 0:
            states = [s.name if s is not None else None
                      for s in scorer.evaluator.gate_states()]
            logger.debug(f"tick {tick}: {states}")

        if scorer.evaluator.all_resolved:
            logger.info(f"All gates resolved at tick {tick}")
            break

    statuses = [s.to_dict() for s in scorer.statuses()]
    print(json.dumps(statuses, indent=2))

    crossed = sum(1 for s in scorer.statuses() if s.state == GateState.CROSSED)
    print(f"Gates crossed: {crossed}/{len(statuses)}")

    if args.metrics:
        get_metrics().print_summary()

    return 0


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Navigation gate scoring demo")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--reverse", action="store_true",
                        help="Drive the course backwards (gates are invalidated)")
    parser.add_argument("--spawn-delay", type=int, default=0,
                        help="Ticks before the vehicle appears in the world")
    parser.add_argument("--metrics", action="store_true", help="Print metrics summary")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, config.LOGGING_CONFIG["level"]),
        format=config.LOGGING_CONFIG["format"]
    )
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    sys.exit(run(args))


if __name__ == "__main__":
    main()
