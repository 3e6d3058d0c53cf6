"""
Scoring metrics: counters, skip reasons and gate width samples.

Every tick that does not reach the state machine is counted under a
skip reason, so a summary shows why a course scored the way it did.
"""

import logging
import threading
import time
from typing import Dict, List, Optional
from dataclasses import dataclass
from collections import defaultdict

import numpy as np

logger = logging.getLogger(__name__)

# Counters reported even when they never fire
STANDARD_COUNTERS = (
    'pose_updates',
    'gate_evaluations',
    'gates_crossed',
    'gates_invalidated',
    'degenerate_gates',
)


@dataclass
class CounterSnapshot:
    """Copy of the collector state at one instant."""

    timestamp: float
    counters: Dict[str, int]
    skip_reasons: Dict[str, int]
    histograms: Dict[str, List[float]]

    def total_skipped(self) -> int:
        return sum(self.skip_reasons.values())

    def crossing_rate(self) -> float:
        """Crossed gates as a percentage of resolved gates."""
        crossed = self.counters.get('gates_crossed', 0)
        resolved = crossed + self.counters.get('gates_invalidated', 0)
        if resolved == 0:
            return 0.0
        return (crossed / resolved) * 100.0


class MetricsCollector:
    """
    Thread-safe scoring metrics.

    Usage:
        collector = MetricsCollector()
        collector.increment('gates_crossed')
        collector.increment_skip('vehicle_unavailable')
        collector.record_histogram('gate_width_m', 10.0)

        print(f"{collector.snapshot().crossing_rate():.0f}% crossed")
    """

    SKIP_REASONS = {
        'vehicle_unavailable': 'Vehicle model not present in the world yet',
        'scoring_disabled': 'Course configuration failed, scoring is off',
        'gate_resolved': 'Gate already crossed or invalidated',
        'marker_unavailable': 'Marker model missing, last position kept',
    }

    def __init__(self):
        self._lock = threading.Lock()
        self._counters: Dict[str, int] = defaultdict(int)
        self._skip_reasons: Dict[str, int] = defaultdict(int)
        self._histograms: Dict[str, List[float]] = defaultdict(list)
        self._start_time = time.time()
        self._zero_standard_keys()

    def _zero_standard_keys(self):
        with self._lock:
            for name in STANDARD_COUNTERS:
                self._counters.setdefault(name, 0)
            for reason in self.SKIP_REASONS:
                self._skip_reasons.setdefault(reason, 0)

    def increment(self, counter_name: str, value: int = 1):
        with self._lock:
            self._counters[counter_name] += value

    def increment_skip(self, reason: str, value: int = 1):
        """
        Count a skipped evaluation.

        Args:
            reason: One of SKIP_REASONS (unknown codes are counted with a warning)
            value: Amount to add (default 1)
        """
        if reason not in self.SKIP_REASONS:
            logger.warning(f"Unknown skip reason '{reason}'")

        with self._lock:
            self._skip_reasons[reason] += value
            self._counters['updates_skipped'] += value

    def get_counter(self, counter_name: str) -> int:
        with self._lock:
            return self._counters.get(counter_name, 0)

    def get_skip_count(self, reason: str) -> int:
        with self._lock:
            return self._skip_reasons.get(reason, 0)

    def record_histogram(self, histogram_name: str, value: float, max_samples: int = 10000):
        """
        Record one sample.

        Once a histogram exceeds max_samples only the newest half is kept.
        """
        with self._lock:
            samples = self._histograms[histogram_name]
            samples.append(value)
            if len(samples) > max_samples:
                self._histograms[histogram_name] = samples[-max_samples//2:]

    def get_histogram_stats(self, histogram_name: str) -> Optional[Dict[str, float]]:
        """
        Summarize a histogram.

        Returns:
            Dict with count, min, max and mean (None if no samples)
        """
        with self._lock:
            samples = np.asarray(self._histograms.get(histogram_name, []), dtype=float)

        if samples.size == 0:
            return None

        return {
            'count': int(samples.size),
            'min': float(samples.min()),
            'max': float(samples.max()),
            'mean': float(samples.mean()),
        }

    def snapshot(self) -> CounterSnapshot:
        with self._lock:
            return CounterSnapshot(
                timestamp=time.time(),
                counters=dict(self._counters),
                skip_reasons=dict(self._skip_reasons),
                histograms={k: list(v) for k, v in self._histograms.items()},
            )

    def reset(self):
        """Clear everything (used between tests and demo runs)."""
        with self._lock:
            self._counters.clear()
            self._skip_reasons.clear()
            self._histograms.clear()
            self._start_time = time.time()
        self._zero_standard_keys()

    def print_summary(self):
        """Print human-readable metrics summary."""
        snapshot = self.snapshot()
        uptime = snapshot.timestamp - self._start_time

        print("\n" + "=" * 70)
        print(f"  SCORING METRICS (uptime: {uptime:.1f}s)")
        print("=" * 70)

        print("\nCOUNTERS:")
        for name, value in sorted(snapshot.counters.items()):
            print(f"  {name:30s}: {value:8d}")
        print(f"  {'crossing_rate':30s}: {snapshot.crossing_rate():7.1f}%")

        total_skipped = snapshot.total_skipped()
        if total_skipped > 0:
            print("\nSKIP REASONS:")
            for reason, count in sorted(snapshot.skip_reasons.items()):
                if count > 0:
                    pct = (count / total_skipped) * 100
                    print(f"  {reason:30s}: {count:8d} ({pct:5.1f}%)")

        for name in sorted(snapshot.histograms):
            stats = self.get_histogram_stats(name)
            if stats:
                print(f"\n{name}: count={stats['count']}, mean={stats['mean']:.3f}, "
                      f"min={stats['min']:.3f}, max={stats['max']:.3f}")

        print("=" * 70 + "\n")
