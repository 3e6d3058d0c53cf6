"""
Unit tests for metrics module.

Tests cover:
- Counter increment (single-threaded and multi-threaded)
- Skip reason tracking
- Histogram recording and summary statistics
- Snapshot and reset functionality
- Thread safety
"""

import logging
import threading
import time

import pytest

from nav_core.metrics import MetricsCollector, get_metrics, reset_metrics
from nav_core.metrics.counters import CounterSnapshot


class TestMetricsCollectorBasic:
    """Tests for basic metrics collector functionality."""

    def test_initialization(self):
        """Test that metrics collector initializes correctly."""
        collector = MetricsCollector()

        # Standard counters should be initialized to 0
        assert collector.get_counter('pose_updates') == 0
        assert collector.get_counter('gates_crossed') == 0

        # Unknown counter should return 0
        assert collector.get_counter('unknown_counter') == 0

    def test_increment_counter(self):
        """Test incrementing a counter."""
        collector = MetricsCollector()

        collector.increment('pose_updates')
        assert collector.get_counter('pose_updates') == 1

        collector.increment('pose_updates', 5)
        assert collector.get_counter('pose_updates') == 6

    def test_increment_skip_with_valid_reason(self):
        """Test incrementing skip counter with valid reason."""
        collector = MetricsCollector()

        collector.increment_skip('vehicle_unavailable')
        assert collector.get_counter('updates_skipped') == 1
        assert collector.get_skip_count('vehicle_unavailable') == 1

    def test_increment_skip_unknown_reason(self, caplog):
        """Test incrementing skip counter with unknown reason logs warning."""
        collector = MetricsCollector()

        with caplog.at_level(logging.WARNING):
            collector.increment_skip('unknown_reason')

        assert 'unknown_reason' in caplog.text

        # Should still be counted
        assert collector.get_counter('updates_skipped') == 1

    def test_multiple_skip_reasons(self):
        """Test tracking multiple skip reasons."""
        collector = MetricsCollector()

        collector.increment_skip('vehicle_unavailable', 3)
        collector.increment_skip('gate_resolved', 5)
        collector.increment_skip('scoring_disabled', 2)

        snapshot = collector.snapshot()

        assert snapshot.skip_reasons['vehicle_unavailable'] == 3
        assert snapshot.skip_reasons['gate_resolved'] == 5
        assert snapshot.skip_reasons['scoring_disabled'] == 2
        assert snapshot.total_skipped() == 10


class TestHistograms:
    """Tests for histogram functionality."""

    def test_record_histogram(self):
        """Test recording values in histogram."""
        collector = MetricsCollector()

        collector.record_histogram('gate_width_m', 8.0)
        collector.record_histogram('gate_width_m', 10.0)
        collector.record_histogram('gate_width_m', 12.0)

        stats = collector.get_histogram_stats('gate_width_m')

        assert stats is not None
        assert stats['count'] == 3
        assert stats['mean'] == pytest.approx(10.0)
        assert stats['min'] == 8.0
        assert stats['max'] == 12.0

    def test_histogram_empty(self):
        """Test getting stats for empty histogram."""
        collector = MetricsCollector()

        assert collector.get_histogram_stats('nonexistent') is None

    def test_histogram_stats_keys(self):
        """Test the summary stats are exactly what print_summary reports."""
        collector = MetricsCollector()
        collector.record_histogram('gate_width_m', 10.0)

        stats = collector.get_histogram_stats('gate_width_m')

        assert set(stats) == {'count', 'min', 'max', 'mean'}
        assert stats['min'] == stats['max'] == stats['mean'] == 10.0

    def test_histogram_max_samples_bounded(self):
        """Test that histograms are bounded to prevent memory growth."""
        collector = MetricsCollector()

        for i in range(15000):
            collector.record_histogram('test', float(i), max_samples=1000)

        snapshot = collector.snapshot()

        # Should be trimmed to half of max_samples
        assert len(snapshot.histograms['test']) <= 1000


class TestSnapshot:
    """Tests for snapshot functionality."""

    def test_snapshot_creates_copy(self):
        """Test that snapshot creates independent copy."""
        collector = MetricsCollector()

        collector.increment('pose_updates', 10)
        snapshot1 = collector.snapshot()

        collector.increment('pose_updates', 5)
        snapshot2 = collector.snapshot()

        assert snapshot1.counters['pose_updates'] == 10
        assert snapshot2.counters['pose_updates'] == 15

    def test_snapshot_timestamp(self):
        """Test snapshot includes timestamp."""
        collector = MetricsCollector()

        before = time.time()
        snapshot = collector.snapshot()
        after = time.time()

        assert before <= snapshot.timestamp <= after

    def test_crossing_rate(self):
        """Test crossed share of resolved gates."""
        collector = MetricsCollector()

        collector.increment('gates_crossed', 3)
        collector.increment('gates_invalidated', 1)

        assert collector.snapshot().crossing_rate() == pytest.approx(75.0)

    def test_crossing_rate_nothing_resolved(self):
        """Test crossing rate is 0 when no gate is resolved."""
        snapshot = CounterSnapshot(
            timestamp=0.0, counters={}, skip_reasons={}, histograms={}
        )
        assert snapshot.crossing_rate() == 0.0


class TestReset:
    """Tests for reset functionality."""

    def test_reset_clears_counters(self):
        """Test that reset clears all counters."""
        collector = MetricsCollector()

        collector.increment('pose_updates', 100)
        collector.increment_skip('gate_resolved', 5)
        collector.record_histogram('gate_width_m', 10.0)

        collector.reset()

        assert collector.get_counter('pose_updates') == 0
        assert collector.get_counter('updates_skipped') == 0

        snapshot = collector.snapshot()
        assert snapshot.total_skipped() == 0
        assert not snapshot.histograms

    def test_reset_reinitializes_standard_counters(self):
        """Test that reset reinitializes standard counters to 0."""
        collector = MetricsCollector()

        collector.increment('gates_crossed', 2)
        collector.reset()

        assert 'gates_crossed' in collector.snapshot().counters
        assert 'vehicle_unavailable' in collector.snapshot().skip_reasons


class TestThreadSafety:
    """Tests for thread-safe operations."""

    def test_concurrent_increment(self):
        """Test that concurrent increments are thread-safe."""
        collector = MetricsCollector()
        num_threads = 10
        increments_per_thread = 1000

        def worker():
            for _ in range(increments_per_thread):
                collector.increment('gate_evaluations')

        threads = [threading.Thread(target=worker) for _ in range(num_threads)]

        for t in threads:
            t.start()
        for t in threads:
            t.join()

        expected = num_threads * increments_per_thread
        actual = collector.get_counter('gate_evaluations')

        assert actual == expected, f"Expected {expected}, got {actual}"

    def test_concurrent_skip_reasons(self):
        """Test that concurrent skip reason increments are thread-safe."""
        collector = MetricsCollector()
        num_threads = 5
        increments_per_thread = 200
        reasons = ['vehicle_unavailable', 'gate_resolved', 'scoring_disabled']

        def worker(reason: str):
            for _ in range(increments_per_thread):
                collector.increment_skip(reason)

        threads = [
            threading.Thread(target=worker, args=(reason,))
            for reason in reasons
            for _ in range(num_threads)
        ]

        for t in threads:
            t.start()
        for t in threads:
            t.join()

        snapshot = collector.snapshot()

        expected = num_threads * increments_per_thread
        for reason in reasons:
            assert snapshot.skip_reasons[reason] == expected


class TestGlobalSingleton:
    """Tests for global metrics singleton."""

    def test_get_metrics_returns_same_instance(self):
        """Test that get_metrics() returns the same instance."""
        assert get_metrics() is get_metrics()

    def test_reset_metrics_creates_new_instance(self):
        """Test that reset_metrics() creates fresh instance."""
        metrics1 = get_metrics()
        metrics1.increment('test_counter', 100)

        reset_metrics()

        metrics2 = get_metrics()
        assert metrics2 is not metrics1
        assert metrics2.get_counter('test_counter') == 0


class TestSkipReasonCodes:
    """Tests for standard skip reason codes."""

    def test_skip_reasons_initialized_to_zero(self):
        """Test that all skip reasons are initialized to 0."""
        collector = MetricsCollector()
        snapshot = collector.snapshot()

        for reason in collector.SKIP_REASONS:
            assert snapshot.skip_reasons[reason] == 0


class TestPrintSummary:
    """Tests for print_summary functionality."""

    def test_print_summary_no_crash(self, capsys):
        """Test that print_summary doesn't crash with various data."""
        collector = MetricsCollector()

        collector.increment('pose_updates', 100)
        collector.increment_skip('vehicle_unavailable', 5)
        collector.record_histogram('gate_width_m', 10.0)

        collector.print_summary()

        captured = capsys.readouterr()
        assert 'SCORING METRICS' in captured.out
        assert 'pose_updates' in captured.out
        assert 'vehicle_unavailable' in captured.out

    def test_print_summary_crossing_rate(self, capsys):
        """Test the summary reports the crossed share of resolved gates."""
        collector = MetricsCollector()

        collector.increment('gates_crossed', 1)
        collector.increment('gates_invalidated', 1)
        collector.print_summary()

        out = capsys.readouterr().out
        assert 'crossing_rate' in out
        assert '50.0%' in out
