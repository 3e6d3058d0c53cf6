"""
Metrics Module: Diagnostics, counters, histograms.

- Counters: pose_updates, gate_evaluations, gates_crossed, gates_invalidated
- Histograms: gate_width_m
- Skip reason codes (no silent skips)

Usage:
    from nav_core.metrics import get_metrics

    metrics = get_metrics()
    metrics.increment('pose_updates')
    metrics.increment_skip('vehicle_unavailable')
    metrics.record_histogram('gate_width_m', 10.0)
"""

from .counters import MetricsCollector, CounterSnapshot

# Global singleton for easy access
_global_metrics = None


def get_metrics() -> MetricsCollector:
    """
    Get the global metrics collector singleton.

    Returns:
        MetricsCollector instance
    """
    global _global_metrics
    if _global_metrics is None:
        _global_metrics = MetricsCollector()
    return _global_metrics


def reset_metrics():
    """Reset global metrics (for testing)."""
    global _global_metrics
    _global_metrics = MetricsCollector()


__all__ = ['MetricsCollector', 'CounterSnapshot', 'get_metrics', 'reset_metrics']
