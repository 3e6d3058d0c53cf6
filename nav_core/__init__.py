"""
Navigation Scoring Core Package.

Scores an autonomous vehicle through a course of marker-delimited gates.

Package structure:
- proto: Pose, gate state and diagnostics schemas
- geometry: Gate geometry and yaw-only frame transforms
- domain: Crossing state machine, gates, course evaluation
- metrics: Diagnostics, counters, histograms
"""

__version__ = "0.1.0"
