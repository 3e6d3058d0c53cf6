"""
Navigation scoring configuration.
"""

# Logging
LOGGING_CONFIG = {
    "level": "INFO",
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}

# Scoring loop
SCORING_CONFIG = {
    "tick_dt_s": 0.1,            # Simulated tick period (seconds)
    "vehicle_speed_m_s": 2.0,    # Demo vehicle speed
    "log_every_n_updates": 10,   # Debug-log gate states every N ticks
}

# Sample course (marker poses in world frame, meters)
SAMPLE_COURSE = {
    "vehicle": "wamv",
    "markers": {
        "red_bound_0": (10.0, -5.0, 0.0),
        "green_bound_0": (10.0, 5.0, 0.0),
        "red_bound_1": (30.0, -4.0, 0.0),
        "green_bound_1": (30.0, 4.0, 0.0),
        "red_bound_2": (50.0, -6.0, 0.0),
        "green_bound_2": (50.0, 6.0, 0.0),
    },
    "gates": [
        {"left_marker": "red_bound_0", "right_marker": "green_bound_0", "name": "gate_0"},
        {"left_marker": "red_bound_1", "right_marker": "green_bound_1", "name": "gate_1"},
        {"left_marker": "red_bound_2", "right_marker": "green_bound_2", "name": "gate_2"},
    ],
}
