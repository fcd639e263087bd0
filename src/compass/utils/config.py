"""
Centralized configuration for the compass heading pipeline.

This module provides all configuration constants and runtime settings for:
- Orientation solver (degenerate-input thresholds)
- Smoothing filter (low-pass coefficient, wraparound handling)
- Update throttles (compute rate, output churn)
- Bearing formatter (16-point or quadrant-offset notation)
- Mock sensor source (synthetic device, replay)
- Session logging

The Config class contains all constants as class attributes, making them
accessible throughout the application without instantiation.

Usage:
    from compass.utils.config import Config

    alpha = Config.SMOOTHING_ALPHA
    if Config.SMOOTHING_CIRCULAR:
        # Blend along the shortest arc
"""

import logging

log = logging.getLogger(__name__)


class Config:
    """System configuration constants for the compass heading pipeline."""

    # ==========================================================================
    # ORIENTATION SOLVER: Degenerate input detection
    # ==========================================================================

    STANDARD_GRAVITY = 9.80665          # m/s²
    SOLVER_MIN_EAST_NORM = 0.1          # |mag x accel| below this = parallel vectors
    SOLVER_FREE_FALL_RATIO = 0.1        # |accel| below 10% of g = free fall

    # ==========================================================================
    # SMOOTHING FILTER: Exponential low-pass on azimuth
    # ==========================================================================

    SMOOTHING_ALPHA = 0.5               # 1.0 = pass-through (unfiltered variant)
    SMOOTHING_CIRCULAR = True           # False = naive linear blend across 0°/360°

    # ==========================================================================
    # THROTTLES: Compute rate and output churn
    # ==========================================================================

    THROTTLE_INTERVAL_S = 0.016         # ~60 updates/second, 0 disables
    OUTPUT_MIN_DEGREE_CHANGE = 1        # Rounded heading must move this much

    # ==========================================================================
    # BEARING FORMATTER: Presentation mode
    # ==========================================================================

    BEARING_MODE = "sixteen_point"      # "sixteen_point" or "quadrant"
    BEARING_DEGREE_SIGN = "°"

    # ==========================================================================
    # MOCK SENSOR SOURCE: Hardware-free development
    # ==========================================================================

    MOCK_SOURCE_MODE = "synthetic"      # "synthetic" or "replay"
    MOCK_SAMPLE_RATE_HZ = 100           # Per sensor kind
    MOCK_HEADING_DEG = 0.0              # Starting heading of the simulated device
    MOCK_TURN_RATE_DPS = 30.0           # Simulated rotation speed (deg/s)
    MOCK_FIELD_UT = 45.0                # Total magnetic field strength (μT)
    MOCK_DIP_DEG = 60.0                 # Magnetic inclination (downward)
    MOCK_ACCEL_NOISE = 0.05             # Std dev m/s²
    MOCK_MAG_NOISE = 0.5                # Std dev μT
    MOCK_SEED = None                    # RNG seed, None = nondeterministic

    # ==========================================================================
    # LOGGING: Session directories
    # ==========================================================================

    LOG_DIR = "logs"
    LOG_SESSION_PREFIX = "session_"

    def __init__(self):
        """Log the active pipeline profile."""
        log.info(
            "[CONFIG] Heading pipeline - alpha: %s (%s), throttle: %.0f ms, bearing: %s",
            self.SMOOTHING_ALPHA,
            "circular" if self.SMOOTHING_CIRCULAR else "linear",
            self.THROTTLE_INTERVAL_S * 1000,
            self.BEARING_MODE,
        )
