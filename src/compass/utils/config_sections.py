"""
Typed configuration sections for the compass heading pipeline.

This module provides strongly-typed configuration sections to replace
scattered getattr(Config, ...) calls with proper type hints and defaults.

Benefits:
- Type safety: IDE autocomplete and type checking
- Discoverability: All config options visible in one place
- Default values: Centralized and documented
- Better testing: Can mock entire config sections
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class SolverConfig:
    """Configuration for the accelerometer + magnetometer orientation solver."""

    gravity: float = 9.80665  # m/s²
    min_east_norm: float = 0.1  # Reject nearly parallel accel/mag vectors
    free_fall_ratio: float = 0.1  # Reject |accel| below this fraction of g


@dataclass
class SmoothingConfig:
    """Configuration for the azimuth low-pass filter."""

    # Higher = more responsive/noisier, lower = smoother/slower
    alpha: float = 0.5

    # Shortest-arc blending across 0°/360°
    circular: bool = True


@dataclass
class ThrottleConfig:
    """Configuration for compute-rate and output-churn throttles."""

    interval: float = 0.016  # Seconds between accepted sensor events
    min_degree_change: int = 1  # Rounded heading delta needed to recompute text


@dataclass
class FormatterConfig:
    """Configuration for bearing text presentation."""

    mode: str = "sixteen_point"  # "sixteen_point" or "quadrant"
    degree_sign: str = "°"


@dataclass
class MockSourceConfig:
    """Configuration for the hardware-free sensor source."""

    mode: str = "synthetic"
    sample_rate_hz: float = 100.0
    heading_deg: float = 0.0
    turn_rate_dps: float = 30.0
    field_ut: float = 45.0
    dip_deg: float = 60.0
    accel_noise: float = 0.05
    mag_noise: float = 0.5
    seed: Optional[int] = None
    replay_path: Optional[str] = None


def load_solver_config() -> SolverConfig:
    """
    Load solver configuration from Config with fallback defaults.

    Returns:
        SolverConfig with values from Config or defaults
    """
    from compass.utils.config import Config

    return SolverConfig(
        gravity=getattr(Config, "STANDARD_GRAVITY", 9.80665),
        min_east_norm=getattr(Config, "SOLVER_MIN_EAST_NORM", 0.1),
        free_fall_ratio=getattr(Config, "SOLVER_FREE_FALL_RATIO", 0.1),
    )


def load_smoothing_config() -> SmoothingConfig:
    """
    Load smoothing configuration from Config with fallback defaults.

    Returns:
        SmoothingConfig with values from Config or defaults
    """
    from compass.utils.config import Config

    return SmoothingConfig(
        alpha=getattr(Config, "SMOOTHING_ALPHA", 0.5),
        circular=getattr(Config, "SMOOTHING_CIRCULAR", True),
    )


def load_throttle_config() -> ThrottleConfig:
    """
    Load throttle configuration from Config with fallback defaults.

    Returns:
        ThrottleConfig with values from Config or defaults
    """
    from compass.utils.config import Config

    return ThrottleConfig(
        interval=getattr(Config, "THROTTLE_INTERVAL_S", 0.016),
        min_degree_change=getattr(Config, "OUTPUT_MIN_DEGREE_CHANGE", 1),
    )


def load_formatter_config() -> FormatterConfig:
    """
    Load formatter configuration from Config with fallback defaults.

    Returns:
        FormatterConfig with values from Config or defaults
    """
    from compass.utils.config import Config

    return FormatterConfig(
        mode=getattr(Config, "BEARING_MODE", "sixteen_point"),
        degree_sign=getattr(Config, "BEARING_DEGREE_SIGN", "°"),
    )


def load_mock_source_config() -> MockSourceConfig:
    """
    Load mock sensor source configuration from Config with fallback defaults.

    Returns:
        MockSourceConfig with values from Config or defaults
    """
    from compass.utils.config import Config

    return MockSourceConfig(
        mode=getattr(Config, "MOCK_SOURCE_MODE", "synthetic"),
        sample_rate_hz=getattr(Config, "MOCK_SAMPLE_RATE_HZ", 100.0),
        heading_deg=getattr(Config, "MOCK_HEADING_DEG", 0.0),
        turn_rate_dps=getattr(Config, "MOCK_TURN_RATE_DPS", 30.0),
        field_ut=getattr(Config, "MOCK_FIELD_UT", 45.0),
        dip_deg=getattr(Config, "MOCK_DIP_DEG", 60.0),
        accel_noise=getattr(Config, "MOCK_ACCEL_NOISE", 0.05),
        mag_noise=getattr(Config, "MOCK_MAG_NOISE", 0.5),
        seed=getattr(Config, "MOCK_SEED", None),
        replay_path=getattr(Config, "MOCK_REPLAY_PATH", None),
    )
