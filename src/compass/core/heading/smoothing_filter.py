"""Exponential low-pass filter for azimuth streams."""

import logging
import math
from typing import Optional

from compass.core.heading.orientation_solver import normalize_degrees
from compass.utils.config_sections import SmoothingConfig, load_smoothing_config

log = logging.getLogger(__name__)


def angular_difference(target: float, current: float) -> float:
    """Signed shortest rotation from current to target, in [-180, 180)."""
    return ((target - current + 180.0) % 360.0) - 180.0


class SmoothingFilter:
    """
    Single-pole low-pass filter: current = alpha*raw + (1-alpha)*current.

    With circular blending the step is taken along the shortest arc, so
    blending 359° and 1° lands near 0° instead of 180°. Linear blending
    reproduces the plain weighted average.
    """

    def __init__(self, config: Optional[SmoothingConfig] = None, initial: float = 0.0) -> None:
        self.config = config or load_smoothing_config()
        if not 0.0 < self.config.alpha <= 1.0:
            raise ValueError(f"alpha must be in (0, 1], got {self.config.alpha}")

        self.alpha = self.config.alpha
        self.circular = self.config.circular
        self.current = normalize_degrees(initial)

    def update(self, raw: float) -> float:
        """Blend a raw azimuth (degrees, [0, 360)) into the smoothed value."""
        if not math.isfinite(raw):
            raise ValueError(f"raw azimuth must be finite, got {raw}")

        if self.circular:
            # raw - (1-alpha)*diff == current + alpha*diff, exact at alpha=1
            diff = angular_difference(raw, self.current)
            blended = raw - (1.0 - self.alpha) * diff
        else:
            blended = self.alpha * raw + (1.0 - self.alpha) * self.current

        self.current = normalize_degrees(blended)
        return self.current

    def reset(self, value: float = 0.0) -> None:
        self.current = normalize_degrees(value)
