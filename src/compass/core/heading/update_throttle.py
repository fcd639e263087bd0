"""
Rate limiting for the heading pipeline.

Two independent throttles:
- UpdateThrottle bounds how often the solver runs, regardless of how fast
  the host delivers sensor events.
- OutputThrottle bounds output churn: the bearing text is only recomputed
  when the rounded heading moves, and only emitted when the string changes.

Usage:
    throttle = UpdateThrottle(interval=0.016)
    if throttle.should_process(event.timestamp):
        ...
"""

import logging
import math
from typing import Callable, Optional

log = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to nearest integer, halves away from -inf (12.5 -> 13)."""
    return int(math.floor(value + 0.5))


def rounded_heading(degrees: float) -> int:
    """Integer heading in [0, 360), 359.5 wraps to 0."""
    return round_half_up(degrees) % 360


class UpdateThrottle:
    """Accept at most one event per interval (seconds)."""

    def __init__(self, interval: float = 0.016) -> None:
        if interval < 0:
            raise ValueError(f"interval must be >= 0, got {interval}")
        self.interval = interval
        self.last_accepted: Optional[float] = None
        self.accepted = 0
        self.skipped = 0

    def should_process(self, now: float) -> bool:
        if self.last_accepted is not None and now - self.last_accepted < self.interval:
            self.skipped += 1
            return False

        self.last_accepted = now
        self.accepted += 1
        return True

    def reset(self) -> None:
        self.last_accepted = None


class OutputThrottle:
    """
    Suppress redundant bearing text.

    Args:
        render: Maps a smoothed azimuth to display text
        min_degree_change: Rounded heading delta required before re-rendering
    """

    def __init__(self, render: Callable[[float], str], min_degree_change: int = 1) -> None:
        self.render = render
        self.min_degree_change = max(1, int(min_degree_change))
        self.last_degrees: Optional[int] = None
        self.last_text: Optional[str] = None

    def _degrees_changed(self, degrees: int) -> bool:
        if self.last_degrees is None:
            return True
        delta = abs(degrees - self.last_degrees)
        delta = min(delta, 360 - delta)
        return delta >= self.min_degree_change

    def offer(self, azimuth: float) -> Optional[str]:
        """
        Return new text for this azimuth, or None when nothing changed.
        """
        degrees = rounded_heading(azimuth)
        if not self._degrees_changed(degrees):
            return None

        self.last_degrees = degrees
        text = self.render(azimuth)
        if text == self.last_text:
            return None

        self.last_text = text
        return text

    def reset(self) -> None:
        self.last_degrees = None
        self.last_text = None
