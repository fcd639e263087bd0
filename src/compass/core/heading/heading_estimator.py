"""
Heading estimation pipeline.

Combines the sample buffer, orientation solver, smoothing filter, throttles and
bearing formatter into a single entry point the host calls once per sensor
event:

    raw vector -> SampleBuffer -> (both ready, throttle allows)
        -> OrientationSolver -> SmoothingFilter -> BearingFormatter -> HeadingUpdate

Features:
- Thread-safe: one lock guards all pipeline state, so accelerometer and
  magnetometer events may arrive on different threads
- Degenerate solves keep the last good heading
- Unfiltered behaviour is just configuration (alpha=1.0, interval=0)

Usage:
    estimator = HeadingEstimator()
    update = estimator.ingest("accelerometer", (0.0, 0.0, 9.81), timestamp=0.000)
    update = estimator.ingest("magnetometer", (0.0, 22.0, -40.0), timestamp=0.020)
    if update is not None:
        rotate_indicator(update.previous_rotation, update.rotation)
        if update.text is not None:
            show_text(update.text)
"""

import logging
import math
import threading
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from compass.core.heading.bearing_formatter import build_formatter
from compass.core.heading.orientation_solver import OrientationSolver
from compass.core.heading.sample_buffer import SampleBuffer, SensorKind
from compass.core.heading.smoothing_filter import SmoothingFilter
from compass.core.heading.update_throttle import OutputThrottle, UpdateThrottle, rounded_heading
from compass.utils.config_sections import (
    FormatterConfig,
    SmoothingConfig,
    SolverConfig,
    ThrottleConfig,
    load_formatter_config,
    load_smoothing_config,
    load_solver_config,
    load_throttle_config,
)

log = logging.getLogger(__name__)


@dataclass
class HeadingUpdate:
    """Result of one accepted pipeline cycle."""
    timestamp: float
    raw_azimuth: float        # Solver output (degrees)
    azimuth: float            # Smoothed heading (degrees, [0, 360))
    degrees: int              # Rounded heading shown to the user
    rotation: float           # Indicator rotation = -azimuth
    previous_rotation: float  # Rotation emitted by the prior cycle
    text: Optional[str] = None  # None when the bearing text did not change


class HeadingEstimator:
    """Fuse accelerometer + magnetometer samples into a smoothed compass heading."""

    def __init__(
        self,
        solver_config: Optional[SolverConfig] = None,
        smoothing_config: Optional[SmoothingConfig] = None,
        throttle_config: Optional[ThrottleConfig] = None,
        formatter_config: Optional[FormatterConfig] = None,
    ) -> None:
        throttle_config = throttle_config or load_throttle_config()

        self.buffer = SampleBuffer()
        self.solver = OrientationSolver(solver_config or load_solver_config())
        self.filter = SmoothingFilter(smoothing_config or load_smoothing_config())
        self.throttle = UpdateThrottle(throttle_config.interval)
        self.formatter = build_formatter(formatter_config or load_formatter_config())
        self.output_throttle = OutputThrottle(
            self.formatter.display, throttle_config.min_degree_change
        )

        self._lock = threading.Lock()
        self._rotation = 0.0
        self._has_heading = False

        # Statistics
        self.samples_received = 0
        self.updates_count = 0
        self.degenerate_count = 0

    def ingest(
        self,
        kind: Union[str, SensorKind],
        values: Sequence[float],
        timestamp: float,
    ) -> Optional[HeadingUpdate]:
        """
        Feed one sensor event through the pipeline.

        Args:
            kind: "accelerometer" or "magnetometer"; other kinds are ignored
            values: Sensor vector (x, y, z)
            timestamp: Event time in seconds

        Returns:
            HeadingUpdate when the heading was recomputed, None otherwise

        Raises:
            InvalidSampleError: malformed vector
        """
        with self._lock:
            if not self.buffer.ingest(kind, values):
                return None
            self.samples_received += 1

            if not self.throttle.should_process(timestamp):
                return None

            if not self.buffer.ready_for_solve():
                log.debug("Waiting for both sensors before solving")
                return None

            raw = self.solver.solve(self.buffer.accelerometer, self.buffer.magnetometer)
            if raw is None or not math.isfinite(raw):
                self.degenerate_count += 1
                return None

            azimuth = self.filter.update(raw)
            text = self.output_throttle.offer(azimuth)

            previous_rotation = self._rotation
            self._rotation = -azimuth
            self._has_heading = True
            self.updates_count += 1

            return HeadingUpdate(
                timestamp=timestamp,
                raw_azimuth=raw,
                azimuth=azimuth,
                degrees=rounded_heading(azimuth),
                rotation=self._rotation,
                previous_rotation=previous_rotation,
                text=text,
            )

    @property
    def azimuth(self) -> Optional[float]:
        """Smoothed heading, or None before the first successful solve."""
        with self._lock:
            return self.filter.current if self._has_heading else None

    @property
    def text(self) -> Optional[str]:
        """Last emitted bearing text."""
        with self._lock:
            return self.output_throttle.last_text

    def reset(self) -> None:
        """Drop buffered samples and filter state (host restarted delivery)."""
        with self._lock:
            self.buffer.clear()
            self.filter.reset()
            self.throttle.reset()
            self.output_throttle.reset()
            self._rotation = 0.0
            self._has_heading = False

    def get_status_summary(self) -> dict:
        """Snapshot of pipeline counters and state."""
        with self._lock:
            return {
                'samples_received': self.samples_received,
                'updates_count': self.updates_count,
                'throttled': self.throttle.skipped,
                'degenerate_solves': self.degenerate_count,
                'current_azimuth': self.filter.current if self._has_heading else None,
                'current_text': self.output_throttle.last_text,
                'bearing_mode': self.formatter.mode,
            }
