#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Host integration for the heading pipeline.

The host platform pushes sensor events into the observer callbacks; the
observer feeds them to the HeadingEstimator and fans the results out to the
presentation layer through two output channels:

- rotation listeners: called on every accepted cycle with
  (previous_rotation, rotation) in degrees, the start and end angle for a
  rotating heading indicator
- text listeners: called only when the bearing text changes

Usage:
    observer = CompassObserver()
    observer.add_rotation_listener(lambda start, end: view.rotate(start, end))
    observer.add_text_listener(label.set_text)

    # From the host sensor subsystem
    observer.on_sensor_changed(SensorEvent("accelerometer", (0.0, 0.0, 9.81), ts))
"""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from compass.core.heading.heading_estimator import HeadingEstimator, HeadingUpdate
from compass.core.heading.sample_buffer import InvalidSampleError, SensorKind

log = logging.getLogger(__name__)

RotationListener = Callable[[float, float], None]
TextListener = Callable[[str], None]
UpdateListener = Callable[[HeadingUpdate], None]


@dataclass
class SensorEvent:
    """Raw event delivered by the host sensor subsystem."""
    kind: str
    values: Sequence[float]
    timestamp: float


class CompassObserver:
    """
    Observer dedicated to the host sensor subsystem.
    """

    def __init__(
        self,
        estimator: Optional[HeadingEstimator] = None,
        solver_logger: Optional[logging.Logger] = None,
        output_logger: Optional[logging.Logger] = None,
    ) -> None:
        self.estimator = estimator or HeadingEstimator()
        self.solver_log = solver_logger or log
        self.output_log = output_logger or log

        self._event_lock = threading.RLock()
        self._listeners_lock = threading.Lock()
        self._rotation_listeners: List[RotationListener] = []
        self._text_listeners: List[TextListener] = []
        self._update_listeners: List[UpdateListener] = []

        self.latest_update: Optional[HeadingUpdate] = None
        self.event_counts = {kind.value: 0 for kind in SensorKind}
        self.rejected_count = 0
        self.start_time = time.time()

        log.info("[OBSERVER] CompassObserver initialized (bearing: %s)", self.estimator.formatter.mode)

    # ------------------------------------------------------------------
    # Output channels
    # ------------------------------------------------------------------

    def add_rotation_listener(self, listener: RotationListener) -> None:
        with self._listeners_lock:
            self._rotation_listeners.append(listener)

    def add_text_listener(self, listener: TextListener) -> None:
        with self._listeners_lock:
            self._text_listeners.append(listener)

    def add_update_listener(self, listener: UpdateListener) -> None:
        with self._listeners_lock:
            self._update_listeners.append(listener)

    # ------------------------------------------------------------------
    # Host callbacks
    # ------------------------------------------------------------------

    def on_sensor_changed(self, event: Any) -> Optional[HeadingUpdate]:
        """
        Host callback for any sensor event.

        Args:
            event: Object with kind, values and timestamp attributes

        Returns:
            HeadingUpdate if the heading was recomputed

        Raises:
            InvalidSampleError: the host delivered a malformed vector
        """
        kind = getattr(event, "kind", None)
        values = getattr(event, "values", None)
        timestamp = getattr(event, "timestamp", None)
        if timestamp is None:
            timestamp = time.monotonic()

        # Ingest, counting and publishing for one event run as a unit, so
        # listeners see updates in the order they were computed
        with self._event_lock:
            try:
                update = self.estimator.ingest(kind, values, timestamp)
            except InvalidSampleError as e:
                self.rejected_count += 1
                self.solver_log.error("[OBSERVER] Rejected %s sample: %s", kind, e)
                raise

            kind_key = getattr(kind, "value", kind)
            if kind_key in self.event_counts:
                self.event_counts[kind_key] += 1

            if update is not None:
                self._publish(update)
        return update

    def on_accelerometer_received(self, values: Sequence[float], timestamp: Optional[float] = None) -> Optional[HeadingUpdate]:
        """Host callback for accelerometer samples (m/s²)."""
        return self.on_sensor_changed(SensorEvent(SensorKind.ACCELEROMETER.value, values, timestamp))

    def on_magnetometer_received(self, values: Sequence[float], timestamp: Optional[float] = None) -> Optional[HeadingUpdate]:
        """Host callback for magnetometer samples (μT)."""
        return self.on_sensor_changed(SensorEvent(SensorKind.MAGNETOMETER.value, values, timestamp))

    def on_accuracy_changed(self, kind: str, accuracy: int) -> None:
        self.solver_log.debug("[OBSERVER] %s accuracy changed to %s", kind, accuracy)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _publish(self, update: HeadingUpdate) -> None:
        self.latest_update = update
        self.solver_log.debug(
            "raw=%.2f smoothed=%.2f rotation=%.2f",
            update.raw_azimuth, update.azimuth, update.rotation,
        )

        with self._listeners_lock:
            rotation_listeners = list(self._rotation_listeners)
            text_listeners = list(self._text_listeners)
            update_listeners = list(self._update_listeners)

        for listener in update_listeners:
            self._notify(listener, update)
        for listener in rotation_listeners:
            self._notify(listener, update.previous_rotation, update.rotation)

        if update.text is not None:
            self.output_log.info("Bearing: %s", update.text)
            for listener in text_listeners:
                self._notify(listener, update.text)

    def _notify(self, listener: Callable, *args) -> None:
        try:
            listener(*args)
        except Exception:
            log.exception("[OBSERVER] Listener %r failed", listener)

    def get_current_heading(self) -> Optional[dict]:
        """Latest heading for consumers that poll instead of listening."""
        update = self.latest_update
        if update is None:
            return None

        return {
            'heading': update.azimuth,
            'degrees': update.degrees,
            'rotation': update.rotation,
            'text': self.estimator.text,
            'timestamp': update.timestamp,
        }

    def print_stats(self) -> None:
        """Log final statistics."""
        summary = self.estimator.get_status_summary()
        elapsed = max(1e-6, time.time() - self.start_time)
        log.info("[OBSERVER] Final stats:")
        for kind, count in self.event_counts.items():
            log.info("  - %s events: %d (%.1f Hz)", kind, count, count / elapsed)
        log.info("  - Heading updates: %d", summary['updates_count'])
        log.info("  - Throttled events: %d", summary['throttled'])
        log.info("  - Degenerate solves: %d", summary['degenerate_solves'])
        log.info("  - Rejected samples: %d", self.rejected_count)
