#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mock sensor source for testing the heading pipeline without hardware.

This module provides a drop-in stand-in for the host sensor subsystem. It
pushes accelerometer and magnetometer events into any sink callable (usually
CompassObserver.on_sensor_changed) by:
1. Synthesizing a level device turning at a constant rate in a tilted
   geomagnetic field, with Gaussian sensor noise
2. Replaying a JSONL recording of real sensor events

Operating modes:
- 'synthetic': Simulated device, heading(t) = heading_deg + turn_rate_dps * t
- 'replay': Events read from a JSONL file written by SampleRecorder

Usage:
    # Synthetic mode (default), paced in real time on a background thread
    source = MockSensorSource(mode='synthetic', sample_rate_hz=50)
    source.start(observer.on_sensor_changed)
    ...
    source.stop()

    # Replay mode, as fast as possible
    source = MockSensorSource(mode='replay', replay_path='logs/session/samples.jsonl')
    for event in source.events():
        observer.on_sensor_changed(event)
"""

import json
import logging
import math
import threading
import time
from pathlib import Path
from typing import Callable, Iterator, List, Optional

import numpy as np

from compass.core.heading.sample_buffer import SensorKind
from compass.core.observer import SensorEvent
from compass.utils.config_sections import MockSourceConfig, load_mock_source_config

log = logging.getLogger("MockSensorSource")

STANDARD_GRAVITY = 9.80665


def synthetic_sample(heading_deg: float, field_ut: float, dip_deg: float,
                     gravity: float = STANDARD_GRAVITY):
    """
    Noise-free readings of a level device whose +Y axis points at heading_deg.

    Returns:
        (accel, mag) as numpy arrays in device coordinates
    """
    heading = math.radians(heading_deg)
    dip = math.radians(dip_deg)
    horizontal = field_ut * math.cos(dip)
    vertical = field_ut * math.sin(dip)

    accel = np.array([0.0, 0.0, gravity])
    mag = np.array([
        -horizontal * math.sin(heading),
        horizontal * math.cos(heading),
        -vertical,
    ])
    return accel, mag


def load_replay(path) -> List[SensorEvent]:
    """
    Read a JSONL sensor recording.

    Each line: {"timestamp": float, "kind": str, "values": [x, y, z]}
    """
    events = []
    with open(path, "r", encoding="utf-8") as f:
        for line_number, line in enumerate(f, start=1):
            line = line.strip()
            if not line:
                continue
            try:
                record = json.loads(line)
                events.append(SensorEvent(
                    kind=record["kind"],
                    values=list(record["values"]),
                    timestamp=float(record["timestamp"]),
                ))
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"{path}:{line_number}: invalid sample record: {e}") from e
    return events


class MockSensorSource:
    """
    Mock sensor subsystem for development without physical hardware.

    See module docstring for usage examples.
    """

    def __init__(
        self,
        mode: Optional[str] = None,
        sample_rate_hz: Optional[float] = None,
        replay_path: Optional[str] = None,
        config: Optional[MockSourceConfig] = None,
    ) -> None:
        self.config = config or load_mock_source_config()
        self.mode = mode or self.config.mode
        self.sample_rate_hz = float(sample_rate_hz or self.config.sample_rate_hz)
        self.replay_path = replay_path or self.config.replay_path

        if self.sample_rate_hz <= 0:
            raise ValueError(f"sample_rate_hz must be positive, got {self.sample_rate_hz}")

        self._rng = np.random.default_rng(self.config.seed)
        self._replay_events: List[SensorEvent] = []

        # State
        self.running = False
        self.event_count = 0
        self._stop_event = threading.Event()
        self._generator_thread: Optional[threading.Thread] = None

        self._init_mode()

        log.info("[MockSensorSource] Initialized in '%s' mode @ %.0f Hz", self.mode, self.sample_rate_hz)

    def _init_mode(self) -> None:
        """Initialize resources based on selected mode."""
        if self.mode == 'replay':
            if not self.replay_path or not Path(self.replay_path).exists():
                raise ValueError(f"Replay file not found: {self.replay_path}")
            self._replay_events = load_replay(self.replay_path)
            log.info("[MockSensorSource] Loaded %d events from %s", len(self._replay_events), self.replay_path)

        elif self.mode == 'synthetic':
            log.info("[MockSensorSource] Synthetic sample generation ready")
        else:
            raise ValueError(f"Unknown mode: {self.mode}")

    # ------------------------------------------------------------------
    # Event generation
    # ------------------------------------------------------------------

    def heading_at(self, t: float) -> float:
        """Simulated device heading (degrees) at t seconds."""
        return (self.config.heading_deg + self.config.turn_rate_dps * t) % 360.0

    def events(self, duration: Optional[float] = None, start: float = 0.0) -> Iterator[SensorEvent]:
        """
        Yield sensor events with simulated timestamps (seconds).

        Synthetic mode alternates accelerometer and magnetometer events at
        sample_rate_hz per kind, covering [start, start + duration); duration
        is required. Replay mode yields the recording, truncated to duration
        when given.
        """
        if self.mode == 'replay':
            if not self._replay_events:
                return
            start = self._replay_events[0].timestamp
            for event in self._replay_events:
                if duration is not None and event.timestamp - start > duration:
                    return
                yield event
            return

        if duration is None:
            raise ValueError("duration is required in synthetic mode")

        period = 1.0 / self.sample_rate_hz
        steps = int(duration * self.sample_rate_hz)
        for i in range(steps):
            t = start + i * period
            accel, mag = synthetic_sample(self.heading_at(t), self.config.field_ut, self.config.dip_deg)
            accel = accel + self._rng.normal(0.0, self.config.accel_noise, 3)
            mag = mag + self._rng.normal(0.0, self.config.mag_noise, 3)

            yield SensorEvent(SensorKind.ACCELEROMETER.value, accel.tolist(), t)
            yield SensorEvent(SensorKind.MAGNETOMETER.value, mag.tolist(), t + period / 2)

    # ------------------------------------------------------------------
    # Real-time delivery
    # ------------------------------------------------------------------

    def start(self, sink: Callable[[SensorEvent], object], duration: Optional[float] = None) -> None:
        """Start pushing events to sink from a background thread, paced in real time."""
        if self.running:
            log.warning("[MockSensorSource] Already running")
            return

        if duration is None and self.mode == 'synthetic':
            duration = float("inf")

        self.running = True
        self.event_count = 0
        self._stop_event.clear()
        self._generator_thread = threading.Thread(
            target=self._deliver, args=(sink, duration), daemon=True
        )
        self._generator_thread.start()
        log.info("[MockSensorSource] Started event delivery")

    def _deliver(self, sink: Callable[[SensorEvent], object], duration: Optional[float]) -> None:
        wall_start = time.monotonic()
        first_timestamp = None
        events = self.events(duration) if duration != float("inf") else self._endless()

        try:
            for event in events:
                if self._stop_event.is_set():
                    break
                if first_timestamp is None:
                    first_timestamp = event.timestamp

                delay = (event.timestamp - first_timestamp) - (time.monotonic() - wall_start)
                if delay > 0 and self._stop_event.wait(delay):
                    break

                sink(event)
                self.event_count += 1
        except Exception:
            log.exception("[MockSensorSource] Event delivery failed")
        finally:
            self.running = False

    def _endless(self) -> Iterator[SensorEvent]:
        chunk = 60.0
        offset = 0.0
        while True:
            yield from self.events(chunk, start=offset)
            offset += chunk

    def stop(self) -> None:
        """Stop event delivery."""
        self._stop_event.set()
        if self._generator_thread is not None and self._generator_thread.is_alive():
            self._generator_thread.join(timeout=1.0)
        self.running = False
        log.info("[MockSensorSource] Stopped after %d events", self.event_count)

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until delivery finishes (finite sources only)."""
        if self._generator_thread is not None:
            self._generator_thread.join(timeout=timeout)
