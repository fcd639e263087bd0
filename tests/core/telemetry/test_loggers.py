"""Tests for the session heading logger and the JSONL sample recorder."""

from __future__ import annotations

import json

import pytest

from compass.core.heading.heading_estimator import HeadingEstimator
from compass.core.mock_sensor_source import MockSensorSource
from compass.core.heading.sample_buffer import InvalidSampleError
from compass.core.observer import CompassObserver, SensorEvent
from compass.core.telemetry.loggers.heading_logger import get_heading_logger, reset_heading_logger
from compass.core.telemetry.loggers.sample_recorder import SampleRecorder
from compass.utils.config_sections import MockSourceConfig, SmoothingConfig, ThrottleConfig


@pytest.fixture()
def heading_logger(tmp_path):
    reset_heading_logger()
    logger = get_heading_logger(session_dir=tmp_path / "session")
    yield logger
    reset_heading_logger()


def test_heading_logger_is_singleton(heading_logger, tmp_path):
    assert get_heading_logger(session_dir=tmp_path / "other") is heading_logger
    assert not (tmp_path / "other").exists()


def test_heading_logger_writes_channel_files(heading_logger, tmp_path):
    heading_logger.solver.debug("raw=12.0")
    heading_logger.output.info("Bearing: 12° North")
    for handler in heading_logger.solver.handlers + heading_logger.output.handlers:
        handler.flush()

    session = tmp_path / "session"
    assert "raw=12.0" in (session / "solver.log").read_text(encoding="utf-8")
    assert "Bearing: 12° North" in (session / "output.log").read_text(encoding="utf-8")


def test_observer_routes_to_session_channels(heading_logger, tmp_path):
    estimator = HeadingEstimator(
        smoothing_config=SmoothingConfig(alpha=1.0),
        throttle_config=ThrottleConfig(interval=0.0),
    )
    observer = CompassObserver(
        estimator,
        solver_logger=heading_logger.solver,
        output_logger=heading_logger.output,
    )
    observer.on_accelerometer_received((0.0, 0.0, 9.81), 0.0)
    observer.on_magnetometer_received((-22.0, 0.0, -40.0), 0.1)
    for handler in heading_logger.output.handlers:
        handler.flush()

    assert "90° East" in (tmp_path / "session" / "output.log").read_text(encoding="utf-8")


def test_recorder_writes_replayable_samples(tmp_path):
    recorder = SampleRecorder(session_dir=tmp_path / "rec")
    estimator = HeadingEstimator(
        smoothing_config=SmoothingConfig(alpha=1.0),
        throttle_config=ThrottleConfig(interval=0.0),
    )
    observer = CompassObserver(estimator)
    observer.add_update_listener(recorder.log_heading)
    sink = recorder.wrap(observer.on_sensor_changed)

    sink(SensorEvent("accelerometer", (0.0, 0.0, 9.81), 0.0))
    sink(SensorEvent("magnetometer", (-22.0, 0.0, -40.0), 0.1))
    summary = recorder.finalize_session()

    assert summary["samples"] == {"accelerometer": 1, "magnetometer": 1}
    assert summary["heading_updates"] == 1
    assert summary["text_changes"] == 1

    headings = [json.loads(line) for line in recorder.headings_log.read_text(encoding="utf-8").splitlines()]
    assert headings[0]["text"] == "90° East"

    replay = MockSensorSource(mode="replay", replay_path=str(recorder.samples_log), config=MockSourceConfig())
    events = list(replay.events())
    assert [e.kind for e in events] == ["accelerometer", "magnetometer"]
    assert events[1].values == [-22.0, 0.0, -40.0]


def test_recorder_skips_samples_the_sink_rejects(tmp_path):
    recorder = SampleRecorder(session_dir=tmp_path / "rec")
    sink = recorder.wrap(CompassObserver(HeadingEstimator()).on_sensor_changed)

    with pytest.raises(InvalidSampleError):
        sink(SensorEvent("accelerometer", (0.0, 9.81), 0.0))
    sink(SensorEvent("accelerometer", (0.0, 0.0, 9.81), 0.1))

    assert recorder.sample_counts == {"accelerometer": 1}
    lines = recorder.samples_log.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["values"] for line in lines] == [[0.0, 0.0, 9.81]]


def test_recorder_creates_timestamped_session(tmp_path):
    recorder = SampleRecorder(output_dir=tmp_path)
    assert recorder.get_session_dir().parent == tmp_path
    assert recorder.get_session_dir().name.startswith("session_")
