"""Tests for SampleBuffer ingestion and readiness."""

from __future__ import annotations

import math

import pytest

from compass.core.heading.sample_buffer import InvalidSampleError, SampleBuffer, SensorKind, as_vector3


def test_buffer_requires_both_kinds():
    buffer = SampleBuffer()
    assert not buffer.ready_for_solve()

    buffer.ingest("accelerometer", (0.0, 0.0, 9.81))
    assert not buffer.ready_for_solve()

    buffer.ingest(SensorKind.MAGNETOMETER, (0.0, 22.0, -40.0))
    assert buffer.ready_for_solve()


def test_buffer_keeps_latest_sample_only():
    buffer = SampleBuffer()
    buffer.ingest("magnetometer", (1, 2, 3))
    buffer.ingest("magnetometer", (4, 5, 6))

    assert buffer.magnetometer == (4.0, 5.0, 6.0)
    assert buffer.accelerometer is None


def test_buffer_ignores_unknown_kind():
    buffer = SampleBuffer()
    assert buffer.ingest("gyroscope", (0.1, 0.2, 0.3)) is False
    assert buffer.accelerometer is None
    assert buffer.magnetometer is None


def test_buffer_accepts_kind_names_case_insensitively():
    buffer = SampleBuffer()
    assert buffer.ingest(" Accelerometer ", (0, 0, 9.8)) is True
    assert buffer.accelerometer == (0.0, 0.0, 9.8)


def test_short_vector_is_rejected_without_touching_state():
    buffer = SampleBuffer()
    buffer.ingest("accelerometer", (0.0, 0.0, 9.81))

    with pytest.raises(InvalidSampleError):
        buffer.ingest("accelerometer", (1.0, 2.0))

    assert buffer.accelerometer == (0.0, 0.0, 9.81)


@pytest.mark.parametrize("values", [None, 5.0, (1.0, "x", 3.0), (math.nan, 0.0, 0.0), (0.0, math.inf, 0.0)])
def test_malformed_values_raise(values):
    with pytest.raises(InvalidSampleError):
        as_vector3(values)


def test_extra_components_are_ignored():
    assert as_vector3([1, 2, 3, 99]) == (1.0, 2.0, 3.0)


def test_invalid_sample_error_is_value_error():
    assert issubclass(InvalidSampleError, ValueError)
