"""Tests for the accelerometer + magnetometer orientation solver."""

from __future__ import annotations

import math

import numpy as np
import pytest

from compass.core.heading.orientation_solver import OrientationSolver, normalize_degrees
from compass.core.mock_sensor_source import synthetic_sample
from compass.utils.config_sections import SolverConfig

GRAVITY = (0.0, 0.0, 9.81)


@pytest.fixture()
def solver() -> OrientationSolver:
    return OrientationSolver(SolverConfig())


def test_device_facing_north(solver):
    assert solver.solve(GRAVITY, (0.0, 22.0, -40.0)) == pytest.approx(0.0, abs=1e-9)


def test_device_facing_west(solver):
    # North along device +X means device +Y points west
    assert solver.solve(GRAVITY, (22.0, 0.0, -40.0)) == pytest.approx(270.0)


@pytest.mark.parametrize("heading", [0.0, 10.0, 45.0, 90.0, 135.5, 180.0, 225.0, 300.0, 359.0])
def test_solver_recovers_synthetic_heading(solver, heading):
    accel, mag = synthetic_sample(heading, field_ut=45.0, dip_deg=60.0)
    azimuth = solver.solve(accel, mag)

    assert 0.0 <= azimuth < 360.0
    diff = ((azimuth - heading + 180.0) % 360.0) - 180.0
    assert diff == pytest.approx(0.0, abs=1e-6)


def test_solver_output_always_normalized(solver):
    rng = np.random.default_rng(7)
    for _ in range(200):
        accel = rng.normal(0.0, 1.0, 3) + np.array([0.0, 0.0, 9.81])
        mag = rng.normal(0.0, 30.0, 3)
        azimuth = solver.solve(accel, mag)
        if azimuth is not None:
            assert 0.0 <= azimuth < 360.0


def test_parallel_vectors_are_degenerate(solver):
    assert solver.solve((0.0, 0.0, 9.81), (0.0, 0.0, -45.0)) is None
    assert solver.rotation_matrix((1.0, 2.0, 9.0), (2.0, 4.0, 18.0)) is None


def test_free_fall_is_degenerate(solver):
    assert solver.solve((0.0, 0.0, 0.05), (0.0, 22.0, -40.0)) is None


def test_rotation_matrix_is_orthonormal(solver):
    accel, mag = synthetic_sample(42.0, field_ut=45.0, dip_deg=60.0)
    rotation = solver.rotation_matrix(accel, mag)

    assert rotation.shape == (3, 3)
    assert np.allclose(rotation @ rotation.T, np.eye(3))


def test_level_device_has_zero_pitch_and_roll(solver):
    accel, mag = synthetic_sample(120.0, field_ut=45.0, dip_deg=60.0)
    orientation = solver.orientation(solver.rotation_matrix(accel, mag))

    assert orientation.pitch == pytest.approx(0.0, abs=1e-9)
    assert orientation.roll == pytest.approx(0.0, abs=1e-9)
    assert math.degrees(orientation.azimuth) == pytest.approx(120.0)


def test_inclination_matches_dip(solver):
    accel, mag = synthetic_sample(75.0, field_ut=45.0, dip_deg=60.0)
    rotation = solver.rotation_matrix(accel, mag)

    assert math.degrees(solver.inclination(rotation, mag)) == pytest.approx(60.0)


@pytest.mark.parametrize("value, expected", [
    (-90.0, 270.0),
    (-180.0, 180.0),
    (360.0, 0.0),
    (725.0, 5.0),
    (-1e-17, 0.0),
])
def test_normalize_degrees(value, expected):
    assert normalize_degrees(value) == pytest.approx(expected)


@pytest.mark.parametrize("value", [0.0, 0.5, 90.0, 180.0, 359.999])
def test_normalize_is_idempotent(value):
    assert normalize_degrees(value) == value
    assert normalize_degrees(normalize_degrees(value)) == normalize_degrees(value)


@pytest.mark.parametrize("accel, mag", [
    ((1e200, 0.0, 0.0), (0.0, 1e200, 0.0)),
    ((0.0, 0.0, 9.81), (0.0, 1e200, -1e200)),
])
def test_overflowing_vectors_are_degenerate(solver, accel, mag):
    assert solver.rotation_matrix(accel, mag) is None
    assert solver.solve(accel, mag) is None
