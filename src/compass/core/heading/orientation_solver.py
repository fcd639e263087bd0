"""
Orientation solver for accelerometer + magnetometer fusion.

Builds the device-to-world rotation matrix from the gravity and geomagnetic
vectors and extracts the compass azimuth from it.

World frame (rows of the rotation matrix):
- H (east):  mag x accel, tangential to the ground
- M (north): accel x H, tangential to the ground, toward magnetic north
- A (up):    accel, pointing toward the sky

The solve fails when the two vectors are nearly parallel (strong nearby magnet,
magnetic pole) or when the accelerometer reads close to zero (free fall). In
those cases no matrix is produced and the caller keeps its last heading.

Usage:
    solver = OrientationSolver()
    azimuth = solver.solve(accel=(0.0, 0.0, 9.81), mag=(0.0, 22.0, -40.0))
    if azimuth is not None:
        print(f"{azimuth:.1f}°")  # 0.0° (device +Y axis points north)
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from compass.utils.config_sections import SolverConfig, load_solver_config

log = logging.getLogger(__name__)


@dataclass
class Orientation:
    """Device orientation angles in radians."""
    azimuth: float  # Rotation about -Z, 0 = magnetic north, clockwise positive
    pitch: float    # Rotation about X
    roll: float     # Rotation about Y


def normalize_degrees(degrees: float) -> float:
    """
    Wrap an angle into [0, 360).

    Already-normalized input is returned unchanged.
    """
    if degrees < 0 or degrees >= 360.0:
        degrees = degrees % 360.0
        # -1e-17 % 360 rounds up to 360.0
        if degrees >= 360.0:
            degrees = 0.0
    # -0.0 -> 0.0
    return degrees + 0.0


class OrientationSolver:
    """Compute azimuth from a gravity vector and a geomagnetic vector."""

    def __init__(self, config: Optional[SolverConfig] = None) -> None:
        self.config = config or load_solver_config()
        free_fall = self.config.free_fall_ratio * self.config.gravity
        self._free_fall_sq = free_fall * free_fall

    def rotation_matrix(self, accel: Sequence[float], mag: Sequence[float]) -> Optional[np.ndarray]:
        """
        Compute the 3x3 rotation matrix mapping device frame to world frame.

        Args:
            accel: Accelerometer reading (m/s²), device at rest measures +g up
            mag: Magnetometer reading (μT)

        Returns:
            Row-major 3x3 matrix [H; M; A], or None for degenerate input
        """
        a = np.asarray(accel, dtype=float)
        e = np.asarray(mag, dtype=float)

        # Huge finite readings overflow to inf/NaN; treat them as degenerate
        with np.errstate(over='ignore', invalid='ignore'):
            a_sq = float(np.dot(a, a))
            if not math.isfinite(a_sq):
                log.debug("Solve rejected: accelerometer magnitude overflow")
                return None
            if a_sq < self._free_fall_sq:
                log.debug("Solve rejected: free fall (|a|²=%.4f)", a_sq)
                return None

            h = np.cross(e, a)
            norm_h = float(np.linalg.norm(h))
            if not math.isfinite(norm_h):
                log.debug("Solve rejected: magnetic cross product overflow")
                return None
            if norm_h < self.config.min_east_norm:
                log.debug("Solve rejected: accel and mag nearly parallel (|H|=%.4f)", norm_h)
                return None

            h = h / norm_h
            a = a / math.sqrt(a_sq)
            m = np.cross(a, h)
            rotation = np.vstack((h, m, a))

        if not np.isfinite(rotation).all():
            log.debug("Solve rejected: non-finite rotation matrix")
            return None
        return rotation

    @staticmethod
    def orientation(rotation: np.ndarray) -> Orientation:
        """Extract azimuth, pitch and roll (radians) from a rotation matrix."""
        return Orientation(
            azimuth=math.atan2(rotation[0, 1], rotation[1, 1]),
            pitch=math.asin(max(-1.0, min(1.0, -rotation[2, 1]))),
            roll=math.atan2(-rotation[2, 0], rotation[2, 2]),
        )

    @staticmethod
    def inclination(rotation: np.ndarray, mag: Sequence[float]) -> float:
        """
        Magnetic inclination (dip angle) in radians.

        Angle between the geomagnetic field and the horizontal plane, signed
        so that a field dipping toward the ground is positive.
        """
        e = np.asarray(mag, dtype=float)
        e = e / float(np.linalg.norm(e))
        c = float(np.dot(e, rotation[1]))
        s = float(np.dot(e, rotation[2]))
        return math.atan2(-s, c)

    def solve(self, accel: Sequence[float], mag: Sequence[float]) -> Optional[float]:
        """
        Azimuth in degrees within [0, 360), or None if the solve failed.
        """
        rotation = self.rotation_matrix(accel, mag)
        if rotation is None:
            return None

        azimuth_rad = self.orientation(rotation).azimuth
        return normalize_degrees(math.degrees(azimuth_rad))
