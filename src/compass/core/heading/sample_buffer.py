"""
Latest-sample storage for the accelerometer and magnetometer streams.

Only the most recent vector of each kind is kept. A new sample replaces all
three components at once; no history is retained.
"""

import logging
import math
from enum import Enum
from typing import Dict, Optional, Sequence, Tuple, Union

log = logging.getLogger(__name__)

Vector3 = Tuple[float, float, float]


class SensorKind(str, Enum):
    """Sensor streams consumed by the heading pipeline."""

    ACCELEROMETER = "accelerometer"
    MAGNETOMETER = "magnetometer"


class InvalidSampleError(ValueError):
    """Raised when a delivered vector is not a usable 3-axis sample."""


def as_vector3(values: Sequence[float]) -> Vector3:
    """
    Validate raw sensor values and copy them into a Vector3.

    Args:
        values: Sensor components; extra trailing values are ignored

    Returns:
        (x, y, z) tuple of floats

    Raises:
        InvalidSampleError: fewer than 3 components or non-finite values
    """
    if values is None:
        raise InvalidSampleError("sample has no values")
    try:
        count = len(values)
    except TypeError as exc:
        raise InvalidSampleError(f"sample is not a sequence: {values!r}") from exc
    if count < 3:
        raise InvalidSampleError(f"expected 3 components, got {count}")

    try:
        x, y, z = (float(values[0]), float(values[1]), float(values[2]))
    except (TypeError, ValueError) as exc:
        raise InvalidSampleError(f"non-numeric sample: {values!r}") from exc

    if not all(math.isfinite(v) for v in (x, y, z)):
        raise InvalidSampleError(f"non-finite sample: {(x, y, z)!r}")
    return x, y, z


def parse_kind(kind: Union[str, SensorKind]) -> Optional[SensorKind]:
    """Map a kind name to SensorKind, or None when it is not a heading input."""
    if isinstance(kind, SensorKind):
        return kind
    try:
        return SensorKind(str(kind).strip().lower())
    except ValueError:
        return None


class SampleBuffer:
    """Most recent accelerometer and magnetometer vectors."""

    def __init__(self) -> None:
        self._samples: Dict[SensorKind, Vector3] = {}

    def ingest(self, kind: Union[str, SensorKind], values: Sequence[float]) -> bool:
        """
        Store a sample under its kind and mark that kind ready.

        Unknown kinds are ignored. Malformed vectors raise before any state
        is touched, so a stored vector is never partially overwritten.

        Returns:
            True if the sample was stored
        """
        sensor_kind = parse_kind(kind)
        if sensor_kind is None:
            log.debug("Ignoring sample of unknown kind %r", kind)
            return False

        self._samples[sensor_kind] = as_vector3(values)
        return True

    def ready_for_solve(self) -> bool:
        return (
            SensorKind.ACCELEROMETER in self._samples
            and SensorKind.MAGNETOMETER in self._samples
        )

    @property
    def accelerometer(self) -> Optional[Vector3]:
        return self._samples.get(SensorKind.ACCELEROMETER)

    @property
    def magnetometer(self) -> Optional[Vector3]:
        return self._samples.get(SensorKind.MAGNETOMETER)

    def clear(self) -> None:
        self._samples.clear()
