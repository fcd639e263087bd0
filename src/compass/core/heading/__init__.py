"""
Heading Estimation Module

Components:
- SampleBuffer: latest accelerometer / magnetometer vectors
- OrientationSolver: gravity + magnetic fusion into an azimuth
- SmoothingFilter: exponential low-pass on the azimuth
- UpdateThrottle / OutputThrottle: compute-rate and output-churn limits
- SixteenPointFormatter / QuadrantFormatter: bearing text
- HeadingEstimator: the assembled pipeline
"""

from .sample_buffer import InvalidSampleError, SampleBuffer, SensorKind
from .orientation_solver import Orientation, OrientationSolver, normalize_degrees
from .smoothing_filter import SmoothingFilter
from .update_throttle import OutputThrottle, UpdateThrottle
from .bearing_formatter import QuadrantFormatter, SixteenPointFormatter, build_formatter
from .heading_estimator import HeadingEstimator, HeadingUpdate

__all__ = [
    'HeadingEstimator',
    'HeadingUpdate',
    'InvalidSampleError',
    'Orientation',
    'OrientationSolver',
    'OutputThrottle',
    'QuadrantFormatter',
    'SampleBuffer',
    'SensorKind',
    'SixteenPointFormatter',
    'SmoothingFilter',
    'UpdateThrottle',
    'build_formatter',
    'normalize_degrees',
]
