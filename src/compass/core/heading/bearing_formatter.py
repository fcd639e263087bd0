"""
Bearing formatter service for compass headings.

Maps a normalized azimuth (degrees, [0, 360)) to human-readable text using one
of two interchangeable strategies:

- SixteenPointFormatter: nearest of the 16 compass points, 22.5° apart
  ("North", "North-Northeast", ...). Display text carries the integer
  heading too: "45° Northeast".
- QuadrantFormatter: quadrant plus offset from the quadrant start
  ("NE 45°", "SW 12°"), with exact cardinals reported as "N  0°".

Usage:
    formatter = build_formatter(FormatterConfig(mode="quadrant"))
    formatter.display(135.0)  # "SE 45°"
"""

import logging
import math
from typing import Optional

from compass.core.heading.update_throttle import rounded_heading
from compass.utils.config_sections import FormatterConfig, load_formatter_config

log = logging.getLogger(__name__)

SIXTEEN_POINT_ABBREVIATIONS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)

SIXTEEN_POINT_NAMES = {
    "N": "North",
    "NNE": "North-Northeast",
    "NE": "Northeast",
    "ENE": "East-Northeast",
    "E": "East",
    "ESE": "East-Southeast",
    "SE": "Southeast",
    "SSE": "South-Southeast",
    "S": "South",
    "SSW": "South-Southwest",
    "SW": "Southwest",
    "WSW": "West-Southwest",
    "W": "West",
    "WNW": "West-Northwest",
    "NW": "Northwest",
    "NNW": "North-Northwest",
}

CARDINALS = {0: "N", 90: "E", 180: "S", 270: "W"}
QUADRANTS = ("NE", "SE", "SW", "NW")


class SixteenPointFormatter:
    """16-point compass rose, North at index 0, clockwise."""

    mode = "sixteen_point"
    step = 22.5

    def __init__(self, degree_sign: str = "°") -> None:
        self.degree_sign = degree_sign

    def index(self, degrees: float) -> int:
        """
        Nearest compass point index (0-15).

        Exact half points round down: 11.25° is North, 348.75° is
        North-Northwest.
        """
        return int(math.ceil(degrees / self.step - 0.5)) % 16

    def abbreviation(self, degrees: float) -> str:
        return SIXTEEN_POINT_ABBREVIATIONS[self.index(degrees)]

    def format(self, degrees: float) -> str:
        """Full direction name, e.g. "North-Northeast"."""
        abbr = self.abbreviation(degrees)
        return SIXTEEN_POINT_NAMES.get(abbr, abbr)

    def display(self, degrees: float) -> str:
        return f"{rounded_heading(degrees)}{self.degree_sign} {self.format(degrees)}"


class QuadrantFormatter:
    """Quadrant + offset notation ("NE 45°")."""

    mode = "quadrant"

    def __init__(self, degree_sign: str = "°") -> None:
        self.degree_sign = degree_sign

    def format(self, degrees: float) -> str:
        heading = rounded_heading(degrees)

        if heading in CARDINALS:
            token, offset = CARDINALS[heading], 0
        else:
            token, offset = QUADRANTS[heading // 90], heading % 90

        return f"{token:<2} {offset}{self.degree_sign}"

    def display(self, degrees: float) -> str:
        return self.format(degrees)


FORMATTERS = {
    SixteenPointFormatter.mode: SixteenPointFormatter,
    QuadrantFormatter.mode: QuadrantFormatter,
}


def build_formatter(config: Optional[FormatterConfig] = None):
    """
    Create the formatter selected by configuration.

    Raises:
        ValueError: unknown formatter mode
    """
    config = config or load_formatter_config()
    mode = str(config.mode or "").strip().lower()
    if mode not in FORMATTERS:
        raise ValueError(
            f"Unknown bearing mode: {config.mode!r} (expected one of {sorted(FORMATTERS)})"
        )
    return FORMATTERS[mode](degree_sign=config.degree_sign)
