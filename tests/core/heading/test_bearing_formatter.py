"""Tests for 16-point and quadrant-offset bearing formatters."""

from __future__ import annotations

import pytest

from compass.core.heading.bearing_formatter import (
    QuadrantFormatter,
    SixteenPointFormatter,
    SIXTEEN_POINT_ABBREVIATIONS,
    build_formatter,
)
from compass.utils import config as config_module
from compass.utils.config_sections import FormatterConfig


@pytest.fixture()
def sixteen() -> SixteenPointFormatter:
    return SixteenPointFormatter()


@pytest.fixture()
def quadrant() -> QuadrantFormatter:
    return QuadrantFormatter()


@pytest.mark.parametrize("degrees, expected", [
    (0.0, "North"),
    (90.0, "East"),
    (180.0, "South"),
    (270.0, "West"),
    (11.25, "North"),
    (11.26, "North-Northeast"),
    (22.5, "North-Northeast"),
    (45.0, "Northeast"),
    (202.5, "South-Southwest"),
    (348.75, "North-Northwest"),
    (348.76, "North"),
    (359.9, "North"),
])
def test_sixteen_point_format(sixteen, degrees, expected):
    assert sixteen.format(degrees) == expected


def test_sixteen_point_covers_every_direction_in_order(sixteen):
    abbreviations = [sixteen.abbreviation(i * 22.5) for i in range(16)]
    assert abbreviations == list(SIXTEEN_POINT_ABBREVIATIONS)


def test_sixteen_point_display_includes_integer_heading(sixteen):
    assert sixteen.display(44.6) == "45° Northeast"
    assert sixteen.display(359.7) == "0° North"


@pytest.mark.parametrize("degrees, expected", [
    (0.0, "N  0°"),
    (90.0, "E  0°"),
    (180.0, "S  0°"),
    (270.0, "W  0°"),
    (45.0, "NE 45°"),
    (135.0, "SE 45°"),
    (225.0, "SW 45°"),
    (359.0, "NW 89°"),
    (1.0, "NE 1°"),
    (91.0, "SE 1°"),
    (359.6, "N  0°"),
])
def test_quadrant_format(quadrant, degrees, expected):
    assert quadrant.format(degrees) == expected


def test_quadrant_display_matches_format(quadrant):
    assert quadrant.display(200.0) == quadrant.format(200.0) == "SW 20°"


def test_custom_degree_sign():
    assert QuadrantFormatter(degree_sign=" deg").format(45.0) == "NE 45 deg"


def test_build_formatter_selects_mode():
    assert isinstance(build_formatter(FormatterConfig(mode="quadrant")), QuadrantFormatter)
    assert isinstance(build_formatter(FormatterConfig(mode="sixteen_point")), SixteenPointFormatter)


def test_build_formatter_uses_config_default(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(config_module.Config, "BEARING_MODE", "quadrant", raising=False)
    assert isinstance(build_formatter(), QuadrantFormatter)


def test_build_formatter_rejects_unknown_mode():
    with pytest.raises(ValueError):
        build_formatter(FormatterConfig(mode="eight_point"))
