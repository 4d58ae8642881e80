"""Tests for angle normalisation and sexagesimal formatting."""

from __future__ import annotations

import pytest

from apparent_ephemeris.angle_utils import (
    clamp_unit,
    normalize_degrees,
    normalize_hours,
    normalize_latitude,
    sexagesimal_string,
    wrap_degrees,
)


@pytest.mark.parametrize(
    ('value', 'expected'),
    [(-30.0, 330.0), (720.5, 0.5), (360.0, 0.0), (0.0, 0.0), (359.5, 359.5)],
)
def test_normalize_degrees(value: float, expected: float) -> None:
    """Angles map into [0, 360)."""
    assert normalize_degrees(value) == pytest.approx(expected)


def test_normalize_degrees_tiny_negative_stays_below_360() -> None:
    """A tiny negative angle never normalises to exactly 360."""
    result = normalize_degrees(-1e-15)
    assert 0.0 <= result < 360.0


def test_normalize_hours() -> None:
    """Time angles map into [0, 24)."""
    assert normalize_hours(25.0) == pytest.approx(1.0)
    assert normalize_hours(-1.0) == pytest.approx(23.0)
    assert normalize_hours(24.0) == 0.0


@pytest.mark.parametrize(
    ('value', 'expected'),
    [(91.0, 89.0), (271.0, -89.0), (-91.0, -89.0), (45.0, 45.0), (-45.0, -45.0)],
)
def test_normalize_latitude_folds_over_pole(value: float, expected: float) -> None:
    """Latitudes past a pole fold back into [-90, 90]."""
    assert normalize_latitude(value) == pytest.approx(expected)


def test_wrap_degrees() -> None:
    """Differences wrap into [-180, 180)."""
    assert wrap_degrees(359.0) == pytest.approx(-1.0)
    assert wrap_degrees(-181.0) == pytest.approx(179.0)
    assert wrap_degrees(180.0) == pytest.approx(-180.0)
    assert wrap_degrees(1e-6) == pytest.approx(1e-6)


def test_clamp_unit() -> None:
    """Values just outside [-1, 1] are clamped for asin."""
    assert clamp_unit(1.0000001) == 1.0
    assert clamp_unit(-1.5) == -1.0
    assert clamp_unit(0.25) == 0.25


def test_sexagesimal_hours() -> None:
    """Right ascension in hours formats with h/m/s suffixes."""
    assert sexagesimal_string(2.782086, 'hms', 2) == '02h 46m 55.51s'


def test_sexagesimal_signed_declination() -> None:
    """Signed declination keeps a leading plus sign."""
    assert sexagesimal_string(18.44092, 'dms', 1, signed=True) == '+18d 26m 27.3s'
    assert sexagesimal_string(-0.5, 'dms', 0) == '-00d 30m 00s'


def test_sexagesimal_carries_rounded_seconds() -> None:
    """Seconds that round up to 60 carry into minutes and units."""
    assert sexagesimal_string(0.999999999, 'dms', 2) == '01d 00m 00.00s'


def test_sexagesimal_without_suffixes() -> None:
    """A short separator string produces bare numbers."""
    assert sexagesimal_string(1.5, '', 0) == '01 30 00'
