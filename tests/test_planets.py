"""Tests for VSOP87 providers and the body-name registry."""

from __future__ import annotations

import pytest

from apparent_ephemeris import planets
from apparent_ephemeris.planets import (
    EARTH,
    VENUS,
    EphemerisProvider,
    FixedPosition,
    available_bodies,
    get_provider,
    heliocentric_position,
    parse_body,
    resolve_bodies,
)
from apparent_ephemeris.planets.base import PeriodicSeries


def test_venus_heliocentric_1992_dec_20() -> None:
    """Venus at JDE 2448976.5 (AA example 32.a)."""
    assert VENUS.ecliptic_longitude(2448976.5) == pytest.approx(26.11428, abs=5e-5)
    assert VENUS.ecliptic_latitude(2448976.5) == pytest.approx(-2.62070, abs=5e-5)
    assert VENUS.radius_vector(2448976.5) == pytest.approx(0.724603, abs=5e-6)


def test_earth_heliocentric_1992_oct_13() -> None:
    """Earth at JDE 2448908.5 (AA example 25.b)."""
    assert EARTH.ecliptic_longitude(2448908.5) == pytest.approx(19.907372, abs=5e-5)
    assert EARTH.ecliptic_latitude(2448908.5) == pytest.approx(-0.000179, abs=1e-5)
    assert EARTH.radius_vector(2448908.5) == pytest.approx(0.99760775, abs=1e-6)


def test_earth_heliocentric_1992_dec_20() -> None:
    """Earth at JDE 2448976.5 (AA example 33.a)."""
    position = heliocentric_position(EARTH, 2448976.5)
    assert position.longitude == pytest.approx(88.35704, abs=5e-5)
    assert position.latitude == pytest.approx(0.00014, abs=1e-5)
    assert position.radius_vector == pytest.approx(0.983824, abs=5e-6)


def test_longitude_is_normalised() -> None:
    """Provider longitudes are always in [0, 360)."""
    for jd in (2400000.5, 2447240.5, 2451545.0, 2460000.5):
        assert 0.0 <= VENUS.ecliptic_longitude(jd) < 360.0
        assert 0.0 <= EARTH.ecliptic_longitude(jd) < 360.0


def test_periodic_series_evaluation() -> None:
    """Series sum is sum_i tau**i * sum(A cos(B + C tau)) / 1e8."""
    series = PeriodicSeries.from_terms(((1e8, 0.0, 0.0),), ((2e8, 0.0, 0.0),))
    assert series.evaluate(0.0) == pytest.approx(1.0)
    assert series.evaluate(0.5) == pytest.approx(2.0)


def test_periodic_series_is_read_only() -> None:
    """Coefficient arrays owned by a provider are immutable."""
    with pytest.raises(ValueError):
        VENUS.longitude.powers[0][0, 0] = 0.0


def test_fixed_position_provider() -> None:
    """FixedPosition returns the same coordinates at every jd."""
    fixed = FixedPosition('Venus', 26.11428, -2.62070, 0.724603)
    for jd in (0.0, 2448976.5, -1e6):
        assert heliocentric_position(fixed, jd).longitude == 26.11428
    assert fixed.ecliptic_latitude(1.0) == -2.62070
    assert fixed.radius_vector(1.0) == 0.724603


def test_providers_satisfy_protocol() -> None:
    """Series and fixed providers both implement EphemerisProvider."""
    assert isinstance(VENUS, EphemerisProvider)
    assert isinstance(FixedPosition('x', 0.0, 0.0, 1.0), EphemerisProvider)


def test_parse_body() -> None:
    """Names are case-insensitive and 'sun' is accepted."""
    assert parse_body(' Venus ') == 'venus'
    assert parse_body('SUN') == 'sun'
    assert 'sun' in available_bodies()
    with pytest.raises(ValueError, match='Unknown body'):
        parse_body('pluto')


def test_get_provider() -> None:
    """Registry lookups return providers for planets only."""
    assert get_provider('Earth') is EARTH
    assert get_provider('venus') is VENUS
    assert get_provider('sun') is None


def test_resolve_bodies() -> None:
    """The Sun maps to the reference observing itself."""
    assert resolve_bodies('venus') == (VENUS, EARTH, False)
    assert resolve_bodies('sun', 'earth') == (EARTH, EARTH, True)
    assert resolve_bodies('earth', 'venus') == (EARTH, VENUS, False)
    with pytest.raises(ValueError, match='Sun cannot be the reference'):
        resolve_bodies('venus', 'sun')
    with pytest.raises(ValueError, match='both'):
        resolve_bodies('earth', 'earth')


def test_resolve_bodies_uses_registry(monkeypatch: pytest.MonkeyPatch) -> None:
    """Resolution goes through the provider registry."""
    replacement = FixedPosition('Venus', 26.11428, -2.62070, 0.724603)
    monkeypatch.setitem(planets._PROVIDERS, 'venus', replacement)
    target, reference, reference_is_target = resolve_bodies('Venus')
    assert target is replacement
    assert reference is EARTH
    assert not reference_is_target
