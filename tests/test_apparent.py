"""Tests for the apparent geocentric position pipeline."""

from __future__ import annotations

import dataclasses
import math

import numpy as np
import pytest

from apparent_ephemeris import (
    DEFAULT_CORRECTION_MODEL,
    CorrectionModel,
    InvalidInputError,
    NonConvergenceError,
    PoleSingularityError,
    compute_apparent_geocentric_position,
    evaluate_apparent_geocentric_position,
)
from apparent_ephemeris.constants import CONSTANT_OF_ABERRATION, J2000, LIGHT_TIME_DAYS_PER_AU
from apparent_ephemeris.planets import EARTH, VENUS, FixedPosition


class _Oscillator:
    name = 'oscillator'

    def __init__(self) -> None:
        self.calls = 0

    def ecliptic_longitude(self, jd: float) -> float:
        return 10.0

    def ecliptic_latitude(self, jd: float) -> float:
        return 0.0

    def radius_vector(self, jd: float) -> float:
        self.calls += 1
        return 1.0 + self.calls % 2


def test_venus_1988_mar_20() -> None:
    """Venus apparent place at JD 2447240.5 (AA example 15.a).

    The published place comes from the full VSOP87 theory. The abridged
    Appendix III series used here put RA about 1.5e-4 deg and Dec about
    0.9e-4 deg low, so the check allows 2e-4 deg.
    """
    details = compute_apparent_geocentric_position(2447240.5, VENUS)
    equatorial = details.apparent_equatorial
    assert equatorial.right_ascension_degrees == pytest.approx(41.73129, abs=2e-4)
    assert equatorial.right_ascension == pytest.approx(2.78209, abs=3e-5)
    assert equatorial.declination == pytest.approx(18.44092, abs=2e-4)


def test_venus_1992_dec_20() -> None:
    """Venus apparent place at JDE 2448976.5 (AA example 33.a)."""
    details = compute_apparent_geocentric_position(2448976.5, VENUS, EARTH)
    assert details.apparent_equatorial.right_ascension_degrees == pytest.approx(
        316.172725, abs=5e-4
    )
    assert details.apparent_equatorial.declination == pytest.approx(-18.888011, abs=5e-4)
    assert details.geocentric_distance == pytest.approx(0.910845, abs=1e-4)
    assert details.light_time == pytest.approx(0.0052606, abs=1e-5)
    assert abs(details.light_time - LIGHT_TIME_DAYS_PER_AU * details.geocentric_distance) < 1e-9


def test_sun_1992_oct_13() -> None:
    """Apparent Sun seen from the Earth (AA example 25.b)."""
    details = compute_apparent_geocentric_position(
        2448908.5, EARTH, EARTH, reference_is_target=True
    )
    assert details.apparent_ecliptic.longitude == pytest.approx(199.906060, abs=2e-4)
    assert details.apparent_equatorial.right_ascension_degrees == pytest.approx(
        198.378121, abs=2e-4
    )
    assert details.apparent_equatorial.declination == pytest.approx(-7.783817, abs=2e-4)
    assert details.geocentric_distance == pytest.approx(0.99760775, abs=1e-6)
    assert details.iterations == 0


def test_fixed_position_fixture_with_real_earth() -> None:
    """A constant Venus converges after two rounds against the series Earth."""
    venus = FixedPosition('Venus', 26.11428, -2.62070, 0.724603)
    details = compute_apparent_geocentric_position(2448976.5, venus)
    assert details.iterations == 2
    assert 0.90 < details.geocentric_distance < 0.92
    assert details.light_time == LIGHT_TIME_DAYS_PER_AU * details.geocentric_distance


def test_identical_inputs_give_identical_output() -> None:
    """Repeated calls are bit-identical."""
    first = compute_apparent_geocentric_position(2447240.5, VENUS)
    second = compute_apparent_geocentric_position(2447240.5, VENUS)
    assert first == second


def test_nutation_is_added_last_in_longitude() -> None:
    """Changing only the nutation shifts the apparent longitude by exactly that amount."""
    base = dataclasses.replace(DEFAULT_CORRECTION_MODEL, nutation_in_longitude=lambda jd: 0.0)
    shifted = dataclasses.replace(DEFAULT_CORRECTION_MODEL, nutation_in_longitude=lambda jd: 36.0)
    a = compute_apparent_geocentric_position(2447240.5, VENUS, model=base)
    b = compute_apparent_geocentric_position(2447240.5, VENUS, model=shifted)
    assert b.apparent_ecliptic.longitude - a.apparent_ecliptic.longitude == pytest.approx(
        0.01, abs=1e-9
    )
    assert b.apparent_ecliptic.latitude == a.apparent_ecliptic.latitude


def _hand_computed_place(
    jd: float, lam: float, beta: float
) -> tuple[float, float, float, float]:
    """Aberration, then FK5 on the aberrated place, then nutation, then rotation."""
    k = CONSTANT_OF_ABERRATION
    e = 0.0167
    sun = math.radians(30.0 - lam)
    peri = math.radians(102.9 - lam)
    b = math.radians(beta)
    lam += (-k * math.cos(sun) + e * k * math.cos(peri)) / math.cos(b) / 3600.0
    beta += -k * math.sin(b) * (math.sin(sun) - e * math.sin(peri)) / 3600.0

    T = (jd - J2000) / 36525.0
    lp = math.radians(lam - 1.397 * T - 0.00031 * T * T)
    tan_b = math.tan(math.radians(beta))
    dlam = (-0.09033 + 0.03916 * (math.cos(lp) + math.sin(lp)) * tan_b) / 3600.0
    dbeta = 0.03916 * (math.cos(lp) - math.sin(lp)) / 3600.0
    lam += dlam
    beta += dbeta

    lam += 10.0 / 3600.0

    eps = math.radians(23.44)
    lr = math.radians(lam)
    br = math.radians(beta)
    ra = math.degrees(
        math.atan2(math.sin(lr) * math.cos(eps) - math.tan(br) * math.sin(eps), math.cos(lr))
    )
    dec = math.degrees(
        math.asin(math.sin(br) * math.cos(eps) + math.cos(br) * math.sin(eps) * math.sin(lr))
    )
    return (lam, beta, ra % 360.0, dec)


def test_correction_order_matches_hand_computation() -> None:
    """Each correction works on the place left by the previous one."""
    jd = J2000 + 2.0 * 36525.0
    model = CorrectionModel(
        nutation_in_longitude=lambda jd: 10.0,
        true_obliquity=lambda jd: 23.44,
        sun_geometric_longitude=lambda jd: 30.0,
        eccentricity=lambda jd: 0.0167,
        longitude_of_perihelion=lambda jd: 102.9,
    )
    target = FixedPosition('Target', 100.0, 60.0, 1.5)
    origin = FixedPosition('Origin', 0.0, 0.0, 0.0)

    details = compute_apparent_geocentric_position(jd, target, origin, model=model)

    lam, beta, ra, dec = _hand_computed_place(jd, 100.0, 60.0)
    assert details.apparent_ecliptic.longitude == pytest.approx(lam, abs=1e-10)
    assert details.apparent_ecliptic.latitude == pytest.approx(beta, abs=1e-10)
    assert details.apparent_equatorial.right_ascension_degrees == pytest.approx(ra, abs=1e-10)
    assert details.apparent_equatorial.declination == pytest.approx(dec, abs=1e-10)
    assert details.geocentric_distance == pytest.approx(1.5, abs=1e-12)


def test_zero_obliquity_keeps_ecliptic_place() -> None:
    """With zero obliquity the equatorial place equals the ecliptic place."""
    model = dataclasses.replace(DEFAULT_CORRECTION_MODEL, true_obliquity=lambda jd: 0.0)
    details = compute_apparent_geocentric_position(2447240.5, VENUS, model=model)
    assert details.apparent_equatorial.right_ascension_degrees == pytest.approx(
        details.apparent_ecliptic.longitude
    )
    assert details.apparent_equatorial.declination == pytest.approx(
        details.apparent_ecliptic.latitude
    )


def test_range_invariants() -> None:
    """RA in [0, 24), Dec in [-90, 90] and longitude in [0, 360) over several years."""
    for jd in np.linspace(2447000.5, 2449000.5, 41):
        details = compute_apparent_geocentric_position(float(jd), VENUS)
        assert 0.0 <= details.apparent_equatorial.right_ascension < 24.0
        assert -90.0 <= details.apparent_equatorial.declination <= 90.0
        assert 0.0 <= details.apparent_ecliptic.longitude < 360.0


def test_body_at_ecliptic_pole_raises() -> None:
    """A target straight above the reference hits the aberration pole."""
    reference = FixedPosition('Ref', 0.0, 0.0, 1.0)
    target = FixedPosition('Above', 0.0, 45.0, 2.0**0.5)
    with pytest.raises(PoleSingularityError):
        compute_apparent_geocentric_position(2451545.0, target, reference)


def test_outcome_for_pole() -> None:
    """The batch API returns the pole error as a value."""
    reference = FixedPosition('Ref', 0.0, 0.0, 1.0)
    target = FixedPosition('Above', 0.0, 45.0, 2.0**0.5)
    outcome = evaluate_apparent_geocentric_position(2451545.0, target, reference)
    assert not outcome.ok
    assert outcome.details is None
    assert isinstance(outcome.error, PoleSingularityError)
    assert outcome.jd == 2451545.0


def test_outcome_for_nan_jd() -> None:
    """NaN Julian Days are reported as invalid input."""
    outcome = evaluate_apparent_geocentric_position(float('nan'), VENUS)
    assert isinstance(outcome.error, InvalidInputError)
    assert outcome.error.kind == 'invalid-input'


def test_outcome_for_non_convergence() -> None:
    """An oscillating provider stops at the cap and reports non-convergence."""
    target = _Oscillator()
    outcome = evaluate_apparent_geocentric_position(2451545.0, target, max_iterations=4)
    assert isinstance(outcome.error, NonConvergenceError)
    assert target.calls == 4


def test_outcome_success() -> None:
    """Successful evaluations carry details and no error."""
    outcome = evaluate_apparent_geocentric_position(2447240.5, VENUS)
    assert outcome.ok
    assert outcome.error is None
    assert outcome.details == compute_apparent_geocentric_position(2447240.5, VENUS)


def test_non_finite_series_value() -> None:
    """A correction model returning NaN is invalid input."""
    model = dataclasses.replace(DEFAULT_CORRECTION_MODEL, true_obliquity=lambda jd: float('nan'))
    with pytest.raises(InvalidInputError, match='Obliquity'):
        compute_apparent_geocentric_position(2447240.5, VENUS, model=model)
