"""Nutation (IAU 1980 theory) and obliquity of the ecliptic (AA chapter 22)."""

from __future__ import annotations

import numpy as np

from apparent_ephemeris.constants import ARCSEC_PER_DEGREE
from apparent_ephemeris.time_utils import julian_centuries

# Periodic terms of AA table 22.A. Columns: multiples of D, M, M', F, Omega;
# longitude sine coefficient and its T rate; obliquity cosine coefficient and
# its T rate. Coefficients are in units of 0.0001".
_NUTATION_TERMS = (
    (0, 0, 0, 0, 1, -171996, -174.2, 92025, 8.9),
    (-2, 0, 0, 2, 2, -13187, -1.6, 5736, -3.1),
    (0, 0, 0, 2, 2, -2274, -0.2, 977, -0.5),
    (0, 0, 0, 0, 2, 2062, 0.2, -895, 0.5),
    (0, 1, 0, 0, 0, 1426, -3.4, 54, -0.1),
    (0, 0, 1, 0, 0, 712, 0.1, -7, 0),
    (-2, 1, 0, 2, 2, -517, 1.2, 224, -0.6),
    (0, 0, 0, 2, 1, -386, -0.4, 200, 0),
    (0, 0, 1, 2, 2, -301, 0, 129, -0.1),
    (-2, -1, 0, 2, 2, 217, -0.5, -95, 0.3),
    (-2, 0, 1, 0, 0, -158, 0, 0, 0),
    (-2, 0, 0, 2, 1, 129, 0.1, -70, 0),
    (0, 0, -1, 2, 2, 123, 0, -53, 0),
    (2, 0, 0, 0, 0, 63, 0, 0, 0),
    (0, 0, 1, 0, 1, 63, 0.1, -33, 0),
    (2, 0, -1, 2, 2, -59, 0, 26, 0),
    (0, 0, -1, 0, 1, -58, -0.1, 32, 0),
    (0, 0, 1, 2, 1, -51, 0, 27, 0),
    (-2, 0, 2, 0, 0, 48, 0, 0, 0),
    (0, 0, -2, 2, 1, 46, 0, -24, 0),
    (2, 0, 0, 2, 2, -38, 0, 16, 0),
    (0, 0, 2, 2, 2, -31, 0, 13, 0),
    (0, 0, 2, 0, 0, 29, 0, 0, 0),
    (-2, 0, 1, 2, 2, 29, 0, -12, 0),
    (0, 0, 0, 2, 0, 26, 0, 0, 0),
    (-2, 0, 0, 2, 0, -22, 0, 0, 0),
    (0, 0, -1, 2, 1, 21, 0, -10, 0),
    (0, 2, 0, 0, 0, 17, -0.1, 0, 0),
    (2, 0, -1, 0, 1, 16, 0, -8, 0),
    (-2, 2, 0, 2, 2, -16, 0.1, 7, 0),
    (0, 1, 0, 0, 1, -15, 0, 9, 0),
    (-2, 0, 1, 0, 1, -13, 0, 7, 0),
    (0, -1, 0, 0, 1, -12, 0, 6, 0),
    (0, 0, 2, -2, 0, 11, 0, 0, 0),
    (2, 0, -1, 2, 1, -10, 0, 5, 0),
    (2, 0, 1, 2, 2, -8, 0, 3, 0),
    (0, 1, 0, 2, 2, 7, 0, -3, 0),
    (-2, 1, 1, 0, 0, -7, 0, 0, 0),
    (0, -1, 0, 2, 2, -7, 0, 3, 0),
    (2, 0, 0, 2, 1, -7, 0, 3, 0),
    (2, 0, 1, 0, 0, 6, 0, 0, 0),
    (-2, 0, 2, 2, 2, 6, 0, -3, 0),
    (-2, 0, 1, 2, 1, 6, 0, -3, 0),
    (2, 0, -2, 0, 1, -6, 0, 3, 0),
    (2, 0, 0, 0, 1, -6, 0, 3, 0),
    (0, -1, 1, 0, 0, 5, 0, 0, 0),
    (-2, -1, 0, 2, 1, -5, 0, 3, 0),
    (-2, 0, 0, 0, 1, -5, 0, 3, 0),
    (0, 0, 2, 2, 1, -5, 0, 3, 0),
    (-2, 0, 2, 0, 1, 4, 0, 0, 0),
    (-2, 1, 0, 2, 1, 4, 0, 0, 0),
    (0, 0, 1, -2, 0, 4, 0, 0, 0),
    (-1, 0, 1, 0, 0, -4, 0, 0, 0),
    (-2, 1, 0, 0, 0, -4, 0, 0, 0),
    (1, 0, 0, 0, 0, -4, 0, 0, 0),
    (0, 0, 1, 2, 0, 3, 0, 0, 0),
    (0, 0, -2, 2, 2, -3, 0, 0, 0),
    (-1, -1, 1, 0, 0, -3, 0, 0, 0),
    (0, 1, 1, 0, 0, -3, 0, 0, 0),
    (0, -1, 1, 2, 2, -3, 0, 0, 0),
    (2, -1, -1, 2, 2, -3, 0, 0, 0),
    (0, 0, 3, 2, 2, -3, 0, 0, 0),
    (2, -1, 0, 2, 2, -3, 0, 0, 0),
)

_TABLE = np.array(_NUTATION_TERMS, dtype=np.float64)
_TABLE.flags.writeable = False
_MULTIPLES = _TABLE[:, :5]
_LONGITUDE_COEFFS = _TABLE[:, 5:7]
_OBLIQUITY_COEFFS = _TABLE[:, 7:9]

_TERM_UNIT_ARCSEC = 1e-4


def fundamental_arguments(T: float) -> np.ndarray:
    """Delaunay arguments D, M, M', F, Omega in degrees at T centuries (AA p. 144)."""
    T2 = T * T
    T3 = T2 * T
    return np.array(
        [
            297.85036 + 445267.111480 * T - 0.0019142 * T2 + T3 / 189474.0,
            357.52772 + 35999.050340 * T - 0.0001603 * T2 - T3 / 300000.0,
            134.96298 + 477198.867398 * T + 0.0086972 * T2 + T3 / 56250.0,
            93.27191 + 483202.017538 * T - 0.0036825 * T2 + T3 / 327270.0,
            125.04452 - 1934.136261 * T + 0.0020708 * T2 + T3 / 450000.0,
        ]
    )


def _term_arguments(T: float) -> np.ndarray:
    """Argument of every periodic term, radians."""
    return np.radians(_MULTIPLES @ fundamental_arguments(T))


def nutation_in_longitude(jd: float) -> float:
    """Nutation in longitude (Delta psi), arcseconds."""
    T = julian_centuries(jd)
    amplitudes = _LONGITUDE_COEFFS[:, 0] + _LONGITUDE_COEFFS[:, 1] * T
    return float(np.sum(amplitudes * np.sin(_term_arguments(T)))) * _TERM_UNIT_ARCSEC


def nutation_in_obliquity(jd: float) -> float:
    """Nutation in obliquity (Delta epsilon), arcseconds."""
    T = julian_centuries(jd)
    amplitudes = _OBLIQUITY_COEFFS[:, 0] + _OBLIQUITY_COEFFS[:, 1] * T
    return float(np.sum(amplitudes * np.cos(_term_arguments(T)))) * _TERM_UNIT_ARCSEC


# Laskar's expression (AA eq. 22.3), arcseconds per power of U = T / 100.
_LASKAR_COEFFS_ARCSEC = (
    84381.448,
    -4680.93,
    -1.55,
    1999.25,
    -51.38,
    -249.67,
    -39.05,
    7.12,
    27.87,
    5.79,
    2.45,
)


def mean_obliquity_of_ecliptic(jd: float) -> float:
    """Mean obliquity of the ecliptic (epsilon 0), degrees.

    Laskar's polynomial; valid over 10000 years either side of J2000.
    """
    U = julian_centuries(jd) / 100.0
    value = 0.0
    for coeff in reversed(_LASKAR_COEFFS_ARCSEC):
        value = value * U + coeff
    return value / ARCSEC_PER_DEGREE


def true_obliquity_of_ecliptic(jd: float) -> float:
    """True obliquity (mean obliquity plus nutation in obliquity), degrees."""
    return mean_obliquity_of_ecliptic(jd) + nutation_in_obliquity(jd) / ARCSEC_PER_DEGREE

