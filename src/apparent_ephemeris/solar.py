"""Low-accuracy solar quantities and Earth-orbit elements used by the aberration step.

See AA chapter 25 (Sun) and p. 151 (eccentricity, perihelion).
"""

from __future__ import annotations

import math

from apparent_ephemeris.angle_utils import normalize_degrees
from apparent_ephemeris.time_utils import julian_centuries


def sun_mean_longitude(jd: float) -> float:
    """Geometric mean longitude of the Sun, mean equinox of date, degrees (AA eq. 25.2)."""
    T = julian_centuries(jd)
    return normalize_degrees(280.46646 + 36000.76983 * T + 0.0003032 * T * T)


def sun_mean_anomaly(jd: float) -> float:
    """Mean anomaly of the Sun, degrees (AA eq. 25.3)."""
    T = julian_centuries(jd)
    return normalize_degrees(357.52911 + 35999.05029 * T - 0.0001537 * T * T)


def sun_equation_of_center(jd: float) -> float:
    """Sun's equation of the center C, degrees."""
    T = julian_centuries(jd)
    M = math.radians(sun_mean_anomaly(jd))
    return (
        (1.914602 - 0.004817 * T - 0.000014 * T * T) * math.sin(M)
        + (0.019993 - 0.000101 * T) * math.sin(2.0 * M)
        + 0.000289 * math.sin(3.0 * M)
    )


def sun_geometric_longitude(jd: float) -> float:
    """True geometric longitude of the Sun (about 0.01 deg accuracy), degrees.

    Referred to the mean equinox of the date. This is the longitude the
    annual-aberration formula expects.
    """
    return normalize_degrees(sun_mean_longitude(jd) + sun_equation_of_center(jd))


def earth_orbit_eccentricity(jd: float) -> float:
    """Eccentricity of the Earth's orbit (AA eq. 25.4)."""
    T = julian_centuries(jd)
    return 0.016708634 - 0.000042037 * T - 0.0000001267 * T * T


def earth_longitude_of_perihelion(jd: float) -> float:
    """Longitude of the perihelion of the Earth's orbit, degrees (AA p. 151)."""
    T = julian_centuries(jd)
    return 102.93735 + 1.71946 * T + 0.00046 * T * T
