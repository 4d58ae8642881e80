"""Annual aberration and FK5 frame corrections in ecliptic coordinates.

Both functions return (dlambda, dbeta) in degrees, computed from the same
input (lambda, beta); the caller applies them.
"""

from __future__ import annotations

import logging
import math

from apparent_ephemeris.config import get_pole_tolerance
from apparent_ephemeris.constants import (
    ARCSEC_PER_DEGREE,
    CONSTANT_OF_ABERRATION,
    FK5_COUPLING,
    FK5_LONGITUDE_OFFSET,
)
from apparent_ephemeris.errors import PoleSingularityError
from apparent_ephemeris.time_utils import julian_centuries

logger = logging.getLogger(__name__)

# Longitude shifts above this only occur within about 0.3 deg of a pole.
_SUSPECT_SHIFT_DEGREES = 1.0


def annual_aberration(
    longitude: float,
    latitude: float,
    *,
    sun_longitude: float,
    eccentricity: float,
    perihelion_longitude: float,
    pole_tolerance: float | None = None,
) -> tuple[float, float]:
    """Annual aberration of a body at ecliptic (longitude, latitude) (AA eq. 23.2).

    Parameters:
        longitude: Geocentric ecliptic longitude lambda, degrees.
        latitude: Geocentric ecliptic latitude beta, degrees.
        sun_longitude: Sun's true geometric longitude, degrees.
        eccentricity: Eccentricity of the Earth's orbit.
        perihelion_longitude: Longitude of the Earth's perihelion, degrees.
        pole_tolerance: Smallest usable |cos(beta)|; None uses config.

    Returns:
        (dlambda, dbeta) in degrees.

    Raises:
        PoleSingularityError: |cos(beta)| is below pole_tolerance.
    """
    tolerance = get_pole_tolerance() if pole_tolerance is None else pole_tolerance
    beta = math.radians(latitude)
    cos_beta = math.cos(beta)
    if abs(cos_beta) < tolerance:
        raise PoleSingularityError(latitude)
    sun_minus = math.radians(sun_longitude - longitude)
    peri_minus = math.radians(perihelion_longitude - longitude)
    k = CONSTANT_OF_ABERRATION
    dlambda = (-k * math.cos(sun_minus) + eccentricity * k * math.cos(peri_minus)) / cos_beta
    dbeta = -k * math.sin(beta) * (math.sin(sun_minus) - eccentricity * math.sin(peri_minus))
    dlambda /= ARCSEC_PER_DEGREE
    dbeta /= ARCSEC_PER_DEGREE
    if abs(dlambda) > _SUSPECT_SHIFT_DEGREES:
        logger.debug(
            'Aberration in longitude %.6g deg at latitude %.12g (cos %.3g) is near-pole',
            dlambda,
            latitude,
            cos_beta,
        )
    return (dlambda, dbeta)


def fk5_correction(jd: float, longitude: float, latitude: float) -> tuple[float, float]:
    """Conversion from the VSOP87 dynamical frame to FK5 (AA eq. 32.3).

    Parameters:
        jd: Julian Ephemeris Day.
        longitude: Ecliptic longitude, degrees (before this correction).
        latitude: Ecliptic latitude, degrees.

    Returns:
        (dlambda, dbeta) in degrees.
    """
    T = julian_centuries(jd)
    lp = math.radians(longitude - 1.397 * T - 0.00031 * T * T)
    cos_lp = math.cos(lp)
    sin_lp = math.sin(lp)
    dlambda = FK5_LONGITUDE_OFFSET + FK5_COUPLING * (cos_lp + sin_lp) * math.tan(
        math.radians(latitude)
    )
    dbeta = FK5_COUPLING * (cos_lp - sin_lp)
    return (dlambda / ARCSEC_PER_DEGREE, dbeta / ARCSEC_PER_DEGREE)
