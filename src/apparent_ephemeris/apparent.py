"""Apparent geocentric position of a body: light time, aberration, FK5, nutation, obliquity.

The corrections are applied strictly in that order. Each stage works on the
previous stage's (lambda, beta) and on the series quantities supplied by a
``CorrectionModel``.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable

from apparent_ephemeris.angle_utils import normalize_degrees
from apparent_ephemeris.constants import ARCSEC_PER_DEGREE, QUARTER_CIRCLE_DEGREES
from apparent_ephemeris.coordinates import (
    EclipticCoordinates,
    EquatorialCoordinates,
    equatorial_from_ecliptic,
    spherical_from_rectangular,
)
from apparent_ephemeris.corrections import annual_aberration, fk5_correction
from apparent_ephemeris.errors import InvalidInputError, PositionError
from apparent_ephemeris.light_time import solve_light_time
from apparent_ephemeris.nutation import nutation_in_longitude, true_obliquity_of_ecliptic
from apparent_ephemeris.planets import EARTH
from apparent_ephemeris.planets.base import EphemerisProvider
from apparent_ephemeris.solar import (
    earth_longitude_of_perihelion,
    earth_orbit_eccentricity,
    sun_geometric_longitude,
)

logger = logging.getLogger(__name__)

SeriesFunction = Callable[[float], float]


@dataclass(frozen=True)
class CorrectionModel:
    """Series functions of jd consumed by the correction chain.

    Attributes:
        nutation_in_longitude: Delta psi, arcseconds.
        true_obliquity: True obliquity of the ecliptic, degrees.
        sun_geometric_longitude: Sun's true geometric longitude, degrees.
        eccentricity: Eccentricity of the Earth's orbit.
        longitude_of_perihelion: Longitude of the Earth's perihelion, degrees.
    """

    nutation_in_longitude: SeriesFunction
    true_obliquity: SeriesFunction
    sun_geometric_longitude: SeriesFunction
    eccentricity: SeriesFunction
    longitude_of_perihelion: SeriesFunction


DEFAULT_CORRECTION_MODEL = CorrectionModel(
    nutation_in_longitude=nutation_in_longitude,
    true_obliquity=true_obliquity_of_ecliptic,
    sun_geometric_longitude=sun_geometric_longitude,
    eccentricity=earth_orbit_eccentricity,
    longitude_of_perihelion=earth_longitude_of_perihelion,
)


@dataclass(frozen=True)
class EllipticalGeocentricDetails:
    """Apparent position of a body at one instant.

    Attributes:
        light_time: Light travel time, days.
        geocentric_distance: Distance from the reference body, AU.
        apparent_ecliptic: Apparent ecliptic longitude/latitude, degrees.
        apparent_equatorial: Apparent right ascension (hours) and declination.
        iterations: Target evaluations used by the light-time solver.
    """

    light_time: float
    geocentric_distance: float
    apparent_ecliptic: EclipticCoordinates
    apparent_equatorial: EquatorialCoordinates
    iterations: int = 0


@dataclass(frozen=True)
class PositionOutcome:
    """Result of one evaluation for batch use: details or the error, never both."""

    jd: float
    details: EllipticalGeocentricDetails | None = None
    error: PositionError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _series_value(name: str, value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise InvalidInputError(f'{name} is not finite: {value!r}')
    return value


def compute_apparent_geocentric_position(
    jd: float,
    target: EphemerisProvider,
    reference: EphemerisProvider | None = None,
    *,
    reference_is_target: bool = False,
    model: CorrectionModel | None = None,
    max_iterations: int | None = None,
) -> EllipticalGeocentricDetails:
    """Apparent ecliptic and equatorial position of target seen from reference.

    Parameters:
        jd: Julian Ephemeris Day.
        target: Provider of the observed body. Ignored when reference_is_target
            is True.
        reference: Provider of the observing body; None means the Earth.
        reference_is_target: Compute the Sun as seen from the reference.
        model: Series functions for the corrections; None uses
            DEFAULT_CORRECTION_MODEL.
        max_iterations: Light-time iteration cap; None uses config.

    Returns:
        EllipticalGeocentricDetails.

    Raises:
        InvalidInputError: jd, a provider value or a series value is not finite.
        NonConvergenceError: The light-time iteration hit its cap.
        PoleSingularityError: The body sits at an ecliptic pole.
    """
    ref = EARTH if reference is None else reference
    series = DEFAULT_CORRECTION_MODEL if model is None else model

    solution = solve_light_time(
        jd,
        target,
        ref,
        reference_is_target=reference_is_target,
        max_iterations=max_iterations,
    )
    geometric = spherical_from_rectangular(solution.offset)
    lam = geometric.longitude
    beta = geometric.latitude

    dlam, dbeta = annual_aberration(
        lam,
        beta,
        sun_longitude=_series_value('Sun longitude', series.sun_geometric_longitude(jd)),
        eccentricity=_series_value('Eccentricity', series.eccentricity(jd)),
        perihelion_longitude=_series_value('Perihelion', series.longitude_of_perihelion(jd)),
    )
    lam += dlam
    beta += dbeta

    dlam, dbeta = fk5_correction(jd, lam, beta)
    lam += dlam
    beta += dbeta

    lam += _series_value('Nutation', series.nutation_in_longitude(jd)) / ARCSEC_PER_DEGREE

    ecliptic = EclipticCoordinates(
        longitude=normalize_degrees(lam),
        latitude=max(-QUARTER_CIRCLE_DEGREES, min(QUARTER_CIRCLE_DEGREES, beta)),
    )
    equatorial = equatorial_from_ecliptic(
        ecliptic, _series_value('Obliquity', series.true_obliquity(jd))
    )
    logger.debug(
        'JD %.6f: lambda=%.7f beta=%.7f RA=%.7fh Dec=%.7f delta=%.9f',
        jd,
        ecliptic.longitude,
        ecliptic.latitude,
        equatorial.right_ascension,
        equatorial.declination,
        solution.distance,
    )
    return EllipticalGeocentricDetails(
        light_time=solution.light_time,
        geocentric_distance=solution.distance,
        apparent_ecliptic=ecliptic,
        apparent_equatorial=equatorial,
        iterations=solution.iterations,
    )


def evaluate_apparent_geocentric_position(
    jd: float,
    target: EphemerisProvider,
    reference: EphemerisProvider | None = None,
    *,
    reference_is_target: bool = False,
    model: CorrectionModel | None = None,
    max_iterations: int | None = None,
) -> PositionOutcome:
    """Same as compute_apparent_geocentric_position but returns failures as values.

    A PositionError is returned in ``PositionOutcome.error`` so a caller stepping
    through many dates can report one bad date and keep going.
    """
    try:
        details = compute_apparent_geocentric_position(
            jd,
            target,
            reference,
            reference_is_target=reference_is_target,
            model=model,
            max_iterations=max_iterations,
        )
    except PositionError as e:
        logger.debug('JD %r: %s (%s)', jd, e, e.kind)
        return PositionOutcome(jd=jd, error=e)
    return PositionOutcome(jd=jd, details=details)
