"""Light-time iteration: target position as seen from the reference at one instant."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import cspyce

from apparent_ephemeris.angle_utils import wrap_degrees
from apparent_ephemeris.config import get_max_iterations
from apparent_ephemeris.constants import (
    LATITUDE_TOLERANCE_DEGREES,
    LIGHT_TIME_DAYS_PER_AU,
    LONGITUDE_TOLERANCE_DEGREES,
    MIN_ITERATIONS,
    RADIUS_TOLERANCE_AU,
)
from apparent_ephemeris.coordinates import (
    HeliocentricPosition,
    RectangularVector,
    rectangular_from_spherical,
)
from apparent_ephemeris.errors import InvalidInputError, NonConvergenceError
from apparent_ephemeris.planets.base import EphemerisProvider, heliocentric_position

logger = logging.getLogger(__name__)

# Heliocentric position of the Sun itself.
_ORIGIN = HeliocentricPosition(0.0, 0.0, 0.0)


@dataclass(frozen=True)
class LightTimeSolution:
    """Result of the light-time iteration.

    Attributes:
        offset: Target minus reference, heliocentric-ecliptic rectangular, AU.
        distance: Length of offset, AU.
        light_time: Travel time of light over distance, days (exactly k * distance).
        target: Target heliocentric position at jd - light_time (the origin
            when the reference observes the Sun).
        iterations: Number of target evaluations (0 for the Sun).
    """

    offset: RectangularVector
    distance: float
    light_time: float
    target: HeliocentricPosition
    iterations: int


def _evaluate(provider: EphemerisProvider, jd: float) -> HeliocentricPosition:
    position = heliocentric_position(provider, jd)
    if not position.is_finite():
        raise InvalidInputError(
            f'Ephemeris for {getattr(provider, "name", provider)!r} is not finite at JD {jd!r}: '
            f'{position}'
        )
    return position


def _converged(previous: HeliocentricPosition, current: HeliocentricPosition) -> bool:
    """True when all three coordinates moved less than their thresholds."""
    return (
        abs(wrap_degrees(current.longitude - previous.longitude)) < LONGITUDE_TOLERANCE_DEGREES
        and abs(current.latitude - previous.latitude) < LATITUDE_TOLERANCE_DEGREES
        and abs(current.radius_vector - previous.radius_vector) < RADIUS_TOLERANCE_AU
    )


def _solution(
    offset_array: Sequence[float], target: HeliocentricPosition, iterations: int
) -> LightTimeSolution:
    offset = RectangularVector.from_sequence(offset_array)
    distance = float(cspyce.vnorm(offset.as_list()))
    if not math.isfinite(distance):
        raise InvalidInputError(f'Distance to target is not finite: {offset}')
    return LightTimeSolution(
        offset=offset,
        distance=distance,
        light_time=LIGHT_TIME_DAYS_PER_AU * distance,
        target=target,
        iterations=iterations,
    )


def solve_light_time(
    jd: float,
    target: EphemerisProvider,
    reference: EphemerisProvider,
    *,
    reference_is_target: bool = False,
    max_iterations: int | None = None,
) -> LightTimeSolution:
    """Find the light-time corrected offset of target from reference.

    The reference is evaluated once at jd. The target is re-evaluated at
    jd - tau until its (L, B, R) changes by less than the convergence
    thresholds between two successive rounds, so at least two evaluations
    always happen.

    Parameters:
        jd: Julian Ephemeris Day of observation.
        target: Provider for the observed body (ignored when
            reference_is_target is True).
        reference: Provider for the observing body.
        reference_is_target: Observe the Sun from the reference body; the offset
            is then simply minus the reference position.
        max_iterations: Cap on target evaluations; None uses config.

    Returns:
        LightTimeSolution.

    Raises:
        InvalidInputError: jd or a provider value is NaN or infinite.
        NonConvergenceError: The cap was reached without convergence.
        ValueError: max_iterations is below the minimum of 2.
    """
    if not math.isfinite(jd):
        raise InvalidInputError(f'Julian Day must be finite, got {jd!r}')
    cap = get_max_iterations() if max_iterations is None else max_iterations
    if cap < MIN_ITERATIONS:
        raise ValueError(f'max_iterations must be at least {MIN_ITERATIONS}, got {cap}')

    reference_vector = rectangular_from_spherical(_evaluate(reference, jd)).as_list()
    if reference_is_target:
        return _solution(cspyce.vminus(reference_vector), _ORIGIN, 0)

    tau = 0.0
    previous: HeliocentricPosition | None = None
    for iteration in range(1, cap + 1):
        position = _evaluate(target, jd - tau)
        target_vector = rectangular_from_spherical(position).as_list()
        solution = _solution(cspyce.vsub(target_vector, reference_vector), position, iteration)
        tau = solution.light_time
        logger.debug(
            'Light-time round %d: L=%.8f B=%.8f R=%.9f delta=%.9f tau=%.9f',
            iteration,
            position.longitude,
            position.latitude,
            position.radius_vector,
            solution.distance,
            tau,
        )
        if previous is not None and _converged(previous, position):
            return solution
        previous = position
    raise NonConvergenceError(jd, cap)
