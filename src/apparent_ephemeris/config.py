"""Configuration: iteration cap, pole tolerance and leap-second file from environment."""

from __future__ import annotations

import logging
import os

from apparent_ephemeris.constants import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_POLE_TOLERANCE,
    MIN_ITERATIONS,
)

logger = logging.getLogger(__name__)

MAX_ITERATIONS_ENV = 'APPARENT_EPHEMERIS_MAX_ITERATIONS'
POLE_TOLERANCE_ENV = 'APPARENT_EPHEMERIS_POLE_TOLERANCE'
LEAPSECS_ENV = 'JULIAN_LEAPSECS'


def get_max_iterations() -> int:
    """Return the light-time iteration cap (env override or default).

    Returns:
        Integer cap, at least MIN_ITERATIONS. Malformed or too small values
        are logged and replaced by DEFAULT_MAX_ITERATIONS.
    """
    raw = os.environ.get(MAX_ITERATIONS_ENV, '').strip()
    if not raw:
        return DEFAULT_MAX_ITERATIONS
    try:
        value = int(raw)
    except ValueError:
        logger.warning('Ignoring %s=%r (not an integer)', MAX_ITERATIONS_ENV, raw)
        return DEFAULT_MAX_ITERATIONS
    if value < MIN_ITERATIONS:
        logger.warning(
            'Ignoring %s=%d (must be at least %d)', MAX_ITERATIONS_ENV, value, MIN_ITERATIONS
        )
        return DEFAULT_MAX_ITERATIONS
    return value


def get_pole_tolerance() -> float:
    """Return the |cos(latitude)| threshold below which aberration is singular.

    Returns:
        Positive float (env override or DEFAULT_POLE_TOLERANCE).
    """
    raw = os.environ.get(POLE_TOLERANCE_ENV, '').strip()
    if not raw:
        return DEFAULT_POLE_TOLERANCE
    try:
        value = float(raw)
    except ValueError:
        logger.warning('Ignoring %s=%r (not a number)', POLE_TOLERANCE_ENV, raw)
        return DEFAULT_POLE_TOLERANCE
    if not value > 0.0:
        logger.warning('Ignoring %s=%r (must be positive)', POLE_TOLERANCE_ENV, raw)
        return DEFAULT_POLE_TOLERANCE
    return value


def get_leapsecs_path() -> str | None:
    """Return path to a NAIF LSK leap seconds file for rms-julian, if configured.

    Returns:
        Path string from JULIAN_LEAPSECS, or None to use the LSK bundled with
        rms-julian.
    """
    path = os.environ.get(LEAPSECS_ENV, '').strip()
    return path or None
