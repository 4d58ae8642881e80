"""Angle normalisation and sexagesimal formatting."""

from __future__ import annotations

import math

from apparent_ephemeris.constants import (
    ARCSEC_PER_DEGREE,
    DEGREES_PER_CIRCLE,
    HALF_CIRCLE_DEGREES,
    HOURS_PER_CIRCLE,
    QUARTER_CIRCLE_DEGREES,
)


def normalize_degrees(value: float) -> float:
    """Map an angle into [0, 360)."""
    result = math.fmod(value, DEGREES_PER_CIRCLE)
    if result < 0.0:
        result += DEGREES_PER_CIRCLE
    # fmod of a tiny negative value can round up to exactly 360.
    if result >= DEGREES_PER_CIRCLE:
        result = 0.0
    return result


def normalize_hours(value: float) -> float:
    """Map a time angle into [0, 24)."""
    result = math.fmod(value, HOURS_PER_CIRCLE)
    if result < 0.0:
        result += HOURS_PER_CIRCLE
    if result >= HOURS_PER_CIRCLE:
        result = 0.0
    return result


def normalize_latitude(value: float) -> float:
    """Fold an angle into [-90, 90] the way a latitude crosses a pole.

    91 deg becomes 89 deg and 271 deg becomes -89 deg.
    """
    result = normalize_degrees(value)
    if result > 270.0:
        return result - DEGREES_PER_CIRCLE
    if result > QUARTER_CIRCLE_DEGREES:
        return HALF_CIRCLE_DEGREES - result
    return result


def wrap_degrees(value: float) -> float:
    """Map an angle difference into [-180, 180)."""
    return normalize_degrees(value + HALF_CIRCLE_DEGREES) - HALF_CIRCLE_DEGREES


def clamp_unit(value: float) -> float:
    """Clamp to [-1, 1] before asin/acos."""
    return max(-1.0, min(1.0, value))


def sexagesimal_string(
    value: float,
    separator: str = 'dms',
    ndecimal: int = 2,
    *,
    signed: bool = False,
) -> str:
    """Format degrees (or hours) as units, minutes and seconds.

    Parameters:
        value: Angle in degrees, or hours for right ascension.
        separator: 3-character unit suffixes (e.g. 'hms' or 'dms'); anything
            shorter uses blanks.
        ndecimal: Decimal places on the seconds field.
        signed: Always emit a leading '+' or '-'.

    Returns:
        String like '02h 46m 55.51s' or '+18d 26m 27.31s'.
    """
    if len(separator) < 3:
        sep1 = sep2 = sep3 = ''
    else:
        sep1, sep2, sep3 = separator[0], separator[1], separator[2]
    negative = value < 0.0
    scale = 10**ndecimal
    # Round once on the smallest unit so 59.999s carries into the minutes.
    ticks = round(abs(value) * ARCSEC_PER_DEGREE * scale)
    whole_seconds, fraction = divmod(ticks, scale)
    total_minutes, seconds = divmod(whole_seconds, 60)
    units, minutes = divmod(total_minutes, 60)
    if ndecimal > 0:
        sec_field = f'{seconds:02d}.{fraction:0{ndecimal}d}'
    else:
        sec_field = f'{seconds:02d}'
    if signed:
        sign = '-' if negative else '+'
    else:
        sign = '-' if negative else ''
    return f'{sign}{units:02d}{sep1} {minutes:02d}{sep2} {sec_field}{sep3}'
