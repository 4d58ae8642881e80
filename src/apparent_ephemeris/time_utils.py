"""Time conversion wrappers around rms-julian, plus Julian century/millennium helpers."""

from __future__ import annotations

import logging
import re

import julian

from apparent_ephemeris.config import get_leapsecs_path
from apparent_ephemeris.constants import (
    DAYS_PER_JULIAN_CENTURY,
    DAYS_PER_JULIAN_MILLENNIUM,
    DEFAULT_MIN_INTERVAL_SECONDS,
    J2000,
    SECONDS_PER_DAY,
    SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE,
)

logger = logging.getLogger(__name__)

# Leap seconds loaded once at first use.
_leapsecs_loaded = False

_UNIT_SECONDS = {
    'sec': 1.0,
    'min': SECONDS_PER_MINUTE,
    'hour': SECONDS_PER_HOUR,
    'day': SECONDS_PER_DAY,
}


def _ensure_leapsecs() -> None:
    """Load leap seconds if not already loaded.

    Uses the LSK named by JULIAN_LEAPSECS when set; a missing or malformed file
    falls back to the LSK bundled with rms-julian.
    """
    global _leapsecs_loaded
    if _leapsecs_loaded:
        return
    julian.set_ut_model('SPICE')
    path = get_leapsecs_path()
    if path is not None:
        try:
            julian.load_lsk(path)
            _leapsecs_loaded = True
            return
        except (OSError, KeyError, ValueError) as e:
            logger.info('Leap seconds from %s not used (%s); using bundled LSK.', path, e)
    julian.load_lsk()
    _leapsecs_loaded = True


def julian_centuries(jd: float) -> float:
    """Julian centuries of 36525 days elapsed since J2000.0."""
    return (jd - J2000) / DAYS_PER_JULIAN_CENTURY


def julian_millennia(jd: float) -> float:
    """Julian millennia elapsed since J2000.0 (the VSOP87 time argument)."""
    return (jd - J2000) / DAYS_PER_JULIAN_MILLENNIUM


def parse_datetime(string: str) -> tuple[int, float] | None:
    """Parse a UTC date/time string to (day, sec).

    Parameters:
        string: Date/time string in any format accepted by rms-julian. A
            trailing ISO 'Z' is accepted.

    Returns:
        (day, sec) where day counts days since 2000-01-01 and sec is seconds
        within that day; None on parse failure.
    """
    _ensure_leapsecs()
    candidates = [string]
    stripped = string.strip()
    if stripped.endswith(('Z', 'z')):
        candidates.append(stripped[:-1])
    if re.fullmatch(r'\d{4}-\d{2}-\d{2}', stripped):
        candidates.append(f'{stripped} 00:00:00')
    for candidate in candidates:
        try:
            day, sec = julian.day_sec_from_string(candidate)[:2]
            return (int(day), float(sec))
        except (ValueError, TypeError, LookupError, OSError):
            continue
    return None


def tai_from_day_sec(day: int, sec: float) -> float:
    """Convert UTC (day, sec) to TAI seconds."""
    _ensure_leapsecs()
    return float(julian.tai_from_day_sec(day, sec))


def day_sec_from_tai(tai: float) -> tuple[int, float]:
    """Convert TAI seconds to UTC (day, sec)."""
    _ensure_leapsecs()
    day, sec = julian.day_sec_from_tai(tai)
    return (int(day), float(sec))


def tdb_from_tai(tai: float) -> float:
    """Convert TAI to TDB seconds past J2000.0 (dynamical time)."""
    return float(julian.tdb_from_tai(tai))


def jde_from_tdb(tdb: float) -> float:
    """Convert TDB seconds past J2000.0 to a Julian Ephemeris Day."""
    return J2000 + tdb / SECONDS_PER_DAY


def jde_from_tai(tai: float) -> float:
    """Convert TAI seconds to a Julian Ephemeris Day."""
    return jde_from_tdb(tdb_from_tai(tai))


def jde_from_day_sec(day: int, sec: float) -> float:
    """Convert UTC (day, sec) to a Julian Ephemeris Day (TDB, within 2 ms of TT)."""
    return jde_from_tai(tai_from_day_sec(day, sec))


def day_sec_from_jde(jde: float) -> tuple[int, float]:
    """Convert a Julian Ephemeris Day back to UTC (day, sec)."""
    _ensure_leapsecs()
    tai = float(julian.tai_from_tdb((jde - J2000) * SECONDS_PER_DAY))
    return day_sec_from_tai(tai)


def jde_from_utc_string(string: str) -> float:
    """Parse a UTC date/time string and return its Julian Ephemeris Day.

    Raises:
        ValueError: If the string cannot be parsed.
    """
    parsed = parse_datetime(string)
    if parsed is None:
        raise ValueError(f'Invalid date/time {string!r}')
    return jde_from_day_sec(*parsed)


def ymdhms_from_day_sec(day: int, sec: float) -> tuple[int, int, int, int, int, int]:
    """Calendar fields (year, month, day, hour, minute, second) of UTC (day, sec).

    Seconds are rounded to the nearest whole second, carrying into the next day.
    """
    rounded = round(sec)
    if rounded >= SECONDS_PER_DAY:
        day += 1
        rounded = 0
    year, month, mday = julian.ymd_from_day(day)
    hour, minute, second = julian.hms_from_sec(rounded)
    return (int(year), int(month), int(mday), int(hour), int(minute), int(second))


def format_utc(day: int, sec: float) -> str:
    """Format UTC (day, sec) as 'YYYY-MM-DD HH:MM:SS'."""
    year, month, mday, hour, minute, second = ymdhms_from_day_sec(day, sec)
    return f'{year:04d}-{month:02d}-{mday:02d} {hour:02d}:{minute:02d}:{second:02d}'


def interval_seconds(
    interval: float,
    time_unit: str,
    *,
    min_seconds: float = DEFAULT_MIN_INTERVAL_SECONDS,
) -> float:
    """Length of one table step in seconds.

    Parameters:
        interval: Step size in time_unit; the sign is ignored.
        time_unit: 'sec', 'min', 'hour' or 'day', or a word starting with one
            of them (case-insensitive).
        min_seconds: Floor on the result.

    Raises:
        ValueError: If time_unit names no unit.
    """
    key = time_unit.strip().lower()
    for unit, seconds in _UNIT_SECONDS.items():
        if key.startswith(unit):
            return max(abs(interval) * seconds, min_seconds)
    raise ValueError(f'Invalid time_unit {time_unit!r}; expected one of {", ".join(_UNIT_SECONDS)}')
