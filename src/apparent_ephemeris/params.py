"""Parameters and column selection for apparent-position tables."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TextIO

from apparent_ephemeris.constants import DEFAULT_INTERVAL

logger = logging.getLogger(__name__)

# Table column IDs
COL_JD = 1
COL_YMDHMS = 2
COL_RADEC = 3
COL_RADEG = 4
COL_ECLIPTIC = 5
COL_DISTANCE = 6
COL_LIGHT_TIME = 7

ALL_COLUMNS = (
    COL_JD,
    COL_YMDHMS,
    COL_RADEC,
    COL_RADEG,
    COL_ECLIPTIC,
    COL_DISTANCE,
    COL_LIGHT_TIME,
)

DEFAULT_COLUMNS = (COL_JD, COL_YMDHMS, COL_RADEC, COL_DISTANCE)

# Case-insensitive column names and aliases -> column ID
COL_NAME_TO_ID: dict[str, int] = {
    'jd': COL_JD,
    'jde': COL_JD,
    'ymdhms': COL_YMDHMS,
    'utc': COL_YMDHMS,
    'radec': COL_RADEC,
    'radeg': COL_RADEG,
    'ecliptic': COL_ECLIPTIC,
    'eclip': COL_ECLIPTIC,
    'distance': COL_DISTANCE,
    'dist': COL_DISTANCE,
    'lighttime': COL_LIGHT_TIME,
    'ltime': COL_LIGHT_TIME,
}

_TIME_UNITS = ('sec', 'min', 'hour', 'day')


def parse_column_spec(tokens: list[str]) -> list[int]:
    """Convert column tokens to column IDs.

    Parameters:
        tokens: Decimal IDs or case-insensitive names (e.g. ``jd``, ``radec``);
            commas inside a token also separate columns.

    Returns:
        List of column IDs in the given order without duplicates; unknown
        tokens are skipped (logged).
    """
    out: list[int] = []
    for token in tokens:
        for s in token.replace(',', ' ').split():
            try:
                col = int(s)
            except ValueError:
                col = COL_NAME_TO_ID.get(s.lower(), 0)
            if col not in ALL_COLUMNS:
                logger.warning(
                    'Unknown column %r; use an ID (1-%d) or one of: %s',
                    s,
                    len(ALL_COLUMNS),
                    ', '.join(COL_NAME_TO_ID),
                )
                continue
            if col not in out:
                out.append(col)
    return out


def parse_time_unit(value: str) -> str:
    """Normalize a time-unit string (any prefix of seconds/minutes/hours/days).

    Raises:
        ValueError: If the value does not name a unit.
    """
    lowered = value.strip().lower()
    for unit in _TIME_UNITS:
        if lowered.startswith(unit) or (lowered and unit.startswith(lowered)):
            return unit
    raise ValueError(f'Invalid time unit {value!r}; expected one of {", ".join(_TIME_UNITS)}')


@dataclass
class EphemerisParams:
    """Parameters for an apparent-position table."""

    body: str
    start_time: str
    stop_time: str
    interval: float = DEFAULT_INTERVAL
    time_unit: str = 'day'
    reference: str = 'earth'
    columns: list[int] = field(default_factory=lambda: list(DEFAULT_COLUMNS))
    output: TextIO | None = None
