"""Apparent-position table generator: one row per time step."""

from __future__ import annotations

import logging
from typing import TextIO

from apparent_ephemeris.angle_utils import sexagesimal_string
from apparent_ephemeris.apparent import (
    EllipticalGeocentricDetails,
    PositionOutcome,
    evaluate_apparent_geocentric_position,
)
from apparent_ephemeris.constants import MAX_TABLE_STEPS
from apparent_ephemeris.params import (
    COL_DISTANCE,
    COL_ECLIPTIC,
    COL_JD,
    COL_LIGHT_TIME,
    COL_RADEC,
    COL_RADEG,
    COL_YMDHMS,
    DEFAULT_COLUMNS,
    EphemerisParams,
)
from apparent_ephemeris.planets import resolve_bodies
from apparent_ephemeris.record import Record
from apparent_ephemeris.time_utils import (
    day_sec_from_tai,
    interval_seconds,
    jde_from_tai,
    parse_datetime,
    tai_from_day_sec,
    ymdhms_from_day_sec,
)

logger = logging.getLogger(__name__)

# Header text and width of each field a column writes.
_COLUMN_FIELDS: dict[int, tuple[tuple[str, int], ...]] = {
    COL_JD: (('jde', 15),),
    COL_YMDHMS: (('year mo dy hr mi sc', 19),),
    COL_RADEC: (('ra_hms', 14), ('dec_dms', 14)),
    COL_RADEG: (('ra_deg', 11), ('dec_deg', 11)),
    COL_ECLIPTIC: (('ecl_lon', 11), ('ecl_lat', 11)),
    COL_DISTANCE: (('delta_au', 12),),
    COL_LIGHT_TIME: (('ltime_day', 12),),
}


def _step_count(tai1: float, tai2: float, dsec: float) -> int:
    """Number of rows from tai1 to tai2 inclusive at dsec spacing."""
    if tai2 < tai1:
        raise ValueError('Stop time is earlier than start time')
    ntimes = int((tai2 - tai1) / dsec) + 1
    if ntimes > MAX_TABLE_STEPS:
        raise ValueError(f'Number of time steps exceeds limit of {MAX_TABLE_STEPS}')
    return ntimes


def _ymdhms(tai: float) -> str:
    """UTC calendar date and time of tai, rounded to the nearest second."""
    year, month, mday, hour, minute, second = ymdhms_from_day_sec(*day_sec_from_tai(tai))
    return f'{year:4d}{month:3d}{mday:3d}{hour:3d}{minute:3d}{second:3d}'


def _column_values(col: int, details: EllipticalGeocentricDetails) -> list[str]:
    equatorial = details.apparent_equatorial
    ecliptic = details.apparent_ecliptic
    if col == COL_RADEC:
        return [
            sexagesimal_string(equatorial.right_ascension, 'hms', 2),
            sexagesimal_string(equatorial.declination, 'dms', 1, signed=True),
        ]
    if col == COL_RADEG:
        return [
            f'{equatorial.right_ascension_degrees:.6f}',
            f'{equatorial.declination:.6f}',
        ]
    if col == COL_ECLIPTIC:
        return [f'{ecliptic.longitude:.6f}', f'{ecliptic.latitude:.6f}']
    if col == COL_DISTANCE:
        return [f'{details.geocentric_distance:.8f}']
    if col == COL_LIGHT_TIME:
        return [f'{details.light_time:.8f}']
    raise ValueError(f'Unknown column {col}')


def _write_header(rec: Record, columns: list[int], out: TextIO) -> None:
    for col in columns:
        for header, width in _COLUMN_FIELDS[col]:
            rec.append(header, width)
    rec.write(out)


def _write_row(
    rec: Record,
    columns: list[int],
    tai: float,
    outcome: PositionOutcome,
    out: TextIO,
) -> None:
    error_written = False
    for col in columns:
        if col == COL_JD:
            rec.append(f'{outcome.jd:.6f}', _COLUMN_FIELDS[COL_JD][0][1])
        elif col == COL_YMDHMS:
            rec.append(_ymdhms(tai))
        elif outcome.details is not None:
            for (_, width), value in zip(_COLUMN_FIELDS[col], _column_values(col, outcome.details)):
                rec.append(value, width)
        elif not error_written and outcome.error is not None:
            rec.append(f'*** {outcome.error.kind}: {outcome.error}')
            error_written = True
    rec.write(out)


def generate_ephemeris(
    params: EphemerisParams, output: TextIO | None = None
) -> list[PositionOutcome]:
    """Compute apparent positions from start to stop and write them as a table.

    Steps are equally spaced in TAI. Each step is converted to a Julian
    Ephemeris Day and evaluated independently; a failed step is written as an
    error row, logged, and the run continues.

    Parameters:
        params: Body, reference, time range, interval and columns.
        output: Stream for the table; None uses params.output. When both are
            None, positions are computed but nothing is written.

    Returns:
        One PositionOutcome per time step, in time order.

    Raises:
        ValueError: Invalid time, body, or interval, or too many steps.
    """
    out = output or params.output
    start_parsed = parse_datetime(params.start_time)
    stop_parsed = parse_datetime(params.stop_time)
    if start_parsed is None or stop_parsed is None:
        raise ValueError('Invalid start or stop time')
    tai1 = tai_from_day_sec(*start_parsed)
    tai2 = tai_from_day_sec(*stop_parsed)
    dsec = interval_seconds(params.interval, params.time_unit)
    ntimes = _step_count(tai1, tai2, dsec)

    target, reference, reference_is_target = resolve_bodies(params.body, params.reference)
    columns = list(params.columns) or list(DEFAULT_COLUMNS)
    logger.info(
        'Ephemeris of %s from %s: %d steps of %.0f s',
        params.body,
        params.reference,
        ntimes,
        dsec,
    )

    rec = Record()
    if out is not None:
        _write_header(rec, columns, out)

    outcomes: list[PositionOutcome] = []
    for step in range(ntimes):
        tai = tai1 + step * dsec
        outcome = evaluate_apparent_geocentric_position(
            jde_from_tai(tai),
            target,
            reference,
            reference_is_target=reference_is_target,
        )
        if outcome.error is not None:
            logger.warning(
                'Skipping JDE %.6f (%s): %s', outcome.jd, outcome.error.kind, outcome.error
            )
        if out is not None:
            _write_row(rec, columns, tai, outcome, out)
        outcomes.append(outcome)
    return outcomes
