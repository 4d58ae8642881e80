"""Input Parameters section printed ahead of a table."""

from __future__ import annotations

from typing import TextIO

from apparent_ephemeris.params import COL_NAME_TO_ID, DEFAULT_COLUMNS, EphemerisParams

_TIME_UNIT_PLURAL = {
    'sec': 'seconds',
    'min': 'minutes',
    'hour': 'hours',
    'day': 'days',
}

# First listed name of each column
_COLUMN_DISPLAY: dict[int, str] = {
    col: name for name, col in reversed(list(COL_NAME_TO_ID.items()))
}


def _w(stream: TextIO, line: str) -> None:
    stream.write(line + '\n')


def write_input_parameters(stream: TextIO, params: EphemerisParams) -> None:
    """Write the request summary for an apparent-position table.

    Parameters:
        stream: Output text stream.
        params: Table parameters to summarize.
    """
    _w(stream, 'Input Parameters')
    _w(stream, '----------------')
    _w(stream, ' ')
    _w(stream, f'     Start time: {params.start_time.strip()}')
    _w(stream, f'      Stop time: {params.stop_time.strip()}')
    interval = params.interval
    interval_s = str(int(interval)) if interval == int(interval) else str(interval)
    unit = _TIME_UNIT_PLURAL.get(params.time_unit, params.time_unit)
    _w(stream, f'       Interval: {interval_s} {unit}')
    _w(stream, f'         Target: {params.body.capitalize()}')
    _w(stream, f'      Viewpoint: {params.reference.capitalize()} center')
    columns = params.columns or list(DEFAULT_COLUMNS)
    names = ', '.join(_COLUMN_DISPLAY.get(col, str(col)) for col in columns)
    _w(stream, f'        Columns: {names}')
    _w(stream, ' ')
