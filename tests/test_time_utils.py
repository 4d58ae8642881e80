"""Tests for rms-julian time wrappers and Julian epoch helpers."""

from __future__ import annotations

import pytest

from apparent_ephemeris import time_utils
from apparent_ephemeris.constants import J2000


def test_ensure_leapsecs_sets_spice_ut_model(monkeypatch: pytest.MonkeyPatch) -> None:
    """Leap-second init selects the SPICE UT model before loading the LSK."""

    calls: list[tuple[str, object]] = []

    def _set_ut_model(model: str, future: object = None) -> None:
        del future
        calls.append(('set_ut_model', model))

    def _load_lsk(path: str | None = None) -> None:
        calls.append(('load_lsk', path))

    monkeypatch.setattr('julian.set_ut_model', _set_ut_model)
    monkeypatch.setattr('julian.load_lsk', _load_lsk)
    monkeypatch.setattr('apparent_ephemeris.time_utils.get_leapsecs_path', lambda: 'dummy.tls')
    monkeypatch.setattr(time_utils, '_leapsecs_loaded', False)

    time_utils._ensure_leapsecs()

    assert calls == [('set_ut_model', 'SPICE'), ('load_lsk', 'dummy.tls')]


def test_ensure_leapsecs_falls_back_to_bundled_lsk(monkeypatch: pytest.MonkeyPatch) -> None:
    """A configured LSK that cannot be read is replaced by the bundled one."""

    paths: list[str | None] = []

    def _load_lsk(path: str | None = None) -> None:
        paths.append(path)
        if path is not None:
            raise OSError('no such file')

    monkeypatch.setattr('julian.set_ut_model', lambda model, future=None: None)
    monkeypatch.setattr('julian.load_lsk', _load_lsk)
    monkeypatch.setattr('apparent_ephemeris.time_utils.get_leapsecs_path', lambda: 'missing.tls')
    monkeypatch.setattr(time_utils, '_leapsecs_loaded', False)

    time_utils._ensure_leapsecs()
    time_utils._ensure_leapsecs()

    assert paths == ['missing.tls', None]


def test_parse_datetime_accepts_iso_z_suffix() -> None:
    """ISO-8601 trailing Z parses like the same timestamp without Z."""
    with_z = time_utils.parse_datetime('2022-08-18T00:01:47Z')
    without_z = time_utils.parse_datetime('2022-08-18T00:01:47')
    assert with_z is not None
    assert with_z == without_z


def test_parse_datetime_bare_date_is_midnight() -> None:
    """A date without a time is 00:00:00 UTC."""
    assert time_utils.parse_datetime('2000-01-02') == (1, 0.0)


def test_parse_datetime_rejects_garbage() -> None:
    """Unparseable strings give None."""
    assert time_utils.parse_datetime('not a date') is None


def test_jde_from_utc_string() -> None:
    """1988-03-20 00:00 UTC is 56.184 s of dynamical time later."""
    jde = time_utils.jde_from_utc_string('1988-03-20 00:00:00')
    assert jde == pytest.approx(2447240.5 + 56.184 / 86400.0, abs=1e-6)


def test_jde_from_utc_string_invalid() -> None:
    """Invalid strings raise ValueError."""
    with pytest.raises(ValueError, match='Invalid date/time'):
        time_utils.jde_from_utc_string('yesterday-ish')


def test_format_utc() -> None:
    """Day 0 is 2000-01-01; seconds round up into the next day."""
    assert time_utils.format_utc(0, 0.0) == '2000-01-01 00:00:00'
    assert time_utils.format_utc(0, 86399.6) == '2000-01-02 00:00:00'
    assert time_utils.format_utc(-1, 43200.4) == '1999-12-31 12:00:00'


def test_ymdhms_from_day_sec() -> None:
    assert time_utils.ymdhms_from_day_sec(0, 3723.0) == (2000, 1, 1, 1, 2, 3)


def test_day_sec_from_jde_inverts_jde_from_day_sec() -> None:
    """JDE back to UTC lands on the same day and second."""
    day, sec = time_utils.day_sec_from_jde(time_utils.jde_from_day_sec(100, 43200.0))
    assert day == 100
    assert sec == pytest.approx(43200.0, abs=1e-3)


def test_format_utc_of_jde() -> None:
    """A UTC string survives the trip through JDE."""
    jde = time_utils.jde_from_utc_string('1988-03-20 00:00:00')
    assert time_utils.format_utc(*time_utils.day_sec_from_jde(jde)) == '1988-03-20 00:00:00'


def test_julian_centuries_and_millennia() -> None:
    assert time_utils.julian_centuries(J2000) == 0.0
    assert time_utils.julian_centuries(J2000 + 36525.0) == pytest.approx(1.0)
    assert time_utils.julian_millennia(J2000 - 365250.0) == pytest.approx(-1.0)


@pytest.mark.parametrize(
    ('interval', 'unit', 'expected'),
    [
        (30.0, 'sec', 30.0),
        (2.0, 'minutes', 120.0),
        (1.5, 'hour', 5400.0),
        (-1.0, 'day', 86400.0),
        (0.1, 'sec', 1.0),
    ],
)
def test_interval_seconds(interval: float, unit: str, expected: float) -> None:
    """Units convert to seconds; negatives are made positive and tiny values floored."""
    assert time_utils.interval_seconds(interval, unit) == pytest.approx(expected)


def test_interval_seconds_bad_unit() -> None:
    with pytest.raises(ValueError, match='time_unit'):
        time_utils.interval_seconds(1.0, 'fortnight')
