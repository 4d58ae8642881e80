"""CLI entry point: apparent-ephemeris position|ephemeris subcommands."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import NoReturn, cast

from apparent_ephemeris.angle_utils import sexagesimal_string
from apparent_ephemeris.apparent import compute_apparent_geocentric_position
from apparent_ephemeris.constants import DEFAULT_INTERVAL
from apparent_ephemeris.ephemeris import generate_ephemeris
from apparent_ephemeris.errors import PositionError
from apparent_ephemeris.input_params import write_input_parameters
from apparent_ephemeris.params import EphemerisParams, parse_column_spec, parse_time_unit
from apparent_ephemeris.planets import parse_body, resolve_bodies
from apparent_ephemeris.time_utils import day_sec_from_jde, format_utc, jde_from_utc_string

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = 'APPARENT_EPHEMERIS_LOG'


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or APPARENT_EPHEMERIS_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = os.environ.get(LOG_LEVEL_ENV, '').upper()
    if env_level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _position_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print the apparent position of one body (position subcommand).

    Parameters:
        parser: Argument parser (unused).
        args: Parsed args; body, reference, time or jd, max_iterations.

    Returns:
        Exit code 0 on success, 1 on error.
    """
    try:
        target, reference, reference_is_target = resolve_bodies(args.body, args.reference)
        jd = args.jd if args.jd is not None else jde_from_utc_string(args.time)
        details = compute_apparent_geocentric_position(
            jd,
            target,
            reference,
            reference_is_target=reference_is_target,
            max_iterations=args.max_iterations,
        )
    except (PositionError, ValueError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1

    equatorial = details.apparent_equatorial
    ecliptic = details.apparent_ecliptic
    ra_hms = sexagesimal_string(equatorial.right_ascension, 'hms', 2)
    dec_dms = sexagesimal_string(equatorial.declination, 'dms', 1, signed=True)
    print(f'Body:        {args.body.capitalize()} (from {args.reference.capitalize()})')
    print(f'JDE:         {jd:.6f}')
    print(f'UTC:         {format_utc(*day_sec_from_jde(jd))}')
    print(f'RA:          {ra_hms} ({equatorial.right_ascension_degrees:.6f} deg)')
    print(f'Dec:         {dec_dms} ({equatorial.declination:.6f} deg)')
    print(f'Ecl. lon:    {ecliptic.longitude:.6f} deg')
    print(f'Ecl. lat:    {ecliptic.latitude:.6f} deg')
    print(f'Distance:    {details.geocentric_distance:.8f} AU')
    print(f'Light time:  {details.light_time:.8f} days')
    return 0


def _ephemeris_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Write an apparent-position table (ephemeris subcommand).

    Parameters:
        parser: Argument parser (unused).
        args: Parsed args; body, reference, start, stop, interval, columns, output.

    Returns:
        Exit code 0 on success (bad dates become error rows), 1 on error.
    """
    params = EphemerisParams(
        body=args.body,
        start_time=args.start,
        stop_time=args.stop,
        interval=args.interval,
        time_unit=args.time_unit,
        reference=args.reference,
        columns=parse_column_spec([str(x) for x in (args.columns or [])]),
    )
    write_input_parameters(sys.stdout, params)
    try:
        if args.output is not None:
            with open(args.output, 'w') as f:
                generate_ephemeris(params, f)
        else:
            generate_ephemeris(params, sys.stdout)
    except (PositionError, ValueError, OSError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    return 0


def main() -> int:
    """Entry point for apparent-ephemeris CLI (position | ephemeris).

    Returns:
        Exit code 0 on success, 1 on failure.
    """
    parser = argparse.ArgumentParser(
        prog='apparent-ephemeris',
        description='Apparent geocentric positions of the Sun and planets.',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    pos_parser = subparsers.add_parser('position', help='Apparent position at one instant')
    pos_parser.add_argument(
        '--body', type=parse_body, required=True, help='Target body (e.g. venus, sun)'
    )
    pos_parser.add_argument(
        '--reference', type=parse_body, default='earth', help='Observing body (default earth)'
    )
    when = pos_parser.add_mutually_exclusive_group(required=True)
    when.add_argument('--time', type=str, default=None, help='UTC time (e.g. 1988-03-20 00:00)')
    when.add_argument('--jd', type=float, default=None, help='Julian Ephemeris Day')
    pos_parser.add_argument(
        '--max-iterations',
        type=int,
        default=None,
        help='Light-time iteration cap; env: APPARENT_EPHEMERIS_MAX_ITERATIONS',
    )
    pos_parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    pos_parser.set_defaults(func=_position_cmd)

    ephem_parser = subparsers.add_parser('ephemeris', help='Generate apparent-position table')
    ephem_parser.add_argument(
        '--body', type=parse_body, required=True, help='Target body (e.g. venus, sun)'
    )
    ephem_parser.add_argument(
        '--reference', type=parse_body, default='earth', help='Observing body (default earth)'
    )
    ephem_parser.add_argument('--start', type=str, required=True, help='Start time (UTC)')
    ephem_parser.add_argument('--stop', type=str, required=True, help='Stop time (UTC)')
    ephem_parser.add_argument(
        '--interval', type=float, default=DEFAULT_INTERVAL, help='Time step'
    )
    ephem_parser.add_argument(
        '--time-unit',
        type=parse_time_unit,
        default='day',
        help='sec, min, hour, or day (default day)',
    )
    ephem_parser.add_argument(
        '--columns',
        type=str,
        nargs='*',
        default=None,
        help='Column IDs or names (e.g. 1 2 radec distance)',
    )
    ephem_parser.add_argument('-o', '--output', type=str, default=None, help='Output file')
    ephem_parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')
    ephem_parser.set_defaults(func=_ephemeris_cmd)

    args = parser.parse_args()
    _configure_logging(verbose=args.verbose)
    return cast(int, args.func(parser, args))


def cli_main() -> NoReturn:
    """Entry point for console_scripts; calls main() and exits with its return code."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
