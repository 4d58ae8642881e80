"""Apparent geocentric positions of solar-system bodies.

The pipeline resolves light time between a target and a reference body, then
applies annual aberration, the FK5 frame correction and nutation in longitude
before rotating into right ascension and declination:
- Library entry point: ``compute_apparent_geocentric_position`` (raises) and
  ``evaluate_apparent_geocentric_position`` (returns failures as values)
- Ephemeris table generator and the ``apparent-ephemeris`` CLI

Planet positions come from abridged VSOP87 series; rms-julian handles time
scales and cspyce the vector arithmetic.
"""

from apparent_ephemeris.apparent import (
    DEFAULT_CORRECTION_MODEL,
    CorrectionModel,
    EllipticalGeocentricDetails,
    PositionOutcome,
    compute_apparent_geocentric_position,
    evaluate_apparent_geocentric_position,
)
from apparent_ephemeris.errors import (
    InvalidInputError,
    NonConvergenceError,
    PoleSingularityError,
    PositionError,
)

__all__: list[str] = [
    'DEFAULT_CORRECTION_MODEL',
    'CorrectionModel',
    'EllipticalGeocentricDetails',
    'InvalidInputError',
    'NonConvergenceError',
    'PoleSingularityError',
    'PositionError',
    'PositionOutcome',
    'compute_apparent_geocentric_position',
    'evaluate_apparent_geocentric_position',
]
