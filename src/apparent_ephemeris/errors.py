"""Errors raised by the apparent-position pipeline.

Every error is terminal for a single computation. Batch callers use
``evaluate_apparent_geocentric_position`` to receive them as values instead.
"""

from __future__ import annotations


class PositionError(Exception):
    """Base class for failures of one apparent-position computation."""

    kind = 'position-error'


class InvalidInputError(PositionError, ValueError):
    """Julian Day or provider output is NaN or infinite."""

    kind = 'invalid-input'


class PoleSingularityError(PositionError, ArithmeticError):
    """Ecliptic latitude too close to a pole for the aberration formula."""

    kind = 'pole-singularity'

    def __init__(self, latitude: float) -> None:
        super().__init__(f'Ecliptic latitude {latitude!r} deg is at a pole; aberration undefined')
        self.latitude = latitude


class NonConvergenceError(PositionError, RuntimeError):
    """Light-time iteration did not settle within the iteration cap."""

    kind = 'non-convergence'

    def __init__(self, jd: float, iterations: int) -> None:
        super().__init__(
            f'Light-time iteration did not converge after {iterations} rounds at JD {jd!r}'
        )
        self.jd = jd
        self.iterations = iterations
