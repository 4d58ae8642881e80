"""Ephemeris provider interface and the VSOP87 series provider."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol, Sequence, runtime_checkable

import numpy as np

from apparent_ephemeris.angle_utils import normalize_degrees
from apparent_ephemeris.constants import VSOP87_SCALE
from apparent_ephemeris.coordinates import HeliocentricPosition
from apparent_ephemeris.time_utils import julian_millennia


@runtime_checkable
class EphemerisProvider(Protocol):
    """Heliocentric ecliptic position of one body, mean equinox of date.

    Every method is a pure function of the Julian Ephemeris Day and must accept
    any jd, including values that decrease between calls.
    """

    name: str

    def ecliptic_longitude(self, jd: float) -> float:
        """Heliocentric longitude L, degrees."""
        ...

    def ecliptic_latitude(self, jd: float) -> float:
        """Heliocentric latitude B, degrees."""
        ...

    def radius_vector(self, jd: float) -> float:
        """Distance from the Sun R, AU."""
        ...


def _as_term_array(terms: Sequence[Sequence[float]]) -> np.ndarray:
    array = np.array(terms, dtype=np.float64).reshape(-1, 3)
    array.flags.writeable = False
    return array


@dataclass(frozen=True, eq=False)
class PeriodicSeries:
    """One coordinate of a VSOP87 theory: a polynomial in tau of cosine sums.

    ``powers[i]`` holds the (A, B, C) terms multiplying tau**i. The value is
    sum_i tau**i * sum(A cos(B + C tau)) / 1e8.
    """

    powers: tuple[np.ndarray, ...]

    @classmethod
    def from_terms(cls, *powers: Sequence[Sequence[float]]) -> PeriodicSeries:
        """Build from nested (A, B, C) sequences, lowest power of tau first."""
        return cls(tuple(_as_term_array(terms) for terms in powers))

    def evaluate(self, tau: float) -> float:
        """Series value at tau Julian millennia from J2000 (radians or AU)."""
        total = 0.0
        for terms in reversed(self.powers):
            partial = float(np.sum(terms[:, 0] * np.cos(terms[:, 1] + terms[:, 2] * tau)))
            total = total * tau + partial
        return total / VSOP87_SCALE


@dataclass(frozen=True, eq=False)
class Vsop87Planet:
    """Abridged VSOP87 provider (AA Appendix III) for one planet."""

    name: str
    longitude: PeriodicSeries
    latitude: PeriodicSeries
    radius: PeriodicSeries

    def ecliptic_longitude(self, jd: float) -> float:
        return normalize_degrees(math.degrees(self.longitude.evaluate(julian_millennia(jd))))

    def ecliptic_latitude(self, jd: float) -> float:
        return math.degrees(self.latitude.evaluate(julian_millennia(jd)))

    def radius_vector(self, jd: float) -> float:
        return self.radius.evaluate(julian_millennia(jd))


@dataclass(frozen=True)
class FixedPosition:
    """Provider that returns the same heliocentric position at every jd."""

    name: str
    longitude: float
    latitude: float
    radius: float

    def ecliptic_longitude(self, jd: float) -> float:
        return self.longitude

    def ecliptic_latitude(self, jd: float) -> float:
        return self.latitude

    def radius_vector(self, jd: float) -> float:
        return self.radius


def heliocentric_position(provider: EphemerisProvider, jd: float) -> HeliocentricPosition:
    """Evaluate all three coordinates of a provider at jd."""
    return HeliocentricPosition(
        longitude=float(provider.ecliptic_longitude(jd)),
        latitude=float(provider.ecliptic_latitude(jd)),
        radius_vector=float(provider.radius_vector(jd)),
    )
