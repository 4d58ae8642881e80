"""Coordinate types and the rectangular/spherical and ecliptic/equatorial transforms."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

import cspyce

from apparent_ephemeris.angle_utils import (
    clamp_unit,
    normalize_degrees,
    normalize_hours,
    normalize_latitude,
)
from apparent_ephemeris.constants import DEGREES_PER_HOUR_RA


@dataclass(frozen=True)
class EclipticCoordinates:
    """Ecliptic longitude [0, 360) and latitude [-90, 90], degrees."""

    longitude: float
    latitude: float


@dataclass(frozen=True)
class EquatorialCoordinates:
    """Right ascension [0, 24) hours and declination [-90, 90] degrees."""

    right_ascension: float
    declination: float

    @property
    def right_ascension_degrees(self) -> float:
        """Right ascension in degrees [0, 360)."""
        return self.right_ascension * DEGREES_PER_HOUR_RA


@dataclass(frozen=True)
class RectangularVector:
    """Heliocentric-ecliptic rectangular vector, AU."""

    x: float
    y: float
    z: float

    def as_list(self) -> list[float]:
        """Components as a 3-list (the form cspyce vector routines take)."""
        return [self.x, self.y, self.z]

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> RectangularVector:
        """Build from any length-3 sequence (e.g. a cspyce/numpy array)."""
        return cls(float(values[0]), float(values[1]), float(values[2]))


@dataclass(frozen=True)
class HeliocentricPosition:
    """Heliocentric ecliptic longitude/latitude (degrees) and radius vector (AU)."""

    longitude: float
    latitude: float
    radius_vector: float

    def is_finite(self) -> bool:
        """True when every component is a finite number."""
        return (
            math.isfinite(self.longitude)
            and math.isfinite(self.latitude)
            and math.isfinite(self.radius_vector)
        )


@dataclass(frozen=True)
class SphericalPosition:
    """Output of the rectangular-to-spherical conversion."""

    longitude: float
    latitude: float
    distance: float


def rectangular_from_spherical(position: HeliocentricPosition) -> RectangularVector:
    """Rectangular vector of a heliocentric (L, B, R) position.

    x = R cos B cos L, y = R cos B sin L, z = R sin B.
    """
    vec = cspyce.latrec(
        position.radius_vector,
        math.radians(position.longitude),
        math.radians(position.latitude),
    )
    return RectangularVector.from_sequence(vec)


def spherical_from_rectangular(vector: RectangularVector) -> SphericalPosition:
    """Ecliptic longitude/latitude (degrees) and distance (AU) of a vector.

    Longitude is normalised to [0, 360) and latitude folded into [-90, 90].
    """
    x, y, z = vector.x, vector.y, vector.z
    longitude = normalize_degrees(math.degrees(math.atan2(y, x)))
    latitude = normalize_latitude(math.degrees(math.atan2(z, math.hypot(x, y))))
    return SphericalPosition(longitude, latitude, float(cspyce.vnorm(vector.as_list())))


def equatorial_from_ecliptic(
    coords: EclipticCoordinates, obliquity: float
) -> EquatorialCoordinates:
    """Rotate ecliptic coordinates into right ascension/declination (AA eq. 13.3, 13.4).

    Parameters:
        coords: Ecliptic longitude/latitude in degrees.
        obliquity: Obliquity of the ecliptic in degrees. Use the true obliquity
            for apparent places and the mean obliquity for mean places.

    Returns:
        Right ascension in hours [0, 24) and declination in degrees.
    """
    lam = math.radians(coords.longitude)
    beta = math.radians(coords.latitude)
    eps = math.radians(obliquity)
    alpha = math.atan2(
        math.sin(lam) * math.cos(eps) - math.tan(beta) * math.sin(eps),
        math.cos(lam),
    )
    delta = math.asin(
        clamp_unit(
            math.sin(beta) * math.cos(eps) + math.cos(beta) * math.sin(eps) * math.sin(lam)
        )
    )
    return EquatorialCoordinates(
        right_ascension=normalize_hours(math.degrees(alpha) / DEGREES_PER_HOUR_RA),
        declination=math.degrees(delta),
    )


def ecliptic_from_equatorial(
    coords: EquatorialCoordinates, obliquity: float
) -> EclipticCoordinates:
    """Inverse of equatorial_from_ecliptic (AA eq. 13.1, 13.2)."""
    alpha = math.radians(coords.right_ascension_degrees)
    delta = math.radians(coords.declination)
    eps = math.radians(obliquity)
    lam = math.atan2(
        math.sin(alpha) * math.cos(eps) + math.tan(delta) * math.sin(eps),
        math.cos(alpha),
    )
    beta = math.asin(
        clamp_unit(
            math.sin(delta) * math.cos(eps) - math.cos(delta) * math.sin(eps) * math.sin(alpha)
        )
    )
    return EclipticCoordinates(
        longitude=normalize_degrees(math.degrees(lam)),
        latitude=math.degrees(beta),
    )
