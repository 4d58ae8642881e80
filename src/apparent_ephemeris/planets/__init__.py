"""Heliocentric ephemeris providers by body name."""

import logging

from apparent_ephemeris.planets.base import (
    EphemerisProvider,
    FixedPosition,
    PeriodicSeries,
    Vsop87Planet,
    heliocentric_position,
)
from apparent_ephemeris.planets.earth import EARTH
from apparent_ephemeris.planets.venus import VENUS

logger = logging.getLogger(__name__)

SUN_NAME = 'sun'

_PROVIDERS: dict[str, EphemerisProvider] = {
    'earth': EARTH,
    'venus': VENUS,
}


def available_bodies() -> list[str]:
    """Body names accepted by parse_body, lowercase, Sun included."""
    return sorted([*_PROVIDERS, SUN_NAME])


def get_provider(name: str) -> EphemerisProvider | None:
    """Return the provider for a planet name (case-insensitive) or None."""
    provider = _PROVIDERS.get(name.strip().lower())
    if provider is None:
        logger.debug('No ephemeris provider for body %r', name)
    return provider


def parse_body(name: str) -> str:
    """Normalise a body name for the CLI and table parameters.

    Parameters:
        name: Planet name or 'sun' (any case, surrounding blanks ignored).

    Returns:
        Lowercase body name.

    Raises:
        ValueError: If the name is not a known body.
    """
    key = name.strip().lower()
    if key == SUN_NAME or key in _PROVIDERS:
        return key
    raise ValueError(f'Unknown body {name!r}; expected one of {", ".join(available_bodies())}')


def resolve_bodies(
    body: str, reference: str = 'earth'
) -> tuple[EphemerisProvider, EphemerisProvider, bool]:
    """Providers for observing body from reference.

    Parameters:
        body: Target body name, 'sun' allowed.
        reference: Observing body name (a planet).

    Returns:
        (target, reference, reference_is_target). For the Sun the target is the
        reference provider and reference_is_target is True.

    Raises:
        ValueError: Unknown names, the Sun as reference, or target equal to
            reference.
    """
    target_key = parse_body(body)
    reference_key = parse_body(reference)
    if reference_key == SUN_NAME:
        raise ValueError('The Sun cannot be the reference body')
    if target_key == reference_key:
        raise ValueError(f'Target and reference are both {reference_key!r}')
    reference_provider = get_provider(reference_key)
    if reference_provider is None:
        raise ValueError(f'No ephemeris for reference body {reference!r}')
    if target_key == SUN_NAME:
        return (reference_provider, reference_provider, True)
    target_provider = get_provider(target_key)
    if target_provider is None:
        raise ValueError(f'No ephemeris for body {body!r}')
    return (target_provider, reference_provider, False)


__all__ = [
    'EARTH',
    'SUN_NAME',
    'VENUS',
    'EphemerisProvider',
    'FixedPosition',
    'PeriodicSeries',
    'Vsop87Planet',
    'available_bodies',
    'get_provider',
    'heliocentric_position',
    'parse_body',
    'resolve_bodies',
]
