"""Provider factory: builds the collaborator for each derived representation.

The factory maintains a registry of known collaborators keyed by kind.
New implementations are plugged in with ``register_provider``.

Usage::

    from geocoord.providers.factory import get_provider

    grid = get_provider("grid")
    result = grid.project(47.6062, -122.3321, WGS84)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from geocoord.core.exceptions import ProviderError

if TYPE_CHECKING:
    from collections.abc import Callable

    from geocoord.core.config import GeoConfig
    from geocoord.providers.base import CoordinateProvider

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Collaborator kinds
# ---------------------------------------------------------------------------

GRID = "grid"
MGRS = "mgrs"
EARTH_CENTERED = "earth_centered"
CELESTIAL = "celestial"
GEODESIC = "geodesic"

# ---------------------------------------------------------------------------
# Lazy-import registry
# ---------------------------------------------------------------------------

# Each entry maps a kind to a callable returning the implementation
# *class*.  Imports are deferred so pyproj and skyfield load only when
# that representation is first computed.

_PROVIDER_REGISTRY: dict[str, Callable[[], type[CoordinateProvider]]] = {}


def _register_builtin_providers() -> None:
    """Register the built-in collaborators (called once)."""

    def _grid() -> type[CoordinateProvider]:
        from geocoord.providers.grid import PyprojGridProvider

        return PyprojGridProvider

    def _mgrs() -> type[CoordinateProvider]:
        from geocoord.providers.mgrs import MgrsGridEncoder

        return MgrsGridEncoder

    def _earth_centered() -> type[CoordinateProvider]:
        from geocoord.providers.earth_centered import PyprojEarthCenteredProvider

        return PyprojEarthCenteredProvider

    def _celestial() -> type[CoordinateProvider]:
        from geocoord.providers.celestial import SkyfieldCelestialProvider

        return SkyfieldCelestialProvider

    def _geodesic() -> type[CoordinateProvider]:
        from geocoord.providers.geodesic import GeodesicCalculator

        return GeodesicCalculator

    _PROVIDER_REGISTRY[GRID] = _grid
    _PROVIDER_REGISTRY[MGRS] = _mgrs
    _PROVIDER_REGISTRY[EARTH_CENTERED] = _earth_centered
    _PROVIDER_REGISTRY[CELESTIAL] = _celestial
    _PROVIDER_REGISTRY[GEODESIC] = _geodesic


def _ensure_registry() -> None:
    """Initialise the registry once (idempotent)."""
    if not _PROVIDER_REGISTRY:
        _register_builtin_providers()


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def register_provider(
    kind: str,
    loader: Callable[[], type[CoordinateProvider]],
) -> None:
    """Register (or replace) the collaborator for *kind*.

    Args:
        kind: Representation kind (e.g. ``"grid"``).
        loader: A zero-argument callable that returns the implementation class.

    Raises:
        ValueError: If the kind is empty.
    """
    if not kind:
        msg = "Provider kind must be non-empty"
        raise ValueError(msg)
    _ensure_registry()
    _PROVIDER_REGISTRY[kind] = loader
    logger.debug("Registered provider | kind=%s", kind)


def get_provider(kind: str, config: GeoConfig | None = None) -> CoordinateProvider:
    """Create and return the collaborator registered for *kind*.

    Raises:
        ProviderError: If no collaborator is registered for *kind*.
    """
    _ensure_registry()

    loader = _PROVIDER_REGISTRY.get(kind)
    if loader is None:
        available = ", ".join(sorted(_PROVIDER_REGISTRY))
        msg = f"Unknown provider kind: {kind!r}. Available: {available}"
        raise ProviderError(msg, provider=kind)

    provider_cls = loader()
    logger.info("Creating provider | kind=%s | class=%s", kind, provider_cls.__name__)
    return provider_cls(config)


def list_providers() -> list[str]:
    """Return the kinds of all registered collaborators."""
    _ensure_registry()
    return sorted(_PROVIDER_REGISTRY)
