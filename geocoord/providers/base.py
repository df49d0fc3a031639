"""Collaborator abstract base classes.

Defines the narrow contracts ``Position`` uses to compute its derived
representations.  The position interacts exclusively with these
interfaces and never knows which concrete implementation is behind it.

Collaborators:
    ``GridProvider``          latitude/longitude + ellipsoid -> UTM ``GridResult``.
    ``MgrsEncoder``           ``GridResult`` -> ``MgrsResult``.
    ``EarthCenteredProvider`` latitude/longitude/height + ellipsoid -> ECEF.
    ``CelestialProvider``     latitude/longitude + instant -> sun/moon data.
    ``GeodesicProvider``      direct and inverse distance/bearing problems.

Every collaborator is a pure, synchronous function of its inputs.  A
collaborator that cannot produce a result for valid input raises
``ProviderError`` (or a subclass).
"""

from __future__ import annotations

import abc
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from datetime import datetime

    from geocoord.core.config import GeoConfig
    from geocoord.models.derived import (
        CelestialResult,
        Distance,
        EarthCenteredResult,
        EarthShape,
        Ellipsoid,
        GridResult,
        MgrsResult,
    )


class CoordinateProvider(abc.ABC):
    """Common base for every collaborator.

    The constructor receives the ``GeoConfig`` the collaborator was built
    from; ``None`` means library defaults.
    """

    kind: ClassVar[str] = ""

    def __init__(self, config: GeoConfig | None = None) -> None:
        self._config = config

    @property
    def config(self) -> GeoConfig | None:
        """Return the configuration (read-only)."""
        return self._config


class GridProvider(CoordinateProvider):
    kind = "grid"

    @abc.abstractmethod
    def project(self, latitude: float, longitude: float, ellipsoid: Ellipsoid) -> GridResult:
        """Project decimal degrees to UTM on *ellipsoid*.

        Raises:
            GridDomainError: If *latitude* is outside the UTM domain.
        """


class MgrsEncoder(CoordinateProvider):
    kind = "mgrs"

    @abc.abstractmethod
    def encode(self, grid: GridResult) -> MgrsResult:
        """Encode a UTM result as an MGRS reference."""


class EarthCenteredProvider(CoordinateProvider):
    kind = "earth_centered"

    @abc.abstractmethod
    def to_ecef(
        self,
        latitude: float,
        longitude: float,
        height: float,
        ellipsoid: Ellipsoid,
    ) -> EarthCenteredResult:
        """Convert geodetic degrees and height (metres) to earth-centered XYZ."""


class CelestialProvider(CoordinateProvider):
    kind = "celestial"

    @abc.abstractmethod
    def compute(self, latitude: float, longitude: float, instant: datetime) -> CelestialResult:
        """Compute sun and moon data for an observer at the given place and UTC instant."""


class GeodesicProvider(CoordinateProvider):
    """Direct and inverse geodesic solutions.

    The direct solutions work in radians.  ``direct_ellipsoidal`` expects
    longitude positive to the **west** and returns it the same way.
    """

    kind = "geodesic"

    @abc.abstractmethod
    def direct(
        self,
        latitude: float,
        longitude: float,
        bearing: float,
        distance_m: float,
    ) -> tuple[float, float]:
        """Great-circle destination from a start point, bearing and distance (radians)."""

    @abc.abstractmethod
    def direct_ellipsoidal(
        self,
        latitude: float,
        longitude: float,
        bearing: float,
        distance_m: float,
        ellipsoid: Ellipsoid,
    ) -> tuple[float, float]:
        """Ellipsoidal destination (radians, longitude positive west)."""

    @abc.abstractmethod
    def inverse(
        self,
        start: tuple[float, float],
        end: tuple[float, float],
        shape: EarthShape,
        ellipsoid: Ellipsoid,
    ) -> Distance:
        """Distance and initial bearing between two ``(lat, lon)`` points in degrees."""


# ---------------------------------------------------------------------------
# Collaborator bundle
# ---------------------------------------------------------------------------


class Providers:
    """The set of collaborators a ``Position`` uses.

    Explicit instances win; any collaborator not given is resolved from
    the provider factory the first time it is needed, so heavy
    dependencies load only when a representation is actually computed.
    """

    def __init__(
        self,
        config: GeoConfig | None = None,
        *,
        grid: GridProvider | None = None,
        mgrs: MgrsEncoder | None = None,
        earth_centered: EarthCenteredProvider | None = None,
        celestial: CelestialProvider | None = None,
        geodesic: GeodesicProvider | None = None,
    ) -> None:
        self._config = config
        self._instances: dict[str, CoordinateProvider] = {}
        for kind, instance in (
            ("grid", grid),
            ("mgrs", mgrs),
            ("earth_centered", earth_centered),
            ("celestial", celestial),
            ("geodesic", geodesic),
        ):
            if instance is not None:
                self._instances[kind] = instance

    def _resolve(self, kind: str) -> CoordinateProvider:
        instance = self._instances.get(kind)
        if instance is None:
            from geocoord.providers.factory import get_provider

            instance = get_provider(kind, self._config)
            self._instances[kind] = instance
        return instance

    @property
    def grid(self) -> GridProvider:
        return self._resolve("grid")  # type: ignore[return-value]

    @property
    def mgrs(self) -> MgrsEncoder:
        return self._resolve("mgrs")  # type: ignore[return-value]

    @property
    def earth_centered(self) -> EarthCenteredProvider:
        return self._resolve("earth_centered")  # type: ignore[return-value]

    @property
    def celestial(self) -> CelestialProvider:
        return self._resolve("celestial")  # type: ignore[return-value]

    @property
    def geodesic(self) -> GeodesicProvider:
        return self._resolve("geodesic")  # type: ignore[return-value]
