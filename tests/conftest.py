"""Shared pytest fixtures for the geocoord test suite."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

import pytest

from geocoord.core.constants import UTM_MAX_LATITUDE, UTM_MIN_LATITUDE
from geocoord.core.exceptions import GridDomainError
from geocoord.models.derived import (
    CelestialResult,
    EarthCenteredResult,
    Ellipsoid,
    GridResult,
    MgrsResult,
)
from geocoord.orchestrators.position import Position
from geocoord.providers.base import (
    CelestialProvider,
    EarthCenteredProvider,
    GridProvider,
    MgrsEncoder,
    Providers,
)
from geocoord.providers.geodesic import GeodesicCalculator

# ---------------------------------------------------------------------------
# Recording collaborators
# ---------------------------------------------------------------------------


class RecordingGridProvider(GridProvider):
    """Deterministic grid stand-in that records every call."""

    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[float, float, Ellipsoid]] = []
        self.on_project: Callable[[], None] | None = None

    def project(self, latitude: float, longitude: float, ellipsoid: Ellipsoid) -> GridResult:
        self.calls.append((latitude, longitude, ellipsoid))
        if self.on_project is not None:
            self.on_project()
        if not UTM_MIN_LATITUDE <= latitude <= UTM_MAX_LATITUDE:
            msg = f"latitude {latitude} outside UTM domain"
            raise GridDomainError(msg, provider=self.kind)
        return GridResult(
            zone=10,
            band="T",
            easting=500_000.0 + longitude,
            northing=latitude * 1000.0,
            ellipsoid=ellipsoid,
        )


class RecordingMgrsEncoder(MgrsEncoder):
    def __init__(self) -> None:
        super().__init__()
        self.calls: list[GridResult] = []

    def encode(self, grid: GridResult) -> MgrsResult:
        self.calls.append(grid)
        return MgrsResult(zone=grid.zone, band=grid.band, square_id="AA", easting=0, northing=0)


class RecordingEarthCenteredProvider(EarthCenteredProvider):
    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[float, float, float, Ellipsoid]] = []

    def to_ecef(
        self,
        latitude: float,
        longitude: float,
        height: float,
        ellipsoid: Ellipsoid,
    ) -> EarthCenteredResult:
        self.calls.append((latitude, longitude, height, ellipsoid))
        return EarthCenteredResult(x=latitude, y=longitude, z=height, height=height)


class RecordingCelestialProvider(CelestialProvider):
    def __init__(self) -> None:
        super().__init__()
        self.calls: list[tuple[float, float, datetime]] = []

    def compute(self, latitude: float, longitude: float, instant: datetime) -> CelestialResult:
        self.calls.append((latitude, longitude, instant))
        return CelestialResult(zodiac_sign="Aries", sun_altitude=latitude)


@dataclass
class FakeCollaborators:
    """One set of recording collaborators shared by the positions of a test."""

    grid: RecordingGridProvider = field(default_factory=RecordingGridProvider)
    mgrs: RecordingMgrsEncoder = field(default_factory=RecordingMgrsEncoder)
    earth_centered: RecordingEarthCenteredProvider = field(
        default_factory=RecordingEarthCenteredProvider
    )
    celestial: RecordingCelestialProvider = field(default_factory=RecordingCelestialProvider)

    def providers(self) -> Providers:
        return Providers(
            grid=self.grid,
            mgrs=self.mgrs,
            earth_centered=self.earth_centered,
            celestial=self.celestial,
            geodesic=GeodesicCalculator(),
        )

    def reset(self) -> None:
        self.grid.calls.clear()
        self.mgrs.calls.clear()
        self.earth_centered.calls.clear()
        self.celestial.calls.clear()


class ChangeRecorder:
    """Listener that keeps every notification batch it receives."""

    def __init__(self) -> None:
        self.batches: list[tuple[str, ...]] = []
        self.sources: list[Any] = []

    def __call__(self, source: Any, changed: tuple[str, ...]) -> None:
        self.sources.append(source)
        self.batches.append(changed)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def fakes() -> FakeCollaborators:
    """Fresh recording collaborators."""
    return FakeCollaborators()


@pytest.fixture()
def make_position(fakes: FakeCollaborators) -> Callable[..., Position]:
    """Factory building positions wired to the recording collaborators."""

    def _make(latitude: Any = 47.6062, longitude: Any = -122.3321, **kwargs: Any) -> Position:
        kwargs.setdefault("providers", fakes.providers())
        return Position(latitude, longitude, **kwargs)

    return _make


@pytest.fixture()
def recorder() -> ChangeRecorder:
    """Notification listener recording each batch."""
    return ChangeRecorder()
