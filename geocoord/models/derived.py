"""Derived representations of a position and their load state.

Each derived representation (grid, MGRS, cartesian, earth-centered,
celestial) lives in a slot on ``Position`` holding one of three states:

- ``Unloaded`` : never computed, or reset because its load policy is off.
- ``Loaded``   : computed from the current inputs.
- ``Failed``   : computed, but the collaborator rejected the input
  (e.g. UTM near the poles).

All result models are frozen dataclasses with explicit units.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from geocoord.core.constants import (
    METERS_PER_FOOT,
    METERS_PER_KILOMETER,
    METERS_PER_MILE,
    METERS_PER_NAUTICAL_MILE,
    WGS84_EQUATORIAL_RADIUS_M,
    WGS84_INVERSE_FLATTENING,
)
from geocoord.core.exceptions import RangeError

if TYPE_CHECKING:
    from datetime import datetime

    from geocoord.core.exceptions import ProviderError

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Configuration models
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Ellipsoid:
    """Reference earth model.

    Attributes:
        equatorial_radius: Semi-major axis in metres.
        inverse_flattening: ``1 / f``.
    """

    equatorial_radius: float = WGS84_EQUATORIAL_RADIUS_M
    inverse_flattening: float = WGS84_INVERSE_FLATTENING

    def __post_init__(self) -> None:
        if not self.equatorial_radius > 0:
            msg = f"Equatorial radius must be > 0 m, got {self.equatorial_radius}"
            raise RangeError(msg, field="equatorial_radius")
        if not self.inverse_flattening > 0:
            msg = f"Inverse flattening must be > 0, got {self.inverse_flattening}"
            raise RangeError(msg, field="inverse_flattening")

    @property
    def flattening(self) -> float:
        return 1.0 / self.inverse_flattening


WGS84 = Ellipsoid()


@dataclass(frozen=True, slots=True)
class LoadPolicy:
    """Which derived representations recompute eagerly on every change.

    A representation whose flag is off stays ``Unloaded`` until the
    matching ``Position.load_*`` call.
    """

    celestial: bool = True
    grid: bool = True
    earth_centered: bool = True
    cartesian: bool = True

    @classmethod
    def lazy(cls) -> LoadPolicy:
        """Policy with every representation loaded on demand only."""
        return cls(celestial=False, grid=False, earth_centered=False, cartesian=False)


class EarthShape(enum.Enum):
    """Earth model used by distance and movement calculations."""

    SPHERE = "sphere"
    ELLIPSOID = "ellipsoid"


# ---------------------------------------------------------------------------
# Load state
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Unloaded:
    """Slot has no value."""


@dataclass(frozen=True, slots=True)
class Loaded(Generic[T]):
    """Slot holds a value computed from the current inputs."""

    value: T


@dataclass(frozen=True, slots=True)
class Failed:
    """Slot was computed but the collaborator rejected the inputs."""

    error: ProviderError


DerivedState = Unloaded | Loaded | Failed

UNLOADED = Unloaded()


# ---------------------------------------------------------------------------
# Result models
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GridResult:
    """Universal Transverse Mercator coordinate.

    Attributes:
        zone: UTM zone number (1-60).
        band: Latitude band letter (``C``-``X``).
        easting: Easting in metres.
        northing: Northing in metres (false northing applied south of the equator).
        ellipsoid: Ellipsoid the projection was computed on.
    """

    zone: int
    band: str
    easting: float
    northing: float
    ellipsoid: Ellipsoid = WGS84

    def __str__(self) -> str:
        return f"{self.zone}{self.band} {self.easting:.0f}mE {self.northing:.0f}mN"


@dataclass(frozen=True, slots=True)
class MgrsResult:
    """Military Grid Reference System coordinate at 1 m precision."""

    zone: int
    band: str
    square_id: str
    easting: int
    northing: int

    def __str__(self) -> str:
        return f"{self.zone}{self.band} {self.square_id} {self.easting:05d} {self.northing:05d}"


@dataclass(frozen=True, slots=True)
class Cartesian:
    """Unit-sphere XYZ used by bearing and distance helpers."""

    x: float
    y: float
    z: float

    @classmethod
    def from_radians(cls, latitude: float, longitude: float) -> Cartesian:
        return cls(
            x=math.cos(latitude) * math.cos(longitude),
            y=math.cos(latitude) * math.sin(longitude),
            z=math.sin(latitude),
        )


@dataclass(frozen=True, slots=True)
class EarthCenteredResult:
    """Earth-centered, earth-fixed coordinate in metres."""

    x: float
    y: float
    z: float
    height: float = 0.0

    def __str__(self) -> str:
        return f"{self.x:.3f} m, {self.y:.3f} m, {self.z:.3f} m"


@dataclass(frozen=True, slots=True)
class CelestialResult:
    """Sun and moon data for one observation instant.

    Event times are UTC and ``None`` when the body does not rise or set
    on the observation day.  Angles are degrees.
    """

    sunrise: datetime | None = None
    sunset: datetime | None = None
    sun_altitude: float = 0.0
    sun_azimuth: float = 0.0
    moonrise: datetime | None = None
    moonset: datetime | None = None
    moon_altitude: float = 0.0
    moon_azimuth: float = 0.0
    moon_illumination: float = 0.0
    moon_phase_angle: float = 0.0
    zodiac_sign: str = ""
    next_lunar_eclipse: datetime | None = None


@dataclass(frozen=True, slots=True)
class Distance:
    """Distance and initial bearing between two positions.

    Attributes:
        meters: Distance in metres.
        bearing: Initial bearing in degrees clockwise from true north [0, 360).
        shape: Earth model the distance was computed on.
    """

    meters: float
    bearing: float
    shape: EarthShape = EarthShape.SPHERE

    @property
    def kilometers(self) -> float:
        return self.meters / METERS_PER_KILOMETER

    @property
    def miles(self) -> float:
        return self.meters / METERS_PER_MILE

    @property
    def nautical_miles(self) -> float:
        return self.meters / METERS_PER_NAUTICAL_MILE

    @property
    def feet(self) -> float:
        return self.meters / METERS_PER_FOOT
