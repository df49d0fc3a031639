"""Data models.

Defines the data structures used throughout the package:
- AngleValue: one observable latitude or longitude (with Axis, Hemisphere)
- FormatRules: immutable display rules (with FormatStyle)
- Ellipsoid, LoadPolicy, EarthShape: position configuration
- Unloaded / Loaded / Failed: load state of a derived representation
- GridResult, MgrsResult, Cartesian, EarthCenteredResult, CelestialResult,
  Distance: derived representation results
"""

from geocoord.models.angle import AngleValue, Axis, Hemisphere
from geocoord.models.derived import (
    UNLOADED,
    WGS84,
    Cartesian,
    CelestialResult,
    DerivedState,
    Distance,
    EarthCenteredResult,
    EarthShape,
    Ellipsoid,
    Failed,
    GridResult,
    LoadPolicy,
    Loaded,
    MgrsResult,
    Unloaded,
)
from geocoord.models.format_rules import DEFAULT_FORMAT_RULES, FormatRules, FormatStyle

__all__ = [
    "DEFAULT_FORMAT_RULES",
    "UNLOADED",
    "WGS84",
    "AngleValue",
    "Axis",
    "Cartesian",
    "CelestialResult",
    "DerivedState",
    "Distance",
    "EarthCenteredResult",
    "EarthShape",
    "Ellipsoid",
    "Failed",
    "FormatRules",
    "FormatStyle",
    "GridResult",
    "Hemisphere",
    "LoadPolicy",
    "Loaded",
    "MgrsResult",
    "Unloaded",
]
