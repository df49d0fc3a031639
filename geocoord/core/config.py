"""Coordinate model configuration loaded from environment variables.

All values have sensible defaults (WGS 84, eager loading, DMS display).
``from_env()`` raises ``ConfigValidationError`` if any value is out of
its valid range, so bad configuration fails at startup rather than on
the first coordinate mutation.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from geocoord.core.constants import (
    MAX_ROUNDING,
    WGS84_EQUATORIAL_RADIUS_M,
    WGS84_INVERSE_FLATTENING,
)
from geocoord.core.exceptions import CoordinateError
from geocoord.models.derived import Ellipsoid, LoadPolicy
from geocoord.models.format_rules import FormatRules, FormatStyle

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class ConfigValidationError(CoordinateError):
    """Raised when configuration values are out of valid range.

    Attributes:
        key: The configuration key that failed validation.
        value: The invalid value.
    """

    default_code = "CONFIG_VALIDATION_FAILED"

    def __init__(self, key: str, value: object, message: str) -> None:
        self.key = key
        self.value = value
        super().__init__(f"Invalid configuration {key}={value!r}: {message}", field=key)


@dataclass(frozen=True, slots=True)
class GeoConfig:
    """Immutable coordinate model configuration.

    Attributes:
        equatorial_radius_m: Default ellipsoid equatorial radius in metres.
        inverse_flattening: Default ellipsoid inverse flattening.
        eager_celestial: Recompute celestial data on every relevant change.
        eager_grid: Recompute UTM/MGRS on every relevant change.
        eager_earth_centered: Recompute ECEF on every relevant change.
        eager_cartesian: Recompute unit-sphere XYZ on every relevant change.
        format_style: Default display style (a ``FormatStyle`` value).
        format_rounding: Default display rounding; ``None`` for per-style default.
        skyfield_data_dir: Directory holding skyfield ephemeris files.
        ephemeris: Ephemeris file name loaded by the celestial provider.
    """

    equatorial_radius_m: float = WGS84_EQUATORIAL_RADIUS_M
    inverse_flattening: float = WGS84_INVERSE_FLATTENING
    eager_celestial: bool = True
    eager_grid: bool = True
    eager_earth_centered: bool = True
    eager_cartesian: bool = True
    format_style: str = FormatStyle.DEGREE_MINUTE_SECOND.value
    format_rounding: int | None = None
    skyfield_data_dir: str = str(Path.home() / ".skyfield")
    ephemeris: str = "de421.bsp"

    @classmethod
    def from_env(cls) -> GeoConfig:
        """Load and validate configuration from environment variables.

        Raises:
            ConfigValidationError: If a value is out of range or a boolean
                flag is not recognisable.
            ValueError: If a numeric environment variable cannot be
                parsed (e.g. ``GEOCOORD_INVERSE_FLATTENING=abc``).
        """
        rounding_raw = os.getenv("GEOCOORD_FORMAT_ROUNDING", "")
        config = cls(
            equatorial_radius_m=float(
                os.getenv("GEOCOORD_EQUATORIAL_RADIUS_M", str(WGS84_EQUATORIAL_RADIUS_M))
            ),
            inverse_flattening=float(
                os.getenv("GEOCOORD_INVERSE_FLATTENING", str(WGS84_INVERSE_FLATTENING))
            ),
            eager_celestial=_env_bool("GEOCOORD_EAGER_CELESTIAL", default=True),
            eager_grid=_env_bool("GEOCOORD_EAGER_GRID", default=True),
            eager_earth_centered=_env_bool("GEOCOORD_EAGER_EARTH_CENTERED", default=True),
            eager_cartesian=_env_bool("GEOCOORD_EAGER_CARTESIAN", default=True),
            format_style=os.getenv(
                "GEOCOORD_FORMAT_STYLE", FormatStyle.DEGREE_MINUTE_SECOND.value
            ),
            format_rounding=int(rounding_raw) if rounding_raw.strip() else None,
            skyfield_data_dir=os.getenv(
                "GEOCOORD_SKYFIELD_DATA_DIR", str(Path.home() / ".skyfield")
            ),
            ephemeris=os.getenv("GEOCOORD_EPHEMERIS", "de421.bsp"),
        )
        _validate(config)
        return config

    def load_policy(self) -> LoadPolicy:
        """Return the eager-load policy described by this configuration."""
        return LoadPolicy(
            celestial=self.eager_celestial,
            grid=self.eager_grid,
            earth_centered=self.eager_earth_centered,
            cartesian=self.eager_cartesian,
        )

    def ellipsoid(self) -> Ellipsoid:
        """Return the default reference ellipsoid."""
        return Ellipsoid(self.equatorial_radius_m, self.inverse_flattening)

    def format_rules(self) -> FormatRules:
        """Return the default display rules."""
        return FormatRules(style=FormatStyle(self.format_style), rounding=self.format_rounding)


def _env_bool(key: str, *, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigValidationError(key, raw, "must be one of 1/0, true/false, yes/no, on/off")


def _validate(config: GeoConfig) -> None:
    """Validate configuration ranges.  Raises ``ConfigValidationError``."""
    if config.equatorial_radius_m <= 0:
        raise ConfigValidationError(
            "GEOCOORD_EQUATORIAL_RADIUS_M",
            config.equatorial_radius_m,
            "must be > 0 (metres)",
        )

    if config.inverse_flattening <= 0:
        raise ConfigValidationError(
            "GEOCOORD_INVERSE_FLATTENING",
            config.inverse_flattening,
            "must be > 0",
        )

    valid_styles = {style.value for style in FormatStyle}
    if config.format_style not in valid_styles:
        raise ConfigValidationError(
            "GEOCOORD_FORMAT_STYLE",
            config.format_style,
            f"must be one of {', '.join(sorted(valid_styles))}",
        )

    if config.format_rounding is not None and not 0 <= config.format_rounding <= MAX_ROUNDING:
        raise ConfigValidationError(
            "GEOCOORD_FORMAT_ROUNDING",
            config.format_rounding,
            f"must be between 0 and {MAX_ROUNDING} (digits)",
        )

    if not config.ephemeris:
        raise ConfigValidationError(
            "GEOCOORD_EPHEMERIS",
            config.ephemeris,
            "must not be empty",
        )
