"""Tests for coordinate model configuration.

Covers:
- Default values (WGS 84, eager loading, DMS display)
- Loading from environment variables
- Boolean and numeric coercion of string env vars
- Fail-fast range validation
- Derived objects: load policy, ellipsoid, format rules
"""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from geocoord.core.config import ConfigValidationError, GeoConfig
from geocoord.models.derived import WGS84, Ellipsoid, LoadPolicy
from geocoord.models.format_rules import FormatRules, FormatStyle


class TestGeoConfigDefaults:
    """Verify default configuration values."""

    def test_default_ellipsoid(self) -> None:
        cfg = GeoConfig()
        assert cfg.equatorial_radius_m == 6378137.0
        assert cfg.inverse_flattening == 298.257223563
        assert cfg.ellipsoid() == WGS84

    def test_default_policy_is_eager(self) -> None:
        assert GeoConfig().load_policy() == LoadPolicy()

    def test_default_format(self) -> None:
        cfg = GeoConfig()
        assert cfg.format_style == "degree-minute-second"
        assert cfg.format_rounding is None
        assert cfg.format_rules() == FormatRules()

    def test_default_ephemeris(self) -> None:
        cfg = GeoConfig()
        assert cfg.ephemeris == "de421.bsp"
        assert cfg.skyfield_data_dir.endswith(".skyfield")


class TestGeoConfigFromEnv:
    """Verify loading from environment variables."""

    def test_loads_from_environment(self) -> None:
        """All env vars are read and coerced to correct types."""
        env = {
            "GEOCOORD_EQUATORIAL_RADIUS_M": "6378206.4",
            "GEOCOORD_INVERSE_FLATTENING": "294.9786982",
            "GEOCOORD_EAGER_CELESTIAL": "false",
            "GEOCOORD_EAGER_GRID": "yes",
            "GEOCOORD_EAGER_EARTH_CENTERED": "0",
            "GEOCOORD_EAGER_CARTESIAN": "ON",
            "GEOCOORD_FORMAT_STYLE": "decimal-degree",
            "GEOCOORD_FORMAT_ROUNDING": "4",
            "GEOCOORD_SKYFIELD_DATA_DIR": "/var/lib/skyfield",
            "GEOCOORD_EPHEMERIS": "de440s.bsp",
        }
        with patch.dict(os.environ, env, clear=False):
            cfg = GeoConfig.from_env()

        assert cfg.ellipsoid() == Ellipsoid(6378206.4, 294.9786982)
        assert cfg.load_policy() == LoadPolicy(
            celestial=False, grid=True, earth_centered=False, cartesian=True
        )
        assert cfg.format_rules() == FormatRules(style=FormatStyle.DECIMAL_DEGREE, rounding=4)
        assert cfg.skyfield_data_dir == "/var/lib/skyfield"
        assert cfg.ephemeris == "de440s.bsp"

    def test_defaults_when_env_missing(self) -> None:
        """Missing environment variables fall back to defaults."""
        with patch.dict(os.environ, {}, clear=True):
            cfg = GeoConfig.from_env()

        assert cfg.equatorial_radius_m == 6378137.0
        assert cfg.eager_grid is True
        assert cfg.format_rounding is None

    def test_blank_values_fall_back(self) -> None:
        env = {"GEOCOORD_EAGER_GRID": "  ", "GEOCOORD_FORMAT_ROUNDING": ""}
        with patch.dict(os.environ, env, clear=True):
            cfg = GeoConfig.from_env()
        assert cfg.eager_grid is True
        assert cfg.format_rounding is None

    def test_frozen_immutability(self) -> None:
        """GeoConfig is frozen (immutable)."""
        cfg = GeoConfig()
        with pytest.raises(AttributeError):
            cfg.eager_grid = False  # type: ignore[misc]


class TestGeoConfigValidation:
    """Fail-fast range validation in from_env."""

    def test_radius_zero_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"GEOCOORD_EQUATORIAL_RADIUS_M": "0"}, clear=True),
            pytest.raises(ConfigValidationError, match="GEOCOORD_EQUATORIAL_RADIUS_M"),
        ):
            GeoConfig.from_env()

    def test_flattening_negative_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"GEOCOORD_INVERSE_FLATTENING": "-1"}, clear=True),
            pytest.raises(ConfigValidationError, match="must be > 0"),
        ):
            GeoConfig.from_env()

    def test_unknown_style_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"GEOCOORD_FORMAT_STYLE": "sexagesimal"}, clear=True),
            pytest.raises(ConfigValidationError, match="GEOCOORD_FORMAT_STYLE"),
        ):
            GeoConfig.from_env()

    @pytest.mark.parametrize("rounding", ["-1", "16"])
    def test_rounding_out_of_range(self, rounding: str) -> None:
        with (
            patch.dict(os.environ, {"GEOCOORD_FORMAT_ROUNDING": rounding}, clear=True),
            pytest.raises(ConfigValidationError, match="between 0 and 15"),
        ):
            GeoConfig.from_env()

    @pytest.mark.parametrize("rounding", ["0", "15"])
    def test_rounding_boundaries_accepted(self, rounding: str) -> None:
        with patch.dict(os.environ, {"GEOCOORD_FORMAT_ROUNDING": rounding}, clear=True):
            cfg = GeoConfig.from_env()
        assert cfg.format_rounding == int(rounding)

    def test_unrecognised_bool_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"GEOCOORD_EAGER_CELESTIAL": "maybe"}, clear=True),
            pytest.raises(ConfigValidationError, match="GEOCOORD_EAGER_CELESTIAL"),
        ):
            GeoConfig.from_env()

    def test_empty_ephemeris_rejected(self) -> None:
        with (
            patch.dict(os.environ, {"GEOCOORD_EPHEMERIS": ""}, clear=True),
            pytest.raises(ConfigValidationError, match="GEOCOORD_EPHEMERIS"),
        ):
            GeoConfig.from_env()

    def test_non_numeric_env_raises_value_error(self) -> None:
        """Non-numeric string for a float field raises ValueError."""
        with (
            patch.dict(os.environ, {"GEOCOORD_INVERSE_FLATTENING": "abc"}, clear=True),
            pytest.raises(ValueError),
        ):
            GeoConfig.from_env()

    def test_error_contains_key_and_value(self) -> None:
        """ConfigValidationError includes key and value attributes."""
        with (
            patch.dict(os.environ, {"GEOCOORD_EQUATORIAL_RADIUS_M": "-5"}, clear=True),
            pytest.raises(ConfigValidationError) as exc_info,
        ):
            GeoConfig.from_env()

        assert exc_info.value.key == "GEOCOORD_EQUATORIAL_RADIUS_M"
        assert exc_info.value.value == -5.0
        assert exc_info.value.field == "GEOCOORD_EQUATORIAL_RADIUS_M"
        assert exc_info.value.code == "CONFIG_VALIDATION_FAILED"
