"""Tests for rendering angles and pairs to text.

Covers every FormatStyle, the degree-decimal-minute carry, and each
display flag (leading/trailing zeros, symbols, hyphens, label position).
"""

from __future__ import annotations

import pytest

from geocoord.codec import format_number, render_angle, render_pair
from geocoord.models.angle import AngleValue, Axis, Hemisphere
from geocoord.models.format_rules import FormatRules, FormatStyle


@pytest.fixture()
def seattle() -> tuple[AngleValue, AngleValue]:
    return (
        AngleValue.from_decimal(47.6062, Axis.LAT),
        AngleValue.from_decimal(-122.3321, Axis.LONG),
    )


class TestStyles:
    """One rendering per style with default flags."""

    def test_degree_minute_second_default(self, seattle: tuple[AngleValue, AngleValue]) -> None:
        lat, lon = seattle
        assert render_angle(lat) == "N 47º 36' 22.32\""
        assert render_angle(lon) == "W 122º 19' 55.56\""

    def test_pair(self, seattle: tuple[AngleValue, AngleValue]) -> None:
        assert render_pair(*seattle) == "N 47º 36' 22.32\" W 122º 19' 55.56\""

    def test_degree_decimal_minute(self, seattle: tuple[AngleValue, AngleValue]) -> None:
        rules = FormatRules(style=FormatStyle.DEGREE_DECIMAL_MINUTE)
        assert render_pair(*seattle, rules) == "N 47º 36.372' W 122º 19.926'"

    def test_decimal_degree(self, seattle: tuple[AngleValue, AngleValue]) -> None:
        rules = FormatRules(style=FormatStyle.DECIMAL_DEGREE)
        assert render_pair(*seattle, rules) == "N 47.6062º W 122.3321º"

    def test_decimal_is_signed_without_label(
        self, seattle: tuple[AngleValue, AngleValue]
    ) -> None:
        rules = FormatRules(style=FormatStyle.DECIMAL)
        assert render_pair(*seattle, rules) == "47.6062 -122.3321"

    def test_decimal_drops_sign_of_zero(self) -> None:
        angle = AngleValue.from_decimal(-0.001, Axis.LAT)
        rules = FormatRules(style=FormatStyle.DECIMAL, rounding=2)
        assert render_angle(angle, rules) == "0"

    def test_rounding_zero(self, seattle: tuple[AngleValue, AngleValue]) -> None:
        lat, _ = seattle
        assert render_angle(lat, FormatRules(rounding=0)) == "N 47º 36' 22\""

    def test_fraction_capped_at_nine_digits(self) -> None:
        angle = AngleValue.from_decimal(0.123456789012, Axis.LAT)
        rules = FormatRules(style=FormatStyle.DECIMAL, rounding=12)
        assert render_angle(angle, rules) == "0.123456789"


class TestCarry:
    """Rounded decimal minutes of 60 carry into the degrees."""

    def test_carry_at_zero_digits(self) -> None:
        angle = AngleValue.from_dms(42, 59, 59.99, Hemisphere.N)
        rules = FormatRules(style=FormatStyle.DEGREE_DECIMAL_MINUTE, rounding=0)
        assert render_angle(angle, rules) == "N 43º 0'"

    def test_carry_with_trailing_zeros(self) -> None:
        angle = AngleValue.from_dms(42, 59, 59.99, Hemisphere.N)
        rules = FormatRules(
            style=FormatStyle.DEGREE_DECIMAL_MINUTE, rounding=1, trailing_zeros=True
        )
        assert render_angle(angle, rules) == "N 43º 0.0'"

    def test_no_carry_when_minutes_fit(self) -> None:
        angle = AngleValue.from_dms(42, 59, 30.0, Hemisphere.S)
        rules = FormatRules(style=FormatStyle.DEGREE_DECIMAL_MINUTE, rounding=1)
        assert render_angle(angle, rules) == "S 42º 59.5'"


class TestFlags:
    """Padding, glyph, separator and label-position flags."""

    def test_leading_zeros(self) -> None:
        lat = AngleValue.from_decimal(7.5, Axis.LAT)
        lon = AngleValue.from_decimal(7.5, Axis.LONG)
        rules = FormatRules(leading_zeros=True)
        assert render_pair(lat, lon, rules) == "N 7º 30' 00\" E 007º 30' 00\""

    def test_leading_zeros_decimal_latitude_unpadded(self) -> None:
        rules = FormatRules(style=FormatStyle.DECIMAL, leading_zeros=True)
        assert render_angle(AngleValue.from_decimal(5.5, Axis.LAT), rules) == "5.5"
        assert render_angle(AngleValue.from_decimal(-5.5, Axis.LAT), rules) == "-5.5"
        assert render_angle(AngleValue.from_decimal(5.5, Axis.LONG), rules) == "005.5"

    def test_leading_zeros_pad_latitude_in_minute_styles(self) -> None:
        lat = AngleValue.from_decimal(5.5, Axis.LAT)
        ddm = FormatRules(style=FormatStyle.DEGREE_DECIMAL_MINUTE, leading_zeros=True)
        dd = FormatRules(style=FormatStyle.DECIMAL_DEGREE, leading_zeros=True)
        assert render_angle(lat, ddm) == "N 05º 30'"
        assert render_angle(lat, dd) == "N 05.5º"

    def test_leading_zeros_decimal_degree(self) -> None:
        lon = AngleValue.from_decimal(-7.25, Axis.LONG)
        rules = FormatRules(style=FormatStyle.DECIMAL_DEGREE, leading_zeros=True)
        assert render_angle(lon, rules) == "W 007.25º"

    def test_trailing_zeros(self, seattle: tuple[AngleValue, AngleValue]) -> None:
        lat, _ = seattle
        assert render_angle(lat, FormatRules(trailing_zeros=True)) == "N 47º 36' 22.320\""

    def test_symbols_off(self, seattle: tuple[AngleValue, AngleValue]) -> None:
        lat, _ = seattle
        assert render_angle(lat, FormatRules(symbols=False)) == "N 47 36 22.32"

    def test_single_symbol_off(self, seattle: tuple[AngleValue, AngleValue]) -> None:
        lat, _ = seattle
        assert render_angle(lat, FormatRules(minute_symbol=False)) == "N 47º 36 22.32\""

    def test_hyphens(self, seattle: tuple[AngleValue, AngleValue]) -> None:
        lat, _ = seattle
        assert render_angle(lat, FormatRules(hyphens=True)) == "N-47º-36'-22.32\""

    def test_hemisphere_last(self, seattle: tuple[AngleValue, AngleValue]) -> None:
        lat, lon = seattle
        rules = FormatRules(position_first=False)
        assert render_pair(lat, lon, rules) == "47º 36' 22.32\" N 122º 19' 55.56\" W"


class TestFormatNumber:
    """The shared number formatter."""

    def test_trims(self) -> None:
        assert format_number(22.32, FormatRules()) == "22.32"

    def test_whole(self) -> None:
        assert format_number(43, FormatRules()) == "43"

    def test_pads(self) -> None:
        assert format_number(5.5, FormatRules(rounding=2, trailing_zeros=True)) == "5.50"

    def test_width(self) -> None:
        assert format_number(5.5, FormatRules(leading_zeros=True), width=3) == "005.5"
