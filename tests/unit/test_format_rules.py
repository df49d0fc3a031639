"""Tests for FormatRules display configuration."""

from __future__ import annotations

import dataclasses

import pytest

from geocoord.core.exceptions import RangeError
from geocoord.models.format_rules import DEFAULT_FORMAT_RULES, FormatRules, FormatStyle


class TestDefaults:
    """Default rules are DMS, 3 digits, symbols on, hemisphere first."""

    def test_default_values(self) -> None:
        rules = FormatRules()
        assert rules.style is FormatStyle.DEGREE_MINUTE_SECOND
        assert rules.rounding is None
        assert rules.effective_rounding == 3
        assert rules.leading_zeros is False
        assert rules.trailing_zeros is False
        assert rules.symbols is True
        assert rules.hyphens is False
        assert rules.position_first is True

    def test_module_default_matches(self) -> None:
        assert DEFAULT_FORMAT_RULES == FormatRules()

    @pytest.mark.parametrize(
        ("style", "digits"),
        [
            (FormatStyle.DECIMAL, 9),
            (FormatStyle.DECIMAL_DEGREE, 6),
            (FormatStyle.DEGREE_DECIMAL_MINUTE, 3),
            (FormatStyle.DEGREE_MINUTE_SECOND, 3),
        ],
    )
    def test_per_style_rounding(self, style: FormatStyle, digits: int) -> None:
        assert FormatRules(style=style).effective_rounding == digits

    def test_explicit_rounding_wins(self) -> None:
        assert FormatRules(style=FormatStyle.DECIMAL, rounding=2).effective_rounding == 2


class TestValidation:
    """Invalid values are rejected at construction."""

    def test_style_from_string(self) -> None:
        rules = FormatRules(style="degree-decimal-minute")  # type: ignore[arg-type]
        assert rules.style is FormatStyle.DEGREE_DECIMAL_MINUTE

    def test_unknown_style(self) -> None:
        with pytest.raises(RangeError) as exc_info:
            FormatRules(style="sexagesimal")  # type: ignore[arg-type]
        assert exc_info.value.field == "style"

    @pytest.mark.parametrize("rounding", [-1, 16])
    def test_rounding_range(self, rounding: int) -> None:
        with pytest.raises(RangeError):
            FormatRules(rounding=rounding)

    def test_replace_validates(self) -> None:
        with pytest.raises(RangeError):
            FormatRules().replace(rounding=99)

    def test_frozen(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            FormatRules().hyphens = True  # type: ignore[misc]


class TestGlyphs:
    """Symbol toggles and separators."""

    def test_glyphs_on(self) -> None:
        rules = FormatRules()
        assert (rules.degree_glyph, rules.minute_glyph, rules.second_glyph) == ("º", "'", '"')

    def test_master_switch(self) -> None:
        rules = FormatRules(symbols=False)
        assert (rules.degree_glyph, rules.minute_glyph, rules.second_glyph) == ("", "", "")

    def test_per_unit_switch(self) -> None:
        rules = FormatRules(minute_symbol=False)
        assert rules.degree_glyph == "º"
        assert rules.minute_glyph == ""
        assert rules.second_glyph == '"'

    def test_separator(self) -> None:
        assert FormatRules().separator == " "
        assert FormatRules(hyphens=True).separator == "-"
