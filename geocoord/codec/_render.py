"""Render angles to text, one function per ``FormatStyle``."""

from __future__ import annotations

from typing import TYPE_CHECKING

from geocoord.core.constants import (
    LATITUDE_DEGREE_WIDTH,
    LATITUDE_PLAIN_WIDTH,
    LONGITUDE_DEGREE_WIDTH,
    MAX_FRACTION_DIGITS,
    MINUTES_PER_DEGREE,
    SUBUNIT_WIDTH,
)
from geocoord.models.angle import Axis
from geocoord.models.format_rules import DEFAULT_FORMAT_RULES, FormatRules, FormatStyle

if TYPE_CHECKING:
    from collections.abc import Callable

    from geocoord.models.angle import AngleValue


# ---------------------------------------------------------------------------
# Number formatting
# ---------------------------------------------------------------------------


def format_number(value: float, rules: FormatRules, *, width: int = 1) -> str:
    """Format a non-negative number for display.

    Rounds to ``rules.effective_rounding`` digits, then either pads the
    fraction to that many digits (``trailing_zeros``) or trims trailing
    zeros, showing at most nine fractional digits.  With
    ``leading_zeros`` the integer part is zero-padded to *width*.
    """
    rounding = rules.effective_rounding
    rounded = round(abs(value), rounding)
    if rules.trailing_zeros:
        text = f"{rounded:.{rounding}f}"
    else:
        text = f"{rounded:.{min(rounding, MAX_FRACTION_DIGITS)}f}"
        if "." in text:
            text = text.rstrip("0").rstrip(".")
    if rules.leading_zeros:
        whole, dot, fraction = text.partition(".")
        text = whole.zfill(width) + dot + fraction
    return text


def _degree_width(angle: AngleValue, latitude_width: int = LATITUDE_DEGREE_WIDTH) -> int:
    return latitude_width if angle.axis is Axis.LAT else LONGITUDE_DEGREE_WIDTH


def _label(angle: AngleValue, body: list[str], rules: FormatRules) -> str:
    hemisphere = angle.hemisphere.value
    parts = [hemisphere, *body] if rules.position_first else [*body, hemisphere]
    return rules.separator.join(parts)


# ---------------------------------------------------------------------------
# Styles
# ---------------------------------------------------------------------------


def _render_decimal(angle: AngleValue, rules: FormatRules) -> str:
    text = format_number(
        angle.decimal_degree, rules, width=_degree_width(angle, LATITUDE_PLAIN_WIDTH)
    )
    if angle.decimal_degree < 0 and text.strip("0.") != "":
        return "-" + text
    return text


def _render_decimal_degree(angle: AngleValue, rules: FormatRules) -> str:
    magnitude = abs(angle.decimal_degree)
    degrees = format_number(magnitude, rules, width=_degree_width(angle))
    return _label(angle, [degrees + rules.degree_glyph], rules)


def _render_degree_decimal_minute(angle: AngleValue, rules: FormatRules) -> str:
    degrees = angle.degrees
    decimal_minute = round(angle.decimal_minute, rules.effective_rounding)
    if decimal_minute >= MINUTES_PER_DEGREE and degrees + 1 <= angle.axis.bound:
        degrees += 1
        decimal_minute = 0.0
    body = [
        format_number(degrees, rules.replace(trailing_zeros=False), width=_degree_width(angle))
        + rules.degree_glyph,
        format_number(decimal_minute, rules, width=SUBUNIT_WIDTH) + rules.minute_glyph,
    ]
    return _label(angle, body, rules)


def _render_degree_minute_second(angle: AngleValue, rules: FormatRules) -> str:
    whole = rules.replace(trailing_zeros=False)
    body = [
        format_number(angle.degrees, whole, width=_degree_width(angle, LATITUDE_PLAIN_WIDTH))
        + rules.degree_glyph,
        format_number(angle.minutes, whole, width=SUBUNIT_WIDTH) + rules.minute_glyph,
        format_number(angle.seconds, rules, width=SUBUNIT_WIDTH) + rules.second_glyph,
    ]
    return _label(angle, body, rules)


_RENDERERS: dict[FormatStyle, Callable[[AngleValue, FormatRules], str]] = {
    FormatStyle.DECIMAL: _render_decimal,
    FormatStyle.DECIMAL_DEGREE: _render_decimal_degree,
    FormatStyle.DEGREE_DECIMAL_MINUTE: _render_degree_decimal_minute,
    FormatStyle.DEGREE_MINUTE_SECOND: _render_degree_minute_second,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def render_angle(angle: AngleValue, rules: FormatRules | None = None) -> str:
    """Render one angle under *rules* (default degree-minute-second)."""
    rules = rules or DEFAULT_FORMAT_RULES
    return _RENDERERS[rules.style](angle, rules)


def render_pair(
    latitude: AngleValue,
    longitude: AngleValue,
    rules: FormatRules | None = None,
) -> str:
    """Render a latitude/longitude pair separated by a single space."""
    rules = rules or DEFAULT_FORMAT_RULES
    return f"{render_angle(latitude, rules)} {render_angle(longitude, rules)}"
