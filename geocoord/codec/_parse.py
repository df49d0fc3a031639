"""Parse coordinate text into ``AngleValue`` objects.

Recognised without a format hint:

- signed or unsigned decimal degrees (``47.6062, -122.3321``)
- degree + decimal minute (``N 47 36.372 W 122 19.926``)
- degree, minute, second (``N 47º 36' 22.32" W 122º 19' 55.56"``)

Hemisphere letters may lead or trail each value.  Glyphs are optional,
and components may be separated by spaces or hyphens.  Latitude and
longitude may be separated by whitespace, a comma or a semicolon.
Without hemisphere letters the first value is latitude.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from geocoord.codec._constants import (
    DEGREE_GLYPHS,
    MAX_GROUP_NUMBERS,
    MINUTE_GLYPHS,
    PAIR_NUMBER_COUNTS,
    PAIR_SEPARATORS,
    SECOND_GLYPHS,
    SEPARATOR_HYPHEN,
    TOKEN,
)
from geocoord.core.exceptions import FormatError, RangeError
from geocoord.models.angle import AngleValue, Axis, Hemisphere

logger = logging.getLogger("geocoord.codec.parse")

_BLANKED = str.maketrans(
    {ch: " " for ch in DEGREE_GLYPHS + MINUTE_GLYPHS + SECOND_GLYPHS + PAIR_SEPARATORS}
)


class _Rejected(Exception):
    """Internal signal: text matches no grammar."""


@dataclass(frozen=True, slots=True)
class _Token:
    kind: str
    text: str


# ---------------------------------------------------------------------------
# Tokenising
# ---------------------------------------------------------------------------


def _normalize(text: str) -> str:
    upper = text.strip().upper()
    upper = SEPARATOR_HYPHEN.sub(" ", upper)
    return upper.translate(_BLANKED)


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    previous = ""
    for match in TOKEN.finditer(_normalize(text)):
        kind = match.lastgroup or "invalid"
        if kind == "invalid":
            msg = f"unexpected character {match.group()!r}"
            raise _Rejected(msg)
        if kind == "number" and previous == "number":
            msg = "numbers must be separated"
            raise _Rejected(msg)
        previous = kind
        if kind != "space":
            tokens.append(_Token(kind, match.group()))
    if not tokens:
        msg = "empty input"
        raise _Rejected(msg)
    return tokens


# ---------------------------------------------------------------------------
# Building angles
# ---------------------------------------------------------------------------


def _build(numbers: list[str], hemisphere: Hemisphere | None, axis: Axis) -> AngleValue:
    """Turn one group of 1-3 numeric tokens into an angle."""
    if not 1 <= len(numbers) <= MAX_GROUP_NUMBERS:
        msg = f"expected 1 to {MAX_GROUP_NUMBERS} numbers per value, got {len(numbers)}"
        raise _Rejected(msg)
    if any(n[0] in "+-" for n in numbers[1:]):
        msg = "only the leading component may carry a sign"
        raise _Rejected(msg)

    sign = numbers[0][0] if numbers[0][0] in "+-" else ""
    if hemisphere is not None:
        if hemisphere.axis is not axis:
            msg = f"hemisphere {hemisphere.value} does not match axis {axis.name}"
            raise _Rejected(msg)
        if (sign == "-" and not hemisphere.is_negative) or (sign == "+" and hemisphere.is_negative):
            msg = f"sign {sign} conflicts with hemisphere {hemisphere.value}"
            raise _Rejected(msg)
    else:
        hemisphere = axis.negative if sign == "-" else axis.positive

    values = [abs(float(n)) for n in numbers]
    try:
        if len(values) == 1:
            magnitude = values[0]
            return AngleValue.from_decimal(
                -magnitude if hemisphere.is_negative else magnitude, axis
            )
        if len(values) == 2:
            return AngleValue.from_degree_decimal_minute(values[0], values[1], hemisphere)
        return AngleValue.from_dms(values[0], values[1], values[2], hemisphere)
    except RangeError as exc:
        raise _Rejected(exc.message) from exc


def _split_groups(tokens: list[_Token]) -> list[tuple[Hemisphere | None, list[str]]]:
    letters = [i for i, t in enumerate(tokens) if t.kind == "hemisphere"]

    if not letters:
        numbers = [t.text for t in tokens]
        if len(numbers) not in PAIR_NUMBER_COUNTS:
            msg = f"cannot split {len(numbers)} unlabelled numbers into latitude and longitude"
            raise _Rejected(msg)
        half = len(numbers) // 2
        return [(None, numbers[:half]), (None, numbers[half:])]

    if len(letters) != 2:
        msg = f"expected 0 or 2 hemisphere letters, got {len(letters)}"
        raise _Rejected(msg)

    first, second = letters
    last = len(tokens) - 1
    if first == 0 and second != last:
        spans = [(first, tokens[1:second]), (second, tokens[second + 1 :])]
    elif second == last and first != 0:
        spans = [(first, tokens[:first]), (second, tokens[first + 1 : second])]
    else:
        msg = "hemisphere letters must consistently lead or trail their values"
        raise _Rejected(msg)

    groups: list[tuple[Hemisphere | None, list[str]]] = []
    for index, span in spans:
        if any(t.kind != "number" for t in span):
            msg = "misplaced hemisphere letter"
            raise _Rejected(msg)
        groups.append((Hemisphere(tokens[index].text), [t.text for t in span]))
    return groups


def _parse_pair(text: str) -> tuple[AngleValue, AngleValue]:
    groups = _split_groups(_tokenize(text))
    (first_hemi, first_nums), (second_hemi, second_nums) = groups

    if first_hemi is None or second_hemi is None:
        return _build(first_nums, None, Axis.LAT), _build(second_nums, None, Axis.LONG)

    if first_hemi.axis is second_hemi.axis:
        msg = f"both values use {first_hemi.axis.name} hemispheres"
        raise _Rejected(msg)
    if first_hemi.axis is Axis.LONG:
        first_hemi, first_nums, second_hemi, second_nums = (
            second_hemi,
            second_nums,
            first_hemi,
            first_nums,
        )
    return _build(first_nums, first_hemi, Axis.LAT), _build(second_nums, second_hemi, Axis.LONG)


def _parse_single(text: str, axis: Axis | None) -> AngleValue:
    tokens = _tokenize(text)
    letters = [i for i, t in enumerate(tokens) if t.kind == "hemisphere"]
    hemisphere: Hemisphere | None = None

    if len(letters) > 1:
        msg = "a single value takes at most one hemisphere letter"
        raise _Rejected(msg)
    if letters:
        index = letters[0]
        if index not in (0, len(tokens) - 1) or len(tokens) == 1:
            msg = "hemisphere letter must lead or trail the value"
            raise _Rejected(msg)
        hemisphere = Hemisphere(tokens[index].text)
        if axis is not None and hemisphere.axis is not axis:
            msg = f"hemisphere {hemisphere.value} does not match requested axis {axis.name}"
            raise _Rejected(msg)
        axis = hemisphere.axis
        tokens = tokens[1:] if index == 0 else tokens[:-1]

    return _build([t.text for t in tokens], hemisphere, axis or Axis.LAT)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def try_parse(text: str) -> tuple[AngleValue, AngleValue] | None:
    """Parse a latitude/longitude pair; ``None`` if *text* is not a coordinate."""
    if not isinstance(text, str):
        return None
    try:
        return _parse_pair(text)
    except _Rejected as exc:
        logger.debug("Coordinate text rejected | text=%r | reason=%s", text, exc)
        return None


def parse(text: str) -> tuple[AngleValue, AngleValue]:
    """Parse a latitude/longitude pair.

    Raises:
        FormatError: If *text* matches no coordinate grammar or a
            component is out of range.
    """
    result = try_parse(text)
    if result is None:
        msg = f"Unrecognised coordinate text: {text!r}"
        raise FormatError(msg, field="text")
    return result


def try_parse_angle(text: str, axis: Axis | None = None) -> AngleValue | None:
    """Parse one latitude or longitude value.

    A hemisphere letter in *text* decides the axis; otherwise *axis* is
    used, defaulting to latitude.  Returns ``None`` on failure.
    """
    if not isinstance(text, str):
        return None
    try:
        return _parse_single(text, axis)
    except _Rejected as exc:
        logger.debug("Angle text rejected | text=%r | reason=%s", text, exc)
        return None


def parse_angle(text: str, axis: Axis | None = None) -> AngleValue:
    """Parse one latitude or longitude value, raising ``FormatError`` on failure."""
    result = try_parse_angle(text, axis)
    if result is None:
        msg = f"Unrecognised angle text: {text!r}"
        raise FormatError(msg, field="text")
    return result
