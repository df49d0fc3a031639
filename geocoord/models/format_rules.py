"""Display rules for rendering coordinates as text.

``FormatRules`` is an immutable snapshot; change it by building a new
one (``rules.replace(style=...)``) and assigning it to the owning
``Position``.
"""

from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass

from geocoord.core.constants import (
    DEGREE_SYMBOL,
    MAX_ROUNDING,
    MINUTE_SYMBOL,
    SECOND_SYMBOL,
)
from geocoord.core.exceptions import RangeError


class FormatStyle(enum.Enum):
    """Text layout of a rendered coordinate.

    Values:
        DECIMAL:               Signed decimal degrees (``-122.3321``).
        DECIMAL_DEGREE:        Unsigned degrees with hemisphere (``W 122.3321º``).
        DEGREE_DECIMAL_MINUTE: Degrees and decimal minutes (``W 122º 19.926'``).
        DEGREE_MINUTE_SECOND:  Degrees, minutes, seconds (``W 122º 19' 55.56"``).
    """

    DECIMAL = "decimal"
    DECIMAL_DEGREE = "decimal-degree"
    DEGREE_DECIMAL_MINUTE = "degree-decimal-minute"
    DEGREE_MINUTE_SECOND = "degree-minute-second"

    @property
    def default_rounding(self) -> int:
        """Fractional digits used when ``FormatRules.rounding`` is unset."""
        return _DEFAULT_ROUNDING[self]


_DEFAULT_ROUNDING: dict[FormatStyle, int] = {
    FormatStyle.DECIMAL: 9,
    FormatStyle.DECIMAL_DEGREE: 6,
    FormatStyle.DEGREE_DECIMAL_MINUTE: 3,
    FormatStyle.DEGREE_MINUTE_SECOND: 3,
}


@dataclass(frozen=True, slots=True)
class FormatRules:
    """How an angle (or a latitude/longitude pair) renders to text.

    Attributes:
        style: Target layout.
        rounding: Fractional digits for the last numeric component;
            ``None`` selects the style default (9/6/3/3).
        leading_zeros: Zero-pad degrees (2 digits latitude, 3 longitude)
            and minutes/seconds (2 digits).
        trailing_zeros: Pad fractions to ``rounding`` digits instead of
            trimming them.
        symbols: Master switch for the degree/minute/second glyphs.
        degree_symbol: Show ``º`` when ``symbols`` is on.
        minute_symbol: Show ``'`` when ``symbols`` is on.
        second_symbol: Show ``"`` when ``symbols`` is on.
        hyphens: Separate components with ``-`` instead of a space.
        position_first: Put the hemisphere letter before the value.
    """

    style: FormatStyle = FormatStyle.DEGREE_MINUTE_SECOND
    rounding: int | None = None
    leading_zeros: bool = False
    trailing_zeros: bool = False
    symbols: bool = True
    degree_symbol: bool = True
    minute_symbol: bool = True
    second_symbol: bool = True
    hyphens: bool = False
    position_first: bool = True

    def __post_init__(self) -> None:
        if not isinstance(self.style, FormatStyle):
            try:
                object.__setattr__(self, "style", FormatStyle(self.style))
            except ValueError as exc:
                msg = f"Unknown format style {self.style!r}"
                raise RangeError(msg, field="style") from exc
        if self.rounding is not None and not 0 <= self.rounding <= MAX_ROUNDING:
            msg = f"Rounding {self.rounding} is outside allowed range [0, {MAX_ROUNDING}]"
            raise RangeError(msg, field="rounding")

    @property
    def effective_rounding(self) -> int:
        """Rounding actually applied: explicit value or the style default."""
        if self.rounding is None:
            return self.style.default_rounding
        return self.rounding

    @property
    def separator(self) -> str:
        return "-" if self.hyphens else " "

    @property
    def degree_glyph(self) -> str:
        return DEGREE_SYMBOL if self.symbols and self.degree_symbol else ""

    @property
    def minute_glyph(self) -> str:
        return MINUTE_SYMBOL if self.symbols and self.minute_symbol else ""

    @property
    def second_glyph(self) -> str:
        return SECOND_SYMBOL if self.symbols and self.second_symbol else ""

    def replace(self, **changes: object) -> FormatRules:
        """Return a copy with *changes* applied (validated like the constructor)."""
        return dataclasses.replace(self, **changes)  # type: ignore[arg-type]


DEFAULT_FORMAT_RULES = FormatRules()
