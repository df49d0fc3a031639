"""Data model for one coordinate axis.

An ``AngleValue`` keeps five numeric fields (signed decimal degree,
degrees, minutes, seconds, decimal minute) and a hemisphere letter in
lock-step.  Every setter validates first, then re-derives the other
fields from the one just written, so the following always hold:

1. Latitude uses N/S, longitude uses E/W.
2. ``|decimal_degree|`` is at most 90 (latitude) or 180 (longitude).
3. ``decimal_degree`` is negative exactly for S/W.
4. ``decimal_degree == sign * (degrees + minutes/60 + seconds/3600)``
   within float tolerance, and ``decimal_minute == minutes + seconds/60``.
5. ``0 <= minutes < 60`` and ``0 <= seconds < 60``.

Derivations run through ``decimal.Decimal`` built from the shortest
float repr, so ``47.6062`` splits into ``47º 36' 22.32"`` exactly.

An angle owned by a ``Position`` keeps only a weak reference to it and
forwards each committed change so the position can refresh its derived
representations.
"""

from __future__ import annotations

import enum
import logging
import math
import weakref
from collections.abc import Callable
from decimal import Decimal
from typing import TYPE_CHECKING

from geocoord.core.constants import (
    MAX_LATITUDE,
    MAX_LONGITUDE,
    MINUTES_PER_DEGREE,
    SECONDS_PER_MINUTE,
)
from geocoord.core.exceptions import RangeError, TypeMismatchError

if TYPE_CHECKING:
    from geocoord.models.format_rules import FormatRules
    from geocoord.orchestrators.position import Position

logger = logging.getLogger("geocoord.models.angle")

ChangeListener = Callable[[object, tuple[str, ...]], None]

# Fields reported per setter; coupled fields move together.
_DECIMAL_DEGREE_FIELDS = (
    "decimal_degree",
    "decimal_minute",
    "degrees",
    "minutes",
    "seconds",
    "hemisphere",
    "display",
)
_DECIMAL_MINUTE_FIELDS = ("decimal_degree", "decimal_minute", "minutes", "seconds", "display")
_DEGREES_FIELDS = ("decimal_degree", "degrees", "display")
_MINUTES_FIELDS = ("decimal_degree", "decimal_minute", "minutes", "display")
_SECONDS_FIELDS = ("decimal_degree", "decimal_minute", "seconds", "display")
_HEMISPHERE_FIELDS = ("decimal_degree", "hemisphere", "display")

_SIXTY = Decimal(60)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Axis(enum.Enum):
    """Coordinate axis.  Fixed for the life of an ``AngleValue``."""

    LAT = "lat"
    LONG = "long"

    @property
    def bound(self) -> float:
        """Maximum absolute decimal degree on this axis."""
        return MAX_LATITUDE if self is Axis.LAT else MAX_LONGITUDE

    @property
    def positive(self) -> Hemisphere:
        return Hemisphere.N if self is Axis.LAT else Hemisphere.E

    @property
    def negative(self) -> Hemisphere:
        return Hemisphere.S if self is Axis.LAT else Hemisphere.W


class Hemisphere(enum.Enum):
    """Directional label encoding an angle's sign and axis."""

    N = "N"
    S = "S"
    E = "E"
    W = "W"

    @property
    def axis(self) -> Axis:
        return Axis.LAT if self in (Hemisphere.N, Hemisphere.S) else Axis.LONG

    @property
    def is_negative(self) -> bool:
        return self in (Hemisphere.S, Hemisphere.W)

    def __str__(self) -> str:
        return self.value


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _to_decimal(value: float) -> Decimal:
    """Exact decimal of the shortest repr of *value*."""
    return Decimal(repr(float(value)))


def _require_finite(value: float, field: str) -> float:
    value = float(value)
    if not math.isfinite(value):
        msg = f"{field} must be a finite number, got {value!r}"
        raise RangeError(msg, field=field)
    return value


def _require_whole(value: float, field: str) -> int:
    if isinstance(value, bool) or float(value) != int(value):
        msg = f"{field} must be a whole number, got {value!r}"
        raise RangeError(msg, field=field)
    return int(value)


def _coerce_hemisphere(value: Hemisphere | str) -> Hemisphere:
    if isinstance(value, Hemisphere):
        return value
    try:
        return Hemisphere(str(value).strip().upper())
    except ValueError as exc:
        msg = f"Unknown hemisphere {value!r}; expected one of N, S, E, W"
        raise RangeError(msg, field="hemisphere") from exc


def _check_total(axis: Axis, total: Decimal | float, field: str) -> None:
    if total > axis.bound:
        name = "Latitude" if axis is Axis.LAT else "Longitude"
        msg = f"{name} degrees cannot be greater than {axis.bound:g} (got {float(total)!r})"
        raise RangeError(msg, field=field)


def _check_subunit(value: float, field: str) -> None:
    if value < 0:
        msg = f"{field} cannot be less than 0 (got {value!r})"
        raise RangeError(msg, field=field)
    if value >= MINUTES_PER_DEGREE:
        msg = f"{field} cannot be greater than or equal to 60 (got {value!r})"
        raise RangeError(msg, field=field)


# ---------------------------------------------------------------------------
# AngleValue
# ---------------------------------------------------------------------------


class AngleValue:
    """Observable latitude or longitude value.

    Create with one of the ``from_*`` constructors, or ``AngleValue(axis)``
    for a zero angle.  Field assignment is the only way to mutate it.

    Example::

        lat = AngleValue.from_decimal(47.6062, Axis.LAT)
        lat.degrees, lat.minutes, lat.seconds   # (47, 36, 22.32)
        lat.hemisphere = Hemisphere.S           # decimal_degree -> -47.6062
    """

    def __init__(self, axis: Axis = Axis.LAT) -> None:
        self._axis = Axis(axis)
        self._decimal_degree = 0.0
        self._degrees = 0
        self._minutes = 0
        self._seconds = 0.0
        self._decimal_minute = 0.0
        self._hemisphere = self._axis.positive
        self._owner_ref: weakref.ReferenceType[Position] | None = None
        self._listeners: list[ChangeListener] = []

    # ------------------------------------------------------------------
    # Constructors
    # ------------------------------------------------------------------

    @classmethod
    def from_decimal(cls, value: float, axis: Axis) -> AngleValue:
        """Build from signed decimal degrees; sign selects the hemisphere.

        Raises:
            RangeError: If ``|value|`` exceeds the axis bound.
        """
        angle = cls(axis)
        value = _require_finite(value, "decimal_degree")
        _check_total(angle._axis, abs(value), "decimal_degree")
        angle._apply_decimal_degree(value)
        return angle

    @classmethod
    def from_dms(
        cls,
        degrees: int,
        minutes: int,
        seconds: float,
        hemisphere: Hemisphere | str,
    ) -> AngleValue:
        """Build from a degrees/minutes/seconds triple.

        The hemisphere selects both the axis and the sign.

        Raises:
            RangeError: If a component is negative, minutes or seconds are
                60 or more, or the total exceeds the axis bound.
        """
        hemi = _coerce_hemisphere(hemisphere)
        if degrees < 0:
            msg = f"degrees cannot be less than 0 (got {degrees!r})"
            raise RangeError(msg, field="degrees")
        deg = _require_whole(degrees, "degrees")
        seconds = _require_finite(seconds, "seconds")
        _check_subunit(minutes, "minutes")
        mins = _require_whole(minutes, "minutes")
        _check_subunit(seconds, "seconds")

        decimal_minute = mins + _to_decimal(seconds) / SECONDS_PER_MINUTE
        total = deg + decimal_minute / MINUTES_PER_DEGREE
        _check_total(hemi.axis, total, "degrees")

        angle = cls(hemi.axis)
        angle._degrees = deg
        angle._minutes = mins
        angle._seconds = seconds
        angle._decimal_minute = float(decimal_minute)
        angle._hemisphere = hemi
        angle._decimal_degree = float(-total if hemi.is_negative else total)
        return angle

    @classmethod
    def from_degree_decimal_minute(
        cls,
        degrees: int,
        decimal_minute: float,
        hemisphere: Hemisphere | str,
    ) -> AngleValue:
        """Build from whole degrees plus decimal minutes.

        Raises:
            RangeError: Same bounds as ``from_dms`` applied to
                ``degrees + decimal_minute / 60``.
        """
        hemi = _coerce_hemisphere(hemisphere)
        if degrees < 0:
            msg = f"degrees cannot be less than 0 (got {degrees!r})"
            raise RangeError(msg, field="degrees")
        deg = _require_whole(degrees, "degrees")
        decimal_minute = _require_finite(decimal_minute, "decimal_minute")
        _check_subunit(decimal_minute, "decimal_minute")

        dm = _to_decimal(decimal_minute)
        total = deg + dm / MINUTES_PER_DEGREE
        _check_total(hemi.axis, total, "degrees")

        angle = cls(hemi.axis)
        minutes = int(dm)
        angle._degrees = deg
        angle._decimal_minute = decimal_minute
        angle._minutes = minutes
        angle._seconds = float((dm - minutes) * SECONDS_PER_MINUTE)
        angle._hemisphere = hemi
        angle._decimal_degree = float(-total if hemi.is_negative else total)
        return angle

    @classmethod
    def try_parse(cls, text: str, axis: Axis | None = None) -> AngleValue | None:
        """Parse single-axis text; ``None`` if it is not a valid coordinate."""
        from geocoord.codec import try_parse_angle

        return try_parse_angle(text, axis)

    def copy(self) -> AngleValue:
        """Return a detached copy (no owner, no listeners)."""
        clone = AngleValue(self._axis)
        clone._decimal_degree = self._decimal_degree
        clone._degrees = self._degrees
        clone._minutes = self._minutes
        clone._seconds = self._seconds
        clone._decimal_minute = self._decimal_minute
        clone._hemisphere = self._hemisphere
        return clone

    # ------------------------------------------------------------------
    # Read-only attributes
    # ------------------------------------------------------------------

    @property
    def axis(self) -> Axis:
        return self._axis

    @property
    def owner(self) -> Position | None:
        """Owning position, if it is still alive."""
        return self._owner_ref() if self._owner_ref is not None else None

    @property
    def display(self) -> str:
        """Text rendered with the owner's format rules, or the defaults."""
        owner = self.owner
        return self.to_string(owner.format_rules if owner is not None else None)

    # ------------------------------------------------------------------
    # Observable fields
    # ------------------------------------------------------------------

    @property
    def decimal_degree(self) -> float:
        """Signed decimal degrees (negative for S/W)."""
        return self._decimal_degree

    @decimal_degree.setter
    def decimal_degree(self, value: float) -> None:
        if value == self._decimal_degree:
            return
        value = _require_finite(value, "decimal_degree")
        _check_total(self._axis, abs(value), "decimal_degree")
        self._apply_decimal_degree(value)
        self._committed(_DECIMAL_DEGREE_FIELDS)

    @property
    def decimal_minute(self) -> float:
        """Minutes plus fractional seconds, ``minutes + seconds / 60``."""
        return self._decimal_minute

    @decimal_minute.setter
    def decimal_minute(self, value: float) -> None:
        if value == self._decimal_minute:
            return
        value = abs(_require_finite(value, "decimal_minute"))
        _check_subunit(value, "decimal_minute")
        dm = _to_decimal(value)
        total = self._degrees + dm / MINUTES_PER_DEGREE
        _check_total(self._axis, total, "decimal_minute")

        minutes = int(dm)
        self._decimal_minute = value
        self._minutes = minutes
        self._seconds = float((dm - minutes) * SECONDS_PER_MINUTE)
        self._decimal_degree = self._signed(total)
        self._committed(_DECIMAL_MINUTE_FIELDS)

    @property
    def degrees(self) -> int:
        """Whole degrees of ``|decimal_degree|``."""
        return self._degrees

    @degrees.setter
    def degrees(self, value: int) -> None:
        if value == self._degrees:
            return
        value = _require_whole(abs(value), "degrees")
        total = value + _to_decimal(self._decimal_minute) / MINUTES_PER_DEGREE
        _check_total(self._axis, total, "degrees")

        self._degrees = value
        self._decimal_degree = self._signed(total)
        self._committed(_DEGREES_FIELDS)

    @property
    def minutes(self) -> int:
        return self._minutes

    @minutes.setter
    def minutes(self, value: int) -> None:
        if value == self._minutes:
            return
        value = abs(value)
        _check_subunit(value, "minutes")
        value = _require_whole(value, "minutes")
        decimal_minute = value + _to_decimal(self._seconds) / SECONDS_PER_MINUTE
        total = self._degrees + decimal_minute / MINUTES_PER_DEGREE
        _check_total(self._axis, total, "minutes")

        self._minutes = value
        self._decimal_minute = float(decimal_minute)
        self._decimal_degree = self._signed(total)
        self._committed(_MINUTES_FIELDS)

    @property
    def seconds(self) -> float:
        return self._seconds

    @seconds.setter
    def seconds(self, value: float) -> None:
        value = abs(_require_finite(value, "seconds"))
        if value == self._seconds:
            return
        _check_subunit(value, "seconds")
        decimal_minute = self._minutes + _to_decimal(value) / SECONDS_PER_MINUTE
        total = self._degrees + decimal_minute / MINUTES_PER_DEGREE
        _check_total(self._axis, total, "seconds")

        self._seconds = value
        self._decimal_minute = float(decimal_minute)
        self._decimal_degree = self._signed(total)
        self._committed(_SECONDS_FIELDS)

    @property
    def hemisphere(self) -> Hemisphere:
        return self._hemisphere

    @hemisphere.setter
    def hemisphere(self, value: Hemisphere | str) -> None:
        value = _coerce_hemisphere(value)
        if value is self._hemisphere:
            return
        if value.axis is not self._axis:
            msg = (
                f"Cannot change a {self._axis.name} coordinate to hemisphere {value.value}; "
                "latitude uses N/S and longitude uses E/W"
            )
            raise TypeMismatchError(msg, field="hemisphere")
        self._decimal_degree = -self._decimal_degree
        self._hemisphere = value
        self._committed(_HEMISPHERE_FIELDS)

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def to_radians(self) -> float:
        return self._decimal_degree * math.pi / 180

    def to_string(self, rules: FormatRules | None = None) -> str:
        """Render with *rules* (defaults to degree-minute-second)."""
        from geocoord.codec import render_angle

        return render_angle(self, rules)

    def __float__(self) -> float:
        return self._decimal_degree

    def __str__(self) -> str:
        return self.display

    def __repr__(self) -> str:
        return (
            f"AngleValue(decimal_degree={self._decimal_degree!r}, "
            f"hemisphere={self._hemisphere.value!r})"
        )

    # ------------------------------------------------------------------
    # Notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it.

        Listeners receive ``(angle, changed_field_names)`` once per
        committed mutation.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _attach(self, owner: Position) -> None:
        self._owner_ref = weakref.ref(owner)

    def _detach(self) -> None:
        self._owner_ref = None

    def _committed(self, fields: tuple[str, ...]) -> None:
        logger.debug(
            "Angle changed | axis=%s | decimal_degree=%r | fields=%s",
            self._axis.value,
            self._decimal_degree,
            ",".join(fields),
        )
        for listener in list(self._listeners):
            listener(self, fields)
        owner = self.owner
        if owner is not None:
            owner._angle_changed(self)

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def _signed(self, magnitude: Decimal) -> float:
        return float(-magnitude if self._hemisphere.is_negative else magnitude)

    def _apply_decimal_degree(self, value: float) -> None:
        magnitude = abs(_to_decimal(value))
        degrees = int(magnitude)
        decimal_minute = (magnitude - degrees) * _SIXTY
        minutes = int(decimal_minute)

        self._decimal_degree = value
        self._hemisphere = self._axis.negative if value < 0 else self._axis.positive
        self._degrees = degrees
        self._decimal_minute = float(decimal_minute)
        self._minutes = minutes
        self._seconds = float((decimal_minute - minutes) * _SIXTY)
