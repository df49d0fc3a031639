"""Position orchestrator: cascading recompute of derived representations.

A ``Position`` owns a latitude and a longitude ``AngleValue`` plus an
observation instant, height, ellipsoid, display rules and load policy.
Every mutation runs the same sequence before returning:

1. **Validating**: reject bad input (axis mismatch, out of range)
   before anything is overwritten.
2. **Committed**: the field is overwritten.
3. **Propagating**: each dependent representation is recomputed
   through its collaborator when the load policy marks it eager, or
   reset to ``Unloaded`` when it does not.
4. **Idle**: subscribers receive one batch naming every property that
   changed or was refreshed.

Dependencies:
    latitude / longitude   -> celestial, grid (+ mgrs), cartesian, earth_centered
    observation_instant    -> celestial
    height                 -> earth_centered
    ellipsoid              -> grid (+ mgrs), earth_centered

A collaborator that rejects valid input (e.g. UTM beyond 84°N) leaves
its slot ``Failed`` and logs a warning; the mutation itself commits.
"""

from __future__ import annotations

import contextlib
import enum
import logging
import math
from collections.abc import Callable, Iterator
from typing import TYPE_CHECKING, Any

from geocoord.codec import parse_angle, render_pair
from geocoord.codec import try_parse as try_parse_pair
from geocoord.core.exceptions import (
    FormatError,
    PrecursorNotLoadedError,
    ProviderError,
    RangeError,
    TypeMismatchError,
)
from geocoord.models.angle import AngleValue, Axis
from geocoord.models.derived import (
    UNLOADED,
    WGS84,
    Cartesian,
    DerivedState,
    EarthShape,
    Ellipsoid,
    Failed,
    Loaded,
    LoadPolicy,
    Unloaded,
)
from geocoord.models.format_rules import DEFAULT_FORMAT_RULES, FormatRules
from geocoord.providers.base import Providers
from geocoord.utils.helpers import coerce_instant

if TYPE_CHECKING:
    from datetime import date, datetime

    from geocoord.core.config import GeoConfig
    from geocoord.models.derived import (
        CelestialResult,
        Distance,
        EarthCenteredResult,
        GridResult,
        MgrsResult,
    )

logger = logging.getLogger("geocoord.orchestrators.position")

PositionListener = Callable[["Position", tuple[str, ...]], None]

# ---------------------------------------------------------------------------
# Derived slots and their dependencies
# ---------------------------------------------------------------------------

CELESTIAL = "celestial"
GRID = "grid"
MGRS = "mgrs"
CARTESIAN = "cartesian"
EARTH_CENTERED = "earth_centered"

SLOT_NAMES = (CELESTIAL, GRID, MGRS, CARTESIAN, EARTH_CENTERED)

# MGRS is refreshed with grid and never listed on its own.
_ANGLE_DEPENDENTS = (CELESTIAL, GRID, CARTESIAN, EARTH_CENTERED)
_INSTANT_DEPENDENTS = (CELESTIAL,)
_HEIGHT_DEPENDENTS = (EARTH_CENTERED,)
_ELLIPSOID_DEPENDENTS = (GRID, EARTH_CENTERED)


class MutationPhase(enum.Enum):
    """Where a ``Position`` is in its mutation sequence."""

    IDLE = "idle"
    VALIDATING = "validating"
    COMMITTED = "committed"
    PROPAGATING = "propagating"


# ---------------------------------------------------------------------------
# Position
# ---------------------------------------------------------------------------


class Position:
    """One geographic point with synchronised derived representations.

    Args:
        latitude: Signed decimal degrees, coordinate text, or a latitude
            ``AngleValue``.
        longitude: Signed decimal degrees, coordinate text, or a longitude
            ``AngleValue``.
        observation_instant: ``datetime`` (naive is UTC), ``date`` or ISO
            8601 string; defaults to 1900-01-01T00:00:00Z.
        load_policy: Which representations recompute eagerly.
        format_rules: Display rules for ``display`` / ``str()``.
        ellipsoid: Reference ellipsoid (default WGS 84).
        height: Height above the ellipsoid in metres.
        providers: Collaborator bundle; resolved from the factory if omitted.
        config: ``GeoConfig`` supplying defaults for anything not passed.

    Raises:
        RangeError: If a coordinate is out of range.
        TypeMismatchError: If an ``AngleValue`` of the wrong axis is given.

    Example::

        pos = Position(47.6062, -122.3321, load_policy=LoadPolicy.lazy())
        pos.load_grid()
        str(pos.mgrs)      # "10T ET 50200 72748"
        pos.latitude.hemisphere = Hemisphere.S
    """

    def __init__(
        self,
        latitude: float | str | AngleValue = 0.0,
        longitude: float | str | AngleValue = 0.0,
        observation_instant: datetime | date | str | None = None,
        *,
        load_policy: LoadPolicy | None = None,
        format_rules: FormatRules | None = None,
        ellipsoid: Ellipsoid | None = None,
        height: float = 0.0,
        providers: Providers | None = None,
        config: GeoConfig | None = None,
    ) -> None:
        self._config = config
        self._providers = providers or Providers(config)
        self._load_policy = load_policy or (config.load_policy() if config else LoadPolicy())
        self._format_rules = format_rules or (
            config.format_rules() if config else DEFAULT_FORMAT_RULES
        )
        self._ellipsoid = ellipsoid or (config.ellipsoid() if config else WGS84)
        self._height = _finite(height, "height")
        self._instant = coerce_instant(observation_instant)
        self._phase = MutationPhase.IDLE
        self._listeners: list[PositionListener] = []
        self._slots: dict[str, DerivedState] = dict.fromkeys(SLOT_NAMES, UNLOADED)
        self._grid_baseline = False

        self._latitude = self._coerce_angle(latitude, Axis.LAT, "latitude")
        self._longitude = self._coerce_angle(longitude, Axis.LONG, "longitude")
        self._latitude._attach(self)
        self._longitude._attach(self)

        self._propagate(_ANGLE_DEPENDENTS)
        logger.debug(
            "Position created | lat=%r | lon=%r | policy=%s",
            self._latitude.decimal_degree,
            self._longitude.decimal_degree,
            self._load_policy,
        )

    # ------------------------------------------------------------------
    # Alternate constructors
    # ------------------------------------------------------------------

    @classmethod
    def try_parse(
        cls,
        text: str,
        observation_instant: datetime | date | str | None = None,
        **kwargs: Any,
    ) -> Position | None:
        """Build a position from coordinate text; ``None`` if it does not parse."""
        parsed = try_parse_pair(text)
        if parsed is None:
            return None
        latitude, longitude = parsed
        return cls(latitude, longitude, observation_instant, **kwargs)

    @classmethod
    def parse(
        cls,
        text: str,
        observation_instant: datetime | date | str | None = None,
        **kwargs: Any,
    ) -> Position:
        """Build a position from coordinate text.

        Raises:
            FormatError: If *text* is not a recognised coordinate pair.
        """
        position = cls.try_parse(text, observation_instant, **kwargs)
        if position is None:
            msg = f"Unrecognised coordinate text: {text!r}"
            raise FormatError(msg, field="text")
        return position

    # ------------------------------------------------------------------
    # Coordinates
    # ------------------------------------------------------------------

    @property
    def latitude(self) -> AngleValue:
        return self._latitude

    @latitude.setter
    def latitude(self, value: float | str | AngleValue) -> None:
        self._replace_angle(value, Axis.LAT, "latitude")

    @property
    def longitude(self) -> AngleValue:
        return self._longitude

    @longitude.setter
    def longitude(self, value: float | str | AngleValue) -> None:
        self._replace_angle(value, Axis.LONG, "longitude")

    # ------------------------------------------------------------------
    # Context fields
    # ------------------------------------------------------------------

    @property
    def observation_instant(self) -> datetime:
        """Observation instant (aware, UTC) used for celestial data."""
        return self._instant

    @observation_instant.setter
    def observation_instant(self, value: datetime | date | str | None) -> None:
        with self._validating():
            instant = coerce_instant(value)
        if instant == self._instant:
            return

        def commit() -> None:
            self._instant = instant

        self._mutate("observation_instant", commit, _INSTANT_DEPENDENTS)

    @property
    def height(self) -> float:
        """Height above the ellipsoid in metres."""
        return self._height

    @height.setter
    def height(self, value: float) -> None:
        with self._validating():
            height = _finite(value, "height")
        if height == self._height:
            return

        def commit() -> None:
            self._height = height

        self._mutate("height", commit, _HEIGHT_DEPENDENTS)

    @property
    def ellipsoid(self) -> Ellipsoid:
        return self._ellipsoid

    @ellipsoid.setter
    def ellipsoid(self, value: Ellipsoid) -> None:
        with self._validating():
            if not isinstance(value, Ellipsoid):
                msg = f"ellipsoid must be an Ellipsoid, got {type(value).__name__}"
                raise TypeError(msg)
        if value == self._ellipsoid:
            return

        def commit() -> None:
            self._ellipsoid = value

        self._mutate("ellipsoid", commit, _ELLIPSOID_DEPENDENTS)

    @property
    def format_rules(self) -> FormatRules:
        return self._format_rules

    @format_rules.setter
    def format_rules(self, value: FormatRules) -> None:
        with self._validating():
            if not isinstance(value, FormatRules):
                msg = f"format_rules must be FormatRules, got {type(value).__name__}"
                raise TypeError(msg)
        if value == self._format_rules:
            return

        def commit() -> None:
            self._format_rules = value

        self._mutate("format_rules", commit, (), extra=("display",))

    @property
    def load_policy(self) -> LoadPolicy:
        """Eager-load policy applied to future mutations."""
        return self._load_policy

    @load_policy.setter
    def load_policy(self, value: LoadPolicy) -> None:
        with self._validating():
            if not isinstance(value, LoadPolicy):
                msg = f"load_policy must be LoadPolicy, got {type(value).__name__}"
                raise TypeError(msg)
        if value == self._load_policy:
            return

        def commit() -> None:
            self._load_policy = value

        self._mutate("load_policy", commit, ())

    @property
    def phase(self) -> MutationPhase:
        return self._phase

    @property
    def providers(self) -> Providers:
        return self._providers

    # ------------------------------------------------------------------
    # Derived representations
    # ------------------------------------------------------------------

    def derived_state(self, slot: str) -> DerivedState:
        """Return the load state of *slot* (``Unloaded``, ``Loaded`` or ``Failed``).

        Raises:
            ValueError: If *slot* is not a derived representation name.
        """
        if slot not in self._slots:
            msg = f"Unknown derived representation {slot!r}; expected one of {SLOT_NAMES}"
            raise ValueError(msg)
        return self._slots[slot]

    def _value(self, slot: str) -> Any:
        state = self._slots[slot]
        return state.value if isinstance(state, Loaded) else None

    @property
    def celestial(self) -> CelestialResult | None:
        return self._value(CELESTIAL)

    @property
    def grid(self) -> GridResult | None:
        """UTM coordinate, or ``None`` if not loaded or outside the UTM domain."""
        return self._value(GRID)

    @property
    def mgrs(self) -> MgrsResult | None:
        return self._value(MGRS)

    @property
    def cartesian(self) -> Cartesian | None:
        return self._value(CARTESIAN)

    @property
    def earth_centered(self) -> EarthCenteredResult | None:
        return self._value(EARTH_CENTERED)

    def load_celestial(self) -> CelestialResult | None:
        """Compute celestial data now, regardless of the load policy."""
        return self._load(CELESTIAL)

    def load_grid(self) -> GridResult | None:
        """Compute UTM and MGRS now, regardless of the load policy."""
        return self._load(GRID)

    def load_cartesian(self) -> Cartesian | None:
        return self._load(CARTESIAN)

    def load_earth_centered(self) -> EarthCenteredResult | None:
        return self._load(EARTH_CENTERED)

    def set_datum(self, equatorial_radius: float, inverse_flattening: float) -> None:
        """Rebase the grid representation onto a different ellipsoid.

        Updates the ellipsoid in place and recomputes UTM and MGRS.

        Raises:
            PrecursorNotLoadedError: If the grid was never loaded.
            RangeError: If either parameter is not positive.
        """
        with self._validating():
            if not self._grid_baseline:
                msg = (
                    "Grid representation has not been loaded; load it "
                    "(eagerly or with load_grid()) before setting a datum"
                )
                raise PrecursorNotLoadedError(msg, field="grid")
            ellipsoid = Ellipsoid(equatorial_radius, inverse_flattening)

        def commit() -> None:
            self._ellipsoid = ellipsoid

        logger.info(
            "Datum override | equatorial_radius=%s | inverse_flattening=%s",
            equatorial_radius,
            inverse_flattening,
        )
        self._mutate("ellipsoid", commit, (), forced=(GRID,))

    # ------------------------------------------------------------------
    # Distance and movement
    # ------------------------------------------------------------------

    def distance_to(self, other: Position, shape: EarthShape = EarthShape.SPHERE) -> Distance:
        """Distance and initial bearing from this position to *other*."""
        return self._providers.geodesic.inverse(
            (self._latitude.decimal_degree, self._longitude.decimal_degree),
            (other.latitude.decimal_degree, other.longitude.decimal_degree),
            EarthShape(shape),
            self._ellipsoid,
        )

    def move(
        self,
        distance_m: float,
        bearing_deg: float,
        shape: EarthShape = EarthShape.SPHERE,
    ) -> None:
        """Move this position *distance_m* metres along *bearing_deg*.

        The new coordinates are written through the angle setters, so
        derived representations cascade as for any other change.
        """
        geodesic = self._providers.geodesic
        latitude = self._latitude.to_radians()
        longitude = self._longitude.to_radians()
        bearing = math.radians(bearing_deg)

        if EarthShape(shape) is EarthShape.ELLIPSOID:
            lat2, lon2 = geodesic.direct_ellipsoidal(
                latitude, -longitude, bearing, distance_m, self._ellipsoid
            )
            lon2 = -lon2
        else:
            lat2, lon2 = geodesic.direct(latitude, longitude, bearing, distance_m)

        logger.debug(
            "Moving position | distance_m=%s | bearing=%s | shape=%s",
            distance_m,
            bearing_deg,
            EarthShape(shape).value,
        )
        self._latitude.decimal_degree = _clamp(math.degrees(lat2), Axis.LAT.bound)
        self._longitude.decimal_degree = _clamp(math.degrees(lon2), Axis.LONG.bound)

    def move_towards(
        self,
        target: Position,
        distance_m: float,
        shape: EarthShape = EarthShape.SPHERE,
    ) -> None:
        """Move *distance_m* metres along the initial bearing towards *target*."""
        bearing = self.distance_to(target, shape).bearing
        self.move(distance_m, bearing, shape)

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    @property
    def display(self) -> str:
        """Latitude and longitude rendered with ``format_rules``."""
        return render_pair(self._latitude, self._longitude, self._format_rules)

    def to_string(self, rules: FormatRules | None = None) -> str:
        """Render with *rules* instead of the position's own rules."""
        return render_pair(self._latitude, self._longitude, rules or self._format_rules)

    def __str__(self) -> str:
        return self.display

    def __repr__(self) -> str:
        return (
            f"Position(latitude={self._latitude.decimal_degree!r}, "
            f"longitude={self._longitude.decimal_degree!r}, "
            f"observation_instant={self._instant.isoformat()!r})"
        )

    # ------------------------------------------------------------------
    # Notification
    # ------------------------------------------------------------------

    def subscribe(self, listener: PositionListener) -> Callable[[], None]:
        """Register *listener*; returns a callable that unsubscribes it.

        Listeners receive ``(position, changed_property_names)`` once per
        mutation, after propagation has finished.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, names: list[str] | tuple[str, ...]) -> None:
        batch = tuple(dict.fromkeys(names))
        if not batch:
            return
        logger.debug("Position changed | properties=%s", ",".join(batch))
        for listener in list(self._listeners):
            listener(self, batch)

    # ------------------------------------------------------------------
    # Mutation sequence
    # ------------------------------------------------------------------

    @contextlib.contextmanager
    def _validating(self) -> Iterator[None]:
        self._phase = MutationPhase.VALIDATING
        try:
            yield
        finally:
            self._phase = MutationPhase.IDLE

    def _mutate(
        self,
        field: str,
        commit: Callable[[], None] | None,
        dependents: tuple[str, ...],
        *,
        extra: tuple[str, ...] = (),
        forced: tuple[str, ...] = (),
    ) -> None:
        try:
            if commit is not None:
                self._phase = MutationPhase.COMMITTED
                commit()
            self._phase = MutationPhase.PROPAGATING
            changed = [field, *extra, *self._propagate(dependents)]
            for slot in forced:
                changed.extend(self._refresh(slot))
        finally:
            self._phase = MutationPhase.IDLE
        self._notify(changed)

    def _coerce_angle(self, value: float | str | AngleValue, axis: Axis, field: str) -> AngleValue:
        if isinstance(value, AngleValue):
            if value.axis is not axis:
                msg = (
                    f"Cannot assign a {value.axis.name} value with hemisphere "
                    f"{value.hemisphere.value} to {field}"
                )
                raise TypeMismatchError(msg, field=field)
            owner = value.owner
            if owner is not None and owner is not self:
                return value.copy()
            return value
        if isinstance(value, str):
            return parse_angle(value, axis)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            msg = (
                f"{field} must be a number, coordinate text or AngleValue, "
                f"got {type(value).__name__}"
            )
            raise TypeError(msg)
        return AngleValue.from_decimal(value, axis)

    def _replace_angle(self, value: float | str | AngleValue, axis: Axis, field: str) -> None:
        current = self._latitude if axis is Axis.LAT else self._longitude
        with self._validating():
            angle = self._coerce_angle(value, axis, field)
        if angle is current:
            return
        if (
            not isinstance(value, AngleValue)
            and angle.decimal_degree == current.decimal_degree
            and angle.hemisphere is current.hemisphere
        ):
            return

        def commit() -> None:
            current._detach()
            angle._attach(self)
            if axis is Axis.LAT:
                self._latitude = angle
            else:
                self._longitude = angle

        self._mutate(field, commit, _ANGLE_DEPENDENTS, extra=("display",))

    def _angle_changed(self, angle: AngleValue) -> None:
        """Called by an owned angle after it committed a change."""
        if angle is self._latitude:
            field = "latitude"
        elif angle is self._longitude:
            field = "longitude"
        else:
            return
        self._mutate(field, None, _ANGLE_DEPENDENTS, extra=("display",))

    # ------------------------------------------------------------------
    # Propagation
    # ------------------------------------------------------------------

    def _eager(self, slot: str) -> bool:
        policy = self._load_policy
        return {
            CELESTIAL: policy.celestial,
            GRID: policy.grid,
            CARTESIAN: policy.cartesian,
            EARTH_CENTERED: policy.earth_centered,
        }[slot]

    def _propagate(self, dependents: tuple[str, ...]) -> list[str]:
        """Refresh or reset each dependent slot; return the names touched."""
        touched: list[str] = []
        for slot in dependents:
            if self._eager(slot):
                touched.extend(self._refresh(slot))
                continue
            for name in (GRID, MGRS) if slot == GRID else (slot,):
                if not isinstance(self._slots[name], Unloaded):
                    self._slots[name] = UNLOADED
                    touched.append(name)
        return touched

    def _load(self, slot: str) -> Any:
        self._phase = MutationPhase.PROPAGATING
        try:
            changed = self._refresh(slot)
        finally:
            self._phase = MutationPhase.IDLE
        self._notify(changed)
        return self._value(slot)

    def _refresh(self, slot: str) -> tuple[str, ...]:
        """Recompute *slot* through its collaborator; return the names refreshed."""
        latitude = self._latitude.decimal_degree
        longitude = self._longitude.decimal_degree
        try:
            if slot == CELESTIAL:
                result: Any = self._providers.celestial.compute(
                    latitude, longitude, self._instant
                )
            elif slot == GRID:
                self._grid_baseline = True
                result = self._providers.grid.project(latitude, longitude, self._ellipsoid)
                self._slots[MGRS] = Loaded(self._providers.mgrs.encode(result))
            elif slot == CARTESIAN:
                result = Cartesian.from_radians(
                    self._latitude.to_radians(), self._longitude.to_radians()
                )
            else:
                result = self._providers.earth_centered.to_ecef(
                    latitude, longitude, self._height, self._ellipsoid
                )
        except ProviderError as exc:
            logger.warning(
                "Derived representation failed | slot=%s | lat=%r | lon=%r | error=%s",
                slot,
                latitude,
                longitude,
                exc,
            )
            self._slots[slot] = Failed(exc)
            if slot == GRID:
                self._slots[MGRS] = Failed(exc)
        else:
            self._slots[slot] = Loaded(result)
            logger.debug("Derived representation refreshed | slot=%s", slot)
        return (GRID, MGRS) if slot == GRID else (slot,)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _finite(value: float, field: str) -> float:
    value = float(value)
    if not math.isfinite(value):
        msg = f"{field} must be a finite number, got {value!r}"
        raise RangeError(msg, field=field)
    return value


def _clamp(value: float, bound: float) -> float:
    return max(-bound, min(bound, value))
