"""Unified coordinate exception taxonomy.

Every domain exception inherits from ``CoordinateError`` and carries
structured context fields so callers can log and report failures
consistently.

Taxonomy categories
-------------------
- ``RangeError``              : a numeric component violates its bound.
- ``TypeMismatchError``       : latitude/longitude axis confusion.
- ``FormatError``             : text matches no coordinate grammar.
- ``PrecursorNotLoadedError`` : an operation needs a derived
  representation that was never loaded.
- ``ProviderError``           : an external collaborator could not
  produce a result for otherwise valid input.

All failures are permanent input-validity problems; nothing here is
retryable.  Every exception exposes ``to_error_dict()`` for a stable
structured payload.
"""

from __future__ import annotations


class CoordinateError(Exception):
    """Base exception for all coordinate-domain errors.

    Attributes:
        message: Human-readable error description.
        field: Field or argument that triggered the error
            (e.g. ``"minutes"``, ``"latitude"``).
        code: Machine-readable error code (e.g. ``"COORDINATE_OUT_OF_RANGE"``).
    """

    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(self, message: str = "", *, field: str = "", code: str = "") -> None:
        self.message = message
        self.field = field
        self.code = code or self.default_code
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, RangeError):
            return "range"
        if isinstance(self, TypeMismatchError):
            return "type_mismatch"
        if isinstance(self, FormatError):
            return "format"
        if isinstance(self, PrecursorNotLoadedError):
            return "precursor"
        if isinstance(self, ProviderError):
            return "provider"
        return "coordinate"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "field": self.field,
            "message": self.message,
        }


# ---------------------------------------------------------------------------
# Category classes
# ---------------------------------------------------------------------------


class RangeError(CoordinateError, ValueError):
    """A degree, minute, second or decimal value is outside its legal range."""

    default_code = "COORDINATE_OUT_OF_RANGE"


class TypeMismatchError(CoordinateError, TypeError):
    """A latitude-typed value was used where a longitude is required, or vice versa."""

    default_code = "AXIS_TYPE_MISMATCH"


class FormatError(CoordinateError, ValueError):
    """Coordinate text matches no recognised grammar."""

    default_code = "COORDINATE_FORMAT_INVALID"


class PrecursorNotLoadedError(CoordinateError, RuntimeError):
    """An operation requires a derived representation that was never loaded."""

    default_code = "PRECURSOR_NOT_LOADED"


class ProviderError(CoordinateError):
    """An external collaborator failed to compute a derived representation.

    Attributes:
        provider: Collaborator kind (e.g. ``"grid"``, ``"celestial"``).
    """

    default_code = "PROVIDER_FAILED"

    def __init__(self, message: str = "", *, provider: str = "", **kwargs: str) -> None:
        self.provider = provider
        super().__init__(message, **kwargs)

    def to_error_dict(self) -> dict[str, object]:
        payload = super().to_error_dict()
        payload["provider"] = self.provider
        return payload


class GridDomainError(ProviderError):
    """Latitude is outside the UTM projection domain (80°S to 84°N)."""

    default_code = "GRID_OUT_OF_DOMAIN"
