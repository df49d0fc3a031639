"""Shared helper functions for observation instants.

Naive datetimes are taken as UTC, aware ones are converted to UTC, and
ISO 8601 strings are accepted wherever an instant is.
"""

from __future__ import annotations

from datetime import UTC, date, datetime

from geocoord.core.constants import DEFAULT_OBSERVATION_INSTANT
from geocoord.core.exceptions import FormatError


def ensure_utc(value: datetime) -> datetime:
    """Return *value* as an aware UTC datetime (naive input is assumed UTC)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def parse_timestamp(timestamp: str) -> datetime:
    """Parse an ISO 8601 timestamp string into an aware UTC datetime.

    A trailing ``Z`` is accepted.

    Raises:
        FormatError: If *timestamp* is empty or not ISO 8601.
    """
    text = timestamp.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return ensure_utc(datetime.fromisoformat(text))
    except ValueError as exc:
        msg = f"Unrecognised observation instant: {timestamp!r}"
        raise FormatError(msg, field="observation_instant") from exc


def coerce_instant(value: datetime | date | str | None) -> datetime:
    """Normalise any accepted observation instant to an aware UTC datetime.

    ``None`` selects the default instant (1900-01-01T00:00:00Z); a plain
    ``date`` means midnight UTC on that day.
    """
    if value is None:
        return DEFAULT_OBSERVATION_INSTANT
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=UTC)
    if isinstance(value, str):
        return parse_timestamp(value)
    msg = (
        "Observation instant must be a datetime, date or ISO 8601 string, "
        f"got {type(value).__name__}"
    )
    raise TypeError(msg)
