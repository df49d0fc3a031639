"""Shared coordinate constants.

Centralises axis bounds, datum parameters, rendering glyphs and unit
conversions used by the angle model, the text codec, the providers and
the position orchestrator.
"""

from __future__ import annotations

from datetime import UTC, datetime

# ---------------------------------------------------------------------------
# Axis bounds (degrees)
# ---------------------------------------------------------------------------

MAX_LATITUDE: float = 90.0
MAX_LONGITUDE: float = 180.0

MINUTES_PER_DEGREE = 60
SECONDS_PER_MINUTE = 60

# ---------------------------------------------------------------------------
# Datum (WGS 84)
# ---------------------------------------------------------------------------

WGS84_EQUATORIAL_RADIUS_M: float = 6378137.0
WGS84_INVERSE_FLATTENING: float = 298.257223563

EARTH_MEAN_RADIUS_M: float = 6371000.0
"""Radius of the spherical earth model used for great-circle math."""

# ---------------------------------------------------------------------------
# UTM / MGRS
# ---------------------------------------------------------------------------

UTM_MAX_LATITUDE: float = 84.0
UTM_MIN_LATITUDE: float = -80.0
UTM_BAND_LETTERS: str = "CDEFGHJKLMNPQRSTUVWX"

MGRS_COLUMN_LETTERS: tuple[str, str, str] = ("ABCDEFGH", "JKLMNPQR", "STUVWXYZ")
MGRS_ROW_LETTERS: str = "ABCDEFGHJKLMNPQRSTUV"
MGRS_SQUARE_SIZE_M: int = 100_000

# ---------------------------------------------------------------------------
# Time
# ---------------------------------------------------------------------------

DEFAULT_OBSERVATION_INSTANT: datetime = datetime(1900, 1, 1, tzinfo=UTC)
"""Observation instant used until a caller provides one."""

# ---------------------------------------------------------------------------
# Text rendering
# ---------------------------------------------------------------------------

DEGREE_SYMBOL = "º"
MINUTE_SYMBOL = "'"
SECOND_SYMBOL = '"'

MAX_FRACTION_DIGITS = 9
"""Untrimmed renderings show at most this many fractional digits."""

MAX_ROUNDING = 15

LATITUDE_DEGREE_WIDTH = 2
LATITUDE_PLAIN_WIDTH = 1
LONGITUDE_DEGREE_WIDTH = 3
SUBUNIT_WIDTH = 2
"""Zero-padded widths used when leading zeros are requested.

Latitude degrees pad to two digits only in the decimal-degree and
degree-decimal-minute styles; the decimal and degree-minute-second styles
leave them unpadded.
"""

# ---------------------------------------------------------------------------
# Unit conversions
# ---------------------------------------------------------------------------

METERS_PER_KILOMETER = 1000.0
METERS_PER_MILE = 1609.344
METERS_PER_NAUTICAL_MILE = 1852.0
METERS_PER_FOOT = 0.3048
