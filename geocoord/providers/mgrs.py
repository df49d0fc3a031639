"""MGRS encoding of a UTM grid result.

MGRS has no inputs of its own: the 100 km square letters and the
5-digit easting/northing are a deterministic function of the UTM zone,
band, easting and northing.
"""

from __future__ import annotations

from geocoord.core.constants import (
    MGRS_COLUMN_LETTERS,
    MGRS_ROW_LETTERS,
    MGRS_SQUARE_SIZE_M,
)
from geocoord.models.derived import GridResult, MgrsResult
from geocoord.providers.base import MgrsEncoder

# Row letters restart every 2,000 km; even zone sets start 5 letters in.
ROW_CYCLE = len(MGRS_ROW_LETTERS)
EVEN_SET_ROW_OFFSET = 5
ZONE_SETS = 6


def square_id(zone: int, easting: float, northing: float) -> str:
    """Return the two-letter 100 km square identifier."""
    zone_set = zone % ZONE_SETS or ZONE_SETS
    columns = MGRS_COLUMN_LETTERS[(zone_set - 1) % len(MGRS_COLUMN_LETTERS)]
    column = int(easting // MGRS_SQUARE_SIZE_M) - 1

    row = int(northing // MGRS_SQUARE_SIZE_M) % ROW_CYCLE
    if zone_set % 2 == 0:
        row = (row + EVEN_SET_ROW_OFFSET) % ROW_CYCLE

    return columns[column % len(columns)] + MGRS_ROW_LETTERS[row]


class MgrsGridEncoder(MgrsEncoder):
    """Encodes ``GridResult`` values at 1 m precision."""

    def encode(self, grid: GridResult) -> MgrsResult:
        return MgrsResult(
            zone=grid.zone,
            band=grid.band,
            square_id=square_id(grid.zone, grid.easting, grid.northing),
            easting=int(grid.easting % MGRS_SQUARE_SIZE_M),
            northing=int(grid.northing % MGRS_SQUARE_SIZE_M),
        )
