"""UTM grid projection backed by pyproj.

Zone selection follows the standard 6° zones plus the Norway (32V) and
Svalbard (31X, 33X, 35X, 37X) exceptions.  The projection runs on the
position's own ellipsoid via a custom ``+proj=utm`` CRS, so a datum
override changes the easting and northing.
"""

from __future__ import annotations

import functools
import logging
import math
from typing import TYPE_CHECKING

from geocoord.core.constants import (
    MAX_LONGITUDE,
    UTM_BAND_LETTERS,
    UTM_MAX_LATITUDE,
    UTM_MIN_LATITUDE,
)
from geocoord.core.exceptions import GridDomainError, ProviderError
from geocoord.models.derived import Ellipsoid, GridResult
from geocoord.providers.base import GridProvider

if TYPE_CHECKING:
    from pyproj import Transformer

logger = logging.getLogger(__name__)

ZONE_WIDTH_DEG = 6
BAND_HEIGHT_DEG = 8
ZONE_COUNT = 60

# Svalbard: (min_lon, max_lon) -> zone, applied for 72 <= lat <= 84
_SVALBARD_ZONES = (
    (0.0, 9.0, 31),
    (9.0, 21.0, 33),
    (21.0, 33.0, 35),
    (33.0, 42.0, 37),
)


def utm_zone(latitude: float, longitude: float) -> int:
    """Return the UTM zone number for a point, including the Norway/Svalbard exceptions."""
    if longitude >= MAX_LONGITUDE:
        longitude -= 2 * MAX_LONGITUDE
    zone = int((longitude + MAX_LONGITUDE) // ZONE_WIDTH_DEG) + 1
    zone = min(max(zone, 1), ZONE_COUNT)

    if 56.0 <= latitude < 64.0 and 3.0 <= longitude < 12.0:
        return 32
    if 72.0 <= latitude <= UTM_MAX_LATITUDE:
        for min_lon, max_lon, svalbard_zone in _SVALBARD_ZONES:
            if min_lon <= longitude < max_lon:
                return svalbard_zone
    return zone


def latitude_band(latitude: float) -> str:
    """Return the UTM latitude band letter (``C``-``X``); ``X`` spans 72-84°N."""
    index = int((latitude - UTM_MIN_LATITUDE) // BAND_HEIGHT_DEG)
    return UTM_BAND_LETTERS[min(max(index, 0), len(UTM_BAND_LETTERS) - 1)]


@functools.lru_cache(maxsize=64)
def _utm_transformer(zone: int, south: bool, a: float, rf: float) -> Transformer:
    from pyproj import Transformer

    geographic = f"+proj=longlat +a={a} +rf={rf} +no_defs"
    hemisphere = " +south" if south else ""
    projected = f"+proj=utm +zone={zone}{hemisphere} +a={a} +rf={rf} +units=m +no_defs"
    return Transformer.from_crs(geographic, projected, always_xy=True)


class PyprojGridProvider(GridProvider):
    """UTM projection through ``pyproj.Transformer``."""

    def project(self, latitude: float, longitude: float, ellipsoid: Ellipsoid) -> GridResult:
        if not UTM_MIN_LATITUDE <= latitude <= UTM_MAX_LATITUDE:
            msg = (
                f"Latitude {latitude} is outside the UTM domain "
                f"[{UTM_MIN_LATITUDE}, {UTM_MAX_LATITUDE}]"
            )
            raise GridDomainError(msg, provider=self.kind, field="latitude")

        zone = utm_zone(latitude, longitude)
        band = latitude_band(latitude)
        transformer = _utm_transformer(
            zone,
            latitude < 0,
            ellipsoid.equatorial_radius,
            ellipsoid.inverse_flattening,
        )

        from pyproj.exceptions import ProjError

        try:
            easting, northing = transformer.transform(longitude, latitude)
        except ProjError as exc:
            msg = f"UTM projection failed for ({latitude}, {longitude}): {exc}"
            raise ProviderError(msg, provider=self.kind) from exc

        if not (math.isfinite(easting) and math.isfinite(northing)):
            msg = f"UTM projection returned no finite result for ({latitude}, {longitude})"
            raise ProviderError(msg, provider=self.kind)

        logger.debug(
            "Grid projected | zone=%d%s | easting=%.3f | northing=%.3f",
            zone,
            band,
            easting,
            northing,
        )
        return GridResult(
            zone=zone,
            band=band,
            easting=easting,
            northing=northing,
            ellipsoid=ellipsoid,
        )
