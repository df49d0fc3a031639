"""Direct and inverse geodesic solutions.

Spherical solutions use great-circle formulae on a sphere of mean
radius 6 371 000 m.  Ellipsoidal solutions delegate to ``pyproj.Geod``
on the caller's ellipsoid.

``direct_ellipsoidal`` takes and returns longitude positive to the
**west**; callers working east-positive negate on the way in and out.
"""

from __future__ import annotations

import functools
import logging
import math
from typing import TYPE_CHECKING

from geocoord.core.constants import EARTH_MEAN_RADIUS_M
from geocoord.core.exceptions import ProviderError
from geocoord.models.derived import Distance, EarthShape, Ellipsoid
from geocoord.providers.base import GeodesicProvider

if TYPE_CHECKING:
    from pyproj import Geod

    from geocoord.core.config import GeoConfig

logger = logging.getLogger(__name__)

FULL_CIRCLE_DEG = 360.0


def _normalize_longitude(longitude: float) -> float:
    """Wrap radians into [-pi, pi)."""
    return (longitude + math.pi) % (2 * math.pi) - math.pi


def _normalize_bearing(bearing: float) -> float:
    return bearing % FULL_CIRCLE_DEG


@functools.lru_cache(maxsize=8)
def _geod(a: float, rf: float) -> Geod:
    from pyproj import Geod

    return Geod(a=a, rf=rf)


class GeodesicCalculator(GeodesicProvider):
    """Great-circle math in-process, ellipsoidal math via ``pyproj.Geod``."""

    def __init__(
        self,
        config: GeoConfig | None = None,
        *,
        radius_m: float = EARTH_MEAN_RADIUS_M,
    ) -> None:
        super().__init__(config)
        self.radius_m = radius_m

    # ------------------------------------------------------------------
    # Direct problem
    # ------------------------------------------------------------------

    def direct(
        self,
        latitude: float,
        longitude: float,
        bearing: float,
        distance_m: float,
    ) -> tuple[float, float]:
        delta = distance_m / self.radius_m
        lat2 = math.asin(
            math.sin(latitude) * math.cos(delta)
            + math.cos(latitude) * math.sin(delta) * math.cos(bearing)
        )
        lon2 = longitude + math.atan2(
            math.sin(bearing) * math.sin(delta) * math.cos(latitude),
            math.cos(delta) - math.sin(latitude) * math.sin(lat2),
        )
        return lat2, _normalize_longitude(lon2)

    def direct_ellipsoidal(
        self,
        latitude: float,
        longitude: float,
        bearing: float,
        distance_m: float,
        ellipsoid: Ellipsoid,
    ) -> tuple[float, float]:
        from pyproj.exceptions import GeodError

        geod = _geod(ellipsoid.equatorial_radius, ellipsoid.inverse_flattening)
        try:
            lon2, lat2, _ = geod.fwd(
                -math.degrees(longitude),
                math.degrees(latitude),
                math.degrees(bearing),
                distance_m,
            )
        except GeodError as exc:
            msg = f"Ellipsoidal direct solution failed: {exc}"
            raise ProviderError(msg, provider=self.kind) from exc
        return math.radians(lat2), -math.radians(lon2)

    # ------------------------------------------------------------------
    # Inverse problem
    # ------------------------------------------------------------------

    def inverse(
        self,
        start: tuple[float, float],
        end: tuple[float, float],
        shape: EarthShape,
        ellipsoid: Ellipsoid,
    ) -> Distance:
        lat1, lon1 = start
        lat2, lon2 = end

        if shape is EarthShape.ELLIPSOID:
            geod = _geod(ellipsoid.equatorial_radius, ellipsoid.inverse_flattening)
            azimuth, _, meters = geod.inv(lon1, lat1, lon2, lat2)
            return Distance(meters=meters, bearing=_normalize_bearing(azimuth), shape=shape)

        phi1, phi2 = math.radians(lat1), math.radians(lat2)
        d_phi = phi2 - phi1
        d_lambda = math.radians(lon2 - lon1)

        # Haversine
        h = (
            math.sin(d_phi / 2) ** 2
            + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
        )
        meters = 2 * self.radius_m * math.asin(min(1.0, math.sqrt(h)))

        y = math.sin(d_lambda) * math.cos(phi2)
        x = math.cos(phi1) * math.sin(phi2) - math.sin(phi1) * math.cos(phi2) * math.cos(d_lambda)
        bearing = _normalize_bearing(math.degrees(math.atan2(y, x)))

        logger.debug(
            "Inverse solved | shape=%s | meters=%.3f | bearing=%.6f",
            shape.value,
            meters,
            bearing,
        )
        return Distance(meters=meters, bearing=bearing, shape=shape)
