"""Geodetic to earth-centered, earth-fixed (ECEF) conversion backed by pyproj."""

from __future__ import annotations

import functools
import logging
import math
from typing import TYPE_CHECKING

from geocoord.core.exceptions import ProviderError
from geocoord.models.derived import EarthCenteredResult, Ellipsoid
from geocoord.providers.base import EarthCenteredProvider

if TYPE_CHECKING:
    from pyproj import Transformer

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=8)
def _geocentric_transformer(a: float, rf: float) -> Transformer:
    from pyproj import Transformer

    geodetic = f"+proj=longlat +a={a} +rf={rf} +no_defs"
    geocentric = f"+proj=geocent +a={a} +rf={rf} +units=m +no_defs"
    return Transformer.from_crs(geodetic, geocentric, always_xy=True)


class PyprojEarthCenteredProvider(EarthCenteredProvider):
    """ECEF via a ``+proj=longlat`` to ``+proj=geocent`` transformer."""

    def to_ecef(
        self,
        latitude: float,
        longitude: float,
        height: float,
        ellipsoid: Ellipsoid,
    ) -> EarthCenteredResult:
        from pyproj.exceptions import ProjError

        transformer = _geocentric_transformer(
            ellipsoid.equatorial_radius, ellipsoid.inverse_flattening
        )
        try:
            x, y, z = transformer.transform(longitude, latitude, height)
        except ProjError as exc:
            msg = f"ECEF conversion failed for ({latitude}, {longitude}, {height}): {exc}"
            raise ProviderError(msg, provider=self.kind) from exc

        if not all(math.isfinite(v) for v in (x, y, z)):
            msg = f"ECEF conversion returned no finite result for ({latitude}, {longitude})"
            raise ProviderError(msg, provider=self.kind)

        logger.debug("ECEF computed | x=%.3f | y=%.3f | z=%.3f", x, y, z)
        return EarthCenteredResult(x=x, y=y, z=z, height=height)
