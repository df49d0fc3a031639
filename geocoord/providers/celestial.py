"""Sun and moon data backed by skyfield.

Rise and set events are searched over the UTC day containing the
observation instant; altitude, azimuth, illumination and phase are
evaluated at the instant itself.  The next lunar eclipse is searched
for up to one year ahead.

The ephemeris file is opened through ``skyfield.api.Loader`` rooted at
``GeoConfig.skyfield_data_dir`` the first time a result is computed.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import TYPE_CHECKING, Any

from geocoord.core.config import GeoConfig
from geocoord.core.exceptions import ProviderError
from geocoord.models.derived import CelestialResult
from geocoord.providers.base import CelestialProvider
from geocoord.utils.helpers import ensure_utc

if TYPE_CHECKING:
    from skyfield.timelib import Time, Timescale

logger = logging.getLogger(__name__)

ZODIAC_SIGNS = (
    "Aries",
    "Taurus",
    "Gemini",
    "Cancer",
    "Leo",
    "Virgo",
    "Libra",
    "Scorpio",
    "Sagittarius",
    "Capricorn",
    "Aquarius",
    "Pisces",
)
DEGREES_PER_SIGN = 30
ECLIPSE_SEARCH_DAYS = 366


class SkyfieldCelestialProvider(CelestialProvider):
    """Celestial data from a JPL ephemeris via skyfield.

    A failed ephemeris load is remembered: later computations re-raise the
    same ``ProviderError`` without touching the filesystem or network
    again until ``reset()`` is called.
    """

    def __init__(self, config: GeoConfig | None = None) -> None:
        super().__init__(config)
        self._timescale: Timescale | None = None
        self._ephemeris: Any = None
        self._load_error: ProviderError | None = None

    def reset(self) -> None:
        """Forget the loaded ephemeris and any remembered load failure."""
        self._timescale = None
        self._ephemeris = None
        self._load_error = None

    def _load(self) -> tuple[Timescale, Any]:
        if self._load_error is not None:
            raise self._load_error
        if self._ephemeris is None or self._timescale is None:
            from skyfield.api import Loader

            config = self._config or GeoConfig()
            data_dir = Path(config.skyfield_data_dir).expanduser()
            try:
                loader = Loader(str(data_dir))
                self._timescale = loader.timescale()
                self._ephemeris = loader(config.ephemeris)
            except (OSError, ValueError) as exc:
                msg = f"Cannot load ephemeris {config.ephemeris!r} from {data_dir}: {exc}"
                self._load_error = ProviderError(msg, provider=self.kind)
                logger.warning(
                    "Ephemeris load failed | file=%s | dir=%s | error=%s",
                    config.ephemeris,
                    data_dir,
                    exc,
                )
                raise self._load_error from exc
            logger.info("Ephemeris loaded | file=%s | dir=%s", config.ephemeris, data_dir)
        return self._timescale, self._ephemeris

    def compute(self, latitude: float, longitude: float, instant: datetime) -> CelestialResult:
        ts, eph = self._load()
        instant = ensure_utc(instant)
        try:
            result = self._compute(ts, eph, latitude, longitude, instant)
        except ValueError as exc:
            # skyfield's EphemerisRangeError is a ValueError
            msg = f"Celestial data unavailable at {instant.isoformat()}: {exc}"
            raise ProviderError(msg, provider=self.kind, field="observation_instant") from exc
        logger.debug(
            "Celestial computed | lat=%.6f | lon=%.6f | instant=%s | sunrise=%s | sunset=%s",
            latitude,
            longitude,
            instant.isoformat(),
            result.sunrise,
            result.sunset,
        )
        return result

    @staticmethod
    def _compute(
        ts: Timescale, eph: Any, latitude: float, longitude: float, instant: datetime
    ) -> CelestialResult:
        from skyfield import almanac, eclipselib
        from skyfield.api import wgs84
        from skyfield.framelib import ecliptic_frame

        day_start = instant.replace(hour=0, minute=0, second=0, microsecond=0)
        t = ts.from_datetime(instant)
        t0 = ts.from_datetime(day_start)
        t1 = ts.from_datetime(day_start + timedelta(days=1))
        horizon = ts.from_datetime(instant + timedelta(days=ECLIPSE_SEARCH_DAYS))

        earth, sun, moon = eph["earth"], eph["sun"], eph["moon"]
        observer = earth + wgs84.latlon(latitude, longitude)

        sun_alt, sun_az, _ = observer.at(t).observe(sun).apparent().altaz()
        moon_alt, moon_az, _ = observer.at(t).observe(moon).apparent().altaz()
        _, sun_longitude, _ = earth.at(t).observe(sun).apparent().frame_latlon(ecliptic_frame)
        eclipse_times, _, _ = eclipselib.lunar_eclipses(t, horizon, eph)

        return CelestialResult(
            sunrise=_first_event(almanac.find_risings(observer, sun, t0, t1)),
            sunset=_first_event(almanac.find_settings(observer, sun, t0, t1)),
            sun_altitude=float(sun_alt.degrees),
            sun_azimuth=float(sun_az.degrees),
            moonrise=_first_event(almanac.find_risings(observer, moon, t0, t1)),
            moonset=_first_event(almanac.find_settings(observer, moon, t0, t1)),
            moon_altitude=float(moon_alt.degrees),
            moon_azimuth=float(moon_az.degrees),
            moon_illumination=float(almanac.fraction_illuminated(eph, "moon", t)),
            moon_phase_angle=float(almanac.moon_phase(eph, t).degrees),
            zodiac_sign=ZODIAC_SIGNS[int(sun_longitude.degrees // DEGREES_PER_SIGN) % 12],
            next_lunar_eclipse=eclipse_times[0].utc_datetime() if len(eclipse_times) else None,
        )


def _first_event(found: tuple[Time, Any]) -> datetime | None:
    """First time whose flag is set, as an aware UTC datetime."""
    times, flags = found
    for index, happened in enumerate(flags):
        if happened:
            return times[index].utc_datetime()
    return None
