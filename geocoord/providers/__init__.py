"""External collaborators for derived representations.

Implements the collaborator pattern (Strategy pattern):
- GridProvider / PyprojGridProvider: UTM projection (pyproj)
- MgrsEncoder / MgrsGridEncoder: MGRS encoding of a UTM result
- EarthCenteredProvider / PyprojEarthCenteredProvider: ECEF (pyproj)
- CelestialProvider / SkyfieldCelestialProvider: sun and moon data (skyfield)
- GeodesicProvider / GeodesicCalculator: distance, bearing, destination

Concrete implementations are loaded lazily through the factory.
"""

from geocoord.core.exceptions import GridDomainError, ProviderError
from geocoord.providers.base import (
    CelestialProvider,
    CoordinateProvider,
    EarthCenteredProvider,
    GeodesicProvider,
    GridProvider,
    MgrsEncoder,
    Providers,
)
from geocoord.providers.factory import (
    CELESTIAL,
    EARTH_CENTERED,
    GEODESIC,
    GRID,
    MGRS,
    get_provider,
    list_providers,
    register_provider,
)

__all__ = [
    "CELESTIAL",
    "EARTH_CENTERED",
    "GEODESIC",
    "GRID",
    "MGRS",
    "CelestialProvider",
    "CoordinateProvider",
    "EarthCenteredProvider",
    "GeodesicProvider",
    "GridDomainError",
    "GridProvider",
    "MgrsEncoder",
    "ProviderError",
    "Providers",
    "get_provider",
    "list_providers",
    "register_provider",
]
