"""Repository layer for data access.

This layer abstracts external dependencies (process memory, weather and
geocoding APIs) behind protocol-based interfaces. This enables:
- Easy swapping of implementations
- Unit testing with fake implementations
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
Any class implementing the required methods will satisfy the protocol.
"""

from weather_intel.protocols import CacheStore, LocationSearchProvider, WeatherProvider

from .memory_cache_repository import InMemoryCacheRepository
from .nominatim_provider import NominatimSearchProvider
from .weatherapi_provider import WeatherApiProvider

__all__ = [
    "CacheStore",
    "LocationSearchProvider",
    "WeatherProvider",
    "InMemoryCacheRepository",
    "NominatimSearchProvider",
    "WeatherApiProvider",
]
