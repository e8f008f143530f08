"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Protocols enable:
- Easy swapping of implementations (in-memory -> shared store, WeatherAPI -> another provider)
- Unit testing with fake implementations
- Clear separation of concerns
"""

from .cache_store import CacheStore
from .weather_provider import LocationSearchProvider, WeatherProvider

__all__ = [
    "CacheStore",
    "LocationSearchProvider",
    "WeatherProvider",
]
