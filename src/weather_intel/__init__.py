"""Weather Intel - cached, rate-limited weather proxy with activity intelligence.

This package provides a layered architecture for a weather dashboard backend:

Layers:
    - protocols: Interface contracts (CacheStore, WeatherProvider, LocationSearchProvider)
    - repositories: In-memory TTL cache and upstream HTTP providers
    - services: Rate limiter, intelligence engine, weather and search orchestration
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from weather_intel.repositories import InMemoryCacheRepository, WeatherApiProvider
    from weather_intel.services import WeatherService

    service = WeatherService.create(
        provider=WeatherApiProvider.create(),
        cache=InMemoryCacheRepository.create(),
    )
    result = await service.get_weather("51.507,-0.128")
    ```

For HTTP API:
    ```python
    from weather_intel.api.app import app
    ```
"""

from weather_intel.config import get_settings, settings
from weather_intel.dto import WeatherRequest, WeatherResponse
from weather_intel.entities import DecisionInsight, MeteorologicalExplanation, WeatherSnapshot
from weather_intel.exceptions import (
    ConfigurationError,
    NotFoundError,
    RateLimitExceeded,
    UpstreamError,
    ValidationError,
    WeatherIntelError,
)
from weather_intel.geo import normalize_coordinates, sanitize_city_name, validate_coordinates
from weather_intel.handlers import WeatherHandler
from weather_intel.protocols import CacheStore, LocationSearchProvider, WeatherProvider
from weather_intel.repositories import InMemoryCacheRepository, WeatherApiProvider
from weather_intel.services import RateLimiter, SearchService, WeatherService

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    # Protocols (interfaces)
    "CacheStore",
    "LocationSearchProvider",
    "WeatherProvider",
    # Services (business logic)
    "RateLimiter",
    "SearchService",
    "WeatherService",
    # Handlers (HTTP)
    "WeatherHandler",
    # Repositories (data access)
    "InMemoryCacheRepository",
    "WeatherApiProvider",
    # Geo helpers
    "normalize_coordinates",
    "sanitize_city_name",
    "validate_coordinates",
    # Entities (domain models)
    "DecisionInsight",
    "MeteorologicalExplanation",
    "WeatherSnapshot",
    # DTOs (API contracts)
    "WeatherRequest",
    "WeatherResponse",
    # Errors
    "WeatherIntelError",
    "ConfigurationError",
    "ValidationError",
    "NotFoundError",
    "UpstreamError",
    "RateLimitExceeded",
]
