"""Service layer for business logic.

This layer contains the core business logic and orchestration.
Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from weather_intel.repositories import InMemoryCacheRepository, WeatherApiProvider
    from weather_intel.services import RateLimiter, WeatherService

    limiter = RateLimiter.create()
    service = WeatherService.create(
        provider=WeatherApiProvider.create(),
        cache=InMemoryCacheRepository.create(),
    )
    ```
"""

from .intelligence import (
    build_intelligence,
    explain,
    score_aviation,
    score_photography,
    score_running,
    score_travel,
)
from .maintenance import PeriodicSweeper
from .rate_limiter import RateLimiter, resolve_client_id
from .search_service import SearchService
from .weather_service import WeatherService

__all__ = [
    "PeriodicSweeper",
    "RateLimiter",
    "SearchService",
    "WeatherService",
    "build_intelligence",
    "explain",
    "resolve_client_id",
    "score_aviation",
    "score_photography",
    "score_running",
    "score_travel",
]
