"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Components built in the lifespan and stored in app.state
    - Dependency functions retrieve them from request.app.state
    - Cache and rate limiter are process-scoped with an explicit lifecycle:
      periodic sweeps start at startup and are cancelled at shutdown
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from weather_intel.config import settings
from weather_intel.handlers import WeatherHandler
from weather_intel.logging_config import setup_logging
from weather_intel.repositories import (
    InMemoryCacheRepository,
    NominatimSearchProvider,
    WeatherApiProvider,
)
from weather_intel.services import PeriodicSweeper, RateLimiter, SearchService, WeatherService
from weather_intel.services.rate_limiter import resolve_client_id

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> WeatherHandler:
    """Dependency injection for WeatherHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The WeatherHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "weather_handler", None)
    if handler is None:
        raise RuntimeError("WeatherHandler not initialized. Check lifespan setup.")
    return handler


def get_client_id(request: Request) -> str:
    """Dependency resolving the rate limit bucket for a request."""
    return resolve_client_id(request.headers)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores them in app.state:
    1. Repositories (cache, upstream providers)
    2. Services (rate limiter, weather, search)
    3. Handler (HTTP endpoints) - stored in app.state.weather_handler
    4. Periodic sweepers for the cache and rate limiter

    Cleanup:
        Cancels sweepers, closes HTTP clients and removes state on shutdown
    """
    setup_logging()

    if not settings.has_api_key:
        logger.warning("WEATHER_API_KEY is not set; weather requests will fail with 500")

    cache = InMemoryCacheRepository.create()
    rate_limiter = RateLimiter.create()
    provider = WeatherApiProvider.create()

    weather_service = WeatherService.create(provider=provider, cache=cache)
    search_service = SearchService.create(
        primary=provider,
        cache=cache,
        secondary=NominatimSearchProvider.create(),
    )
    handler = WeatherHandler(
        weather_service=weather_service,
        search_service=search_service,
        rate_limiter=rate_limiter,
    )

    sweepers = [
        PeriodicSweeper(cache, interval=settings.cache_cleanup_interval, name="cache"),
        PeriodicSweeper(rate_limiter, interval=settings.rate_limit_cleanup_interval, name="rate-limiter"),
    ]
    for sweeper in sweepers:
        sweeper.start()

    app.state.cache = cache
    app.state.rate_limiter = rate_limiter
    app.state.weather_service = weather_service
    app.state.search_service = search_service
    app.state.weather_handler = handler

    logger.info(
        "Weather service initialized",
        extra={"cache_ttl": settings.cache_ttl, "rate_limit": settings.rate_limit_max_requests},
    )

    yield

    for sweeper in sweepers:
        await sweeper.shutdown()
    await search_service.close()
    await weather_service.close()

    del app.state.weather_handler
    del app.state.search_service
    del app.state.weather_service
    del app.state.rate_limiter
    del app.state.cache
    logger.info("Weather service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[WeatherHandler, Depends(get_handler)]
ClientIdDep = Annotated[str, Depends(get_client_id)]
