"""HTTP handlers for weather and search operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes, headers and error mapping.
"""

import logging
import math

from fastapi import HTTPException, Response, status

from weather_intel.config import settings
from weather_intel.dto import LocationSuggestion, SearchRequest, WeatherRequest, WeatherResponse
from weather_intel.entities import RateLimitDecision
from weather_intel.exceptions import (
    ConfigurationError,
    NotFoundError,
    RateLimitExceeded,
    UpstreamError,
    ValidationError,
    WeatherIntelError,
)
from weather_intel.geo import normalize_coordinates, validate_coordinates
from weather_intel.services import RateLimiter, SearchService, WeatherService

logger = logging.getLogger(__name__)

WEATHER_CACHE_CONTROL = "public, s-maxage=900, stale-while-revalidate=600"
SEARCH_CACHE_CONTROL = "public, s-maxage=3600"

_STATUS_BY_ERROR: tuple[tuple[type[WeatherIntelError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (UpstreamError, status.HTTP_502_BAD_GATEWAY),
)


def resolve_weather_query(request: WeatherRequest) -> str:
    """Turn ``city`` or ``lat``/``lon`` parameters into a query string.

    Coordinates take precedence over a city name when both are given.

    Raises:
        ValidationError: If coordinates are malformed or out of range, or no
            usable parameter was supplied
    """
    if request.lat and request.lon:
        try:
            lat, lon = float(request.lat), float(request.lon)
        except ValueError as e:
            raise ValidationError("Invalid coordinates provided") from e
        if not validate_coordinates(lat, lon):
            raise ValidationError("Invalid coordinates provided")
        return normalize_coordinates(lat, lon)

    if request.city and request.city.strip():
        return request.city.strip()

    raise ValidationError("Missing search parameters (city or lat/lon required)")


def rate_limit_headers(decision: RateLimitDecision) -> dict[str, str]:
    headers = {
        "X-RateLimit-Limit": str(decision.limit),
        "X-RateLimit-Remaining": str(decision.remaining),
        "X-RateLimit-Reset": str(math.ceil(decision.reset_at)),
    }
    if not decision.allowed:
        headers["Retry-After"] = str(decision.retry_after)
    return headers


def to_http_exception(error: WeatherIntelError) -> HTTPException:
    """Map a service error onto an HTTPException with an ``{error, code}`` body."""
    if isinstance(error, RateLimitExceeded):
        code = status.HTTP_429_TOO_MANY_REQUESTS
        return HTTPException(
            status_code=code,
            detail={"error": str(error), "code": code},
            headers=rate_limit_headers(error.decision),
        )

    code = status.HTTP_500_INTERNAL_SERVER_ERROR
    for error_type, error_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            code = error_code
            break
    return HTTPException(status_code=code, detail={"error": str(error), "code": code})


class WeatherHandler:
    """HTTP handlers for weather lookups and location search.

    This handler delegates business logic to the services and handles
    HTTP-specific concerns like:
    - Rate limit admission and X-RateLimit-* headers
    - Parameter validation
    - Mapping service errors to status codes

    Example:
        ```python
        handler = WeatherHandler(
            weather_service=weather_service,
            search_service=search_service,
            rate_limiter=RateLimiter.create(),
        )

        @app.get("/api/v1/weather", response_model=WeatherResponse)
        async def get_weather(request: Request, response: Response, city: str | None = None):
            client_id = resolve_client_id(request.headers)
            return await handler.get_weather(WeatherRequest(city=city), client_id, response)
        ```
    """

    def __init__(
        self,
        weather_service: WeatherService,
        search_service: SearchService,
        rate_limiter: RateLimiter,
    ) -> None:
        self._weather = weather_service
        self._search = search_service
        self._limiter = rate_limiter

    def check_rate_limit(self, client_id: str) -> RateLimitDecision:
        """Admission gate run before any other request processing.

        Raises:
            RateLimitExceeded: If the client has no quota left in this window
        """
        decision = self._limiter.check(client_id)
        if not decision.allowed:
            logger.info("Rate limit exceeded for client %s", client_id)
            raise RateLimitExceeded(decision)
        return decision

    async def get_weather(
        self,
        request: WeatherRequest,
        client_id: str,
        response: Response,
    ) -> WeatherResponse:
        """Handle GET /api/v1/weather requests.

        Raises:
            HTTPException: 400, 404, 429, 500 or 502 depending on the failure
        """
        try:
            decision = self.check_rate_limit(client_id)
            response.headers.update(rate_limit_headers(decision))
            query = resolve_weather_query(request)
            result = await self._weather.get_weather(query)
        except WeatherIntelError as e:
            if not isinstance(e, (ValidationError, RateLimitExceeded, NotFoundError)):
                logger.error("Weather request failed: %s", e)
            raise to_http_exception(e) from e

        response.headers["Cache-Control"] = WEATHER_CACHE_CONTROL
        return result

    async def search(
        self,
        request: SearchRequest,
        client_id: str,
        response: Response,
    ) -> list[LocationSuggestion]:
        """Handle GET /api/v1/search requests.

        Raises:
            HTTPException: 429, 500 or 502 depending on the failure
        """
        try:
            decision = self.check_rate_limit(client_id)
            response.headers.update(rate_limit_headers(decision))
            results = await self._search.search(request.q)
        except WeatherIntelError as e:
            if not isinstance(e, RateLimitExceeded):
                logger.error("Search request failed: %s", e)
            raise to_http_exception(e) from e

        response.headers["Cache-Control"] = SEARCH_CACHE_CONTROL
        return results

    async def get_stats(self) -> dict:
        """Handle GET /stats requests."""
        return {
            "weather": self._weather.get_stats(),
            "rate_limiter": self._limiter.get_stats(),
        }

    async def health_check(self) -> dict:
        """Handle GET /health requests.

        Returns:
            Dict with health status
        """
        cache_healthy = self._weather.is_healthy()
        api_key_configured = settings.has_api_key
        is_healthy = cache_healthy and api_key_configured

        return {
            "status": "healthy" if is_healthy else "unhealthy",
            "cache_healthy": cache_healthy,
            "api_key_configured": api_key_configured,
        }
