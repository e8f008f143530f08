from typing import Any

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from weather_intel.api.dependencies import ClientIdDep, HandlerDep, lifespan
from weather_intel.config import settings
from weather_intel.dto import (
    ErrorResponse,
    HealthCheckResponse,
    LocationSuggestion,
    SearchRequest,
    WeatherRequest,
    WeatherResponse,
)

app = FastAPI(
    title="Weather Intel API",
    description="Weather proxy with caching, rate limiting and activity intelligence",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-RateLimit-Limit", "X-RateLimit-Remaining", "X-RateLimit-Reset", "Retry-After"],
)

_ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    400: {"model": ErrorResponse, "description": "Invalid or missing parameters"},
    404: {"model": ErrorResponse, "description": "Location not found"},
    429: {"model": ErrorResponse, "description": "Rate limit exceeded"},
    500: {"model": ErrorResponse, "description": "Server configuration error"},
    502: {"model": ErrorResponse, "description": "Upstream provider failure"},
}


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Weather Intel API",
        "version": "0.1.0",
        "description": "Weather proxy with caching, rate limiting and activity intelligence",
        "endpoints": {
            "weather": "/api/v1/weather",
            "search": "/api/v1/search",
            "stats": "/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> dict[str, Any]:
    """Health check endpoint."""
    return await handler.health_check()


@app.get("/stats", response_model=dict[str, Any])
async def get_stats(handler: HandlerDep) -> dict[str, Any]:
    """Get cache, performance and rate limiter statistics."""
    return await handler.get_stats()


@app.get("/api/v1/weather", response_model=WeatherResponse, responses=_ERROR_RESPONSES)
async def get_weather(
    handler: HandlerDep,
    client_id: ClientIdDep,
    response: Response,
    city: str | None = None,
    lat: str | None = None,
    lon: str | None = None,
) -> WeatherResponse:
    """
    Get current conditions, forecast and intelligence for a location.

    Pass either ``city`` or both ``lat`` and ``lon``.
    """
    request = WeatherRequest(city=city, lat=lat, lon=lon)
    return await handler.get_weather(request, client_id, response)


@app.get("/api/v1/search", response_model=list[LocationSuggestion], responses=_ERROR_RESPONSES)
async def search_locations(
    handler: HandlerDep,
    client_id: ClientIdDep,
    response: Response,
    q: str = "",
) -> list[LocationSuggestion]:
    """Location autocomplete suggestions."""
    return await handler.search(SearchRequest(q=q), client_id, response)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "weather_intel.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
