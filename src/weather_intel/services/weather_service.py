"""Weather orchestration service.

Resolves a location query to a cache key, serves cached payloads, and on a
miss fetches current conditions and the forecast concurrently, derives the
intelligence block and caches the assembled response.
"""

import asyncio
import logging
import time
from typing import Any

from weather_intel.config import settings
from weather_intel.dto import (
    CauseEffect,
    CurrentWeather,
    DecisionInsightItem,
    ForecastDay,
    ForecastHour,
    InsightsItem,
    LocationMetadata,
    MeteorologicalExplanationItem,
    WeatherCondition,
    WeatherIntelligenceItem,
    WeatherResponse,
)
from weather_intel.entities import DecisionInsight, WeatherIntelligence, WeatherSnapshot
from weather_intel.exceptions import UpstreamError
from weather_intel.geo import normalize_query
from weather_intel.models import PerformanceMetrics
from weather_intel.protocols import CacheStore, WeatherProvider
from weather_intel.services.intelligence import build_intelligence

logger = logging.getLogger(__name__)


class WeatherService:
    """Core weather orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - CacheStore: in-memory by default
    - WeatherProvider: WeatherAPI.com by default

    Example:
        ```python
        from weather_intel.repositories import InMemoryCacheRepository, WeatherApiProvider
        from weather_intel.services import WeatherService

        service = WeatherService.create(
            provider=WeatherApiProvider.create(),
            cache=InMemoryCacheRepository.create(),
        )
        result = await service.get_weather("London")
        ```
    """

    def __init__(
        self,
        provider: WeatherProvider,
        cache: CacheStore,
        ttl: int | None = None,
        forecast_days: int | None = None,
        precision: int | None = None,
    ) -> None:
        """Initialize the weather service.

        Args:
            provider: Upstream weather provider (required).
            cache: Cache storage backend (required).
            ttl: Time-to-live for cached responses in seconds. Defaults to settings.
            forecast_days: Days of forecast to request. Defaults to settings.
            precision: Coordinate decimal places for cache keys. Defaults to settings.
        """
        self._provider = provider
        self._cache = cache
        self._ttl = settings.cache_ttl if ttl is None else ttl
        self._forecast_days = settings.forecast_days if forecast_days is None else forecast_days
        self._precision = precision
        self._metrics = PerformanceMetrics()

    @classmethod
    def create(
        cls,
        provider: WeatherProvider,
        cache: CacheStore,
        ttl: int | None = None,
        forecast_days: int | None = None,
        precision: int | None = None,
    ) -> "WeatherService":
        """Factory method to create WeatherService with defaults from settings."""
        return cls(
            provider=provider,
            cache=cache,
            ttl=ttl,
            forecast_days=forecast_days,
            precision=precision,
        )

    async def get_weather(self, query: str) -> WeatherResponse:
        """Return the unified weather payload for a location.

        Business logic:
        1. Normalize the query into a cache key
        2. Return the cached payload on a hit
        3. On a miss, fetch current conditions and forecast concurrently
        4. Derive intelligence from the current conditions
        5. Assemble, cache and return the response

        Args:
            query: City name or ``"lat,lon"`` string

        Returns:
            WeatherResponse with location, current, forecast and intelligence

        Raises:
            ValidationError: If the query is empty or malformed
            ConfigurationError: If the provider credential is missing
            NotFoundError: If the location does not resolve
            UpstreamError: If either upstream fetch fails
        """
        start_time = time.perf_counter()
        normalized = normalize_query(query, self._precision)

        cached = self._cache.get(normalized.cache_key)
        if cached is not None:
            self._metrics.record_hit(_elapsed_ms(start_time))
            logger.debug("Cache hit for %s", normalized.cache_key)
            return cached

        current_payload, forecast_payload = await self._fetch(normalized.value)

        response = _assemble(current_payload, forecast_payload)
        self._cache.set(normalized.cache_key, response, self._ttl)
        self._metrics.record_miss(_elapsed_ms(start_time))
        logger.info("Cached weather for %s (ttl=%ss)", normalized.cache_key, self._ttl)
        return response

    async def _fetch(self, query: str) -> tuple[dict[str, Any], dict[str, Any]]:
        """Fetch current conditions and forecast concurrently.

        Both calls always run to completion; if either failed, the first
        failure (current before forecast) is raised and nothing is returned.
        """
        start_time = time.perf_counter()
        results = await asyncio.gather(
            self._provider.fetch_current(query),
            self._provider.fetch_forecast(query, self._forecast_days),
            return_exceptions=True,
        )
        failures = [r for r in results if isinstance(r, BaseException)]
        self._metrics.record_upstream_call(_elapsed_ms(start_time), failed=bool(failures))
        if failures:
            logger.warning("Upstream fetch failed for %s: %s", query, failures[0])
            raise failures[0]

        current_payload, forecast_payload = results
        return current_payload, forecast_payload

    def invalidate(self, query: str) -> bool:
        """Drop the cached payload for a query.

        Returns:
            True if an entry was removed
        """
        return self._cache.delete(normalize_query(query, self._precision).cache_key)

    def get_stats(self) -> dict:
        """Get orchestrator statistics.

        Returns:
            Dictionary with cache stats, metrics and configuration
        """
        return {
            "provider": self._provider.name,
            "ttl": self._ttl,
            "forecast_days": self._forecast_days,
            "cache": self._cache.get_stats(),
            "performance": self._metrics.to_dict(),
        }

    def reset_metrics(self) -> None:
        self._metrics = PerformanceMetrics()

    def is_healthy(self) -> bool:
        return self._cache.health_check()

    async def close(self) -> None:
        await self._provider.close()

    @property
    def cache(self) -> CacheStore:
        """Get the underlying cache (for testing)."""
        return self._cache

    @property
    def metrics(self) -> PerformanceMetrics:
        return self._metrics


def _elapsed_ms(start_time: float) -> float:
    return (time.perf_counter() - start_time) * 1000


def _condition(raw: dict[str, Any]) -> WeatherCondition:
    return WeatherCondition(text=raw.get("text", ""), icon=raw.get("icon", ""), code=raw.get("code", 0))


def _assemble(current_payload: dict[str, Any], forecast_payload: dict[str, Any]) -> WeatherResponse:
    """Build the unified response from raw WeatherAPI payloads.

    Raises:
        UpstreamError: If a required field is missing or has the wrong type
    """
    try:
        loc = current_payload["location"]
        cur = current_payload["current"]

        location = LocationMetadata(
            name=loc["name"],
            region=loc.get("region", ""),
            country=loc.get("country", ""),
            lat=loc["lat"],
            lon=loc["lon"],
            timezone=loc.get("tz_id", ""),
            localtime=loc.get("localtime", ""),
        )

        current = CurrentWeather(
            temp_c=cur["temp_c"],
            temp_f=cur["temp_f"],
            is_day=bool(cur.get("is_day")),
            condition=_condition(cur["condition"]),
            last_updated_epoch=cur.get("last_updated_epoch"),
            wind_kph=cur["wind_kph"],
            wind_degree=cur.get("wind_degree", 0),
            wind_dir=cur.get("wind_dir", ""),
            pressure_mb=cur.get("pressure_mb", 0),
            humidity=cur["humidity"],
            cloud=cur["cloud"],
            feelslike_c=cur.get("feelslike_c", cur["temp_c"]),
            uv=cur.get("uv", 0),
            vis_km=cur["vis_km"],
            air_quality=cur.get("air_quality"),
        )

        forecast = [_forecast_day(day) for day in forecast_payload["forecast"]["forecastday"]]
    except (KeyError, TypeError, ValueError) as e:
        raise UpstreamError(f"Malformed upstream payload: {e}") from e

    snapshot = WeatherSnapshot(
        temperature_c=current.temp_c,
        humidity=current.humidity,
        wind_kph=current.wind_kph,
        visibility_km=current.vis_km,
        cloud=current.cloud,
        uv=current.uv,
        condition=current.condition.text,
        timestamp=current.last_updated_epoch,
    )

    return WeatherResponse(
        location=location,
        current=current,
        forecast=forecast,
        intelligence=_intelligence_item(build_intelligence(snapshot)),
    )


def _forecast_day(day: dict[str, Any]) -> ForecastDay:
    summary = day["day"]
    astro = day.get("astro", {})
    return ForecastDay(
        date=day["date"],
        maxtemp_c=summary["maxtemp_c"],
        mintemp_c=summary["mintemp_c"],
        condition=_condition(summary["condition"]),
        avg_humidity=summary.get("avghumidity", 0),
        daily_chance_of_rain=summary.get("daily_chance_of_rain", 0),
        uv=summary.get("uv", 0),
        sunrise=astro.get("sunrise", ""),
        sunset=astro.get("sunset", ""),
        hours=[
            ForecastHour(
                time_epoch=hour["time_epoch"],
                time=hour["time"],
                temp_c=hour["temp_c"],
                condition=_condition(hour["condition"]),
                chance_of_rain=hour.get("chance_of_rain", 0),
                wind_kph=hour["wind_kph"],
                is_day=bool(hour.get("is_day")),
            )
            for hour in day.get("hour", [])
        ],
    )


def _insight_item(insight: DecisionInsight) -> DecisionInsightItem:
    return DecisionInsightItem(
        label=insight.label,
        score=insight.score,
        status=insight.status,
        advice=insight.advice,
    )


def _intelligence_item(intelligence: WeatherIntelligence) -> WeatherIntelligenceItem:
    explanation = intelligence.explanation
    return WeatherIntelligenceItem(
        explanation=MeteorologicalExplanationItem(
            headline=explanation.headline,
            reasoning=explanation.reasoning,
            cause_effect=CauseEffect(cause=explanation.cause, effect=explanation.effect),
        ),
        insights=InsightsItem(
            running=_insight_item(intelligence.running),
            photography=_insight_item(intelligence.photography),
            travel=_insight_item(intelligence.travel),
            aviation=_insight_item(intelligence.aviation),
        ),
    )
