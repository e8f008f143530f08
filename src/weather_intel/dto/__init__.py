"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import SearchRequest, WeatherRequest
from .responses import (
    CauseEffect,
    CurrentWeather,
    DecisionInsightItem,
    ErrorResponse,
    ForecastDay,
    ForecastHour,
    HealthCheckResponse,
    InsightsItem,
    LocationMetadata,
    LocationSuggestion,
    MeteorologicalExplanationItem,
    WeatherCondition,
    WeatherIntelligenceItem,
    WeatherResponse,
)

__all__ = [
    "WeatherRequest",
    "SearchRequest",
    "CauseEffect",
    "CurrentWeather",
    "DecisionInsightItem",
    "ErrorResponse",
    "ForecastDay",
    "ForecastHour",
    "HealthCheckResponse",
    "InsightsItem",
    "LocationMetadata",
    "LocationSuggestion",
    "MeteorologicalExplanationItem",
    "WeatherCondition",
    "WeatherIntelligenceItem",
    "WeatherResponse",
]
