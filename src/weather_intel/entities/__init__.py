"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntryEntity
from .query import NormalizedQuery, QueryKind
from .rate_window import RateLimitDecision, RateWindowEntity
from .weather import (
    DecisionInsight,
    InsightStatus,
    MeteorologicalExplanation,
    WeatherIntelligence,
    WeatherSnapshot,
)

__all__ = [
    "CacheEntryEntity",
    "DecisionInsight",
    "InsightStatus",
    "MeteorologicalExplanation",
    "NormalizedQuery",
    "QueryKind",
    "RateLimitDecision",
    "RateWindowEntity",
    "WeatherIntelligence",
    "WeatherSnapshot",
]
