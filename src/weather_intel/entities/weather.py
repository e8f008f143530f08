"""Weather snapshot and intelligence entities."""

from dataclasses import dataclass
from enum import Enum


class InsightStatus(str, Enum):
    OPTIMAL = "OPTIMAL"
    CAUTION = "CAUTION"
    DANGER = "DANGER"


@dataclass(frozen=True)
class WeatherSnapshot:
    """A point-in-time observation used as input to the intelligence engine.

    Attributes:
        temperature_c: Air temperature in Celsius
        humidity: Relative humidity in percent
        wind_kph: Wind speed in km/h
        visibility_km: Visibility in kilometres
        cloud: Cloud cover in percent
        uv: UV index
        condition: Provider condition text (e.g. "Patchy rain nearby")
        timestamp: Unix timestamp of the observation, if known
    """

    temperature_c: float
    humidity: float
    wind_kph: float
    visibility_km: float
    cloud: float
    uv: float
    condition: str
    timestamp: int | None = None


@dataclass(frozen=True)
class DecisionInsight:
    label: str
    score: int
    status: InsightStatus
    advice: str


@dataclass(frozen=True)
class MeteorologicalExplanation:
    headline: str
    reasoning: str
    cause: str
    effect: str


@dataclass(frozen=True)
class WeatherIntelligence:
    """Explanation plus the four activity insights derived from one snapshot."""

    explanation: MeteorologicalExplanation
    running: DecisionInsight
    photography: DecisionInsight
    travel: DecisionInsight
    aviation: DecisionInsight
