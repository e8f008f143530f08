"""Response DTOs for API endpoints.

``WeatherResponse`` is the contract consumed by the dashboard UI.
"""

from pydantic import BaseModel, Field

from weather_intel.entities import InsightStatus


class WeatherCondition(BaseModel):
    text: str
    icon: str = ""
    code: int = 0


class LocationMetadata(BaseModel):
    name: str
    region: str = ""
    country: str = ""
    lat: float
    lon: float
    timezone: str = Field("", description="IANA timezone id")
    localtime: str = ""


class CurrentWeather(BaseModel):
    temp_c: float
    temp_f: float
    is_day: bool
    condition: WeatherCondition
    last_updated_epoch: int | None = None
    wind_kph: float
    wind_degree: float = 0
    wind_dir: str = ""
    pressure_mb: float = 0
    humidity: float
    cloud: float
    feelslike_c: float
    uv: float
    vis_km: float
    air_quality: dict[str, float | None] | None = None


class ForecastHour(BaseModel):
    time_epoch: int
    time: str
    temp_c: float
    condition: WeatherCondition
    chance_of_rain: float = 0
    wind_kph: float
    is_day: bool


class ForecastDay(BaseModel):
    date: str
    maxtemp_c: float
    mintemp_c: float
    condition: WeatherCondition
    avg_humidity: float
    daily_chance_of_rain: float = 0
    uv: float = 0
    sunrise: str = ""
    sunset: str = ""
    hours: list[ForecastHour] = Field(default_factory=list)


class CauseEffect(BaseModel):
    cause: str
    effect: str


class MeteorologicalExplanationItem(BaseModel):
    headline: str
    reasoning: str
    cause_effect: CauseEffect


class DecisionInsightItem(BaseModel):
    label: str
    score: int = Field(..., ge=0, le=100)
    status: InsightStatus
    advice: str


class InsightsItem(BaseModel):
    running: DecisionInsightItem
    photography: DecisionInsightItem
    travel: DecisionInsightItem
    aviation: DecisionInsightItem


class WeatherIntelligenceItem(BaseModel):
    explanation: MeteorologicalExplanationItem
    insights: InsightsItem


class WeatherResponse(BaseModel):
    """Unified weather payload: location, current, forecast and intelligence."""

    location: LocationMetadata
    current: CurrentWeather
    forecast: list[ForecastDay]
    intelligence: WeatherIntelligenceItem


class LocationSuggestion(BaseModel):
    """Single location search result."""

    id: int | None = None
    name: str
    region: str = ""
    country: str = ""
    lat: float
    lon: float


class ErrorResponse(BaseModel):
    """Body of every error response (wrapped in ``detail``)."""

    error: str = Field(..., description="Human-readable error message")
    code: int = Field(..., description="HTTP status code")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the cache backend is usable")
    api_key_configured: bool = Field(..., description="Whether WEATHER_API_KEY is set")
