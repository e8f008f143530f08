import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Upstream weather provider (WeatherAPI.com)
    weather_api_key: str | None = os.getenv("WEATHER_API_KEY")
    weather_api_base_url: str = os.getenv("WEATHER_API_BASE_URL", "https://api.weatherapi.com/v1")
    weather_api_timeout: float = float(os.getenv("WEATHER_API_TIMEOUT", "10.0"))
    forecast_days: int = int(os.getenv("FORECAST_DAYS", "7"))

    # Secondary geocoder used by location search
    nominatim_url: str = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org/search")
    nominatim_user_agent: str = os.getenv("NOMINATIM_USER_AGENT", "weather-intel/0.1.0")

    # Cache
    cache_ttl: int = int(os.getenv("CACHE_TTL", "900"))  # 15 minutes
    search_cache_ttl: int = int(os.getenv("SEARCH_CACHE_TTL", "3600"))
    cache_cleanup_interval: int = int(os.getenv("CACHE_CLEANUP_INTERVAL", "300"))

    # Rate limiting: 60 requests per minute per client
    rate_limit_max_requests: int = int(os.getenv("RATE_LIMIT_MAX_REQUESTS", "60"))
    rate_limit_window_seconds: float = float(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "60"))
    rate_limit_cleanup_interval: int = int(os.getenv("RATE_LIMIT_CLEANUP_INTERVAL", "60"))

    # Decimal places kept when normalizing coordinates: 1 ~ 11 km, 3 ~ 111 m
    coordinate_precision: int = int(os.getenv("COORDINATE_PRECISION", "3"))

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "true").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    service_name: str = os.getenv("SERVICE_NAME", "weather-intel")

    @property
    def has_api_key(self) -> bool:
        """Check if an upstream API key is configured.

        Returns:
            True if WEATHER_API_KEY is set and non-empty
        """
        return bool(self.weather_api_key)

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if not 0 <= self.coordinate_precision <= 6:
            raise ValueError(
                f"COORDINATE_PRECISION must be between 0 and 6, got {self.coordinate_precision}"
            )

        if self.rate_limit_max_requests < 1:
            raise ValueError("RATE_LIMIT_MAX_REQUESTS must be at least 1")

        if self.rate_limit_window_seconds <= 0:
            raise ValueError("RATE_LIMIT_WINDOW_SECONDS must be positive")

        if self.cache_ttl <= 0 or self.search_cache_ttl <= 0:
            raise ValueError("CACHE_TTL and SEARCH_CACHE_TTL must be positive")

        if not 1 <= self.forecast_days <= 14:
            raise ValueError(f"FORECAST_DAYS must be between 1 and 14, got {self.forecast_days}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
