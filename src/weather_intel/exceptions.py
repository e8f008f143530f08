"""Error taxonomy shared by services, repositories and handlers.

Handlers map each kind to an HTTP status:

    ConfigurationError -> 500
    ValidationError    -> 400
    NotFoundError      -> 404
    UpstreamError      -> 502
    RateLimitExceeded  -> 429 (with Retry-After)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from weather_intel.entities import RateLimitDecision


class WeatherIntelError(Exception):
    """Base class for all service errors."""


class ConfigurationError(WeatherIntelError):
    """A required upstream credential is missing or was rejected."""


class ValidationError(WeatherIntelError):
    """Caller supplied malformed or missing input."""


class NotFoundError(WeatherIntelError):
    """The upstream provider could not resolve the requested location."""


class UpstreamError(WeatherIntelError):
    """Network failure, timeout, non-2xx status or malformed upstream payload."""


class RateLimitExceeded(WeatherIntelError):
    """The client used up its request quota for the current window."""

    def __init__(self, decision: RateLimitDecision) -> None:
        super().__init__(f"Rate limit exceeded, retry in {decision.retry_after}s")
        self.decision = decision

    @property
    def retry_after(self) -> int:
        return self.decision.retry_after
