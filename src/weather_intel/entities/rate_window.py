"""Rate limiting domain entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RateWindowEntity:
    """A client's fixed counting window.

    Attributes:
        count: Requests admitted in the current window
        reset_at: Unix timestamp at which the window closes
    """

    count: int
    reset_at: float


@dataclass(frozen=True)
class RateLimitDecision:
    """Outcome of a rate limit check.

    Attributes:
        allowed: Whether the request is admitted
        remaining: Requests left in the current window
        reset_at: Unix timestamp at which the window closes
        limit: Maximum requests per window
        retry_after: Whole seconds until the window closes (0 when allowed)
    """

    allowed: bool
    remaining: int
    reset_at: float
    limit: int
    retry_after: int = 0
