"""Fixed-window rate limiter.

Each client owns one window of ``window_seconds`` capped at
``max_requests``. Windows reset at discrete boundaries rather than sliding,
so a burst straddling a boundary can briefly admit close to twice the
limit. That is the accepted trade-off for O(1) state per client.
"""

import math
import threading
import time
from collections.abc import Callable, Mapping

from weather_intel.config import settings
from weather_intel.entities import RateLimitDecision, RateWindowEntity

UNKNOWN_CLIENT = "unknown"


def resolve_client_id(headers: Mapping[str, str]) -> str:
    """Derive a client identifier from proxy headers.

    Prefers the first ``X-Forwarded-For`` entry, then ``X-Real-IP``. Clients
    with neither share the single ``"unknown"`` bucket.

    Args:
        headers: Case-insensitive request header mapping

    Returns:
        The client identifier
    """
    forwarded = headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first

    real_ip = headers.get("x-real-ip")
    if real_ip and real_ip.strip():
        return real_ip.strip()

    return UNKNOWN_CLIENT


class RateLimiter:
    """Per-client fixed-window request counter.

    ``check`` performs the read and the increment under one lock, so two
    concurrent requests can never both take the last slot of a window.

    Example:
        ```python
        limiter = RateLimiter.create(max_requests=60, window_seconds=60)
        decision = limiter.check("203.0.113.7")
        if not decision.allowed:
            print(f"retry in {decision.retry_after}s")
        ```
    """

    def __init__(
        self,
        max_requests: int | None = None,
        window_seconds: float | None = None,
        time_func: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the rate limiter.

        Args:
            max_requests: Requests allowed per window. Defaults to settings.
            window_seconds: Window length in seconds. Defaults to settings.
            time_func: Clock returning seconds; injectable for tests.
        """
        self._max_requests = (
            settings.rate_limit_max_requests if max_requests is None else max_requests
        )
        self._window_seconds = (
            settings.rate_limit_window_seconds if window_seconds is None else window_seconds
        )
        self._time_func = time_func
        self._windows: dict[str, RateWindowEntity] = {}
        self._lock = threading.Lock()

    @classmethod
    def create(
        cls,
        max_requests: int | None = None,
        window_seconds: float | None = None,
        time_func: Callable[[], float] = time.time,
    ) -> "RateLimiter":
        """Factory method to create RateLimiter with defaults from settings."""
        return cls(max_requests=max_requests, window_seconds=window_seconds, time_func=time_func)

    def check(self, client_id: str) -> RateLimitDecision:
        """Count a request against ``client_id`` and decide whether to admit it.

        Args:
            client_id: Client identifier (usually an IP address)

        Returns:
            RateLimitDecision with remaining quota and window reset time
        """
        with self._lock:
            now = self._time_func()
            window = self._windows.get(client_id)

            if window is None or now >= window.reset_at:
                window = RateWindowEntity(count=1, reset_at=now + self._window_seconds)
                self._windows[client_id] = window
                return self._admitted(window)

            if window.count < self._max_requests:
                window = RateWindowEntity(count=window.count + 1, reset_at=window.reset_at)
                self._windows[client_id] = window
                return self._admitted(window)

            return RateLimitDecision(
                allowed=False,
                remaining=0,
                reset_at=window.reset_at,
                limit=self._max_requests,
                retry_after=max(1, math.ceil(window.reset_at - now)),
            )

    def _admitted(self, window: RateWindowEntity) -> RateLimitDecision:
        return RateLimitDecision(
            allowed=True,
            remaining=self._max_requests - window.count,
            reset_at=window.reset_at,
            limit=self._max_requests,
        )

    def reset(self, client_id: str) -> None:
        """Forget a client's window."""
        with self._lock:
            self._windows.pop(client_id, None)

    def clear(self) -> None:
        """Forget every window."""
        with self._lock:
            self._windows.clear()

    def cleanup(self) -> int:
        """Drop windows whose reset time has passed.

        Returns:
            Number of windows removed
        """
        with self._lock:
            now = self._time_func()
            expired = [key for key, window in self._windows.items() if now >= window.reset_at]
            for key in expired:
                del self._windows[key]
            return len(expired)

    def get_stats(self) -> dict:
        with self._lock:
            return {
                "tracked_clients": len(self._windows),
                "max_requests": self._max_requests,
                "window_seconds": self._window_seconds,
            }

    @property
    def max_requests(self) -> int:
        return self._max_requests

    @property
    def window_seconds(self) -> float:
        return self._window_seconds
