"""In-memory implementation of CacheStore.

Process-local TTL cache. Entries are filtered on every read, so a stale
value is never returned; ``cleanup`` only bounds memory for keys that are
never read again.
"""

import threading
import time
from collections.abc import Callable
from typing import Any

from weather_intel.config import settings
from weather_intel.entities import CacheEntryEntity


class InMemoryCacheRepository:
    """Dictionary-backed TTL cache guarded by a single lock.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        cache = InMemoryCacheRepository.create(default_ttl=60)
        cache.set("weather:london", payload)
        cache.get("weather:london")  # payload, until 60s have passed
        ```
    """

    def __init__(
        self,
        default_ttl: float | None = None,
        time_func: Callable[[], float] = time.time,
    ) -> None:
        """Initialize the cache.

        Args:
            default_ttl: TTL in seconds used when ``set`` gets none. Defaults to settings.
            time_func: Clock returning seconds; injectable for tests.
        """
        self._default_ttl = settings.cache_ttl if default_ttl is None else default_ttl
        self._time_func = time_func
        self._entries: dict[str, CacheEntryEntity] = {}
        self._lock = threading.Lock()

    @classmethod
    def create(
        cls,
        default_ttl: float | None = None,
        time_func: Callable[[], float] = time.time,
    ) -> "InMemoryCacheRepository":
        """Factory method to create InMemoryCacheRepository with defaults."""
        return cls(default_ttl=default_ttl, time_func=time_func)

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            if entry.is_expired(self._time_func()):
                del self._entries[key]
                return None
            return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        with self._lock:
            self._entries[key] = CacheEntryEntity(
                value=value,
                stored_at=self._time_func(),
                ttl=self._default_ttl if ttl is None else ttl,
            )

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            return count

    def cleanup(self) -> int:
        """Sweep all expired entries.

        Returns:
            Number of entries removed
        """
        with self._lock:
            now = self._time_func()
            expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
            for key in expired:
                del self._entries[key]
            return len(expired)

    def count_all(self) -> int:
        with self._lock:
            return len(self._entries)

    def health_check(self) -> bool:
        return True

    def get_stats(self) -> dict:
        """Get cache statistics.

        Returns:
            Dictionary with size, keys and the default TTL
        """
        with self._lock:
            return {
                "backend": "memory",
                "size": len(self._entries),
                "keys": list(self._entries),
                "default_ttl": self._default_ttl,
            }

    @property
    def default_ttl(self) -> float:
        return self._default_ttl
