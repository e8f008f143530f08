"""Cache storage protocol.

Defines the interface for a key/value store with per-entry expiry.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for TTL cache backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.
    """

    def get(self, key: str) -> Any | None:
        """Return the stored value, or None if absent or expired."""
        ...

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store a value, overwriting any existing entry.

        Args:
            key: The cache key
            value: The payload to store
            ttl: Time-to-live in seconds. None uses the backend default.
        """
        ...

    def delete(self, key: str) -> bool:
        """Remove a key.

        Returns:
            True if an entry was removed, False otherwise
        """
        ...

    def clear(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries removed
        """
        ...

    def cleanup(self) -> int:
        """Remove all expired entries.

        Returns:
            Number of entries removed
        """
        ...

    def count_all(self) -> int:
        """Count entries currently held (expired ones included until swept)."""
        ...

    def health_check(self) -> bool:
        """Check if the store is usable."""
        ...

    def get_stats(self) -> dict:
        """Get store statistics (implementation-specific)."""
        ...
