"""Cache storage protocol.

Defines the interface for a key/value store with per-entry expiry.
The default implementation is the process-local InMemoryTTLCache.
"""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class CacheStore(Protocol):
    """Protocol for TTL cache backends.

    Any type that implements these methods satisfies the protocol,
    no explicit inheritance needed.
    """

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None if absent or expired.

        Args:
            key: The cache key

        Returns:
            The cached value, or None
        """
        ...

    def set(self, key: str, value: Any, ttl: float) -> None:
        """Store a value, replacing any existing entry.

        Args:
            key: The cache key
            value: The value to store
            ttl: Time-to-live in seconds
        """
        ...

    def invalidate(self, key: str) -> None:
        """Remove a single entry. Missing keys are ignored."""
        ...

    def invalidate_pattern(self, pattern: str) -> int:
        """Remove every entry whose key contains ``pattern``.

        Args:
            pattern: Literal substring (not a regex)

        Returns:
            Number of entries removed
        """
        ...

    def clear(self) -> None:
        """Remove all entries."""
        ...
