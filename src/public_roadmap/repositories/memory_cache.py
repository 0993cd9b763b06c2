"""In-memory implementation of CacheStore.

A plain dict keyed by string with an absolute expiry per entry. Expired
entries are dropped lazily when read and in bulk by a periodic sweep, so a
read never returns a stale value even if the sweep has not run.

There is no size limit and no LRU policy. Contents live for the lifetime of
the process only.
"""

import logging
import time
from collections.abc import Callable
from typing import Any

from public_roadmap.entities import CacheEntry
from public_roadmap.utils import PeriodicTask

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_INTERVAL = 5 * 60.0


class CacheKeys:
    """Key builders, so every caller spells keys the same way."""

    @staticmethod
    def issues() -> str:
        return "issues:all"

    @staticmethod
    def issue_comments(issue_id: str) -> str:
        return f"issue:{issue_id}:comments"


class InMemoryTTLCache:
    """Process-local TTL cache.

    This class satisfies the CacheStore protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        cache = InMemoryTTLCache()
        cache.start()  # begin periodic sweeps

        cache.set(CacheKeys.issues(), issues, ttl=300)
        cache.get(CacheKeys.issues())  # -> issues, until 300s pass

        await cache.stop()
        ```
    """

    def __init__(
        self,
        sweep_interval: float = DEFAULT_SWEEP_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the cache.

        Args:
            sweep_interval: Seconds between background sweeps.
            clock: Returns the current time in seconds. Injectable for tests.
        """
        self._entries: dict[str, CacheEntry] = {}
        self._clock = clock
        self._sweeper = PeriodicTask(self.sweep, sweep_interval, name="cache-sweep")

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None

        if entry.is_expired(self._clock()):
            del self._entries[key]
            logger.debug("Cache entry expired: %s", key)
            return None

        return entry.value

    def set(self, key: str, value: Any, ttl: float) -> None:
        self._entries[key] = CacheEntry(value=value, expires_at=self._clock() + ttl)

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def invalidate_pattern(self, pattern: str) -> int:
        keys = [key for key in self._entries if pattern in key]
        for key in keys:
            del self._entries[key]
        return len(keys)

    def clear(self) -> None:
        self._entries.clear()

    def sweep(self) -> int:
        """Remove every expired entry.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Cache sweep removed %d expired entries", len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        """Raw membership, ignoring expiry. Does not evict."""
        return key in self._entries

    @property
    def sweeping(self) -> bool:
        """Whether the periodic sweep is running."""
        return self._sweeper.running

    def start(self) -> None:
        """Start the periodic sweep on the running event loop."""
        self._sweeper.start()

    async def stop(self) -> None:
        """Stop the periodic sweep."""
        await self._sweeper.stop()
