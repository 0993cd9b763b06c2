"""Fixed-window rate limiter.

Counts requests per identifier (usually the client address) within a window
that starts at the identifier's first request. When the window has passed,
the next request starts a fresh one.

Denied checks do not touch the counter, so hammering the endpoint while
blocked neither extends the window nor pushes the count past the limit.

Because windows reset wholesale, a client can make up to ``2 x limit``
requests across a window boundary. That is accepted behavior.
"""

import logging
import time
from collections.abc import Callable

from public_roadmap.entities import RateLimitEntry, RateLimitResult
from public_roadmap.utils import PeriodicTask

logger = logging.getLogger(__name__)

DEFAULT_MAX_REQUESTS = 5
DEFAULT_WINDOW = 60 * 60.0
DEFAULT_SWEEP_INTERVAL = 10 * 60.0


class FixedWindowRateLimiter:
    """In-memory fixed-window rate limiter.

    Example:
        ```python
        limiter = FixedWindowRateLimiter(max_requests=5, window=3600)
        result = limiter.check("203.0.113.7")
        if not result.allowed:
            retry_in = result.reset_in
        ```
    """

    def __init__(
        self,
        max_requests: int = DEFAULT_MAX_REQUESTS,
        window: float = DEFAULT_WINDOW,
        sweep_interval: float = DEFAULT_SWEEP_INTERVAL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the rate limiter.

        Args:
            max_requests: Allowed requests per identifier per window.
            window: Window length in seconds.
            sweep_interval: Seconds between background sweeps.
            clock: Returns the current time in seconds. Injectable for tests.
        """
        if max_requests <= 0:
            raise ValueError(f"max_requests must be positive, got {max_requests}")
        if window <= 0:
            raise ValueError(f"window must be positive, got {window}")

        self._max_requests = max_requests
        self._window = window
        self._clock = clock
        self._entries: dict[str, RateLimitEntry] = {}
        self._sweeper = PeriodicTask(self.sweep, sweep_interval, name="rate-limit-sweep")

    @property
    def limit(self) -> int:
        return self._max_requests

    @property
    def window(self) -> float:
        return self._window

    def check(self, identifier: str) -> RateLimitResult:
        """Count one request for ``identifier`` if it is within its allowance.

        Args:
            identifier: Opaque client key

        Returns:
            RateLimitResult describing whether the request may proceed
        """
        now = self._clock()
        entry = self._entries.get(identifier)

        if entry is None or now > entry.reset_at:
            self._entries[identifier] = RateLimitEntry(count=1, reset_at=now + self._window)
            return RateLimitResult(
                allowed=True,
                limit=self._max_requests,
                remaining=self._max_requests - 1,
                reset_in=self._window,
            )

        if entry.count >= self._max_requests:
            logger.warning("Rate limit exceeded for %s", identifier)
            return RateLimitResult(
                allowed=False,
                limit=self._max_requests,
                remaining=0,
                reset_in=entry.reset_at - now,
            )

        remaining = self._max_requests - entry.count - 1
        entry.count += 1
        return RateLimitResult(
            allowed=True,
            limit=self._max_requests,
            remaining=remaining,
            reset_in=entry.reset_at - now,
        )

    def reset(self, identifier: str) -> None:
        """Forget the counter for one identifier."""
        self._entries.pop(identifier, None)

    def clear(self) -> None:
        """Forget all counters."""
        self._entries.clear()

    def sweep(self) -> int:
        """Drop entries whose window has passed.

        Returns:
            Number of entries removed
        """
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if now > entry.reset_at]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Rate limit sweep removed %d expired entries", len(expired))
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)

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
