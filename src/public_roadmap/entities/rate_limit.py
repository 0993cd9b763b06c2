"""Rate limit domain entities."""

import math
from dataclasses import dataclass


@dataclass
class RateLimitEntry:
    """Counter for one identifier within its current window.

    Mutable: the limiter increments ``count`` in place while the window
    is active and replaces the entry when the window rolls over.
    """

    count: int
    reset_at: float


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of a single rate limit check.

    Attributes:
        allowed: Whether the request may proceed
        limit: Configured maximum per window
        remaining: Requests left in the window after this one
        reset_in: Seconds until the window resets
    """

    allowed: bool
    limit: int
    remaining: int
    reset_in: float

    @property
    def reset_in_ms(self) -> int:
        return max(0, int(self.reset_in * 1000))

    @property
    def retry_after_seconds(self) -> int:
        """Whole seconds for a ``Retry-After`` header (rounded up)."""
        return max(0, math.ceil(self.reset_in))
