"""Cache entry domain entity."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CacheEntry:
    """A cached value with its absolute expiry time.

    Attributes:
        value: The cached payload (opaque to the cache)
        expires_at: Clock reading (seconds) after which the entry is stale
    """

    value: Any
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now > self.expires_at
