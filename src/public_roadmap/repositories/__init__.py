"""Repository layer for data access.

This layer abstracts external dependencies (the Linear API, the
process-local cache) behind protocol-based interfaces.
"""

from public_roadmap.protocols import CacheStore, IssueTracker

from .linear_client import LinearClient
from .memory_cache import CacheKeys, InMemoryTTLCache

__all__ = [
    "CacheStore",
    "IssueTracker",
    "CacheKeys",
    "InMemoryTTLCache",
    "LinearClient",
]
