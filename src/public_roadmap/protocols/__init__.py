"""Protocol interfaces for swappable implementations.

Protocols enable:
- Swapping the in-memory cache for a shared store later
- Unit testing with stub issue trackers
- Clear separation of concerns
"""

from .cache_store import CacheStore
from .issue_tracker import IssueTracker

__all__ = [
    "CacheStore",
    "IssueTracker",
]
