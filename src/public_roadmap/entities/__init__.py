"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.
"""

from .cache_entry import CacheEntry
from .comment import CommentEntity, CommentSubmission
from .issue import IssueEntity, IssueFilters, LabelEntity, PublicStatus
from .rate_limit import RateLimitEntry, RateLimitResult

__all__ = [
    "CacheEntry",
    "CommentEntity",
    "CommentSubmission",
    "IssueEntity",
    "IssueFilters",
    "LabelEntity",
    "PublicStatus",
    "RateLimitEntry",
    "RateLimitResult",
]
