"""Roadmap service for core business logic.

This service sits between the HTTP handler and the issue tracker. It
normalizes tracker records into entities, keeps short-lived copies in the
cache, and guards the comment write path with the honeypot check, the rate
limiter and field validation.
"""

import logging
from dataclasses import dataclass
from typing import Any

from public_roadmap.config import Settings, settings
from public_roadmap.entities import (
    CommentEntity,
    CommentSubmission,
    IssueEntity,
    IssueFilters,
    LabelEntity,
    PublicStatus,
)
from public_roadmap.errors import (
    BotSubmissionError,
    IssueNotFoundError,
    RateLimitExceededError,
    UpstreamError,
)
from public_roadmap.protocols import CacheStore, IssueTracker
from public_roadmap.repositories import CacheKeys, InMemoryTTLCache
from public_roadmap.security import (
    CleanComment,
    FixedWindowRateLimiter,
    clean_submission,
    is_honeypot_clean,
)

from .status_mapper import all_statuses, map_status, status_label

logger = logging.getLogger(__name__)

ANONYMOUS_AUTHOR = "Anonymous"
COMMENT_HEADER = "[Public Roadmap Comment]"


@dataclass(frozen=True)
class BoardColumn:
    """One status column of the roadmap board."""

    status: PublicStatus
    label: str
    issues: tuple[IssueEntity, ...]


def _text(raw: dict[str, Any], key: str, optional: bool = False) -> str | None:
    """Read a string field from a raw record, raising TypeError/KeyError if malformed."""
    value = raw.get(key) if optional else raw[key]
    if value is None and optional:
        return None
    if not isinstance(value, str):
        raise TypeError(f"Field {key!r} must be a string, got {type(value).__name__}")
    return value


def normalize_issue(raw: dict[str, Any]) -> IssueEntity:
    """Convert a raw Linear issue record into an IssueEntity.

    Raises:
        KeyError, TypeError, AttributeError: If the record is malformed
    """
    labels = (raw.get("labels") or {}).get("nodes") or []
    return IssueEntity(
        id=_text(raw, "id"),
        identifier=_text(raw, "identifier"),
        title=_text(raw, "title"),
        description=_text(raw, "description", optional=True),
        status=map_status((raw.get("state") or {}).get("name", "")),
        labels=tuple(
            LabelEntity(name=_text(label, "name"), color=_text(label, "color")) for label in labels
        ),
        created_at=_text(raw, "createdAt"),
        updated_at=_text(raw, "updatedAt"),
    )


def normalize_comment(raw: dict[str, Any]) -> CommentEntity:
    """Convert a raw Linear comment record into a CommentEntity.

    Raises:
        KeyError, TypeError, AttributeError: If the record is malformed
    """
    user = raw.get("user") or {}
    return CommentEntity(
        id=_text(raw, "id"),
        body=_text(raw, "body"),
        created_at=_text(raw, "createdAt"),
        author=_text(user, "name", optional=True) or ANONYMOUS_AUTHOR,
        email=_text(user, "email", optional=True),
    )


def build_cache(config: Settings) -> InMemoryTTLCache:
    """Build the process-local cache with the configured sweep interval."""
    return InMemoryTTLCache(sweep_interval=config.cache_sweep_interval / 1000)


def build_rate_limiter(config: Settings) -> FixedWindowRateLimiter:
    """Build the comment rate limiter from settings (milliseconds to seconds)."""
    return FixedWindowRateLimiter(
        max_requests=config.rate_limit_max_comments,
        window=config.rate_limit_window_ms / 1000,
        sweep_interval=config.rate_limit_sweep_interval / 1000,
    )


def format_comment_body(comment: CleanComment) -> str:
    """Prefix a visitor comment with an attribution header.

    Returns:
        Markdown body as posted to the tracker
    """
    lines = [COMMENT_HEADER, f"Name: {comment.name}"]
    if comment.email:
        lines.append(f"Email: {comment.email}")
    return "\n".join(lines) + "\n\n" + comment.comment


class RoadmapService:
    """Core roadmap orchestration service.

    This service depends on PROTOCOLS for the tracker and cache, so tests
    can pass stubs and isolated instances per case.

    Example:
        ```python
        service = RoadmapService(
            tracker=LinearClient(api_key=settings.linear_api_key),
            cache=InMemoryTTLCache(),
            rate_limiter=FixedWindowRateLimiter(max_requests=5, window=3600),
        )
        issues, cached = await service.list_issues()
        ```
    """

    def __init__(
        self,
        tracker: IssueTracker,
        cache: CacheStore,
        rate_limiter: FixedWindowRateLimiter,
        filters: IssueFilters | None = None,
        issues_ttl: float = 300.0,
        comments_ttl: float = 120.0,
    ) -> None:
        """Initialize the roadmap service.

        Args:
            tracker: Issue tracker backend (required).
            cache: Cache for issue and comment lists (required).
            rate_limiter: Limiter guarding comment submission (required).
            filters: Scope for the issue listing. Defaults to no filters.
            issues_ttl: Seconds to cache the issue list.
            comments_ttl: Seconds to cache a comment list.
        """
        self._tracker = tracker
        self._cache = cache
        self._rate_limiter = rate_limiter
        self._filters = filters or IssueFilters()
        self._issues_ttl = issues_ttl
        self._comments_ttl = comments_ttl

    @classmethod
    def create(
        cls,
        tracker: IssueTracker,
        config: Settings | None = None,
        cache: CacheStore | None = None,
        rate_limiter: FixedWindowRateLimiter | None = None,
    ) -> "RoadmapService":
        """Factory method to build the service from settings.

        Args:
            tracker: Issue tracker backend (required).
            config: Settings to read. If None, uses the global settings.
            cache: Cache to use. If None, an InMemoryTTLCache is built from settings.
            rate_limiter: Limiter to use. If None, one is built from settings.

        Returns:
            Configured RoadmapService
        """
        config = config or settings
        return cls(
            tracker=tracker,
            cache=cache if cache is not None else build_cache(config),
            rate_limiter=rate_limiter if rate_limiter is not None else build_rate_limiter(config),
            filters=config.issue_filters,
            issues_ttl=config.cache_ttl_issues / 1000,
            comments_ttl=config.cache_ttl_comments / 1000,
        )

    async def list_issues(self) -> tuple[list[IssueEntity], bool]:
        """List all roadmap issues.

        Returns:
            Tuple of (issues, served_from_cache)

        Raises:
            UpstreamError: If the tracker call fails
        """
        key = CacheKeys.issues()
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return list(cached), True

        logger.debug("Cache miss: %s", key)
        raw_issues = await self._tracker.fetch_issues(self._filters)
        try:
            issues = [normalize_issue(raw) for raw in raw_issues]
        except (KeyError, TypeError, AttributeError) as e:
            raise UpstreamError(f"Malformed issue record from tracker: {e!r}", details=raw_issues) from e
        self._cache.set(key, tuple(issues), self._issues_ttl)
        return issues, False

    async def list_comments(self, issue_id: str) -> tuple[list[CommentEntity], bool]:
        """List the comments on one issue.

        Args:
            issue_id: The tracker's issue id

        Returns:
            Tuple of (comments, served_from_cache)

        Raises:
            IssueNotFoundError: If the tracker has no such issue
            UpstreamError: If the tracker call fails
        """
        key = CacheKeys.issue_comments(issue_id)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug("Cache hit: %s", key)
            return list(cached), True

        logger.debug("Cache miss: %s", key)
        raw_comments = await self._tracker.fetch_issue_comments(issue_id)
        if raw_comments is None:
            raise IssueNotFoundError(issue_id)

        try:
            comments = [normalize_comment(raw) for raw in raw_comments]
        except (KeyError, TypeError, AttributeError) as e:
            raise UpstreamError(f"Malformed comment record from tracker: {e!r}", details=raw_comments) from e
        self._cache.set(key, tuple(comments), self._comments_ttl)
        return comments, False

    async def add_comment(
        self,
        issue_id: str,
        submission: CommentSubmission,
        client_id: str,
    ) -> dict[str, Any]:
        """Post a visitor comment to an issue.

        Business logic:
        1. Reject bots that filled the honeypot (nothing else is touched)
        2. Consume one slot from the client's rate limit
        3. Trim, truncate and validate the fields
        4. Create the comment with an attribution header
        5. Invalidate the cached comment list for the issue

        Args:
            issue_id: The tracker's issue id
            submission: The raw form submission
            client_id: Rate limit key, usually the client address

        Returns:
            The created comment's raw record

        Raises:
            BotSubmissionError: If the honeypot field is filled
            RateLimitExceededError: If the client is over its allowance
            CommentValidationError: If the fields are missing or malformed
            UpstreamError: If the tracker call fails
        """
        if not is_honeypot_clean(submission.honeypot):
            logger.warning("Honeypot tripped on issue %s by %s", issue_id, client_id)
            raise BotSubmissionError("Invalid submission")

        result = self._rate_limiter.check(client_id)
        if not result.allowed:
            raise RateLimitExceededError(result)

        comment = clean_submission(submission)
        created = await self._tracker.create_comment(issue_id, format_comment_body(comment))

        self._cache.invalidate(CacheKeys.issue_comments(issue_id))
        return created

    async def board(self) -> tuple[list[BoardColumn], bool]:
        """Group the issue list into ordered status columns.

        Returns:
            Tuple of (columns in board order, served_from_cache)
        """
        issues, cached = await self.list_issues()
        columns = [
            BoardColumn(
                status=status,
                label=status_label(status),
                issues=tuple(issue for issue in issues if issue.status == status),
            )
            for status in all_statuses()
        ]
        return columns, cached

    @property
    def cache(self) -> CacheStore:
        """Get the underlying cache (for testing)."""
        return self._cache

    @property
    def rate_limiter(self) -> FixedWindowRateLimiter:
        """Get the underlying rate limiter (for testing)."""
        return self._rate_limiter

    @property
    def tracker(self) -> IssueTracker:
        """Get the underlying issue tracker (for testing)."""
        return self._tracker
