"""Exception hierarchy for the roadmap service.

Services and repositories raise these; the HTTP handler maps them
onto status codes. Nothing here knows about HTTP.
"""

from typing import Any

from public_roadmap.entities import RateLimitResult


class RoadmapError(Exception):
    """Base class for all roadmap errors."""


class ConfigurationError(RoadmapError):
    """Required configuration is missing or invalid. Not retryable."""


class UpstreamError(RoadmapError):
    """The issue tracker failed or returned an error payload.

    Attributes:
        details: Raw upstream detail (status, GraphQL errors) for diagnostics
    """

    def __init__(self, message: str, details: Any = None) -> None:
        super().__init__(message)
        self.details = details


class IssueNotFoundError(RoadmapError):
    """The issue tracker has no issue with the requested id."""

    def __init__(self, issue_id: str) -> None:
        super().__init__(f"Issue not found: {issue_id}")
        self.issue_id = issue_id


class CommentValidationError(RoadmapError):
    """A submitted comment is missing required fields or malformed."""


class BotSubmissionError(RoadmapError):
    """The honeypot field was filled in."""


class RateLimitExceededError(RoadmapError):
    """The client has used up its comment allowance for the current window."""

    def __init__(self, result: RateLimitResult) -> None:
        super().__init__(
            f"Maximum {result.limit} comments per window. Try again later."
        )
        self.result = result
