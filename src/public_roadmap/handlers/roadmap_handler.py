"""HTTP handlers for roadmap operations.

Handlers convert between DTOs (API contracts) and service calls.
They handle HTTP concerns like status codes and error bodies.

Error bodies are passed as a dict ``detail`` on HTTPException; the app's
exception handler renders such a dict as the whole response body.
"""

import logging

from fastapi import HTTPException, Request, status

from public_roadmap.dto import (
    AddCommentRequest,
    AddCommentResponse,
    BoardColumnItem,
    BoardResponse,
    CommentItem,
    CommentListResponse,
    ErrorResponse,
    IssueItem,
    IssueListResponse,
    RateLimitErrorResponse,
    StatusItem,
    StatusListResponse,
)
from public_roadmap.errors import (
    BotSubmissionError,
    CommentValidationError,
    IssueNotFoundError,
    RateLimitExceededError,
    RoadmapError,
)
from public_roadmap.services import RoadmapService, all_statuses, status_label

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT = "unknown"


def client_identifier(request: Request) -> str:
    """Pick the rate limit key for a request.

    Prefers proxy headers, then the socket peer. The value is treated as an
    opaque token and not parsed.
    """
    forwarded = request.headers.get("x-forwarded-for") or request.headers.get("x-real-ip")
    if forwarded:
        return forwarded
    if request.client is not None and request.client.host:
        return request.client.host
    return UNKNOWN_CLIENT


def _error(status_code: int, error: str, message: str | None = None) -> HTTPException:
    body = ErrorResponse(error=error, message=message).model_dump(exclude_none=True)
    return HTTPException(status_code=status_code, detail=body)


class RoadmapHandler:
    """HTTP handlers for roadmap operations.

    Example:
        ```python
        handler = RoadmapHandler(roadmap_service=service)

        @app.get("/api/issues", response_model=IssueListResponse)
        async def list_issues():
            return await handler.list_issues()
        ```
    """

    def __init__(self, roadmap_service: RoadmapService) -> None:
        """Initialize the roadmap handler.

        Args:
            roadmap_service: The roadmap service for business logic (required).
        """
        self._roadmap = roadmap_service

    async def list_issues(self) -> IssueListResponse:
        """Handle GET /api/issues requests.

        Raises:
            HTTPException: 500 if the tracker call fails
        """
        try:
            issues, cached = await self._roadmap.list_issues()
        except RoadmapError as e:
            logger.error("Error fetching issues: %s", e)
            raise _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch issues", str(e)) from e

        return IssueListResponse(
            data=[IssueItem.from_entity(issue) for issue in issues],
            cached=cached,
        )

    async def list_comments(self, issue_id: str) -> CommentListResponse:
        """Handle GET /api/issues/{id}/comments requests.

        Raises:
            HTTPException: 404 for an unknown issue, 500 if the tracker call fails
        """
        try:
            comments, cached = await self._roadmap.list_comments(issue_id)
        except IssueNotFoundError as e:
            raise _error(status.HTTP_404_NOT_FOUND, "Issue not found", str(e)) from e
        except RoadmapError as e:
            logger.error("Error fetching comments for %s: %s", issue_id, e)
            raise _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch comments", str(e)) from e

        return CommentListResponse(
            data=[CommentItem.from_entity(comment) for comment in comments],
            cached=cached,
        )

    async def add_comment(
        self,
        issue_id: str,
        body: AddCommentRequest,
        client_id: str,
    ) -> AddCommentResponse:
        """Handle POST /api/issues/{id}/comments requests.

        Raises:
            HTTPException: 400 on honeypot or invalid fields, 429 when rate
                limited, 500 if the tracker call fails
        """
        try:
            await self._roadmap.add_comment(issue_id, body.to_submission(), client_id)
        except BotSubmissionError as e:
            raise _error(status.HTTP_400_BAD_REQUEST, "Invalid submission") from e
        except CommentValidationError as e:
            raise _error(status.HTTP_400_BAD_REQUEST, str(e)) from e
        except RateLimitExceededError as e:
            result = e.result
            detail = RateLimitErrorResponse(
                error="Rate limit exceeded",
                message=str(e),
                retry_after=result.reset_in_ms,
            ).model_dump(by_alias=True)
            raise HTTPException(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                detail=detail,
                headers={"Retry-After": str(result.retry_after_seconds)},
            ) from e
        except RoadmapError as e:
            logger.error("Error adding comment to %s: %s", issue_id, e)
            raise _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to add comment", str(e)) from e

        return AddCommentResponse(success=True, message="Comment added successfully")

    async def list_statuses(self) -> StatusListResponse:
        """Handle GET /api/statuses requests."""
        return StatusListResponse(
            data=[StatusItem(status=s, label=status_label(s)) for s in all_statuses()]
        )

    async def board(self) -> BoardResponse:
        """Handle GET /api/roadmap requests.

        Raises:
            HTTPException: 500 if the tracker call fails
        """
        try:
            columns, cached = await self._roadmap.board()
        except RoadmapError as e:
            logger.error("Error building roadmap board: %s", e)
            raise _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Failed to fetch issues", str(e)) from e

        return BoardResponse(
            data=[
                BoardColumnItem(
                    status=column.status,
                    label=column.label,
                    count=len(column.issues),
                    issues=[IssueItem.from_entity(issue) for issue in column.issues],
                )
                for column in columns
            ],
            cached=cached,
        )
