"""Data Transfer Objects for API contracts.

These Pydantic models define the external API contract.
They are used for request/response validation and serialization.

Internal domain logic should use entities from the entities package.
"""

from .requests import AddCommentRequest
from .responses import (
    AddCommentResponse,
    BoardColumnItem,
    BoardResponse,
    CommentItem,
    CommentListResponse,
    ErrorResponse,
    IssueItem,
    IssueListResponse,
    LabelItem,
    RateLimitErrorResponse,
    StatusItem,
    StatusListResponse,
)

__all__ = [
    "AddCommentRequest",
    "AddCommentResponse",
    "BoardColumnItem",
    "BoardResponse",
    "CommentItem",
    "CommentListResponse",
    "ErrorResponse",
    "IssueItem",
    "IssueListResponse",
    "LabelItem",
    "RateLimitErrorResponse",
    "StatusItem",
    "StatusListResponse",
]
