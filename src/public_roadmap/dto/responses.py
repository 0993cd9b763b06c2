"""Response DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field

from public_roadmap.entities import CommentEntity, IssueEntity, PublicStatus


class LabelItem(BaseModel):
    """Issue label."""

    name: str = Field(..., description="Label name")
    color: str = Field(..., description="Hex color from the tracker")


class IssueItem(BaseModel):
    """Single normalized issue."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="Tracker issue id")
    identifier: str = Field(..., description="Human-readable code, e.g. ENG-42")
    title: str
    description: str | None = None
    status: PublicStatus = Field(..., description="One of todo, in-progress, done, cancelled")
    labels: list[LabelItem] = Field(default_factory=list)
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")

    @classmethod
    def from_entity(cls, issue: IssueEntity) -> "IssueItem":
        return cls(
            id=issue.id,
            identifier=issue.identifier,
            title=issue.title,
            description=issue.description,
            status=issue.status,
            labels=[LabelItem(name=label.name, color=label.color) for label in issue.labels],
            created_at=issue.created_at,
            updated_at=issue.updated_at,
        )


class CommentItem(BaseModel):
    """Single normalized comment."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    body: str
    created_at: str = Field(..., alias="createdAt")
    author: str
    email: str | None = None

    @classmethod
    def from_entity(cls, comment: CommentEntity) -> "CommentItem":
        return cls(
            id=comment.id,
            body=comment.body,
            created_at=comment.created_at,
            author=comment.author,
            email=comment.email,
        )


class IssueListResponse(BaseModel):
    """Response DTO for GET /api/issues."""

    data: list[IssueItem]
    cached: bool = Field(..., description="Whether the list was served from cache")


class CommentListResponse(BaseModel):
    """Response DTO for GET /api/issues/{id}/comments."""

    data: list[CommentItem]
    cached: bool = Field(..., description="Whether the list was served from cache")


class AddCommentResponse(BaseModel):
    """Response DTO for POST /api/issues/{id}/comments."""

    success: bool = Field(..., description="Whether the comment was created")
    message: str = Field(..., description="Human-readable status message")


class StatusItem(BaseModel):
    """A board column descriptor."""

    status: PublicStatus
    label: str


class StatusListResponse(BaseModel):
    """Response DTO for GET /api/statuses."""

    data: list[StatusItem]


class BoardColumnItem(BaseModel):
    """One board column with its issues."""

    status: PublicStatus
    label: str
    count: int = Field(..., ge=0)
    issues: list[IssueItem]


class BoardResponse(BaseModel):
    """Response DTO for GET /api/roadmap."""

    data: list[BoardColumnItem]
    cached: bool


class ErrorResponse(BaseModel):
    """Error body for 4xx/5xx responses."""

    error: str = Field(..., description="Short error summary")
    message: str | None = Field(None, description="Detail, when available")


class RateLimitErrorResponse(ErrorResponse):
    """Error body for 429 responses."""

    model_config = ConfigDict(populate_by_name=True)

    retry_after: int = Field(..., alias="retryAfter", description="Milliseconds until the limit resets")
