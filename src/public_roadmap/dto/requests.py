"""Request DTOs for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from public_roadmap.entities import CommentSubmission


class AddCommentRequest(BaseModel):
    """Request DTO for posting a comment.

    Every field is optional at this layer so that missing or blank values
    reach the service's validation and come back as a 400, not a 422.
    Non-string JSON values are coerced to strings for the same reason.
    """

    name: str | None = Field(None, description="Display name of the commenter")
    email: str | None = Field(None, description="Optional contact email")
    comment: str | None = Field(None, description="Comment text (markdown)")
    honeypot: str | None = Field(None, description="Hidden field; must be empty")

    @field_validator("name", "email", "comment", mode="before")
    @classmethod
    def coerce_to_string(cls, value: Any) -> str | None:
        if value is None or isinstance(value, str):
            return value
        return str(value)

    @field_validator("honeypot", mode="before")
    @classmethod
    def coerce_honeypot(cls, value: Any) -> str | None:
        # false, 0 and other empty values count as an untouched field
        if not value:
            return None
        return value if isinstance(value, str) else str(value)

    def to_submission(self) -> CommentSubmission:
        return CommentSubmission(
            name=self.name,
            comment=self.comment,
            email=self.email,
            honeypot=self.honeypot,
        )
