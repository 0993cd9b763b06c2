"""Comment domain entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CommentEntity:
    """Domain entity for a normalized comment.

    Attributes:
        id: Comment id from the tracker
        body: Markdown body
        created_at: ISO-8601 timestamp from the tracker
        author: Display name, ``"Anonymous"`` when the tracker has no user
        email: Author email, when the tracker exposes it
    """

    id: str
    body: str
    created_at: str
    author: str
    email: str | None = None


@dataclass(frozen=True)
class CommentSubmission:
    """A visitor's comment as received, before trimming and validation."""

    name: str | None
    comment: str | None
    email: str | None = None
    honeypot: str | None = None
