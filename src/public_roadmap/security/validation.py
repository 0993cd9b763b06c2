"""Comment field cleaning and validation."""

import re
from dataclasses import dataclass

from public_roadmap.entities import CommentSubmission
from public_roadmap.errors import CommentValidationError

MAX_NAME_LENGTH = 100
MAX_EMAIL_LENGTH = 100
MAX_COMMENT_LENGTH = 5000

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass(frozen=True)
class CleanComment:
    """A submission after trimming, truncation and validation."""

    name: str
    comment: str
    email: str | None = None


def is_valid_email(email: str) -> bool:
    """Check for a simple ``local@domain.tld`` shape."""
    return bool(_EMAIL_RE.match(email))


def clean_submission(submission: CommentSubmission) -> CleanComment:
    """Trim, truncate and validate a submitted comment.

    Over-long fields are cut to their caps rather than rejected.

    Args:
        submission: The raw submission

    Returns:
        The cleaned comment

    Raises:
        CommentValidationError: If name or comment is empty, or email is malformed
    """
    if not submission.name or not submission.comment:
        raise CommentValidationError("Name and comment are required")

    name = str(submission.name).strip()[:MAX_NAME_LENGTH]
    comment = str(submission.comment).strip()[:MAX_COMMENT_LENGTH]
    email = str(submission.email).strip() if submission.email else ""

    if not name or not comment:
        raise CommentValidationError("Name and comment cannot be empty")

    # shape is checked before the cap so truncation cannot cut off the domain
    if email and not is_valid_email(email):
        raise CommentValidationError("Email address is not valid")

    return CleanComment(name=name, comment=comment, email=email[:MAX_EMAIL_LENGTH] or None)
