"""Abuse protection for the public comment form.

- honeypot: reject submissions that filled in the hidden field
- rate_limiter: fixed-window comment allowance per client
- validation: trimming, length caps and email shape
"""

from .honeypot import is_honeypot_clean
from .rate_limiter import FixedWindowRateLimiter
from .validation import CleanComment, clean_submission, is_valid_email

__all__ = [
    "CleanComment",
    "FixedWindowRateLimiter",
    "clean_submission",
    "is_honeypot_clean",
    "is_valid_email",
]
