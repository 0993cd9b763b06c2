"""Honeypot field check.

The comment form carries a field hidden from humans. Browsers filling the
form by hand leave it empty; bots filling every field do not.
"""


def is_honeypot_clean(value: object) -> bool:
    """Return True if the honeypot field was left empty."""
    return value is None or value == ""
