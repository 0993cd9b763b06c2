"""Map Linear workflow state names onto the four public statuses."""

import logging

from public_roadmap.entities import PublicStatus

logger = logging.getLogger(__name__)

DEFAULT_STATUS: PublicStatus = "todo"

STATUS_MAP: dict[str, PublicStatus] = {
    "Backlog": "todo",
    "Todo": "todo",
    "In Progress": "in-progress",
    "In Dev": "in-progress",
    "Dev Done": "in-progress",
    "In Wessense": "in-progress",
    "In Manual QA": "in-progress",
    "Done": "done",
    "Completed": "done",
    "Canceled": "cancelled",
}

STATUS_LABELS: dict[PublicStatus, str] = {
    "todo": "Todo",
    "in-progress": "In Progress",
    "done": "Done",
    "cancelled": "Cancelled",
}


def map_status(state_name: str) -> PublicStatus:
    """Map a Linear state name to a public status.

    Unknown names are logged and fall back to ``todo``; this never raises.

    Args:
        state_name: Workflow state name as reported by Linear

    Returns:
        One of ``todo``, ``in-progress``, ``done``, ``cancelled``
    """
    status = STATUS_MAP.get(state_name)
    if status is None:
        logger.warning("Unknown Linear state: %r, defaulting to %r", state_name, DEFAULT_STATUS)
        return DEFAULT_STATUS
    return status


def all_statuses() -> list[PublicStatus]:
    """Return the public statuses in board column order."""
    return list(STATUS_LABELS)


def status_label(status: PublicStatus) -> str:
    """Return the human-readable label for a public status."""
    return STATUS_LABELS[status]
