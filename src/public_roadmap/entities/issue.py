"""Issue domain entities."""

from dataclasses import dataclass, field
from typing import Literal

PublicStatus = Literal["todo", "in-progress", "done", "cancelled"]


@dataclass(frozen=True)
class LabelEntity:
    """An issue label as shown on the board."""

    name: str
    color: str


@dataclass(frozen=True)
class IssueEntity:
    """Domain entity for a normalized issue.

    Attributes:
        id: Issue tracker id, passed through unchanged
        identifier: Human-readable code such as ``ENG-42``
        title: Issue title
        description: Markdown description, if any
        status: One of the four public statuses
        labels: Labels in the order the tracker returned them
        created_at: ISO-8601 timestamp from the tracker
        updated_at: ISO-8601 timestamp from the tracker
    """

    id: str
    identifier: str
    title: str
    description: str | None
    status: PublicStatus
    labels: tuple[LabelEntity, ...] = field(default_factory=tuple)
    created_at: str = ""
    updated_at: str = ""


@dataclass(frozen=True)
class IssueFilters:
    """Optional scope for the issue listing. Unset fields are not sent."""

    team_id: str | None = None
    project_id: str | None = None
    label_name: str | None = None

    def to_variables(self) -> dict[str, str]:
        variables = {
            "teamId": self.team_id,
            "projectId": self.project_id,
            "labelName": self.label_name,
        }
        return {name: value for name, value in variables.items() if value}
