"""
Shared fixtures: a controllable clock and an in-memory issue tracker.
"""

from typing import Any

import pytest
from fastapi.testclient import TestClient

from public_roadmap.api.app import create_app
from public_roadmap.config import Settings
from public_roadmap.entities import IssueFilters
from public_roadmap.errors import UpstreamError


class FakeClock:
    """Monotonic clock that only moves when told to."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_raw_issue(issue_id: str, state: str = "Todo", **overrides: Any) -> dict[str, Any]:
    raw = {
        "id": issue_id,
        "identifier": f"ENG-{issue_id}",
        "title": f"Issue {issue_id}",
        "description": None,
        "state": {"name": state},
        "labels": {"nodes": [{"name": "feature", "color": "#5e6ad2"}]},
        "createdAt": "2024-01-01T00:00:00.000Z",
        "updatedAt": "2024-01-02T00:00:00.000Z",
    }
    raw.update(overrides)
    return raw


class StubTracker:
    """IssueTracker stub that records calls and serves canned data."""

    def __init__(self) -> None:
        self.issues: list[dict[str, Any]] = [
            make_raw_issue("1", "Backlog"),
            make_raw_issue("2", "In Progress"),
            make_raw_issue("3", "Completed"),
            make_raw_issue("4", "Canceled"),
        ]
        self.comments: dict[str, list[dict[str, Any]]] = {
            "1": [
                {
                    "id": "c1",
                    "body": "First!",
                    "createdAt": "2024-01-03T00:00:00.000Z",
                    "user": {"name": "Ada", "email": "ada@example.com"},
                },
                {
                    "id": "c2",
                    "body": "Integration comment",
                    "createdAt": "2024-01-04T00:00:00.000Z",
                    "user": None,
                },
            ],
        }
        self.fail_with: UpstreamError | None = None
        self.fetch_issues_calls: list[IssueFilters] = []
        self.fetch_comments_calls: list[str] = []
        self.created: list[tuple[str, str]] = []
        self.closed = False

    @property
    def call_count(self) -> int:
        return len(self.fetch_issues_calls) + len(self.fetch_comments_calls) + len(self.created)

    async def fetch_issues(self, filters: IssueFilters) -> list[dict[str, Any]]:
        self.fetch_issues_calls.append(filters)
        if self.fail_with:
            raise self.fail_with
        return list(self.issues)

    async def fetch_issue_comments(self, issue_id: str) -> list[dict[str, Any]] | None:
        self.fetch_comments_calls.append(issue_id)
        if self.fail_with:
            raise self.fail_with
        if issue_id not in self.comments:
            return None
        return list(self.comments[issue_id])

    async def create_comment(self, issue_id: str, body: str) -> dict[str, Any]:
        self.created.append((issue_id, body))
        if self.fail_with:
            raise self.fail_with
        comment_id = f"new{len(self.created)}"
        self.comments.setdefault(issue_id, []).append(
            {"id": comment_id, "body": body, "createdAt": "2024-02-01T00:00:00.000Z", "user": None}
        )
        return {"id": comment_id, "createdAt": "2024-02-01T00:00:00.000Z"}

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def tracker():
    return StubTracker()


@pytest.fixture
def test_settings():
    return Settings(
        linear_api_key="lin_api_test",
        linear_team_id=None,
        linear_project_id=None,
        linear_roadmap_label=None,
        rate_limit_max_comments=5,
        rate_limit_window_ms=3_600_000,
    )


@pytest.fixture
def client(test_settings, tracker):
    """Create a test client with the lifespan running against the stub tracker."""
    app = create_app(config=test_settings, tracker=tracker)
    with TestClient(app) as test_client:
        yield test_client
