"""
Tests for the public roadmap API.
"""

import pytest
from fastapi.testclient import TestClient

from public_roadmap.api.app import create_app
from public_roadmap.config import Settings
from public_roadmap.errors import ConfigurationError, UpstreamError
from public_roadmap.repositories import CacheKeys

VALID_COMMENT = {"name": "Ada", "email": "ada@example.com", "comment": "Ship it", "honeypot": ""}


def comment_cache(client):
    return client.app.state.roadmap_service.cache


def test_root(client):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert data["name"] == "Public Roadmap API"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_list_issues(client):
    response = client.get("/api/issues")
    assert response.status_code == 200
    body = response.json()
    assert body["cached"] is False
    first = body["data"][0]
    assert first == {
        "id": "1",
        "identifier": "ENG-1",
        "title": "Issue 1",
        "description": None,
        "status": "todo",
        "labels": [{"name": "feature", "color": "#5e6ad2"}],
        "createdAt": "2024-01-01T00:00:00.000Z",
        "updatedAt": "2024-01-02T00:00:00.000Z",
    }
    assert [i["status"] for i in body["data"]] == ["todo", "in-progress", "done", "cancelled"]


def test_list_issues_twice_is_cached(client, tracker):
    first = client.get("/api/issues").json()
    second = client.get("/api/issues").json()
    assert first["cached"] is False
    assert second["cached"] is True
    assert second["data"] == first["data"]
    assert len(tracker.fetch_issues_calls) == 1


def test_list_issues_upstream_failure(client, tracker):
    tracker.fail_with = UpstreamError("Linear API error: 502 Bad Gateway")
    response = client.get("/api/issues")
    assert response.status_code == 500
    assert response.json() == {
        "error": "Failed to fetch issues",
        "message": "Linear API error: 502 Bad Gateway",
    }


def test_list_comments(client):
    response = client.get("/api/issues/1/comments")
    assert response.status_code == 200
    body = response.json()
    assert body["cached"] is False
    assert body["data"][0] == {
        "id": "c1",
        "body": "First!",
        "createdAt": "2024-01-03T00:00:00.000Z",
        "author": "Ada",
        "email": "ada@example.com",
    }
    assert body["data"][1]["author"] == "Anonymous"
    assert client.get("/api/issues/1/comments").json()["cached"] is True


def test_list_comments_unknown_issue(client):
    response = client.get("/api/issues/nope/comments")
    assert response.status_code == 404
    assert response.json()["error"] == "Issue not found"


def test_list_comments_upstream_failure(client, tracker):
    tracker.fail_with = UpstreamError("timeout")
    response = client.get("/api/issues/1/comments")
    assert response.status_code == 500
    assert response.json()["error"] == "Failed to fetch comments"


def test_honeypot_rejected_without_upstream_call(client, tracker):
    response = client.post("/api/issues/1/comments", json={**VALID_COMMENT, "honeypot": "x"})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid submission"}
    assert tracker.call_count == 0
    assert len(client.app.state.roadmap_service.rate_limiter) == 0


def test_add_comment_invalidates_comment_cache(client, tracker):
    client.get("/api/issues/1/comments")
    key = CacheKeys.issue_comments("1")
    assert comment_cache(client).get(key) is not None

    response = client.post("/api/issues/1/comments", json=VALID_COMMENT)

    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Comment added successfully"}
    assert comment_cache(client).get(key) is None
    assert tracker.created[0][1].startswith("[Public Roadmap Comment]\nName: Ada\nEmail: ada@example.com")

    refreshed = client.get("/api/issues/1/comments").json()
    assert refreshed["cached"] is False
    assert refreshed["data"][-1]["body"].endswith("Ship it")


@pytest.mark.parametrize(
    "payload",
    [
        {"comment": "no name"},
        {"name": "no comment"},
        {"name": "  ", "comment": "blank name"},
        {"name": "Ada", "comment": "bad email", "email": "nope"},
    ],
)
def test_add_comment_validation(client, tracker, payload):
    response = client.post("/api/issues/1/comments", json=payload)
    assert response.status_code == 400
    assert "error" in response.json()
    assert tracker.created == []


def test_add_comment_rate_limited(client, tracker):
    headers = {"X-Forwarded-For": "203.0.113.7"}
    for _ in range(5):
        assert client.post("/api/issues/1/comments", json=VALID_COMMENT, headers=headers).status_code == 200

    response = client.post("/api/issues/1/comments", json=VALID_COMMENT, headers=headers)

    assert response.status_code == 429
    body = response.json()
    assert body["error"] == "Rate limit exceeded"
    assert "5" in body["message"]
    assert 0 < body["retryAfter"] <= 3_600_000
    assert 0 < int(response.headers["retry-after"]) <= 3600
    assert len(tracker.created) == 5

    other = client.post("/api/issues/1/comments", json=VALID_COMMENT, headers={"X-Real-IP": "198.51.100.1"})
    assert other.status_code == 200


def test_add_comment_upstream_failure(client, tracker):
    tracker.fail_with = UpstreamError("Failed to create comment")
    response = client.post("/api/issues/1/comments", json=VALID_COMMENT)
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to add comment", "message": "Failed to create comment"}


def test_statuses(client):
    response = client.get("/api/statuses")
    assert response.status_code == 200
    assert response.json()["data"] == [
        {"status": "todo", "label": "Todo"},
        {"status": "in-progress", "label": "In Progress"},
        {"status": "done", "label": "Done"},
        {"status": "cancelled", "label": "Cancelled"},
    ]


def test_roadmap_board(client, tracker):
    body = client.get("/api/roadmap").json()
    assert [c["status"] for c in body["data"]] == ["todo", "in-progress", "done", "cancelled"]
    assert [c["count"] for c in body["data"]] == [1, 1, 1, 1]
    assert body["data"][2]["issues"][0]["identifier"] == "ENG-3"
    assert client.get("/api/issues").json()["cached"] is True
    assert len(tracker.fetch_issues_calls) == 1


def test_lifespan_closes_tracker(test_settings, tracker):
    with TestClient(create_app(config=test_settings, tracker=tracker)):
        assert not tracker.closed
    assert tracker.closed


def test_missing_api_key_fails_startup():
    app = create_app(config=Settings(linear_api_key=None))
    with pytest.raises(ConfigurationError):
        with TestClient(app):
            pass


def test_add_comment_long_email_is_capped(client, tracker):
    email = "a" * 95 + "@example.com"
    response = client.post("/api/issues/1/comments", json={**VALID_COMMENT, "email": email})
    assert response.status_code == 200
    assert f"Email: {email[:100]}\n" in tracker.created[0][1]


def test_add_comment_coerces_non_string_fields(client, tracker):
    response = client.post("/api/issues/1/comments", json={"name": 123, "comment": 456, "honeypot": False})
    assert response.status_code == 200
    assert tracker.created[0][1] == "[Public Roadmap Comment]\nName: 123\n\n456"


def test_add_comment_non_string_email_is_400(client, tracker):
    response = client.post("/api/issues/1/comments", json={"name": "Ada", "comment": "Hi", "email": 42})
    assert response.status_code == 400
    assert response.json() == {"error": "Email address is not valid"}
    assert tracker.created == []


def test_malformed_issue_record_returns_json_500(client, tracker):
    tracker.issues = [{"id": "x", "title": "No identifier", "state": {"name": "Todo"}}]
    response = client.get("/api/issues")
    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Failed to fetch issues"
    assert "identifier" in body["message"]


def test_malformed_comment_record_returns_json_500(client, tracker):
    tracker.comments["1"] = [{"id": "c1", "body": None, "createdAt": "t"}]
    response = client.get("/api/issues/1/comments")
    assert response.status_code == 500
    assert response.json()["error"] == "Failed to fetch comments"


def test_lifespan_runs_and_stops_sweeps(test_settings, tracker):
    with TestClient(create_app(config=test_settings, tracker=tracker)) as test_client:
        service = test_client.app.state.roadmap_service
        cache, limiter = service.cache, service.rate_limiter
        assert cache.sweeping
        assert limiter.sweeping
    assert not cache.sweeping
    assert not limiter.sweeping
