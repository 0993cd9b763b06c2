"""
Tests for the Linear GraphQL client, using httpx.MockTransport.
"""

import asyncio
import json

import httpx
import pytest

from public_roadmap.entities import IssueFilters
from public_roadmap.errors import ConfigurationError, UpstreamError
from public_roadmap.protocols import IssueTracker
from public_roadmap.repositories import LinearClient
from public_roadmap.repositories.queries import build_issues_query

API_URL = "https://linear.test/graphql"


def make_client(handler):
    return LinearClient(api_key="lin_api_secret", api_url=API_URL, transport=httpx.MockTransport(handler))


def run(client, coro_factory):
    async def go():
        try:
            return await coro_factory(client)
        finally:
            await client.close()

    return asyncio.run(go())


@pytest.mark.parametrize("api_key", [None, ""])
def test_missing_api_key_is_configuration_error(api_key):
    with pytest.raises(ConfigurationError):
        LinearClient(api_key=api_key)


def test_satisfies_protocol():
    assert isinstance(LinearClient(api_key="k"), IssueTracker)


def test_fetch_issues_sends_auth_and_omits_unset_filters():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["authorization"]
        seen["url"] = str(request.url)
        seen["payload"] = json.loads(request.content)
        return httpx.Response(200, json={"data": {"issues": {"nodes": [{"id": "1"}]}}})

    nodes = run(make_client(handler), lambda c: c.fetch_issues(IssueFilters(project_id="P1")))

    assert nodes == [{"id": "1"}]
    assert seen["auth"] == "lin_api_secret"
    assert seen["url"] == API_URL
    assert seen["payload"]["variables"] == {"projectId": "P1"}
    query = seen["payload"]["query"]
    assert "$projectId" in query
    assert "teamId" not in query
    assert "labelName" not in query


def test_fetch_issues_without_filters_has_no_filter_clause():
    query = build_issues_query({})
    assert "filter" not in query
    assert "$" not in query
    assert "first: 100" in query


def test_build_issues_query_all_filters_and_rejects_unknown():
    query = build_issues_query({"teamId": "T", "projectId": "P", "labelName": "L"})
    assert "query GetIssues($teamId: String, $projectId: String, $labelName: String)" in query
    assert "labels: { name: { eq: $labelName } }" in query
    with pytest.raises(ValueError):
        build_issues_query({"stateId": "x"})


def test_http_error_becomes_upstream_error():
    def handler(request):
        return httpx.Response(401, text="bad key")

    with pytest.raises(UpstreamError) as exc_info:
        run(make_client(handler), lambda c: c.fetch_issues(IssueFilters()))
    assert "401" in str(exc_info.value)
    assert exc_info.value.details["status"] == 401


def test_graphql_errors_become_upstream_error():
    errors = [{"message": "Argument Validation Error"}]

    def handler(request):
        return httpx.Response(200, json={"errors": errors, "data": None})

    with pytest.raises(UpstreamError) as exc_info:
        run(make_client(handler), lambda c: c.fetch_issues(IssueFilters()))
    assert exc_info.value.details == errors


def test_transport_error_becomes_upstream_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamError):
        run(make_client(handler), lambda c: c.fetch_issues(IssueFilters()))


def test_fetch_comments_returns_nodes():
    def handler(request):
        assert json.loads(request.content)["variables"] == {"issueId": "abc"}
        return httpx.Response(
            200,
            json={"data": {"issue": {"id": "abc", "comments": {"nodes": [{"id": "c1"}]}}}},
        )

    assert run(make_client(handler), lambda c: c.fetch_issue_comments("abc")) == [{"id": "c1"}]


def test_fetch_comments_null_issue_is_none():
    def handler(request):
        return httpx.Response(200, json={"data": {"issue": None}})

    assert run(make_client(handler), lambda c: c.fetch_issue_comments("abc")) is None


def test_fetch_comments_entity_not_found_error_is_none():
    def handler(request):
        return httpx.Response(
            200,
            json={
                "errors": [
                    {
                        "message": "Entity not found: Issue",
                        "extensions": {"userPresentableMessage": "Could not find referenced Issue."},
                    }
                ],
                "data": None,
            },
        )

    assert run(make_client(handler), lambda c: c.fetch_issue_comments("abc")) is None


def test_create_comment_success():
    def handler(request):
        payload = json.loads(request.content)
        assert payload["variables"] == {"issueId": "abc", "body": "hello"}
        assert "commentCreate" in payload["query"]
        return httpx.Response(
            200,
            json={"data": {"commentCreate": {"success": True, "comment": {"id": "c9", "createdAt": "t"}}}},
        )

    assert run(make_client(handler), lambda c: c.create_comment("abc", "hello")) == {"id": "c9", "createdAt": "t"}


def test_create_comment_unsuccessful():
    def handler(request):
        return httpx.Response(200, json={"data": {"commentCreate": {"success": False, "comment": None}}})

    with pytest.raises(UpstreamError):
        run(make_client(handler), lambda c: c.create_comment("abc", "hello"))
