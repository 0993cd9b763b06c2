"""Linear GraphQL client.

Implements the IssueTracker protocol on top of Linear's GraphQL endpoint.
Every request carries the API key in the Authorization header; a client
cannot be built without one.

Failures are not retried. Non-2xx responses, transport errors and GraphQL
``errors`` payloads all surface as UpstreamError with the upstream detail
attached.
"""

import logging
from typing import Any

import httpx

from public_roadmap.config import settings
from public_roadmap.entities import IssueFilters
from public_roadmap.errors import ConfigurationError, UpstreamError

from .queries import ADD_COMMENT_MUTATION, GET_ISSUE_COMMENTS_QUERY, build_issues_query

logger = logging.getLogger(__name__)


class LinearClient:
    """Linear implementation of the IssueTracker protocol.

    This class satisfies the IssueTracker protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        client = LinearClient(api_key=settings.linear_api_key)
        issues = await client.fetch_issues(IssueFilters(team_id="TEAM"))
        await client.close()
        ```
    """

    def __init__(
        self,
        api_key: str | None,
        api_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Linear client.

        Args:
            api_key: Linear API key (required).
            api_url: GraphQL endpoint. Defaults to settings.linear_api_url.
            timeout: Request timeout in seconds. Defaults to settings.linear_timeout.
            transport: Optional httpx transport (used by tests).

        Raises:
            ConfigurationError: If no API key is given
        """
        if not api_key:
            raise ConfigurationError("LINEAR_API_KEY environment variable is not set")

        self._api_key = api_key
        self._api_url = api_url or settings.linear_api_url
        self._timeout = timeout or settings.linear_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client.

        Returns:
            The httpx.AsyncClient instance
        """
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={
                    "Content-Type": "application/json",
                    "Authorization": self._api_key,
                },
                transport=self._transport,
            )
        return self._client

    async def execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Run a GraphQL document and return its ``data`` member.

        Args:
            query: GraphQL query or mutation text
            variables: GraphQL variables

        Returns:
            The response's ``data`` object

        Raises:
            UpstreamError: On transport failure, non-2xx status or GraphQL errors
        """
        payload = {"query": query, "variables": variables or {}}

        try:
            response = await self.client.post(self._api_url, json=payload)
        except httpx.HTTPError as e:
            raise UpstreamError(f"Linear API request failed: {e}") from e

        if response.is_error:
            raise UpstreamError(
                f"Linear API error: {response.status_code} {response.reason_phrase}",
                details={"status": response.status_code, "body": response.text},
            )

        try:
            body = response.json()
        except ValueError as e:
            raise UpstreamError(f"Linear API returned invalid JSON: {e}") from e

        if body.get("errors"):
            raise UpstreamError(
                f"Linear GraphQL error: {body['errors']}",
                details=body["errors"],
            )

        return body.get("data") or {}

    async def fetch_issues(self, filters: IssueFilters) -> list[dict[str, Any]]:
        variables = filters.to_variables()
        data = await self.execute(build_issues_query(variables), variables)
        try:
            return data["issues"]["nodes"]
        except (KeyError, TypeError) as e:
            raise UpstreamError(f"Unexpected issues response: {data}") from e

    async def fetch_issue_comments(self, issue_id: str) -> list[dict[str, Any]] | None:
        try:
            data = await self.execute(GET_ISSUE_COMMENTS_QUERY, {"issueId": issue_id})
        except UpstreamError as e:
            # Linear reports unknown ids as a GraphQL error rather than a null issue
            if _is_entity_not_found(e.details):
                return None
            raise
        issue = data.get("issue")
        if not issue:
            return None
        return issue["comments"]["nodes"]

    async def create_comment(self, issue_id: str, body: str) -> dict[str, Any]:
        data = await self.execute(ADD_COMMENT_MUTATION, {"issueId": issue_id, "body": body})
        result = data.get("commentCreate") or {}
        if not result.get("success"):
            raise UpstreamError("Failed to create comment", details=result)
        logger.info("Created comment on issue %s", issue_id)
        return result.get("comment") or {}

    async def close(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None


def _is_entity_not_found(details: Any) -> bool:
    if not isinstance(details, list):
        return False
    for error in details:
        if not isinstance(error, dict):
            continue
        extensions = error.get("extensions") or {}
        message = " ".join(
            str(text)
            for text in (error.get("message"), extensions.get("userPresentableMessage"))
            if text
        )
        if "not found" in message.lower():
            return True
    return False
