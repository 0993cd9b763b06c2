"""Issue tracker protocol.

The service layer talks to the tracker only through this interface. The
production implementation is LinearClient; tests substitute a stub.

Implementations return raw tracker records (plain dicts); normalization
into entities happens in the service layer.
"""

from typing import Any, Protocol, runtime_checkable

from public_roadmap.entities import IssueFilters


@runtime_checkable
class IssueTracker(Protocol):
    """Protocol for the external issue tracker."""

    async def fetch_issues(self, filters: IssueFilters) -> list[dict[str, Any]]:
        """Fetch raw issue records.

        Args:
            filters: Optional scope; unset fields are not sent

        Returns:
            List of raw issue records

        Raises:
            UpstreamError: If the tracker call fails
        """
        ...

    async def fetch_issue_comments(self, issue_id: str) -> list[dict[str, Any]] | None:
        """Fetch raw comment records for one issue.

        Args:
            issue_id: The tracker's issue id

        Returns:
            List of raw comment records, or None if the issue does not exist

        Raises:
            UpstreamError: If the tracker call fails
        """
        ...

    async def create_comment(self, issue_id: str, body: str) -> dict[str, Any]:
        """Create a comment on an issue.

        Args:
            issue_id: The tracker's issue id
            body: Full markdown body

        Returns:
            The created comment's raw record (id, createdAt)

        Raises:
            UpstreamError: If the tracker call fails or reports no success
        """
        ...

    async def close(self) -> None:
        """Release network resources."""
        ...
