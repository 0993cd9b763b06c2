"""Public Roadmap - a cached, read-mostly window onto Linear issues.

This package provides a layered architecture:

Layers:
    - protocols: Interface contracts (CacheStore, IssueTracker)
    - repositories: Data access (LinearClient, InMemoryTTLCache)
    - security: Honeypot, rate limiting, input validation
    - services: Business logic (RoadmapService, status mapping)
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

Usage:
    ```python
    from public_roadmap.repositories import LinearClient
    from public_roadmap.services import RoadmapService

    service = RoadmapService.create(tracker=LinearClient(api_key=settings.linear_api_key))
    ```

For HTTP API:
    ```python
    from public_roadmap.api.app import app
    ```
"""

from public_roadmap.config import Settings, get_settings, settings
from public_roadmap.entities import CommentEntity, IssueEntity, RateLimitResult
from public_roadmap.errors import (
    BotSubmissionError,
    CommentValidationError,
    ConfigurationError,
    IssueNotFoundError,
    RateLimitExceededError,
    RoadmapError,
    UpstreamError,
)
from public_roadmap.handlers import RoadmapHandler
from public_roadmap.protocols import CacheStore, IssueTracker
from public_roadmap.repositories import InMemoryTTLCache, LinearClient
from public_roadmap.security import FixedWindowRateLimiter
from public_roadmap.services import RoadmapService, map_status

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    "settings",
    # Protocols (interfaces)
    "CacheStore",
    "IssueTracker",
    # Services (business logic)
    "RoadmapService",
    "map_status",
    # Handlers (HTTP)
    "RoadmapHandler",
    # Repositories and stores
    "InMemoryTTLCache",
    "LinearClient",
    "FixedWindowRateLimiter",
    # Entities (domain models)
    "IssueEntity",
    "CommentEntity",
    "RateLimitResult",
    # Errors
    "RoadmapError",
    "ConfigurationError",
    "UpstreamError",
    "IssueNotFoundError",
    "CommentValidationError",
    "BotSubmissionError",
    "RateLimitExceededError",
]
