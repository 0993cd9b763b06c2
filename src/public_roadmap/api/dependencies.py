"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Clean separation, no global mutable state
"""

import logging
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from public_roadmap.config import Settings, settings
from public_roadmap.handlers import RoadmapHandler, client_identifier
from public_roadmap.protocols import IssueTracker
from public_roadmap.repositories import LinearClient
from public_roadmap.services import RoadmapService, build_cache, build_rate_limiter

logger = logging.getLogger(__name__)


def get_handler(request: Request) -> RoadmapHandler:
    """Dependency injection for RoadmapHandler from app.state.

    Args:
        request: FastAPI Request object

    Returns:
        The RoadmapHandler instance from app.state

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "roadmap_handler", None)
    if handler is None:
        raise RuntimeError("RoadmapHandler not initialized. Check lifespan setup.")
    return handler


def get_client_id(request: Request) -> str:
    """Dependency returning the rate limit key for the caller."""
    return client_identifier(request)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Tracker (data access) - LinearClient unless one was injected
    2. Service (business logic) - owns the cache and rate limiter
    3. Handler (HTTP endpoints)

    The cache and rate limiter sweeps start here and are stopped on
    shutdown, together with the tracker's HTTP client.

    Args:
        app: The FastAPI application instance

    Yields:
        None

    Raises:
        ConfigurationError: If no Linear API key is configured
    """
    config: Settings = getattr(app.state, "config", None) or settings
    tracker: IssueTracker | None = getattr(app.state, "tracker", None)
    if tracker is None:
        tracker = LinearClient(
            api_key=config.linear_api_key,
            api_url=config.linear_api_url,
            timeout=config.linear_timeout,
        )

    # CacheStore has no lifecycle methods, so the sweeps are owned here
    cache = build_cache(config)
    rate_limiter = build_rate_limiter(config)
    cache.start()
    rate_limiter.start()

    roadmap_service = RoadmapService.create(
        tracker=tracker,
        config=config,
        cache=cache,
        rate_limiter=rate_limiter,
    )

    app.state.roadmap_service = roadmap_service
    app.state.roadmap_handler = RoadmapHandler(roadmap_service=roadmap_service)

    logger.info("Roadmap service initialized")
    logger.info(
        "Issue cache TTL: %dms, comment cache TTL: %dms",
        config.cache_ttl_issues,
        config.cache_ttl_comments,
    )
    logger.info(
        "Rate limit: %d comments per %dms",
        config.rate_limit_max_comments,
        config.rate_limit_window_ms,
    )

    try:
        yield
    finally:
        await cache.stop()
        await rate_limiter.stop()
        await tracker.close()

        del app.state.roadmap_handler
        del app.state.roadmap_service
        logger.info("Roadmap service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[RoadmapHandler, Depends(get_handler)]
ClientIdDep = Annotated[str, Depends(get_client_id)]
