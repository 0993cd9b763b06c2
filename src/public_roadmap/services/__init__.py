"""Service layer for business logic.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from public_roadmap.services import RoadmapService

    service = RoadmapService.create(tracker=LinearClient(api_key=settings.linear_api_key))
    issues, cached = await service.list_issues()
    ```
"""

from .roadmap_service import BoardColumn, RoadmapService, build_cache, build_rate_limiter
from .status_mapper import all_statuses, map_status, status_label

__all__ = [
    "BoardColumn",
    "RoadmapService",
    "build_cache",
    "build_rate_limiter",
    "all_statuses",
    "map_status",
    "status_label",
]
