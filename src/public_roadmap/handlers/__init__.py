"""Handler layer for HTTP endpoints.

Handlers depend on services (business logic), not directly on repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .roadmap_handler import RoadmapHandler, client_identifier

__all__ = [
    "RoadmapHandler",
    "client_identifier",
]
