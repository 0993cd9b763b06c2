import logging
from typing import Any

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from public_roadmap.config import Settings, settings
from public_roadmap.dto import (
    AddCommentRequest,
    AddCommentResponse,
    BoardResponse,
    CommentListResponse,
    IssueListResponse,
    StatusListResponse,
)
from public_roadmap.protocols import IssueTracker

from .dependencies import ClientIdDep, HandlerDep, lifespan

API_NAME = "Public Roadmap API"
API_VERSION = "0.1.0"
API_DESCRIPTION = "Public roadmap backed by Linear, with cached reads and rate-limited feedback"

router = APIRouter()


@router.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": API_NAME,
        "version": API_VERSION,
        "description": API_DESCRIPTION,
        "endpoints": {
            "issues": "/api/issues",
            "comments": "/api/issues/{id}/comments",
            "roadmap": "/api/roadmap",
            "statuses": "/api/statuses",
            "health": "/health",
            "docs": "/docs",
        },
    }


@router.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@router.get("/api/issues", response_model=IssueListResponse)
async def list_issues(handler: HandlerDep) -> IssueListResponse:
    """List roadmap issues with their public status."""
    return await handler.list_issues()


@router.get("/api/issues/{issue_id}/comments", response_model=CommentListResponse)
async def list_comments(issue_id: str, handler: HandlerDep) -> CommentListResponse:
    """List the comments on one issue."""
    return await handler.list_comments(issue_id)


@router.post("/api/issues/{issue_id}/comments", response_model=AddCommentResponse)
async def add_comment(
    issue_id: str,
    body: AddCommentRequest,
    handler: HandlerDep,
    client_id: ClientIdDep,
) -> AddCommentResponse:
    """Post a visitor comment to an issue."""
    return await handler.add_comment(issue_id, body, client_id)


@router.get("/api/statuses", response_model=StatusListResponse)
async def list_statuses(handler: HandlerDep) -> StatusListResponse:
    """List the public statuses in board column order."""
    return await handler.list_statuses()


@router.get("/api/roadmap", response_model=BoardResponse)
async def roadmap(handler: HandlerDep) -> BoardResponse:
    """Issues grouped into the four status columns."""
    return await handler.board()


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render a dict ``detail`` as the whole body; wrap anything else as ``error``."""
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


def create_app(
    config: Settings | None = None,
    tracker: IssueTracker | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Settings to use. If None, uses the global settings.
        tracker: Issue tracker to use instead of a LinearClient (tests).

    Returns:
        The configured FastAPI app
    """
    config = config or settings
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(
        title=API_NAME,
        description=API_DESCRIPTION,
        version=API_VERSION,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.tracker = tracker

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)  # type: ignore[arg-type]
    app.include_router(router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "public_roadmap.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
