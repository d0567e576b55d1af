"""
Server-side navigation.

Runs the client router against an in-memory history positioned at the
requested path and returns what the page would show.
"""

import logging

from fastapi import APIRouter, Depends

from api.dependencies import get_engine, get_settings, get_store
from api.schemas.projects import NavigateRequest, NavigateResponse
from src.dashboard.pages import PageController
from src.dashboard.project_view import ProjectDashboard
from src.dashboard.snapshot import SnapshotRenderer
from src.routing.history import InMemoryHistory
from src.routing.router import Router
from src.storage.manager import ProjectStore
from src.timeline.engine import TimelineProgressEngine
from src.utils.config import TrackerSettings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/navigate", response_model=NavigateResponse)
async def navigate(
    request: NavigateRequest,
    settings: TrackerSettings = Depends(get_settings),
    store: ProjectStore = Depends(get_store),
    engine: TimelineProgressEngine = Depends(get_engine),
):
    """
    Render the page for a path.
    
    Unknown paths resolve to the 404 route, unknown project slugs to the
    "Project not found" error surface.
    """
    path = request.path if request.path.startswith("/") else f"/{request.path}"
    renderer = SnapshotRenderer()
    dashboard = ProjectDashboard(
        store,
        engine,
        renderer,
        refresh_interval=settings.refresh_interval_seconds,
        title_suffix=settings.title_suffix,
    )
    pages = PageController(store, renderer, dashboard, engine)
    client_router = Router(
        InMemoryHistory(settings.base_path.rstrip("/") + path),
        handlers=pages,
        surface=renderer,
        base_path=settings.base_path,
        title_suffix=settings.title_suffix,
    )
    
    try:
        match = await client_router.initialize()
    finally:
        dashboard.close()
    
    return NavigateResponse(
        route=match.route.name if match else None,
        params=dict(match.params) if match else {},
        path=client_router.current_path(),
        title=renderer.title,
        snapshot=renderer.snapshot(),
    )
