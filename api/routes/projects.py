"""Project CRUD, statistics and import/export routes."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_engine, get_store
from api.schemas.projects import (
    ImportRequest,
    ImportResponse,
    ProjectCreateRequest,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdateRequest,
    RoadmapEntryResponse,
    RoadmapResponse,
    StatsResponse,
)
from src.dashboard.views import build_project_view
from src.models.project import Project
from src.storage.manager import ProjectStore
from src.timeline.engine import TimelineProgressEngine
from src.utils.errors import ProjectNotFoundError, ProjectValidationError

logger = logging.getLogger(__name__)

router = APIRouter()


def to_response(project: Project, engine: TimelineProgressEngine) -> ProjectResponse:
    """Project plus engine-computed stage and progress."""
    return ProjectResponse(**build_project_view(project, engine).model_dump())


@router.get("/projects", response_model=ProjectListResponse)
async def list_projects(
    query: Optional[str] = None,
    status: Optional[str] = None,
    start_after: Optional[str] = None,
    start_before: Optional[str] = None,
    sort_by: Optional[str] = None,
    descending: bool = False,
    store: ProjectStore = Depends(get_store),
    engine: TimelineProgressEngine = Depends(get_engine),
):
    """
    List projects, optionally filtered and sorted.
    
    Args:
        query: Text matched against name, description and slug
        status: Exact project status
        start_after / start_before: Start date bounds
        sort_by: Field to sort by
        descending: Reverse the order
    """
    try:
        projects = await store.search_projects(
            query=query,
            status=status,
            start_after=start_after,
            start_before=start_before,
            sort_by=sort_by,
            descending=descending,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    
    return ProjectListResponse(
        projects=[to_response(p, engine) for p in projects],
        total=len(projects),
    )


@router.get("/projects/stats", response_model=StatsResponse)
async def project_stats(store: ProjectStore = Depends(get_store)):
    """Status counts, average progress and recent activity."""
    stats = await store.get_project_stats()
    return StatsResponse(**stats.model_dump())


@router.get("/projects/slug/{slug}", response_model=ProjectResponse)
async def get_project_by_slug(
    slug: str,
    store: ProjectStore = Depends(get_store),
    engine: TimelineProgressEngine = Depends(get_engine),
):
    project = await store.get_project_by_slug(slug)
    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return to_response(project, engine)


@router.get("/projects/slug/{slug}/roadmap", response_model=RoadmapResponse)
async def get_project_roadmap(
    slug: str,
    store: ProjectStore = Depends(get_store),
    engine: TimelineProgressEngine = Depends(get_engine),
):
    """Stage-by-stage roadmap with dates and per-stage progress."""
    project = await store.get_project_by_slug(slug)
    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    
    roadmap = [
        RoadmapEntryResponse(**entry.model_dump(mode="json"))
        for entry in engine.roadmap(project)
    ]
    return RoadmapResponse(project=to_response(project, engine), roadmap=roadmap)


@router.get("/projects/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: str,
    store: ProjectStore = Depends(get_store),
    engine: TimelineProgressEngine = Depends(get_engine),
):
    project = await store.get_project(project_id)
    if project is None:
        raise HTTPException(status_code=404, detail="Project not found")
    return to_response(project, engine)


@router.post("/projects", response_model=ProjectResponse, status_code=201)
async def create_project(
    request: ProjectCreateRequest,
    store: ProjectStore = Depends(get_store),
    engine: TimelineProgressEngine = Depends(get_engine),
):
    data = request.model_dump(exclude_none=True)
    try:
        project = await store.create_project(data)
    except ProjectValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)
    return to_response(project, engine)


@router.put("/projects/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: str,
    request: ProjectUpdateRequest,
    store: ProjectStore = Depends(get_store),
    engine: TimelineProgressEngine = Depends(get_engine),
):
    try:
        project = await store.update_project(project_id, request.model_dump(exclude_unset=True))
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    except ProjectValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)
    return to_response(project, engine)


@router.delete("/projects/{project_id}")
async def delete_project(project_id: str, store: ProjectStore = Depends(get_store)) -> dict:
    try:
        await store.delete_project(project_id)
    except ProjectNotFoundError:
        raise HTTPException(status_code=404, detail="Project not found")
    return {"deleted": project_id}


@router.get("/export")
async def export_data(store: ProjectStore = Depends(get_store)) -> dict:
    """Every project plus store metadata, ready for re-import."""
    bundle = await store.export_data()
    return bundle.model_dump(mode="json")


@router.post("/import", response_model=ImportResponse)
async def import_data(request: ImportRequest, store: ProjectStore = Depends(get_store)):
    try:
        result = await store.import_data(request.model_dump())
    except ProjectValidationError as e:
        raise HTTPException(status_code=422, detail=e.errors)
    return ImportResponse(**result)
