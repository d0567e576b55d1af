"""API schema modules."""

from api.schemas.projects import (
    ImportRequest,
    ImportResponse,
    NavigateRequest,
    NavigateResponse,
    ProjectCreateRequest,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdateRequest,
    RoadmapResponse,
    StatsResponse,
)

__all__ = [
    "ImportRequest",
    "ImportResponse",
    "NavigateRequest",
    "NavigateResponse",
    "ProjectCreateRequest",
    "ProjectListResponse",
    "ProjectResponse",
    "ProjectUpdateRequest",
    "RoadmapResponse",
    "StatsResponse",
]
