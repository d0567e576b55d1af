"""Project tracker API schemas."""

from typing import Any, Optional
from pydantic import BaseModel, Field

from src.models.project import ActivityEntry


class ProjectCreateRequest(BaseModel):
    """Request to create a project. Field rules are checked by the store."""
    name: str = Field(default="", description="Display name, at least 2 characters")
    description: str = ""
    start_date: Optional[str] = Field(default=None, description="ISO date the timeline starts")
    stage: Optional[int] = Field(default=None, description="Manual stage (1-10)")
    status: Optional[str] = None
    automation_status: Optional[str] = None
    delay_notes: str = ""


class ProjectUpdateRequest(BaseModel):
    """Partial update; only fields that are set are applied."""
    name: Optional[str] = None
    description: Optional[str] = None
    start_date: Optional[str] = None
    stage: Optional[int] = None
    status: Optional[str] = None
    automation_status: Optional[str] = None
    delay_notes: Optional[str] = None


class ProjectResponse(BaseModel):
    """A project with its engine-computed timeline values."""
    id: str
    name: str
    slug: str
    description: str
    start_date: Optional[str]
    stage: int
    status: str
    automation_status: str
    delay_notes: str
    created_at: str
    updated_at: str
    current_stage: int
    progress: float
    days_elapsed: int
    stage_dates: str
    project_color: str
    project_initials: str


class ProjectListResponse(BaseModel):
    """Filtered project list."""
    projects: list[ProjectResponse]
    total: int


class RoadmapEntryResponse(BaseModel):
    """One stage of a project roadmap."""
    stage_number: int
    title: str
    description: str
    first_date: Optional[str]
    last_date: Optional[str]
    dates_label: str
    completed: bool
    active: bool
    progress_percent: float


class RoadmapResponse(BaseModel):
    """A project with its full stage roadmap."""
    project: ProjectResponse
    roadmap: list[RoadmapEntryResponse]


class StatsResponse(BaseModel):
    """Dashboard statistics."""
    total: int
    active: int
    completed: int
    delayed: int
    on_hold: int
    cancelled: int
    average_progress: int
    recent_activity: list[ActivityEntry]


class ImportRequest(BaseModel):
    """Previously exported data."""
    projects: Any = None
    version: Optional[str] = None
    export_date: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None


class ImportResponse(BaseModel):
    imported: int
    total: int


class NavigateRequest(BaseModel):
    """Request to render the page at a path."""
    path: str = Field(default="/", description="App-relative path, e.g. /projects/my-project")


class NavigateResponse(BaseModel):
    """Outcome of a server-side navigation."""
    route: Optional[str]
    params: dict[str, str]
    path: str
    title: str
    snapshot: dict[str, Any]
