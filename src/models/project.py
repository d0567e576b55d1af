"""
Project data models.

``Project`` is the stored record. ``ProjectView`` adds the values the
timeline engine derives from it at read time; those are never persisted.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.models.enums import AutomationStatus, ProjectStatus


class Project(BaseModel):
    """A tracked project as held by the store."""
    
    model_config = ConfigDict(use_enum_values=True)
    
    id: str = Field(..., description="Opaque project id (proj_<ms>_<random>)")
    name: str = Field(..., description="Display name")
    slug: str = Field(..., description="URL-safe identifier, unique among projects")
    description: str = Field(default="")
    start_date: Optional[str] = Field(
        default=None,
        description="Timeline start as entered (ISO date or datetime)"
    )
    stage: int = Field(
        default=1,
        ge=1,
        le=10,
        description="Manually chosen stage, authoritative while automation is paused"
    )
    status: ProjectStatus = Field(default=ProjectStatus.IN_PROGRESS)
    automation_status: AutomationStatus = Field(default=AutomationStatus.RUNNING)
    delay_notes: str = Field(default="")
    created_at: str = Field(..., description="ISO 8601 creation time")
    updated_at: str = Field(..., description="ISO 8601 last update time")
    
    @property
    def is_paused(self) -> bool:
        return self.automation_status == AutomationStatus.PAUSED


class ProjectView(Project):
    """A project plus the engine-derived values shown on dashboards."""
    
    current_stage: int = Field(..., ge=1, le=10)
    progress: float = Field(..., ge=0.0, le=100.0)
    days_elapsed: int = Field(default=0, ge=0)
    stage_dates: str = Field(default="Not set", description="Dates of the current stage")
    project_color: str = Field(default="")
    project_initials: str = Field(default="")


class ActivityEntry(BaseModel):
    """Recent activity row on the main dashboard."""
    
    id: str
    name: str
    action: str = "updated"
    timestamp: str


class ProjectStats(BaseModel):
    """Aggregate counts for the main dashboard."""
    
    total: int = 0
    active: int = 0
    completed: int = 0
    delayed: int = 0
    on_hold: int = 0
    cancelled: int = 0
    average_progress: int = 0
    recent_activity: list[ActivityEntry] = Field(default_factory=list)


class StoreMetadata(BaseModel):
    """Bookkeeping saved alongside the project records."""
    
    version: str = "1.0.0"
    last_updated: str = ""
    total_projects: int = 0


class ExportBundle(BaseModel):
    """Full data export."""
    
    version: str = "1.0.0"
    export_date: str
    projects: list[dict[str, Any]] = Field(default_factory=list)
    metadata: StoreMetadata = Field(default_factory=StoreMetadata)
