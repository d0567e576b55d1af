"""
Project Store - persistence collaborator for the tracker.

In-memory project records with JSON file persistence. Every write is saved
immediately and broadcast on the ``data_changed`` channel so open views can
refresh. Stage and progress are never stored; they are recomputed by the
timeline engine whenever they are needed.
"""

import json
import logging
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Callable, Mapping, Optional, Union

from pydantic import ValidationError

from src.models.enums import AutomationStatus, DataAction, ProjectStatus
from src.models.events import ChangeListener
from src.models.project import (
    ActivityEntry,
    ExportBundle,
    Project,
    ProjectStats,
    StoreMetadata,
)
from src.storage.validation import validate_project
from src.timeline.engine import TimelineProgressEngine
from src.utils.dates import parse_datetime
from src.utils.errors import ProjectNotFoundError, ProjectValidationError
from src.utils.events import EventChannel
from src.utils.slugs import generate_project_id, generate_unique_slug, is_slug_unique


logger = logging.getLogger(__name__)

STORE_VERSION = "1.0.0"

# Fields a caller may set; id, slug and timestamps are managed by the store
EDITABLE_FIELDS = (
    "name",
    "description",
    "start_date",
    "stage",
    "status",
    "automation_status",
    "delay_notes",
)

SORTABLE_FIELDS = (
    "name",
    "slug",
    "start_date",
    "stage",
    "status",
    "created_at",
    "updated_at",
)


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _normalize(data: Mapping[str, Any]) -> dict[str, Any]:
    """Plain values only: enums to their values, dates to ISO strings."""
    normalized = {}
    for key, value in data.items():
        value = getattr(value, "value", value)
        if isinstance(value, (date, datetime)):
            value = value.isoformat()
        normalized[key] = value
    return normalized


class ProjectStore:
    """
    Project records with JSON file persistence.
    
    The file holds ``{"meta": {...}, "projects": [...]}``. Without a storage
    path the store is purely in-memory.
    """
    
    def __init__(
        self,
        storage_path: Optional[Union[str, Path]] = None,
        engine: Optional[TimelineProgressEngine] = None,
        channel: Optional[EventChannel] = None,
    ):
        """
        Initialize the store.
        
        Args:
            storage_path: JSON file for persistence (optional)
            engine: Timeline engine used for progress statistics
            channel: Channel for data_changed notifications
        """
        self.storage_path = Path(storage_path) if storage_path else None
        self.engine = engine or TimelineProgressEngine()
        self.channel = channel or EventChannel("data_changed")
        self.projects: dict[str, Project] = {}
        self.metadata = StoreMetadata(version=STORE_VERSION, last_updated=_now_iso())
        
        if self.storage_path and self.storage_path.exists():
            self._load_from_storage()
    
    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Listen for data_changed notifications."""
        return self.channel.subscribe(listener)
    
    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------
    
    async def list_projects(self) -> list[Project]:
        """All projects in insertion order."""
        return [p.model_copy() for p in self.projects.values()]
    
    async def get_project(self, project_id: str) -> Optional[Project]:
        project = self.projects.get(project_id)
        return project.model_copy() if project else None
    
    async def get_project_by_slug(self, slug: str) -> Optional[Project]:
        for project in self.projects.values():
            if project.slug == slug:
                return project.model_copy()
        return None
    
    async def search_projects(
        self,
        query: Optional[str] = None,
        status: Optional[str] = None,
        start_after: Optional[str] = None,
        start_before: Optional[str] = None,
        sort_by: Optional[str] = None,
        descending: bool = False,
    ) -> list[Project]:
        """
        Filter and sort projects.
        
        Args:
            query: Case-insensitive text matched against name, description and slug
            status: Exact project status
            start_after: Keep projects starting on or after this date
            start_before: Keep projects starting on or before this date
            sort_by: One of SORTABLE_FIELDS
            descending: Reverse the sort order
        
        Returns:
            Matching projects
        """
        results = await self.list_projects()
        
        if query and query.strip():
            term = query.strip().lower()
            results = [
                p for p in results
                if term in p.name.lower()
                or term in p.description.lower()
                or term in p.slug.lower()
            ]
        
        if status:
            status = getattr(status, "value", status)
            results = [p for p in results if p.status == status]
        
        lower = parse_datetime(start_after) if start_after else None
        upper = parse_datetime(start_before) if start_before else None
        if lower or upper:
            def in_range(project: Project) -> bool:
                started = parse_datetime(project.start_date)
                if started is None:
                    return False
                if lower and started < lower:
                    return False
                if upper and started > upper:
                    return False
                return True
            
            results = [p for p in results if in_range(p)]
        
        if sort_by:
            if sort_by not in SORTABLE_FIELDS:
                raise ValueError(f"Cannot sort by '{sort_by}'")
            results.sort(
                key=lambda p: (getattr(p, sort_by) is None, getattr(p, sort_by) or ""),
                reverse=descending,
            )
        
        return results
    
    async def get_project_stats(self) -> ProjectStats:
        """Status counts, average engine-computed progress and recent activity."""
        projects = list(self.projects.values())
        stats = ProjectStats(total=len(projects))
        
        status_fields = {
            ProjectStatus.IN_PROGRESS.value: "active",
            ProjectStatus.COMPLETED.value: "completed",
            ProjectStatus.DELAYED.value: "delayed",
            ProjectStatus.ON_HOLD.value: "on_hold",
            ProjectStatus.CANCELLED.value: "cancelled",
        }
        
        total_progress = 0.0
        for project in projects:
            field_name = status_fields.get(project.status)
            if field_name:
                setattr(stats, field_name, getattr(stats, field_name) + 1)
            total_progress += self.engine.compute_for(project).progress_percent
        
        if projects:
            stats.average_progress = round(total_progress / len(projects))
        
        recent = sorted(projects, key=lambda p: p.updated_at, reverse=True)[:5]
        stats.recent_activity = [
            ActivityEntry(id=p.id, name=p.name, action="updated", timestamp=p.updated_at)
            for p in recent
        ]
        return stats
    
    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------
    
    async def create_project(self, data: Mapping[str, Any]) -> Project:
        """
        Validate and add a new project.
        
        Raises:
            ProjectValidationError: If the data is invalid
        """
        data = _normalize(data)
        errors = validate_project(data)
        if errors:
            raise ProjectValidationError(errors)
        
        project = self._prepare_project(data, self.projects.values())
        
        self.projects[project.id] = project
        self._save_to_storage()
        
        logger.info(f"Created project {project.id} ({project.slug})")
        self.channel.emit(DataAction.CREATE, project.model_copy())
        return project.model_copy()
    
    async def update_project(self, project_id: str, changes: Mapping[str, Any]) -> Project:
        """
        Apply changes to an existing project.
        
        A new name produces a new unique slug.
        
        Raises:
            ProjectNotFoundError: If no project has this id
            ProjectValidationError: If the merged data is invalid
        """
        current = self.projects.get(project_id)
        if current is None:
            raise ProjectNotFoundError(project_id)
        
        changes = {
            k: v for k, v in _normalize(changes).items()
            if k in EDITABLE_FIELDS
        }
        merged = {**current.model_dump(), **changes}
        errors = validate_project(merged)
        if errors:
            raise ProjectValidationError(errors)
        
        merged["name"] = merged["name"].strip()
        merged["updated_at"] = _now_iso()
        if merged["name"] != current.name:
            others = [p for p in self.projects.values() if p.id != project_id]
            merged["slug"] = generate_unique_slug(merged["name"], others)
        
        updated = Project.model_validate(merged)
        self.projects[project_id] = updated
        self._save_to_storage()
        
        logger.info(f"Updated project {project_id}")
        self.channel.emit(DataAction.UPDATE, updated.model_copy())
        return updated.model_copy()
    
    async def delete_project(self, project_id: str) -> bool:
        """
        Remove a project.
        
        Raises:
            ProjectNotFoundError: If no project has this id
        """
        deleted = self.projects.pop(project_id, None)
        if deleted is None:
            raise ProjectNotFoundError(project_id)
        
        self._save_to_storage()
        
        logger.info(f"Deleted project {project_id}")
        self.channel.emit(DataAction.DELETE, deleted)
        return True
    
    async def export_data(self) -> ExportBundle:
        """Snapshot of every project plus store metadata."""
        return ExportBundle(
            version=STORE_VERSION,
            export_date=_now_iso(),
            projects=[p.model_dump(mode="json") for p in self.projects.values()],
            metadata=self.metadata.model_copy(),
        )
    
    async def import_data(self, payload: Mapping[str, Any]) -> dict[str, int]:
        """
        Merge exported projects into the store.
        
        Projects whose id already exists are updated in place and keep their
        slug unless renamed; others are added with a unique slug. Slugs in the
        payload are never trusted. Nothing is written unless every project
        validates.
        
        Raises:
            ProjectValidationError: If the payload or any project is invalid
        
        Returns:
            {"imported": <projects in payload>, "total": <projects after merge>}
        """
        incoming = payload.get("projects") if isinstance(payload, Mapping) else None
        if not isinstance(incoming, list):
            raise ProjectValidationError(["Invalid import data format"])
        
        normalized = []
        for raw in incoming:
            if not isinstance(raw, Mapping):
                raise ProjectValidationError(["Invalid import data format"])
            record = _normalize(raw)
            errors = validate_project(record)
            if errors:
                raise ProjectValidationError(
                    [f"Invalid project \"{record.get('name')}\": {', '.join(errors)}"]
                )
            normalized.append(record)
        
        merged = dict(self.projects)
        for record in normalized:
            existing = merged.get(record.get("id"))
            if existing is not None:
                merged[existing.id] = self._merge_imported(existing, record, merged.values())
            else:
                project = self._prepare_project(record, merged.values())
                merged[project.id] = project
        
        self.projects = merged
        self._save_to_storage()
        
        logger.info(f"Imported {len(normalized)} projects ({len(self.projects)} total)")
        self.channel.emit(DataAction.IMPORT, {"imported": len(normalized)})
        return {"imported": len(normalized), "total": len(self.projects)}
    
    async def clear_all_data(self) -> bool:
        """Remove every project and reset metadata."""
        self.projects = {}
        self.metadata = StoreMetadata(version=STORE_VERSION, last_updated=_now_iso())
        self._save_to_storage()
        
        logger.info("Cleared all project data")
        self.channel.emit(DataAction.CLEAR, None)
        return True
    
    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    
    def _prepare_project(self, data: Mapping[str, Any], existing_projects) -> Project:
        """
        Fill defaults and bookkeeping fields for a new record.
        
        The slug is derived from the name and unique among ``existing_projects``.
        """
        now = _now_iso()
        name = data["name"].strip()
        
        return Project(
            id=data.get("id") or generate_project_id(),
            name=name,
            slug=generate_unique_slug(name, existing_projects),
            description=data.get("description") or "",
            start_date=data["start_date"],
            stage=data.get("stage") or 1,
            status=data.get("status") or ProjectStatus.IN_PROGRESS,
            automation_status=data.get("automation_status") or AutomationStatus.RUNNING,
            delay_notes=data.get("delay_notes") or "",
            created_at=data.get("created_at") or now,
            updated_at=now,
        )
    
    def _merge_imported(
        self,
        existing: Project,
        record: Mapping[str, Any],
        projects,
    ) -> Project:
        """
        Overlay an imported record on the project with the same id.
        
        The incoming slug is ignored. The project keeps its own slug unless it
        was renamed or another project now holds that slug.
        """
        values = {**existing.model_dump(), **record, "updated_at": _now_iso()}
        values["name"] = values["name"].strip()
        values["slug"] = existing.slug
        
        others = [p for p in projects if p.id != existing.id]
        if values["name"] != existing.name or not is_slug_unique(existing.slug, others):
            values["slug"] = generate_unique_slug(values["name"], others)
        
        return Project.model_validate(values)
    
    def _update_metadata(self) -> None:
        self.metadata = StoreMetadata(
            version=STORE_VERSION,
            last_updated=_now_iso(),
            total_projects=len(self.projects),
        )
    
    def _save_to_storage(self) -> None:
        """Save projects and metadata to the JSON file."""
        self._update_metadata()
        if not self.storage_path:
            return
        
        try:
            data = {
                "meta": self.metadata.model_dump(mode="json"),
                "projects": [p.model_dump(mode="json") for p in self.projects.values()],
            }
            
            self.storage_path.parent.mkdir(parents=True, exist_ok=True)
            self.storage_path.write_text(json.dumps(data, indent=2))
            
        except OSError as e:
            logger.error(f"Failed to save projects: {e}")
    
    def _load_from_storage(self) -> None:
        """Load projects from the JSON file, skipping unreadable records."""
        try:
            data = json.loads(self.storage_path.read_text())
        except (OSError, json.JSONDecodeError) as e:
            logger.error(f"Failed to load projects: {e}")
            return
        
        if not isinstance(data, dict):
            logger.error(f"Unexpected project file layout in {self.storage_path}")
            return
        
        if isinstance(data.get("meta"), dict):
            try:
                self.metadata = StoreMetadata.model_validate(data["meta"])
            except ValidationError as e:
                logger.warning(f"Ignoring invalid store metadata: {e}")
        
        for record in data.get("projects", []):
            try:
                project = Project.model_validate(record)
            except ValidationError as e:
                logger.warning(f"Skipping invalid project record: {e}")
                continue
            self.projects[project.id] = project
        
        logger.info(f"Loaded {len(self.projects)} projects from storage")
