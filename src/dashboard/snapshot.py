"""
Snapshot renderer.

Renders pages into plain dictionaries instead of a document. The API
returns these snapshots, and tests inspect them.
"""

from typing import Any, Optional

from src.models.project import ProjectStats, ProjectView
from src.models.timeline import RoadmapEntry


class SnapshotRenderer:
    """
    Keeps the most recently rendered surface.
    
    Attributes:
        title: Current page title
        surface: Name of the rendered surface ("dashboard", "project",
            "project-edit", "not-found", "error") or None before rendering
        data: Payload of the rendered surface
        error: Message shown on the error overlay, if any
        loading: Whether the loading overlay is visible
        history: Surface names in render order
    """
    
    def __init__(self):
        self.title: str = ""
        self.surface: Optional[str] = None
        self.data: dict[str, Any] = {}
        self.error: Optional[str] = None
        self.loading: bool = False
        self.history: list[str] = []
    
    def _render(self, surface: str, data: dict[str, Any]) -> None:
        self.surface = surface
        self.data = data
        self.error = None
        self.loading = False
        self.history.append(surface)
    
    def set_title(self, title: str) -> None:
        self.title = title
    
    def show_error(self, message: str) -> None:
        self.error = message
        self.loading = False
        self.history.append("error")
    
    def show_loading(self) -> None:
        self.loading = True
    
    def hide_loading(self) -> None:
        self.loading = False
    
    def render_dashboard(self, projects: list[ProjectView], stats: ProjectStats) -> None:
        self._render("dashboard", {
            "projects": [p.model_dump(mode="json") for p in projects],
            "stats": stats.model_dump(mode="json"),
        })
    
    def render_project(self, project: ProjectView, roadmap: list[RoadmapEntry]) -> None:
        self._render("project", {
            "project": project.model_dump(mode="json"),
            "roadmap": [entry.model_dump(mode="json") for entry in roadmap],
        })
    
    def render_edit_form(self, project: ProjectView) -> None:
        self._render("project-edit", {"project": project.model_dump(mode="json")})
    
    def render_not_found(self, path: str) -> None:
        self._render("not-found", {
            "path": path,
            "message": f'The page "{path}" could not be found.',
        })
    
    def snapshot(self) -> dict[str, Any]:
        """The current state as a JSON-ready dict."""
        return {
            "title": self.title,
            "surface": self.surface,
            "data": self.data,
            "error": self.error,
            "loading": self.loading,
        }
