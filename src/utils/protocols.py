"""
Shared Protocol definitions for type hints across the codebase.

These protocols describe the collaborators the router, page controllers and
dashboard talk to, so that concrete implementations (in-memory history,
snapshot renderer, JSON store) can be swapped or faked in tests.
"""

from typing import Any, Awaitable, Optional, Protocol, Union

from src.models.project import Project, ProjectStats, ProjectView
from src.models.routing import RouteMatch
from src.models.timeline import RoadmapEntry


class HistoryProtocol(Protocol):
    """
    Host navigation facility: a "current location" register plus a
    LIFO history the router does not introspect.
    """
    
    @property
    def current_path(self) -> str:
        """Path of the current history entry (including any base path)."""
        ...
    
    def push(self, path: str, state: Any = None) -> None:
        ...
    
    def replace(self, path: str, state: Any = None) -> None:
        ...
    
    def back(self) -> bool:
        """Move back one entry. Returns False if there is nothing to go back to."""
        ...
    
    def forward(self) -> bool:
        """Move forward one entry. Returns False if there is nothing ahead."""
        ...


class PageSurfaceProtocol(Protocol):
    """The parts of the page the router writes to directly."""
    
    def set_title(self, title: str) -> None:
        ...
    
    def show_error(self, message: str) -> None:
        ...


class RendererProtocol(PageSurfaceProtocol, Protocol):
    """Rendering collaborator used by page controllers and the dashboard."""
    
    def show_loading(self) -> None:
        ...
    
    def hide_loading(self) -> None:
        ...
    
    def render_dashboard(self, projects: list[ProjectView], stats: ProjectStats) -> None:
        ...
    
    def render_project(self, project: ProjectView, roadmap: list[RoadmapEntry]) -> None:
        ...
    
    def render_edit_form(self, project: ProjectView) -> None:
        ...
    
    def render_not_found(self, path: str) -> None:
        ...


class RouteHandlersProtocol(Protocol):
    """Handlers for the router's fixed route set."""
    
    def dashboard(self, match: RouteMatch) -> Union[Awaitable[None], None]:
        ...
    
    def project(self, match: RouteMatch) -> Union[Awaitable[None], None]:
        ...
    
    def project_edit(self, match: RouteMatch) -> Union[Awaitable[None], None]:
        ...
    
    def not_found(self, match: RouteMatch) -> Union[Awaitable[None], None]:
        ...


class ProjectStoreProtocol(Protocol):
    """Persistence collaborator as seen by the page controllers."""
    
    def subscribe(self, listener: Any) -> Any:
        """Register a data-change listener; returns an unsubscribe callable."""
        ...
    
    async def list_projects(self) -> list[Project]:
        ...
    
    async def get_project(self, project_id: str) -> Optional[Project]:
        ...
    
    async def get_project_by_slug(self, slug: str) -> Optional[Project]:
        ...
    
    async def get_project_stats(self) -> ProjectStats:
        ...
