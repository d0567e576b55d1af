"""
Page controllers.

One handler per route. Each handler loads what its page needs from the
store, then checks that its dispatch is still the latest before rendering;
results of superseded navigations are dropped.
"""

import logging
from typing import Optional

from src.dashboard.project_view import ProjectDashboard
from src.dashboard.views import build_project_view
from src.models.project import Project
from src.models.routing import RouteMatch
from src.timeline.engine import TimelineProgressEngine
from src.utils.protocols import ProjectStoreProtocol, RendererProtocol


logger = logging.getLogger(__name__)

PROJECT_NOT_FOUND = "Project not found"


class PageController:
    """Route handlers for the dashboard, project and edit pages."""
    
    def __init__(
        self,
        store: ProjectStoreProtocol,
        renderer: RendererProtocol,
        dashboard: ProjectDashboard,
        engine: Optional[TimelineProgressEngine] = None,
    ):
        self.store = store
        self.renderer = renderer
        self._dashboard = dashboard
        self.engine = engine or dashboard.engine
    
    async def dashboard(self, match: RouteMatch) -> None:
        """Main dashboard: every project with its derived progress, plus stats."""
        self.project_dashboard.cleanup()
        self.renderer.show_loading()
        
        projects = await self.store.list_projects()
        stats = await self.store.get_project_stats()
        if not match.is_current():
            logger.debug(f"Dropping stale dashboard load for {match.path}")
            return
        
        views = [build_project_view(p, self.engine) for p in projects]
        self.renderer.render_dashboard(views, stats)
        self.renderer.hide_loading()
    
    async def project(self, match: RouteMatch) -> None:
        """Project dashboard for the slug in the path."""
        project = await self._load_by_slug(match)
        if project is None:
            return
        await self.project_dashboard.load_project(project)
    
    async def project_edit(self, match: RouteMatch) -> None:
        """Edit form for the slug in the path."""
        self.project_dashboard.cleanup()
        project = await self._load_by_slug(match)
        if project is None:
            return
        
        self.renderer.render_edit_form(build_project_view(project, self.engine))
        self.renderer.hide_loading()
    
    def not_found(self, match: RouteMatch) -> None:
        self.project_dashboard.cleanup()
        self.renderer.render_not_found(match.path)
    
    @property
    def project_dashboard(self) -> ProjectDashboard:
        return self._dashboard
    
    async def _load_by_slug(self, match: RouteMatch) -> Optional[Project]:
        slug = match.params.get("slug", "")
        self.renderer.show_loading()
        
        project = await self.store.get_project_by_slug(slug)
        if not match.is_current():
            logger.debug(f"Dropping stale project load for {slug}")
            return None
        
        if project is None:
            logger.warning(f"No project with slug '{slug}'")
            self.project_dashboard.cleanup()
            self.renderer.show_error(PROJECT_NOT_FOUND)
            return None
        
        return project
