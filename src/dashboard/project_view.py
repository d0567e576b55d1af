"""
Single-project dashboard.

Shows one project with its roadmap, re-renders it when the store reports
an update to it, and refreshes it periodically while its automation is
running and the page is visible.
"""

import asyncio
import logging
from typing import Optional

from src.dashboard.refresh import PeriodicRefresher
from src.dashboard.views import build_project_view
from src.models.enums import AutomationStatus, DataAction
from src.models.events import ChangeEvent
from src.models.project import Project
from src.timeline.engine import TimelineProgressEngine
from src.utils.protocols import ProjectStoreProtocol, RendererProtocol


logger = logging.getLogger(__name__)


class ProjectDashboard:
    """Controller for the /projects/:slug page."""
    
    def __init__(
        self,
        store: ProjectStoreProtocol,
        engine: TimelineProgressEngine,
        renderer: RendererProtocol,
        refresh_interval: float = 30.0,
        title_suffix: str = "Supplement Factory",
    ):
        self.store = store
        self.engine = engine
        self.renderer = renderer
        self.title_suffix = title_suffix
        self.refresher = PeriodicRefresher(self.refresh_project, refresh_interval)
        self.visible = True
        
        self._current: Optional[Project] = None
        self._pending: set[asyncio.Task] = set()
        self._unsubscribe = store.subscribe(self.handle_data_change)
    
    @property
    def current_project(self) -> Optional[Project]:
        return self._current
    
    async def load_project(self, project: Project) -> None:
        """Render a project and arm the refresh timer if it is running."""
        self._current = project
        
        view = build_project_view(project, self.engine)
        self.renderer.set_title(f"{project.name} - {self.title_suffix}")
        self.renderer.render_project(view, self.engine.roadmap(project))
        self.renderer.hide_loading()
        
        self._setup_auto_refresh()
        logger.debug(f"Project loaded: {project.name}")
    
    async def refresh_project(self) -> None:
        """Re-read the current project from the store and re-render it."""
        if self._current is None:
            return
        
        try:
            updated = await self.store.get_project(self._current.id)
        except Exception:
            logger.exception(f"Error refreshing project {self._current.id}")
            return
        
        if updated is None:
            logger.info(f"Project {self._current.id} no longer exists, stopping refresh")
            self.refresher.stop()
            return
        
        await self.load_project(updated)
    
    def handle_data_change(self, event: ChangeEvent) -> None:
        """Store listener: reload when the displayed project is updated."""
        if event.action != DataAction.UPDATE.value or self._current is None:
            return
        
        changed_id = getattr(event.payload, "id", None)
        if changed_id != self._current.id:
            return
        
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, skipping refresh after update")
            return
        
        task = loop.create_task(self.refresh_project())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
    
    def set_visible(self, visible: bool) -> None:
        """Pause refreshing while hidden, resume when shown again."""
        self.visible = visible
        if visible:
            self._setup_auto_refresh()
        else:
            self.refresher.stop()
    
    def cleanup(self) -> None:
        """Stop refreshing and forget the current project."""
        self.refresher.stop()
        for task in list(self._pending):
            task.cancel()
        self._pending.clear()
        self._current = None
    
    def close(self) -> None:
        """cleanup() and stop listening to the store."""
        self.cleanup()
        self._unsubscribe()
    
    def _setup_auto_refresh(self) -> None:
        self.refresher.stop()
        if self._current is None or not self.visible:
            return
        if self._current.automation_status == AutomationStatus.RUNNING.value:
            self.refresher.start()
