"""Page controllers, view building and rendering for the tracker dashboards."""

from src.dashboard.pages import PageController
from src.dashboard.project_view import ProjectDashboard
from src.dashboard.refresh import PeriodicRefresher
from src.dashboard.snapshot import SnapshotRenderer
from src.dashboard.views import build_project_view

__all__ = [
    "PageController",
    "ProjectDashboard",
    "PeriodicRefresher",
    "SnapshotRenderer",
    "build_project_view",
]
