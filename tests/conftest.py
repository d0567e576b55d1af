"""
Pytest configuration and shared fixtures for the test suite.
"""

import pytest
from datetime import datetime, timezone

from src.models.project import Project
from src.models.routing import RouteMatch
from src.storage.manager import ProjectStore
from src.timeline.engine import TimelineProgressEngine


# ============================================================================
# Clock & Engine
# ============================================================================

# Midday on day 13 of a project started 2024-01-01 (stage 5)
FIXED_NOW = datetime(2024, 1, 13, 12, 0, tzinfo=timezone.utc)


class FixedClock:
    """A settable clock for the timeline engine."""
    
    def __init__(self, now: datetime = FIXED_NOW):
        self.now = now
    
    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def engine(clock):
    """Engine whose "now" is FIXED_NOW unless the test moves the clock."""
    return TimelineProgressEngine(clock=clock)


# ============================================================================
# Project Fixtures
# ============================================================================

@pytest.fixture
def make_project():
    """Factory for Project records."""
    def _create(
        name: str = "Vitamin D3 Gummies",
        start_date: str = "2024-01-01",
        stage: int = 1,
        automation_status: str = "Running",
        status: str = "In Progress",
        project_id: str = "proj_1_test",
        slug: str = None,
    ) -> Project:
        return Project(
            id=project_id,
            name=name,
            slug=slug or name.lower().replace(" ", "-"),
            start_date=start_date,
            stage=stage,
            status=status,
            automation_status=automation_status,
            created_at="2024-01-01T00:00:00+00:00",
            updated_at="2024-01-01T00:00:00+00:00",
        )
    return _create


@pytest.fixture
def project_data():
    """Raw input for ProjectStore.create_project."""
    return {
        "name": "Omega 3 Softgels",
        "description": "Fish oil capsule reformulation",
        "start_date": "2024-01-01",
        "stage": 1,
        "status": "In Progress",
        "automation_status": "Running",
    }


@pytest.fixture
def store(engine):
    """In-memory project store."""
    return ProjectStore(engine=engine)


@pytest.fixture
def file_store(tmp_path, engine):
    """Project store persisted under tmp_path."""
    return ProjectStore(tmp_path / "projects.json", engine=engine)


# ============================================================================
# Router Collaborators
# ============================================================================

class RecordingSurface:
    """Page surface that records titles and error messages."""
    
    def __init__(self):
        self.titles: list[str] = []
        self.errors: list[str] = []
    
    def set_title(self, title: str) -> None:
        self.titles.append(title)
    
    def show_error(self, message: str) -> None:
        self.errors.append(message)


class FakeHandlers:
    """Route handlers that record every dispatched match."""
    
    def __init__(self):
        self.calls: list[tuple[str, RouteMatch]] = []
        self.fail_on: set[str] = set()
    
    def _record(self, name: str, match: RouteMatch) -> None:
        self.calls.append((name, match))
        if name in self.fail_on:
            raise RuntimeError(f"{name} handler failed")
    
    def dashboard(self, match: RouteMatch) -> None:
        self._record("dashboard", match)
    
    def project(self, match: RouteMatch) -> None:
        self._record("project", match)
    
    def project_edit(self, match: RouteMatch) -> None:
        self._record("project_edit", match)
    
    def not_found(self, match: RouteMatch) -> None:
        self._record("not_found", match)
    
    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def handlers():
    return FakeHandlers()
