"""Tests for the snapshot renderer and view building."""

from src.dashboard.snapshot import SnapshotRenderer
from src.dashboard.views import build_project_view
from src.models.project import ProjectStats


class TestBuildProjectView:
    """Tests for build_project_view."""
    
    def test_derived_fields(self, engine, make_project):
        view = build_project_view(make_project(name="Vitamin D3 Gummies"), engine)
        
        assert view.current_stage == 5
        assert view.progress == 50.0
        assert view.days_elapsed == 13
        assert view.stage_dates == "Jan 13 - Jan 15"
        assert view.project_initials == "VD"
        assert view.project_color.startswith("#")
    
    def test_stored_stage_untouched(self, engine, make_project):
        """The manual stage is kept as stored; the derived stage is separate."""
        view = build_project_view(make_project(stage=2), engine)
        
        assert view.stage == 2
        assert view.current_stage == 5


class TestSnapshotRenderer:
    """Tests for SnapshotRenderer."""
    
    def test_initial_state(self):
        renderer = SnapshotRenderer()
        
        assert renderer.snapshot() == {
            "title": "",
            "surface": None,
            "data": {},
            "error": None,
            "loading": False,
        }
    
    def test_loading_and_error(self):
        renderer = SnapshotRenderer()
        renderer.show_loading()
        assert renderer.loading
        
        renderer.show_error("Project not found")
        
        assert renderer.error == "Project not found"
        assert not renderer.loading
        assert renderer.history == ["error"]
    
    def test_render_clears_error(self, engine, make_project):
        renderer = SnapshotRenderer()
        renderer.show_error("Earlier failure")
        
        renderer.render_dashboard([build_project_view(make_project(), engine)], ProjectStats(total=1))
        
        assert renderer.error is None
        assert renderer.surface == "dashboard"
        assert renderer.data["stats"]["total"] == 1
        assert renderer.history == ["error", "dashboard"]
    
    def test_roadmap_dates_are_json_ready(self, engine, make_project):
        project = make_project()
        renderer = SnapshotRenderer()
        
        renderer.render_project(build_project_view(project, engine), engine.roadmap(project))
        
        assert renderer.data["roadmap"][0]["first_date"] == "2024-01-01"
