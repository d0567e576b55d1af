"""
View models - projects combined with engine output for display.
"""

from src.models.project import Project, ProjectView
from src.timeline.engine import TimelineProgressEngine
from src.utils.slugs import project_color, project_initials


def build_project_view(project: Project, engine: TimelineProgressEngine) -> ProjectView:
    """Attach current stage, progress, elapsed days and display helpers."""
    result = engine.compute_for(project)
    
    return ProjectView(
        **project.model_dump(),
        current_stage=result.current_stage,
        progress=result.progress_percent,
        days_elapsed=result.days_elapsed,
        stage_dates=engine.format_stage_dates(project.start_date, result.current_stage),
        project_color=project_color(project.name),
        project_initials=project_initials(project.name),
    )
