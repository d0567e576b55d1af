"""Data models for the project timeline tracker."""

from src.models.enums import AutomationStatus, DataAction, ProjectStatus
from src.models.events import ChangeEvent, ChangeListener
from src.models.project import Project, ProjectStats, ProjectView
from src.models.routing import (
    DispatchToken,
    LinkClick,
    NavigationState,
    RouteDefinition,
    RouteMatch,
    RouterState,
)
from src.models.timeline import ProgressResult, RoadmapEntry, StageDefinition

__all__ = [
    "AutomationStatus",
    "DataAction",
    "ProjectStatus",
    "ChangeEvent",
    "ChangeListener",
    "Project",
    "ProjectStats",
    "ProjectView",
    "DispatchToken",
    "LinkClick",
    "NavigationState",
    "RouteDefinition",
    "RouteMatch",
    "RouterState",
    "ProgressResult",
    "RoadmapEntry",
    "StageDefinition",
]
