"""
Project Timeline Tracker - Enumerations

Centralized enum definitions shared by the store, engine and API.
"""

from enum import Enum


class AutomationStatus(str, Enum):
    """Whether a project's stage advances with elapsed time."""

    RUNNING = "Running"  # Stage follows the 28-day timeline
    PAUSED = "Paused"  # Stage fixed at the manually chosen value


class ProjectStatus(str, Enum):
    """Business status of a project, independent of its stage."""

    IN_PROGRESS = "In Progress"
    DELAYED = "Delayed"
    ON_HOLD = "On Hold"
    CANCELLED = "Cancelled"
    COMPLETED = "Completed"


class DataAction(str, Enum):
    """Actions broadcast on the notification channel."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    IMPORT = "import"
    CLEAR = "clear"
    ROUTE_CHANGED = "route_changed"
