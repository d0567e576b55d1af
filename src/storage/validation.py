"""
Project data validation.

Returns every problem found rather than stopping at the first, so forms and
imports can report them together.
"""

from typing import Any, Mapping

from src.models.enums import AutomationStatus, ProjectStatus
from src.utils.dates import parse_datetime


VALID_STATUSES = [s.value for s in ProjectStatus]
VALID_AUTOMATION = [a.value for a in AutomationStatus]


def _value(data: Mapping[str, Any], key: str) -> Any:
    value = data.get(key)
    return getattr(value, "value", value)


def validate_project(data: Mapping[str, Any]) -> list[str]:
    """
    Validate raw project data.
    
    Args:
        data: Project fields (name, start_date, stage, status, automation_status)
    
    Returns:
        List of error messages, empty when the data is valid
    """
    errors = []
    
    name = data.get("name")
    if not isinstance(name, str) or len(name.strip()) < 2:
        errors.append("Project name must be at least 2 characters long")
    
    start_date = data.get("start_date")
    if not start_date:
        errors.append("Start date is required")
    elif parse_datetime(start_date) is None:
        errors.append("Start date must be a valid date")
    
    stage = data.get("stage")
    if stage is not None:
        if isinstance(stage, bool) or not isinstance(stage, int) or not 1 <= stage <= 10:
            errors.append("Stage must be between 1 and 10")
    
    status = _value(data, "status")
    if status and status not in VALID_STATUSES:
        errors.append("Invalid project status")
    
    automation = _value(data, "automation_status")
    if automation and automation not in VALID_AUTOMATION:
        errors.append("Invalid automation status")
    
    return errors
