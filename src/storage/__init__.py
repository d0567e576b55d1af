"""
Project storage - JSON-backed project records and validation.
"""

from src.storage.manager import ProjectStore
from src.storage.validation import validate_project

__all__ = ["ProjectStore", "validate_project"]
