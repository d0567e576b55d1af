"""
Shared API dependencies.

One settings object, timeline engine and project store per process. Tests
replace them through ``app.dependency_overrides``.
"""

from typing import Optional

from src.storage.manager import ProjectStore
from src.timeline.engine import TimelineProgressEngine
from src.utils.config import TrackerSettings

_settings: Optional[TrackerSettings] = None
_engine: Optional[TimelineProgressEngine] = None
_store: Optional[ProjectStore] = None


def get_settings() -> TrackerSettings:
    global _settings
    if _settings is None:
        _settings = TrackerSettings.from_config()
    return _settings


def get_engine() -> TimelineProgressEngine:
    global _engine
    if _engine is None:
        _engine = TimelineProgressEngine()
    return _engine


def get_store() -> ProjectStore:
    global _store
    if _store is None:
        _store = ProjectStore(get_settings().storage_path, engine=get_engine())
    return _store


def reset_dependencies() -> None:
    """Drop the cached singletons (used on shutdown)."""
    global _settings, _engine, _store
    _settings = None
    _engine = None
    _store = None
