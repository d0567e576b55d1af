"""
Tracker settings.

Loaded from ``config/tracker.yaml`` when present, then overridden by
environment variables (a ``.env`` file is read first).
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv


logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent
DEFAULT_CONFIG_PATH = PROJECT_ROOT / "config" / "tracker.yaml"


@dataclass
class TrackerSettings:
    """Runtime settings for the store, dashboard and router."""
    
    storage_path: Path = PROJECT_ROOT / "data" / "projects.json"
    refresh_interval_seconds: float = 30.0
    title_suffix: str = "Supplement Factory"
    base_path: str = ""
    log_level: str = "INFO"
    
    @classmethod
    def from_config(
        cls,
        config_path: Optional[Path] = None,
        use_env: bool = True,
    ) -> "TrackerSettings":
        """
        Load settings from a YAML file and the environment.
        
        Args:
            config_path: YAML file to read (defaults to config/tracker.yaml)
            use_env: Apply TRACKER_* / LOG_LEVEL environment overrides
        
        Returns:
            Settings with defaults for anything not configured
        """
        settings = cls()
        path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        
        try:
            with open(path) as f:
                config = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.debug(f"No tracker config at {path}, using defaults")
            config = {}
        
        storage = config.get("storage", {})
        dashboard = config.get("dashboard", {})
        router = config.get("router", {})
        
        if storage.get("path"):
            settings.storage_path = _resolve(storage["path"])
        if dashboard.get("refresh_interval_seconds") is not None:
            interval = _refresh_interval(dashboard["refresh_interval_seconds"], str(path))
            if interval is not None:
                settings.refresh_interval_seconds = interval
        if dashboard.get("title_suffix") is not None:
            settings.title_suffix = str(dashboard["title_suffix"])
        if router.get("base_path") is not None:
            settings.base_path = str(router["base_path"])
        if config.get("log_level"):
            settings.log_level = str(config["log_level"])
        
        if use_env:
            settings.apply_env()
        
        return settings
    
    def apply_env(self) -> None:
        """Override settings from environment variables."""
        load_dotenv()
        
        if os.getenv("TRACKER_STORAGE_PATH"):
            self.storage_path = _resolve(os.environ["TRACKER_STORAGE_PATH"])
        if os.getenv("TRACKER_REFRESH_INTERVAL"):
            interval = _refresh_interval(
                os.environ["TRACKER_REFRESH_INTERVAL"], "TRACKER_REFRESH_INTERVAL"
            )
            if interval is not None:
                self.refresh_interval_seconds = interval
        if os.getenv("TRACKER_TITLE_SUFFIX"):
            self.title_suffix = os.environ["TRACKER_TITLE_SUFFIX"]
        if os.getenv("TRACKER_BASE_PATH") is not None:
            self.base_path = os.environ["TRACKER_BASE_PATH"]
        if os.getenv("LOG_LEVEL"):
            self.log_level = os.environ["LOG_LEVEL"]


def _resolve(path: str) -> Path:
    """Relative paths are taken from the project root."""
    p = Path(path)
    return p if p.is_absolute() else PROJECT_ROOT / p


def _refresh_interval(value, source: str) -> Optional[float]:
    """Seconds between dashboard refreshes, or None (with a warning) if not a positive number."""
    try:
        interval = float(value)
    except (TypeError, ValueError):
        interval = None
    
    if interval is None or not 0 < interval < float("inf"):
        logger.warning(f"Ignoring invalid refresh interval from {source}: {value!r}")
        return None
    return interval
