"""
Timeline Progress Engine - stage table and date-driven progress.
"""

from src.timeline.engine import TimelineProgressEngine
from src.timeline.stages import STAGE_TABLE, TIMELINE_DAYS, StageTable

__all__ = ["TimelineProgressEngine", "StageTable", "STAGE_TABLE", "TIMELINE_DAYS"]
