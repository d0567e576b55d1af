"""
Timeline data models.

Stage definitions are immutable; progress results are computed on demand
and never stored.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class StageDefinition:
    """
    One of the ten pipeline stages.
    
    Attributes:
        stage_number: Position in the pipeline (1-10)
        day_range: Consecutive timeline days (1-28) the stage occupies
        title: Display title
        description: What happens during the stage
    """
    stage_number: int
    day_range: tuple[int, ...]
    title: str = ""
    description: str = ""
    
    @property
    def first_day(self) -> int:
        return self.day_range[0]
    
    @property
    def last_day(self) -> int:
        return self.day_range[-1]
    
    @property
    def length(self) -> int:
        return self.last_day - self.first_day + 1
    
    def contains(self, day: int) -> bool:
        return self.first_day <= day <= self.last_day


@dataclass(frozen=True)
class ProgressResult:
    """
    Engine output for one project at one instant.
    
    Attributes:
        current_stage: Authoritative stage (1-10)
        progress_percent: Overall completion (0-100)
        days_elapsed: Whole days since the start date (0 if not started)
    """
    current_stage: int
    progress_percent: float
    days_elapsed: int = 0


class RoadmapEntry(BaseModel):
    """A single stage row in a project's roadmap."""
    
    stage_number: int = Field(..., ge=1, le=10)
    title: str
    description: str = ""
    first_date: Optional[date] = None
    last_date: Optional[date] = None
    dates_label: str = Field(default="Not set", description="Display string for the stage dates")
    completed: bool = False
    active: bool = False
    progress_percent: float = Field(default=0.0, ge=0.0, le=100.0)
