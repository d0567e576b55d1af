"""
Timeline Progress Engine.

Derives a project's current stage and overall progress from its start date,
automation status and manual stage. Pure and synchronous: nothing is cached,
every call reads the clock and the immutable stage table.

Policy:
- Running projects follow the stage table by elapsed days; past the last day
  they sit in the final stage.
- Paused projects keep their manually chosen stage.
- Progress is the larger of elapsed-time progress and the floor implied by
  the stage number, so a project never shows less than its stage suggests.
"""

import logging
from datetime import date, datetime, timezone
from typing import Callable, Optional

from src.models.enums import AutomationStatus
from src.models.timeline import ProgressResult, RoadmapEntry
from src.timeline.stages import STAGE_TABLE, StageTable
from src.utils.dates import (
    DateLike,
    add_days,
    days_between,
    format_date,
    parse_local_date,
)


logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TimelineProgressEngine:
    """
    Computes stage and progress for projects on the 28-day timeline.
    
    Safe to share between any number of readers.
    """
    
    def __init__(
        self,
        stage_table: Optional[StageTable] = None,
        clock: Optional[Clock] = None,
    ):
        """
        Initialize the engine.
        
        Args:
            stage_table: Stage definitions (defaults to the standard table)
            clock: Returns the current aware datetime (defaults to UTC now)
        """
        self.stage_table = stage_table or STAGE_TABLE
        self.clock = clock or utc_now
    
    def days_elapsed(self, start_date: DateLike) -> Optional[int]:
        """
        Whole days between the start date and now, rounded up.
        
        The difference is absolute, so a start date in the future also
        yields a positive count.
        
        Returns:
            Day count, or None when the start date is missing or unparseable
        """
        return days_between(start_date, self.clock())
    
    def compute_state(
        self,
        start_date: DateLike,
        automation_status: str = AutomationStatus.RUNNING,
        manual_stage: Optional[int] = None,
    ) -> ProgressResult:
        """
        Compute the authoritative stage and progress.
        
        Never raises on bad dates: a missing or malformed start date is
        reported as not started (stage 1, 0%).
        
        Args:
            start_date: Project start (ISO string, date or datetime)
            automation_status: "Running" or "Paused"
            manual_stage: Stage chosen by an operator, used while paused
        
        Returns:
            ProgressResult with current stage, progress and elapsed days
        """
        days = self.days_elapsed(start_date)
        if days is None:
            if start_date:
                logger.debug(f"Treating unparseable start date as not started: {start_date!r}")
            return ProgressResult(current_stage=1, progress_percent=0.0, days_elapsed=0)
        
        paused = _is_paused(automation_status)
        if paused:
            current_stage = self._clamp_stage(manual_stage or 1)
        else:
            current_stage = self._stage_for_day(days)
        
        # A running project that has not started yet shows no progress
        if not paused and days == 0:
            return ProgressResult(current_stage=current_stage, progress_percent=0.0, days_elapsed=0)
        
        total_days = self.stage_table.total_days
        timeline_progress = min(days / total_days * 100, 100.0)
        stage_progress = current_stage / self.stage_table.stage_count * 100
        
        return ProgressResult(
            current_stage=current_stage,
            progress_percent=float(max(timeline_progress, stage_progress)),
            days_elapsed=days,
        )
    
    def compute_for(self, project) -> ProgressResult:
        """compute_state() for a record with start_date, automation_status and stage."""
        return self.compute_state(
            project.start_date,
            project.automation_status,
            project.stage,
        )
    
    def _clamp_stage(self, stage: int) -> int:
        return min(max(int(stage), 1), self.stage_table.stage_count)
    
    def _stage_for_day(self, days: int) -> int:
        if days > self.stage_table.total_days:
            return self.stage_table.last_stage
        if days < 1:
            return 1
        return self.stage_table.stage_of(days).stage_number
    
    def stage_date_range(
        self,
        start_date: DateLike,
        stage: int,
    ) -> Optional[tuple[date, date]]:
        """
        Calendar dates a stage occupies for a given start date.
        
        Day 1 is the start date as written, in its own UTC offset.
        
        Raises:
            InvalidStageError: If the stage is outside the table
        
        Returns:
            (first_date, last_date), or None when the start date is missing
            or unparseable
        """
        definition = self.stage_table.get(stage)
        start_day = parse_local_date(start_date)
        if start_day is None:
            return None
        
        return (
            add_days(start_day, definition.first_day - 1),
            add_days(start_day, definition.last_day - 1),
        )
    
    def format_stage_dates(self, start_date: DateLike, stage: int) -> str:
        """Display string for a stage's dates, e.g. "Jan 13 - Jan 15"."""
        date_range = self.stage_date_range(start_date, stage)
        if date_range is None:
            return "Not set"
        
        first, last = date_range
        if first == last:
            return format_date(first, "relative")
        return f"{format_date(first, 'relative')} - {format_date(last, 'relative')}"
    
    def within_stage_progress(self, stage: int, project) -> float:
        """
        Progress through one stage of a project's roadmap.
        
        Stages before the current one are complete, stages after it have
        not started, and the current stage interpolates elapsed days across
        its day window.
        
        Args:
            stage: Stage number to report on
            project: Record with start_date, automation_status and stage
        
        Returns:
            Percentage in [0, 100]
        """
        definition = self.stage_table.get(stage)
        result = self.compute_for(project)
        
        if stage < result.current_stage:
            return 100.0
        if stage > result.current_stage:
            return 0.0
        
        days = result.days_elapsed
        if days < definition.first_day:
            return 0.0
        if days > definition.last_day:
            return 100.0
        
        days_into_stage = days - definition.first_day + 1
        return min(days_into_stage / definition.length * 100, 100.0)
    
    def roadmap(self, project) -> list[RoadmapEntry]:
        """One entry per stage, in order, for a project's roadmap view."""
        result = self.compute_for(project)
        entries = []
        
        for definition in self.stage_table:
            number = definition.stage_number
            date_range = self.stage_date_range(project.start_date, number)
            entries.append(RoadmapEntry(
                stage_number=number,
                title=definition.title,
                description=definition.description,
                first_date=date_range[0] if date_range else None,
                last_date=date_range[1] if date_range else None,
                dates_label=self.format_stage_dates(project.start_date, number),
                completed=number < result.current_stage,
                active=number == result.current_stage,
                progress_percent=self.within_stage_progress(number, project),
            ))
        
        return entries


def _is_paused(automation_status) -> bool:
    value = getattr(automation_status, "value", automation_status)
    return value == AutomationStatus.PAUSED.value
