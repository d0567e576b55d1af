"""
Stage table for the 28-day, ten-stage pipeline.

The table is static and process-wide. It is validated when constructed: the
day ranges must be non-empty runs of consecutive days, in stage order, with
no gaps or overlaps, covering exactly days 1-28.
"""

from typing import Iterable, Iterator

from src.models.timeline import StageDefinition
from src.utils.errors import InvalidStageError


TIMELINE_DAYS = 28

# (stage, days, title, description)
DEFAULT_STAGES: list[tuple[int, tuple[int, ...], str, str]] = [
    (
        1, (1, 2, 3),
        "Molecular Composition Analysis",
        "Advanced analytical characterization using HPLC-MS/MS, NMR spectroscopy, "
        "and FTIR analysis to determine precise molecular structures and purity profiles.",
    ),
    (
        2, (4, 5, 6),
        "Thermodynamic Stability Assessment",
        "Comprehensive thermal analysis using DSC/TGA, accelerated stability testing, "
        "and dynamic vapor sorption (DVS) studies to evaluate formulation stability.",
    ),
    (
        3, (7, 8, 9),
        "Synergistic Interaction Modeling",
        "Computational molecular dynamics simulations and in-vitro interaction studies "
        "to optimize ingredient synergies and prevent antagonistic effects.",
    ),
    (
        4, (10, 11, 12),
        "Bioavailability Enhancement",
        "ADME profiling, dissolution optimization, and bioenhancement strategies using "
        "advanced delivery systems and absorption modulators.",
    ),
    (
        5, (13, 14, 15),
        "Regulatory Compliance Validation",
        "NOAEL calculations, safety margin assessments, and ICP-MS heavy metals analysis "
        "to ensure full regulatory compliance and safety standards.",
    ),
    (
        6, (16, 17, 18),
        "Microencapsulation Engineering",
        "Advanced particle engineering using spray-drying, fluid bed coating, and "
        "coacervation techniques with comprehensive particle size analysis.",
    ),
    (
        7, (19, 20, 21),
        "Analytical Method Development",
        "ICH Q2(R1) compliant method validation, HPLC method development, and "
        "stability-indicating assay protocols for quality control.",
    ),
    (
        8, (22, 23, 24),
        "Manufacturing Process Optimization",
        "Design of Experiments (DoE) approach with Process Analytical Technology (PAT) "
        "integration for scalable manufacturing protocols.",
    ),
    (
        9, (25, 26),
        "Quality Control Implementation",
        "Statistical process control implementation, critical quality attributes "
        "definition, and comprehensive testing protocol establishment.",
    ),
    (
        10, (27, 28),
        "Final Product Characterization",
        "Complete product profiling using Arrhenius kinetics modeling, shelf-life "
        "prediction, and final specification documentation.",
    ),
]


class StageTable:
    """
    Ordered, immutable mapping between stages and timeline days.
    
    Lookups are O(1): a day index is built once at construction.
    """
    
    def __init__(
        self,
        stages: Iterable[StageDefinition],
        total_days: int = TIMELINE_DAYS,
    ):
        self._stages: tuple[StageDefinition, ...] = tuple(stages)
        self.total_days = total_days
        self._by_day: dict[int, StageDefinition] = {}
        self._validate()
    
    @classmethod
    def default(cls) -> "StageTable":
        """The standard ten-stage, 28-day table."""
        return cls(
            StageDefinition(
                stage_number=number,
                day_range=days,
                title=title,
                description=description,
            )
            for number, days, title, description in DEFAULT_STAGES
        )
    
    def _validate(self) -> None:
        if not self._stages:
            raise InvalidStageError(None, "Stage table is empty")
        
        expected_day = 1
        for index, stage in enumerate(self._stages, start=1):
            if stage.stage_number != index:
                raise InvalidStageError(
                    stage.stage_number,
                    f"Stage {stage.stage_number} listed at position {index}",
                )
            if not stage.day_range:
                raise InvalidStageError(stage.stage_number, f"Stage {index} has no days")
            
            for day in stage.day_range:
                if day != expected_day:
                    raise InvalidStageError(
                        stage.stage_number,
                        f"Stage {index} covers day {day}, expected day {expected_day}",
                    )
                self._by_day[day] = stage
                expected_day += 1
        
        if expected_day - 1 != self.total_days:
            raise InvalidStageError(
                None,
                f"Stage table covers {expected_day - 1} days, expected {self.total_days}",
            )
    
    def __len__(self) -> int:
        return len(self._stages)
    
    def __iter__(self) -> Iterator[StageDefinition]:
        return iter(self._stages)
    
    @property
    def stage_count(self) -> int:
        return len(self._stages)
    
    @property
    def last_stage(self) -> int:
        return self._stages[-1].stage_number
    
    def get(self, stage: int) -> StageDefinition:
        """Definition for a stage number; raises InvalidStageError if out of range."""
        if isinstance(stage, bool) or not isinstance(stage, int):
            raise InvalidStageError(stage)
        if not 1 <= stage <= len(self._stages):
            raise InvalidStageError(stage, f"Invalid stage: {stage} (expected 1-{len(self._stages)})")
        return self._stages[stage - 1]
    
    def range_of(self, stage: int) -> tuple[int, ...]:
        """Timeline days occupied by a stage."""
        return self.get(stage).day_range
    
    def stage_of(self, day: int) -> StageDefinition:
        """
        Stage that contains a timeline day.
        
        Callers clamp first; days outside 1..total_days are rejected.
        """
        try:
            return self._by_day[day]
        except (KeyError, TypeError):
            raise InvalidStageError(
                day, f"Day {day!r} is outside the {self.total_days}-day timeline"
            ) from None


STAGE_TABLE = StageTable.default()
