"""
Parsed program tree produced by the spreadsheet importer.

These models are transient: they exist only for the duration of one
import call, between the row scan and persistence. Exercise names are
free text here; identity resolution happens later against the
persisted exercise library.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


class WeekType(str, Enum):
    """
    Classification of a training week.

    - INTRO: lighter ramp-up week at the start of a block
    - NORMAL: regular training week
    - DELOAD: reduced-intensity recovery week
    """

    INTRO = "intro"
    NORMAL = "normal"
    DELOAD = "deload"


class ParsedExercisePrescription(BaseModel):
    """
    A prescribed exercise slot within a parsed workout.

    Examples:
        >>> ParsedExercisePrescription(
        ...     name="Bench Press",
        ...     warmup_sets=2,
        ...     working_sets=3,
        ...     rep_range_min=6,
        ...     rep_range_max=8,
        ...     rir=1,
        ...     substitutions=["DB Bench Press"],
        ... )
    """

    name: str = Field(..., min_length=1, description="Exercise name as written in the sheet")
    warmup_sets: int = Field(default=0, ge=0, le=5)
    working_sets: int = Field(default=2, ge=1, le=9)
    rep_range_min: int = Field(default=8, ge=1)
    rep_range_max: int = Field(default=12, ge=1)
    rir: Optional[int] = Field(default=None, ge=0, le=4, description="Reps in reserve")
    rest_seconds: int = Field(default=120, ge=0)
    notes: Optional[str] = None
    substitutions: List[str] = Field(default_factory=list, max_length=2)
    category: Optional[str] = Field(default=None, description="Inferred muscle group")

    @model_validator(mode="after")
    def validate_rep_range(self) -> "ParsedExercisePrescription":
        """Ensure the rep range is ordered."""
        if self.rep_range_min > self.rep_range_max:
            raise ValueError(
                f"rep_range_min ({self.rep_range_min}) cannot exceed "
                f"rep_range_max ({self.rep_range_max})"
            )
        return self


class ParsedWorkout(BaseModel):
    """A workout day within a parsed week, e.g. "Upper Body"."""

    name: str
    day_number: int = Field(..., ge=1, description="1-based position within the week")
    exercises: List[ParsedExercisePrescription] = Field(default_factory=list)


class ParsedWeek(BaseModel):
    """A week within a parsed block."""

    week_number: int = Field(..., ge=1)
    name: str
    week_type: WeekType = WeekType.NORMAL
    workouts: List[ParsedWorkout] = Field(default_factory=list)


class ParsedBlock(BaseModel):
    """A multi-week phase of the program."""

    block_number: int = Field(..., ge=1)
    name: str
    weeks: List[ParsedWeek] = Field(default_factory=list)


class ParsedProgram(BaseModel):
    """
    Root of the parsed program tree.

    Holds program-level metadata and the ordered list of blocks.
    """

    name: str
    frequency_per_week: int = Field(default=4, ge=1)
    source: str
    blocks: List[ParsedBlock] = Field(default_factory=list)

    @property
    def week_count(self) -> int:
        return sum(len(block.weeks) for block in self.blocks)

    @property
    def workout_count(self) -> int:
        return sum(len(week.workouts) for block in self.blocks for week in block.weeks)

    @property
    def exercise_count(self) -> int:
        return sum(
            len(workout.exercises)
            for block in self.blocks
            for week in block.weeks
            for workout in week.workouts
        )

    def iter_prescriptions(self):
        """Yield every prescription in parse order."""
        for block in self.blocks:
            for week in block.weeks:
                for workout in week.workouts:
                    yield from workout.exercises


class SkippedRow(BaseModel):
    """Diagnostic record for a row the importer did not turn into data."""

    row_index: int = Field(..., ge=0, description="0-based row index in the sheet")
    reason: str
    text: str = ""
