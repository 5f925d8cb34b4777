"""
Program builder: folds classified rows into a ParsedProgram tree.

The builder scans the sheet once, top to bottom. Its only state is a
ParseState record holding the program being built and the open
block/week/workout cursors; each row produces the next state. The one
look-behind is the previous row's label, used to infer intro/deload
week types.

Unrecognized rows never stop the scan. They are recorded as SkippedRow
diagnostics and the import carries on.
"""

import logging
from dataclasses import dataclass, field, replace
from typing import List, Optional

from domain.importer.categorizer import categorize_exercise
from domain.importer.field_extractors import (
    DEFAULT_FREQUENCY,
    first_integer,
    parse_frequency,
    parse_notes,
    parse_rep_range,
    parse_rest_seconds,
    parse_rir,
    parse_substitutions,
    parse_warmup_sets,
    parse_working_sets,
)
from domain.importer.layout import Grid, Row, SheetLayout, cell_at, is_blank
from domain.importer.row_classifier import RowClassification, RowKind, classify_row, find_label
from domain.models import (
    ParsedBlock,
    ParsedExercisePrescription,
    ParsedProgram,
    ParsedWeek,
    ParsedWorkout,
    SkippedRow,
    WeekType,
)

logger = logging.getLogger(__name__)

SKIP_REASONS = {
    RowKind.NOISE: "noise banner",
    RowKind.COLUMN_HEADER: "column header row",
    RowKind.WEEK_LABEL: "week-type label",
    RowKind.REST_DAY: "rest day",
    RowKind.UNRECOGNIZED: "unrecognized row",
}


@dataclass
class ParseState:
    """Accumulator threaded through the row scan."""

    program: ParsedProgram
    block: Optional[ParsedBlock] = None
    week: Optional[ParsedWeek] = None
    workout: Optional[ParsedWorkout] = None
    skipped: List[SkippedRow] = field(default_factory=list)


@dataclass
class ParseResult:
    """Outcome of scanning one sheet."""

    program: ParsedProgram
    layout: SheetLayout
    rows_scanned: int = 0
    skipped_rows: List[SkippedRow] = field(default_factory=list)


def infer_week_type(label: str, previous_label: str = "") -> WeekType:
    """
    Infer the week type from the week's own label or the label above it.

    Args:
        label: The week header text, e.g. "Week 1"
        previous_label: Structural label of the preceding row, e.g. "Intro Week"

    Returns:
        WeekType.DELOAD, WeekType.INTRO, or WeekType.NORMAL
    """
    for text in (label, previous_label):
        lowered = text.lower()
        if "deload" in lowered:
            return WeekType.DELOAD
        if "intro" in lowered:
            return WeekType.INTRO
    return WeekType.NORMAL


def week_display_name(label: str, week_type: WeekType) -> str:
    """Suffix the week type onto the label when the label does not say it."""
    if week_type is WeekType.NORMAL or week_type.value in label.lower():
        return label
    return f"{label} ({week_type.value.title()})"


def build_prescription(row: Row, name: str, layout: SheetLayout) -> ParsedExercisePrescription:
    """Run the field extractors over an exercise row."""
    name = " ".join(name.split())
    warmup_cell = next(
        (cell_at(row, column) for column in layout.warmup_columns if not is_blank(cell_at(row, column))),
        None,
    )
    rep_min, rep_max = parse_rep_range(cell_at(row, layout.rep_range_column))
    substitutions = parse_substitutions(
        *(cell_at(row, column) for column in layout.substitution_columns)
    )
    return ParsedExercisePrescription(
        name=name,
        warmup_sets=parse_warmup_sets(warmup_cell),
        working_sets=parse_working_sets(cell_at(row, layout.working_sets_column)),
        rep_range_min=rep_min,
        rep_range_max=rep_max,
        rir=parse_rir(*(cell_at(row, column) for column in layout.rir_columns)),
        rest_seconds=parse_rest_seconds(cell_at(row, layout.rest_column)),
        notes=parse_notes(cell_at(row, layout.notes_column)),
        substitutions=[" ".join(sub.split()) for sub in substitutions[:2]],
        category=categorize_exercise(name),
    )


class ProgramBuilder:
    """
    Builds a ParsedProgram from a sheet grid.

    Usage:
        >>> builder = ProgramBuilder()
        >>> result = builder.build(grid, name="Min-Max", source="Excel Import", sheet_name="4x Week")
        >>> result.program.blocks[0].weeks[0].workouts[0].name
        'Upper Body'
    """

    def __init__(self, layout: Optional[SheetLayout] = None) -> None:
        """
        Args:
            layout: Fixed column layout. When omitted the layout is
                detected from each grid.
        """
        self._layout = layout

    def build(
        self,
        grid: Grid,
        *,
        name: str,
        source: str,
        sheet_name: Optional[str] = None,
        default_frequency: int = DEFAULT_FREQUENCY,
    ) -> ParseResult:
        """
        Scan ``grid`` and return the parsed program tree.

        Args:
            grid: Rows of cell values (str, number, date, or None)
            name: Program name
            source: Source label stored on the program
            sheet_name: Sheet name, inspected for an "<n>x" weekly frequency
            default_frequency: Frequency used when the sheet name has none

        Returns:
            ParseResult with the program, the layout used, and skipped rows
        """
        layout = self._layout or SheetLayout.detect(grid)
        program = ParsedProgram(
            name=name,
            frequency_per_week=parse_frequency(sheet_name, default_frequency),
            source=source,
        )

        state = ParseState(program=program)
        for index in range(len(grid)):
            classification = classify_row(grid, index, layout)
            state = self.step(state, classification, grid, index, layout)

        for skipped in state.skipped:
            logger.debug(f"Skipped row {skipped.row_index} ({skipped.reason}): {skipped.text!r}")
        logger.info(
            f"Parsed '{program.name}': {len(program.blocks)} blocks, "
            f"{program.week_count} weeks, {program.workout_count} workouts, "
            f"{program.exercise_count} exercises, {len(state.skipped)} rows skipped"
        )

        return ParseResult(
            program=state.program,
            layout=layout,
            rows_scanned=len(grid),
            skipped_rows=state.skipped,
        )

    def step(
        self,
        state: ParseState,
        classification: RowClassification,
        grid: Grid,
        index: int,
        layout: SheetLayout,
    ) -> ParseState:
        """Apply one classified row to ``state`` and return the next state."""
        kind = classification.kind

        if kind is RowKind.EMPTY:
            return state

        if kind is RowKind.BLOCK_HEADER:
            return self._open_block(state, classification.label)

        if kind is RowKind.WEEK_HEADER:
            previous_label = find_label(grid[index - 1], layout)[1] if index > 0 else ""
            return self._open_week(state, classification.label, previous_label)

        if kind is RowKind.WORKOUT_HEADER:
            state = self._open_workout(state, classification.label)
            if classification.exercise_name:
                state = self._add_exercise(state, grid[index], classification.exercise_name, layout)
            return state

        if kind is RowKind.EXERCISE:
            if state.workout is None:
                return self._skip(state, index, "exercise outside a workout", classification.exercise_name)
            return self._add_exercise(state, grid[index], classification.exercise_name, layout)

        return self._skip(state, index, SKIP_REASONS[kind], classification.text)

    # -------------------------------------------------------------------------
    # Transitions
    # -------------------------------------------------------------------------

    def _open_block(self, state: ParseState, label: str) -> ParseState:
        blocks = state.program.blocks
        number = first_integer(label) or len(blocks) + 1
        block = ParsedBlock(block_number=number, name=label or f"Block {number}")
        blocks.append(block)
        return replace(state, block=block, week=None, workout=None)

    def _ensure_block(self, state: ParseState) -> ParseState:
        if state.block is not None:
            return state
        return self._open_block(state, "")

    def _open_week(self, state: ParseState, label: str, previous_label: str = "") -> ParseState:
        state = self._ensure_block(state)
        weeks = state.block.weeks
        number = first_integer(label) or len(weeks) + 1
        week_type = infer_week_type(label, previous_label)
        week = ParsedWeek(
            week_number=number,
            name=week_display_name(label or f"Week {number}", week_type),
            week_type=week_type,
        )
        weeks.append(week)
        return replace(state, week=week, workout=None)

    def _open_workout(self, state: ParseState, label: str) -> ParseState:
        if state.week is None:
            state = self._open_week(state, "")
        workouts = state.week.workouts
        workout = ParsedWorkout(name=label, day_number=len(workouts) + 1)
        workouts.append(workout)
        return replace(state, workout=workout)

    def _add_exercise(self, state: ParseState, row: Row, name: str, layout: SheetLayout) -> ParseState:
        state.workout.exercises.append(build_prescription(row, name, layout))
        return state

    def _skip(self, state: ParseState, index: int, reason: str, text: str = "") -> ParseState:
        state.skipped.append(SkippedRow(row_index=index, reason=reason, text=text))
        return state
