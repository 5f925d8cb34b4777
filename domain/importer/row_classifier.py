"""
Row classification for program workbooks.

Labels a single spreadsheet row as a block header, week header, rest
day, workout header, exercise row, column-header row, noise, or
something to skip. Rules are evaluated in a fixed order and the first
match wins. Matching is case-insensitive substring matching against the
row's anchor cells: the structural label (found in one of the layout's
candidate label columns) and the exercise-name cell.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from domain.importer.layout import (
    EXERCISE_MARKER,
    Grid,
    SheetLayout,
    cell_at,
    cell_text,
    is_blank,
    is_week_label,
)

NOISE_MARKERS = (
    "program notes",
    "copyright",
    "©",
    "all rights reserved",
    "warm-up protocol",
    "warm up protocol",
    "warmup protocol",
)

COLUMN_HEADER_PATTERNS = (
    re.compile(r"\bexercises?\b"),
    re.compile(r"tracking load"),
    re.compile(r"\bload\b"),
    re.compile(r"rir \(set"),
    re.compile(r"\bset 1\b"),
)

WORKOUT_NAMES = (
    "full body",
    "arms/delts",
    "upper",
    "lower",
    "arms",
    "push",
    "pull",
    "legs",
)

WEEK_TYPE_WORDS = ("intro", "deload")

_WORKOUT_PATTERNS = tuple(
    re.compile(rf"^{re.escape(name)}(?!\w|-ups?\b)") for name in WORKOUT_NAMES
)
_LETTER = re.compile(r"[a-z]", re.IGNORECASE)


class RowKind(str, Enum):
    """What a spreadsheet row means to the program builder."""

    EMPTY = "empty"
    NOISE = "noise"
    COLUMN_HEADER = "column_header"
    BLOCK_HEADER = "block_header"
    WEEK_HEADER = "week_header"
    WEEK_LABEL = "week_label"
    REST_DAY = "rest_day"
    WORKOUT_HEADER = "workout_header"
    EXERCISE = "exercise"
    UNRECOGNIZED = "unrecognized"


@dataclass(frozen=True)
class RowClassification:
    """
    Result of classifying one row.

    Attributes:
        kind: The row label
        label: Structural label text (block/week/workout name), if any
        exercise_name: Exercise name carried by the row, if any. Workout
            header rows may carry the first exercise of the workout.
    """

    kind: RowKind
    label: str = ""
    exercise_name: str = ""

    @property
    def text(self) -> str:
        return self.label or self.exercise_name


def is_workout_name(lowered: str) -> bool:
    """True when ``lowered`` equals or starts with a workout vocabulary word."""
    return any(pattern.match(lowered) for pattern in _WORKOUT_PATTERNS)


def is_column_header(lowered: str) -> bool:
    return any(pattern.search(lowered) for pattern in COLUMN_HEADER_PATTERNS)


def is_exercise_name(text: str) -> bool:
    """An exercise name has at least one letter and is not a column header."""
    return bool(text) and bool(_LETTER.search(text)) and not is_column_header(text.lower())


def _is_structural(lowered: str) -> bool:
    return (
        "block" in lowered
        or is_week_label(lowered)
        or "rest day" in lowered
        or is_workout_name(lowered)
        or any(word in lowered for word in WEEK_TYPE_WORDS)
    )


def anchor_texts(grid: Grid, index: int, layout: SheetLayout) -> Tuple[str, ...]:
    """Texts of the candidate label columns for row ``index``."""
    if index < 0 or index >= len(grid):
        return ()
    row = grid[index]
    return tuple(cell_text(cell_at(row, column)) for column in layout.label_columns)


def find_label(row: Sequence, layout: SheetLayout) -> Tuple[Optional[int], str]:
    """
    Locate the structural label of a row.

    Candidate label columns are tried in priority order and the first one
    holding a structural keyword wins.

    Returns:
        (column, text) or (None, "") when no candidate column matches
    """
    for column in layout.label_columns:
        text = cell_text(cell_at(row, column))
        if text and _is_structural(text.lower()):
            return column, text
    return None, ""


def _has_prescription(row: Sequence, layout: SheetLayout) -> bool:
    return any(not is_blank(cell_at(row, column)) for column in layout.prescription_columns)


def classify_row(grid: Grid, index: int, layout: SheetLayout) -> RowClassification:
    """
    Classify row ``index`` of ``grid``.

    Rules, first match wins:
        1. noise banners (program notes, copyright, warm-up protocol)
        2. column-header rows ("Exercise", "Load", "Set 1", ...)
        3. block header
        4. week header (or a week-type label row when the layout
           requires the exercise marker and it is missing)
        5. rest day
        6. workout header
        7. exercise row
        8. anything else is unrecognized

    Args:
        grid: Full cell grid of the sheet
        index: 0-based row index
        layout: Column layout of the sheet

    Returns:
        RowClassification for the row
    """
    row = grid[index] if 0 <= index < len(grid) else ()
    if not row or all(is_blank(value) for value in row):
        return RowClassification(RowKind.EMPTY)

    anchors = anchor_texts(grid, index, layout)
    lowered_anchors = [text.lower() for text in anchors]
    if any(marker in text for text in lowered_anchors for marker in NOISE_MARKERS):
        return RowClassification(RowKind.NOISE, label=next(t for t in anchors if t))

    label_column, label = find_label(row, layout)
    exercise_text = cell_text(cell_at(row, layout.exercise_column))

    if label_column in (None, layout.exercise_column) and is_column_header(exercise_text.lower()):
        return RowClassification(RowKind.COLUMN_HEADER, label=exercise_text)

    if label:
        lowered = label.lower()
        adjacent = cell_text(cell_at(row, label_column + 1))

        if "block" in lowered and EXERCISE_MARKER not in lowered:
            return RowClassification(RowKind.BLOCK_HEADER, label=label)

        if is_week_label(lowered):
            if layout.week_requires_marker and EXERCISE_MARKER not in adjacent.lower():
                return RowClassification(RowKind.WEEK_LABEL, label=label)
            return RowClassification(RowKind.WEEK_HEADER, label=label)

        if "rest day" in lowered:
            return RowClassification(RowKind.REST_DAY, label=label)

        if is_workout_name(lowered):
            if label_column != layout.exercise_column:
                first_exercise = adjacent if is_exercise_name(adjacent) else ""
                return RowClassification(
                    RowKind.WORKOUT_HEADER, label=label, exercise_name=first_exercise
                )
            # Same column as exercise names: "Push Press" with sets and reps
            # filled in is an exercise, a bare "Push" is a workout.
            if not _has_prescription(row, layout):
                return RowClassification(RowKind.WORKOUT_HEADER, label=label)

        elif any(word in lowered for word in WEEK_TYPE_WORDS):
            if label_column != layout.exercise_column or not _has_prescription(row, layout):
                return RowClassification(RowKind.WEEK_LABEL, label=label)

    if is_exercise_name(exercise_text):
        return RowClassification(RowKind.EXERCISE, label=label, exercise_name=exercise_text)

    return RowClassification(RowKind.UNRECOGNIZED, label=next((t for t in anchors if t), ""))
