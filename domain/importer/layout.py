"""
Sheet layout description and cell access helpers.

Program workbooks come in more than one layout: structural labels
(block, week, workout names) sit in column B in some versions and in
column A in others. Rather than hard-coding a single index, a layout
lists candidate label columns in priority order and the classifier
tries each of them per row.

All column indices are 0-based.
"""

from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta
from typing import Any, Optional, Sequence, Tuple

Row = Sequence[Any]
Grid = Sequence[Row]

EXERCISE_MARKER = "exercise"


def cell_at(row: Optional[Row], column: int) -> Any:
    """Return the raw value at ``column`` or None when the row is too short."""
    if not row or column < 0 or column >= len(row):
        return None
    return row[column]


def cell_text(value: Any) -> str:
    """
    Stringify a cell value for text matching.

    Integral floats render without the trailing ``.0`` so that a cell
    typed as 3.0 matches the same patterns as the text "3".
    """
    if value is None or isinstance(value, bool):
        return ""
    if isinstance(value, float):
        if value != value:  # NaN
            return ""
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, timedelta):
        return str(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value).strip()


def is_blank(value: Any) -> bool:
    return cell_text(value) == ""


@dataclass(frozen=True)
class SheetLayout:
    """
    Column positions for one workbook layout.

    Attributes:
        label_columns: Candidate columns holding structural labels,
            tried in priority order.
        exercise_column: Column holding the exercise name.
        warmup_columns: Columns tried in order for the warm-up set count.
        working_sets_column: Column holding the working set count.
        rep_range_column: Column holding the rep range ("8-10").
        rir_columns: Columns tried in order for reps in reserve.
        rest_column: Column holding the rest period ("~2-3 min").
        substitution_columns: Columns holding substitute exercise names.
        notes_column: Column holding free-text notes.
        week_requires_marker: When True a week label only opens a week
            if the adjacent cell carries the "exercise" column marker.
            Week labels without the marker are treated as week-type
            label rows (e.g. "Intro Week" above "Week 1 | Exercise").
    """

    label_columns: Tuple[int, ...] = (1, 0)
    exercise_column: int = 1
    warmup_columns: Tuple[int, ...] = (3, 4)
    working_sets_column: int = 5
    rep_range_column: int = 6
    rir_columns: Tuple[int, ...] = (11, 12)
    rest_column: int = 13
    substitution_columns: Tuple[int, ...] = (14, 15)
    notes_column: int = 16
    week_requires_marker: bool = False

    @property
    def prescription_columns(self) -> Tuple[int, ...]:
        """Columns that only carry data on exercise rows."""
        return (*self.warmup_columns, self.working_sets_column, self.rep_range_column)

    @classmethod
    def detect(cls, grid: Grid, base: Optional["SheetLayout"] = None) -> "SheetLayout":
        """
        Infer layout flags from the grid contents.

        Turns on ``week_requires_marker`` when any row carries a week label
        in a candidate label column with the "exercise" marker right next
        to it. Workbooks that use that convention also contain standalone
        "Intro Week"/"Deload Week" label rows, which must not open weeks.
        """
        layout = base or cls()
        for row in grid:
            for column in layout.label_columns:
                label = cell_text(cell_at(row, column)).lower()
                if not is_week_label(label):
                    continue
                adjacent = cell_text(cell_at(row, column + 1)).lower()
                if EXERCISE_MARKER in adjacent:
                    return replace(layout, week_requires_marker=True)
        return layout


_NOT_A_WEEK = ("per week", "/week", "a week", "times week")


def is_week_label(lowered: str) -> bool:
    """True when ``lowered`` names a week ("Week 3", "Deload Week")."""
    if "week" not in lowered:
        return False
    return not any(phrase in lowered for phrase in _NOT_A_WEEK)
