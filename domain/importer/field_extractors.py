"""
Cell-to-value extractors for exercise rows.

Every extractor is total: any input (None, text, numbers, dates the
spreadsheet engine produced from text like "6-8") falls through to an
explicit default instead of raising.
"""

import re
from datetime import date, datetime
from typing import Any, List, Optional, Tuple

from openpyxl.utils.datetime import to_excel

from domain.importer.layout import cell_text

DEFAULT_REP_RANGE: Tuple[int, int] = (8, 12)
DEFAULT_WARMUP_SETS = 0
MAX_WARMUP_SETS = 5
DEFAULT_WORKING_SETS = 2
DEFAULT_REST_SECONDS = 120
DEFAULT_FREQUENCY = 4
MAX_RIR = 4
MAX_REPS = 100

RANGE_PATTERN = re.compile(r"(\d+)\s*[-–]\s*(\d+)")
INTEGER_PATTERN = re.compile(r"^\s*(\d+)\s*$")
REST_PATTERN = re.compile(r"(\d+)\s*[-–]?\s*(\d*)\s*min", re.IGNORECASE)
FREQUENCY_PATTERN = re.compile(r"(\d+)\s*x", re.IGNORECASE)
SEE_NOTES = "see notes"

# Rep ranges typed as "6-8" are turned into dates by some spreadsheet
# engines (June 8th). These are the serial numbers of the affected 2025
# dates mapped back to the range that was typed.
KNOWN_SERIAL_REP_RANGES = {
    45721: (3, 5),
    45753: (4, 6),
    45816: (6, 8),
    45818: (6, 10),
    45879: (8, 10),
    45881: (8, 12),
    45942: (10, 12),
    45945: (10, 15),
    46006: (12, 15),
    46011: (12, 20),
}


def _as_int(value: Any) -> Optional[int]:
    """Return ``value`` as an int when it is integral, else None."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if value != value or not value.is_integer():
            return None
        return int(value)
    match = INTEGER_PATTERN.match(cell_text(value))
    return int(match.group(1)) if match else None


def _to_serial(value: Any) -> Optional[int]:
    """Convert a date cell back to its spreadsheet serial number."""
    try:
        return int(to_excel(value))
    except (TypeError, ValueError, OverflowError):
        return None


def _ordered_range(low: int, high: int) -> Optional[Tuple[int, int]]:
    if low > high:
        low, high = high, low
    if low < 1 or high > MAX_REPS:
        return None
    return low, high


def parse_rep_range(value: Any) -> Tuple[int, int]:
    """
    Parse a rep range cell.

    Accepts "8-10" / "8–10" (returned ordered), a single integer ("6" or 6),
    or a date/serial produced from a mangled range. Anything else yields
    the (8, 12) default.
    """
    if isinstance(value, (datetime, date)):
        return KNOWN_SERIAL_REP_RANGES.get(_to_serial(value), DEFAULT_REP_RANGE)

    if not isinstance(value, (int, float)) or isinstance(value, bool):
        match = RANGE_PATTERN.search(cell_text(value))
        if match:
            parsed = _ordered_range(int(match.group(1)), int(match.group(2)))
            if parsed:
                return parsed

    number = _as_int(value)
    if number is not None:
        if 1 <= number <= MAX_REPS:
            return number, number
        return KNOWN_SERIAL_REP_RANGES.get(number, DEFAULT_REP_RANGE)

    return DEFAULT_REP_RANGE


def parse_warmup_sets(value: Any) -> int:
    """
    Parse the warm-up set count.

    "1-2" takes the lower bound. Counts above five are a misparse of some
    other column and are coerced to 0.
    """
    text = cell_text(value)
    match = RANGE_PATTERN.search(text)
    if match:
        count = int(match.group(1))
    else:
        count = _as_int(value)
        if count is None:
            return DEFAULT_WARMUP_SETS
    if count < 0 or count > MAX_WARMUP_SETS:
        return DEFAULT_WARMUP_SETS
    return count


def parse_working_sets(value: Any) -> int:
    """Parse the working set count; only 1-9 is accepted, else 2."""
    count = _as_int(value)
    if count is not None and 0 < count < 10:
        return count
    return DEFAULT_WORKING_SETS


def parse_rir(*values: Any) -> Optional[int]:
    """Return the first integral value in [0, 4] among ``values``, else None."""
    for value in values:
        rir = _as_int(value)
        if rir is not None and 0 <= rir <= MAX_RIR:
            return rir
    return None


def parse_rest_seconds(value: Any) -> int:
    """Parse "~2-3 min" style rest cells into seconds using the lower bound."""
    match = REST_PATTERN.search(cell_text(value))
    if match:
        return int(match.group(1)) * 60
    return DEFAULT_REST_SECONDS


def parse_substitutions(*values: Any) -> List[str]:
    """
    Collect substitute exercise names.

    Cells that say "see notes" point at the free-text notes instead of
    naming a structured substitute and are ignored.
    """
    substitutions = []
    for value in values:
        text = cell_text(value)
        if not text or SEE_NOTES in text.lower():
            continue
        substitutions.append(text)
    return substitutions


def parse_notes(value: Any) -> Optional[str]:
    text = cell_text(value)
    return text or None


def parse_frequency(sheet_name: Optional[str], default: int = DEFAULT_FREQUENCY) -> int:
    """Read the weekly frequency from a sheet name such as "4x Week"."""
    match = FREQUENCY_PATTERN.search(sheet_name or "")
    if match:
        frequency = int(match.group(1))
        if frequency > 0:
            return frequency
    return default


def first_integer(text: str) -> Optional[int]:
    """First run of digits in ``text``, used for block/week numbering."""
    match = re.search(r"\d+", text or "")
    return int(match.group(0)) if match else None
