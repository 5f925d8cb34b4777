"""
Spreadsheet program importer (pure parsing layer).

Turns the cell grid of a program workbook's first sheet into a
ParsedProgram tree:

- layout: candidate label columns and data column positions
- row_classifier: labels each row (block/week/workout header, exercise, ...)
- field_extractors: total cell-to-value coercions with defaults
- categorizer: exercise name to muscle-group category
- program_builder: single forward fold over the classified rows

Usage:
    >>> from domain.importer import ProgramBuilder
    >>> result = ProgramBuilder().build(grid, name="Min-Max", source="Excel Import")
    >>> result.program.blocks
"""

from domain.importer.categorizer import CATEGORY_KEYWORDS, categorize_exercise
from domain.importer.layout import SheetLayout
from domain.importer.program_builder import ParseResult, ParseState, ProgramBuilder
from domain.importer.row_classifier import RowClassification, RowKind, classify_row

__all__ = [
    "CATEGORY_KEYWORDS",
    "categorize_exercise",
    "SheetLayout",
    "ParseResult",
    "ParseState",
    "ProgramBuilder",
    "RowClassification",
    "RowKind",
    "classify_row",
]
