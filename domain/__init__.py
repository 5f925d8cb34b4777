"""
Domain layer for the program importer.

This package contains pure domain models and the spreadsheet parsing
logic. Nothing here touches the database, HTTP, or file decoding.
"""

from domain.models import (
    ParsedBlock,
    ParsedExercisePrescription,
    ParsedProgram,
    ParsedWeek,
    ParsedWorkout,
    SkippedRow,
    WeekType,
)

__all__ = [
    "ParsedBlock",
    "ParsedExercisePrescription",
    "ParsedProgram",
    "ParsedWeek",
    "ParsedWorkout",
    "SkippedRow",
    "WeekType",
]
