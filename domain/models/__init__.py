"""
Domain models for the program importer.

This package contains pure domain models that are independent of
infrastructure concerns (database, API, external services).

These models represent the parsed program tree:
- ParsedProgram: The root, holding program metadata and blocks
- ParsedBlock: A multi-week training phase
- ParsedWeek: A week with its week type (intro, normal, deload)
- ParsedWorkout: A workout day
- ParsedExercisePrescription: A prescribed exercise slot
- SkippedRow: Diagnostic for rows the importer dropped

Usage:
    >>> from domain.models import ParsedProgram, ParsedBlock

    >>> program = ParsedProgram(
    ...     name="Min-Max Program",
    ...     frequency_per_week=4,
    ...     source="Excel Import",
    ...     blocks=[ParsedBlock(block_number=1, name="Block 1")],
    ... )

    >>> # Serialize to JSON
    >>> json_str = program.model_dump_json(indent=2)
"""

from domain.models.parsed_program import (
    ParsedBlock,
    ParsedExercisePrescription,
    ParsedProgram,
    ParsedWeek,
    ParsedWorkout,
    SkippedRow,
    WeekType,
)

__all__ = [
    # Parsed tree
    "ParsedProgram",
    "ParsedBlock",
    "ParsedWeek",
    "ParsedWorkout",
    "ParsedExercisePrescription",
    # Diagnostics
    "SkippedRow",
    # Enums
    "WeekType",
]
