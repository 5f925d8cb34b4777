"""
Fake Repository Implementations for Testing.

This package provides in-memory fake implementations of repository interfaces
for fast, isolated testing. No database or external dependencies required.

Features:
- Fakes implement the same Protocol interfaces as real implementations
- Supports seeding with test data
- Supports failure simulation for transaction tests
- Grid and workbook builders for importer tests

Usage:
    from tests.fakes import FakeProgramImportRepository, simple_program_grid

    repo = FakeProgramImportRepository(exercises=["Bench Press"])
    use_case = ImportProgramUseCase(import_repo=repo)
    use_case.execute(simple_program_grid(), name="Test", source="Excel Import")
"""
from tests.fakes.program_import_repository import (
    FakeProgramGraphWriter,
    FakeProgramImportRepository,
    SimulatedFailure,
)
from tests.fakes.sheets import (
    blank_row,
    exercise_row,
    label_row,
    marker_program_grid,
    simple_program_grid,
    workbook_bytes,
)

__all__ = [
    "FakeProgramGraphWriter",
    "FakeProgramImportRepository",
    "SimulatedFailure",
    "blank_row",
    "exercise_row",
    "label_row",
    "marker_program_grid",
    "simple_program_grid",
    "workbook_bytes",
]
