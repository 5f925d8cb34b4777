"""
Application Use Cases for the program importer.

This package contains application-level use cases that orchestrate domain logic
and coordinate between ports/adapters. Use cases are the entry points for
business operations and contain the application's workflow logic.

Architecture follows Clean Architecture / Hexagonal pattern:
- Use cases orchestrate domain objects and repository ports
- Dependencies are injected via constructors for testability
- Use cases return plain results, not API responses

Usage:
    from application.use_cases import ImportProgramUseCase

    use_case = ImportProgramUseCase(import_repo=import_repo)
    result = use_case.execute(
        grid,
        name="Min-Max Program",
        source="Excel Import",
        sheet_name="4x Week",
        user_id="user-123",
    )
"""

from application.use_cases.import_program import (
    ImportProgramResult,
    ImportProgramUseCase,
)
from application.use_cases.persist_program_graph import (
    PersistProgramResult,
    ProgramGraphPersister,
    build_substitution_edges,
)
from application.use_cases.resolve_exercises import (
    ExerciseIdentityMap,
    ExerciseIdentityResolver,
    collect_exercise_names,
    exercise_name_key,
)

__all__ = [
    # ImportProgram
    "ImportProgramUseCase",
    "ImportProgramResult",
    # Graph persistence
    "ProgramGraphPersister",
    "PersistProgramResult",
    "build_substitution_edges",
    # Exercise identity
    "ExerciseIdentityResolver",
    "ExerciseIdentityMap",
    "collect_exercise_names",
    "exercise_name_key",
]
