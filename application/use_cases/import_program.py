"""
ImportProgram Use Case.

Orchestrates the spreadsheet import end to end:

    grid → ProgramBuilder (ParsedProgram + skipped rows)
         → ExerciseIdentityResolver (name → exercise id)
         → ProgramGraphPersister (one transaction)

Parse ambiguities never fail an import; they come back as skipped-row
diagnostics. Any persistence failure aborts the whole import and is
raised as ProgramImportError.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from application.exceptions import ProgramImportError
from application.ports import ProgramImportRepository
from application.use_cases.persist_program_graph import (
    DEFAULT_DESCRIPTION,
    ProgramGraphPersister,
)
from application.use_cases.resolve_exercises import ExerciseIdentityResolver
from domain.importer import ParseResult, ProgramBuilder
from domain.importer.field_extractors import DEFAULT_FREQUENCY
from domain.models import SkippedRow

logger = logging.getLogger(__name__)


@dataclass
class ImportProgramResult:
    """Result of the ImportProgram use case execution."""

    program: Dict
    rows_scanned: int = 0
    block_count: int = 0
    week_count: int = 0
    workout_count: int = 0
    template_exercise_count: int = 0
    exercises_resolved: int = 0
    exercises_created: int = 0
    substitution_count: int = 0
    self_substitutions_dropped: int = 0
    skipped_rows: List[SkippedRow] = field(default_factory=list)

    def summary(self) -> Dict:
        """Counts reported back to the uploader."""
        return {
            "rows_scanned": self.rows_scanned,
            "blocks": self.block_count,
            "weeks": self.week_count,
            "workouts": self.workout_count,
            "template_exercises": self.template_exercise_count,
            "exercises_resolved": self.exercises_resolved,
            "exercises_created": self.exercises_created,
            "substitutions": self.substitution_count,
            "self_substitutions_dropped": self.self_substitutions_dropped,
            "rows_skipped": len(self.skipped_rows),
        }


class ImportProgramUseCase:
    """
    Use case for importing a training program from a sheet grid.

    Orchestrates the following workflow:
    1. Scan the grid into a ParsedProgram
    2. Resolve every exercise name to a library id, creating new entries
    3. Write the program graph in one transaction
    4. Return the created program row with import counts

    Dependencies are injected via constructor for testability.

    Usage:
        >>> use_case = ImportProgramUseCase(import_repo=import_repo)
        >>> result = use_case.execute(
        ...     grid,
        ...     name="Min-Max Program",
        ...     source="Excel Import",
        ...     sheet_name="4x Week",
        ...     user_id="user-123",
        ... )
        >>> result.program["id"]
    """

    def __init__(
        self,
        import_repo: ProgramImportRepository,
        builder: Optional[ProgramBuilder] = None,
    ) -> None:
        """
        Initialize the use case with required dependencies.

        Args:
            import_repo: Repository for exercise lookup and graph writes
            builder: Program builder (defaults to one with layout detection)
        """
        self._builder = builder or ProgramBuilder()
        self._resolver = ExerciseIdentityResolver(import_repo)
        self._persister = ProgramGraphPersister(import_repo)

    def parse(
        self,
        grid: List[List],
        *,
        name: str,
        source: str,
        sheet_name: Optional[str] = None,
        default_frequency: int = DEFAULT_FREQUENCY,
    ) -> ParseResult:
        """Scan ``grid`` without touching storage."""
        return self._builder.build(
            grid,
            name=name,
            source=source,
            sheet_name=sheet_name,
            default_frequency=default_frequency,
        )

    def execute(
        self,
        grid: List[List],
        *,
        name: str,
        source: str,
        sheet_name: Optional[str] = None,
        user_id: Optional[str] = None,
        default_frequency: int = DEFAULT_FREQUENCY,
        description: str = DEFAULT_DESCRIPTION,
    ) -> ImportProgramResult:
        """
        Execute the import workflow.

        Args:
            grid: Rows of the workbook's first sheet
            name: Program name
            source: Source label stored on the program
            sheet_name: First sheet's name, used to seed weekly frequency
            user_id: Importing user, stored as the program's creator
            default_frequency: Frequency used when the sheet name has none
            description: Program description

        Returns:
            ImportProgramResult with the created program row and counts

        Raises:
            ProgramImportError: If exercise resolution or any write fails
        """
        parsed = self.parse(
            grid,
            name=name,
            source=source,
            sheet_name=sheet_name,
            default_frequency=default_frequency,
        )

        try:
            identities = self._resolver.resolve(parsed.program)
            persisted = self._persister.persist(
                parsed.program,
                identities,
                created_by=user_id,
                description=description,
            )
        except ProgramImportError:
            logger.exception(f"Import of '{name}' failed")
            raise
        except Exception as e:
            logger.exception(f"Import of '{name}' failed")
            raise ProgramImportError("Failed to import program", e) from e

        logger.info(
            f"Imported program {persisted.program.get('id')} '{name}' for user {user_id}: "
            f"{len(identities.created)} new exercises, {len(parsed.skipped_rows)} rows skipped"
        )

        return ImportProgramResult(
            program=persisted.program,
            rows_scanned=parsed.rows_scanned,
            block_count=persisted.block_count,
            week_count=persisted.week_count,
            workout_count=persisted.workout_count,
            template_exercise_count=persisted.template_exercise_count,
            exercises_resolved=len(identities),
            exercises_created=len(identities.created),
            substitution_count=persisted.substitution_count,
            self_substitutions_dropped=persisted.self_substitutions_dropped,
            skipped_rows=parsed.skipped_rows,
        )
