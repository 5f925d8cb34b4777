"""
Program graph persistence for imported programs.

Materializes a ParsedProgram as program → blocks → weeks → workouts →
template exercises → substitution edges, in that dependency order,
inside one repository transaction. Each level is written as a single
batch once its parents' ids are known.

sort_order at every level is the 0-based position within the parent in
parse order. Spreadsheet numbering (block/week numbers) is stored as-is
but never used for ordering, since it can repeat or skip.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Set, Tuple

from application.ports import ProgramImportRepository
from application.use_cases.resolve_exercises import ExerciseIdentityMap
from domain.models import ParsedProgram

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Imported from Excel"


@dataclass
class PersistProgramResult:
    """Result of writing one program graph."""

    program: Dict
    block_count: int = 0
    week_count: int = 0
    workout_count: int = 0
    template_exercise_count: int = 0
    substitution_count: int = 0
    self_substitutions_dropped: int = 0


def build_substitution_edges(
    program: ParsedProgram,
    identities: ExerciseIdentityMap,
) -> Tuple[List[Dict], int]:
    """
    Collect unique (primary, substitute) edges for the program.

    Pairs that collapse to the same exercise id are dropped.

    Returns:
        (edges, number of self-substitutions dropped)
    """
    seen: Set[Tuple[str, str]] = set()
    edges: List[Dict] = []
    self_dropped = 0
    for prescription in program.iter_prescriptions():
        primary_id = identities.id_for(prescription.name)
        for substitute in prescription.substitutions:
            substitute_id = identities.id_for(substitute)
            if substitute_id == primary_id:
                self_dropped += 1
                continue
            pair = (primary_id, substitute_id)
            if pair in seen:
                continue
            seen.add(pair)
            edges.append(
                {"primary_exercise_id": primary_id, "substitute_exercise_id": substitute_id}
            )
    return edges, self_dropped


def _insert(insert: Callable[[List[Dict]], List[Dict]], rows: List[Dict]) -> List[Dict]:
    """Run a batch insert, skipping the round trip for an empty batch."""
    return insert(rows) if rows else []


class ProgramGraphPersister:
    """
    Writes a parsed program and its hierarchy through a ProgramGraphWriter.

    The caller gets either a fully written graph or an exception with
    nothing committed.

    Usage:
        >>> persister = ProgramGraphPersister(import_repo)
        >>> result = persister.persist(parsed, identities, created_by="user-123")
        >>> result.program["id"]
    """

    def __init__(self, import_repo: ProgramImportRepository) -> None:
        """
        Args:
            import_repo: Repository providing the transactional writer
        """
        self._import_repo = import_repo

    def persist(
        self,
        program: ParsedProgram,
        identities: ExerciseIdentityMap,
        *,
        created_by: Optional[str] = None,
        description: str = DEFAULT_DESCRIPTION,
    ) -> PersistProgramResult:
        """
        Persist ``program`` in one transaction.

        Args:
            program: Parsed program tree
            identities: Resolved exercise ids for every name in the tree
            created_by: Id of the importing user
            description: Program description

        Returns:
            PersistProgramResult with the created program row and counts
        """
        edges, self_dropped = build_substitution_edges(program, identities)

        with self._import_repo.transaction() as writer:
            program_row = writer.insert_program(
                {
                    "name": program.name,
                    "description": description,
                    "frequency_per_week": program.frequency_per_week,
                    "source": program.source,
                    "created_by": created_by,
                }
            )

            blocks = program.blocks
            block_rows = _insert(
                writer.insert_blocks,
                [
                    {
                        "program_id": program_row["id"],
                        "block_number": block.block_number,
                        "name": block.name,
                        "sort_order": block_index,
                    }
                    for block_index, block in enumerate(blocks)
                ],
            )

            weeks = [week for block in blocks for week in block.weeks]
            week_rows = _insert(
                writer.insert_weeks,
                [
                    {
                        "block_id": block_row["id"],
                        "week_number": week.week_number,
                        "name": week.name,
                        "week_type": week.week_type.value,
                        "sort_order": week_index,
                    }
                    for block_row, block in zip(block_rows, blocks)
                    for week_index, week in enumerate(block.weeks)
                ],
            )

            workouts = [workout for week in weeks for workout in week.workouts]
            workout_rows = _insert(
                writer.insert_workouts,
                [
                    {
                        "week_id": week_row["id"],
                        "name": workout.name,
                        "day_number": workout.day_number,
                        "sort_order": workout_index,
                    }
                    for week_row, week in zip(week_rows, weeks)
                    for workout_index, workout in enumerate(week.workouts)
                ],
            )

            template_rows = _insert(
                writer.insert_template_exercises,
                [
                    {
                        "workout_template_id": workout_row["id"],
                        "exercise_id": identities.id_for(prescription.name),
                        "sort_order": exercise_index,
                        "warmup_sets": prescription.warmup_sets,
                        "working_sets": prescription.working_sets,
                        "rep_range_min": prescription.rep_range_min,
                        "rep_range_max": prescription.rep_range_max,
                        "rir": prescription.rir,
                        "rest_seconds": prescription.rest_seconds,
                        "notes": prescription.notes,
                    }
                    for workout_row, workout in zip(workout_rows, workouts)
                    for exercise_index, prescription in enumerate(workout.exercises)
                ],
            )

            if edges:
                writer.insert_substitutions(edges)

        logger.info(
            f"Persisted program {program_row['id']}: {len(block_rows)} blocks, "
            f"{len(week_rows)} weeks, {len(workout_rows)} workouts, "
            f"{len(template_rows)} template exercises, {len(edges)} substitutions"
        )
        if self_dropped:
            logger.info(f"Dropped {self_dropped} self-substitutions")

        return PersistProgramResult(
            program=program_row,
            block_count=len(block_rows),
            week_count=len(week_rows),
            workout_count=len(workout_rows),
            template_exercise_count=len(template_rows),
            substitution_count=len(edges),
            self_substitutions_dropped=self_dropped,
        )
