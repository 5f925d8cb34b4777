"""
Supabase implementation of ProgramImportRepository.

Exercise library maintenance goes straight to the ``exercises`` table:
a batched lookup on the case-folded ``name_key`` column, and a batched
conflict-ignoring upsert on the same column so that concurrent imports
creating the same name end up with one row.

The program graph is staged in memory with client-generated UUIDs and
committed through the ``import_program_graph`` stored procedure
(see sql/program_import.sql), which inserts every level in a single
transaction. If any insert fails, nothing is committed.
"""

import json
import logging
import uuid
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from supabase import Client

from application.exceptions import ProgramImportError

logger = logging.getLogger(__name__)

IMPORT_RPC = "import_program_graph"


class StagedProgramGraphWriter:
    """
    ProgramGraphWriter that collects rows for a single RPC commit.

    Ids are assigned as rows are staged so children can reference their
    parents before anything reaches the database.
    """

    def __init__(self) -> None:
        self.program: Optional[Dict] = None
        self.blocks: List[Dict] = []
        self.weeks: List[Dict] = []
        self.workouts: List[Dict] = []
        self.template_exercises: List[Dict] = []
        self.substitutions: List[Dict] = []

    @staticmethod
    def _stage(rows: List[Dict], into: List[Dict]) -> List[Dict]:
        staged = [{"id": str(uuid.uuid4()), **row} for row in rows]
        into.extend(staged)
        return staged

    def insert_program(self, data: Dict) -> Dict:
        if self.program is not None:
            raise ProgramImportError("A program was already staged in this transaction")
        self.program = {"id": str(uuid.uuid4()), **data}
        return self.program

    def insert_blocks(self, rows: List[Dict]) -> List[Dict]:
        return self._stage(rows, self.blocks)

    def insert_weeks(self, rows: List[Dict]) -> List[Dict]:
        return self._stage(rows, self.weeks)

    def insert_workouts(self, rows: List[Dict]) -> List[Dict]:
        return self._stage(rows, self.workouts)

    def insert_template_exercises(self, rows: List[Dict]) -> List[Dict]:
        return self._stage(rows, self.template_exercises)

    def insert_substitutions(self, rows: List[Dict]) -> int:
        self.substitutions.extend(dict(row) for row in rows)
        return len(rows)

    def to_rpc_params(self) -> Dict[str, str]:
        """Serialize the staged graph as the stored procedure's arguments."""
        return {
            "p_program": json.dumps(self.program),
            "p_blocks": json.dumps(self.blocks),
            "p_weeks": json.dumps(self.weeks),
            "p_workouts": json.dumps(self.workouts),
            "p_template_exercises": json.dumps(self.template_exercises),
            "p_substitutions": json.dumps(self.substitutions),
        }


class SupabaseProgramImportRepository:
    """
    Supabase-backed program import repository implementation.

    Queries against:
    - exercises: Exercise library (unique on name_key, the lower-cased
      name with whitespace runs collapsed)
    - import_program_graph RPC: programs, program_blocks, block_weeks,
      workout_templates, template_exercises, exercise_substitutions
    """

    def __init__(self, client: Client):
        """
        Initialize repository with Supabase client.

        Args:
            client: Authenticated Supabase client
        """
        self._client = client

    def find_exercises_by_names(self, name_keys: List[str]) -> List[Dict]:
        """
        Look up exercises by case-folded name in one query.

        Args:
            name_keys: Lower-cased exercise names

        Returns:
            Matching exercise dictionaries

        Raises:
            ProgramImportError: If the query fails
        """
        if not name_keys:
            return []
        try:
            response = (
                self._client.table("exercises")
                .select("id, name, category")
                .in_("name_key", name_keys)
                .execute()
            )
        except Exception as e:
            raise ProgramImportError(f"Exercise lookup failed: {e}", e) from e
        return response.data or []

    def create_exercises(self, rows: List[Dict]) -> List[Dict]:
        """
        Batch-create exercises, ignoring names that already exist.

        Args:
            rows: Exercise dictionaries with ``name`` and ``category``

        Returns:
            Exercise dictionaries that were actually inserted

        Raises:
            ProgramImportError: If the upsert fails
        """
        if not rows:
            return []
        try:
            response = (
                self._client.table("exercises")
                .upsert(rows, on_conflict="name_key", ignore_duplicates=True)
                .execute()
            )
        except Exception as e:
            raise ProgramImportError(f"Exercise creation failed: {e}", e) from e
        created = response.data or []
        logger.info(f"Created {len(created)} of {len(rows)} staged exercises")
        return created

    @contextmanager
    def transaction(self) -> Iterator[StagedProgramGraphWriter]:
        """
        Stage a program graph and commit it through one RPC call.

        An exception inside the ``with`` block discards the staged rows.

        Raises:
            ProgramImportError: If the RPC call fails
        """
        writer = StagedProgramGraphWriter()
        yield writer
        self._commit(writer)

    def _commit(self, writer: StagedProgramGraphWriter) -> None:
        if writer.program is None:
            raise ProgramImportError("No program staged for import")

        try:
            response = self._client.rpc(IMPORT_RPC, writer.to_rpc_params()).execute()

            if response.data is None:
                raise ProgramImportError("RPC returned no data")
        except Exception as e:
            if isinstance(e, ProgramImportError):
                raise
            raise ProgramImportError(f"Atomic program import failed: {e}", e) from e

        # The procedure returns the stored program row (created_at etc.)
        if isinstance(response.data, dict):
            writer.program.update(response.data)
        logger.info(
            f"Committed program {writer.program['id']}: {len(writer.blocks)} blocks, "
            f"{len(writer.weeks)} weeks, {len(writer.workouts)} workouts, "
            f"{len(writer.template_exercises)} template exercises"
        )
