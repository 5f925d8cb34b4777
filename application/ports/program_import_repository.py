"""
Program import repository port (interface).

This Protocol defines the contract for persisting an imported program.
Infrastructure implementations (e.g., Supabase) must satisfy this interface.

Two kinds of operation are involved:
- Exercise library maintenance (lookup by case-folded name, conflict-safe
  batch creation). These are idempotent and run before the graph write.
- The program graph write (program, blocks, weeks, workouts, template
  exercises, substitutions), performed through a ProgramGraphWriter
  obtained from ``transaction()``. Everything written through the
  writer commits together or not at all.
"""

from typing import ContextManager, Dict, List, Protocol


class ProgramGraphWriter(Protocol):
    """
    Writer for one program graph inside a transaction.

    Every insert returns the stored rows, in input order, each carrying
    its generated ``id`` so children can reference their parents.
    """

    def insert_program(self, data: Dict) -> Dict:
        """
        Insert the program row.

        Args:
            data: Program data dictionary

        Returns:
            Created program dictionary with generated ID
        """
        ...

    def insert_blocks(self, rows: List[Dict]) -> List[Dict]:
        """
        Batch-insert program blocks.

        Args:
            rows: Block dictionaries, each with ``program_id``

        Returns:
            Created block dictionaries in input order
        """
        ...

    def insert_weeks(self, rows: List[Dict]) -> List[Dict]:
        """
        Batch-insert block weeks.

        Args:
            rows: Week dictionaries, each with ``block_id``

        Returns:
            Created week dictionaries in input order
        """
        ...

    def insert_workouts(self, rows: List[Dict]) -> List[Dict]:
        """
        Batch-insert workout templates.

        Args:
            rows: Workout dictionaries, each with ``week_id``

        Returns:
            Created workout dictionaries in input order
        """
        ...

    def insert_template_exercises(self, rows: List[Dict]) -> List[Dict]:
        """
        Batch-insert template exercises.

        Args:
            rows: Template exercise dictionaries, each with
                  ``workout_template_id`` and ``exercise_id``

        Returns:
            Created template exercise dictionaries in input order
        """
        ...

    def insert_substitutions(self, rows: List[Dict]) -> int:
        """
        Insert substitution edges, ignoring pairs that already exist.

        Args:
            rows: Dictionaries with ``primary_exercise_id`` and
                  ``substitute_exercise_id``

        Returns:
            Number of edges submitted
        """
        ...


class ProgramImportRepository(Protocol):
    """
    Repository interface for program import persistence.

    All methods work with dictionaries for flexibility.
    The infrastructure layer handles serialization to/from storage.
    """

    def find_exercises_by_names(self, name_keys: List[str]) -> List[Dict]:
        """
        Look up exercises by case-folded name in one batched query.

        Args:
            name_keys: Lower-cased exercise names

        Returns:
            Matching exercise dictionaries (each has ``id`` and ``name``)
        """
        ...

    def create_exercises(self, rows: List[Dict]) -> List[Dict]:
        """
        Batch-create exercises, skipping names that already exist.

        Must be safe against concurrent imports creating the same name:
        the storage layer's case-insensitive unique constraint decides,
        and conflicting rows are ignored rather than raising.

        Args:
            rows: Exercise dictionaries with ``name`` and ``category``

        Returns:
            Exercise dictionaries that were actually inserted
        """
        ...

    def transaction(self) -> ContextManager[ProgramGraphWriter]:
        """
        Open an all-or-nothing write scope for one program graph.

        Usage:
            with repo.transaction() as writer:
                program = writer.insert_program({...})
                writer.insert_blocks([...])

        Raises:
            ProgramImportError: If the commit fails
        """
        ...
