"""
Exercise identity resolution for imported programs.

Collapses every exercise name in a parsed program (primary names and
substitution names alike) into one case-insensitive identity space and
makes sure each distinct name has exactly one exercise id, creating
library entries for names not seen before.

The storage layer's unique constraint on the case-folded name is what
guarantees uniqueness across concurrent imports; the lookup here only
avoids sending names that already exist.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from application.exceptions import ProgramImportError
from application.ports import ProgramImportRepository
from domain.importer import categorize_exercise
from domain.models import ParsedProgram

logger = logging.getLogger(__name__)


def exercise_name_key(name: str) -> str:
    """Case-folded, whitespace-collapsed identity key for an exercise name."""
    return " ".join(name.split()).lower()


def collect_exercise_names(program: ParsedProgram) -> Dict[str, str]:
    """
    Map each distinct name key to its first spelling in tree order.

    Primary names are visited before the substitutions of the same
    prescription.
    """
    spellings: Dict[str, str] = {}
    for prescription in program.iter_prescriptions():
        for name in (prescription.name, *prescription.substitutions):
            key = exercise_name_key(name)
            if key and key not in spellings:
                spellings[key] = " ".join(name.split())
    return spellings


@dataclass
class ExerciseIdentityMap:
    """Name key to exercise id, plus the exercises created on the way."""

    ids: Dict[str, str] = field(default_factory=dict)
    created: List[Dict] = field(default_factory=list)

    def id_for(self, name: str) -> str:
        return self.ids[exercise_name_key(name)]

    def __contains__(self, name: str) -> bool:
        return exercise_name_key(name) in self.ids

    def __len__(self) -> int:
        return len(self.ids)


class ExerciseIdentityResolver:
    """
    Resolves parsed exercise names to persisted exercise ids.

    Usage:
        >>> resolver = ExerciseIdentityResolver(import_repo)
        >>> identities = resolver.resolve(parsed_program)
        >>> identities.id_for("bench press") == identities.id_for("Bench Press")
        True
    """

    def __init__(self, import_repo: ProgramImportRepository) -> None:
        """
        Args:
            import_repo: Repository used for exercise lookup and creation
        """
        self._import_repo = import_repo

    def resolve(self, program: ParsedProgram) -> ExerciseIdentityMap:
        """
        Resolve every exercise name referenced by ``program``.

        Args:
            program: Parsed program tree

        Returns:
            ExerciseIdentityMap covering every primary and substitute name

        Raises:
            ProgramImportError: If a name still has no id after creation
        """
        spellings = collect_exercise_names(program)
        if not spellings:
            return ExerciseIdentityMap()

        ids: Dict[str, str] = {}
        self._fold(ids, self._import_repo.find_exercises_by_names(list(spellings)))

        staged = [
            {"name": spelling, "category": categorize_exercise(spelling)}
            for key, spelling in spellings.items()
            if key not in ids
        ]

        created: List[Dict] = []
        if staged:
            created = self._import_repo.create_exercises(staged)
            self._fold(ids, created)

            missing = [key for key in spellings if key not in ids]
            if missing:
                # Another import created these between our lookup and insert
                logger.info(f"Re-reading {len(missing)} exercises created concurrently")
                self._fold(ids, self._import_repo.find_exercises_by_names(missing))

        unresolved = [spellings[key] for key in spellings if key not in ids]
        if unresolved:
            raise ProgramImportError(
                f"Could not resolve exercises: {', '.join(unresolved)}"
            )

        logger.info(
            f"Resolved {len(spellings)} exercise names "
            f"({len(spellings) - len(staged)} existing, {len(created)} created)"
        )
        return ExerciseIdentityMap(ids=ids, created=created)

    @staticmethod
    def _fold(ids: Dict[str, str], rows: List[Dict]) -> None:
        for row in rows or []:
            ids.setdefault(exercise_name_key(row["name"]), row["id"])
