"""
Unit tests for ExerciseIdentityResolver.

Tests for:
- Case-insensitive identity across primary and substitute names
- One batched lookup and one batched create per import
- Existing library entries are reused, new ones get a category
- Names created concurrently by another import are re-read
"""

import pytest

from application.exceptions import ProgramImportError
from application.use_cases import (
    ExerciseIdentityResolver,
    collect_exercise_names,
    exercise_name_key,
)
from domain.models import (
    ParsedBlock,
    ParsedExercisePrescription,
    ParsedProgram,
    ParsedWeek,
    ParsedWorkout,
)
from tests.fakes import FakeProgramImportRepository

pytestmark = pytest.mark.unit


def program_with(*prescriptions: ParsedExercisePrescription) -> ParsedProgram:
    workout = ParsedWorkout(name="Upper", day_number=1, exercises=list(prescriptions))
    week = ParsedWeek(week_number=1, name="Week 1", workouts=[workout])
    block = ParsedBlock(block_number=1, name="Block 1", weeks=[week])
    return ParsedProgram(name="Test", source="Excel Import", blocks=[block])


def rx(name: str, *subs: str) -> ParsedExercisePrescription:
    return ParsedExercisePrescription(name=name, substitutions=list(subs))


@pytest.fixture
def repo() -> FakeProgramImportRepository:
    return FakeProgramImportRepository()


@pytest.fixture
def resolver(repo) -> ExerciseIdentityResolver:
    return ExerciseIdentityResolver(repo)


class TestNameKeys:
    """Tests for name normalization helpers."""

    def test_exercise_name_key(self):
        assert exercise_name_key("  Bench   PRESS ") == "bench press"

    def test_collect_keeps_first_spelling(self):
        program = program_with(rx("Bench Press", "incline bench"), rx("BENCH PRESS", "Incline Bench"))
        assert collect_exercise_names(program) == {
            "bench press": "Bench Press",
            "incline bench": "incline bench",
        }


class TestResolve:
    """Tests for ExerciseIdentityResolver.resolve."""

    def test_case_variants_resolve_to_one_exercise(self, repo, resolver):
        program = program_with(rx("Bench Press"), rx("bench press"), rx("BENCH PRESS"))

        identities = resolver.resolve(program)

        assert len(repo.exercises) == 1
        assert len(identities) == 1
        assert identities.id_for("Bench Press") == identities.id_for("BENCH PRESS")
        assert repo.exercises["bench press"]["name"] == "Bench Press"

    def test_substitute_names_share_identity_space(self, repo, resolver):
        program = program_with(rx("Bench Press", "Incline Bench"), rx("incline bench", "bench press"))

        identities = resolver.resolve(program)

        assert len(repo.exercises) == 2
        assert "INCLINE BENCH" in identities
        assert identities.id_for("incline bench") == repo.exercise_id("Incline Bench")

    def test_single_batched_lookup_and_create(self, repo, resolver):
        program = program_with(rx("Bench Press", "Incline Bench"), rx("Back Squat"), rx("Leg Press"))

        resolver.resolve(program)

        assert repo.calls == ["find_exercises_by_names", "create_exercises"]
        assert sorted(repo.lookup_batches[0]) == ["back squat", "bench press", "incline bench", "leg press"]
        assert len(repo.create_batches[0]) == 4

    def test_existing_exercises_are_reused(self, repo, resolver):
        existing = repo.seed_exercises(["Bench Press"])[0]
        program = program_with(rx("bench press"), rx("Lat Pulldown"))

        identities = resolver.resolve(program)

        assert identities.id_for("Bench Press") == existing["id"]
        assert [row["name"] for row in repo.create_batches[0]] == ["Lat Pulldown"]
        assert [row["name"] for row in identities.created] == ["Lat Pulldown"]

    def test_library_entry_with_irregular_spacing_is_reused(self, repo, resolver):
        existing = repo.seed_exercises([" Bench\tPress  "])[0]
        program = program_with(rx("Bench Press"))

        identities = resolver.resolve(program)

        assert identities.id_for("Bench Press") == existing["id"]
        assert repo.calls == ["find_exercises_by_names"]
        assert len(repo.exercises) == 1

    def test_new_exercises_are_categorized(self, repo, resolver):
        resolver.resolve(program_with(rx("Lat Pulldown", "Farmer Carry")))
        staged = {row["name"]: row["category"] for row in repo.create_batches[0]}
        assert staged == {"Lat Pulldown": "Back", "Farmer Carry": None}

    def test_nothing_to_create_skips_insert(self, repo, resolver):
        repo.seed_exercises(["Bench Press"])
        resolver.resolve(program_with(rx("Bench Press")))
        assert repo.calls == ["find_exercises_by_names"]

    def test_empty_program(self, repo, resolver):
        identities = resolver.resolve(ParsedProgram(name="Empty", source="Excel Import"))
        assert len(identities) == 0
        assert repo.calls == []

    def test_concurrently_created_name_is_reread(self, repo, resolver):
        repo.created_elsewhere = {"Bench Press"}
        program = program_with(rx("Bench Press"), rx("Back Squat"))

        identities = resolver.resolve(program)

        assert repo.calls == ["find_exercises_by_names", "create_exercises", "find_exercises_by_names"]
        assert repo.lookup_batches[1] == ["bench press"]
        assert identities.id_for("Bench Press") == repo.exercise_id("Bench Press")
        assert len(repo.exercises) == 2

    def test_unresolvable_name_raises(self, resolver, monkeypatch, repo):
        monkeypatch.setattr(repo, "create_exercises", lambda rows: [])
        with pytest.raises(ProgramImportError, match="Bench Press"):
            resolver.resolve(program_with(rx("Bench Press")))
