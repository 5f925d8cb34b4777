"""
Unit tests for ImportProgramUseCase.

Tests for:
- End-to-end import against the fake repository
- Result counts and summary
- Failure wrapping into ProgramImportError with nothing committed
"""

import pytest

from application.exceptions import ProgramImportError
from application.use_cases import ImportProgramResult, ImportProgramUseCase
from tests.fakes import (
    FakeProgramImportRepository,
    exercise_row,
    label_row,
    marker_program_grid,
    simple_program_grid,
)

pytestmark = pytest.mark.unit


@pytest.fixture
def repo() -> FakeProgramImportRepository:
    return FakeProgramImportRepository()


@pytest.fixture
def use_case(repo) -> ImportProgramUseCase:
    return ImportProgramUseCase(import_repo=repo)


def run(use_case, grid, **kwargs):
    kwargs.setdefault("name", "Min-Max")
    kwargs.setdefault("source", "Excel Import")
    kwargs.setdefault("sheet_name", "4x Week")
    return use_case.execute(grid, **kwargs)


class TestImportProgram:
    """Successful imports."""

    def test_returns_created_program(self, use_case, repo):
        result = run(use_case, simple_program_grid(), user_id="user-123")

        assert isinstance(result, ImportProgramResult)
        assert result.program["id"] == repo.programs[0]["id"]
        assert result.program["created_by"] == "user-123"
        assert result.program["frequency_per_week"] == 4

    def test_counts(self, use_case):
        result = run(use_case, simple_program_grid())

        assert result.block_count == 1
        assert result.week_count == 2
        assert result.workout_count == 4
        assert result.template_exercise_count == 12
        assert result.exercises_resolved == 9
        assert result.exercises_created == 9
        assert result.substitution_count == 3
        assert result.self_substitutions_dropped == 0

    def test_summary(self, use_case):
        result = run(use_case, marker_program_grid())
        summary = result.summary()

        assert summary["rows_scanned"] == len(marker_program_grid())
        assert summary["weeks"] == 2
        assert summary["rows_skipped"] == 2
        assert [row.reason for row in result.skipped_rows] == ["noise banner", "week-type label"]

    def test_second_import_reuses_exercises(self, use_case, repo):
        run(use_case, simple_program_grid())
        result = run(use_case, simple_program_grid())

        assert result.exercises_created == 0
        assert len(repo.exercises) == 9
        assert len(repo.programs) == 2

    def test_case_variants_create_one_exercise(self, use_case, repo):
        grid = [
            label_row("Upper"),
            exercise_row("Bench Press"),
            exercise_row("bench press"),
            exercise_row("BENCH PRESS"),
        ]
        result = run(use_case, grid)

        assert result.exercises_created == 1
        assert len(repo.exercises) == 1
        assert {t["exercise_id"] for t in repo.template_exercises} == {repo.exercise_id("bench press")}

    def test_parse_has_no_side_effects(self, use_case, repo):
        parsed = use_case.parse(simple_program_grid(), name="P", source="S")
        assert parsed.program.exercise_count == 12
        assert repo.calls == []


class TestImportFailures:
    """Persistence failures abort the whole import."""

    def test_writer_failure_is_wrapped(self, use_case, repo):
        repo.fail_on = "insert_workouts"

        with pytest.raises(ProgramImportError) as exc_info:
            run(use_case, simple_program_grid())

        assert exc_info.value.message == "Failed to import program"
        assert "simulated failure in insert_workouts" in exc_info.value.details
        assert repo.programs == []
        assert repo.template_exercises == []

    def test_commit_failure_propagates(self, use_case, repo):
        repo.fail_commit = True

        with pytest.raises(ProgramImportError, match="Atomic program import failed"):
            run(use_case, simple_program_grid())

        assert repo.programs == []

    def test_exercise_lookup_failure_is_wrapped(self, use_case, repo):
        repo.fail_on = "find_exercises_by_names"

        with pytest.raises(ProgramImportError):
            run(use_case, simple_program_grid())

        assert repo.calls == ["find_exercises_by_names"]
