#!/usr/bin/env python3
"""
Preview (or run) a spreadsheet program import from the command line.

Parses the first sheet of a workbook and prints the program tree with
per-level counts and the rows that were skipped, without touching the
database. With --commit the program is also written to Supabase.

Usage:
    python scripts/preview_import.py program.xlsx [--name NAME] [--json]
    python scripts/preview_import.py program.xlsx --commit --user-id USER_ID

Options:
    --name NAME      Program name (defaults to the filename)
    --json           Print the parsed tree as JSON
    --verbose        Log every skipped row
    --commit         Write the program to Supabase
    --user-id ID     Creator id stored on the program (with --commit)
"""
import os
import sys
import argparse
import logging
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from supabase import create_client
from application.exceptions import ProgramImportError
from application.use_cases import ImportProgramUseCase
from domain.importer import ParseResult, ProgramBuilder
from infrastructure.db import SupabaseProgramImportRepository
from infrastructure.workbook import WorkbookReadError, read_first_sheet

SOURCE_LABEL = "Excel Import"


def get_supabase_client():
    """Create Supabase client with service role key."""
    url = os.environ.get("SUPABASE_URL")
    key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY")

    if not url or not key:
        print("ERROR: SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
        sys.exit(1)

    return create_client(url, key)


def print_tree(result: ParseResult) -> None:
    """Print the parsed program as an indented outline."""
    program = result.program
    print(f"{program.name} ({program.frequency_per_week}x/week, source: {program.source})")
    for block in program.blocks:
        print(f"  Block {block.block_number}: {block.name}")
        for week in block.weeks:
            print(f"    {week.name} [{week.week_type.value}]")
            for workout in week.workouts:
                print(f"      Day {workout.day_number}: {workout.name}")
                for ex in workout.exercises:
                    rir = "-" if ex.rir is None else ex.rir
                    subs = f"  subs: {', '.join(ex.substitutions)}" if ex.substitutions else ""
                    print(
                        f"        {ex.name}: {ex.warmup_sets}+{ex.working_sets} x "
                        f"{ex.rep_range_min}-{ex.rep_range_max} @RIR {rir}, "
                        f"rest {ex.rest_seconds}s{subs}"
                    )

    print()
    print(
        f"{result.rows_scanned} rows scanned: {len(program.blocks)} blocks, "
        f"{program.week_count} weeks, {program.workout_count} workouts, "
        f"{program.exercise_count} exercises"
    )
    if result.skipped_rows:
        print(f"{len(result.skipped_rows)} rows skipped:")
        for skipped in result.skipped_rows:
            print(f"  row {skipped.row_index + 1}: {skipped.reason} {skipped.text!r}")


def main():
    parser = argparse.ArgumentParser(description="Preview a spreadsheet program import")
    parser.add_argument("workbook", help="Path to the .xlsx file")
    parser.add_argument("--name", help="Program name (defaults to the filename)")
    parser.add_argument("--json", action="store_true", help="Print the parsed tree as JSON")
    parser.add_argument("--verbose", action="store_true", help="Log every skipped row")
    parser.add_argument("--commit", action="store_true", help="Write the program to Supabase")
    parser.add_argument("--user-id", help="Creator id stored on the program")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    path = Path(args.workbook)
    if not path.is_file():
        print(f"ERROR: {path} not found")
        sys.exit(1)

    try:
        sheet_name, grid = read_first_sheet(path.read_bytes())
    except WorkbookReadError as e:
        print(f"ERROR: {e.message}")
        sys.exit(1)

    name = args.name or path.stem

    if args.commit:
        use_case = ImportProgramUseCase(SupabaseProgramImportRepository(get_supabase_client()))
        try:
            result = use_case.execute(
                grid,
                name=name,
                source=SOURCE_LABEL,
                sheet_name=sheet_name,
                user_id=args.user_id,
            )
        except ProgramImportError as e:
            print(f"ERROR: Failed to import program: {e.details}")
            sys.exit(1)
        print(f"Imported program {result.program['id']}")
        for key, value in result.summary().items():
            print(f"  {key}: {value}")
        return

    result = ProgramBuilder().build(grid, name=name, source=SOURCE_LABEL, sheet_name=sheet_name)
    if args.json:
        print(result.program.model_dump_json(indent=2))
    else:
        print_tree(result)


if __name__ == "__main__":
    main()
