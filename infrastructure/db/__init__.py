"""
Infrastructure Database Layer.

This package provides Supabase-backed implementations of the repository interfaces
defined in application.ports. These implementations can be injected into use cases
and routers for clean separation of concerns and testability.

The schema and the import stored procedure live in sql/program_import.sql.

Usage:
    from supabase import create_client
    from infrastructure.db import SupabaseProgramImportRepository

    # Create Supabase client
    client = create_client(SUPABASE_URL, SUPABASE_KEY)

    # Instantiate repository with injected client
    import_repo = SupabaseProgramImportRepository(client)
"""

from infrastructure.db.program_import_repository import (
    StagedProgramGraphWriter,
    SupabaseProgramImportRepository,
)

__all__ = [
    "SupabaseProgramImportRepository",
    "StagedProgramGraphWriter",
]
