"""
Infrastructure Layer for the program importer.

This package contains concrete implementations of the application ports
and the adapters for outside formats:
- db/: Supabase database implementations
- workbook.py: .xlsx decoding with openpyxl
"""

# Re-export database repositories for convenient access
from infrastructure.db import SupabaseProgramImportRepository
from infrastructure.workbook import WorkbookReadError, read_first_sheet

__all__ = [
    "SupabaseProgramImportRepository",
    "WorkbookReadError",
    "read_first_sheet",
]
