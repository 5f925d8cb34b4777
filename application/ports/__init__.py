"""
Repository Interfaces (Ports) for the program importer.

This package defines abstract interfaces that decouple the import use
cases from infrastructure (database). Implementations are provided in
the infrastructure layer.

Architecture follows the Ports & Adapters (Hexagonal) pattern:
- Ports: Abstract interfaces defined here (what the use cases need)
- Adapters: Concrete implementations in infrastructure/ (how it's provided)

Usage:
    from application.ports import ProgramImportRepository

    class ImportService:
        def __init__(self, import_repo: ProgramImportRepository):
            self.import_repo = import_repo
"""

from application.ports.program_import_repository import (
    ProgramGraphWriter,
    ProgramImportRepository,
)

__all__ = [
    "ProgramGraphWriter",
    "ProgramImportRepository",
]
