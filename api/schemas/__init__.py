"""
Pydantic schemas for API requests and responses.

Organized by feature/domain:
- program_import: Program import and preview responses
"""

from api.schemas.program_import import (
    ImportErrorResponse,
    ImportSummary,
    PreviewSummary,
    ProgramImportResponse,
    ProgramPreviewResponse,
)

__all__ = [
    "ImportErrorResponse",
    "ImportSummary",
    "PreviewSummary",
    "ProgramImportResponse",
    "ProgramPreviewResponse",
]
