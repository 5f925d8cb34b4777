"""
Pydantic models for the program import API.

Response models for:
- POST /programs/import: the created program row plus import counts
- POST /programs/import/preview: the parsed tree, without any writes
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from domain.models import ParsedProgram, SkippedRow


class ImportSummary(BaseModel):
    """Counts from one import, with the rows the scan skipped."""
    rows_scanned: int = 0
    blocks: int = 0
    weeks: int = 0
    workouts: int = 0
    template_exercises: int = 0
    exercises_resolved: int = 0
    exercises_created: int = 0
    substitutions: int = 0
    self_substitutions_dropped: int = 0
    rows_skipped: int = 0
    skipped_rows: List[SkippedRow] = Field(default_factory=list)


class ProgramImportResponse(BaseModel):
    """Response for a successful import"""
    message: str = "Program imported successfully"
    program: Dict[str, Any]
    summary: ImportSummary


class ImportErrorResponse(BaseModel):
    """Response for a failed import"""
    error: str
    details: Optional[str] = None


class PreviewSummary(BaseModel):
    """Counts for a parsed-but-not-saved program"""
    sheet_name: Optional[str] = None
    rows_scanned: int = 0
    blocks: int = 0
    weeks: int = 0
    workouts: int = 0
    exercises: int = 0
    rows_skipped: int = 0


class ProgramPreviewResponse(BaseModel):
    """Response for an import preview"""
    program: ParsedProgram
    summary: PreviewSummary
    skipped_rows: List[SkippedRow] = Field(default_factory=list)
