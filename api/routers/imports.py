"""
Program import router.

This router accepts an uploaded .xlsx workbook describing a multi-week
training program and turns it into a stored program:
- POST /programs/import: parse, resolve exercises, write the program graph
- POST /programs/import/preview: parse only, return the tree and skipped rows

Upload shape problems (wrong content type, no boundary, no file part,
unreadable workbook) are rejected with 400 before parsing starts.
"""

import logging
from dataclasses import dataclass
from pathlib import PurePath
from typing import Any, List, Optional, Tuple

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool
from starlette.datastructures import UploadFile

from api.deps import get_current_user, get_import_program_use_case, get_settings
from api.schemas.program_import import (
    ImportErrorResponse,
    ImportSummary,
    PreviewSummary,
    ProgramImportResponse,
    ProgramPreviewResponse,
)
from application.exceptions import ProgramImportError
from application.use_cases import ImportProgramUseCase
from backend.settings import Settings
from domain.importer import ProgramBuilder
from infrastructure.workbook import WorkbookReadError, read_first_sheet

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/programs",
    tags=["Program Import"],
)


# =============================================================================
# Upload Helpers
# =============================================================================


@dataclass
class WorkbookUpload:
    """File part and form fields pulled from a multipart request."""

    content: bytes
    filename: Optional[str] = None
    name: Optional[str] = None
    source: Optional[str] = None


def _form_text(value: Any) -> Optional[str]:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


async def _read_upload(request: Request, settings: Settings) -> WorkbookUpload:
    """
    Pull the workbook file part out of a multipart request.

    Raises:
        HTTPException: 400 for a malformed upload, 413 for an oversized one
    """
    content_type = request.headers.get("content-type", "")
    if not content_type.lower().startswith("multipart/form-data"):
        raise HTTPException(status_code=400, detail="Expected multipart/form-data")
    if "boundary=" not in content_type:
        raise HTTPException(status_code=400, detail="Could not find boundary in content-type")

    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"Upload exceeds {settings.max_upload_bytes} bytes",
        )

    form = await request.form()
    upload = form.get("file")
    if not isinstance(upload, UploadFile):
        # Accept a file part under any field name
        upload = next((value for value in form.values() if isinstance(value, UploadFile)), None)
    if upload is None:
        raise HTTPException(status_code=400, detail="No file found in request")

    content = await upload.read()
    if len(content) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=413,
            detail=f"Upload exceeds {settings.max_upload_bytes} bytes",
        )

    return WorkbookUpload(
        content=content,
        filename=upload.filename,
        name=_form_text(form.get("name")),
        source=_form_text(form.get("source")),
    )


async def _read_workbook(upload: WorkbookUpload) -> Tuple[str, List[List[Any]]]:
    try:
        return await run_in_threadpool(read_first_sheet, upload.content)
    except WorkbookReadError as e:
        raise HTTPException(status_code=400, detail=e.message)


def program_name_for(upload: WorkbookUpload, default: str) -> str:
    """Name field, else the filename without its extension, else ``default``."""
    if upload.name:
        return upload.name
    if upload.filename:
        stem = PurePath(upload.filename).stem.strip()
        if stem:
            return stem
    return default


# =============================================================================
# Endpoints
# =============================================================================


@router.post(
    "/import",
    status_code=201,
    response_model=ProgramImportResponse,
    responses={500: {"model": ImportErrorResponse}},
    summary="Import a program from a spreadsheet",
)
async def import_program(
    request: Request,
    user_id: str = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    use_case: ImportProgramUseCase = Depends(get_import_program_use_case),
):
    """
    Import a training program from an uploaded .xlsx workbook.

    Multipart fields:
    - file: The workbook (only the first sheet is read)
    - name: Optional program name (defaults to the filename)
    - source: Optional source label

    Returns the created program row with import counts and the rows
    that could not be recognized.
    """
    upload = await _read_upload(request, settings)
    sheet_name, grid = await _read_workbook(upload)
    name = program_name_for(upload, settings.import_default_program_name)

    logger.info(f"User {user_id} importing '{name}' from sheet '{sheet_name}' ({len(grid)} rows)")

    try:
        result = await run_in_threadpool(
            use_case.execute,
            grid,
            name=name,
            source=upload.source or settings.import_source_label,
            sheet_name=sheet_name,
            user_id=user_id,
            default_frequency=settings.import_default_frequency,
        )
    except ProgramImportError as e:
        return JSONResponse(
            status_code=500,
            content=ImportErrorResponse(
                error="Failed to import program",
                details=e.details,
            ).model_dump(),
        )

    return ProgramImportResponse(
        program=result.program,
        summary=ImportSummary(**result.summary(), skipped_rows=result.skipped_rows),
    )


@router.post(
    "/import/preview",
    response_model=ProgramPreviewResponse,
    summary="Preview a spreadsheet import",
)
async def preview_import(
    request: Request,
    user_id: str = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
):
    """
    Parse an uploaded workbook without saving anything.

    Same upload contract as POST /programs/import. Returns the parsed
    program tree, counts, and the skipped rows with their reasons.
    """
    upload = await _read_upload(request, settings)
    sheet_name, grid = await _read_workbook(upload)

    parsed = ProgramBuilder().build(
        grid,
        name=program_name_for(upload, settings.import_default_program_name),
        source=upload.source or settings.import_source_label,
        sheet_name=sheet_name,
        default_frequency=settings.import_default_frequency,
    )
    program = parsed.program

    return ProgramPreviewResponse(
        program=program,
        summary=PreviewSummary(
            sheet_name=sheet_name,
            rows_scanned=parsed.rows_scanned,
            blocks=len(program.blocks),
            weeks=program.week_count,
            workouts=program.workout_count,
            exercises=program.exercise_count,
            rows_skipped=len(parsed.skipped_rows),
        ),
        skipped_rows=parsed.skipped_rows,
    )
