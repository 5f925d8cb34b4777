"""
Workbook decoding for program imports.

Turns uploaded .xlsx bytes into the first sheet's name and a plain
row grid (lists of cell values) for the ProgramBuilder. Only the first
sheet is read. Formulas are read as their cached values.
"""

import io
import logging
from typing import Any, List, Tuple

from openpyxl import load_workbook

logger = logging.getLogger(__name__)


class WorkbookReadError(Exception):
    """The upload is not a readable workbook, or it has no sheets."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def read_first_sheet(content: bytes) -> Tuple[str, List[List[Any]]]:
    """
    Decode a workbook and return its first sheet.

    Args:
        content: Raw .xlsx bytes

    Returns:
        (sheet name, rows as lists of cell values)

    Raises:
        WorkbookReadError: If the bytes cannot be opened as a workbook
    """
    if not content:
        raise WorkbookReadError("Uploaded file is empty")

    try:
        wb = load_workbook(io.BytesIO(content), data_only=True)
    except Exception as e:
        logger.warning(f"Failed to open workbook: {e}")
        raise WorkbookReadError(f"Could not read workbook: {e}") from e

    try:
        if not wb.sheetnames:
            raise WorkbookReadError("Workbook has no sheets")
        sheet_name = wb.sheetnames[0]
        ws = wb[sheet_name]
        grid = [list(row) for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()

    logger.info(f"Read sheet '{sheet_name}': {len(grid)} rows")
    return sheet_name, grid
