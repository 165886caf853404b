"""Write tables out as an xlsx workbook."""

import io
import logging
import re
from pathlib import Path

from openpyxl import Workbook

from .models import Table

logger = logging.getLogger(__name__)

MAX_SHEET_TITLE = 31
_INVALID_TITLE_CHARS = re.compile(r"[\[\]:*?/\\]")


def sanitize_sheet_title(title: str, index: int, used: set[str]) -> str:
    """Make a sheet title that Excel accepts and that is unique in the workbook."""
    cleaned = _INVALID_TITLE_CHARS.sub("_", title or "").strip("'").strip()
    if not cleaned:
        cleaned = f"Sheet{index + 1}"
    cleaned = cleaned[:MAX_SHEET_TITLE]

    candidate = cleaned
    counter = 2
    while candidate.lower() in used:
        suffix = f" ({counter})"
        candidate = cleaned[: MAX_SHEET_TITLE - len(suffix)] + suffix
        counter += 1
    used.add(candidate.lower())
    return candidate


def _write_row(worksheet, row_index: int, values):
    """Write values as literal cells. Strings starting with '=' stay strings."""
    for column_index, value in enumerate(values, start=1):
        cell = worksheet.cell(row=row_index, column=column_index, value=value)
        if cell.data_type == "f":
            cell.data_type = "s"


def build_workbook(tables: list[Table]) -> Workbook:
    """Render each table as one sheet: header row followed by data rows."""
    workbook = Workbook()
    workbook.remove(workbook.active)

    used_titles: set[str] = set()
    for index, table in enumerate(tables):
        worksheet = workbook.create_sheet(
            title=sanitize_sheet_title(table.sheet_name, index, used_titles)
        )
        _write_row(worksheet, 1, table.headers)
        for row_index, row in enumerate(table.rows, start=2):
            _write_row(worksheet, row_index, row)

    if not tables:
        workbook.create_sheet(title="Sheet1")

    return workbook


def write_workbook(tables: list[Table]) -> bytes:
    """Serialize tables into xlsx bytes."""
    buffer = io.BytesIO()
    build_workbook(tables).save(buffer)
    return buffer.getvalue()


def save_workbook(tables: list[Table], path) -> Path:
    """Write tables to an xlsx file on disk and return its path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(write_workbook(tables))
    logger.info(f"Wrote {len(tables)} sheet(s) to {path}")
    return path
