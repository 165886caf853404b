"""Table model, spreadsheet I/O and projection."""

from .models import CellValue, ReadError, Table, TablePreview
from .projection import project, unresolved_columns
from .reader import first_sheet, read_workbook, read_workbook_file
from .writer import build_workbook, save_workbook, write_workbook

__all__ = [
    "CellValue",
    "ReadError",
    "Table",
    "TablePreview",
    "project",
    "unresolved_columns",
    "first_sheet",
    "read_workbook",
    "read_workbook_file",
    "build_workbook",
    "save_workbook",
    "write_workbook",
]
