"""Read uploaded spreadsheet files into tables."""

import csv
import io
import logging
import re
import struct
import zipfile
from datetime import date, datetime, time
from pathlib import Path
from typing import Any, Iterable
from xml.etree.ElementTree import ParseError

import xlrd
from xlrd.compdoc import CompDocError
from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from .models import CellValue, ReadError, Table

logger = logging.getLogger(__name__)

EXCEL_EXTENSIONS = {".xlsx", ".xlsm"}
LEGACY_EXCEL_EXTENSIONS = {".xls"}
DELIMITED_EXTENSIONS = {".csv", ".tsv", ".txt"}
SUPPORTED_EXTENSIONS = EXCEL_EXTENSIONS | LEGACY_EXCEL_EXTENSIONS | DELIMITED_EXTENSIONS

TEXT_ENCODINGS = ("utf-8-sig", "cp949")

_INT_PATTERN = re.compile(r"^-?(0|[1-9]\d*)$")
_FLOAT_PATTERN = re.compile(r"^-?(0|[1-9]\d*)?\.\d+([eE][-+]?\d+)?$|^-?(0|[1-9]\d*)[eE][-+]?\d+$")


def _normalize_cell(value: Any) -> CellValue:
    """Convert a raw cell value to str, int, float or None."""
    if value is None:
        return None
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, (int, float, str)):
        return value
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    return str(value)


def _header_text(value: CellValue) -> str:
    if value is None:
        return ""
    return str(value)


def _strip_trailing_empty(rows: list[list[CellValue]]) -> list[list[CellValue]]:
    end = len(rows)
    while end > 0 and all(value is None or value == "" for value in rows[end - 1]):
        end -= 1
    return rows[:end]


def _build_table(raw_rows: Iterable[list[CellValue]], sheet_name: str) -> Table:
    rows = _strip_trailing_empty([list(row) for row in raw_rows])
    if not rows:
        return Table(headers=[], rows=[], sheet_name=sheet_name)
    return Table(
        headers=[_header_text(value) for value in rows[0]],
        rows=rows[1:],
        sheet_name=sheet_name,
    )


def _read_excel(data: bytes) -> list[Table]:
    workbook = load_workbook(io.BytesIO(data), read_only=True, data_only=True)
    try:
        tables = []
        for worksheet in workbook.worksheets:
            raw_rows = (
                [_normalize_cell(value) for value in row]
                for row in worksheet.iter_rows(values_only=True)
            )
            tables.append(_build_table(raw_rows, worksheet.title))
        return tables
    finally:
        workbook.close()


def _xls_cell(cell: xlrd.sheet.Cell, datemode: int) -> CellValue:
    if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK, xlrd.XL_CELL_ERROR):
        return None
    if cell.ctype == xlrd.XL_CELL_NUMBER:
        # xlrd reports every number as float
        if float(cell.value).is_integer():
            return int(cell.value)
        return cell.value
    if cell.ctype == xlrd.XL_CELL_DATE:
        return xlrd.xldate.xldate_as_datetime(cell.value, datemode).isoformat()
    if cell.ctype == xlrd.XL_CELL_BOOLEAN:
        return "TRUE" if cell.value else "FALSE"
    return _normalize_cell(cell.value)


def _read_legacy_excel(data: bytes) -> list[Table]:
    book = xlrd.open_workbook(file_contents=data)
    tables = []
    for sheet in book.sheets():
        raw_rows = (
            [_xls_cell(cell, book.datemode) for cell in sheet.row(index)]
            for index in range(sheet.nrows)
        )
        tables.append(_build_table(raw_rows, sheet.name))
    return tables


def _decode_text(data: bytes) -> str:
    for encoding in TEXT_ENCODINGS:
        try:
            return data.decode(encoding)
        except UnicodeDecodeError:
            continue
    raise ReadError(
        f"Could not decode text file with any of: {', '.join(TEXT_ENCODINGS)}"
    )


def _coerce_text(value: str) -> CellValue:
    """Type a delimited-text cell the way spreadsheet readers do."""
    stripped = value.strip()
    if stripped == "":
        return None
    if _INT_PATTERN.match(stripped):
        return int(stripped)
    if _FLOAT_PATTERN.match(stripped):
        return float(stripped)
    return value


def _read_delimited(data: bytes, sheet_name: str, delimiter: str = None) -> list[Table]:
    text = _decode_text(data)
    if delimiter is None:
        try:
            delimiter = csv.Sniffer().sniff(text[:4096], delimiters=",;\t|").delimiter
        except csv.Error:
            delimiter = ","
    reader = csv.reader(io.StringIO(text, newline=""), delimiter=delimiter)
    # Header cells stay as written; only data rows get numeric typing
    raw_rows = (
        list(row) if index == 0 else [_coerce_text(value) for value in row]
        for index, row in enumerate(reader)
    )
    return [_build_table(raw_rows, sheet_name)]


def read_workbook(data: bytes, filename: str) -> list[Table]:
    """Parse spreadsheet bytes into one Table per sheet, in file order.

    Args:
        data: Entire file contents.
        filename: Original file name; its extension selects the format.

    Returns:
        List of Table, one per sheet. Delimited text yields a single sheet
        named after the file stem.

    Raises:
        ReadError: If the extension is unsupported or the bytes cannot be
            decoded as that format.
    """
    path = Path(filename)
    extension = path.suffix.lower()

    if extension not in SUPPORTED_EXTENSIONS:
        raise ReadError(
            f"Unsupported file type '{extension or filename}'. "
            f"Supported: {', '.join(sorted(SUPPORTED_EXTENSIONS))}"
        )

    try:
        if extension in EXCEL_EXTENSIONS:
            tables = _read_excel(data)
        elif extension in LEGACY_EXCEL_EXTENSIONS:
            tables = _read_legacy_excel(data)
        elif extension == ".tsv":
            tables = _read_delimited(data, path.stem, delimiter="\t")
        else:
            tables = _read_delimited(data, path.stem)
    except ReadError:
        raise
    except (
        zipfile.BadZipFile,
        InvalidFileException,
        xlrd.XLRDError,
        CompDocError,
        ParseError,
        SyntaxError,  # lxml XMLSyntaxError
        struct.error,
        csv.Error,
        EOFError,
        IndexError,
        KeyError,
        ValueError,
        OSError,
    ) as e:
        logger.error(f"Failed to read '{filename}': {e}", exc_info=True)
        raise ReadError(f"Could not read '{filename}': {e}") from e

    logger.info(f"Read {len(tables)} sheet(s) from '{filename}'")
    return tables


def read_workbook_file(path) -> list[Table]:
    """Read a spreadsheet from disk."""
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ReadError(f"Could not open '{path}': {e}") from e
    return read_workbook(data, path.name)


def first_sheet(tables: list[Table]) -> Table:
    """Return the sheet used downstream. Only sheet index 0 is kept."""
    if not tables:
        raise ReadError("Workbook contains no sheets")
    if len(tables) > 1:
        logger.info(
            f"Using first sheet '{tables[0].sheet_name}', "
            f"ignoring {len(tables) - 1} other sheet(s)"
        )
    return tables[0]
