"""Data models for in-memory tables."""

from typing import Optional, Union

from pydantic import BaseModel, Field

CellValue = Union[str, int, float, None]


class Table(BaseModel):
    """One spreadsheet sheet: a header row plus data rows.

    Row lengths are not enforced against the header count. Reading past the
    end of a short row yields ``None``.
    """

    headers: list[str] = Field(default_factory=list)
    rows: list[list[CellValue]] = Field(default_factory=list)
    sheet_name: str = "Sheet1"

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def cell(self, row_index: int, column_index: int) -> CellValue:
        """Return the value at the given position, or None past the row's end."""
        row = self.rows[row_index]
        if 0 <= column_index < len(row):
            return row[column_index]
        return None

    def column_index(self, name: str) -> Optional[int]:
        """Return the index of the first header exactly equal to ``name``."""
        for index, header in enumerate(self.headers):
            if header == name:
                return index
        return None

    def sample_rows(self, limit: int = 3) -> list[list[CellValue]]:
        return [list(row) for row in self.rows[: max(limit, 0)]]

    def preview(self, limit: int = 5) -> "TablePreview":
        """Build a short preview of the table for display."""
        shown = self.sample_rows(limit)
        return TablePreview(
            sheet_name=self.sheet_name,
            headers=list(self.headers),
            rows=shown,
            hidden_row_count=max(self.row_count - len(shown), 0),
        )


class TablePreview(BaseModel):
    """The first few rows of a table, plus how many were left out."""

    sheet_name: str
    headers: list[str]
    rows: list[list[CellValue]]
    hidden_row_count: int = 0


class ReadError(Exception):
    """Exception raised when a file cannot be decoded as a supported table format."""

    pass
