"""Data models for mapping and template inference."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..tables.models import Table


class MappingPayload(BaseModel):
    """Expected JSON shape of a mapping response."""

    model_config = ConfigDict(populate_by_name=True)

    column_mapping: dict[str, str] = Field(alias="columnMapping")
    suggestions: list[str] = Field(default_factory=list)


class TemplatePayload(BaseModel):
    """Expected JSON shape of a template response."""

    model_config = ConfigDict(populate_by_name=True)

    headers: list[str]
    sample_row: list[str] = Field(default_factory=list, alias="sampleRow")


class MappingResult(BaseModel):
    """Result of a mapping analysis. Never raised; failures are described in suggestions."""

    column_mapping: dict[str, str] = Field(default_factory=dict)
    suggestions: list[str] = Field(default_factory=list)
    error: Optional[str] = None  # failure class name when degraded

    @property
    def output_headers(self) -> list[str]:
        """Output column order follows the mapping's key order."""
        return list(self.column_mapping)

    @classmethod
    def failed(cls, error: Exception) -> "MappingResult":
        return cls(column_mapping={}, suggestions=[str(error)], error=type(error).__name__)


class TemplateResult(BaseModel):
    """Proposed header set and one example row for a blank target layout."""

    headers: list[str] = Field(default_factory=list)
    sample_row: list[str] = Field(default_factory=list)
    error: Optional[str] = None  # human-readable message when degraded

    def to_table(self, sheet_name: str = "Template") -> Table:
        rows = [list(self.sample_row)] if self.sample_row else []
        return Table(headers=list(self.headers), rows=rows, sheet_name=sheet_name)
