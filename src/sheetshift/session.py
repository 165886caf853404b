"""Interactive conversion session: upload, analyze, project, export."""

import logging
from typing import Optional

from .inference import MappingInferenceClient, MappingResult
from .tables import Table, first_sheet, project, read_workbook, unresolved_columns, write_workbook

logger = logging.getLogger(__name__)


class SessionStateError(Exception):
    """Raised when an operation needs state the session does not have yet."""

    pass


class ConversionSession:
    """Holds the current source table, mapping and suggestions.

    Each new result replaces the previous one wholesale. Uploading a new file
    clears any earlier mapping.
    """

    def __init__(self, inference_client: MappingInferenceClient):
        self.inference_client = inference_client
        self.source: Optional[Table] = None
        self.target_description: str = ""
        self.column_mapping: dict[str, str] = {}
        self.suggestions: list[str] = []

    def load_file(self, data: bytes, filename: str) -> Table:
        """Parse an uploaded file and keep its first sheet."""
        self.source = first_sheet(read_workbook(data, filename))
        self.column_mapping = {}
        self.suggestions = []
        return self.source

    def analyze(self, target_description: str) -> Optional[MappingResult]:
        """Request a mapping for the loaded table.

        Returns None without calling the service when there is no table or the
        description is blank.
        """
        self.target_description = target_description
        if self.source is None or not target_description.strip():
            return None

        result = self.inference_client.analyze_mapping(
            self.source.headers, self.source.rows, target_description
        )
        self.column_mapping = dict(result.column_mapping)
        self.suggestions = list(result.suggestions)

        missing = unresolved_columns(self.source, self.column_mapping)
        if missing:
            logger.warning(f"Mapped source columns not found for: {', '.join(missing)}")
        return result

    @property
    def can_export(self) -> bool:
        return self.source is not None and bool(self.column_mapping)

    def build_output(self) -> Table:
        if self.source is None:
            raise SessionStateError("No file has been loaded")
        if not self.column_mapping:
            raise SessionStateError("No column mapping is available")
        return project(self.source, self.column_mapping, list(self.column_mapping))

    def export(self) -> bytes:
        """Project the source table and return it as xlsx bytes."""
        return write_workbook([self.build_output()])

    def reset(self):
        self.source = None
        self.target_description = ""
        self.column_mapping = {}
        self.suggestions = []
