"""Prompts sent to the text-generation service."""

from ..tables.models import CellValue

MAPPING_PROMPT = """Analyze the following spreadsheet data.

Current headers: {headers}
Sample data (first {sample_count} rows):
{sample_rows}

Target format: {target_description}

Respond with JSON in exactly this shape:
{{
  "columnMapping": {{
    "targetColumn1": "currentColumn1",
    "targetColumn2": "currentColumn2"
  }},
  "suggestions": ["suggestion1", "suggestion2"]
}}

Keys of "columnMapping" are the output column names in the order they should appear.
Values must be copied exactly from the current headers.
Include suggestions about the column mapping and any data transformations.
"""

TEMPLATE_PROMPT = """Create the spreadsheet layout the user asks for.

Request: {description}

Respond with JSON in exactly this shape:
{{
  "headers": ["column1", "column2", "column3"],
  "sampleRow": ["sample1", "sample2", "sample3"]
}}

Use column names and sample values that are common in real-world practice.
"""


def _render_cell(value: CellValue) -> str:
    if value is None:
        return ""
    return str(value)


def render_sample_rows(rows: list[list[CellValue]]) -> str:
    """Render rows as pipe-delimited lines."""
    return "\n".join(" | ".join(_render_cell(value) for value in row) for row in rows)


def build_mapping_prompt(
    headers: list[str], sample_rows: list[list[CellValue]], target_description: str
) -> str:
    """Build the mapping prompt. ``sample_rows`` must already be truncated."""
    return MAPPING_PROMPT.format(
        headers=", ".join(headers),
        sample_count=len(sample_rows),
        sample_rows=render_sample_rows(sample_rows),
        target_description=target_description,
    )


def build_template_prompt(description: str) -> str:
    return TEMPLATE_PROMPT.format(description=description)
