"""Re-project a table's rows through a target-to-source column mapping."""

from typing import Optional

from .models import CellValue, Table


def _resolve_indices(
    source: Table, mapping: dict[str, str], output_headers: list[str]
) -> list[Optional[int]]:
    indices: list[Optional[int]] = []
    for header in output_headers:
        source_name = mapping.get(header)
        if not source_name:
            indices.append(None)
            continue
        indices.append(source.column_index(source_name))
    return indices


def project(
    source: Table,
    mapping: dict[str, str],
    output_headers: Optional[list[str]] = None,
) -> Table:
    """Build a new table whose columns are copied from ``source`` by name.

    Args:
        source: Table to read values from. It is not modified.
        mapping: Target column name -> source column name.
        output_headers: Output column order. Defaults to the mapping's keys in
            insertion order.

    Returns:
        A Table with one row per source row. A column whose target is not in
        the mapping, or whose source header does not exist, is all None.
    """
    if output_headers is None:
        output_headers = list(mapping)

    indices = _resolve_indices(source, mapping, output_headers)

    rows: list[list[CellValue]] = []
    for row_index in range(source.row_count):
        rows.append(
            [
                source.cell(row_index, index) if index is not None else None
                for index in indices
            ]
        )

    return Table(
        headers=list(output_headers),
        rows=rows,
        sheet_name=source.sheet_name,
    )


def unresolved_columns(source: Table, mapping: dict[str, str]) -> list[str]:
    """Return target names whose mapped source column is not in ``source``."""
    return [
        target
        for target, source_name in mapping.items()
        if not source_name or source.column_index(source_name) is None
    ]
