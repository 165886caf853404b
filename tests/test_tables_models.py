"""Tests for the Table model."""

from sheetshift.tables import Table


class TestTable:
    """Test Table accessors."""

    def test_cell_past_short_row_is_none(self):
        """Test that reading past a short row yields None."""
        table = Table(headers=["a", "b", "c"], rows=[["x"]])

        assert table.cell(0, 0) == "x"
        assert table.cell(0, 2) is None

    def test_long_rows_are_tolerated(self):
        """Test rows longer than the headers are kept as-is."""
        table = Table(headers=["a"], rows=[["x", "y", "z"]])
        assert table.rows[0] == ["x", "y", "z"]
        assert table.cell(0, 2) == "z"

    def test_column_index_returns_first_match(self):
        """Test duplicate headers resolve to the first occurrence."""
        table = Table(headers=["id", "name", "name"], rows=[])
        assert table.column_index("name") == 1

    def test_column_index_is_case_sensitive(self):
        """Test lookup uses exact string equality."""
        table = Table(headers=["Name"], rows=[])
        assert table.column_index("name") is None
        assert table.column_index("Name") == 0

    def test_sample_rows_truncates(self):
        """Test sample rows are limited and copied."""
        table = Table(headers=["n"], rows=[[i] for i in range(10)])

        sample = table.sample_rows(3)

        assert sample == [[0], [1], [2]]
        sample[0][0] = 99
        assert table.rows[0][0] == 0

    def test_cell_types_are_preserved(self):
        """Test strings, ints, floats and None survive validation."""
        table = Table(headers=["a", "b", "c", "d"], rows=[["x", 1, 2.5, None]])

        row = table.rows[0]
        assert row == ["x", 1, 2.5, None]
        assert isinstance(row[1], int)
        assert isinstance(row[2], float)

    def test_preview_counts_hidden_rows(self):
        """Test the preview reports how many rows were left out."""
        table = Table(headers=["n"], rows=[[i] for i in range(8)], sheet_name="S")

        preview = table.preview(5)

        assert preview.sheet_name == "S"
        assert len(preview.rows) == 5
        assert preview.hidden_row_count == 3

    def test_preview_of_small_table(self):
        """Test a table shorter than the preview limit hides nothing."""
        table = Table(headers=["n"], rows=[[1]])
        assert table.preview(5).hidden_row_count == 0
