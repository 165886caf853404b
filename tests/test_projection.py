"""Tests for the projection engine."""

from sheetshift.tables import Table, project, unresolved_columns


class TestProject:
    """Test re-projection of rows through a mapping."""

    def test_empty_mapping_and_headers(self, staff_table):
        """Test an empty projection keeps one empty row per source row."""
        output = project(staff_table, {}, [])

        assert output.headers == []
        assert output.rows == [[], [], []]

    def test_identity_mapping_round_trips(self, staff_table):
        """Test the identity mapping reproduces the source rows."""
        mapping = {name: name for name in staff_table.headers}

        output = project(staff_table, mapping, staff_table.headers)

        assert output.headers == staff_table.headers
        assert output.rows == staff_table.rows

    def test_unknown_source_column_is_all_none(self, staff_table):
        """Test a target pointing at a missing source column yields None."""
        output = project(staff_table, {"Email": "이메일"}, ["Email"])
        assert output.rows == [[None], [None], [None]]

    def test_target_missing_from_mapping_is_all_none(self, staff_table):
        """Test an output header with no mapping entry yields None."""
        output = project(staff_table, {"이름": "성명"}, ["이름", "비고"])
        assert [row[1] for row in output.rows] == [None, None, None]
        assert [row[0] for row in output.rows] == ["김철수", "이영희", "박민수"]

    def test_end_to_end_example(self):
        """Test the two-column Korean remapping example."""
        source = Table(headers=["성명", "부서"], rows=[["김철수", "개발팀"]])

        output = project(source, {"이름": "성명", "팀": "부서"}, ["이름", "팀"])

        assert output.headers == ["이름", "팀"]
        assert output.rows == [["김철수", "개발팀"]]

    def test_default_output_headers_follow_mapping_order(self, staff_table):
        """Test output column order defaults to mapping key order."""
        output = project(staff_table, {"직위": "직급", "이름": "성명"})

        assert output.headers == ["직위", "이름"]
        assert output.rows[0] == ["대리", "김철수"]

    def test_short_source_rows_give_none(self):
        """Test a source row shorter than the mapped index yields None."""
        source = Table(headers=["a", "b", "c"], rows=[["1", "2", "3"], ["4"]])

        output = project(source, {"C": "c"}, ["C"])

        assert output.rows == [["3"], [None]]

    def test_duplicate_source_headers_use_first(self):
        """Test the first matching source header wins."""
        source = Table(headers=["x", "x"], rows=[["first", "second"]])
        assert project(source, {"out": "x"}).rows == [["first"]]

    def test_matching_is_case_sensitive(self):
        """Test no fuzzy or case-insensitive matching is attempted."""
        source = Table(headers=["Name"], rows=[["Kim"]])
        assert project(source, {"out": "name"}).rows == [[None]]

    def test_source_is_not_mutated(self, staff_table):
        """Test projection leaves the source table unchanged."""
        before = staff_table.model_copy(deep=True)

        output = project(staff_table, {"이름": "성명"})
        output.rows[0][0] = "changed"

        assert staff_table == before

    def test_values_are_not_coerced(self):
        """Test cell values are copied without type conversion."""
        source = Table(headers=["n", "s"], rows=[[1, "1"], [2.5, None]])

        output = project(source, {"S": "s", "N": "n"})

        assert output.rows == [["1", 1], [None, 2.5]]

    def test_sheet_name_is_kept(self, staff_table):
        """Test the output keeps the source sheet name."""
        assert project(staff_table, {}).sheet_name == "직원"


class TestUnresolvedColumns:
    """Test diagnostics for mappings that point nowhere."""

    def test_lists_targets_with_missing_sources(self, staff_table):
        """Test targets whose source header is absent are reported."""
        mapping = {"이름": "성명", "메일": "이메일", "연락처": "전화"}
        assert unresolved_columns(staff_table, mapping) == ["메일", "연락처"]

    def test_all_resolved(self, staff_table):
        """Test a fully valid mapping reports nothing."""
        assert unresolved_columns(staff_table, {"이름": "성명"}) == []

    def test_empty_source_name_is_unresolved(self):
        """Test an empty source name is reported even if a header is blank."""
        source = Table(headers=["", "a"], rows=[["x", 1]])
        mapping = {"x": "", "y": "a"}

        assert unresolved_columns(source, mapping) == ["x"]
        assert project(source, mapping).rows == [[None, 1]]
