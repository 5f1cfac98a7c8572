"""Unit tests for the catalog statement templates."""

import pytest

from sybase_mcp.errors import ValidationError
from sybase_mcp.tools.query_builder import (
    build_database_schema,
    build_execute,
    build_list_tables,
    build_stored_procedure,
    build_table_definition,
    format_parameter,
)


class TestStoredProcedure:
    """Tests for build_stored_procedure and format_parameter."""

    def test_numeric_and_quoted_text(self):
        """Numbers go bare; apostrophes are doubled inside quotes."""
        assert build_stored_procedure("sp_test", ["42", "O'Brien"]) == "EXEC sp_test 42, 'O''Brien'"

    def test_without_params(self):
        assert build_stored_procedure("sp_who") == "EXEC sp_who"
        assert build_stored_procedure("sp_who", []) == "EXEC sp_who"

    @pytest.mark.parametrize("value", ["0", "-0", "-7", "+3", "3.14", ".5", "10.", "1e3", "2.5E-4", " 42 ", "1e308"])
    def test_numeric_literals_are_bare(self, value):
        assert format_parameter(value) == value

    @pytest.mark.parametrize("value, expected", [
        ("abc", "'abc'"),
        ("", "''"),
        ("''", "''''''"),
        ("12abc", "'12abc'"),
        ("Infinity", "'Infinity'"),
        ("nan", "'nan'"),
        ("0x1F", "'0x1F'"),
        ("1_000", "'1_000'"),
        ("1e999", "'1e999'"),
        ("-2E+400", "'-2E+400'"),
        ("2024-01-31", "'2024-01-31'"),
    ])
    def test_non_numeric_values_are_quoted(self, value, expected):
        assert format_parameter(value) == expected

    def test_overflowing_exponent_is_quoted(self):
        """1e999 matches the literal shape but is not finite, so it is sent as text."""
        assert build_stored_procedure("sp_test", ["1e999", "7"]) == "EXEC sp_test '1e999', 7"

    def test_procedure_name_is_not_validated(self):
        """Only the arguments are escaped; the name is passed through."""
        assert build_stored_procedure("dbo.sp_report", ["x"]) == "EXEC dbo.sp_report 'x'"


class TestTableDefinition:
    """Tests for build_table_definition."""

    def test_interpolates_validated_name(self):
        sql = build_table_definition("orders")
        assert "WHERE o.name = 'orders' AND o.type = 'U'" in sql
        assert "FROM syscolumns c" in sql
        assert "JOIN systypes t ON c.usertype = t.usertype" in sql
        assert "JOIN sysobjects o ON c.id = o.id" in sql

    def test_rejects_injection(self):
        with pytest.raises(ValidationError, match="invalid characters"):
            build_table_definition("orders' OR '1'='1")


class TestCatalogQueries:
    """Tests for the fixed catalog statements."""

    def test_list_tables(self):
        sql = build_list_tables()
        assert "u.name AS owner" in sql
        assert "o.name AS table_name" in sql
        assert "JOIN sysusers u ON o.uid = u.uid" in sql
        assert sql.endswith("ORDER BY owner, table_name")

    def test_database_schema_uses_left_joins(self):
        sql = build_database_schema()
        assert "LEFT JOIN syscolumns c ON o.id = c.id" in sql
        assert "LEFT JOIN systypes t ON c.usertype = t.usertype" in sql
        assert "WHERE o.type IN ('U', 'V', 'P')" in sql
        assert sql.endswith("ORDER BY object_type, object_name, column_name")

    def test_database_schema_columns(self):
        sql = build_database_schema()
        for alias in ("object_name", "object_type", "owner_name", "column_name", "data_type",
                      "column_length", "precision", "scale", "column_status"):
            assert f"AS {alias}" in sql

    def test_execute_passes_select_through(self):
        assert build_execute("SELECT 1") == "SELECT 1"

    def test_execute_rejects_writes(self):
        with pytest.raises(ValidationError):
            build_execute("DELETE FROM orders")
