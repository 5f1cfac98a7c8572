"""Statement templates for the Sybase system catalog.

Each builder returns the final statement text handed to the executor.
"""

from __future__ import annotations

import math
import re
from typing import Sequence

from sybase_mcp.tools.query_validator import validate_identifier, validate_select

# Plain decimal literal: 42, -3.5, .5, 1e3. No hex, no inf/nan, no underscores.
_NUMERIC_RE = re.compile(r"\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?\s*", re.ASCII)

TABLE_DEFINITION_SQL = """
SELECT
    c.name AS column_name,
    t.name AS data_type,
    c.length
FROM syscolumns c
JOIN systypes t ON c.usertype = t.usertype
JOIN sysobjects o ON c.id = o.id
WHERE o.name = '{table_name}' AND o.type = 'U'
""".strip()

LIST_TABLES_SQL = """
SELECT
    u.name AS owner,
    o.name AS table_name
FROM sysobjects o
JOIN sysusers u ON o.uid = u.uid
WHERE o.type = 'U'
ORDER BY owner, table_name
""".strip()

# LEFT JOINs keep views and procedures that have no syscolumns rows
DATABASE_SCHEMA_SQL = """
SELECT
    o.name AS object_name,
    o.type AS object_type,
    u.name AS owner_name,
    c.name AS column_name,
    t.name AS data_type,
    c.length AS column_length,
    c.prec AS precision,
    c.scale AS scale,
    c.status AS column_status
FROM sysobjects o
JOIN sysusers u ON o.uid = u.uid
LEFT JOIN syscolumns c ON o.id = c.id
LEFT JOIN systypes t ON c.usertype = t.usertype
WHERE o.type IN ('U', 'V', 'P')
ORDER BY object_type, object_name, column_name
""".strip()


def build_execute(sql: str) -> str:
    return validate_select(sql)


def build_table_definition(table_name: str) -> str:
    return TABLE_DEFINITION_SQL.format(table_name=validate_identifier(table_name))


def build_list_tables() -> str:
    return LIST_TABLES_SQL


def build_database_schema() -> str:
    return DATABASE_SCHEMA_SQL


def format_parameter(value: str) -> str:
    """Render one procedure argument as a SQL literal.

    Finite numeric strings go through bare; everything else becomes a quoted
    string with embedded single quotes doubled.
    """
    if _NUMERIC_RE.fullmatch(value) and math.isfinite(float(value)):
        return value
    return "'" + value.replace("'", "''") + "'"


def build_stored_procedure(procedure_name: str, params: Sequence[str] | None = None) -> str:
    """Build ``EXEC <name> <arg>, <arg>, ...``.

    The procedure name is used as given; only the arguments are escaped.
    """
    statement = f"EXEC {procedure_name}"
    if params:
        statement += " " + ", ".join(format_parameter(p) for p in params)
    return statement
