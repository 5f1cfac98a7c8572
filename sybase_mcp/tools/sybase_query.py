"""LangChain tool wrappers for the Sybase inspection operations.

Single source of truth: the MCP server imports from here.

Every tool returns the same result shape as an MCP tool call:
    {"content": [{"type": "text", "text": "<JSON array of records>"}]}
or, on any failure,
    {"isError": True, "content": [{"type": "text", "text": "Error: <message>"}]}
"""

from __future__ import annotations

import json
import logging
from typing import Any, Callable

from langchain_core.tools import tool

from sybase_mcp.errors import SybaseToolError
from sybase_mcp.tools.executor import SybaseClient
from sybase_mcp.tools.query_builder import (
    build_database_schema,
    build_execute,
    build_list_tables,
    build_stored_procedure,
    build_table_definition,
)
from sybase_mcp.tools.tabular import decode_records

logger = logging.getLogger(__name__)

SYBASE_TOOLS_METADATA: dict[str, dict[str, Any]] = {
    "executeQuery": {
        "description": "Execute a read-only SQL SELECT query in Sybase.",
        "category": "query",
        "input": ["sql"],
    },
    "getTableDefinition": {
        "description": "Get the column definitions (column_name, data_type, length) of a Sybase user table. The name must match ^[A-Za-z0-9_]+$.",
        "category": "catalog",
        "input": ["tableName"],
    },
    "listTablesBySchema": {
        "description": "List the user tables in Sybase as (owner, table_name) pairs.",
        "category": "catalog",
        "input": [],
    },
    "getDatabaseSchema": {
        "description": "Get the full database schema: tables, views and stored procedures with their columns.",
        "category": "catalog",
        "input": [],
    },
    "executeStoredProcedure": {
        "description": "Execute a stored procedure in Sybase with optional string parameters.",
        "category": "query",
        "input": ["procedureName", "params"],
    },
}


def success_result(text: str) -> dict[str, Any]:
    return {"content": [{"type": "text", "text": text}]}


def error_result(message: str) -> dict[str, Any]:
    return {"isError": True, "content": [{"type": "text", "text": f"Error: {message}"}]}


async def run_operation(
    client: SybaseClient, name: str, build: Callable[[], str]
) -> dict[str, Any]:
    """Build, execute and decode one statement, folding failures into a result."""
    try:
        statement = build()
        logger.debug("%s statement: %s", name, statement)
        raw = await client.run(statement)
        records = decode_records(raw, client.settings.encoding)
    except SybaseToolError as e:
        logger.warning("%s failed: %s", name, e)
        return error_result(str(e))
    except Exception as e:
        logger.exception("%s failed unexpectedly", name)
        return error_result(f"{type(e).__name__}: {e}")

    logger.info("%s returned %d records", name, len(records))
    return success_result(json.dumps(records, ensure_ascii=False))


def create_sybase_tools(client: SybaseClient) -> list[Any]:
    """Create the Sybase tools bound to one client.

    Args:
        client: SybaseClient used for every call.

    Returns:
        List of LangChain tools, in registration order.
    """

    @tool("executeQuery")
    async def execute_query(sql: str) -> dict[str, Any]:
        """Execute a read-only SQL query against Sybase.

        Only statements starting with SELECT are accepted. Queries containing
        insert, update, delete, drop, alter or a semicolon anywhere in the
        text are rejected.

        Args:
            sql: SQL SELECT statement to execute.
        """
        return await run_operation(client, "executeQuery", lambda: build_execute(sql))

    @tool("getTableDefinition")
    async def get_table_definition(table_name: str) -> dict[str, Any]:
        """Get the column definitions (column_name, data_type, length) of a user table.

        Args:
            table_name: Table name; letters, digits and underscores only.
        """
        return await run_operation(
            client, "getTableDefinition", lambda: build_table_definition(table_name)
        )

    @tool("listTablesBySchema")
    async def list_tables_by_schema() -> dict[str, Any]:
        """List user tables as (owner, table_name) pairs, ordered by owner then name."""
        return await run_operation(client, "listTablesBySchema", build_list_tables)

    @tool("getDatabaseSchema")
    async def get_database_schema() -> dict[str, Any]:
        """Get the full schema: tables, views and stored procedures with their columns.

        Columns: object_name, object_type, owner_name, column_name, data_type,
        column_length, precision, scale, column_status. Views and procedures
        without columns appear once, with "null" in the column fields.
        """
        return await run_operation(client, "getDatabaseSchema", build_database_schema)

    @tool("executeStoredProcedure")
    async def execute_stored_procedure(
        procedure_name: str, params: list[str] | None = None
    ) -> dict[str, Any]:
        """Execute a stored procedure in Sybase.

        Numeric arguments are passed as-is; all others are sent as quoted
        strings.

        Args:
            procedure_name: Name of the stored procedure.
            params: Optional list of arguments, in order.
        """
        return await run_operation(
            client,
            "executeStoredProcedure",
            lambda: build_stored_procedure(procedure_name, params),
        )

    return [
        execute_query,
        get_table_definition,
        list_tables_by_schema,
        get_database_schema,
        execute_stored_procedure,
    ]


def get_tool(tools: list[Any], name: str) -> Any:
    for t in tools:
        if t.name == name:
            return t
    raise KeyError(name)
