"""Sybase MCP Server - thin wrapper around sybase_mcp/tools/sybase_query.py.

Run standalone:  python run_server.py   (or the `sybase-mcp` console script)
External use:    Claude Desktop, Cursor, Gemini CLI or any MCP client via stdio

Core logic lives in sybase_mcp/tools/sybase_query.py (single source of truth).
Tool and argument names are camelCase because that is the published surface.
"""

from __future__ import annotations

import logging
import os
import sys

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP
from mcp.types import CallToolResult

from sybase_mcp.config import Settings, load_settings
from sybase_mcp.errors import ConfigurationError
from sybase_mcp.tools.executor import SybaseClient
from sybase_mcp.tools.sybase_query import SYBASE_TOOLS_METADATA, create_sybase_tools, get_tool

logger = logging.getLogger(__name__)

SERVER_NAME = "Sybase Query"
TRANSPORTS = ("stdio", "sse", "streamable-http")


def _describe(name: str) -> str:
    return SYBASE_TOOLS_METADATA[name]["description"]


def create_server(settings: Settings) -> FastMCP:
    """Create the FastMCP server with the five Sybase tools registered."""
    mcp = FastMCP(SERVER_NAME)
    client = SybaseClient(settings.connection, settings.client)
    tools = create_sybase_tools(client)

    _execute = get_tool(tools, "executeQuery")
    _definition = get_tool(tools, "getTableDefinition")
    _list_tables = get_tool(tools, "listTablesBySchema")
    _schema = get_tool(tools, "getDatabaseSchema")
    _procedure = get_tool(tools, "executeStoredProcedure")

    @mcp.tool(name="executeQuery", description=_describe("executeQuery"))
    async def execute_query(sql: str) -> CallToolResult:
        return CallToolResult.model_validate(await _execute.ainvoke({"sql": sql}))

    @mcp.tool(name="getTableDefinition", description=_describe("getTableDefinition"))
    async def get_table_definition(tableName: str) -> CallToolResult:  # noqa: N803
        return CallToolResult.model_validate(
            await _definition.ainvoke({"table_name": tableName})
        )

    @mcp.tool(name="listTablesBySchema", description=_describe("listTablesBySchema"))
    async def list_tables_by_schema() -> CallToolResult:
        return CallToolResult.model_validate(await _list_tables.ainvoke({}))

    @mcp.tool(name="getDatabaseSchema", description=_describe("getDatabaseSchema"))
    async def get_database_schema() -> CallToolResult:
        return CallToolResult.model_validate(await _schema.ainvoke({}))

    @mcp.tool(name="executeStoredProcedure", description=_describe("executeStoredProcedure"))
    async def execute_stored_procedure(
        procedureName: str, params: list[str] | None = None  # noqa: N803
    ) -> CallToolResult:
        return CallToolResult.model_validate(
            await _procedure.ainvoke({"procedure_name": procedureName, "params": params})
        )

    return mcp


def configure_logging(level: str | None = None) -> None:
    # stdout carries the stdio transport, so logs go to stderr
    logging.basicConfig(
        level=(level or os.getenv("LOG_LEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main() -> None:
    """Load configuration and serve until the client disconnects."""
    load_dotenv()
    configure_logging()

    try:
        settings = load_settings()
    except ConfigurationError as e:
        logger.error("Error: %s", e)
        sys.exit(1)

    transport = os.getenv("MCP_TRANSPORT", "stdio").lower()
    if transport not in TRANSPORTS:
        logger.error("Error: unsupported MCP_TRANSPORT %r (expected one of %s)",
                     transport, ", ".join(TRANSPORTS))
        sys.exit(1)

    mcp = create_server(settings)
    logger.info("%s server running on %s (%s:%s/%s)", SERVER_NAME, transport,
                settings.connection.host, settings.connection.port,
                settings.connection.database)
    mcp.run(transport=transport)


if __name__ == "__main__":
    main()
