"""Live checks against a real Sybase server through the configured client.

Skipped unless SYBASE_* variables are set (a .env file is honoured) and
SYBASE_INTEGRATION=1.
"""

import json
import os

import pytest
from dotenv import load_dotenv

from sybase_mcp.config import load_settings
from sybase_mcp.tools.executor import SybaseClient
from sybase_mcp.tools.sybase_query import create_sybase_tools, get_tool

load_dotenv()

pytestmark = pytest.mark.skipif(
    os.getenv("SYBASE_INTEGRATION") != "1",
    reason="SYBASE_INTEGRATION=1 not set",
)


@pytest.fixture
def tools():
    settings = load_settings()
    return create_sybase_tools(SybaseClient(settings.connection, settings.client))


def records_of(result):
    assert "isError" not in result, result["content"][0]["text"]
    records = json.loads(result["content"][0]["text"])
    assert isinstance(records, list)
    return records


@pytest.mark.asyncio
async def test_list_tables_by_schema(tools):
    records_of(await get_tool(tools, "listTablesBySchema").ainvoke({}))


@pytest.mark.asyncio
async def test_table_definition_of_catalog_table(tools):
    records_of(await get_tool(tools, "getTableDefinition").ainvoke({"table_name": "sysobjects"}))


@pytest.mark.asyncio
async def test_simple_select(tools):
    records = records_of(await get_tool(tools, "executeQuery").ainvoke({"sql": "SELECT 1 as test_col"}))
    assert records[0]["test_col"] == "1"


@pytest.mark.asyncio
async def test_database_schema_not_empty(tools):
    assert records_of(await get_tool(tools, "getDatabaseSchema").ainvoke({}))


@pytest.mark.asyncio
async def test_sp_who(tools):
    result = await get_tool(tools, "executeStoredProcedure").ainvoke({"procedure_name": "sp_who"})
    assert "isError" not in result
