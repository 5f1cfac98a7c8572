import sys
from pathlib import Path

import pytest

from sybase_mcp.config import ClientSettings, ConnectionParameters
from sybase_mcp.tools.executor import SybaseClient
from sybase_mcp.tools.sybase_query import create_sybase_tools

FAKE_CLIENT = Path(__file__).parent / "fake_client.py"


@pytest.fixture
def connection():
    return ConnectionParameters(
        host="db.example.com",
        port="5000",
        database="inventory",
        username="reader",
        password="s3cret",
    )


@pytest.fixture
def make_client(connection):
    """Factory for a SybaseClient backed by tests/fake_client.py in a given mode."""

    def _make(mode: str, timeout: float | None = None) -> SybaseClient:
        settings = ClientSettings(
            command=(sys.executable, str(FAKE_CLIENT), mode),
            timeout=timeout,
        )
        return SybaseClient(connection, settings)

    return _make


class RecordingClient(SybaseClient):
    """SybaseClient that never spawns a process and remembers statements."""

    def __init__(self, connection, output: bytes = b""):
        super().__init__(connection)
        self.output = output
        self.statements: list[str] = []

    async def run(self, statement: str) -> bytes:
        self.statements.append(statement)
        return self.output


@pytest.fixture
def recording_client(connection):
    return RecordingClient(connection, output=b"col_a\tcol_b\n1\tfoo\n")


@pytest.fixture
def recording_tools(recording_client):
    return create_sybase_tools(recording_client)
