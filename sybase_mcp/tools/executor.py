"""Runs one statement through the external database client.

Every call spawns a fresh client process with the connection parameters as
positional arguments and the statement base64-encoded as the last argument,
so quotes, newlines and whitespace survive the argv boundary untouched.
stdout and stderr are buffered in full; result sets are catalog-sized.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from dataclasses import dataclass

from sybase_mcp.config import ClientSettings, ConnectionParameters
from sybase_mcp.errors import ExecutionError, QueryTimeoutError

logger = logging.getLogger(__name__)

UNKNOWN_CLIENT_ERROR = "Unknown error while running the database client."


@dataclass
class SubprocessResult:
    exit_code: int
    stdout: bytes
    stderr: bytes


def encode_statement(statement: str) -> str:
    return base64.b64encode(statement.encode("utf-8")).decode("ascii")


class SybaseClient:
    """Launches the external client once per statement.

    Holds only immutable settings, so one instance can serve any number of
    concurrent calls.
    """

    def __init__(self, connection: ConnectionParameters, settings: ClientSettings | None = None):
        self.connection = connection
        self.settings = settings or ClientSettings()

    def build_argv(self, statement: str) -> list[str]:
        return [
            *self.settings.command,
            *self.connection.as_args(),
            encode_statement(statement),
        ]

    def _loggable(self, argv: list[str]) -> str:
        return " ".join("****" if arg == self.connection.password else arg for arg in argv)

    async def _communicate(self, argv: list[str]) -> SubprocessResult:
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=self.settings.working_dir,
            )
        except OSError as e:
            logger.error("Failed to start database client: %s", e)
            raise ExecutionError(f"Failed to start database client: {e}") from e

        timeout = self.settings.timeout
        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            logger.warning("Database client killed after %ss (pid=%s)", timeout, process.pid)
            raise QueryTimeoutError(f"Query timed out after {timeout} seconds.")

        return SubprocessResult(exit_code=process.returncode, stdout=stdout, stderr=stderr)

    async def run(self, statement: str) -> bytes:
        """Execute ``statement`` and return the client's raw stdout.

        Raises:
            ExecutionError: The client could not start or exited non-zero.
            QueryTimeoutError: A timeout is configured and was exceeded.
        """
        argv = self.build_argv(statement)
        logger.debug("Running database client: %s", self._loggable(argv))

        result = await self._communicate(argv)
        stderr_text = result.stderr.decode(self.settings.encoding, errors="replace").strip()

        if result.exit_code != 0:
            logger.warning("Database client exited with %s: %s", result.exit_code, stderr_text)
            raise ExecutionError(stderr_text or UNKNOWN_CLIENT_ERROR, exit_code=result.exit_code)

        if stderr_text:
            logger.debug("Database client stderr: %s", stderr_text)
        logger.debug("Database client returned %d bytes", len(result.stdout))
        return result.stdout
