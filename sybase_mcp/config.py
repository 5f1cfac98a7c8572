"""Connection and client settings, read from the environment.

The entry point calls load_dotenv() first, so values from a local .env file
are picked up here as well.
"""

from __future__ import annotations

import codecs
import math
import os
import shlex
from dataclasses import dataclass, field
from typing import Mapping

from sybase_mcp.errors import ConfigurationError

REQUIRED_ENV_VARS = (
    "SYBASE_HOST",
    "SYBASE_PORT",
    "SYBASE_DATABASE",
    "SYBASE_USERNAME",
    "SYBASE_PASSWORD",
)

# jTDS-based SybaseQuery client compiled next to the driver jar
DEFAULT_CLIENT_COMMAND = ["java", "-cp", os.pathsep.join([".", "jtds-1.3.1.jar"]), "SybaseQuery"]


@dataclass(frozen=True)
class ConnectionParameters:
    host: str
    port: str
    database: str
    username: str
    password: str = field(repr=False)

    def as_args(self) -> list[str]:
        """Positional arguments expected by the external client."""
        return [self.host, self.port, self.database, self.username, self.password]


@dataclass(frozen=True)
class ClientSettings:
    command: tuple[str, ...] = tuple(DEFAULT_CLIENT_COMMAND)
    working_dir: str | None = None
    encoding: str = "utf-8"
    timeout: float | None = None


@dataclass(frozen=True)
class Settings:
    connection: ConnectionParameters
    client: ClientSettings


def _parse_timeout(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(f"SYBASE_QUERY_TIMEOUT must be a number of seconds, got {raw!r}")
    if not math.isfinite(value) or value <= 0:
        raise ConfigurationError(f"SYBASE_QUERY_TIMEOUT must be a positive finite number, got {raw!r}")
    return value


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ).

    Returns:
        Settings with the connection parameters and client options.

    Raises:
        ConfigurationError: If any required variable is missing or empty,
            or an optional one is malformed.
    """
    env = os.environ if environ is None else environ

    missing = [name for name in REQUIRED_ENV_VARS if not env.get(name)]
    if missing:
        raise ConfigurationError(
            "Missing required environment variables: " + ", ".join(missing)
        )

    connection = ConnectionParameters(
        host=env["SYBASE_HOST"],
        port=env["SYBASE_PORT"],
        database=env["SYBASE_DATABASE"],
        username=env["SYBASE_USERNAME"],
        password=env["SYBASE_PASSWORD"],
    )

    raw_command = env.get("SYBASE_CLIENT_COMMAND", "").strip()
    command = tuple(shlex.split(raw_command)) if raw_command else tuple(DEFAULT_CLIENT_COMMAND)

    encoding = env.get("SYBASE_CLIENT_ENCODING") or "utf-8"
    try:
        codecs.lookup(encoding)
    except LookupError:
        raise ConfigurationError(f"Unknown SYBASE_CLIENT_ENCODING: {encoding!r}")

    client = ClientSettings(
        command=command,
        working_dir=env.get("SYBASE_CLIENT_DIR") or None,
        encoding=encoding,
        timeout=_parse_timeout(env.get("SYBASE_QUERY_TIMEOUT")),
    )
    return Settings(connection=connection, client=client)
