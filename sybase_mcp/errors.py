"""Error kinds raised by the Sybase query pipeline.

Validator, builder, executor and decoder raise these; the tool handlers in
sybase_mcp/tools/sybase_query.py catch them and turn them into error results.
"""

from __future__ import annotations


class SybaseToolError(Exception):
    """Base class for errors that are reported back to the calling agent."""


class ValidationError(SybaseToolError):
    """Input failed the static safety rules and never reached the client."""


class ExecutionError(SybaseToolError):
    """The database client could not be launched or exited non-zero."""

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        self.exit_code = exit_code


class QueryTimeoutError(ExecutionError):
    """The database client ran past the configured timeout and was killed."""


class DecodeError(SybaseToolError):
    """The client output could not be turned into records."""


class ConfigurationError(Exception):
    """Required settings are missing or malformed. Fatal at startup."""
