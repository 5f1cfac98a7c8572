"""Read-only guards for SQL text and identifiers.

There is no bind-parameter channel to the external client: every value ends
up inside the statement text, so these checks are the only injection guard.

The keyword check is plain substring containment on the lowercased query.
It also rejects harmless names such as ``dropped_at`` or ``last_update``;
callers rely on that exact behaviour, so it is not tokenized.
"""

from __future__ import annotations

import re

from sybase_mcp.errors import ValidationError

FORBIDDEN_KEYWORDS = ("insert", "update", "delete", "drop", "alter", ";")

_IDENTIFIER_RE = re.compile(r"[A-Za-z0-9_]+", re.ASCII)


def validate_select(sql: str) -> str:
    """Reject anything that is not a single plain SELECT.

    Returns the query unchanged when it passes.
    """
    normalized = sql.strip().lower()

    if not normalized.startswith("select"):
        raise ValidationError("Only SELECT queries are allowed.")

    for keyword in FORBIDDEN_KEYWORDS:
        if keyword in normalized:
            raise ValidationError(f"Query contains a forbidden keyword: {keyword}")

    return sql


def validate_identifier(name: str) -> str:
    """Accept only ASCII letters, digits and underscores (at least one)."""
    if not _IDENTIFIER_RE.fullmatch(name):
        raise ValidationError("Table name contains invalid characters.")
    return name
