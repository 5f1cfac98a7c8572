"""Decoder for the tab-separated text printed by the database client.

Format: a header line of column names, then one line per row, fields
separated by tabs. There is no escaping, so cell values containing tabs or
newlines cannot be represented and will split into extra fields or rows.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from sybase_mcp.errors import DecodeError

_LINE_SPLIT_RE = re.compile(r"\r?\n")


@dataclass
class TabularFrame:
    header: list[str] = field(default_factory=list)
    rows: list[list[str]] = field(default_factory=list)


def parse_frame(text: str) -> TabularFrame:
    """Split client output into a header and data rows.

    Trailing whitespace of the whole blob is dropped first. Data lines are
    stripped and blank ones skipped; header fields are kept verbatim.
    """
    text = text.rstrip()
    lines = _LINE_SPLIT_RE.split(text)

    if len(lines) == 1 and not lines[0].strip():
        return TabularFrame()

    frame = TabularFrame(header=lines[0].split("\t"))
    for line in lines[1:]:
        line = line.strip()
        if not line:
            continue
        frame.rows.append(line.split("\t"))
    return frame


def frame_to_records(frame: TabularFrame) -> list[dict[str, str]]:
    """Zip every row with the header.

    Short rows leave the trailing columns out of the record; values beyond
    the header length are dropped.
    """
    return [dict(zip(frame.header, row)) for row in frame.rows]


def decode_records(raw: bytes | str, encoding: str = "utf-8") -> list[dict[str, str]]:
    """Turn raw client stdout into a list of records.

    Raises:
        DecodeError: If the bytes are not valid in ``encoding``.
    """
    if isinstance(raw, bytes):
        try:
            text = raw.decode(encoding)
        except UnicodeDecodeError as e:
            raise DecodeError(f"Client output is not valid {encoding}: {e}") from e
    else:
        text = raw
    return frame_to_records(parse_frame(text))


def encode_records(header: Iterable[str], records: Iterable[Mapping[str, str]]) -> str:
    """Render records in the client's output format.

    Inverse of decode_records for cells without tabs or newlines and without
    edge whitespace on the first or last cell of a row. Not used by the
    server itself; it exists for tests and for callers producing fixtures.
    """
    header = list(header)
    lines = ["\t".join(header)]
    for record in records:
        lines.append("\t".join(record[name] for name in header))
    return "\n".join(lines) + "\n"
