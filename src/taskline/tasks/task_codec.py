# src/taskline/tasks/task_codec.py

"""
Record codec: Task <-> CSV row.

Row layout: [id, name, created_at, is_complete]
- id: base-10 integer
- name: free text (csv quoting handles commas, quotes and newlines)
- created_at: RFC 3339 timestamp with a numeric UTC offset
- is_complete: "true" or "false" (lowercase, case-sensitive)
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from datetime import datetime

from ..errors import MalformedRecord
from .task_models import Task

HEADER: list[str] = ["ID", "Description", "CreatedAt", "IsComplete"]

_INT_RE = re.compile(r"[+-]?[0-9]+")
_BOOL_LITERALS = {"true": True, "false": False}


def format_timestamp(ts: datetime) -> str:
    return ts.isoformat(timespec="seconds")


def parse_id(raw: str) -> int:
    if not _INT_RE.fullmatch(raw):
        raise MalformedRecord(f"invalid task id {raw!r}: expected an integer")
    try:
        return int(raw)
    except ValueError as exc:
        # int() refuses very long digit strings
        raise MalformedRecord(f"invalid task id: {exc}") from exc


def parse_timestamp(raw: str) -> datetime:
    try:
        ts = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise MalformedRecord(f"invalid timestamp {raw!r}") from exc
    if ts.tzinfo is None:
        raise MalformedRecord(f"invalid timestamp {raw!r}: missing UTC offset")
    return ts


def parse_bool(raw: str) -> bool:
    try:
        return _BOOL_LITERALS[raw]
    except KeyError:
        raise MalformedRecord(f"invalid completion flag {raw!r}: expected true or false") from None


def encode(task: Task) -> list[str]:
    return [
        str(task.id),
        task.name,
        format_timestamp(task.created_at),
        "true" if task.is_complete else "false",
    ]


def decode(row: Sequence[str]) -> Task:
    """Build a Task from a data row. The header row must not be passed here."""
    if len(row) != len(HEADER):
        raise MalformedRecord(f"expected {len(HEADER)} fields, got {len(row)}: {list(row)!r}")

    raw_id, name, raw_created, raw_complete = row
    return Task(
        id=parse_id(raw_id),
        name=name,
        created_at=parse_timestamp(raw_created),
        is_complete=parse_bool(raw_complete),
    )
