# tests/test_task_codec.py

from __future__ import annotations

import csv
import io
from datetime import datetime, timezone

import pytest

from taskline.errors import MalformedRecord
from taskline.tasks import task_codec

from .factories import make_task


def _through_csv(row: list[str]) -> list[str]:
    buf = io.StringIO(newline="")
    csv.writer(buf, lineterminator="\n").writerow(row)
    buf.seek(0)
    return next(csv.reader(buf))


def test_encode_layout(created_at: datetime) -> None:
    row = task_codec.encode(make_task(7, "buy milk", created_at, done=True))
    assert row == ["7", "buy milk", "2024-03-01T09:30:00+02:00", "true"]
    assert task_codec.HEADER == ["ID", "Description", "CreatedAt", "IsComplete"]


@pytest.mark.parametrize(
    "name",
    [
        "plain",
        "comma, separated, words",
        'she said "hi"',
        '"leading quote',
        "multi\nline",
        "ünïcödé ✓ 任务",
        "",
    ],
)
def test_round_trip_through_csv(name: str, created_at: datetime) -> None:
    task = make_task(3, name, created_at)
    assert task_codec.decode(_through_csv(task_codec.encode(task))) == task


def test_decode_accepts_utc_suffix() -> None:
    task = task_codec.decode(["0", "x", "2024-03-01T07:30:00Z", "false"])
    assert task.created_at == datetime(2024, 3, 1, 7, 30, tzinfo=timezone.utc)
    assert task.is_complete is False


@pytest.mark.parametrize(
    "row",
    [
        ["x1", "name", "2024-03-01T09:30:00+02:00", "false"],
        ["1.5", "name", "2024-03-01T09:30:00+02:00", "false"],
        ["1", "name", "yesterday", "false"],
        ["1", "name", "2024-03-01T09:30:00", "false"],
        ["1", "name", "2024-03-01T09:30:00+02:00", "True"],
        ["1", "name", "2024-03-01T09:30:00+02:00", "yes"],
        ["1", "name", "2024-03-01T09:30:00+02:00"],
        ["1", "name", "2024-03-01T09:30:00+02:00", "false", "extra"],
    ],
)
def test_decode_rejects_malformed_rows(row: list[str]) -> None:
    with pytest.raises(MalformedRecord):
        task_codec.decode(row)


def test_parse_id_rejects_oversized_digit_string() -> None:
    with pytest.raises(MalformedRecord):
        task_codec.parse_id("1" * 5000)
