# tests/test_task_store.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pytest

from taskline.errors import MalformedRecord, StoreBusy
from taskline.tasks.task_store import TaskStore

from .factories import make_task

HEADER_LINE = "ID,Description,CreatedAt,IsComplete\n"


def test_empty_and_header_only_files_load_as_empty(store: TaskStore) -> None:
    assert store.load_all() == []
    assert store.last_id() == -1

    store.path.write_text(HEADER_LINE, encoding="utf-8")
    assert store.load_all() == []
    assert store.last_id() == -1


def test_save_all_then_load_all_preserves_order(store: TaskStore, created_at: datetime) -> None:
    tasks = [
        make_task(5, "five", created_at),
        make_task(2, "two, with comma", created_at, done=True),
        make_task(9, 'nine "quoted"', created_at),
    ]
    store.save_all(tasks)

    assert store.load_all() == tasks
    assert store.path.read_text("utf-8").startswith(HEADER_LINE)


def test_save_all_is_full_overwrite(store: TaskStore, created_at: datetime) -> None:
    store.save_all([make_task(0, "a", created_at), make_task(1, "b", created_at)])
    store.save_all([make_task(1, "b", created_at)])

    assert [t.id for t in store.load_all()] == [1]


def test_append_one_writes_header_on_empty_file(store: TaskStore, created_at: datetime) -> None:
    store.append_one(make_task(0, "first", created_at))
    store.append_one(make_task(1, "second", created_at))

    lines = store.path.read_text("utf-8").splitlines()
    assert lines[0] == HEADER_LINE.strip()
    assert len(lines) == 3
    assert [t.name for t in store.load_all()] == ["first", "second"]


def test_last_id_reads_only_last_row(store: TaskStore) -> None:
    # the earlier row is malformed, but only the last row is inspected
    store.path.write_text(
        HEADER_LINE + "zz,bad,row,here\n" + "41,ok,2024-03-01T09:30:00+02:00,false\n",
        encoding="utf-8",
    )
    assert store.last_id() == 41

    with pytest.raises(MalformedRecord):
        store.load_all()


def test_last_id_rejects_non_integer(store: TaskStore) -> None:
    store.path.write_text(HEADER_LINE + "abc,x,2024-03-01T09:30:00+02:00,false\n", encoding="utf-8")
    with pytest.raises(MalformedRecord):
        store.last_id()


def test_calls_share_a_passed_session(store: TaskStore, created_at: datetime) -> None:
    with store.session() as session:
        store.append_one(make_task(0, "a", created_at), session)
        assert store.last_id(session) == 0
        assert len(store.load_all(session)) == 1

        # the lock is still held by the outer session
        with pytest.raises(StoreBusy):
            store.load_all()

    assert session.closed
    assert len(store.load_all()) == 1


def test_default_path_is_relative_tasks_csv() -> None:
    assert TaskStore().path == Path("tasks.csv")


def test_very_long_name_round_trips(store: TaskStore, created_at: datetime) -> None:
    long_name = "x" * 200_000
    store.append_one(make_task(0, long_name, created_at))
    store.append_one(make_task(1, "next", created_at))

    tasks = store.load_all()
    assert [t.name for t in tasks] == [long_name, "next"]
    assert store.last_id() == 1


def test_invalid_utf8_is_malformed(store: TaskStore) -> None:
    store.path.write_bytes(HEADER_LINE.encode() + b"0,\xff\xfe,2024-03-01T09:30:00+02:00,false\n")

    with pytest.raises(MalformedRecord):
        store.load_all()
    with pytest.raises(MalformedRecord):
        store.last_id()


def test_oversized_id_is_malformed(store: TaskStore) -> None:
    store.path.write_text(HEADER_LINE + "9" * 5000 + ",x,2024-03-01T09:30:00+02:00,false\n", encoding="utf-8")

    with pytest.raises(MalformedRecord):
        store.load_all()
    with pytest.raises(MalformedRecord):
        store.last_id()
