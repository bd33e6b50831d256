# src/taskline/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
from collections.abc import Iterator, Sequence
from pathlib import Path

from . import task_codec
from .task_models import Task
from .task_session import LockedFileSession, open_session

logger = logging.getLogger(__name__)


class TaskStore:
    """
    CSV task store.

    The whole task set is read into memory and, on mutation, written back in full:
    - first row is always the fixed header
    - one row per task, in insertion order
    - no partial updates (except append_one for new tasks)

    Locking:
    - each method opens its own locked session unless one is passed in
    - pass a session (see `session()`) to span several calls under one lock
    """

    def __init__(self, path: str | Path = "tasks.csv") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    @contextlib.contextmanager
    def session(self) -> Iterator[LockedFileSession]:
        with open_session(self._path) as s:
            yield s

    @contextlib.contextmanager
    def _use(self, session: LockedFileSession | None) -> Iterator[LockedFileSession]:
        if session is not None:
            yield session
            return
        with self.session() as s:
            yield s

    # ---- reads ----

    def load_all(self, session: LockedFileSession | None = None) -> list[Task]:
        with self._use(session) as s:
            rows = s.read_all()
        # rows[0] is the header; never decoded
        tasks = [task_codec.decode(row) for row in rows[1:]]
        logger.debug("Loaded %d tasks from %s", len(tasks), self._path)
        return tasks

    def last_id(self, session: LockedFileSession | None = None) -> int:
        """
        Return the id stored in the last row, unchanged (callers add 1).

        Only the final row is inspected. Returns -1 when the file holds at most
        a header row, so that `last_id() + 1` is 0 for an empty store.
        """
        with self._use(session) as s:
            last = s.read_last_record()
        if last is None:
            return -1
        return task_codec.parse_id(last[0])

    # ---- writes ----

    def save_all(self, tasks: Sequence[Task], session: LockedFileSession | None = None) -> None:
        rows = [task_codec.HEADER, *(task_codec.encode(t) for t in tasks)]
        with self._use(session) as s:
            s.replace_all(rows)
        logger.debug("Saved %d tasks to %s", len(tasks), self._path)

    def append_one(self, task: Task, session: LockedFileSession | None = None) -> None:
        with self._use(session) as s:
            rows = [task_codec.encode(task)]
            if s.is_empty():
                rows.insert(0, task_codec.HEADER)
            s.append(rows)
        logger.debug("Appended task id=%s to %s", task.id, self._path)
