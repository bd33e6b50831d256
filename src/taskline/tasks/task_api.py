# src/taskline/tasks/task_api.py

"""
User-visible task operations: list, add, complete, delete.

Each operation runs inside a single locked session on the store: the lock is
taken before the first read and released after the last write, so a concurrent
invocation fails with StoreBusy instead of interleaving with us.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from tabulate import tabulate

from ..errors import EmptyTaskSet, InvalidArgument, TaskNotFound
from ..timefmt import relative
from .task_models import Task
from .task_store import TaskStore

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now().astimezone().replace(microsecond=0)


def _find_index(tasks: Sequence[Task], task_id: int) -> int:
    # First match only; ids are expected to be unique.
    for i, task in enumerate(tasks):
        if task.id == task_id:
            return i
    raise TaskNotFound(task_id)


def list_tasks(store: TaskStore, include_completed: bool = False) -> list[Task]:
    tasks = store.load_all()
    if not tasks:
        raise EmptyTaskSet()
    if include_completed:
        return tasks
    return [t for t in tasks if not t.is_complete]


def render_tasks(
    tasks: Sequence[Task],
    include_completed: bool = False,
    now: datetime | None = None,
) -> str:
    """Format tasks as a plain column table (ID, Task, Created[, Done])."""
    headers = ["ID", "Task", "Created"]
    if include_completed:
        headers.append("Done")

    rows: list[list[str]] = []
    for t in tasks:
        row = [str(t.id), t.name, relative(t.created_at, now)]
        if include_completed:
            row.append("true" if t.is_complete else "false")
        rows.append(row)

    return tabulate(rows, headers=headers, tablefmt="plain", disable_numparse=True)


def add_task(store: TaskStore, name: str, now: datetime | None = None) -> Task:
    if not name.strip():
        raise InvalidArgument("task name must not be empty")

    created_at = (now or _now()).replace(microsecond=0)

    # Next id and append share one session; two sessions would race.
    with store.session() as session:
        task = Task(
            id=store.last_id(session) + 1,
            name=name,
            created_at=created_at,
            is_complete=False,
        )
        store.append_one(task, session)

    logger.info("Added task id=%s", task.id)
    return task


def complete_task(store: TaskStore, task_id: int) -> Task:
    with store.session() as session:
        tasks = store.load_all(session)
        task = tasks[_find_index(tasks, task_id)]
        task.is_complete = True
        store.save_all(tasks, session)

    logger.info("Completed task id=%s", task_id)
    return task


def delete_task(store: TaskStore, task_id: int) -> Task:
    with store.session() as session:
        tasks = store.load_all(session)
        removed = tasks.pop(_find_index(tasks, task_id))
        store.save_all(tasks, session)

    logger.info("Deleted task id=%s", task_id)
    return removed
