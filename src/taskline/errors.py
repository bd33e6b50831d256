# src/taskline/errors.py

"""
Error taxonomy.

Every failure the task store can observe is a TaskError subclass, raised at the
lowest layer that detects it and propagated unchanged up to the CLI.
"""

from __future__ import annotations


class TaskError(Exception):
    """Base class for all user-reportable task errors."""


class StorageError(TaskError):
    """The backing file could not be opened, read or written."""


class StoreBusy(TaskError):
    """Another process holds the lock on the backing file."""

    def __init__(self, path: object) -> None:
        super().__init__(f"unable to lock file {path}: another tasks command is running")
        self.path = path


class MalformedRecord(TaskError):
    """A stored row does not parse into a valid task."""


class TaskNotFound(TaskError):
    def __init__(self, task_id: int) -> None:
        super().__init__(f"no task with given id: {task_id}")
        self.task_id = task_id


class EmptyTaskSet(TaskError):
    def __init__(self) -> None:
        super().__init__("no tasks found, add one with: tasks add <name>")


class InvalidArgument(TaskError):
    """A command argument is missing, extra or not of the expected type."""
