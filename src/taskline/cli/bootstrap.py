# src/taskline/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it turns the per-invocation Settings
(plus command-line overrides) into the AppState every command handler receives.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

from ..config import Settings, get_settings
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    settings: Settings
    task_store: TaskStore

    stdout: TextIO = field(default_factory=lambda: sys.stdout)
    stderr: TextIO = field(default_factory=lambda: sys.stderr)


def create_initial_state(
    *,
    settings: Settings | None = None,
    tasks_file: str | Path | None = None,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    path = Path(tasks_file) if tasks_file is not None else settings.tasks_file
    logger.debug("Using tasks file %s", path)

    return AppState(
        settings=settings,
        task_store=TaskStore(path),
        stdout=stdout or sys.stdout,
        stderr=stderr or sys.stderr,
    )
