# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from taskline.cli.bootstrap import AppState, create_initial_state
from taskline.tasks.task_store import TaskStore

from .factories import UTC_PLUS_2


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI entrypoint.

    We intentionally use a SimpleNamespace rather than reading the environment,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="tasks",
        log_level="WARNING",
        log_dir=None,
        tasks_file=tmp_path / "tasks.csv",
    )


@pytest.fixture()
def store(settings: SimpleNamespace) -> TaskStore:
    return TaskStore(settings.tasks_file)


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    return create_initial_state(settings=settings)  # type: ignore[arg-type]


@pytest.fixture()
def created_at() -> datetime:
    return datetime(2024, 3, 1, 9, 30, 0, tzinfo=UTC_PLUS_2)
