# src/taskline/config.py

"""Settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object per invocation, passed explicitly (no module-level state).
- Every value has a default; an empty environment is a valid configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TASKLINE"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path | None

    # ---- Storage ----
    tasks_file: Path

    @staticmethod
    def from_env(*, dotenv: bool = True) -> "Settings":
        if dotenv:
            load_dotenv(find_dotenv(usecwd=True), override=False)

        app_name = _env(_k("APP_NAME"), "tasks").strip() or "tasks"
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"
        log_dir = _env_path(_k("LOG_DIR"), None)
        tasks_file = _env_path(_k("TASKS_FILE"), Path("tasks.csv")) or Path("tasks.csv")

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            tasks_file=tasks_file,
        )


def get_settings() -> Settings:
    return Settings.from_env()
