# src/taskline/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(slots=True)
class Task:
    """
    One tracked to-do item.

    Notes:
    - id is assigned once at creation and never renumbered.
    - created_at is timezone-aware and kept at second precision so it round-trips
      through the CSV timestamp format unchanged.
    """

    id: int
    name: str
    created_at: datetime
    is_complete: bool = False
