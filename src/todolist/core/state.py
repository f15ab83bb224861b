# src/todolist/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_models import Task
from .ports import TaskRepo


@dataclass
class AppState:
    # Settings object (config.Settings or any namespace with the same attributes).
    settings: Any

    task_store: TaskRepo

    # Display snapshot in display order. Replaced on every refresh, never edited in place.
    tasks: tuple[Task, ...] = field(default_factory=tuple)

    color: bool = True
