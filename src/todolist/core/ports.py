# src/todolist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the application layer.

The task API depends on this Protocol instead of the concrete SQLite store,
which keeps storage swappable and makes testing easier.
"""

from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    def add_task(self, title: str, priority: int = 1) -> int: ...

    # priority DESC, id ASC
    def list_tasks(self) -> list[Task]: ...

    def get_task(self, task_id: int) -> Task | None: ...

    # Both return the affected row count; 0 is "no such task", not a failure.
    def update_task(self, task: Task) -> int: ...
    def delete_task(self, task_id: int) -> int: ...

    def count_tasks(self) -> int: ...
    def close(self) -> None: ...
