# src/todolist/tasks/task_api.py

from __future__ import annotations

import logging
from dataclasses import replace

from ..core.state import AppState
from .task_models import PRIORITY_DEFAULT, PRIORITY_MAX, PRIORITY_MIN, Task, is_valid_priority
from .task_view import display_order

logger = logging.getLogger(__name__)


def refresh_tasks(state: AppState) -> tuple[Task, ...]:
    """
    Re-fetch every task from the store and replace the display snapshot.

    Called once at startup and after every write.
    """
    snapshot = tuple(display_order(state.task_store.list_tasks()))
    state.tasks = snapshot
    return snapshot


def add_task(state: AppState, title: str, priority: int = PRIORITY_DEFAULT) -> int:
    """
    Validate user input, create the task, refresh.

    The store accepts anything; this is where empty titles and
    out-of-range priorities are rejected.
    """
    clean = (title or "").strip()
    if not clean:
        raise ValueError("Task title must not be empty.")
    if not is_valid_priority(priority):
        raise ValueError(f"Priority must be between {PRIORITY_MIN} and {PRIORITY_MAX}.")

    task_id = state.task_store.add_task(clean, int(priority))
    logger.info("Task created id=%s priority=%s", task_id, priority)
    refresh_tasks(state)
    return task_id


def set_completed(state: AppState, task_id: int, completed: bool) -> int:
    """Returns the affected row count; 0 means the task does not exist."""
    task = state.task_store.get_task(task_id)
    if task is None:
        refresh_tasks(state)
        return 0

    n = state.task_store.update_task(replace(task, completed=bool(completed)))
    logger.info("Task id=%s completed=%s rows=%s", task_id, completed, n)
    refresh_tasks(state)
    return n


def toggle_completed(state: AppState, task_id: int) -> int:
    task = state.task_store.get_task(task_id)
    if task is None:
        refresh_tasks(state)
        return 0
    return set_completed(state, task_id, not task.completed)


def remove_task(state: AppState, task_id: int) -> int:
    n = state.task_store.delete_task(task_id)
    logger.info("Task id=%s deleted rows=%s", task_id, n)
    refresh_tasks(state)
    return n
