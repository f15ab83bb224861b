# src/todolist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass

PRIORITY_MIN = 1
PRIORITY_MAX = 5
PRIORITY_DEFAULT = 1


@dataclass(frozen=True, slots=True)
class Task:
    """
    A single to-do item.

    Instances are snapshots of a stored row: to change a task, build a new one
    with dataclasses.replace() and hand it to TaskStore.update_task().
    """

    id: int
    title: str
    completed: bool = False
    priority: int = PRIORITY_DEFAULT


def is_valid_priority(priority: int) -> bool:
    return PRIORITY_MIN <= int(priority) <= PRIORITY_MAX
