# src/todolist/tasks/task_view.py

"""
Pure display helpers.

Nothing here touches storage: these functions turn a store snapshot into
what the console shows.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from .task_models import Task

_ANSI_RESET = "\033[0m"
_ANSI_STRIKE = "\033[9m"
_ANSI_DIM = "\033[2m"


@dataclass(frozen=True, slots=True)
class PriorityColor:
    name: str
    hex: str
    ansi: str


_LOWEST = PriorityColor("blue", "#0000FF", "\033[34m")

_PRIORITY_COLORS: dict[int, PriorityColor] = {
    5: PriorityColor("red", "#FF0000", "\033[31m"),
    4: PriorityColor("orange", "#FFA500", "\033[38;5;214m"),
    3: PriorityColor("yellow", "#FFFF00", "\033[33m"),
    2: PriorityColor("green", "#00FF00", "\033[32m"),
    1: _LOWEST,
}


def color_for(priority: int) -> PriorityColor:
    """Colour of the priority marker. Anything outside 2..5 renders as the lowest level."""
    return _PRIORITY_COLORS.get(int(priority), _LOWEST)


def display_order(tasks: Iterable[Task]) -> list[Task]:
    """
    Incomplete tasks first, completed last.

    sorted() is stable, so the store's priority DESC / id ASC order survives
    inside each group.
    """
    return sorted(tasks, key=lambda t: t.completed)


def format_task(task: Task, *, color: bool = True) -> str:
    box = "[x]" if task.completed else "[ ]"
    marker = f"(p{task.priority})"
    title = task.title
    if color:
        marker = f"{color_for(task.priority).ansi}●{_ANSI_RESET} {marker}"
        if task.completed:
            title = f"{_ANSI_DIM}{_ANSI_STRIKE}{title}{_ANSI_RESET}"
    return f"{box} #{task.id} {marker} {title}"


def format_task_list(tasks: Iterable[Task], *, color: bool = True) -> str:
    lines = [format_task(t, color=color) for t in tasks]
    if not lines:
        return "No tasks yet. Use /add [p1-p5] <title> or just type a title."
    return "\n".join(lines)
