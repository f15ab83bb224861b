# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todolist.core.state import AppState
from todolist.tasks.task_store import TaskStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="todolist-test",
        log_level="DEBUG",
        color=False,
        data_dir=tmp_path / "data",
        tasks_db_path=tmp_path / "data" / "todo.db",
    )


@pytest.fixture()
def store(tmp_path: Path) -> TaskStore:
    return TaskStore(tmp_path / "todo.db")


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState over a real SQLite store: its ordering and persistence are part
    of what we want to test.
    """
    return AppState(
        settings=settings,
        task_store=TaskStore(settings.tasks_db_path),
        color=False,
    )
