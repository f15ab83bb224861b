"""todolist: a small prioritised task list backed by SQLite."""

__version__ = "0.1.0"
