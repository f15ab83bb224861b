# src/todolist/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import threading
from collections.abc import Iterator
from pathlib import Path

from .task_models import PRIORITY_DEFAULT, Task

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 2
TABLE = "task"

# SQLite INTEGER is a signed 64-bit value.
_ROWID_MIN = -(2**63)
_ROWID_MAX = 2**63 - 1


class TaskStoreError(RuntimeError):
    """The task database could not be opened, read or written."""

    def __init__(self, message: str, *, db_path: Path | None = None) -> None:
        super().__init__(message)
        self.db_path = db_path


class TaskStore:
    """
    SQLite task store.

    The schema is versioned with PRAGMA user_version and migrated additively:
    - create the final table if missing
    - use PRAGMA table_info to detect missing columns (v1 files have no priority)
    - add columns with ALTER TABLE only when needed
    - refuse files written by a newer schema

    Ordering contract for list_tasks(): priority DESC, then id ASC.

    Thread-safety:
    - each method opens its own SQLite connection and closes it before returning
    - a per-store lock lets only one operation touch the file at a time
    """

    def __init__(self, db_path: str | Path = "todo.db", *, timeout: float = 30.0) -> None:
        self._db_path = Path(db_path)
        self._timeout = float(timeout)
        self._lock = threading.Lock()
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise TaskStoreError(
                f"Cannot create directory for task database {self._db_path}: {e}",
                db_path=self._db_path,
            ) from e
        self._ensure_schema()
        logger.info(
            "TaskStore ready db=%s schema=%s total=%s",
            self._db_path,
            SCHEMA_VERSION,
            self.count_tasks(),
        )

    @property
    def db_path(self) -> Path:
        return self._db_path

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    @contextlib.contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        """
        Scoped connection: commit on success, roll back on any error, always close.

        sqlite3 errors and integers too wide for SQLite leave this block as TaskStoreError.
        """
        with self._lock:
            try:
                conn = sqlite3.connect(str(self._db_path), timeout=self._timeout)
            except sqlite3.Error as e:
                raise TaskStoreError(
                    f"Cannot open task database {self._db_path}: {e}", db_path=self._db_path
                ) from e
            conn.row_factory = sqlite3.Row
            try:
                self._configure_conn(conn)
                yield conn
                conn.commit()
            except (sqlite3.Error, OverflowError) as e:
                with contextlib.suppress(sqlite3.Error):
                    conn.rollback()
                raise TaskStoreError(
                    f"Task database error ({self._db_path}): {e}", db_path=self._db_path
                ) from e
            except BaseException:
                with contextlib.suppress(sqlite3.Error):
                    conn.rollback()
                raise
            finally:
                conn.close()

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            cur = conn.cursor()

            cur.execute("PRAGMA user_version")
            (version,) = cur.fetchone()
            version = int(version)
            if version > SCHEMA_VERSION:
                raise TaskStoreError(
                    f"Task database {self._db_path} has schema version {version}; "
                    f"this build supports up to {SCHEMA_VERSION}",
                    db_path=self._db_path,
                )

            cur.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {TABLE} (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    title TEXT,
                    completed INTEGER,
                    priority INTEGER DEFAULT {PRIORITY_DEFAULT}
                )
                """
            )

            cur.execute(f"PRAGMA table_info({TABLE})")
            cols = {row["name"] for row in cur.fetchall()}

            def add_col(name: str, decl: str) -> None:
                if name in cols:
                    return
                cur.execute(f"ALTER TABLE {TABLE} ADD COLUMN {name} {decl}")
                logger.info("TaskStore migration: added column %s (from schema %s)", name, version)

            # v1 -> v2
            add_col("priority", f"INTEGER DEFAULT {PRIORITY_DEFAULT}")

            if version != SCHEMA_VERSION:
                cur.execute(f"PRAGMA user_version = {SCHEMA_VERSION}")
                logger.info(
                    "TaskStore schema upgraded %s -> %s db=%s",
                    version,
                    SCHEMA_VERSION,
                    self._db_path,
                )

    @staticmethod
    def _is_storable_id(task_id: int) -> bool:
        return _ROWID_MIN <= int(task_id) <= _ROWID_MAX

    @staticmethod
    def _row_to_task(row: sqlite3.Row) -> Task:
        priority = row["priority"]
        return Task(
            id=int(row["id"]),
            title=str(row["title"] or ""),
            completed=int(row["completed"] or 0) == 1,
            priority=int(priority) if priority is not None else PRIORITY_DEFAULT,
        )

    # ---- public API ----

    def schema_version(self) -> int:
        with self._connect() as conn:
            (version,) = conn.execute("PRAGMA user_version").fetchone()
            return int(version)

    def count_tasks(self) -> int:
        with self._connect() as conn:
            (n,) = conn.execute(f"SELECT COUNT(*) FROM {TABLE}").fetchone()
            return int(n)

    def add_task(self, title: str, priority: int = PRIORITY_DEFAULT) -> int:
        """
        Insert a new, not yet completed task and return its id.

        Title and priority are stored verbatim; validation belongs to the caller.
        """
        with self._connect() as conn:
            cur = conn.execute(
                f"INSERT INTO {TABLE}(title, completed, priority) VALUES (?, 0, ?)",
                (title, int(priority)),
            )
            rowid = cur.lastrowid
            if rowid is None:
                raise TaskStoreError(
                    "SQLite did not return lastrowid for task insert", db_path=self._db_path
                )
            task_id = int(rowid)
        logger.debug("Task added id=%s priority=%s", task_id, priority)
        return task_id

    def list_tasks(self) -> list[Task]:
        """Every stored task, highest priority first; equal priorities in insertion order."""
        with self._connect() as conn:
            cur = conn.execute(
                f"""
                SELECT id, title, completed, priority
                FROM {TABLE}
                ORDER BY priority DESC, id ASC
                """
            )
            return [self._row_to_task(r) for r in cur.fetchall()]

    def get_task(self, task_id: int) -> Task | None:
        if not self._is_storable_id(task_id):
            return None
        with self._connect() as conn:
            row = conn.execute(
                f"SELECT id, title, completed, priority FROM {TABLE} WHERE id = ?",
                (int(task_id),),
            ).fetchone()
            return self._row_to_task(row) if row else None

    def update_task(self, task: Task) -> int:
        """
        Overwrite title, completed and priority of the row with task.id.

        Returns the affected row count; 0 means no such task (not an error).
        """
        if not self._is_storable_id(task.id):
            return 0
        with self._connect() as conn:
            cur = conn.execute(
                f"UPDATE {TABLE} SET title = ?, completed = ?, priority = ? WHERE id = ?",
                (task.title, 1 if task.completed else 0, int(task.priority), int(task.id)),
            )
            n = cur.rowcount
        logger.debug("Task update id=%s completed=%s rows=%s", task.id, task.completed, n)
        return n

    def delete_task(self, task_id: int) -> int:
        """Remove the task permanently. Returns the affected row count (0 if already gone)."""
        if not self._is_storable_id(task_id):
            return 0
        with self._connect() as conn:
            cur = conn.execute(f"DELETE FROM {TABLE} WHERE id = ?", (int(task_id),))
            n = cur.rowcount
        logger.debug("Task delete id=%s rows=%s", task_id, n)
        return n
