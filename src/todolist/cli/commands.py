# src/todolist/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks import task_api
from ..tasks.task_models import PRIORITY_DEFAULT, PRIORITY_MAX, PRIORITY_MIN
from ..tasks.task_store import TaskStoreError
from ..tasks.task_view import format_task_list

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, emit)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  /exit - Quit.")
        lines.append("Plain text (no slash) adds a task with default priority.")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_int(raw: str) -> int | None:
    """ASCII digits only; "²" passes isdigit() but int() rejects it."""
    if not raw.isascii() or not raw.isdecimal():
        return None
    return int(raw)


def _parse_priority_token(token: str) -> int | None:
    """'p3' / 'P3' -> 3; anything else -> None."""
    if len(token) < 2 or token[0] not in "pP":
        return None
    return _parse_int(token[1:])


def _parse_task_id(args: list[str]) -> int | None:
    if len(args) != 1:
        return None
    return _parse_int(args[0].lstrip("#"))


def _list_text(state: AppState) -> str:
    return format_task_list(state.tasks, color=state.color)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    task_api.refresh_tasks(state)
    return _list_text(state)


def cmd_add(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    """
    /add <title...>      -> add with default priority
    /add p4 <title...>   -> add with priority 4
    """
    usage = f"Usage: /add [p{PRIORITY_MIN}-p{PRIORITY_MAX}] <title>"
    if not args:
        return usage

    priority = PRIORITY_DEFAULT
    maybe = _parse_priority_token(args[0])
    if maybe is not None:
        priority = maybe
        args = args[1:]

    return _add_and_report(state, " ".join(args), priority, emit, usage)


def _add_and_report(
    state: AppState,
    title: str,
    priority: int,
    emit: CommandEmitter | None,
    usage: str,
) -> str:
    try:
        task_id = task_api.add_task(state, title, priority)
    except ValueError as e:
        return f"{e}\n{usage}"

    if emit:
        with contextlib.suppress(Exception):
            emit(f"Added task #{task_id}.")
    return _list_text(state)


def _completion_command(state: AppState, args: list[str], name: str, action) -> str:
    task_id = _parse_task_id(args)
    if task_id is None:
        return f"Usage: /{name} <id>"
    if action(task_id) == 0:
        return f"No task #{task_id}.\n{_list_text(state)}"
    return _list_text(state)


def cmd_done(state: AppState, args: list[str]) -> str:
    return _completion_command(
        state, args, "done", lambda tid: task_api.set_completed(state, tid, True)
    )


def cmd_undone(state: AppState, args: list[str]) -> str:
    return _completion_command(
        state, args, "undone", lambda tid: task_api.set_completed(state, tid, False)
    )


def cmd_toggle(state: AppState, args: list[str]) -> str:
    return _completion_command(
        state, args, "toggle", lambda tid: task_api.toggle_completed(state, tid)
    )


def cmd_del(state: AppState, args: list[str]) -> str:
    return _completion_command(state, args, "del", lambda tid: task_api.remove_task(state, tid))


def cmd_status(state: AppState, args: list[str]) -> str:
    store = state.task_store
    db_path = getattr(store, "db_path", None)
    schema = store.schema_version() if hasattr(store, "schema_version") else "?"
    total = store.count_tasks()
    done = sum(1 for t in state.tasks if t.completed)
    return (
        "Status:\n"
        f"  Database: {db_path}\n"
        f"  Schema version: {schema}\n"
        f"  Tasks: {total} ({done} completed)"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show all tasks.", aliases=["ls"])
registry.register(
    "add",
    cmd_add,
    help_text=f"Add a task: /add [p{PRIORITY_MIN}-p{PRIORITY_MAX}] <title>.",
    aliases=["a"],
)
registry.register("done", cmd_done, help_text="Mark a task completed: /done <id>.")
registry.register("undone", cmd_undone, help_text="Mark a task not completed: /undone <id>.")
registry.register("toggle", cmd_toggle, help_text="Flip completion: /toggle <id>.", aliases=["t"])
registry.register("del", cmd_del, help_text="Delete a task: /del <id>.", aliases=["rm"])
registry.register("status", cmd_status, help_text="Show database path, schema and counts.")


def handle_line(state: AppState, line: str, emit: CommandEmitter | None = None) -> str:
    """
    Route one line of console input.

    Slash commands go to the registry; anything else is added as a task with
    default priority. Store failures are reported, not raised.
    """
    try:
        reply = registry.handle(state, line, emit=emit)
        if reply is None:
            reply = _add_and_report(
                state, line, PRIORITY_DEFAULT, emit, "Type a title, or /help for commands."
            )
        return reply
    except TaskStoreError:
        logger.exception("Task store failure while handling %r", line)
        return "Storage error: the task database is unavailable. See the log for details."
