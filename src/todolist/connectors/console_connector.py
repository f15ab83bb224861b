# src/todolist/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import handle_line
from ..core.state import AppState
from ..tasks.task_view import format_task_list

logger = logging.getLogger(__name__)

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]


def run_console_loop(
    state: AppState,
    *,
    read: InputFn = input,
    write: OutputFn = print,
) -> None:
    """
    Interactive list screen.

    Shows the current snapshot, then reads one line at a time until EOF,
    Ctrl+C or /exit. ``read``/``write`` are injectable for tests.
    """
    logger.info("Console connector started (tasks=%d).", len(state.tasks))
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "todolist"))

    write(f"[{app_name}] Use /help for commands, /exit to quit.")
    write(format_task_list(state.tasks, color=state.color))

    while True:
        try:
            line = read(">>> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not line:
            continue

        if line.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        write(handle_line(state, line, emit=write))

    logger.info("Console connector finished.")
