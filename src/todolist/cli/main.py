# src/todolist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console list screen.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..tasks.task_store import TaskStoreError

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    file_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/todolist")
    try:
        setup_logging(log_dir=log_dir, file_level=file_level)
    except OSError as e:
        print(f"Cannot use data directory {log_dir}: {e}", file=sys.stderr)
        return 1

    logger.info("Starting %s...", getattr(settings, "app_name", "todolist"))

    try:
        state = create_initial_state(settings=settings)
    except TaskStoreError as e:
        logger.exception("Cannot open task database.")
        print(f"Cannot open task database: {e}", file=sys.stderr)
        return 1

    try:
        run_console_loop(state)
    finally:
        state.task_store.close()
        logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
