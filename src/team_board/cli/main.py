# src/team_board/cli/main.py

"""
Entry point: settings -> logging -> session state -> console REPL.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from .bootstrap import create_initial_state

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()
    log_file = setup_logging(log_dir=settings.data_dir, console_level=settings.log_level)

    logger.info("Starting %s (log file %s)", settings.app_name, log_file)
    state = create_initial_state(settings=settings)
    logger.info(
        "Session: identity=%s tasks=%d feedback=%d calendar=%04d-%02d",
        state.store.identity.kind.value,
        len(state.store.tasks()),
        len(state.store.feedback()),
        state.calendar_year,
        state.calendar_month,
    )

    if settings.console_enabled:
        run_console_loop(state)
    else:
        logger.info("Console disabled; nothing else to run.")

    logger.info("Session closed.")


if __name__ == "__main__":
    main()
