# src/team_board/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _prompt(state: AppState) -> str:
    who = state.store.identity.display_name or "signed out"
    return f"[{who}] >>> "


def run_console_loop(state: AppState) -> None:
    """
    Text stand-in for the browser UI: each line is one command against the store.

    Commands are the only input; plain text gets a hint.
    """
    logger.info("Console connector started.")
    app_name = str(getattr(state.settings, "app_name", "team-board"))
    print(f"[{_ts_local()}] {app_name}: use /help for commands, /exit to quit.\n")

    while True:
        try:
            user_input = input(_prompt(state)).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is None:
            reply = "Commands start with '/'. Try /help."
        print(reply)
        print()

    logger.info("Console connector finished.")
