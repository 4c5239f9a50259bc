# src/taskpad/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.commands import board
from ..cli.commands import registry as command_registry
from ..core import controller
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit")


def handle_line(state: AppState, line: str, emit=print) -> str | None:
    """
    Route one line of user input.

    - "/command ..." -> command registry
    - anything else  -> added as a task (blank input is ignored)

    Returns the text to print, or None when there is nothing to show.
    """
    line = line.strip()
    if not line:
        return None

    try:
        reply = command_registry.handle(state, line, emit=emit)
        if reply is not None:
            return reply
        return board(state, controller.add_task(state, line))
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling a command."


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    print(board(state))
    print("\nType a task and press Enter to add it. Use /help for commands, /exit to quit.")

    while True:
        try:
            user_input = input("\n> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        reply = handle_line(state, user_input)
        if reply is not None:
            print(reply)

    logger.info("Console connector finished.")
