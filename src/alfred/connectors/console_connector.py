# src/alfred/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import CommandRegistry
from ..cli.commands import registry as command_registry
from ..core.state import AppState
from ..errors import AlfredError

logger = logging.getLogger(__name__)

DIVIDER = "_" * 60


def greeting(app_name: str) -> str:
    return f"Good day, sir. I am {app_name}. How may I help?"


def handle_line(
    state: AppState, line: str, registry: CommandRegistry = command_registry
) -> tuple[str, bool]:
    """
    Run one input line. Returns (response, should_exit).

    Domain errors become the response text; the session always continues
    unless the command itself asks to exit.
    """
    command = registry.parse(line)
    try:
        response = command.execute(state.task_list)
    except AlfredError as e:
        logger.debug("Command rejected: %s", e.__class__.__name__)
        return str(e), False
    except Exception:
        logger.exception("Command handler crashed.")
        return "Internal error while handling that command, sir.", False
    return response, command.is_exit()


def _sandwich(text: str) -> str:
    return f"{DIVIDER}\n{text}\n{DIVIDER}"


def run_console_loop(
    state: AppState,
    *,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "alfred"))
    logger.info("Console connector started (tasks=%d).", state.task_list.size)

    write(_sandwich(greeting(app_name) + "\n" + command_registry.build_help()))

    while True:
        try:
            line = read("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            write("")
            break

        if not line:
            continue

        response, should_exit = handle_line(state, line)
        write(_sandwich(response))
        if should_exit:
            break

    logger.info("Console connector finished.")
