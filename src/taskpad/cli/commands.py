# src/taskpad/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core import controller
from ..core.state import AppState
from ..core.view import View
from ..tasks.task_models import TaskFilter
from .render import render_view

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Slash-command registry: maps "/name args" to a handler (/add, /done, /rm, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}
        # Handlers that get the untouched remainder of the line as a single arg.
        self._raw: set[CommandHandler] = set()

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
        raw_args: bool = False,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler
        if raw_args:
            self._raw.add(handler)

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

        head = line[1:].split(maxsplit=1)
        if not head:
            return "Empty command. Use /help to list available commands."

        name = head[0].lower()
        rest = head[1] if len(head) > 1 else ""

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        if handler in self._raw:
            args = [rest.strip()] if rest.strip() else []
        else:
            args = rest.split()

        try:
            nparams = len(inspect.signature(handler).parameters)
        except Exception:
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
        lines.append("  /exit - Quit (also /quit).")
        lines.append("Any text that does not start with '/' is added as a new task.")
        return "\n".join(lines)


registry = CommandRegistry()


def board(state: AppState, view: View | None = None) -> str:
    """Render the given view (or a fresh one) with the console settings."""
    if view is None:
        view = controller.current_view(state)
    settings = state.settings
    return render_view(
        view,
        title=str(getattr(settings, "app_name", "taskpad")),
        color_mode=str(getattr(settings, "color_mode", "auto")),
    )


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return board(state)


def cmd_add(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /add <text>"
    return board(state, controller.add_task(state, args[0]))


def cmd_done(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /done <row number or id>"
    return board(state, controller.toggle_task(state, args[0]))


def cmd_rm(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /rm <row number or id>"
    return board(state, controller.delete_task(state, args[0]))


def cmd_clear(
    state: AppState,
    args: list[str],
    emit: CommandEmitter | None = None,
) -> str:
    before = state.tasks.stats().completed
    view = controller.clear_completed(state)
    if emit and before:
        emit(f"Removed {before} completed task(s).")
    return board(state, view)


def cmd_filter(state: AppState, args: list[str]) -> str:
    """
    /filter            -> show current filter
    /filter <name>     -> all | completed | pending
    """
    choices = " | ".join(f.value for f in TaskFilter)
    if not args:
        return f"Filter is currently '{state.current_filter.value}'. Use /filter {choices}."
    try:
        view = controller.set_filter(state, args[0])
    except ValueError:
        logger.debug("Rejected filter value %r", args[0])
        return f"Usage: /filter {choices}"
    return board(state, view)


def cmd_theme(state: AppState, args: list[str]) -> str:
    return board(state, controller.toggle_theme(state))


def cmd_stats(state: AppState, args: list[str]) -> str:
    s = controller.current_view(state).stats
    return (
        "Stats:\n"
        f"  Total: {s.total}\n"
        f"  Completed: {s.completed}\n"
        f"  Pending: {s.total - s.completed}\n"
        f"  Fastest: {s.fastest}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Redraw the task list.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add <text>.", raw_args=True)
registry.register(
    "done", cmd_done, help_text="Toggle completed: /done <row|id>.", aliases=["toggle", "x"]
)
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <row|id>.", aliases=["del"])
registry.register("clear", cmd_clear, help_text="Delete all completed tasks.")
registry.register(
    "filter", cmd_filter, help_text="Filter: /filter all | completed | pending.", aliases=["f"]
)
registry.register("theme", cmd_theme, help_text="Toggle light/dark theme.")
registry.register("stats", cmd_stats, help_text="Show totals and the fastest completion.")
