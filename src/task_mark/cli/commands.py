# src/task_mark/cli/commands.py

from __future__ import annotations

import contextlib
import inspect
import logging
import re
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.task_api import (
    archive_selected,
    create_task,
    create_task_with_new_category,
    grouped_tasks,
    on_resign_active,
    picker_categories,
    select_task,
)
from ..tasks.task_models import Task, TaskCategory

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console front-end (/help, /add, ...)."""

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
        return "\n".join(lines)


registry = CommandRegistry()

ADD_USAGE = (
    "Usage: /add <category> <title> [| description]\n"
    "  category: urgent | non-urgent | custom:<name> | new:<name>\n"
    "  quote names with spaces: new:\"Home Office\""
)

# new:"Two words" keeps the quoted name together; an unclosed quote is a usage error.
_ADD_RE = re.compile(
    r'^(?P<kind>(?:new|custom):"[^"]*"|(?!(?:new|custom):")\S+)\s+(?P<rest>.+)$',
    re.IGNORECASE,
)


def _format_row(state: AppState, task: Task) -> str:
    index = state.tasks.index(task)
    marker = "*" if state.selected_index == index else " "
    return f" {marker}{index + 1}. {task.title}"


def _unquote(name: str) -> str:
    if len(name) >= 2 and name[0] == name[-1] == '"':
        return name[1:-1]
    return name


def _parse_index(raw: str) -> int | None:
    """Turn a 1-based row number into a list index."""
    try:
        return int(raw) - 1
    except ValueError:
        return None


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    if not state.tasks:
        return "No tasks. Use /add to create one."
    lines: list[str] = []
    for name, tasks in grouped_tasks(state.tasks):
        lines.append(f"[{name}]")
        lines.extend(_format_row(state, t) for t in tasks)
    return "\n".join(lines)


def cmd_archived(state: AppState, args: list[str]) -> str:
    if not state.archive_tasks:
        return "Archive is empty."
    lines = ["Archived tasks:"]
    for i, task in enumerate(state.archive_tasks, start=1):
        desc = f" - {task.description}" if task.description else ""
        lines.append(f"  {i}. {task.title}{desc}")
    return "\n".join(lines)


def cmd_cats(state: AppState, args: list[str]) -> str:
    options = picker_categories(state)
    return "Categories:\n" + "\n".join(f"  {o}" for o in options)


def cmd_add(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /add urgent Buy milk | two litres
    /add custom:Gym Leg day
    /add new:"Home Office" Fix the sink
    """
    match = _ADD_RE.match(" ".join(args))
    if match is None:
        return ADD_USAGE

    kind = match.group("kind")
    title, _, description = match.group("rest").partition("|")
    title = title.strip()
    description = description.strip()
    if not title:
        return ADD_USAGE

    lowered = kind.lower()
    if lowered.startswith("new:"):
        duplicates: list[str] = []
        task = create_task_with_new_category(
            state,
            title=title,
            description=description,
            category_name=_unquote(kind[4:]),
            on_duplicate=duplicates.append,
        )
        if duplicates:
            if emit:
                with contextlib.suppress(Exception):
                    emit(f"[WARN] Category '{duplicates[0]}' already exists.")
            return f"Category '{duplicates[0]}' already exists; use custom:{duplicates[0]}."
        if task is None:
            return "Category name must not be empty."
        return f"Added '{task.title}' to new category '{task.category_name}'."

    if lowered.startswith("custom:"):
        name = _unquote(kind[7:])
        task = create_task(
            state,
            title=title,
            description=description,
            category=TaskCategory.CUSTOM,
            custom_name=name,
        )
        if task is None:
            return f"No custom category named '{name}'. Use new:{name} to create it."
        return f"Added '{task.title}' to '{task.category_name}'."

    if lowered not in ("urgent", "non-urgent", "nonurgent"):
        return ADD_USAGE

    category = TaskCategory.URGENT if lowered == "urgent" else TaskCategory.NON_URGENT
    task = create_task(state, title=title, description=description, category=category)
    if task is None:
        return "Task was not created."
    return f"Added '{task.title}' to '{task.category_name}'."


def cmd_select(state: AppState, args: list[str]) -> str:
    if not args:
        return "Usage: /select <row number>"
    index = _parse_index(args[0])
    if index is None or not 0 <= index < len(state.tasks):
        return f"No task at row {args[0]}."
    selected = select_task(state, index)
    if selected is None:
        return "Selection cleared."
    task = state.tasks[selected]
    desc = task.description or "(no description)"
    return f"Selected '{task.title}': {desc}"


def cmd_archive(state: AppState, args: list[str]) -> str:
    """
    /archive     -> archive the selected task
    /archive N   -> archive row N
    """
    if args:
        index = _parse_index(args[0])
        state.selected_index = index
    moved = archive_selected(state)
    if moved is None:
        logger.debug("Archive ignored (args=%s)", args)
        return "Nothing to archive (select a task first)."
    return f"Moved '{moved.title}' to the archive."


def cmd_save(state: AppState, args: list[str]) -> str:
    on_resign_active(state)
    return f"Saved {len(state.tasks)} active and {len(state.archive_tasks)} archived tasks."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show active tasks grouped by category.", aliases=["ls"])
registry.register("archived", cmd_archived, help_text="Show archived tasks.")
registry.register("cats", cmd_cats, help_text="Show category choices.")
registry.register("add", cmd_add, help_text="Add a task: /add <category> <title> [| description].")
registry.register("select", cmd_select, help_text="Toggle selection of a row: /select N.")
registry.register("archive", cmd_archive, help_text="Archive the selected task (or /archive N).")
registry.register("save", cmd_save, help_text="Save all task lists now.")
