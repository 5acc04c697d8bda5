# src/task_mark/tasks/task_api.py

"""
Operations the front-end calls in response to user actions.

Each mutating helper updates the in-memory lists on AppState first, then
re-saves whichever snapshot changed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..core.state import AppState
from .task_models import CustomCategory, Task, TaskCategory

logger = logging.getLogger(__name__)

NEW_CATEGORY_OPTION = "Add new Task Category"

DuplicateCategoryHook = Callable[[str], None]


def create_task(
    state: AppState,
    *,
    title: str,
    description: str,
    category: TaskCategory,
    custom_name: str | None = None,
) -> Task | None:
    """
    Append a task with a built-in category, or with an existing custom category.

    For TaskCategory.CUSTOM, `custom_name` must name a stored category;
    otherwise nothing is created and None is returned.
    """
    custom: CustomCategory | None = None
    if category is TaskCategory.CUSTOM:
        custom = state.category_store.find(custom_name or "")
        if custom is None:
            logger.info("Unknown custom category %r; task not created.", custom_name)
            return None

    task = Task(title=title, description=description, category=category, custom_category=custom)
    state.tasks.append(task)
    state.task_store.save_active(state.tasks)
    logger.debug("Task created id=%s category=%s", task.id, task.category_name)
    return task


def create_task_with_new_category(
    state: AppState,
    *,
    title: str,
    description: str,
    category_name: str,
    on_duplicate: DuplicateCategoryHook | None = None,
) -> Task | None:
    """
    Create a custom category and a task that uses it.

    - blank name -> nothing happens
    - name already taken -> `on_duplicate(name)` is called, nothing is inserted
    """
    name = category_name.strip()
    if not name:
        return None

    if state.category_store.contains_name(name):
        logger.info("Duplicate custom category %r rejected.", name)
        if on_duplicate is not None:
            on_duplicate(name)
        return None

    category = CustomCategory(name=name)
    state.category_store.upsert(category)

    task = Task(
        title=title,
        description=description,
        category=TaskCategory.CUSTOM,
        custom_category=category,
    )
    state.tasks.append(task)
    state.task_store.save_active(state.tasks)
    logger.debug("Task created id=%s with new category %r", task.id, name)
    return task


def select_task(state: AppState, index: int | None) -> int | None:
    """Toggle selection: selecting the already-selected row clears it."""
    if index is None or state.selected_index == index:
        state.selected_index = None
    else:
        state.selected_index = index
    return state.selected_index


def archive_selected(state: AppState) -> Task | None:
    """
    Move the selected task to the archive and clear the selection.

    The archived snapshot is written before the active one: if the process
    dies in between, the task shows up in both lists instead of neither.
    """
    index = state.selected_index
    state.selected_index = None

    moved = state.task_store.archive_task(state.tasks, state.archive_tasks, index)
    if moved is None:
        return None

    state.task_store.save_archived(state.archive_tasks)
    state.task_store.save_active(state.tasks)
    logger.info("Task moved to archive id=%s", moved.id)
    return moved


def grouped_tasks(tasks: list[Task]) -> list[tuple[str, list[Task]]]:
    """
    Group tasks by category name for display.

    Tasks are first stably sorted by their raw category label, then grouped;
    groups come back ordered by name. The input list is left untouched.
    """
    groups: dict[str, list[Task]] = {}
    for task in sorted(tasks, key=lambda t: t.category.value):
        groups.setdefault(task.category_name, []).append(task)
    return [(name, groups[name]) for name in sorted(groups)]


def picker_categories(state: AppState) -> list[str]:
    options = [TaskCategory.NON_URGENT.value, TaskCategory.URGENT.value]
    options.extend(c.name for c in state.custom_categories)
    options.append(NEW_CATEGORY_OPTION)
    return options


def on_resign_active(state: AppState) -> None:
    """Save both task lists. Safe to call any number of times."""
    state.task_store.save_active(state.tasks)
    state.task_store.save_archived(state.archive_tasks)
    logger.debug(
        "Saved on resign-active: active=%d archived=%d",
        len(state.tasks),
        len(state.archive_tasks),
    )
