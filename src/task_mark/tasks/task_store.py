# src/task_mark/tasks/task_store.py

from __future__ import annotations

import logging

from pydantic import ValidationError

from ..core.ports import Preferences
from .task_models import Task
from .task_schema import decode_tasks, encode_tasks

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"
ARCHIVE_TASKS_KEY = "archiveTasks"


class TaskStore:
    """
    Active and archived task lists, persisted as two independent snapshots.

    Every save overwrites the whole list. Loading is all-or-nothing per list:
    if the blob is missing or any record fails schema validation the result is
    an empty list (no partial recovery).
    """

    def __init__(self, prefs: Preferences) -> None:
        self._prefs = prefs

    # ---- low-level helpers ----

    def _load(self, key: str) -> list[Task]:
        blob = self._prefs.get_data(key)
        if blob is None:
            return []
        try:
            tasks = decode_tasks(blob)
        except ValidationError as e:
            logger.warning("Failed to decode %s (%d errors); using empty list.", key, e.error_count())
            return []
        logger.debug("Loaded %d tasks from %s", len(tasks), key)
        return tasks

    def _save(self, key: str, tasks: list[Task]) -> None:
        try:
            self._prefs.set_data(key, encode_tasks(tasks))
        except Exception:
            logger.exception("Failed to persist %s (%d tasks).", key, len(tasks))
            return
        logger.debug("Saved %d tasks to %s", len(tasks), key)

    # ---- public API ----

    def load_active(self) -> list[Task]:
        return self._load(TASKS_KEY)

    def load_archived(self) -> list[Task]:
        return self._load(ARCHIVE_TASKS_KEY)

    def save_active(self, tasks: list[Task]) -> None:
        self._save(TASKS_KEY, tasks)

    def save_archived(self, tasks: list[Task]) -> None:
        self._save(ARCHIVE_TASKS_KEY, tasks)

    @staticmethod
    def archive_task(active: list[Task], archived: list[Task], index: int | None) -> Task | None:
        """
        Move active[index] to the end of `archived`, in place.

        Returns the moved task, or None (and touches nothing) if `index` is not
        a valid position in `active`. Negative indexes are rejected.
        """
        if index is None or index < 0 or index >= len(active):
            return None
        task = active.pop(index)
        archived.append(task)
        return task
