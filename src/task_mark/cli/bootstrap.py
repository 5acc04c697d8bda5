# src/task_mark/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the preferences backend and both stores into AppState,
- loads the persisted snapshots into memory.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import get_settings
from ..core.state import AppState
from ..storage.preferences import open_preferences
from ..tasks.category_store import CategoryStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    Path(settings.data_dir).mkdir(parents=True, exist_ok=True)
    Path(settings.prefs_path).parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    prefs = open_preferences(
        str(getattr(settings, "prefs_backend", "sqlite")),
        settings.prefs_path,
    )
    return AppState(
        settings=settings,
        prefs=prefs,
        task_store=TaskStore(prefs),
        category_store=CategoryStore(prefs),
    )


def load_state(state: AppState) -> None:
    """Read active tasks, archived tasks and custom categories into memory."""
    state.tasks = state.task_store.load_active()
    state.archive_tasks = state.task_store.load_archived()
    state.category_store.load_all()
    state.selected_index = None

    if state.tasks:
        logger.info("Loaded %d active and %d archived tasks.", len(state.tasks), len(state.archive_tasks))
    else:
        logger.info("No active tasks loaded (%d archived).", len(state.archive_tasks))
