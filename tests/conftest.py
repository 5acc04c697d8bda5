# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from task_mark.cli.bootstrap import create_initial_state
from task_mark.core.state import AppState
from task_mark.tasks.category_store import CategoryStore
from task_mark.tasks.task_store import TaskStore

from .fakes import FakePreferences


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and AppState.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="Task Mark (test)",
        log_level="DEBUG",
        console_enabled=True,
        data_dir=tmp_path / "data",
        prefs_backend="sqlite",
        prefs_path=tmp_path / "data" / "preferences.sqlite3",
    )


@pytest.fixture()
def prefs() -> FakePreferences:
    return FakePreferences()


@pytest.fixture()
def state(prefs: FakePreferences) -> AppState:
    """AppState over in-memory preferences."""
    return AppState(
        settings=SimpleNamespace(app_name="Task Mark (test)"),
        prefs=prefs,
        task_store=TaskStore(prefs),
        category_store=CategoryStore(prefs),
    )


@pytest.fixture()
def sqlite_state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired exactly like the CLI does it.

    NOTE: We keep a real SQLite preferences file here because its
    correctness is part of what we want to test.
    """
    return create_initial_state(settings=settings)
