# src/task_mark/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field

from ..tasks.category_store import CategoryStore
from ..tasks.task_models import CustomCategory, Task
from ..tasks.task_store import TaskStore
from .ports import Preferences


@dataclass
class AppState:
    """
    Everything one running session owns.

    Built once by the composition root (cli/bootstrap.py) and passed to the
    front-end. The task lists here are the in-memory source of truth; the
    stores only snapshot them.
    """

    # Store Settings on the state for easy access in other modules later.
    settings: object

    prefs: Preferences
    task_store: TaskStore
    category_store: CategoryStore

    tasks: list[Task] = field(default_factory=list)
    archive_tasks: list[Task] = field(default_factory=list)
    selected_index: int | None = None

    @property
    def custom_categories(self) -> list[CustomCategory]:
        return self.category_store.categories
