# src/task_mark/tasks/task_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import StrEnum


class TaskCategory(StrEnum):
    """
    Built-in task categories.

    Values are the labels shown to the user and written to storage.
    """

    URGENT = "Urgent"
    NON_URGENT = "Non-Urgent"
    CUSTOM = "Custom"


def parse_uuid_string(raw: str) -> uuid.UUID | None:
    """
    Parse the 8-4-4-4-12 hyphenated form only (either case).

    uuid.UUID() also takes braces, "urn:uuid:" and bare hex; stored ids
    in those shapes count as malformed.
    """
    try:
        value = uuid.UUID(raw)
    except (TypeError, ValueError, AttributeError):
        return None
    if str(value) != raw.lower():
        return None
    return value


@dataclass(frozen=True, slots=True)
class CustomCategory:
    name: str
    id: uuid.UUID = field(default_factory=uuid.uuid4)


def category_key(category: CustomCategory) -> str:
    """Identity used for deduplication: two categories with the same name are the same category."""
    return category.name


@dataclass(eq=False, slots=True)
class Task:
    """
    A tracked task.

    Equality and hashing use `id` only: two tasks with identical content but
    different ids are distinct.
    """

    title: str
    description: str
    category: TaskCategory
    custom_category: CustomCategory | None = None
    is_completed: bool = False
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @property
    def category_name(self) -> str:
        if self.category is TaskCategory.CUSTOM:
            return self.custom_category.name if self.custom_category is not None else ""
        return self.category.value

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Task):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)
