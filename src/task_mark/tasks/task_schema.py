# src/task_mark/tasks/task_schema.py

"""
Wire schema for persisted task lists.

Task lists are stored as one JSON blob per list. Decoding is all-or-nothing:
a single bad record fails the whole list (see TaskStore).
"""

from __future__ import annotations

import uuid
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictBool, TypeAdapter

from .task_models import CustomCategory, Task, TaskCategory, parse_uuid_string


def _canonical_uuid(value: Any) -> Any:
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str):
        raise ValueError("id must be a UUID string")
    parsed = parse_uuid_string(value)
    if parsed is None:
        raise ValueError("id must be a hyphenated UUID")
    return parsed


StoredUUID = Annotated[uuid.UUID, BeforeValidator(_canonical_uuid)]


class CategoryRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: StoredUUID
    name: str


class TaskRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: StoredUUID
    title: str
    description: str
    is_completed: StrictBool = Field(alias="isCompleted")
    category: TaskCategory
    custom_category: CategoryRecord | None = Field(default=None, alias="customCategory")


TASK_LIST_ADAPTER = TypeAdapter(list[TaskRecord])


def task_to_record(task: Task) -> TaskRecord:
    custom = None
    if task.custom_category is not None:
        custom = CategoryRecord(id=task.custom_category.id, name=task.custom_category.name)
    return TaskRecord(
        id=task.id,
        title=task.title,
        description=task.description,
        is_completed=task.is_completed,
        category=task.category,
        custom_category=custom,
    )


def record_to_task(record: TaskRecord) -> Task:
    custom = None
    if record.custom_category is not None:
        custom = CustomCategory(id=record.custom_category.id, name=record.custom_category.name)
    return Task(
        id=record.id,
        title=record.title,
        description=record.description,
        is_completed=record.is_completed,
        category=record.category,
        custom_category=custom,
    )


def encode_tasks(tasks: list[Task]) -> bytes:
    records = [task_to_record(t) for t in tasks]
    return TASK_LIST_ADAPTER.dump_json(records, by_alias=True, exclude_none=True)


def decode_tasks(blob: bytes) -> list[Task]:
    """Raises pydantic.ValidationError if any record is malformed."""
    return [record_to_task(r) for r in TASK_LIST_ADAPTER.validate_json(blob)]
