# tests/fakes.py

from __future__ import annotations

import copy
from typing import Any


class FakePreferences:
    """
    In-memory Preferences used by store tests.

    Mirrors the real backends: values and blobs live in separate kinds, and
    reading a key of the other kind returns None.
    """

    def __init__(self) -> None:
        self.values: dict[str, Any] = {}
        self.blobs: dict[str, bytes] = {}
        self.writes: list[str] = []

    def get_value(self, key: str) -> Any | None:
        if key not in self.values:
            return None
        return copy.deepcopy(self.values[key])

    def set_value(self, key: str, value: Any) -> None:
        self.blobs.pop(key, None)
        self.values[key] = copy.deepcopy(value)
        self.writes.append(key)

    def get_data(self, key: str) -> bytes | None:
        return self.blobs.get(key)

    def set_data(self, key: str, data: bytes) -> None:
        self.values.pop(key, None)
        self.blobs[key] = bytes(data)
        self.writes.append(key)

    def remove(self, key: str) -> None:
        self.values.pop(key, None)
        self.blobs.pop(key, None)


class FailingPreferences(FakePreferences):
    """Reads work; every write raises (disk full, read-only storage, ...)."""

    def set_value(self, key: str, value: Any) -> None:
        raise OSError("write refused")

    def set_data(self, key: str, data: bytes) -> None:
        raise OSError("write refused")
