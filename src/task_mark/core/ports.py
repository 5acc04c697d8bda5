# src/task_mark/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The stores depend on a Protocol instead of a concrete preferences backend.
This keeps storage swappable (SQLite file, JSON file, in-memory fakes in tests).
"""

from typing import Any, Protocol


class Preferences(Protocol):
    """
    Local key-value preference storage.

    Two kinds of values live under string keys:
    - structured values (JSON-compatible: lists, dicts, strings, numbers, bools)
    - raw byte blobs

    Reading a key that holds the other kind returns None.
    """

    def get_value(self, key: str) -> Any | None: ...
    def set_value(self, key: str, value: Any) -> None: ...

    def get_data(self, key: str) -> bytes | None: ...
    def set_data(self, key: str, data: bytes) -> None: ...

    def remove(self, key: str) -> None: ...
