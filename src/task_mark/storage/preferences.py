# src/task_mark/storage/preferences.py

from __future__ import annotations

import base64
import binascii
import contextlib
import json
import logging
import os
import sqlite3
import time
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_KIND_VALUE = "value"
_KIND_DATA = "data"


class SqlitePreferences:
    """
    SQLite-backed key-value preferences.

    One row per key. `kind` tells structured values (stored as JSON text)
    from raw byte blobs.

    Thread-safety:
    - each method opens its own SQLite connection
    """

    def __init__(self, db_path: str | Path = "preferences.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()
        try:
            total = self.count_keys()
        except Exception:
            total = -1
        logger.info("SqlitePreferences ready db=%s keys=%s", self._db_path, total)

    def close(self) -> None:
        """Compatibility hook for shutdown (no persistent connections to close)."""
        return

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(Exception):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS preferences (
                    key TEXT PRIMARY KEY,
                    kind TEXT NOT NULL,
                    value BLOB,
                    updated_at REAL NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    def _read(self, key: str) -> sqlite3.Row | None:
        conn = self._get_conn()
        try:
            cur = conn.execute("SELECT kind, value FROM preferences WHERE key = ?", (key,))
            return cur.fetchone()
        finally:
            conn.close()

    def _write(self, key: str, kind: str, value: str | bytes) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                INSERT INTO preferences(key, kind, value, updated_at)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET
                    kind = excluded.kind,
                    value = excluded.value,
                    updated_at = excluded.updated_at
                """,
                (key, kind, value, time.time()),
            )
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    def count_keys(self) -> int:
        conn = self._get_conn()
        try:
            (n,) = conn.execute("SELECT COUNT(*) FROM preferences").fetchone()
            return int(n)
        finally:
            conn.close()

    def get_value(self, key: str) -> Any | None:
        row = self._read(key)
        if row is None or row["kind"] != _KIND_VALUE:
            return None
        raw = row["value"]
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8", errors="replace")
        try:
            return json.loads(raw)
        except (TypeError, ValueError):
            logger.warning("Preference %r holds unreadable JSON; ignoring.", key)
            return None

    def set_value(self, key: str, value: Any) -> None:
        self._write(key, _KIND_VALUE, json.dumps(value, ensure_ascii=False))
        logger.debug("Preference value saved key=%s", key)

    def get_data(self, key: str) -> bytes | None:
        row = self._read(key)
        if row is None or row["kind"] != _KIND_DATA:
            return None
        raw = row["value"]
        return bytes(raw) if raw is not None else None

    def set_data(self, key: str, data: bytes) -> None:
        self._write(key, _KIND_DATA, sqlite3.Binary(bytes(data)))
        logger.debug("Preference data saved key=%s bytes=%d", key, len(data))

    def remove(self, key: str) -> None:
        conn = self._get_conn()
        try:
            conn.execute("DELETE FROM preferences WHERE key = ?", (key,))
            conn.commit()
        finally:
            conn.close()


class JsonFilePreferences:
    """
    Preferences kept in a single JSON document.

    Layout: {"<key>": {"kind": "value", "value": ...} | {"kind": "data", "data": "<base64>"}}

    The file is re-read on every access and rewritten atomically (tmp + replace)
    on every write. An unreadable file is treated as empty.
    """

    def __init__(self, path: str | Path = "preferences.json") -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("JsonFilePreferences ready path=%s", self._path)

    def close(self) -> None:
        return

    def _load(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except (OSError, ValueError):
            logger.warning("Failed to read preferences from %s; treating as empty.", self._path)
            return {}
        return data if isinstance(data, dict) else {}

    def _dump(self, data: dict[str, Any]) -> None:
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)

    def get_value(self, key: str) -> Any | None:
        entry = self._load().get(key)
        if not isinstance(entry, dict) or entry.get("kind") != _KIND_VALUE:
            return None
        return entry.get("value")

    def set_value(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = {"kind": _KIND_VALUE, "value": value}
        self._dump(data)

    def get_data(self, key: str) -> bytes | None:
        entry = self._load().get(key)
        if not isinstance(entry, dict) or entry.get("kind") != _KIND_DATA:
            return None
        raw = entry.get("data")
        if not isinstance(raw, str):
            return None
        try:
            return base64.b64decode(raw, validate=True)
        except (binascii.Error, ValueError):
            logger.warning("Preference %r holds invalid base64; ignoring.", key)
            return None

    def set_data(self, key: str, data: bytes) -> None:
        doc = self._load()
        doc[key] = {"kind": _KIND_DATA, "data": base64.b64encode(bytes(data)).decode("ascii")}
        self._dump(doc)

    def remove(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._dump(data)


def open_preferences(backend: str, path: str | Path):
    """Build the configured preferences backend ("sqlite" or "json")."""
    name = (backend or "sqlite").strip().lower()
    if name == "json":
        return JsonFilePreferences(path)
    if name != "sqlite":
        logger.warning("Unknown preferences backend %r; using sqlite.", backend)
    return SqlitePreferences(path)
