# tests/test_preferences.py

from __future__ import annotations

from pathlib import Path

import pytest

from task_mark.storage.preferences import JsonFilePreferences, SqlitePreferences, open_preferences


@pytest.fixture(params=["sqlite", "json"])
def backend(request, tmp_path: Path):
    if request.param == "sqlite":
        return SqlitePreferences(tmp_path / "prefs.sqlite3")
    return JsonFilePreferences(tmp_path / "prefs.json")


def test_value_and_data_round_trip(backend) -> None:
    backend.set_value("savedCustomCategories", [{"id": "a", "name": "Home"}])
    backend.set_data("tasks", b"\x00\x01[]")

    assert backend.get_value("savedCustomCategories") == [{"id": "a", "name": "Home"}]
    assert backend.get_data("tasks") == b"\x00\x01[]"


def test_missing_keys_read_as_none(backend) -> None:
    assert backend.get_value("nope") is None
    assert backend.get_data("nope") is None


def test_reading_other_kind_returns_none(backend) -> None:
    backend.set_value("k", [1, 2])
    assert backend.get_data("k") is None

    backend.set_data("k", b"blob")
    assert backend.get_value("k") is None
    assert backend.get_data("k") == b"blob"


def test_overwrite_and_remove(backend) -> None:
    backend.set_value("k", "one")
    backend.set_value("k", "two")
    assert backend.get_value("k") == "two"

    backend.remove("k")
    assert backend.get_value("k") is None
    backend.remove("k")


def test_sqlite_survives_reopen(tmp_path: Path) -> None:
    path = tmp_path / "prefs.sqlite3"
    SqlitePreferences(path).set_data("tasks", b"[]")

    reopened = SqlitePreferences(path)
    assert reopened.get_data("tasks") == b"[]"
    assert reopened.count_keys() == 1


def test_json_unreadable_file_is_empty(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text("{broken", "utf-8")

    prefs = JsonFilePreferences(path)
    assert prefs.get_value("tasks") is None

    prefs.set_value("tasks", [])
    assert JsonFilePreferences(path).get_value("tasks") == []


def test_open_preferences_picks_backend(tmp_path: Path) -> None:
    assert isinstance(open_preferences("json", tmp_path / "p.json"), JsonFilePreferences)
    assert isinstance(open_preferences("sqlite", tmp_path / "p.sqlite3"), SqlitePreferences)
    assert isinstance(open_preferences("weird", tmp_path / "q.sqlite3"), SqlitePreferences)
