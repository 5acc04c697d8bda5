# src/task_mark/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Settings stay injectable: bootstrap accepts any object with the same attributes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKMARK"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


_DEFAULT_PREFS_FILES = {
    "sqlite": "preferences.sqlite3",
    "json": "preferences.json",
}


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Front-end ----
    console_enabled: bool

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    prefs_backend: str
    prefs_path: Path

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "Task Mark")
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/task_mark"))
        prefs_backend = _env(_k("PREFS_BACKEND"), "sqlite").strip().lower()
        if prefs_backend not in _DEFAULT_PREFS_FILES:
            prefs_backend = "sqlite"
        prefs_path = _env_path(_k("PREFS_PATH"), data_dir / _DEFAULT_PREFS_FILES[prefs_backend])

        return Settings(
            app_name=app_name,
            log_level=log_level,
            console_enabled=console_enabled,
            data_dir=data_dir,
            prefs_backend=prefs_backend,
            prefs_path=prefs_path,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
