# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
See src/task_mark/config.py.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKMARK_APP_NAME": "App display name (default: Task Mark).",
    "TASKMARK_LOG_LEVEL": "Console logging level (default: INFO).",
    # Front-end
    "TASKMARK_CONSOLE_ENABLED": "Run the interactive console (true/false, default: true).",
    # Paths (gitignored)
    "TASKMARK_DATA_DIR": "Local data directory (default: .local/task_mark).",
    "TASKMARK_PREFS_BACKEND": "Preferences storage: sqlite | json (default: sqlite).",
    "TASKMARK_PREFS_PATH": (
        "Preferences file (default: <data_dir>/preferences.sqlite3 or <data_dir>/preferences.json)."
    ),
}
