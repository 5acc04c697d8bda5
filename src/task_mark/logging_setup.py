# src/task_mark/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "task_mark.log"
LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Lowest level a logger may print to the console, by name prefix (longest
# match wins). The storage backends log each preference write at DEBUG and
# a "ready" line at INFO; both belong in the file only. Store decode
# warnings (task_mark.tasks) and command/loop messages (task_mark.cli,
# task_mark.connectors) pass through at the handler's own level.
CONSOLE_THRESHOLDS: dict[str, int] = {
    "task_mark": logging.NOTSET,
    "task_mark.storage": logging.WARNING,
}

# Captured warnings ("py.warnings") and third-party loggers.
OTHER_CONSOLE_THRESHOLD = logging.ERROR


def console_threshold(logger_name: str, thresholds: dict[str, int] | None = None) -> int:
    table = CONSOLE_THRESHOLDS if thresholds is None else thresholds
    best: str | None = None
    for prefix in table:
        if logger_name == prefix or logger_name.startswith(prefix + "."):
            if best is None or len(prefix) > len(best):
                best = prefix
    return OTHER_CONSOLE_THRESHOLD if best is None else table[best]


class ConsoleThresholdFilter(logging.Filter):
    """Drops records below `console_threshold` for their logger."""

    def __init__(self, thresholds: dict[str, int] | None = None) -> None:
        super().__init__()
        self._thresholds = thresholds

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno >= console_threshold(record.name, self._thresholds)


def setup_logging(
    *,
    log_dir: str | Path = ".local/task_mark",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Send everything to <log_dir>/task_mark.log and a trimmed view to stderr.

    The console is shared with the REPL prompt, so it only gets what
    ConsoleThresholdFilter lets through. Replaces whatever handlers the root
    logger had. Returns the log file path.
    """
    log_file = Path(log_dir) / LOG_FILE_NAME
    log_file.parent.mkdir(parents=True, exist_ok=True)

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.addFilter(ConsoleThresholdFilter())

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(file_level)

    for handler in (console, file_handler):
        handler.setFormatter(formatter)

    logging.basicConfig(level=logging.DEBUG, handlers=[console, file_handler], force=True)
    logging.captureWarnings(True)
    return log_file
