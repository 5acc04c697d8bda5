# src/task_mark/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, loads the stored snapshots, then runs
the console front-end. Leaving the console (or SIGTERM/SIGINT) counts as the
app losing foreground: both task lists are saved.
"""

from __future__ import annotations

import logging
import signal
import threading

from ..cli.bootstrap import create_initial_state, load_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..tasks.task_api import on_resign_active

logger = logging.getLogger(__name__)


def _shutdown(state) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        on_resign_active(state)
    except Exception:
        logger.exception("Failed to save task lists.")

    try:
        prefs = getattr(state, "prefs", None)
        if prefs is not None and hasattr(prefs, "close"):
            prefs.close()
    except Exception:
        logger.debug("Preferences close failed.", exc_info=True)


def _make_signal_handler(state):
    """SIGTERM ends the session like leaving the console: save, then unwind main()."""

    def _handle_signal(signum, _frame) -> None:
        logger.info("Signal %s received, saving and exiting...", signum)
        on_resign_active(state)
        raise SystemExit(0)

    return _handle_signal


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_dir = getattr(settings, "data_dir", ".local/task_mark")
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s...", getattr(settings, "app_name", "Task Mark"))

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)
    load_state(state)

    try:
        signal.signal(signal.SIGTERM, _make_signal_handler(state))
    except (ValueError, OSError):
        # Not in the main thread, or platform without SIGTERM.
        logger.debug("SIGTERM handler not installed.", exc_info=True)

    try:
        if settings.console_enabled:
            run_console_loop(state)
        else:
            logger.info("Console disabled. Waiting for a signal; press Ctrl+C to stop.")
            try:
                threading.Event().wait()
            except KeyboardInterrupt:
                logger.info("KeyboardInterrupt, shutting down...")
    finally:
        _shutdown(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
