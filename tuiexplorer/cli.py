"""Command-line front door for tuiexplorer.

Loads config, sets up logging, and dispatches into the interactive runtime.
Startup failures are reported on stderr with a non-zero exit code.
"""

from __future__ import annotations

import argparse
import logging
import logging.handlers
import os
import sys
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME, CONFIG_PATH, load_config
from .errors import NavigationError
from .runtime import run_explorer
from .terminal import TerminalUnavailableError

DEBUG_ENV_VAR = "TUIEXPLORER_DEBUG"
LOG_FILENAME = "debug.log"

logger = logging.getLogger(__name__)


def debug_requested(config_debug: bool) -> bool:
    """Debug logging is on when config says so or ``TUIEXPLORER_DEBUG`` is truthy."""
    env_value = os.environ.get(DEBUG_ENV_VAR, "").strip().lower()
    return config_debug or env_value in {"1", "true", "yes", "on"}


def _configure_logging(debug: bool) -> None:
    """Configure logging. When debug=True, logs to file at DEBUG level.

    An unwritable log directory leaves logging off after a stderr warning.
    """
    if not debug:
        # The TUI owns the screen; stray records would corrupt it.
        logging.disable(logging.CRITICAL)
        return

    log_dir = Path(user_log_dir(APP_NAME, appauthor=False))
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            log_dir / LOG_FILENAME,
            maxBytes=1024 * 1024,
            backupCount=2,
            encoding="utf-8",
        )
    except OSError as exc:
        print(f"{APP_NAME}: warning: cannot write debug log in {log_dir}: {exc}", file=sys.stderr)
        logging.disable(logging.CRITICAL)
        return
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s",
            datefmt="%H:%M:%S",
        )
    )
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG)


def build_parser() -> argparse.ArgumentParser:
    return argparse.ArgumentParser(
        prog=APP_NAME,
        description="Browse the filesystem in a three-column terminal view.",
        epilog=f"Settings are read from {CONFIG_PATH}.",
    )


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments and run the browser. Returns the process exit code."""
    build_parser().parse_args(argv)
    config = load_config()
    _configure_logging(debug_requested(config.debug))

    try:
        run_explorer(config)
    except TerminalUnavailableError as exc:
        print(f"{APP_NAME}: {exc}", file=sys.stderr)
        return 1
    except NavigationError as exc:
        logger.error("no start directory could be listed: %s", exc)
        print(f"{APP_NAME}: cannot open start directory: {exc}", file=sys.stderr)
        return 1
    return 0


__all__ = [
    "DEBUG_ENV_VAR",
    "debug_requested",
    "build_parser",
    "main",
]
