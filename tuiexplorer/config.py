"""Read-only JSON config helpers.

Supplies the start directory, hidden-file default, theme, Pygments style,
editor candidates, and debug logging switch. Nothing is ever written back.
All access is defensive: malformed or missing config falls back safely.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_config_dir

logger = logging.getLogger(__name__)

APP_NAME = "tuiexplorer"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME
DEFAULT_STYLE = "monokai"
DEFAULT_EDITOR_CANDIDATES: tuple[str, ...] = ("nano", "vim", "vi", "emacs", "gedit", "code")


@dataclass(frozen=True)
class ExplorerConfig:
    """Validated settings; every field has a usable default."""

    start_directory: Path | None = None
    show_hidden: bool = False
    theme: str | None = None
    style: str = DEFAULT_STYLE
    editors: tuple[str, ...] = field(default=DEFAULT_EDITOR_CANDIDATES)
    debug: bool = False


def load_config_data() -> dict[str, object]:
    """Load the raw JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _nonempty_str(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def _editor_candidates(value: object) -> tuple[str, ...]:
    """Keep non-empty string commands; fall back to defaults when none remain."""
    if not isinstance(value, list):
        return DEFAULT_EDITOR_CANDIDATES
    commands = tuple(cmd for cmd in (_nonempty_str(item) for item in value) if cmd is not None)
    return commands or DEFAULT_EDITOR_CANDIDATES


def load_config() -> ExplorerConfig:
    """Load and validate config, ignoring each invalid key independently."""
    data = load_config_data()

    start_directory = _nonempty_str(data.get("start_directory"))
    show_hidden = data.get("show_hidden")
    debug = data.get("debug")
    return ExplorerConfig(
        start_directory=Path(start_directory).expanduser() if start_directory else None,
        show_hidden=show_hidden if isinstance(show_hidden, bool) else False,
        theme=_nonempty_str(data.get("theme")),
        style=_nonempty_str(data.get("style")) or DEFAULT_STYLE,
        editors=_editor_candidates(data.get("editors")),
        debug=debug if isinstance(debug, bool) else False,
    )


__all__ = [
    "APP_NAME",
    "CONFIG_PATH",
    "DEFAULT_STYLE",
    "DEFAULT_EDITOR_CANDIDATES",
    "ExplorerConfig",
    "load_config_data",
    "load_config",
]
