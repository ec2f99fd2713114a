"""Path resolution helpers used by navigation transitions."""

from __future__ import annotations

import os
from pathlib import Path

from ..errors import NavigationError


def filesystem_root(path: Path | None = None) -> Path:
    """Return the root (anchor) of ``path``, or of the current drive."""
    anchor = Path(path).anchor if path is not None else ""
    return Path(anchor or os.sep)


def resolve_absolute_path(path: Path | str) -> Path:
    """Expand ``~``, make ``path`` absolute and collapse ``..`` segments.

    Symlinks are kept as typed so the path bar shows what the user entered.
    Raises ``NavigationError`` when the path cannot be resolved.
    """
    raw = str(path)
    if not raw.strip():
        raise NavigationError(raw, "empty path")
    try:
        return Path(os.path.abspath(os.path.expanduser(raw)))
    except (OSError, RuntimeError, ValueError) as exc:
        raise NavigationError(raw, str(exc) or type(exc).__name__) from exc


def parent_of(path: Path) -> Path:
    """Return the lexical parent of ``path``; the root is its own parent."""
    return path.parent


def is_root(path: Path) -> bool:
    return parent_of(path) == path


def user_home_directory() -> Path:
    """Return the user's home directory, or the filesystem root when unknown."""
    try:
        home = Path.home()
    except (KeyError, OSError, RuntimeError):
        return filesystem_root()
    if not str(home) or not home.is_absolute():
        return filesystem_root()
    return home


__all__ = [
    "filesystem_root",
    "resolve_absolute_path",
    "parent_of",
    "is_root",
    "user_home_directory",
]
