"""Directory listing and ordering for the browser's current/parent columns.

Listings are non-recursive snapshots built fresh on every call. Children whose
metadata cannot be read are dropped; only an unreadable directory itself fails.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from ..errors import ListingError
from .types import DirectoryEntry, SortKey

logger = logging.getLogger(__name__)

SortKeyFunc = Callable[[DirectoryEntry], tuple]

_SORT_KEY_FUNCS: dict[SortKey, SortKeyFunc] = {
    SortKey.BY_NAME: lambda entry: (not entry.is_dir, entry.name),
    SortKey.BY_SIZE: lambda entry: (not entry.is_dir, -entry.size, entry.name),
    SortKey.BY_MODIFIED_TIME: lambda entry: (
        not entry.is_dir,
        -entry.modified_at.timestamp(),
        entry.name,
    ),
}


def describe_os_error(exc: OSError) -> str:
    """Return the short human-readable reason carried by an ``OSError``."""
    return exc.strerror or str(exc) or type(exc).__name__


def sort_entries(entries: list[DirectoryEntry], key: SortKey = SortKey.BY_NAME) -> None:
    """Reorder ``entries`` in place: directories first, then by ``key``.

    Size and modification time sort descending; ties fall back to ascending
    case-sensitive name order, so the result is a total order for distinct
    names and re-sorting is idempotent.
    """
    entries.sort(key=_SORT_KEY_FUNCS[key])


def _dangling_link_stat(child: os.DirEntry) -> os.stat_result | None:
    """Return the link's own stat when ``child`` is a symlink, else ``None``."""
    try:
        info = child.stat(follow_symlinks=False)
    except OSError:
        return None
    return info if stat.S_ISLNK(info.st_mode) else None


def _entry_from_dir_entry(directory: Path, child: os.DirEntry) -> DirectoryEntry | None:
    """Build a ``DirectoryEntry`` or return ``None`` when stat fails.

    Symlinks report their target's metadata. A link whose target cannot be
    read falls back to the link itself and is listed as a file.
    """
    try:
        info = child.stat()
        is_dir = child.is_dir()
    except OSError as exc:
        info = _dangling_link_stat(child)
        if info is None:
            logger.debug("skipping unreadable child %s: %s", child.path, describe_os_error(exc))
            return None
        is_dir = False
    return DirectoryEntry(
        name=child.name,
        path=directory / child.name,
        is_dir=is_dir,
        size=max(0, int(info.st_size)),
        modified_at=datetime.fromtimestamp(info.st_mtime),
        mode=int(info.st_mode),
    )


def list_directory(path: Path, sort_key: SortKey = SortKey.BY_NAME) -> list[DirectoryEntry]:
    """Return the sorted immediate children of ``path``.

    Raises ``ListingError`` when the directory cannot be enumerated.
    """
    directory = Path(path)
    entries: list[DirectoryEntry] = []
    try:
        with os.scandir(directory) as children:
            for child in children:
                entry = _entry_from_dir_entry(directory, child)
                if entry is not None:
                    entries.append(entry)
    except OSError as exc:
        raise ListingError(directory, describe_os_error(exc)) from exc

    sort_entries(entries, sort_key)
    return entries


def count_directory_items(path: Path) -> int:
    """Return how many children ``list_directory`` reports, ``0`` when unreadable."""
    try:
        return len(list_directory(path))
    except ListingError as exc:
        logger.debug("item count unavailable for %s: %s", path, exc.reason)
        return 0


__all__ = [
    "describe_os_error",
    "sort_entries",
    "list_directory",
    "count_directory_items",
]
