"""Filesystem collaborators: directory snapshots, path helpers, disk usage.

This package contains non-UI primitives only:
- ``DirectoryEntry``/``SortKey`` datatypes
- one-level directory listing with directories-first ordering
- path resolution with a root/home fallback
- mounted-partition usage summaries
"""

from __future__ import annotations

from .types import DirectoryEntry, SortKey
from .lister import count_directory_items, describe_os_error, list_directory, sort_entries
from .paths import filesystem_root, is_root, parent_of, resolve_absolute_path, user_home_directory
from .disks import DiskStatus, free_bytes, list_disks

__all__ = [
    "DirectoryEntry",
    "SortKey",
    "list_directory",
    "sort_entries",
    "count_directory_items",
    "describe_os_error",
    "filesystem_root",
    "resolve_absolute_path",
    "parent_of",
    "is_root",
    "user_home_directory",
    "DiskStatus",
    "list_disks",
    "free_bytes",
]
