"""Domain datatypes for one directory snapshot."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class DirectoryEntry:
    """One immediate child of a listed directory plus the metadata observed for it."""

    name: str
    path: Path
    is_dir: bool
    size: int
    modified_at: datetime
    mode: int

    @property
    def is_hidden(self) -> bool:
        return self.name.startswith(".")


class SortKey(enum.Enum):
    """Ordering applied within the directory and file groups of a listing."""

    BY_NAME = "name"
    BY_SIZE = "size"
    BY_MODIFIED_TIME = "modified"

    @property
    def label(self) -> str:
        return self.value

    def next(self) -> SortKey:
        """Return the key that follows this one when cycling sort modes."""
        members = list(SortKey)
        return members[(members.index(self) + 1) % len(members)]


__all__ = [
    "DirectoryEntry",
    "SortKey",
]
