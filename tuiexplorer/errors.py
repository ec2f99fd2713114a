"""Error taxonomy for listing and navigation failures.

Only the directory a transition directly depends on can fail it; secondary
listings (parent column, item counts) degrade to empty results instead.
"""

from __future__ import annotations

from pathlib import Path


class ExplorerError(Exception):
    """Base class for recoverable explorer failures tied to one path."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"{path}: {reason}")


class ListingError(ExplorerError):
    """A directory could not be enumerated (missing, not a dir, denied)."""


class NavigationError(ExplorerError):
    """A user-initiated navigation failed; state stays at its last good position."""


__all__ = [
    "ExplorerError",
    "ListingError",
    "NavigationError",
]
