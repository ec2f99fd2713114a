"""Navigation state machine behind the browser view.

``NavigationState`` owns the current directory snapshot, the parent snapshot,
hidden-file and search filters, and the selection index. It never touches the
terminal: the shell reads ``visible_entries``/``selected_index`` after each
transition and re-renders.

Transitions that list a directory are all-or-nothing: every new value is
computed into locals first, and fields are assigned only once nothing else
can fail.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from .errors import ListingError, NavigationError
from .filesystem import (
    DirectoryEntry,
    SortKey,
    filesystem_root,
    is_root,
    list_directory,
    parent_of,
    resolve_absolute_path,
    sort_entries,
    user_home_directory,
)

logger = logging.getLogger(__name__)

DirectoryLister = Callable[[Path, SortKey], list[DirectoryEntry]]


def filter_visible_entries(
    entries: Sequence[DirectoryEntry],
    show_hidden: bool,
    search_query: str | None = None,
) -> list[DirectoryEntry]:
    """Apply hidden-name exclusion, then case-folded substring search.

    This is the only place the visible subset is computed; rendering,
    selection and key handling all index into its result.
    """
    visible = [entry for entry in entries if show_hidden or not entry.is_hidden]
    if search_query:
        folded_query = search_query.casefold()
        visible = [entry for entry in visible if folded_query in entry.name.casefold()]
    return visible


class NavigationState:
    """Current view of the filesystem plus the transitions that change it."""

    def __init__(
        self,
        current_path: Path,
        current_entries: list[DirectoryEntry] | None = None,
        parent_entries: list[DirectoryEntry] | None = None,
        *,
        show_hidden: bool = False,
        sort_key: SortKey = SortKey.BY_NAME,
        lister: DirectoryLister = list_directory,
    ) -> None:
        self.current_path = current_path
        self.current_entries: list[DirectoryEntry] = list(current_entries or [])
        self.parent_entries: list[DirectoryEntry] = list(parent_entries or [])
        self.show_hidden = show_hidden
        self.search_query: str | None = None
        self.selected_index = 0
        self.sort_key = sort_key
        self._lister = lister

    @classmethod
    def start(
        cls,
        start_directory: Path | str | None = None,
        *,
        show_hidden: bool = False,
        lister: DirectoryLister = list_directory,
    ) -> NavigationState:
        """Create a session state at ``start_directory``, home, or root, in that order.

        Raises the root's ``NavigationError`` when none of them can be listed.
        """
        state = cls(filesystem_root(), show_hidden=show_hidden, lister=lister)
        candidates: list[Path | str] = []
        if start_directory:
            candidates.append(start_directory)
        candidates.append(user_home_directory())

        for candidate in candidates:
            try:
                state.enter(candidate)
            except NavigationError as exc:
                logger.warning("cannot start in %s: %s", candidate, exc.reason)
                continue
            return state
        state.enter(filesystem_root())
        return state

    @property
    def visible_entries(self) -> list[DirectoryEntry]:
        return filter_visible_entries(self.current_entries, self.show_hidden, self.search_query)

    @property
    def visible_parent_entries(self) -> list[DirectoryEntry]:
        return filter_visible_entries(self.parent_entries, self.show_hidden)

    @property
    def selected_entry(self) -> DirectoryEntry | None:
        visible = self.visible_entries
        if 0 <= self.selected_index < len(visible):
            return visible[self.selected_index]
        return None

    def _list_parent(self, path: Path) -> list[DirectoryEntry]:
        """List the parent of ``path``; root or an unreadable parent yields ``[]``."""
        if is_root(path):
            return []
        parent = parent_of(path)
        try:
            return self._lister(parent, self.sort_key)
        except ListingError as exc:
            logger.debug("parent listing unavailable for %s: %s", parent, exc.reason)
            return []

    def _load(self, path: Path | str) -> tuple[Path, list[DirectoryEntry], list[DirectoryEntry]]:
        """Resolve and list ``path`` without mutating state."""
        absolute = resolve_absolute_path(path)
        try:
            entries = self._lister(absolute, self.sort_key)
        except ListingError as exc:
            raise NavigationError(absolute, exc.reason) from exc
        return absolute, entries, self._list_parent(absolute)

    def _clamp_selection(self) -> None:
        count = len(self.visible_entries)
        self.selected_index = max(0, min(self.selected_index, count - 1)) if count else 0

    def enter(self, path: Path | str) -> None:
        """Navigate to ``path``; on failure raise ``NavigationError`` and change nothing."""
        absolute, entries, parent_entries = self._load(path)
        self.current_path = absolute
        self.current_entries = entries
        self.parent_entries = parent_entries
        self.selected_index = 0
        self.search_query = None
        logger.debug("entered %s (%d entries)", absolute, len(entries))

    def enter_selected(self) -> DirectoryEntry | None:
        """Enter the selected directory, or return the selected file for opening.

        Returns ``None`` when nothing is selected or a directory was entered.
        """
        entry = self.selected_entry
        if entry is None:
            return None
        if entry.is_dir:
            self.enter(entry.path)
            return None
        return entry

    def go_to_parent(self) -> None:
        """Enter the parent directory; does nothing at the filesystem root."""
        if is_root(self.current_path):
            return
        self.enter(parent_of(self.current_path))

    def refresh(self) -> None:
        """Re-list the current directory keeping filters and a clamped selection."""
        absolute, entries, parent_entries = self._load(self.current_path)
        self.current_path = absolute
        self.current_entries = entries
        self.parent_entries = parent_entries
        self._clamp_selection()

    def toggle_hidden(self) -> None:
        self.show_hidden = not self.show_hidden
        self.selected_index = 0

    def set_sort_key(self, key: SortKey) -> None:
        """Re-sort both listings with ``key`` and use it for later listings."""
        self.sort_key = key
        sort_entries(self.current_entries, key)
        sort_entries(self.parent_entries, key)
        self.selected_index = 0

    def move_selection(self, delta: int) -> None:
        """Move the selection by ``delta`` rows, clamped to the visible list."""
        self.selected_index += delta
        self._clamp_selection()

    def jump_to_top(self) -> None:
        self.selected_index = 0

    def jump_to_bottom(self) -> None:
        self.selected_index = max(0, len(self.visible_entries) - 1)

    def apply_search(self, query: str) -> None:
        """Narrow the visible list to names containing ``query``; empty clears."""
        self.search_query = query or None
        self.selected_index = 0

    def clear_search(self) -> None:
        self.search_query = None
        self.selected_index = 0


__all__ = [
    "DirectoryLister",
    "filter_visible_entries",
    "NavigationState",
]
