"""Presentation-side session state.

``ShellState`` wraps the pure ``NavigationState`` with everything only the
terminal shell cares about: viewport offset, status message, search prompt,
overlay flags, and caches for item counts and preview text.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from ..filesystem import count_directory_items
from ..navigation import NavigationState
from ..render.layout import FrameGeometry, frame_geometry
from ..ui_theme import DEFAULT_THEME, UITheme

STATUS_MESSAGE_SECONDS = 4.0


@dataclass
class ShellState:
    navigation: NavigationState
    theme: UITheme = DEFAULT_THEME
    style: str = "monokai"
    no_color: bool = False
    geometry: FrameGeometry = field(default_factory=lambda: frame_geometry(80, 24))
    list_start: int = 0
    status_message: str = ""
    status_is_error: bool = False
    status_message_until: float = 0.0
    prompt_active: bool = False
    prompt_buffer: str = ""
    show_help: bool = False
    show_disks: bool = False
    dirty: bool = True
    item_counts: dict[Path, int] = field(default_factory=dict)
    preview_key: tuple[object, ...] | None = None
    preview_lines: list[str] = field(default_factory=list)

    def set_status(self, message: str, *, error: bool = False) -> None:
        """Show a transient status message for a fixed short interval."""
        self.status_message = message
        self.status_is_error = error
        self.status_message_until = time.monotonic() + STATUS_MESSAGE_SECONDS
        self.dirty = True

    def clear_status(self) -> None:
        self.status_message = ""
        self.status_is_error = False
        self.status_message_until = 0.0

    def expire_status(self, now: float) -> None:
        if self.status_message and now >= self.status_message_until:
            self.clear_status()
            self.dirty = True

    def invalidate_caches(self) -> None:
        """Drop cached counts/previews after the directory changed or was re-read."""
        self.item_counts.clear()
        self.preview_key = None
        self.preview_lines = []

    def item_count(self, path: Path) -> int:
        count = self.item_counts.get(path)
        if count is None:
            count = count_directory_items(path)
            self.item_counts[path] = count
        return count

    def cached_preview(
        self,
        key: tuple[object, ...],
        build: Callable[[], list[str]],
    ) -> list[str]:
        """Return preview lines for ``key``, rebuilding only when the key changes."""
        if key != self.preview_key:
            self.preview_lines = build()
            self.preview_key = key
        return self.preview_lines


__all__ = [
    "STATUS_MESSAGE_SECONDS",
    "ShellState",
]
