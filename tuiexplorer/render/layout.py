"""Screen geometry for the three-column browser layout.

Row layout: title bar, path bar, column headings, list rows, status bar.
Column layout: parent | current | preview in a 1:2:1 ratio with one-cell
dividers between them.
"""

from __future__ import annotations

from dataclasses import dataclass

CHROME_ROWS_ABOVE = 3
CHROME_ROWS_BELOW = 1
DIVIDER_WIDTH = 1
MIN_COLUMN_WIDTH = 8


@dataclass(frozen=True)
class FrameGeometry:
    """Column widths and row offsets for one terminal size (0-based rows/cols)."""

    width: int
    height: int
    parent_width: int
    current_width: int
    preview_width: int

    @property
    def list_top(self) -> int:
        return CHROME_ROWS_ABOVE

    @property
    def list_rows(self) -> int:
        return max(1, self.height - CHROME_ROWS_ABOVE - CHROME_ROWS_BELOW)

    @property
    def current_left(self) -> int:
        return self.parent_width + DIVIDER_WIDTH if self.parent_width else 0

    def current_row_at(self, col: int, row: int) -> int | None:
        """Map a 0-based screen cell to a row offset in the current column."""
        if not self.current_left <= col < self.current_left + self.current_width:
            return None
        offset = row - self.list_top
        if 0 <= offset < self.list_rows:
            return offset
        return None


def frame_geometry(width: int, height: int) -> FrameGeometry:
    """Split ``width`` into parent/current/preview columns.

    The current column always keeps at least half of the usable width; side
    columns shrink to ``MIN_COLUMN_WIDTH`` before they disappear entirely.
    """
    width = max(1, width)
    usable = max(1, width - 2 * DIVIDER_WIDTH)
    side = usable // 4
    if side < MIN_COLUMN_WIDTH:
        side = 0
        usable = width
    current = max(1, usable - 2 * side)
    return FrameGeometry(
        width=width,
        height=max(1, height),
        parent_width=side,
        current_width=current,
        preview_width=side,
    )


def scroll_start_for_selection(selected: int, start: int, rows: int, total: int) -> int:
    """Return a viewport start that keeps ``selected`` within ``rows`` visible rows."""
    if selected < start:
        start = selected
    elif selected >= start + rows:
        start = selected - rows + 1
    return max(0, min(start, max(0, total - rows)))


__all__ = [
    "CHROME_ROWS_ABOVE",
    "CHROME_ROWS_BELOW",
    "FrameGeometry",
    "frame_geometry",
    "scroll_start_for_selection",
]
