"""Frame composition for the three-column browser view.

``build_frame`` turns a ``RenderContext`` into exactly ``height`` ANSI rows
without touching the terminal; ``render_frame`` is the only function here that
writes to stdout.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..ansi import display_width, fit_ansi_line, wrap_ansi_line
from ..filesystem import DirectoryEntry
from ..navigation import NavigationState
from ..preview import format_size, sanitize_terminal_text
from ..ui_theme import UITheme
from .layout import FrameGeometry

TITLE_TEXT = "TUI File Explorer - Modern File Browser"
NORMAL_HINTS: tuple[tuple[str, str], ...] = (
    ("↑/↓", "navigate"),
    ("Enter/l", "open"),
    ("h", "back"),
    ("~", "home"),
    (".", "hidden"),
    ("s", "search"),
    ("?", "help"),
    ("q", "quit"),
)


@dataclass
class RenderContext:
    navigation: NavigationState
    geometry: FrameGeometry
    theme: UITheme
    list_start: int
    preview_lines: list[str]
    item_count: Callable[[Path], int]
    home: Path | None = None
    free_space: int | None = None
    status_message: str = ""
    status_is_error: bool = False
    prompt_active: bool = False
    prompt_buffer: str = ""


def display_path(path: Path, home: Path | None) -> str:
    """Return ``path`` with a leading home directory abbreviated to ``~``."""
    if home is not None and home != home.parent:
        if path == home:
            return "~"
        if home in path.parents:
            return "~/" + path.relative_to(home).as_posix()
    return str(path)


def highlight_row(text: str, prefix: str) -> str:
    """Apply ``prefix`` to a row, re-applying it after each internal reset."""
    if not text or not prefix:
        return text
    reset = "\033[0m"
    return prefix + text.replace(reset, reset + prefix) + reset


def selected_with_ansi(text: str, theme: UITheme) -> str:
    return highlight_row(text, theme.reverse)


def entry_name_text(entry: DirectoryEntry, theme: UITheme) -> str:
    name = sanitize_terminal_text(entry.name)
    if entry.is_dir:
        return f"{theme.entry_dir}{name}/{theme.reset}"
    return f"{theme.entry_file}{name}{theme.reset}"


def entry_label(entry: DirectoryEntry, item_count: Callable[[Path], int]) -> str:
    """Right-hand label: item count for directories, human size for files."""
    if entry.is_dir:
        count = item_count(entry.path)
        return f"{count} item" if count == 1 else f"{count} items"
    return format_size(entry.size)


def _entry_row(
    entry: DirectoryEntry,
    width: int,
    theme: UITheme,
    label: str = "",
) -> str:
    """Format one list row: name on the left, ``label`` right-aligned."""
    name = f" {entry_name_text(entry, theme)}"
    if label and width >= display_width(name) + len(label) + 3:
        gap = width - display_width(name) - len(label) - 1
        return f"{name}{' ' * gap}{theme.entry_label}{label}{theme.reset} "
    return fit_ansi_line(name, width)


def _column_heading(label: str, width: int, theme: UITheme) -> str:
    return fit_ansi_line(f"{theme.column_heading} {label}{theme.reset}", width)


def _current_column(context: RenderContext) -> list[str]:
    nav = context.navigation
    geometry = context.geometry
    width = geometry.current_width
    theme = context.theme
    visible = nav.visible_entries
    rows: list[str] = []
    for offset in range(geometry.list_rows):
        idx = context.list_start + offset
        if idx >= len(visible):
            rows.append(" " * width)
            continue
        entry = visible[idx]
        row = fit_ansi_line(_entry_row(entry, width, theme, entry_label(entry, context.item_count)), width)
        if idx == nav.selected_index:
            row = selected_with_ansi(row, theme)
        rows.append(row)

    if not visible:
        if nav.search_query:
            message = "No matches found"
        elif nav.current_entries:
            message = "Only hidden entries (press .)"
        else:
            message = "Empty directory"
        rows[0] = fit_ansi_line(f" {theme.preview_dim}{message}{theme.reset}", width)
    return rows


def _parent_column(context: RenderContext) -> list[str]:
    """Parent listing, scrolled so the current directory stays visible and marked."""
    nav = context.navigation
    geometry = context.geometry
    width = geometry.parent_width
    theme = context.theme
    entries = nav.visible_parent_entries
    current_idx = next(
        (idx for idx, entry in enumerate(entries) if entry.path == nav.current_path),
        -1,
    )
    rows_available = geometry.list_rows
    start = 0
    if current_idx >= rows_available:
        start = current_idx - rows_available // 2
    start = max(0, min(start, max(0, len(entries) - rows_available)))

    rows: list[str] = []
    for offset in range(rows_available):
        idx = start + offset
        if idx >= len(entries):
            rows.append(" " * width)
            continue
        row = fit_ansi_line(_entry_row(entries[idx], width, theme), width)
        if idx == current_idx:
            row = highlight_row(row, theme.selected_inactive or theme.reverse)
        rows.append(row)
    return rows


def _preview_column(context: RenderContext) -> list[str]:
    width = context.geometry.preview_width
    wrapped: list[str] = []
    for line in context.preview_lines:
        for chunk in wrap_ansi_line(f" {line}", width):
            wrapped.append(fit_ansi_line(chunk, width))
            if len(wrapped) >= context.geometry.list_rows:
                return wrapped
    while len(wrapped) < context.geometry.list_rows:
        wrapped.append(" " * width)
    return wrapped


def build_status_line(context: RenderContext) -> str:
    """Compose the bottom bar: prompt, message, or key hints plus indicators."""
    theme = context.theme
    nav = context.navigation
    width = context.geometry.width

    if context.prompt_active:
        left = (
            f" {theme.search_prompt}Search:{theme.reset} {sanitize_terminal_text(context.prompt_buffer)}_"
            f"  {theme.status_dim}│ Enter to search, Esc to cancel{theme.reset}"
        )
    elif context.status_message:
        color = theme.status_error if context.status_is_error else theme.status_success
        marker = "✗ " if context.status_is_error else ""
        left = f" {color}{marker}{sanitize_terminal_text(context.status_message)}{theme.reset}"
    else:
        hints = "  │  ".join(
            f"{theme.status_key}{key}{theme.reset}: {label}" for key, label in NORMAL_HINTS
        )
        left = f" {hints}"

    indicators: list[str] = []
    if nav.show_hidden:
        indicators.append(f"{theme.status_on}hidden on{theme.reset}")
    if nav.search_query:
        indicators.append(f"{theme.search_prompt}filter: {sanitize_terminal_text(nav.search_query)}{theme.reset}")
    indicators.append(f"sort: {nav.sort_key.label}")
    visible_count = len(nav.visible_entries)
    position = nav.selected_index + 1 if visible_count else 0
    indicators.append(f"{position}/{visible_count}")
    if context.free_space is not None:
        indicators.append(f"{format_size(context.free_space)} free")
    right = f"{theme.status_dim}│{theme.reset} " + f" {theme.status_dim}·{theme.reset} ".join(indicators) + " "

    right_width = display_width(right)
    if right_width >= width:
        return fit_ansi_line(right, width)
    return fit_ansi_line(left, width - right_width) + right


def build_frame(context: RenderContext) -> list[str]:
    """Return the full frame, one string per terminal row."""
    geometry = context.geometry
    theme = context.theme
    width = geometry.width
    divider = f"{theme.divider}│{theme.reset}"

    title_pad = max(0, (width - len(TITLE_TEXT)) // 2)
    rows = [
        fit_ansi_line(f"{' ' * title_pad}{theme.title}{TITLE_TEXT}{theme.reset}", width),
        fit_ansi_line(
            f" {theme.path_bar}{sanitize_terminal_text(display_path(context.navigation.current_path, context.home))}{theme.reset}",
            width,
        ),
    ]

    current = _current_column(context)
    if geometry.parent_width:
        rows.append(
            _column_heading("Parent", geometry.parent_width, theme)
            + divider
            + _column_heading("Current", geometry.current_width, theme)
            + divider
            + _column_heading("Preview", geometry.preview_width, theme)
        )
        for parent_row, current_row, preview_row in zip(
            _parent_column(context), current, _preview_column(context)
        ):
            rows.append(f"{parent_row}{divider}{current_row}{divider}{preview_row}")
    else:
        rows.append(_column_heading("Current", geometry.current_width, theme))
        rows.extend(current)

    rows.append(build_status_line(context))
    return rows[: geometry.height]


def render_frame(rows: list[str]) -> None:
    """Clear the screen and draw ``rows`` in one write."""
    payload = "\033[H\033[J" + "\r\n".join(rows) + "\033[0m"
    os.write(sys.stdout.fileno(), payload.encode("utf-8", errors="replace"))


__all__ = [
    "TITLE_TEXT",
    "RenderContext",
    "display_path",
    "highlight_row",
    "selected_with_ansi",
    "entry_name_text",
    "entry_label",
    "build_status_line",
    "build_frame",
    "render_frame",
]
