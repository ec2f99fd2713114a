"""Key dispatch for the browser: help overlay, search prompt, and normal mode."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..errors import NavigationError
from ..filesystem import filesystem_root, user_home_directory
from ..runtime.state import ShellState
from .key_registry import KeyBinding, KeyRegistry

logger = logging.getLogger(__name__)

MOUSE_WHEEL_STEP = 3


@dataclass(frozen=True)
class ExplorerKeyContext:
    """Shell state plus the side-effecting operations keys may trigger."""

    shell: ShellState
    open_file: Callable[[Path], str | None]
    home_directory: Callable[[], Path] = user_home_directory


def parse_mouse_col_row(mouse_key: str) -> tuple[int | None, int | None]:
    """Parse ``MOUSE_*:col:row`` key tokens into 1-based integer coordinates."""
    parts = mouse_key.split(":")
    if len(parts) < 3:
        return None, None
    try:
        return int(parts[1]), int(parts[2])
    except ValueError:
        return None, None


def handle_help_key(key: str, shell: ShellState) -> bool:
    """Any key closes help; ``CTRL_C`` still quits."""
    if key == "CTRL_C":
        return True
    shell.show_help = False
    shell.dirty = True
    return False


def handle_prompt_key(key: str, shell: ShellState) -> bool:
    """Edit the search prompt buffer; Enter applies it and Esc cancels."""
    nav = shell.navigation
    if key == "CTRL_C":
        return True
    if key == "ESC":
        shell.prompt_active = False
        shell.prompt_buffer = ""
    elif key == "ENTER":
        query = shell.prompt_buffer
        shell.prompt_active = False
        shell.prompt_buffer = ""
        nav.apply_search(query)
        if nav.search_query is None:
            shell.clear_status()
        else:
            matches = len(nav.visible_entries)
            if matches:
                noun = "match" if matches == 1 else "matches"
                shell.set_status(f"Found {matches} {noun}")
            else:
                shell.set_status("No matches found", error=True)
    elif key == "BACKSPACE":
        shell.prompt_buffer = shell.prompt_buffer[:-1]
    elif key == "CTRL_U":
        shell.prompt_buffer = ""
    elif len(key) == 1 and key.isprintable():
        shell.prompt_buffer += key
    else:
        return False
    shell.dirty = True
    return False


def _handle_mouse_key(key: str, shell: ShellState) -> bool:
    nav = shell.navigation
    if key.startswith("MOUSE_WHEEL_UP"):
        nav.move_selection(-MOUSE_WHEEL_STEP)
    elif key.startswith("MOUSE_WHEEL_DOWN"):
        nav.move_selection(MOUSE_WHEEL_STEP)
    elif key.startswith("MOUSE_LEFT_DOWN"):
        col, row = parse_mouse_col_row(key)
        if col is None or row is None:
            return False
        offset = shell.geometry.current_row_at(col - 1, row - 1)
        if offset is None:
            return False
        idx = shell.list_start + offset
        if idx >= len(nav.visible_entries):
            return False
        nav.selected_index = idx
    else:
        return False
    shell.dirty = True
    return False


def handle_normal_key(key: str, context: ExplorerKeyContext) -> bool:
    """Handle one normal-mode key and return ``True`` when the app should quit."""
    shell = context.shell
    nav = shell.navigation

    def changed_directory(transition: Callable[[], object]) -> Callable[[], bool]:
        def action() -> bool:
            previous = nav.current_path
            transition()
            if nav.current_path != previous:
                shell.invalidate_caches()
                shell.list_start = 0
            return False

        return action

    def move(delta: int) -> Callable[[], bool]:
        def action() -> bool:
            nav.move_selection(delta)
            return False

        return action

    def page(direction: int) -> Callable[[], bool]:
        def action() -> bool:
            nav.move_selection(direction * shell.geometry.list_rows)
            return False

        return action

    def open_selected() -> bool:
        previous = nav.current_path
        entry = nav.enter_selected()
        if nav.current_path != previous:
            shell.invalidate_caches()
            shell.list_start = 0
        if entry is not None:
            error = context.open_file(entry.path)
            if error:
                shell.set_status(error, error=True)
            shell.invalidate_caches()
        return False

    def escape() -> bool:
        if nav.search_query:
            nav.clear_search()
            shell.clear_status()
            return False
        return changed_directory(nav.go_to_parent)()

    def go_home() -> None:
        nav.enter(context.home_directory())

    def go_root() -> None:
        nav.enter(filesystem_root(nav.current_path))

    def toggle_hidden() -> bool:
        nav.toggle_hidden()
        shell.set_status(f"Hidden files: {'on' if nav.show_hidden else 'off'}")
        return False

    def cycle_sort() -> bool:
        nav.set_sort_key(nav.sort_key.next())
        shell.set_status(f"Sorted by {nav.sort_key.label}")
        return False

    def refresh() -> bool:
        nav.refresh()
        shell.invalidate_caches()
        shell.set_status("Reloaded")
        return False

    def begin_search() -> bool:
        shell.prompt_active = True
        shell.prompt_buffer = nav.search_query or ""
        return False

    def toggle_disks() -> bool:
        shell.show_disks = not shell.show_disks
        shell.preview_key = None
        return False

    def show_help() -> bool:
        shell.show_help = True
        return False

    def top() -> bool:
        nav.jump_to_top()
        return False

    def bottom() -> bool:
        nav.jump_to_bottom()
        return False

    registry = KeyRegistry(
        (
            KeyBinding(("q", "CTRL_C"), lambda: True),
            KeyBinding(("j", "DOWN"), move(1)),
            KeyBinding(("k", "UP"), move(-1)),
            KeyBinding(("PAGE_DOWN",), page(1)),
            KeyBinding(("PAGE_UP",), page(-1)),
            KeyBinding(("g", "HOME"), top),
            KeyBinding(("G", "END"), bottom),
            KeyBinding(("l", "ENTER", "RIGHT"), open_selected),
            KeyBinding(("h", "LEFT", "BACKSPACE"), changed_directory(nav.go_to_parent)),
            KeyBinding(("ESC",), escape),
            KeyBinding(("~",), changed_directory(go_home)),
            KeyBinding(("/",), changed_directory(go_root)),
            KeyBinding((".",), toggle_hidden),
            KeyBinding(("o",), cycle_sort),
            KeyBinding(("r", "CTRL_L"), refresh),
            KeyBinding(("s",), begin_search),
            KeyBinding(("d",), toggle_disks),
            KeyBinding(("?",), show_help),
        )
    )

    if key.startswith("MOUSE"):
        return _handle_mouse_key(key, shell)

    try:
        handled = registry.dispatch(key)
    except NavigationError as exc:
        logger.warning("navigation failed: %s", exc)
        shell.set_status(f"Cannot open {exc.path}: {exc.reason}", error=True)
        return False
    if handled is None:
        return False
    shell.dirty = True
    return handled


def dispatch_key(key: str, context: ExplorerKeyContext) -> bool:
    """Route ``key`` to the active mode's handler; ``True`` requests quit."""
    shell = context.shell
    if shell.show_help:
        return handle_help_key(key, shell)
    if shell.prompt_active:
        return handle_prompt_key(key, shell)
    return handle_normal_key(key, context)


__all__ = [
    "MOUSE_WHEEL_STEP",
    "ExplorerKeyContext",
    "parse_mouse_col_row",
    "handle_help_key",
    "handle_prompt_key",
    "handle_normal_key",
    "dispatch_key",
]
