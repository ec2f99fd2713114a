"""Main interactive event loop for the browser.

Each iteration syncs geometry with the terminal size, keeps the selection in
the viewport, expires status messages, renders when dirty, then blocks on one
key. Feature logic lives in the injected callbacks.
"""

from __future__ import annotations

import os
import shutil
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from ..filesystem import DiskStatus, free_bytes, list_disks
from ..input import read_key
from ..preview import build_disk_preview, build_entry_preview
from ..render import (
    RenderContext,
    build_frame,
    build_help_page,
    frame_geometry,
    render_frame,
    scroll_start_for_selection,
)
from ..terminal import TerminalController
from .state import ShellState

INPUT_POLL_MS = 250


def _default_terminal_size() -> os.terminal_size:
    return shutil.get_terminal_size((80, 24))


@dataclass(frozen=True)
class RuntimeLoopCallbacks:
    """Injected operations used by ``run_main_loop``."""

    dispatch_key: Callable[[str], bool]
    home: Path | None = None
    terminal_size: Callable[[], os.terminal_size] = _default_terminal_size
    read_key: Callable[..., str] = read_key
    write_frame: Callable[[list[str]], None] = render_frame
    list_disks: Callable[[], list[DiskStatus]] = list_disks
    free_bytes: Callable[[Path], int | None] = free_bytes


def current_preview_lines(
    shell: ShellState,
    disk_lister: Callable[[], list[DiskStatus]] = list_disks,
) -> list[str]:
    """Return cached preview lines for the selected entry or the disk summary."""
    if shell.show_disks:
        return shell.cached_preview(
            ("disks",),
            lambda: build_disk_preview(disk_lister(), shell.theme),
        )
    entry = shell.navigation.selected_entry
    return shell.cached_preview(
        ("entry", entry),
        lambda: build_entry_preview(entry, shell.theme, style=shell.style, no_color=shell.no_color),
    )


def compose_frame(shell: ShellState, callbacks: RuntimeLoopCallbacks) -> list[str]:
    """Build the rows for the current shell state, help page included."""
    geometry = shell.geometry
    if shell.show_help:
        return build_help_page(geometry.width, geometry.height, shell.theme)
    nav = shell.navigation
    context = RenderContext(
        navigation=nav,
        geometry=geometry,
        theme=shell.theme,
        list_start=shell.list_start,
        preview_lines=current_preview_lines(shell, callbacks.list_disks) if geometry.preview_width else [],
        item_count=shell.item_count,
        home=callbacks.home,
        free_space=callbacks.free_bytes(nav.current_path),
        status_message=shell.status_message,
        status_is_error=shell.status_is_error,
        prompt_active=shell.prompt_active,
        prompt_buffer=shell.prompt_buffer,
    )
    return build_frame(context)


def sync_viewport(shell: ShellState, columns: int, lines: int) -> None:
    """Recompute geometry and list scroll offset, marking the shell dirty on change."""
    geometry = frame_geometry(columns, lines)
    if geometry != shell.geometry:
        shell.geometry = geometry
        shell.dirty = True
    nav = shell.navigation
    start = scroll_start_for_selection(
        nav.selected_index,
        shell.list_start,
        geometry.list_rows,
        len(nav.visible_entries),
    )
    if start != shell.list_start:
        shell.list_start = start
        shell.dirty = True


def run_main_loop(
    shell: ShellState,
    terminal: TerminalController,
    stdin_fd: int,
    callbacks: RuntimeLoopCallbacks,
) -> None:
    """Run the interactive loop until a key handler requests quit."""
    with terminal.raw_mode():
        while True:
            term = callbacks.terminal_size()
            sync_viewport(shell, term.columns, term.lines)
            shell.expire_status(time.monotonic())

            if shell.dirty:
                callbacks.write_frame(compose_frame(shell, callbacks))
                shell.dirty = False

            try:
                key = callbacks.read_key(stdin_fd, timeout_ms=INPUT_POLL_MS)
            except KeyboardInterrupt:
                continue
            if key == "":
                continue
            if callbacks.dispatch_key(key):
                break


__all__ = [
    "INPUT_POLL_MS",
    "RuntimeLoopCallbacks",
    "current_preview_lines",
    "compose_frame",
    "sync_viewport",
    "run_main_loop",
]
