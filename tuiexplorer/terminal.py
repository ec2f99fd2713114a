"""Terminal control helpers for the browser session.

Owns raw-mode lifecycle, alternate-screen switching, and mouse reporting.
"""

from __future__ import annotations

import contextlib
import os
import termios
import tty

ENTER_TUI_SEQUENCE = b"\x1b[?1049h\x1b[?25l\x1b[?1000h\x1b[?1006h"
EXIT_TUI_SEQUENCE = b"\x1b[?1000l\x1b[?1006l\x1b[?25h\x1b[?1049l"


class TerminalUnavailableError(RuntimeError):
    """Raised when stdin is not a terminal whose mode can be changed."""


class TerminalController:
    """Manage terminal mode transitions for one interactive session."""

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        """Capture tty state; raise ``TerminalUnavailableError`` for non-tty input."""
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        try:
            self._saved_tty_state = termios.tcgetattr(stdin_fd)
        except termios.error as exc:
            raise TerminalUnavailableError(f"terminal cannot be initialized: {exc}") from exc

    def enable_tui_mode(self) -> None:
        """Enter raw alternate-screen mode with mouse reporting enabled."""
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        # Alternate screen, hidden cursor, button + SGR mouse reporting.
        os.write(self.stdout_fd, ENTER_TUI_SEQUENCE)

    def disable_tui_mode(self) -> None:
        """Restore the saved tty state and the main screen buffer."""
        os.write(self.stdout_fd, EXIT_TUI_SEQUENCE)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_tty_state)

    @contextlib.contextmanager
    def raw_mode(self):
        """Context manager that brackets the whole session with TUI enter/exit."""
        try:
            self.enable_tui_mode()
            yield
        finally:
            self.disable_tui_mode()
