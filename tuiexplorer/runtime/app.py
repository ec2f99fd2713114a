"""Runtime composition layer for tuiexplorer.

Builds the initial navigation and shell state, wires key handling and the
external opener to the terminal controller, and starts the loop.
"""

from __future__ import annotations

import logging
import os
import sys
from functools import partial

from ..config import ExplorerConfig
from ..filesystem import user_home_directory
from ..input import ExplorerKeyContext, dispatch_key
from ..navigation import NavigationState
from ..opener import open_externally
from ..terminal import TerminalController
from ..ui_theme import resolve_theme
from .loop import RuntimeLoopCallbacks, run_main_loop
from .state import ShellState

logger = logging.getLogger(__name__)


def no_color_requested() -> bool:
    """Honor the ``NO_COLOR`` convention (any non-empty value disables color)."""
    return bool(os.environ.get("NO_COLOR"))


def build_shell_state(config: ExplorerConfig, navigation: NavigationState) -> ShellState:
    no_color = no_color_requested()
    return ShellState(
        navigation=navigation,
        theme=resolve_theme(config.theme, no_color=no_color),
        style=config.style,
        no_color=no_color,
    )


def run_explorer(config: ExplorerConfig) -> None:
    """Start the interactive browser and block until the user quits.

    Raises ``NavigationError`` when no start directory can be listed and
    ``TerminalUnavailableError`` when stdin is not a terminal.
    """
    navigation = NavigationState.start(config.start_directory, show_hidden=config.show_hidden)
    stdin_fd = sys.stdin.fileno()
    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    shell = build_shell_state(config, navigation)
    logger.debug("starting in %s with theme %s", navigation.current_path, shell.theme.name)

    key_context = ExplorerKeyContext(
        shell=shell,
        open_file=partial(
            open_externally,
            disable_tui_mode=terminal.disable_tui_mode,
            enable_tui_mode=terminal.enable_tui_mode,
            candidates=config.editors,
        ),
    )
    callbacks = RuntimeLoopCallbacks(
        dispatch_key=partial(dispatch_key, context=key_context),
        home=user_home_directory(),
    )
    run_main_loop(shell, terminal, stdin_fd, callbacks)


__all__ = [
    "no_color_requested",
    "build_shell_state",
    "run_explorer",
]
