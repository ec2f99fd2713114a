"""External program launch for opening non-directory entries.

Runs the first working editor while temporarily leaving raw/alternate-screen
TUI mode. Returns an error message string instead of raising for UI-friendly
handling.
"""

from __future__ import annotations

import logging
import os
import shlex
import shutil
import subprocess
import sys
from collections.abc import Callable, Iterable
from pathlib import Path

from .config import DEFAULT_EDITOR_CANDIDATES

logger = logging.getLogger(__name__)

EDITOR_ENV_VARS: tuple[str, ...] = ("VISUAL", "EDITOR")


def system_opener_command() -> list[str]:
    """Return the desktop "open with default application" command."""
    if sys.platform == "darwin":
        return ["open"]
    return ["xdg-open"]


def candidate_commands(candidates: Iterable[str] = DEFAULT_EDITOR_CANDIDATES) -> list[list[str]]:
    """Return editor commands in try order: env vars, candidates, system opener.

    Unparseable or empty entries are skipped and duplicates keep their first
    position.
    """
    raw_commands = [os.environ.get(name, "") for name in EDITOR_ENV_VARS]
    raw_commands.extend(candidates)

    commands: list[list[str]] = []
    for raw in raw_commands:
        try:
            cmd = shlex.split(raw)
        except ValueError:
            logger.debug("ignoring unparseable editor command %r", raw)
            continue
        if cmd and cmd not in commands:
            commands.append(cmd)
    opener = system_opener_command()
    if opener not in commands:
        commands.append(opener)
    return commands


def open_externally(
    target: Path,
    disable_tui_mode: Callable[[], None],
    enable_tui_mode: Callable[[], None],
    candidates: Iterable[str] = DEFAULT_EDITOR_CANDIDATES,
) -> str | None:
    """Open ``target`` with the first installed program that exits successfully.

    The session blocks until the program exits. Returns ``None`` on success.
    """
    commands = [cmd for cmd in candidate_commands(candidates) if shutil.which(cmd[0]) is not None]
    if not commands:
        return "Cannot open: no editor found (set $EDITOR)."

    disable_tui_mode()
    try:
        for cmd in commands:
            try:
                completed = subprocess.run([*cmd, str(target)], check=False)
            except OSError as exc:
                logger.debug("failed to launch %s: %s", cmd[0], exc)
                continue
            if completed.returncode == 0:
                logger.debug("opened %s with %s", target, cmd[0])
                return None
            logger.debug("%s exited with %d for %s", cmd[0], completed.returncode, target)
    finally:
        enable_tui_mode()
    return f"Cannot open {target.name}: no editor exited successfully."


__all__ = [
    "EDITOR_ENV_VARS",
    "system_opener_command",
    "candidate_commands",
    "open_externally",
]
