"""Help modal content and full-screen layout.

Stores the keybinding reference shown by ``?``.
Rendering helpers here are presentation-only and side-effect free.
"""

from __future__ import annotations

from ..ansi import display_width, fit_ansi_line
from ..ui_theme import UITheme

HELP_TITLE = "TUI Explorer Help"

HELP_SECTIONS: tuple[tuple[str, tuple[tuple[str, str], ...]], ...] = (
    (
        "Navigation",
        (
            ("j/k or Up/Down", "Move selection"),
            ("PgUp/PgDn", "Move one page"),
            ("h, Left or Esc", "Go to parent directory"),
            ("Enter, l or Right", "Open directory/file"),
            ("~", "Go to home directory"),
            ("/", "Go to root directory"),
        ),
    ),
    (
        "View",
        (
            ("g/G or Home/End", "Go to top/bottom"),
            (".", "Toggle hidden files"),
            ("s", "Search in current directory"),
            ("Esc", "Clear active search"),
            ("o", "Cycle sort: name/size/modified"),
            ("r", "Reload directory"),
            ("d", "Toggle disk summary"),
            ("?", "Show this help"),
        ),
    ),
    (
        "Other",
        (("q", "Quit application"),),
    ),
)


def help_lines(theme: UITheme) -> list[str]:
    """Return the styled help body, one string per row."""
    key_width = max(len(key) for _, rows in HELP_SECTIONS for key, _ in rows)
    lines: list[str] = []
    for heading, rows in HELP_SECTIONS:
        if lines:
            lines.append("")
        lines.append(f"{theme.help_heading}{heading}:{theme.reset}")
        for key, description in rows:
            lines.append(f"  {theme.help_key}{key.ljust(key_width)}{theme.reset}  {description}")
    lines.append("")
    lines.append(f"{theme.help_key}Press any key to close...{theme.reset}")
    return lines


def build_help_page(width: int, height: int, theme: UITheme) -> list[str]:
    """Return ``height`` rows with the help text centered inside a border box."""
    body = help_lines(theme)
    inner_width = max(display_width(line) for line in body) + 2
    inner_width = max(len(HELP_TITLE) + 4, min(inner_width, max(1, width - 4)))
    box_width = inner_width + 2

    border = theme.help_border
    reset = theme.reset
    title = f" {HELP_TITLE} "
    top_fill = max(0, inner_width - len(title))
    box: list[str] = [
        f"{border}╭{'─' * (top_fill // 2)}{reset}{theme.help_heading}{title}{reset}"
        f"{border}{'─' * (top_fill - top_fill // 2)}╮{reset}"
    ]
    for line in body:
        box.append(f"{border}│{reset} {fit_ansi_line(line, inner_width - 1)}{border}│{reset}")
    box.append(f"{border}╰{'─' * inner_width}╯{reset}")

    box = box[: max(1, height)]
    left_pad = " " * max(0, (width - box_width) // 2)
    top_pad = max(0, (height - len(box)) // 2)
    rows = [""] * top_pad + [left_pad + line for line in box]
    rows.extend([""] * (height - len(rows)))
    return rows


__all__ = [
    "HELP_TITLE",
    "HELP_SECTIONS",
    "help_lines",
    "build_help_page",
]
