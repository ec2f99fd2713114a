"""Preview-column text for the selected entry and the disk summary.

Directory previews show metadata and an item count; text files additionally
show their first characters highlighted with Pygments. Builders return plain
lists of ANSI lines and never raise for unreadable files.
"""

from __future__ import annotations

import codecs
import logging
import re
import stat
from functools import lru_cache
from pathlib import Path

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

from .config import DEFAULT_STYLE
from .filesystem import DirectoryEntry, DiskStatus, count_directory_items
from .ui_theme import UITheme

logger = logging.getLogger(__name__)

PREVIEW_MAX_CHARS = 500
PREVIEW_READ_BYTES = 4 * PREVIEW_MAX_CHARS + 4
TEXT_EXTENSIONS = frozenset(
    {
        ".txt", ".md", ".json", ".yaml", ".yml", ".go", ".py", ".js", ".ts", ".css",
        ".html", ".xml", ".csv", ".sh", ".bash", ".conf", ".config", ".toml", ".ini",
    }
)
SIZE_UNITS = "KMGTPE"
MODIFIED_FORMAT = "%Y-%m-%d %H:%M"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")


def format_size(size: int) -> str:
    """Format a byte count with binary units: ``512 B``, ``1.5 KB``, ``3.0 GB``."""
    unit = 1024
    if size < unit:
        return f"{size} B"
    div = unit
    exp = 0
    remaining = size // unit
    while remaining >= unit:
        div *= unit
        exp += 1
        remaining //= unit
    return f"{size / div:.1f} {SIZE_UNITS[exp]}B"


def is_text_file(name: str) -> bool:
    return Path(name).suffix.lower() in TEXT_EXTENSIONS


def sanitize_terminal_text(source: str) -> str:
    """Escape control bytes so previews cannot move the cursor or ring the bell."""
    if _CONTROL_RE.search(source) is None:
        return source
    return _CONTROL_RE.sub(lambda match: f"\\x{ord(match.group(0)):02x}", source)


def read_preview_text(path: Path, max_chars: int = PREVIEW_MAX_CHARS) -> tuple[str, bool]:
    """Return up to ``max_chars`` decoded characters and whether the file was longer.

    UTF-8 is tried first (an incomplete trailing sequence is dropped), then
    latin-1. Raises ``OSError`` when the file cannot be read.
    """
    with path.open("rb") as handle:
        data = handle.read(PREVIEW_READ_BYTES)
        more_bytes = bool(handle.read(1))

    try:
        text = codecs.getincrementaldecoder("utf-8-sig")().decode(data, final=not more_bytes)
    except UnicodeDecodeError:
        text = data.decode("latin-1")
    if len(text) > max_chars:
        return text[:max_chars], True
    return text, more_bytes


@lru_cache(maxsize=8)
def _formatter_for_style(style: str) -> Terminal256Formatter:
    """Return a cached terminal formatter, falling back to the default style."""
    try:
        get_style_by_name(style)
    except ClassNotFound:
        style = DEFAULT_STYLE
    return Terminal256Formatter(style=style)


def highlight_source(source: str, name: str, style: str = DEFAULT_STYLE) -> str:
    """Colorize ``source`` with the Pygments lexer guessed from ``name``."""
    try:
        lexer = get_lexer_for_filename(name, source)
    except ClassNotFound:
        lexer = TextLexer()
    return highlight(source, lexer, _formatter_for_style(style))


def _field(theme: UITheme, label: str, value: str) -> str:
    return f"{theme.preview_label}{label}:{theme.reset} {value}"


def build_directory_preview(entry: DirectoryEntry, theme: UITheme) -> list[str]:
    item_count = count_directory_items(entry.path)
    noun = "item" if item_count == 1 else "items"
    return [
        f"{theme.preview_heading}Directory{theme.reset}",
        "",
        _field(theme, "Name", sanitize_terminal_text(entry.name)),
        _field(theme, "Path", sanitize_terminal_text(str(entry.path))),
        _field(theme, "Items", f"{item_count} {noun}"),
        _field(theme, "Modified", entry.modified_at.strftime(MODIFIED_FORMAT)),
        "",
        f"{theme.preview_hint}Press Enter to open{theme.reset}",
    ]


def build_file_preview(
    entry: DirectoryEntry,
    theme: UITheme,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
) -> list[str]:
    lines = [
        f"{theme.preview_heading}File{theme.reset}",
        "",
        _field(theme, "Name", sanitize_terminal_text(entry.name)),
        _field(theme, "Size", format_size(entry.size)),
        _field(theme, "Modified", entry.modified_at.strftime(MODIFIED_FORMAT)),
        _field(theme, "Mode", stat.filemode(entry.mode)),
        _field(theme, "Path", sanitize_terminal_text(str(entry.path))),
        "",
    ]
    if not is_text_file(entry.name):
        lines.append(f"{theme.preview_dim}(Binary file - no preview){theme.reset}")
        return lines

    try:
        text, truncated = read_preview_text(entry.path)
    except OSError as exc:
        logger.debug("preview unavailable for %s: %s", entry.path, exc)
        lines.append(f"{theme.status_error}Error reading file{theme.reset}")
        return lines

    lines.append(f"{theme.preview_heading}━━━ Preview ━━━{theme.reset}")
    text = sanitize_terminal_text(text)
    rendered = text if no_color else highlight_source(text, entry.name, style)
    lines.extend(rendered.splitlines())
    if truncated:
        lines.append(f"{theme.preview_dim}... (truncated){theme.reset}")
    return lines


def build_entry_preview(
    entry: DirectoryEntry | None,
    theme: UITheme,
    style: str = DEFAULT_STYLE,
    no_color: bool = False,
) -> list[str]:
    """Return preview lines for ``entry``, or a placeholder when nothing is selected."""
    if entry is None:
        return [f"{theme.preview_dim}Select a file to preview{theme.reset}"]
    if entry.is_dir:
        return build_directory_preview(entry, theme)
    return build_file_preview(entry, theme, style=style, no_color=no_color)


def build_disk_preview(disks: list[DiskStatus], theme: UITheme) -> list[str]:
    """Return one block per mounted disk with used/total and a usage bar."""
    lines = [f"{theme.preview_heading}Disks{theme.reset}", ""]
    if not disks:
        lines.append(f"{theme.preview_dim}No disks found{theme.reset}")
        return lines

    bar_width = 20
    for disk in disks:
        filled = max(0, min(bar_width, round(disk.used_percent / 100 * bar_width)))
        bar = "█" * filled + "░" * (bar_width - filled)
        lines.extend(
            [
                f"{theme.preview_hint}{disk.mountpoint}{theme.reset} {theme.preview_dim}{disk.device} ({disk.fstype}){theme.reset}",
                f"{bar} {disk.used_percent:5.1f}%",
                _field(theme, "Used", f"{format_size(disk.used)} / {format_size(disk.total)}"),
                _field(theme, "Free", format_size(disk.free)),
                "",
            ]
        )
    return lines


__all__ = [
    "PREVIEW_MAX_CHARS",
    "TEXT_EXTENSIONS",
    "format_size",
    "is_text_file",
    "sanitize_terminal_text",
    "read_preview_text",
    "highlight_source",
    "build_directory_preview",
    "build_file_preview",
    "build_entry_preview",
    "build_disk_preview",
]
