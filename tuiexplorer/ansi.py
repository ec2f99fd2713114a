"""ANSI-aware width measurement, clipping, padding and wrapping.

Column math ignores escape sequences and counts East Asian wide characters as
two cells, so the three browser columns stay aligned when names carry colors
or CJK text.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8
RESET = "\033[0m"


def char_display_width(ch: str, col: int = 0) -> int:
    """Return terminal cells used by ``ch`` when drawn at column ``col``."""
    if ch == "\t":
        return TAB_STOP - (col % TAB_STOP)
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Return the number of cells ``text`` occupies, escape sequences excluded."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def _iter_segments(text: str):
    """Yield ``(is_escape, chunk)`` pairs splitting escapes from single characters."""
    i = 0
    n = len(text)
    while i < n:
        if text[i] == "\x1b":
            match = ANSI_ESCAPE_RE.match(text, i)
            if match:
                yield True, match.group(0)
                i = match.end()
                continue
        yield False, text[i]
        i += 1


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Trim a styled line to ``max_cols`` cells, keeping escapes and expanding tabs."""
    if max_cols <= 0 or not text:
        return ""

    out: list[str] = []
    col = 0
    for is_escape, chunk in _iter_segments(text):
        if is_escape:
            out.append(chunk)
            continue
        width = char_display_width(chunk, col)
        if col + width > max_cols:
            break
        out.append(" " * width if chunk == "\t" else chunk)
        col += width
    return "".join(out)


def fit_ansi_line(text: str, width: int) -> str:
    """Clip or right-pad ``text`` so it fills exactly ``width`` cells."""
    clipped = clip_ansi_line(text, width)
    used = display_width(clipped)
    suffix = RESET if "\033" in clipped else ""
    return f"{clipped}{suffix}{' ' * max(0, width - used)}"


def wrap_ansi_line(text: str, width: int) -> list[str]:
    """Hard-wrap a styled line into chunks of at most ``width`` cells."""
    if width <= 0 or not text:
        return [""]

    wrapped: list[str] = []
    chunk: list[str] = []
    col = 0
    for is_escape, piece in _iter_segments(text):
        if is_escape:
            chunk.append(piece)
            continue
        cell_width = char_display_width(piece, col)
        if col + cell_width > width and col > 0:
            wrapped.append("".join(chunk))
            chunk = []
            col = 0
            cell_width = char_display_width(piece, col)
        chunk.append(" " * cell_width if piece == "\t" else piece)
        col += cell_width
    wrapped.append("".join(chunk))
    return wrapped


__all__ = [
    "ANSI_ESCAPE_RE",
    "TAB_STOP",
    "RESET",
    "char_display_width",
    "strip_ansi",
    "display_width",
    "clip_ansi_line",
    "fit_ansi_line",
    "wrap_ansi_line",
]
