"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing, navigation keys and SGR mouse events. Escape
sequences that decode to no known key become ``UNKNOWN``; only a bare Escape
yields ``ESC``.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
UNKNOWN_KEY = "UNKNOWN"
CSI_MAX_PARAM_BYTES = 32
_PENDING_BYTES: list[bytes] = []

_CONTROL_KEYS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x0c": "CTRL_L",
    b"\x15": "CTRL_U",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_CSI_FINAL_KEYS: dict[str, str] = {
    "A": "UP",
    "B": "DOWN",
    "C": "RIGHT",
    "D": "LEFT",
    "H": "HOME",
    "F": "END",
}

_CSI_TILDE_KEYS: dict[str, str] = {
    "1": "HOME",
    "3": "DELETE",
    "4": "END",
    "5": "PAGE_UP",
    "6": "PAGE_DOWN",
    "7": "HOME",
    "8": "END",
}


def _read_ready_byte(fd: int, timeout_ms: int) -> bytes | None:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def _read_utf8_tail(fd: int, lead: bytes) -> str:
    """Complete a multi-byte UTF-8 character that starts with ``lead``."""
    first = lead[0]
    if first >= 0xF0:
        needed = 3
    elif first >= 0xE0:
        needed = 2
    elif first >= 0xC0:
        needed = 1
    else:
        needed = 0
    data = lead
    for _ in range(needed):
        nxt = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if nxt is None:
            break
        data += nxt
    return data.decode("utf-8", errors="replace")


def _decode_sgr_mouse(payload: str, final: str) -> str:
    """Translate an SGR mouse report (``btn;col;row``) into a mouse token."""
    try:
        btn_s, col_s, row_s = payload.split(";")
        btn = int(btn_s)
        col = int(col_s)
        row = int(row_s)
    except ValueError:
        return "MOUSE"
    button = btn & 0b11
    if btn & 0b0100_0000:
        if button == 0:
            return f"MOUSE_WHEEL_UP:{col}:{row}"
        if button == 1:
            return f"MOUSE_WHEEL_DOWN:{col}:{row}"
        return "MOUSE"
    if button == 0 and not btn & 0b0010_0000:
        suffix = "DOWN" if final == "M" else "UP"
        return f"MOUSE_LEFT_{suffix}:{col}:{row}"
    return "MOUSE"


def _read_csi(fd: int) -> str:
    """Decode the remainder of an ``ESC [`` control sequence."""
    params: list[str] = []
    while True:
        part = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if part is None:
            return UNKNOWN_KEY
        char = part.decode("latin-1")
        if "@" <= char <= "~":
            break
        params.append(char)
        if len(params) > CSI_MAX_PARAM_BYTES:
            return UNKNOWN_KEY

    param_text = "".join(params)
    if param_text.startswith("<"):
        if char in {"M", "m"}:
            return _decode_sgr_mouse(param_text[1:], char)
        return "MOUSE"
    if char == "~":
        return _CSI_TILDE_KEYS.get(param_text.split(";", 1)[0], UNKNOWN_KEY)
    return _CSI_FINAL_KEYS.get(char, UNKNOWN_KEY)


def read_key(fd: int, timeout_ms: int | None = None) -> str:
    """Read one key token from ``fd``; ``""`` on timeout or end of input."""
    if _PENDING_BYTES:
        ch = _PENDING_BYTES.pop(0)
    else:
        if timeout_ms is not None:
            ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
            if not ready:
                return ""
        ch = os.read(fd, 1)
        if not ch:
            return ""

    control = _CONTROL_KEYS.get(ch)
    if control is not None:
        return control

    if ch != b"\x1b":
        if ch[0] >= 0x80:
            return _read_utf8_tail(fd, ch)
        return ch.decode("ascii", errors="replace")

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq is None:
        return "ESC"
    if seq == b"[":
        return _read_csi(fd)
    if seq == b"O":
        # Application cursor mode: ESC O A..D / H / F.
        final = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if final is None:
            return UNKNOWN_KEY
        return _CSI_FINAL_KEYS.get(final.decode("latin-1"), UNKNOWN_KEY)
    if seq == b"\x1b":
        _PENDING_BYTES.append(seq)
        return "ESC"
    # Alt chords (ESC followed by a plain byte) are not bound.
    return UNKNOWN_KEY


__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "UNKNOWN_KEY",
    "read_key",
]
