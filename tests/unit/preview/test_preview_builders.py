from __future__ import annotations

import os
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from tuiexplorer.ansi import strip_ansi
from tuiexplorer.filesystem import DiskStatus, list_directory
from tuiexplorer.preview import (
    PREVIEW_MAX_CHARS,
    build_disk_preview,
    build_entry_preview,
    format_size,
    is_text_file,
    read_preview_text,
    sanitize_terminal_text,
)
from tuiexplorer.ui_theme import DEFAULT_THEME, PLAIN_THEME


class FormatSizeTests(unittest.TestCase):
    def test_binary_units(self) -> None:
        self.assertEqual(format_size(0), "0 B")
        self.assertEqual(format_size(1023), "1023 B")
        self.assertEqual(format_size(1024), "1.0 KB")
        self.assertEqual(format_size(1536), "1.5 KB")
        self.assertEqual(format_size(5 * 1024 * 1024), "5.0 MB")
        self.assertEqual(format_size(3 * 1024**3), "3.0 GB")


class PreviewHelperTests(unittest.TestCase):
    def test_text_extension_whitelist(self) -> None:
        self.assertTrue(is_text_file("main.py"))
        self.assertTrue(is_text_file("README.MD"))
        self.assertFalse(is_text_file("photo.png"))
        self.assertFalse(is_text_file("Makefile"))

    def test_sanitize_escapes_control_bytes(self) -> None:
        self.assertEqual(sanitize_terminal_text("a\x1b[2Jb"), "a\\x1b[2Jb")
        self.assertEqual(sanitize_terminal_text("tab\tok\n"), "tab\tok\n")

    def test_read_preview_text_truncates(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "long.txt"
            path.write_text("x" * (PREVIEW_MAX_CHARS + 10), encoding="utf-8")
            text, truncated = read_preview_text(path)
            self.assertEqual(len(text), PREVIEW_MAX_CHARS)
            self.assertTrue(truncated)

            path.write_text("short", encoding="utf-8")
            self.assertEqual(read_preview_text(path), ("short", False))

    def test_read_preview_text_falls_back_to_latin1(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "legacy.txt"
            path.write_bytes(b"caf\xe9")
            self.assertEqual(read_preview_text(path), ("café", False))


class EntryPreviewTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        (self.root / "pkg").mkdir()
        (self.root / "pkg" / "one.py").write_text("x = 1\n", encoding="utf-8")
        (self.root / "notes.md").write_text("# Title\nbody\n", encoding="utf-8")
        (self.root / "image.bin").write_bytes(b"\x00\x01")
        self.entries = {entry.name: entry for entry in list_directory(self.root)}

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _plain(self, lines: list[str]) -> list[str]:
        return [strip_ansi(line) for line in lines]

    def test_nothing_selected(self) -> None:
        self.assertEqual(self._plain(build_entry_preview(None, DEFAULT_THEME)), ["Select a file to preview"])

    def test_directory_preview(self) -> None:
        lines = self._plain(build_entry_preview(self.entries["pkg"], DEFAULT_THEME))
        self.assertEqual(lines[0], "Directory")
        self.assertIn("Name: pkg", lines)
        self.assertIn("Items: 1 item", lines)
        self.assertEqual(lines[-1], "Press Enter to open")

    def test_text_file_preview_without_color(self) -> None:
        lines = build_entry_preview(self.entries["notes.md"], PLAIN_THEME, no_color=True)
        self.assertIn("File", lines)
        self.assertIn("Size: 13 B", lines)
        self.assertIn("━━━ Preview ━━━", lines)
        self.assertEqual(lines[-2:], ["# Title", "body"])
        self.assertFalse(any("\033" in line for line in lines[lines.index("━━━ Preview ━━━"):]))

    def test_text_file_preview_is_highlighted(self) -> None:
        lines = build_entry_preview(self.entries["notes.md"], DEFAULT_THEME)
        body = lines[self._plain(lines).index("━━━ Preview ━━━") + 1 :]
        self.assertTrue(any("\033[" in line for line in body))
        self.assertIn("# Title", self._plain(body))

    def test_binary_file_has_no_preview(self) -> None:
        lines = self._plain(build_entry_preview(self.entries["image.bin"], DEFAULT_THEME))
        self.assertIn("(Binary file - no preview)", lines)
        self.assertNotIn("━━━ Preview ━━━", lines)

    def test_unreadable_file_reports_error(self) -> None:
        entry = self.entries["notes.md"]
        os.unlink(entry.path)
        lines = self._plain(build_entry_preview(entry, DEFAULT_THEME))
        self.assertIn("Error reading file", lines)

    def test_truncated_marker(self) -> None:
        (self.root / "big.txt").write_text("line\n" * 400, encoding="utf-8")
        entry = next(e for e in list_directory(self.root) if e.name == "big.txt")
        lines = self._plain(build_entry_preview(entry, PLAIN_THEME, no_color=True))
        self.assertEqual(lines[-1], "... (truncated)")


class DiskPreviewTests(unittest.TestCase):
    def test_empty_disk_list(self) -> None:
        lines = [strip_ansi(line) for line in build_disk_preview([], DEFAULT_THEME)]
        self.assertEqual(lines, ["Disks", "", "No disks found"])

    def test_disk_block(self) -> None:
        disk = DiskStatus(
            device="/dev/sda1",
            mountpoint="/",
            fstype="ext4",
            total=4 * 1024**3,
            used=1024**3,
            free=3 * 1024**3,
            used_percent=25.0,
        )
        lines = [strip_ansi(line) for line in build_disk_preview([disk], DEFAULT_THEME)]
        self.assertIn("/ /dev/sda1 (ext4)", lines)
        self.assertIn("Used: 1.0 GB / 4.0 GB", lines)
        self.assertIn("Free: 3.0 GB", lines)
        self.assertTrue(any(line.endswith(" 25.0%") and line.startswith("█████░") for line in lines))


if __name__ == "__main__":
    unittest.main()
