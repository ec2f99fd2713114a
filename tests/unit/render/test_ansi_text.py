from __future__ import annotations

import unittest

from tuiexplorer.ansi import clip_ansi_line, display_width, fit_ansi_line, strip_ansi, wrap_ansi_line
from tuiexplorer.ui_theme import DEFAULT_THEME, OCEAN_THEME, PLAIN_THEME, available_theme_names, resolve_theme


class AnsiTextTests(unittest.TestCase):
    def test_display_width_ignores_escapes_and_counts_wide_chars(self) -> None:
        self.assertEqual(display_width("\033[31mred\033[0m"), 3)
        self.assertEqual(display_width("日本"), 4)

    def test_clip_keeps_escapes(self) -> None:
        self.assertEqual(clip_ansi_line("\033[1mabcdef", 3), "\033[1mabc")
        self.assertEqual(clip_ansi_line("日本", 3), "日")

    def test_fit_pads_and_resets(self) -> None:
        self.assertEqual(fit_ansi_line("ab", 4), "ab  ")
        fitted = fit_ansi_line("\033[1mab", 4)
        self.assertEqual(strip_ansi(fitted), "ab  ")
        self.assertIn("\033[0m", fitted)

    def test_wrap_splits_on_width(self) -> None:
        self.assertEqual(wrap_ansi_line("abcdefg", 3), ["abc", "def", "g"])
        self.assertEqual(wrap_ansi_line("", 3), [""])


class ThemeTests(unittest.TestCase):
    def test_resolve_theme(self) -> None:
        self.assertIs(resolve_theme(None), DEFAULT_THEME)
        self.assertIs(resolve_theme(" Ocean "), OCEAN_THEME)
        self.assertIs(resolve_theme("missing"), DEFAULT_THEME)
        self.assertIs(resolve_theme("ocean", no_color=True), PLAIN_THEME)
        self.assertEqual(available_theme_names(), ("default", "ocean"))

    def test_plain_theme_keeps_reverse_video_only(self) -> None:
        self.assertEqual(PLAIN_THEME.reverse, "\033[7m")
        self.assertEqual(PLAIN_THEME.entry_dir, "")


if __name__ == "__main__":
    unittest.main()
