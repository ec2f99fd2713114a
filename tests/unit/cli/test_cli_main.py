from __future__ import annotations

import io
import logging
import logging.handlers
import os
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path
from unittest import mock

from tuiexplorer import cli
from tuiexplorer.config import ExplorerConfig
from tuiexplorer.errors import NavigationError
from tuiexplorer.terminal import TerminalUnavailableError


class CliMainTests(unittest.TestCase):
    def setUp(self) -> None:
        patches = [
            mock.patch("tuiexplorer.cli.load_config", return_value=ExplorerConfig()),
            mock.patch("tuiexplorer.cli._configure_logging"),
        ]
        for patcher in patches:
            patcher.start()
            self.addCleanup(patcher.stop)

    def test_successful_session_returns_zero(self) -> None:
        with mock.patch("tuiexplorer.cli.run_explorer") as run_explorer:
            self.assertEqual(cli.main([]), 0)
        run_explorer.assert_called_once_with(ExplorerConfig())

    def test_terminal_failure_returns_one(self) -> None:
        stderr = io.StringIO()
        with mock.patch(
            "tuiexplorer.cli.run_explorer",
            side_effect=TerminalUnavailableError("terminal cannot be initialized: not a tty"),
        ), redirect_stderr(stderr):
            self.assertEqual(cli.main([]), 1)
        self.assertIn("terminal cannot be initialized", stderr.getvalue())

    def test_unlistable_start_returns_one(self) -> None:
        stderr = io.StringIO()
        with mock.patch(
            "tuiexplorer.cli.run_explorer",
            side_effect=NavigationError(Path("/"), "Permission denied"),
        ), redirect_stderr(stderr):
            self.assertEqual(cli.main([]), 1)
        self.assertIn("Permission denied", stderr.getvalue())

    def test_positional_arguments_are_rejected(self) -> None:
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            cli.main(["/tmp"])
        self.assertEqual(ctx.exception.code, 2)


class CliLoggingTests(unittest.TestCase):
    def test_debug_requested_from_config_or_env(self) -> None:
        with mock.patch.dict(os.environ, {}, clear=True):
            self.assertFalse(cli.debug_requested(False))
            self.assertTrue(cli.debug_requested(True))
        with mock.patch.dict(os.environ, {cli.DEBUG_ENV_VAR: "1"}, clear=True):
            self.assertTrue(cli.debug_requested(False))
        with mock.patch.dict(os.environ, {cli.DEBUG_ENV_VAR: "0"}, clear=True):
            self.assertFalse(cli.debug_requested(False))

    def test_logging_disabled_without_debug(self) -> None:
        with mock.patch("tuiexplorer.cli.logging.disable") as disable:
            cli._configure_logging(False)
        disable.assert_called_once_with(logging.CRITICAL)

    def test_debug_logging_writes_rotating_file(self) -> None:
        root = logging.getLogger()
        previous_level = root.level
        with tempfile.TemporaryDirectory() as tmp, mock.patch(
            "tuiexplorer.cli.user_log_dir", return_value=tmp
        ):
            handlers_before = list(root.handlers)
            cli._configure_logging(True)
            added = [handler for handler in root.handlers if handler not in handlers_before]
            try:
                self.assertEqual(len(added), 1)
                self.assertIsInstance(added[0], logging.handlers.RotatingFileHandler)
                logging.getLogger("tuiexplorer.test").debug("hello")
                added[0].flush()
                self.assertIn("hello", (Path(tmp) / "debug.log").read_text(encoding="utf-8"))
            finally:
                for handler in added:
                    root.removeHandler(handler)
                    handler.close()
                root.setLevel(previous_level)

    def test_unwritable_log_dir_warns_and_continues(self) -> None:
        root = logging.getLogger()
        stderr = io.StringIO()
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "not-a-dir"
            blocker.write_text("x", encoding="utf-8")
            handlers_before = list(root.handlers)
            with mock.patch(
                "tuiexplorer.cli.user_log_dir", return_value=str(blocker / "logs")
            ), mock.patch("tuiexplorer.cli.logging.disable") as disable, redirect_stderr(stderr):
                cli._configure_logging(True)
            self.assertEqual(root.handlers, handlers_before)
        disable.assert_called_once_with(logging.CRITICAL)
        self.assertIn("cannot write debug log", stderr.getvalue())

    def test_main_survives_unwritable_log_dir(self) -> None:
        stderr = io.StringIO()
        with mock.patch(
            "tuiexplorer.cli.load_config", return_value=ExplorerConfig(debug=True)
        ), mock.patch(
            "tuiexplorer.cli.Path.mkdir", side_effect=PermissionError(13, "Permission denied")
        ), mock.patch("tuiexplorer.cli.logging.disable"), mock.patch(
            "tuiexplorer.cli.run_explorer"
        ) as run_explorer, redirect_stderr(stderr):
            self.assertEqual(cli.main([]), 0)
        run_explorer.assert_called_once()
        self.assertIn("Permission denied", stderr.getvalue())


if __name__ == "__main__":
    unittest.main()
