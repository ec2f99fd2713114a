from __future__ import annotations

import unittest

from tuiexplorer.input import KeyBinding, KeyRegistry


class KeyRegistryTests(unittest.TestCase):
    def test_dispatch_runs_bound_action(self) -> None:
        calls: list[str] = []
        registry = KeyRegistry((KeyBinding(("j", "DOWN"), lambda: calls.append("down")),))

        self.assertIs(registry.dispatch("DOWN"), False)
        self.assertIs(registry.dispatch("j"), False)
        self.assertEqual(calls, ["down", "down"])

    def test_unbound_key_returns_none(self) -> None:
        registry = KeyRegistry()
        self.assertIsNone(registry.dispatch("x"))
        self.assertNotIn("x", registry)

    def test_true_requests_quit_and_later_bindings_override(self) -> None:
        registry = KeyRegistry(
            (
                KeyBinding(("q",), lambda: False),
                KeyBinding(("q",), lambda: True),
            )
        )
        self.assertIn("q", registry)
        self.assertIs(registry.dispatch("q"), True)


if __name__ == "__main__":
    unittest.main()
