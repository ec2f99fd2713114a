"""Key-token to action dispatch table."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass

KeyAction = Callable[[], bool | None]


@dataclass(frozen=True)
class KeyBinding:
    """One or more key tokens bound to a single action.

    An action returns ``True`` to request quit; ``None``/``False`` keep the
    session running.
    """

    keys: tuple[str, ...]
    action: KeyAction


class KeyRegistry:
    """Exact-match key dispatch; later bindings override earlier ones."""

    def __init__(self, bindings: Iterable[KeyBinding] = ()) -> None:
        self._actions: dict[str, KeyAction] = {}
        for binding in bindings:
            self.bind(binding)

    def bind(self, binding: KeyBinding) -> KeyRegistry:
        for key in binding.keys:
            self._actions[key] = binding.action
        return self

    def __contains__(self, key: str) -> bool:
        return key in self._actions

    def dispatch(self, key: str) -> bool | None:
        """Run the action bound to ``key``; ``None`` when the key is unbound."""
        action = self._actions.get(key)
        if action is None:
            return None
        return bool(action())


__all__ = [
    "KeyAction",
    "KeyBinding",
    "KeyRegistry",
]
