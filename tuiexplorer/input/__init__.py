"""Input-layer public API for key decoding and interaction handlers.

Low-level terminal decoding (`read_key`) is kept apart from the mode
handlers the runtime loop dispatches to.
"""

from .reader import ESC_SEQUENCE_TIMEOUT_MS, UNKNOWN_KEY, _PENDING_BYTES, read_key
from .key_registry import KeyAction, KeyBinding, KeyRegistry
from .keys import (
    ExplorerKeyContext,
    dispatch_key,
    handle_help_key,
    handle_normal_key,
    handle_prompt_key,
)

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "UNKNOWN_KEY",
    "KeyAction",
    "KeyBinding",
    "KeyRegistry",
    "ExplorerKeyContext",
    "dispatch_key",
    "handle_help_key",
    "handle_normal_key",
    "handle_prompt_key",
]
