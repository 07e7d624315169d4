"""Input-layer public API for key decoding and command dispatch.

Exports are split between low-level terminal decoding (`read_key`) and the
key-to-command mapping used by the runtime loop.
"""

from .controller import (
    ClearQuery,
    Command,
    Complete,
    Confirm,
    Erase,
    InsertText,
    Interrupt,
    apply_command,
    command_for_key,
)
from .reader import ESC_SEQUENCE_TIMEOUT_MS, _PENDING_BYTES, read_key

__all__ = [
    "read_key",
    "_PENDING_BYTES",
    "ESC_SEQUENCE_TIMEOUT_MS",
    "ClearQuery",
    "Command",
    "Complete",
    "Confirm",
    "Erase",
    "InsertText",
    "Interrupt",
    "apply_command",
    "command_for_key",
]
