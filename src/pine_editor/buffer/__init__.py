"""Script buffer and host synchronisation types."""

from .buffer import BufferDelta, ScriptBuffer, Transaction
from .sync import BufferMirror, BufferSync, BufferValidationError
from .validation import ensure_offset, ensure_span

__all__ = [
    "ScriptBuffer",
    "BufferDelta",
    "Transaction",
    "BufferMirror",
    "BufferSync",
    "BufferValidationError",
    "ensure_offset",
    "ensure_span",
]
