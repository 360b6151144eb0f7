"""Text buffer boundary, reference buffer, registers, and undo history."""

from .access import BufferCapabilities, SelectedRange, TextBufferAccess
from .buffer import InMemoryBuffer, Transaction
from .registers import RegisterContent, RegisterStore, UNNAMED_REGISTER
from .undo import UndoEntry, UndoTimeline
from .validation import (
    BufferUnavailableError,
    BufferValidationError,
    ensure_offset,
    ensure_range,
)

__all__ = [
    "BufferCapabilities",
    "SelectedRange",
    "TextBufferAccess",
    "InMemoryBuffer",
    "Transaction",
    "RegisterContent",
    "RegisterStore",
    "UNNAMED_REGISTER",
    "UndoTimeline",
    "UndoEntry",
    "BufferUnavailableError",
    "BufferValidationError",
    "ensure_offset",
    "ensure_range",
]
