"""Validation helpers shared across buffer implementations."""

from __future__ import annotations


class BufferValidationError(RuntimeError):
    """Raised when a caller hands a buffer an out-of-bounds offset or range."""

    def __init__(self, message: str, *, offset: int | None = None) -> None:
        super().__init__(message)
        self.offset = offset


class BufferUnavailableError(RuntimeError):
    """Raised inside the engine when the host reports no usable text target."""

    def __init__(self, what: str) -> None:
        super().__init__(f"buffer {what} unavailable")
        self.what = what


def ensure_offset(text: str, offset: int) -> int:
    if offset < 0 or offset > len(text):
        raise BufferValidationError("Offset out of range", offset=offset)
    return offset


def ensure_range(text: str, start: int, length: int) -> tuple[int, int]:
    ensure_offset(text, start)
    if length < 0:
        raise BufferValidationError("Negative range length", offset=start)
    ensure_offset(text, start + length)
    return start, length
