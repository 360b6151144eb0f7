"""Adapter boundary the engine uses to read and mutate host text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Tuple

SelectedRange = Tuple[int, int]  # (start, length)


@dataclass(frozen=True, slots=True)
class BufferCapabilities:
    """What a host text target can honor.

    ``supports_precise_range`` is False for targets that can only be driven
    by simulated selection and typing; ``write_delay`` is the pause (in
    seconds) such targets need after a write.
    """

    supports_precise_range: bool = True
    write_delay: float = 0.0


class TextBufferAccess(Protocol):
    """Capability interface the engine calls into.

    Every query may return ``None`` when the host has no usable text target;
    the engine treats that as a hard abort of the command in flight.
    """

    @property
    def capabilities(self) -> BufferCapabilities: ...

    def needs_fallback_mode(self) -> bool: ...

    def get_text(self) -> Optional[str]: ...

    def get_cursor_offset(self) -> Optional[int]: ...

    def set_cursor_offset(self, offset: int) -> None: ...

    def get_selected_range(self) -> Optional[SelectedRange]: ...

    def set_selected_range(self, start: int, length: int) -> None: ...

    def get_selected_text(self) -> Optional[str]: ...

    def replace_selection(self, text: str) -> None: ...

    def insert_text(self, text: str) -> None: ...

    def delete_backward(self) -> None: ...

    def undo(self) -> None: ...


__all__ = ["BufferCapabilities", "SelectedRange", "TextBufferAccess"]
