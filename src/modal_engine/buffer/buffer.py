"""In-memory text target implementing ``TextBufferAccess``."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import ContextManager, Optional

from modal_engine.runtime import telemetry

from .access import BufferCapabilities, SelectedRange
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_offset, ensure_range


class InMemoryBuffer:
    """A string, a selection, and an undo timeline.

    The cursor is the start of the selection, the way accessibility text
    fields report it: a collapsed selection of length zero is a caret.
    """

    def __init__(
        self,
        text: str = "",
        *,
        cursor: int = 0,
        name: str = "default",
        capabilities: Optional[BufferCapabilities] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self._text = text
        self._selection: SelectedRange = (ensure_offset(text, cursor), 0)
        self._capabilities = capabilities or BufferCapabilities()
        self.history = undo or UndoTimeline()
        self.available = True

    @classmethod
    def from_text(cls, text: str, *, cursor: int = 0, name: str = "default") -> "InMemoryBuffer":
        return cls(text, cursor=cursor, name=name)

    @property
    def text(self) -> str:
        return self._text

    @property
    def cursor(self) -> int:
        return self._selection[0]

    @property
    def selection(self) -> SelectedRange:
        return self._selection

    @property
    def capabilities(self) -> BufferCapabilities:
        return self._capabilities

    def needs_fallback_mode(self) -> bool:
        return not self._capabilities.supports_precise_range

    def get_text(self) -> Optional[str]:
        if not self.available:
            return None
        return self._text

    def get_cursor_offset(self) -> Optional[int]:
        if not self.available:
            return None
        return self._selection[0]

    def set_cursor_offset(self, offset: int) -> None:
        if not self.available:
            return
        self._selection = (ensure_offset(self._text, offset), 0)

    def get_selected_range(self) -> Optional[SelectedRange]:
        if not self.available:
            return None
        return self._selection

    def set_selected_range(self, start: int, length: int) -> None:
        if not self.available:
            return
        self._selection = ensure_range(self._text, start, length)

    def get_selected_text(self) -> Optional[str]:
        if not self.available:
            return None
        start, length = self._selection
        return self._text[start : start + length]

    def replace_selection(self, text: str) -> None:
        if not self.available:
            return
        start, length = self._selection
        self._replace(start, start + length, text, label="replace_selection")

    def insert_text(self, text: str) -> None:
        if not self.available:
            return
        start, length = self._selection
        self._replace(start, start + length, text, label="insert_text")

    def delete_backward(self) -> None:
        if not self.available:
            return
        start, length = self._selection
        if length:
            self._replace(start, start + length, "", label="delete_backward")
        elif start > 0:
            self._replace(start - 1, start, "", label="delete_backward")

    def undo(self) -> None:
        if not self.available:
            return
        entry = self.history.undo()
        if entry is None:
            return
        self._text = entry.before_text
        self._selection = (min(entry.cursor_before, len(self._text)), 0)

    def redo(self) -> None:
        if not self.available:
            return
        entry = self.history.redo()
        if entry is None:
            return
        self._text = entry.after_text
        self._selection = (min(entry.cursor_after, len(self._text)), 0)

    def _replace(self, start: int, end: int, text: str, *, label: str) -> None:
        with Transaction(self, label) as tx:
            before_text = self._text
            self._text = before_text[:start] + text + before_text[end:]
            self._selection = (start + len(text), 0)
            tx.commit(before_text, self._text, self._selection[0])


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: InMemoryBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._before_cursor: int = 0

    def __enter__(self) -> "Transaction":
        self._before_cursor = self.buffer.cursor
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def commit(self, before_text: str, after_text: str, cursor_after: int) -> None:
        entry = UndoEntry(
            label=self.label,
            before_text=before_text,
            after_text=after_text,
            cursor_before=self._before_cursor,
            cursor_after=cursor_after,
        )
        self.buffer.history.push(entry)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
