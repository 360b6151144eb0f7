"""``TextBufferAccess`` over a Textual ``TextArea`` widget."""

from __future__ import annotations

from typing import Optional, Tuple

try:  # pragma: no cover - exercised only with textual installed
    from textual.widgets import TextArea
    from textual.widgets.text_area import Selection
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use modal_engine.adapters.textual"
    ) from exc

from modal_engine.buffer import BufferCapabilities, SelectedRange

Location = Tuple[int, int]  # (row, column)


def offset_to_location(text: str, offset: int) -> Location:
    offset = max(0, min(offset, len(text)))
    row = text.count("\n", 0, offset)
    column = offset - (text.rfind("\n", 0, offset) + 1)
    return row, column


def location_to_offset(text: str, location: Location) -> int:
    lines = text.split("\n")
    row = max(0, min(location[0], len(lines) - 1))
    column = max(0, min(location[1], len(lines[row])))
    return sum(len(line) + 1 for line in lines[:row]) + column


class TextAreaBuffer:
    """Drives a ``TextArea`` through flat character offsets.

    ``TextArea`` addresses text by (row, column); the engine works on
    offsets, so every call converts through the current text. The cursor is
    the start of the selection regardless of which way it was made.
    """

    def __init__(self, text_area: TextArea) -> None:
        self.text_area = text_area
        self._capabilities = BufferCapabilities()

    @property
    def capabilities(self) -> BufferCapabilities:
        return self._capabilities

    def needs_fallback_mode(self) -> bool:
        return False

    def get_text(self) -> Optional[str]:
        return self.text_area.text

    def get_cursor_offset(self) -> Optional[int]:
        selected = self.get_selected_range()
        return selected[0] if selected else None

    def set_cursor_offset(self, offset: int) -> None:
        location = offset_to_location(self.text_area.text, offset)
        self.text_area.selection = Selection.cursor(location)

    def get_selected_range(self) -> Optional[SelectedRange]:
        text = self.text_area.text
        selection = self.text_area.selection
        first = location_to_offset(text, selection.start)
        second = location_to_offset(text, selection.end)
        start, end = sorted((first, second))
        return start, end - start

    def set_selected_range(self, start: int, length: int) -> None:
        text = self.text_area.text
        self.text_area.selection = Selection(
            offset_to_location(text, start), offset_to_location(text, start + length)
        )

    def get_selected_text(self) -> Optional[str]:
        selected = self.get_selected_range()
        if selected is None:
            return None
        start, length = selected
        return self.text_area.text[start : start + length]

    def replace_selection(self, text: str) -> None:
        start, length = self.get_selected_range() or (0, 0)
        current = self.text_area.text
        self.text_area.replace(
            text,
            offset_to_location(current, start),
            offset_to_location(current, start + length),
        )
        self.set_cursor_offset(start + len(text))

    def insert_text(self, text: str) -> None:
        self.replace_selection(text)

    def delete_backward(self) -> None:
        start, length = self.get_selected_range() or (0, 0)
        if not length:
            if start == 0:
                return
            start, length = start - 1, 1
        current = self.text_area.text
        self.text_area.delete(
            offset_to_location(current, start),
            offset_to_location(current, start + length),
        )
        self.set_cursor_offset(start)

    def undo(self) -> None:
        self.text_area.undo()


__all__ = ["TextAreaBuffer", "location_to_offset", "offset_to_location"]
