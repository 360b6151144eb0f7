"""Editing verbs bound to keys through the keymap registry."""

from .core import (
    append_after_cursor,
    append_at_line_end,
    enter_insert_mode,
    enter_visual_mode,
    go_to_document_start,
    insert_at_line_start,
    open_line_above,
    open_line_below,
    repeat_find,
    start_find,
    start_operator,
    undo,
)
from .editing import delete_char, delete_char_before, paste
from .visual import operate_on_selection, toggle_visual

__all__ = [
    "append_after_cursor",
    "append_at_line_end",
    "enter_insert_mode",
    "enter_visual_mode",
    "go_to_document_start",
    "insert_at_line_start",
    "open_line_above",
    "open_line_below",
    "repeat_find",
    "start_find",
    "start_operator",
    "undo",
    "delete_char",
    "delete_char_before",
    "paste",
    "operate_on_selection",
    "toggle_visual",
]
