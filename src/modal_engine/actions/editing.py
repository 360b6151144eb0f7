"""Single-key edits: ``x``/``X`` and ``p``/``P``."""

from __future__ import annotations

from modal_engine.keymaps import ResolutionMatch
from modal_engine.motions.line import line_end, line_start, to_line_end
from modal_engine.modes.base_mode import ModeContext, ModeResult


def _cut(context: ModeContext, text: str, start: int, end: int) -> str:
    removed = text[start:end]
    context.registers.yank_to(context.state.register_name, removed)
    context.bus.emit(
        "register.write",
        {"register": context.state.register_name, "text": removed, "linewise": False},
    )
    context.buffer.set_selected_range(start, end - start)
    context.buffer.replace_selection("")
    return text[:start] + text[end:]


def delete_char(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``x``: delete up to ``count`` characters under and after the cursor.

    Never crosses the end of the line; the cursor settles back onto the
    line's last character.
    """

    del match
    text, cursor = context.snapshot()
    end = min(cursor + context.state.count, line_end(text, cursor))
    if end <= cursor:
        return ModeResult(consumed=True, status="noop")
    remaining = _cut(context, text, cursor, end)
    context.buffer.set_cursor_offset(min(cursor, to_line_end(remaining, cursor)))
    return ModeResult(consumed=True, status="delete_char")


def delete_char_before(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    text, cursor = context.snapshot()
    start = max(cursor - context.state.count, line_start(text, cursor))
    if start >= cursor:
        return ModeResult(consumed=True, status="noop")
    _cut(context, text, start, cursor)
    context.buffer.set_cursor_offset(start)
    return ModeResult(consumed=True, status="delete_char")


def paste(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``p``/``P``: put the active register after or before the cursor.

    Linewise content becomes a new line below (``p``) or above (``P``)
    the current line with surrounding newlines trimmed; other content is
    inserted right after the cursor cell (``p``) or at the cursor (``P``).
    """

    after = bool(match.action.metadata.get("after"))
    content = context.registers.get(context.state.register_name)
    if content is None:
        return ModeResult(consumed=True, status="noop", message="empty_register")
    text, cursor = context.snapshot()
    buffer = context.buffer

    if content.is_linewise:
        body = content.text.strip("\n")
        if after:
            end = line_end(text, cursor)
            buffer.set_cursor_offset(end)
            buffer.insert_text("\n" + body)
            buffer.set_cursor_offset(end + 1)
        else:
            start = line_start(text, cursor)
            buffer.set_cursor_offset(start)
            buffer.insert_text(body + "\n")
            buffer.set_cursor_offset(start)
        return ModeResult(consumed=True, status="paste", message="linewise")

    position = cursor
    if after and cursor < line_end(text, cursor):
        position = cursor + 1
    buffer.set_cursor_offset(position)
    buffer.insert_text(content.text)
    return ModeResult(consumed=True, status="paste", message="charwise")


__all__ = ["delete_char", "delete_char_before", "paste"]
