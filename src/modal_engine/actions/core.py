"""Normal-mode actions: mode entry, operators, finds and undo."""

from __future__ import annotations

from modal_engine.keymaps import ResolutionMatch
from modal_engine.motions import FindKind, Motion, resolve_position
from modal_engine.motions.character import move_up
from modal_engine.motions.line import line_end, line_start, to_document_start
from modal_engine.modes.base_mode import ModeContext, ModeResult
from modal_engine.modes.state import EngineMode, OperatorType


def _insert(message: str) -> ModeResult:
    return ModeResult(consumed=True, switch_to=EngineMode.INSERT, message=message)


def enter_insert_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return _insert("enter_insert")


def append_after_cursor(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    text, cursor = context.snapshot()
    if cursor < line_end(text, cursor):
        context.buffer.set_cursor_offset(cursor + 1)
    return _insert("append")


def insert_at_line_start(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    text, cursor = context.snapshot()
    context.buffer.set_cursor_offset(line_start(text, cursor))
    return _insert("insert_line_start")


def append_at_line_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    text, cursor = context.snapshot()
    context.buffer.set_cursor_offset(line_end(text, cursor))
    return _insert("append_line_end")


def open_line_below(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    text, cursor = context.snapshot()
    context.buffer.set_cursor_offset(line_end(text, cursor))
    context.buffer.insert_text("\n")
    return _insert("open_below")


def open_line_above(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    text, cursor = context.snapshot()
    start = line_start(text, cursor)
    context.buffer.set_cursor_offset(start)
    context.buffer.insert_text("\n")
    opened = text[:start] + "\n" + text[start:]
    context.buffer.set_cursor_offset(move_up(opened, start + 1))
    return _insert("open_above")


def enter_visual_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    context.snapshot()
    target = EngineMode(str(match.action.metadata.get("mode", EngineMode.VISUAL.value)))
    return ModeResult(consumed=True, switch_to=target, message=f"enter_{target.value}")


def start_operator(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    operator = OperatorType(str(match.action.metadata["operator"]))
    context.state.pending_operator = operator
    return ModeResult(
        consumed=True,
        switch_to=EngineMode.OPERATOR_PENDING,
        status="pending",
        message=operator.key,
    )


def start_find(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    context.state.pending_find_type = FindKind(str(match.action.metadata["kind"]))
    return ModeResult(consumed=True, status="pending", message="find")


def repeat_find(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``;`` replays the last find; ``,`` replays it in the other direction."""

    last = context.state.last_find_motion
    if last is None:
        return ModeResult(consumed=True, status="noop", message="no_find")
    kind = last.kind.reversed() if match.action.metadata.get("reverse") else last.kind
    text, cursor = context.snapshot()
    target = resolve_position(Motion.find(last.char, kind), cursor, text, context.state.count)
    context.buffer.set_cursor_offset(target)
    return ModeResult(consumed=True, status="motion", message="find_char")


def go_to_document_start(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    text, _ = context.snapshot()
    context.buffer.set_cursor_offset(to_document_start(text, context.state.count))
    return ModeResult(consumed=True, status="motion", message="document_start")


def undo(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    for _ in range(context.state.count):
        context.buffer.undo()
    return ModeResult(consumed=True, status="undo")


__all__ = [
    "enter_insert_mode",
    "append_after_cursor",
    "insert_at_line_start",
    "append_at_line_end",
    "open_line_below",
    "open_line_above",
    "enter_visual_mode",
    "start_operator",
    "start_find",
    "repeat_find",
    "go_to_document_start",
    "undo",
]
