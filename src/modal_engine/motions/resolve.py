"""Single dispatch point turning a ``Motion`` into a position or a range."""

from __future__ import annotations

from .character import move_down, move_left, move_right, move_up
from .find import repeat_find
from .line import (
    line_end,
    line_span,
    to_document_end,
    to_document_start,
    to_first_non_blank,
    to_line_end,
    to_line_start,
)
from .models import Motion, MotionKind, TextRange
from .word import word_backward, word_end, word_forward

_STEPS = {
    MotionKind.LEFT: move_left,
    MotionKind.RIGHT: move_right,
    MotionKind.UP: move_up,
    MotionKind.DOWN: move_down,
    MotionKind.WORD_FORWARD: lambda text, pos: word_forward(text, pos),
    MotionKind.WORD_BACKWARD: lambda text, pos: word_backward(text, pos),
    MotionKind.WORD_END: lambda text, pos: word_end(text, pos),
    MotionKind.BIG_WORD_FORWARD: lambda text, pos: word_forward(text, pos, big=True),
    MotionKind.BIG_WORD_BACKWARD: lambda text, pos: word_backward(text, pos, big=True),
    MotionKind.BIG_WORD_END: lambda text, pos: word_end(text, pos, big=True),
}

_FORWARD_WORDS = frozenset({MotionKind.WORD_FORWARD, MotionKind.BIG_WORD_FORWARD})


def _clamp(text: str, position: int) -> int:
    return max(0, min(position, len(text)))


def _repeat(motion: Motion, text: str, position: int, count: int) -> int:
    step = _STEPS[motion.kind]
    for _ in range(max(count, 1)):
        position = step(text, position)
    return position


def resolve_position(motion: Motion, position: int, text: str, count: int = 1) -> int:
    """Where the cursor lands after ``count`` applications of ``motion``."""

    position = _clamp(text, position)
    kind = motion.kind
    if kind in _STEPS:
        target = _repeat(motion, text, position, count)
        if kind in _FORWARD_WORDS and text:
            target = min(target, len(text) - 1)
        return target
    if kind is MotionKind.LINE_START:
        return to_line_start(text, position)
    if kind is MotionKind.LINE_END:
        return to_line_end(text, position)
    if kind is MotionKind.FIRST_NON_BLANK:
        return to_first_non_blank(text, position)
    if kind is MotionKind.DOCUMENT_START:
        return to_document_start(text, count)
    if kind is MotionKind.DOCUMENT_END:
        return to_document_end(text, count)
    if kind is MotionKind.FIND_CHAR:
        found = _find(motion, text, position, count)
        return position if found is None else found
    raise ValueError(f"Unhandled motion {kind!r}")


def _find(motion: Motion, text: str, position: int, count: int) -> int | None:
    assert motion.char is not None
    return repeat_find(
        text,
        position,
        motion.char,
        forward=motion.forward,
        till_before=motion.till_before,
        count=count,
    )


def _operator_target(motion: Motion, position: int, text: str, count: int) -> int:
    kind = motion.kind
    if kind is MotionKind.RIGHT:
        return min(position + max(count, 1), line_end(text, position))
    if kind is MotionKind.LINE_END:
        return line_end(text, position)
    if kind in _FORWARD_WORDS:
        return _repeat(motion, text, position, count)
    return resolve_position(motion, position, text, count)


def resolve_range(motion: Motion, position: int, text: str, count: int = 1) -> TextRange:
    """Half-open range an operator acts on for ``motion`` from ``position``.

    Linewise motions cover whole source and destination lines; inclusive
    motions take the destination character too. A find whose character is
    absent yields an empty range at ``position``.
    """

    position = _clamp(text, position)
    if motion.kind is MotionKind.FIND_CHAR:
        found = _find(motion, text, position, count)
        if found is None:
            return TextRange(position, position)
        target = found
    else:
        target = _operator_target(motion, position, text, count)

    if motion.is_linewise:
        return line_span(text, position, target)

    start, end = min(position, target), max(position, target)
    if motion.is_inclusive:
        end += 1
    end = min(end, len(text))
    if motion.kind in _FORWARD_WORDS:
        end = _stop_at_line_break(text, start, end)
    return TextRange(start, end)


def _stop_at_line_break(text: str, start: int, end: int) -> int:
    trimmed = end
    while trimmed > start and text[trimmed - 1].isspace():
        trimmed -= 1
    newline = text.find("\n", trimmed, end)
    return end if newline == -1 else newline


__all__ = ["resolve_position", "resolve_range"]
