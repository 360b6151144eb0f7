"""Character motions (h, j, k, l)."""

from __future__ import annotations

from .line import line_end, line_index, line_start, offset_of_line, line_count


def move_left(text: str, position: int) -> int:
    if position <= 0:
        return 0
    if text[position - 1] == "\n":
        return position
    return position - 1


def move_right(text: str, position: int) -> int:
    if position >= len(text) - 1:
        return position
    if text[position] == "\n" or text[position + 1] == "\n":
        return position
    return position + 1


def _move_vertical(text: str, position: int, delta: int) -> int:
    row = line_index(text, position)
    target = row + delta
    if target < 0 or target >= line_count(text):
        return position
    column = position - line_start(text, position)
    start = offset_of_line(text, target)
    length = line_end(text, start) - start
    return start + min(column, max(length - 1, 0))


def move_up(text: str, position: int) -> int:
    return _move_vertical(text, position, -1)


def move_down(text: str, position: int) -> int:
    return _move_vertical(text, position, 1)


__all__ = ["move_left", "move_right", "move_up", "move_down"]
