"""Line and document motions (0, $, ^, gg, G) plus shared line helpers."""

from __future__ import annotations

from .models import TextRange


def line_start(text: str, position: int) -> int:
    """Offset of the first character of the line containing ``position``."""

    position = max(0, min(position, len(text)))
    return text.rfind("\n", 0, position) + 1


def line_end(text: str, position: int) -> int:
    """Offset of the newline ending the line, or ``len(text)`` on the last line."""

    position = max(0, min(position, len(text)))
    index = text.find("\n", position)
    return len(text) if index == -1 else index


def line_count(text: str) -> int:
    return text.count("\n") + 1


def line_index(text: str, position: int) -> int:
    return text.count("\n", 0, max(0, min(position, len(text))))


def offset_of_line(text: str, index: int) -> int:
    """Start offset of the zero-based line ``index`` (clamped to the text)."""

    index = max(0, min(index, line_count(text) - 1))
    offset = 0
    for _ in range(index):
        offset = text.index("\n", offset) + 1
    return offset


def to_line_start(text: str, position: int) -> int:
    return line_start(text, position)


def to_line_end(text: str, position: int) -> int:
    # The cursor rests on the last character, not after it.
    return max(line_start(text, position), line_end(text, position) - 1)


def to_first_non_blank(text: str, position: int) -> int:
    pos = line_start(text, position)
    end = line_end(text, position)
    while pos < end and text[pos].isspace():
        pos += 1
    return pos


def to_line_number(text: str, number: int) -> int:
    """First non-blank of the one-based line ``number``."""

    return to_first_non_blank(text, offset_of_line(text, number - 1))


def to_document_start(text: str, count: int = 1) -> int:
    if count > 1:
        return to_line_number(text, count)
    return 0


def to_document_end(text: str, count: int = 1) -> int:
    if count > 1:
        return to_line_number(text, count)
    return to_first_non_blank(text, offset_of_line(text, line_count(text) - 1))


def line_span(text: str, first: int, last: int) -> TextRange:
    """Whole lines from the line of ``first`` through the line of ``last``."""

    low, high = min(first, last), max(first, last)
    start = line_start(text, low)
    end = min(line_end(text, high) + 1, len(text))
    return TextRange(start, end, linewise=True)


def lines_from(text: str, position: int, count: int) -> TextRange:
    """``count`` whole lines starting at the line of ``position``."""

    start = line_start(text, position)
    end = start
    found = 0
    while end < len(text) and found < count:
        if text[end] == "\n":
            found += 1
        end += 1
    return TextRange(start, end, linewise=True)


__all__ = [
    "line_start",
    "line_end",
    "line_count",
    "line_index",
    "offset_of_line",
    "to_line_start",
    "to_line_end",
    "to_first_non_blank",
    "to_line_number",
    "to_document_start",
    "to_document_end",
    "line_span",
    "lines_from",
]
