"""Word motions (w, b, e) and their whitespace-delimited WORD forms."""

from __future__ import annotations


def is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch == "_"


def is_punctuation(ch: str) -> bool:
    return not is_word_char(ch) and not ch.isspace()


def _same_class(ch: str, reference: str, big: bool) -> bool:
    if big:
        return not ch.isspace()
    if is_word_char(reference):
        return is_word_char(ch)
    if is_punctuation(reference):
        return is_punctuation(ch)
    return False


def word_forward(text: str, position: int, *, big: bool = False) -> int:
    """Start of the next word; may return ``len(text)`` past the last word."""

    if position >= len(text):
        return position
    pos = position
    current = text[pos]
    if not current.isspace():
        while pos < len(text) and _same_class(text[pos], current, big):
            pos += 1
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def word_backward(text: str, position: int, *, big: bool = False) -> int:
    if position <= 0:
        return 0
    pos = min(position, len(text)) - 1
    while pos > 0 and text[pos].isspace():
        pos -= 1
    current = text[pos]
    if not current.isspace():
        while pos > 0 and _same_class(text[pos - 1], current, big):
            pos -= 1
    return max(pos, 0)


def word_end(text: str, position: int, *, big: bool = False) -> int:
    if position >= len(text) - 1:
        return position
    pos = position + 1
    while pos < len(text) and text[pos].isspace():
        pos += 1
    if pos < len(text):
        current = text[pos]
        while pos < len(text) - 1 and _same_class(text[pos + 1], current, big):
            pos += 1
    return min(pos, len(text) - 1)


__all__ = [
    "is_word_char",
    "is_punctuation",
    "word_forward",
    "word_backward",
    "word_end",
]
