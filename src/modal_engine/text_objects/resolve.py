"""Text object ranges over a flat string.

``inner`` excludes delimiters (or surrounding whitespace); the "around"
variant includes them. Every resolver returns ``None`` when the object is
absent, including when ``position`` is past the last character.
"""

from __future__ import annotations

from typing import Callable, Optional

from ..motions.models import TextRange
from ..motions.word import is_punctuation, is_word_char
from .models import BracketPair, TextObject, TextObjectKind

_SENTENCE_ENDS = ".!?"


def _is_blank(ch: str) -> bool:
    return ch.isspace() and ch != "\n"


def _blank_run(text: str, position: int) -> TextRange:
    start = end = position
    while start > 0 and _is_blank(text[start - 1]):
        start -= 1
    while end < len(text) and _is_blank(text[end]):
        end += 1
    return TextRange(start, end)


def _extend_around(text: str, start: int, end: int) -> TextRange:
    trailing = end
    while trailing < len(text) and _is_blank(text[trailing]):
        trailing += 1
    if trailing > end:
        return TextRange(start, trailing)
    while start > 0 and _is_blank(text[start - 1]):
        start -= 1
    return TextRange(start, end)


def _run(
    text: str, position: int, inner: bool, member: Callable[[str], bool]
) -> TextRange:
    start, end = position, position + 1
    while start > 0 and member(text[start - 1]):
        start -= 1
    while end < len(text) and member(text[end]):
        end += 1
    if inner:
        return TextRange(start, end)
    return _extend_around(text, start, end)


def word_object(text: str, position: int, inner: bool, *, big: bool = False) -> Optional[TextRange]:
    """``iw``/``aw`` (and ``iW``/``aW`` when ``big``).

    On whitespace the run of blanks is selected for both variants; a line
    break on its own is not a word. The "around" variant takes trailing
    blanks, or leading blanks when there are none after the word.
    """

    if position < 0 or position >= len(text):
        return None
    current = text[position]
    if current == "\n":
        return None
    if current.isspace():
        return _blank_run(text, position)
    if big:
        return _run(text, position, inner, lambda ch: not ch.isspace())
    if is_word_char(current):
        return _run(text, position, inner, is_word_char)
    return _run(text, position, inner, is_punctuation)


def quoted_object(text: str, position: int, inner: bool, delimiter: str) -> Optional[TextRange]:
    if position < 0 or position >= len(text):
        return None
    start = text.rfind("\n", 0, position) + 1
    end = text.find("\n", position)
    if end == -1:
        end = len(text)

    quotes = [
        index
        for index in range(start, end)
        if text[index] == delimiter and not (index > 0 and text[index - 1] == "\\")
    ]
    pairs = list(zip(quotes[0::2], quotes[1::2]))
    chosen = next((pair for pair in pairs if pair[0] <= position <= pair[1]), None)
    if chosen is None:
        chosen = next((pair for pair in pairs if pair[0] > position), None)
    if chosen is None:
        return None

    open_index, close_index = chosen
    if inner:
        return TextRange(open_index + 1, close_index)
    return TextRange(open_index, close_index + 1)


def _find_open(text: str, position: int, pair: BracketPair) -> Optional[int]:
    current = text[position]
    if current == pair.open:
        return position
    depth = 0
    index = position - 1 if current == pair.close else position
    while index >= 0:
        ch = text[index]
        if ch == pair.close:
            depth += 1
        elif ch == pair.open:
            if depth == 0:
                return index
            depth -= 1
        index -= 1
    return None


def _find_close(text: str, open_index: int, pair: BracketPair) -> Optional[int]:
    depth = 1
    for index in range(open_index + 1, len(text)):
        ch = text[index]
        if ch == pair.open:
            depth += 1
        elif ch == pair.close:
            depth -= 1
            if depth == 0:
                return index
    return None


def bracket_object(text: str, position: int, inner: bool, pair: BracketPair) -> Optional[TextRange]:
    if position < 0 or position >= len(text):
        return None
    open_index = _find_open(text, position, pair)
    if open_index is None:
        return None
    close_index = _find_close(text, open_index, pair)
    if close_index is None:
        return None
    if inner:
        return TextRange(open_index + 1, close_index)
    return TextRange(open_index, close_index + 1)


def _ends_sentence(text: str, index: int) -> bool:
    return text[index] in _SENTENCE_ENDS and (
        index + 1 == len(text) or text[index + 1].isspace()
    )


def sentence_object(text: str, position: int, inner: bool) -> Optional[TextRange]:
    """Sentences end at ``.``, ``!`` or ``?`` followed by whitespace or the end."""

    if position < 0 or position >= len(text):
        return None
    start = 0
    for index in range(position - 1, -1, -1):
        if _ends_sentence(text, index):
            start = index + 1
            break
    end = len(text)
    for index in range(position, len(text)):
        if _ends_sentence(text, index):
            end = index + 1
            break

    if inner:
        while start < end and text[start].isspace():
            start += 1
    else:
        while end < len(text) and text[end].isspace():
            end += 1
    if start >= end:
        return None
    return TextRange(start, end)


def paragraph_object(text: str, position: int, inner: bool) -> Optional[TextRange]:
    """Paragraphs are separated by blank lines; "around" adds the blank lines after."""

    if position < 0 or position >= len(text):
        return None
    last = len(text) - 1
    start = position
    while start > 0:
        if text[start - 1] == "\n" and (start == 1 or text[start - 2] == "\n"):
            break
        start -= 1
    end = position
    while end < last:
        if text[end] == "\n" and (end == last - 1 or text[end + 1] == "\n"):
            break
        end += 1
    if not inner:
        while end < last and text[end + 1] == "\n":
            end += 1
    return TextRange(start, end + 1)


def resolve_text_object(
    obj: TextObject, position: int, text: str, inner: bool
) -> Optional[TextRange]:
    """Range selected by ``obj`` around ``position``, or ``None`` if absent."""

    kind = obj.kind
    if kind is TextObjectKind.WORD:
        return word_object(text, position, inner)
    if kind is TextObjectKind.BIG_WORD:
        return word_object(text, position, inner, big=True)
    if kind is TextObjectKind.QUOTED:
        assert obj.delimiter is not None
        return quoted_object(text, position, inner, obj.delimiter)
    if kind is TextObjectKind.BRACKET:
        assert obj.bracket is not None
        return bracket_object(text, position, inner, obj.bracket)
    if kind is TextObjectKind.SENTENCE:
        return sentence_object(text, position, inner)
    if kind is TextObjectKind.PARAGRAPH:
        return paragraph_object(text, position, inner)
    raise ValueError(f"Unhandled text object {kind!r}")


__all__ = [
    "word_object",
    "quoted_object",
    "bracket_object",
    "sentence_object",
    "paragraph_object",
    "resolve_text_object",
]
