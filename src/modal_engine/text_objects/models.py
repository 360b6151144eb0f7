"""Text object variants selected by the key after ``i``/``a``."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TextObjectKind(Enum):
    WORD = "word"
    BIG_WORD = "big_word"
    QUOTED = "quoted"
    BRACKET = "bracket"
    SENTENCE = "sentence"
    PARAGRAPH = "paragraph"


class BracketPair(Enum):
    PARENTHESES = ("(", ")")
    SQUARE = ("[", "]")
    CURLY = ("{", "}")
    ANGLE = ("<", ">")

    @property
    def open(self) -> str:
        return self.value[0]

    @property
    def close(self) -> str:
        return self.value[1]


@dataclass(frozen=True, slots=True)
class TextObject:
    kind: TextObjectKind
    delimiter: Optional[str] = None
    bracket: Optional[BracketPair] = None

    def __post_init__(self) -> None:
        if self.kind is TextObjectKind.QUOTED and not self.delimiter:
            raise ValueError("quoted text objects need a delimiter")
        if self.kind is TextObjectKind.BRACKET and self.bracket is None:
            raise ValueError("bracket text objects need a bracket pair")


_KEY_OBJECTS = {
    "w": TextObject(TextObjectKind.WORD),
    "W": TextObject(TextObjectKind.BIG_WORD),
    '"': TextObject(TextObjectKind.QUOTED, delimiter='"'),
    "'": TextObject(TextObjectKind.QUOTED, delimiter="'"),
    "`": TextObject(TextObjectKind.QUOTED, delimiter="`"),
    "(": TextObject(TextObjectKind.BRACKET, bracket=BracketPair.PARENTHESES),
    ")": TextObject(TextObjectKind.BRACKET, bracket=BracketPair.PARENTHESES),
    "b": TextObject(TextObjectKind.BRACKET, bracket=BracketPair.PARENTHESES),
    "[": TextObject(TextObjectKind.BRACKET, bracket=BracketPair.SQUARE),
    "]": TextObject(TextObjectKind.BRACKET, bracket=BracketPair.SQUARE),
    "{": TextObject(TextObjectKind.BRACKET, bracket=BracketPair.CURLY),
    "}": TextObject(TextObjectKind.BRACKET, bracket=BracketPair.CURLY),
    "B": TextObject(TextObjectKind.BRACKET, bracket=BracketPair.CURLY),
    "<": TextObject(TextObjectKind.BRACKET, bracket=BracketPair.ANGLE),
    ">": TextObject(TextObjectKind.BRACKET, bracket=BracketPair.ANGLE),
    "s": TextObject(TextObjectKind.SENTENCE),
    "p": TextObject(TextObjectKind.PARAGRAPH),
}


def text_object_from_key(key: str) -> Optional[TextObject]:
    return _KEY_OBJECTS.get(key)


__all__ = ["BracketPair", "TextObject", "TextObjectKind", "text_object_from_key"]
