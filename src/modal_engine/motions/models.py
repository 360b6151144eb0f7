"""Motion variants, find kinds, and the ranges operators act on."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FindKind(Enum):
    FIND_FORWARD = "f"
    FIND_BACKWARD = "F"
    TILL_FORWARD = "t"
    TILL_BACKWARD = "T"

    @property
    def forward(self) -> bool:
        return self in (FindKind.FIND_FORWARD, FindKind.TILL_FORWARD)

    @property
    def till_before(self) -> bool:
        return self in (FindKind.TILL_FORWARD, FindKind.TILL_BACKWARD)

    def reversed(self) -> "FindKind":
        return _REVERSED_FIND[self]

    @classmethod
    def from_key(cls, key: str) -> Optional["FindKind"]:
        try:
            return cls(key)
        except ValueError:
            return None


_REVERSED_FIND = {
    FindKind.FIND_FORWARD: FindKind.FIND_BACKWARD,
    FindKind.FIND_BACKWARD: FindKind.FIND_FORWARD,
    FindKind.TILL_FORWARD: FindKind.TILL_BACKWARD,
    FindKind.TILL_BACKWARD: FindKind.TILL_FORWARD,
}


class MotionKind(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    WORD_FORWARD = "word_forward"
    WORD_BACKWARD = "word_backward"
    WORD_END = "word_end"
    BIG_WORD_FORWARD = "big_word_forward"
    BIG_WORD_BACKWARD = "big_word_backward"
    BIG_WORD_END = "big_word_end"
    LINE_START = "line_start"
    LINE_END = "line_end"
    FIRST_NON_BLANK = "first_non_blank"
    DOCUMENT_START = "document_start"
    DOCUMENT_END = "document_end"
    FIND_CHAR = "find_char"


_LINEWISE = frozenset(
    {MotionKind.UP, MotionKind.DOWN, MotionKind.DOCUMENT_START, MotionKind.DOCUMENT_END}
)
_INCLUSIVE = frozenset(
    {MotionKind.WORD_END, MotionKind.BIG_WORD_END, MotionKind.FIND_CHAR}
)


@dataclass(frozen=True, slots=True)
class Motion:
    """A cursor motion; ``char``/``forward``/``till_before`` apply to finds."""

    kind: MotionKind
    char: Optional[str] = None
    forward: bool = True
    till_before: bool = False

    def __post_init__(self) -> None:
        if self.kind is MotionKind.FIND_CHAR:
            if self.char is None or len(self.char) != 1:
                raise ValueError("find motions need exactly one target character")
        elif self.char is not None:
            raise ValueError(f"{self.kind.value} does not take a character")

    @classmethod
    def find(cls, char: str, kind: FindKind) -> "Motion":
        return cls(
            MotionKind.FIND_CHAR,
            char=char,
            forward=kind.forward,
            till_before=kind.till_before,
        )

    @property
    def is_linewise(self) -> bool:
        return self.kind in _LINEWISE

    @property
    def is_inclusive(self) -> bool:
        return self.kind in _INCLUSIVE


_KEY_MOTIONS = {
    "h": MotionKind.LEFT,
    "j": MotionKind.DOWN,
    "k": MotionKind.UP,
    "l": MotionKind.RIGHT,
    "w": MotionKind.WORD_FORWARD,
    "b": MotionKind.WORD_BACKWARD,
    "e": MotionKind.WORD_END,
    "W": MotionKind.BIG_WORD_FORWARD,
    "B": MotionKind.BIG_WORD_BACKWARD,
    "E": MotionKind.BIG_WORD_END,
    "0": MotionKind.LINE_START,
    "$": MotionKind.LINE_END,
    "^": MotionKind.FIRST_NON_BLANK,
    "G": MotionKind.DOCUMENT_END,
}


def motion_from_key(key: str) -> Optional[Motion]:
    """Map a single key to its motion; ``gg`` arrives through the keymaps."""

    kind = _KEY_MOTIONS.get(key)
    if kind is None:
        return None
    return Motion(kind)


@dataclass(frozen=True, slots=True)
class TextRange:
    """Half-open ``[start, end)`` span of offsets."""

    start: int
    end: int
    linewise: bool = False

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid range {self.start}..{self.end}")

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def is_empty(self) -> bool:
        return self.end == self.start

    def slice(self, text: str) -> str:
        return text[self.start : min(self.end, len(text))]


__all__ = [
    "FindKind",
    "Motion",
    "MotionKind",
    "TextRange",
    "motion_from_key",
]
