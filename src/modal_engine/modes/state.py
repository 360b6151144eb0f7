"""Mode identifiers and the transient command state shared by every mode."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from modal_engine.buffer.registers import UNNAMED_REGISTER
from modal_engine.motions.models import FindKind


class EngineMode(str, Enum):
    NORMAL = "normal"
    INSERT = "insert"
    VISUAL = "visual"
    VISUAL_LINE = "visual_line"
    OPERATOR_PENDING = "operator_pending"

    @property
    def status_name(self) -> str:
        """Name published to status observers, e.g. ``VISUAL_LINE``."""

        return self.name

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def is_visual(self) -> bool:
        return self in (EngineMode.VISUAL, EngineMode.VISUAL_LINE)


_DISPLAY_NAMES = {
    EngineMode.NORMAL: "-- NORMAL --",
    EngineMode.INSERT: "-- INSERT --",
    EngineMode.VISUAL: "-- VISUAL --",
    EngineMode.VISUAL_LINE: "-- VISUAL LINE --",
    EngineMode.OPERATOR_PENDING: "-- (op) --",
}


class OperatorType(Enum):
    DELETE = "d"
    CHANGE = "c"
    YANK = "y"

    @property
    def key(self) -> str:
        return self.value

    @property
    def deletes_text(self) -> bool:
        return self is not OperatorType.YANK

    @property
    def enters_insert_mode(self) -> bool:
        return self is OperatorType.CHANGE

    @classmethod
    def from_key(cls, key: str) -> Optional["OperatorType"]:
        try:
            return cls(key)
        except ValueError:
            return None


@dataclass(frozen=True, slots=True)
class FindMotionState:
    """The last f/F/t/T target, replayed by ``;`` and ``,``."""

    char: str
    kind: FindKind


@dataclass(slots=True)
class EngineState:
    """Transient command state.

    ``reset()`` runs on every entry into Normal mode (and when an operator
    completes) and clears ``count``, ``pending_operator``, ``key_buffer``,
    ``pending_find_type``, ``pending_text_object_inner`` and
    ``count_buffer``. ``reset_visual()`` runs when leaving the visual modes
    and clears ``visual_anchor`` and ``visual_cursor``. ``register_name``
    and ``last_find_motion`` survive both.
    """

    count: int = 1
    pending_operator: Optional[OperatorType] = None
    register_name: str = UNNAMED_REGISTER
    visual_anchor: Optional[int] = None
    visual_cursor: Optional[int] = None
    key_buffer: List[str] = field(default_factory=list)
    last_find_motion: Optional[FindMotionState] = None
    pending_find_type: Optional[FindKind] = None
    pending_text_object_inner: Optional[bool] = None
    count_buffer: str = ""

    def reset(self) -> None:
        self.count = 1
        self.pending_operator = None
        self.key_buffer.clear()
        self.pending_find_type = None
        self.pending_text_object_inner = None
        self.count_buffer = ""

    def reset_visual(self) -> None:
        self.visual_anchor = None
        self.visual_cursor = None

    def accumulate_digit(self, key: str) -> bool:
        """Append ``key`` to the count; a leading ``0`` is not a digit here."""

        if len(key) != 1 or key not in "0123456789":
            return False
        if key == "0" and not self.count_buffer:
            return False
        self.count_buffer += key
        return True

    def take_count(self) -> int:
        """Consume the typed digits, returning 1 when none were typed."""

        typed = int(self.count_buffer) if self.count_buffer else 1
        self.count_buffer = ""
        return typed


__all__ = [
    "EngineMode",
    "EngineState",
    "FindKind",
    "FindMotionState",
    "OperatorType",
]
