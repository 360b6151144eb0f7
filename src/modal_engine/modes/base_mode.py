"""Base classes and shared utilities for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple

from modal_engine.buffer import BufferUnavailableError, RegisterStore, TextBufferAccess
from modal_engine.keymaps.escape import EscapeSequenceRecognizer
from modal_engine.keymaps.models import KeyStroke
from modal_engine.runtime.config import ConfigProvider

from .state import EngineMode, EngineState

ESCAPE_KEY_CODE = 53
ESCAPE_KEYS = frozenset({"ESC", "<Esc>", "escape"})


@dataclass(frozen=True, slots=True)
class KeyInput:
    """Normalized key event passed to modes.

    ``key`` is a single logical character or a named key; ``key_code`` is
    the host's platform code when it has one.
    """

    key: str
    key_code: Optional[int] = None
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "modifiers", tuple(m.strip().lower() for m in self.modifiers if m.strip())
        )

    @property
    def is_escape(self) -> bool:
        if self.key in ESCAPE_KEYS or self.key_code == ESCAPE_KEY_CODE:
            return True
        return "ctrl" in self.modifiers and self.key == "["

    @property
    def is_modified(self) -> bool:
        return any(modifier != "shift" for modifier in self.modifiers)

    @property
    def char(self) -> Optional[str]:
        """The typed character for single-character, unmodified keys."""

        if self.is_modified or len(self.key) != 1:
            return None
        return self.key

    @property
    def token(self) -> str:
        return KeyStroke(self.key, self.modifiers).token


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``."""

    consumed: bool
    switch_to: Optional[EngineMode] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass(slots=True)
class ModeContext:
    """Services and state every mode and action can reach."""

    buffer: TextBufferAccess
    registers: RegisterStore
    state: EngineState
    bus: "ModeBus"
    config: ConfigProvider
    recognizer: EscapeSequenceRecognizer
    mode: EngineMode = EngineMode.NORMAL
    extras: Dict[str, object] = field(default_factory=dict)

    def require_text(self) -> str:
        text = self.buffer.get_text()
        if text is None:
            raise BufferUnavailableError("text")
        return text

    def require_cursor(self, text: str) -> int:
        offset = self.buffer.get_cursor_offset()
        if offset is None:
            raise BufferUnavailableError("cursor")
        return max(0, min(offset, len(text)))

    def snapshot(self) -> Tuple[str, int]:
        """Current text and cursor, or ``BufferUnavailableError``."""

        text = self.require_text()
        return text, self.require_cursor(text)


class ModeBus:
    """Minimal event bus letting modes and hosts exchange structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: EngineMode = EngineMode.NORMAL

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    @property
    def state(self) -> EngineState:
        return self.context.state

    def on_enter(self, previous: Optional[EngineMode]) -> None:
        del previous

    def on_exit(self, next_mode: EngineMode) -> None:
        del next_mode

    def handle_key(self, key: KeyInput) -> ModeResult:  # pragma: no cover - abstract
        raise NotImplementedError


def abort(message: str) -> ModeResult:
    """Cancel the command in flight: back to Normal, key not consumed."""

    return ModeResult(
        consumed=False, switch_to=EngineMode.NORMAL, status="abort", message=message
    )


__all__ = [
    "ESCAPE_KEY_CODE",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "abort",
]
