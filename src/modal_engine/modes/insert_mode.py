"""Insert mode: everything passes through except the exit keys."""

from __future__ import annotations

from modal_engine.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .state import EngineMode


class InsertMode(Mode):
    name = EngineMode.INSERT

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("modal_engine.modes.insert")

    def handle_key(self, key: KeyInput) -> ModeResult:
        if key.is_escape:
            return ModeResult(consumed=True, switch_to=EngineMode.NORMAL, message="exit_insert")

        char = key.char
        if char is None:
            return ModeResult(consumed=False)

        recognizer = self.context.recognizer
        if not recognizer.add_key(char):
            return ModeResult(consumed=False)

        # The final key is swallowed; the earlier ones already reached the text.
        typed = len(recognizer.sequence) - 1
        for _ in range(typed):
            self.context.buffer.delete_backward()
        self.logger.debug("exit sequence matched, removed %d typed chars", typed)
        return ModeResult(
            consumed=True,
            switch_to=EngineMode.NORMAL,
            status="escape_sequence",
            message="exit_insert",
        )


__all__ = ["InsertMode"]
