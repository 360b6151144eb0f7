"""Normal mode: counts, multi-key sequences, literal commands and motions."""

from __future__ import annotations

from typing import Optional

from modal_engine.keymaps import ResolutionMatch
from modal_engine.motions import Motion, motion_from_key, resolve_position
from modal_engine.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult, abort
from .keymap_helpers import execute_match, require_keymap_resolver
from .state import EngineMode, FindMotionState


class NormalMode(Mode):
    """Applies the Normal-mode rules in priority order.

    1. a pending find consumes the next key as its target character;
    2. a non-empty key buffer is extended and resolved (``gg``);
    3. digits accumulate into the count;
    4. the literal command tables, then single-key motions.
    """

    name = EngineMode.NORMAL

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("modal_engine.modes.normal")
        self._resolver = require_keymap_resolver(context)

    def on_enter(self, previous: Optional[EngineMode]) -> None:
        del previous
        self.state.reset()
        self.context.recognizer.reset()

    def handle_key(self, key: KeyInput) -> ModeResult:
        state = self.state

        if state.pending_find_type is not None:
            return self._complete_find(key)

        if state.key_buffer:
            return self._extend_sequence(key)

        if key.char is not None and state.accumulate_digit(key.char):
            return ModeResult(consumed=True, status="count")

        state.count = state.take_count()
        result = self._resolver.resolve(self.name.value, (key.token,))
        if result.status == "match" and result.match:
            return self._execute(result.match)
        if result.status == "pending":
            state.key_buffer.append(key.token)
            return ModeResult(consumed=True, status="pending", message="awaiting_sequence")

        motion = motion_from_key(key.token)
        if motion is not None:
            return self.move(motion, state.count)
        return ModeResult(consumed=False, status="unmapped")

    def move(self, motion: Motion, count: int) -> ModeResult:
        text, cursor = self.context.snapshot()
        target = resolve_position(motion, cursor, text, count)
        self.context.buffer.set_cursor_offset(target)
        return ModeResult(consumed=True, status="motion", message=motion.kind.value)

    def _complete_find(self, key: KeyInput) -> ModeResult:
        state = self.state
        kind = state.pending_find_type
        state.pending_find_type = None
        if kind is None or key.char is None:
            return ModeResult(consumed=False, status="cancel", message="find")
        state.last_find_motion = FindMotionState(key.char, kind)
        return self.move(Motion.find(key.char, kind), state.count)

    def _extend_sequence(self, key: KeyInput) -> ModeResult:
        state = self.state
        state.key_buffer.append(key.token)
        result = self._resolver.resolve(self.name.value, tuple(state.key_buffer))
        if result.status == "pending":
            return ModeResult(consumed=True, status="pending", message="awaiting_sequence")
        keys = "".join(state.key_buffer)
        state.key_buffer.clear()
        if result.status == "match" and result.match:
            return self._execute(result.match)
        self.logger.debug("unknown sequence %r", keys)
        return abort(f"unknown_sequence:{keys}")

    def _execute(self, match: ResolutionMatch) -> ModeResult:
        return execute_match(self.context, match)


__all__ = ["NormalMode"]
