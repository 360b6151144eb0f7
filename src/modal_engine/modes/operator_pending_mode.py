"""Operator-Pending mode: completes ``d``/``c``/``y`` with a range."""

from __future__ import annotations

from modal_engine.motions import FindKind, Motion, motion_from_key, resolve_range
from modal_engine.motions.line import lines_from
from modal_engine.runtime import telemetry
from modal_engine.text_objects import resolve_text_object, text_object_from_key

from .base_mode import KeyInput, Mode, ModeContext, ModeResult, abort
from .operator_pipeline import OperatorExecutor
from .state import EngineMode, FindMotionState, OperatorType


class OperatorPendingMode(Mode):
    """Resolves the key after an operator in priority order.

    A pending find or text-object modifier takes the key first; then digits
    (multiplied into the outer count), the doubled operator for whole lines,
    the ``i``/``a`` modifiers, find initiators and finally motions. Anything
    else cancels the operator.
    """

    name = EngineMode.OPERATOR_PENDING

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger("modal_engine.modes.operator_pending")
        self.executor = OperatorExecutor(context)

    def on_exit(self, next_mode: EngineMode) -> None:
        del next_mode
        self.state.reset()

    def handle_key(self, key: KeyInput) -> ModeResult:
        state = self.state
        operator = state.pending_operator
        if operator is None:
            return abort("no_operator")

        if state.pending_find_type is not None:
            return self._apply_find(operator, state.pending_find_type, key)

        if state.pending_text_object_inner is not None:
            return self._apply_text_object(operator, state.pending_text_object_inner, key)

        char = key.char
        if char is not None and state.accumulate_digit(char):
            return ModeResult(consumed=True, status="count")

        count = state.take_count() * state.count

        if char == operator.key:
            text, cursor = self.context.snapshot()
            return self.executor.apply(
                operator, text, lines_from(text, cursor, count), source="line"
            )

        if char in ("i", "a"):
            state.count = count
            state.pending_text_object_inner = char == "i"
            return ModeResult(consumed=True, status="pending", message="text_object")

        kind = FindKind.from_key(char) if char is not None else None
        if kind is not None:
            state.count = count
            state.pending_find_type = kind
            return ModeResult(consumed=True, status="pending", message="find")

        motion = motion_from_key(key.token)
        if motion is not None:
            text, cursor = self.context.snapshot()
            target = resolve_range(motion, cursor, text, count)
            return self.executor.apply(operator, text, target, source="motion")

        return abort("unmapped")

    def _apply_find(
        self, operator: OperatorType, kind: FindKind, key: KeyInput
    ) -> ModeResult:
        char = key.char
        if char is None:
            return abort("find_target")
        text, cursor = self.context.snapshot()
        self.state.last_find_motion = FindMotionState(char, kind)
        target = resolve_range(Motion.find(char, kind), cursor, text, self.state.count)
        return self.executor.apply(operator, text, target, source="find")

    def _apply_text_object(
        self, operator: OperatorType, inner: bool, key: KeyInput
    ) -> ModeResult:
        obj = text_object_from_key(key.char) if key.char is not None else None
        if obj is None:
            return abort("text_object_key")
        text, cursor = self.context.snapshot()
        target = resolve_text_object(obj, cursor, text, inner)
        if target is None:
            self.logger.debug("text object %s not found at %d", obj.kind.value, cursor)
            return abort("text_object_missing")
        return self.executor.apply(operator, text, target, source="text_object")


__all__ = ["OperatorPendingMode"]
