"""Visual and Visual-Line modes: a live selection between anchor and cursor."""

from __future__ import annotations

from typing import Optional

from modal_engine.keymaps import ResolutionMatch
from modal_engine.motions import motion_from_key, resolve_position
from modal_engine.motions.line import line_span
from modal_engine.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import execute_match, require_keymap_resolver
from .state import EngineMode


def refresh_selection(context: ModeContext, text: Optional[str] = None) -> None:
    """Select ``[min(anchor, cursor), max(anchor, cursor)]`` inclusive.

    Visual-Line widens the span to whole lines. Nothing happens when the
    anchor is unset or the text is unavailable.
    """

    state = context.state
    if state.visual_anchor is None:
        return
    if text is None:
        text = context.buffer.get_text()
        if text is None:
            return
    anchor = min(state.visual_anchor, len(text))
    cursor = min(state.visual_cursor if state.visual_cursor is not None else anchor, len(text))
    if context.mode is EngineMode.VISUAL_LINE:
        lines = line_span(text, anchor, cursor)
        start, end = lines.start, lines.end
    else:
        start = min(anchor, cursor)
        end = min(max(anchor, cursor) + 1, len(text))
    context.buffer.set_selected_range(start, max(end - start, 0))
    context.bus.emit(
        "visual.selection",
        {"anchor": anchor, "cursor": cursor, "range": (start, end), "mode": context.mode},
    )


class VisualMode(Mode):
    name = EngineMode.VISUAL

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"modal_engine.modes.{self.name.value}")
        self._resolver = require_keymap_resolver(context)

    def on_enter(self, previous: Optional[EngineMode]) -> None:
        state = self.state
        if previous is None or not previous.is_visual or state.visual_anchor is None:
            offset = self.context.buffer.get_cursor_offset()
            state.visual_anchor = offset if offset is not None else 0
            state.visual_cursor = state.visual_anchor
        refresh_selection(self.context)

    def on_exit(self, next_mode: EngineMode) -> None:
        state = self.state
        if next_mode.is_visual:
            return
        selection = self.context.buffer.get_selected_range()
        text = self.context.buffer.get_text()
        if selection is not None and selection[1] > 0 and text is not None:
            # Leaving without an operator collapses onto the live edge.
            cursor = state.visual_cursor if state.visual_cursor is not None else selection[0]
            self.context.buffer.set_cursor_offset(min(cursor, len(text)))
        state.reset_visual()

    def handle_key(self, key: KeyInput) -> ModeResult:
        state = self.state
        if key.char is not None and state.accumulate_digit(key.char):
            return ModeResult(consumed=True, status="count")

        state.count = state.take_count()
        result = self._resolver.resolve(self.name.value, (key.token,))
        if result.status == "match" and result.match:
            return self._execute(result.match)

        motion = motion_from_key(key.token)
        if motion is None:
            return ModeResult(consumed=False, status="unmapped")

        text, _ = self.context.snapshot()
        origin = state.visual_cursor if state.visual_cursor is not None else state.visual_anchor
        state.visual_cursor = resolve_position(motion, origin or 0, text, state.count)
        refresh_selection(self.context, text)
        return ModeResult(consumed=True, status="visual_select", message=motion.kind.value)

    def _execute(self, match: ResolutionMatch) -> ModeResult:
        return execute_match(self.context, match)


class VisualLineMode(VisualMode):
    name = EngineMode.VISUAL_LINE


__all__ = ["VisualMode", "VisualLineMode", "refresh_selection"]
