"""Operator executor: applies delete/change/yank to a resolved range."""

from __future__ import annotations

from typing import Optional

from modal_engine.buffer import BufferUnavailableError
from modal_engine.motions.line import line_end, line_start, to_first_non_blank, to_line_end
from modal_engine.motions.models import TextRange
from modal_engine.runtime import telemetry

from .base_mode import ModeContext, ModeResult
from .state import EngineMode, OperatorType


class OperatorExecutor:
    """Snapshots a range into the active register and mutates the buffer.

    Every operation finishes with a transition: Insert for change, Normal
    otherwise. The caller is expected to have read the text and cursor
    before calling so that an unavailable buffer aborts before any write.
    """

    def __init__(self, context: ModeContext) -> None:
        self.context = context
        self.logger = telemetry.get_logger("modal_engine.operators")

    def apply(
        self,
        operator: OperatorType,
        text: str,
        target: TextRange,
        *,
        source: str,
        cursor: Optional[int] = None,
    ) -> ModeResult:
        """Apply ``operator`` to ``target`` within ``text``.

        ``source`` names what produced the range (``motion``, ``find``,
        ``text_object``, ``line``, ``selection``). ``cursor`` is the position a
        yank leaves the cursor at; it defaults to unchanged.

        An empty range keeps the register untouched, except for an unfound
        find, which still records an empty yank.
        """

        snapshot = target.slice(text)
        with telemetry.span(
            "operator::apply",
            component="operators",
            metadata={
                "operator": operator.name.lower(),
                "source": source,
                "start": target.start,
                "end": target.end,
                "linewise": target.linewise,
                "fallback": self.context.buffer.needs_fallback_mode(),
            },
        ):
            if snapshot or source == "find":
                self._write_register(snapshot, linewise=target.linewise)
            if operator.deletes_text:
                self._delete(operator, text, target)
            elif cursor is not None:
                self.context.buffer.set_cursor_offset(cursor)
            self.context.bus.emit(
                "operator.applied",
                {
                    "operator": operator,
                    "range": (target.start, target.end),
                    "linewise": target.linewise,
                    "text": snapshot,
                    "source": source,
                },
            )
        return self._finish(operator, source)

    def apply_selection(self, operator: OperatorType, *, linewise: bool) -> ModeResult:
        """Apply ``operator`` to the host's current selection (Visual modes)."""

        buffer = self.context.buffer
        selected = buffer.get_selected_text()
        selection = buffer.get_selected_range()
        text = buffer.get_text()
        if selected is None or selection is None or text is None:
            raise BufferUnavailableError("selection")
        start, length = selection
        return self.apply(
            operator,
            text,
            TextRange(start, start + length, linewise=linewise),
            source="selection",
            cursor=start,
        )

    def _write_register(self, snapshot: str, *, linewise: bool) -> None:
        name = self.context.state.register_name
        self.context.registers.yank_to(name, snapshot, linewise=linewise)
        self.context.bus.emit(
            "register.write", {"register": name, "text": snapshot, "linewise": linewise}
        )

    def _delete(self, operator: OperatorType, text: str, target: TextRange) -> None:
        start, end = target.start, target.end
        if target.linewise:
            if operator.enters_insert_mode:
                # Keep the line break so the change edits an empty line.
                if end > start and text[end - 1] == "\n":
                    end -= 1
            elif end == len(text) and start > 0 and not text.endswith("\n"):
                start -= 1
        if end <= start:
            if operator.enters_insert_mode:
                self.context.buffer.set_cursor_offset(start)
            return

        buffer = self.context.buffer
        buffer.set_selected_range(start, end - start)
        buffer.replace_selection("")

        remaining = text[:start] + text[end:]
        buffer.set_cursor_offset(self._cursor_after_delete(operator, remaining, start, target))

    def _cursor_after_delete(
        self, operator: OperatorType, remaining: str, start: int, target: TextRange
    ) -> int:
        position = min(start, len(remaining))
        if operator.enters_insert_mode:
            return position
        if target.linewise:
            return to_first_non_blank(remaining, position)
        if position >= line_end(remaining, position) and position > line_start(remaining, position):
            return to_line_end(remaining, position)
        return position

    def _finish(self, operator: OperatorType, source: str) -> ModeResult:
        next_mode = EngineMode.INSERT if operator.enters_insert_mode else EngineMode.NORMAL
        telemetry.record_event(
            "operator.applied",
            data={"operator": operator.name.lower(), "source": source},
        )
        return ModeResult(
            consumed=True,
            switch_to=next_mode,
            status="operator",
            message=operator.key,
        )


__all__ = ["OperatorExecutor"]
