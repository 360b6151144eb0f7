"""Actions bound in Visual and Visual-Line modes."""

from __future__ import annotations

from modal_engine.keymaps import ResolutionMatch
from modal_engine.modes.base_mode import ModeContext, ModeResult
from modal_engine.modes.operator_pipeline import OperatorExecutor
from modal_engine.modes.state import EngineMode, OperatorType


def toggle_visual(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """``v``/``V``: leave when already in that mode, otherwise switch to it."""

    target = EngineMode(str(match.action.metadata["mode"]))
    if context.mode is target:
        return ModeResult(consumed=True, switch_to=EngineMode.NORMAL, message="exit_visual")
    return ModeResult(consumed=True, switch_to=target, message=f"enter_{target.value}")


def operate_on_selection(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    operator = OperatorType(str(match.action.metadata["operator"]))
    executor = OperatorExecutor(context)
    return executor.apply_selection(
        operator, linewise=context.mode is EngineMode.VISUAL_LINE
    )


__all__ = ["toggle_visual", "operate_on_selection"]
