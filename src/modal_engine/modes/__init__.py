"""Mode state machine, key dispatch and the operator executor."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .state import EngineMode, EngineState, FindKind, FindMotionState, OperatorType
from .normal_mode import NormalMode
from .insert_mode import InsertMode
from .visual_mode import VisualLineMode, VisualMode
from .operator_pending_mode import OperatorPendingMode
from .operator_pipeline import OperatorExecutor
from .mode_manager import ModeManager, create_engine

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "EngineMode",
    "EngineState",
    "FindKind",
    "FindMotionState",
    "OperatorType",
    "NormalMode",
    "InsertMode",
    "VisualMode",
    "VisualLineMode",
    "OperatorPendingMode",
    "OperatorExecutor",
    "ModeManager",
    "create_engine",
]
