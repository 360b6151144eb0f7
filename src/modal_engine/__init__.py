"""UI-agnostic modal (Vim-style) editing engine."""

from .buffer import InMemoryBuffer, RegisterStore, TextBufferAccess
from .modes import EngineMode, KeyInput, ModeManager, ModeResult, create_engine
from .runtime import ConfigProvider, EngineConfig, ModeNotifier

__all__ = [
    "ConfigProvider",
    "EngineConfig",
    "EngineMode",
    "InMemoryBuffer",
    "KeyInput",
    "ModeManager",
    "ModeNotifier",
    "ModeResult",
    "RegisterStore",
    "TextBufferAccess",
    "create_engine",
    "adapters",
    "buffer",
    "actions",
    "modes",
    "keymaps",
    "motions",
    "runtime",
    "text_objects",
]

__version__ = "0.1.0"
