"""Runtime services: telemetry, configuration, and mode notifications."""

from . import telemetry
from .config import ConfigProvider, EngineConfig
from .notify import ModeNotifier, ModeSink

__all__ = [
    "telemetry",
    "ConfigProvider",
    "EngineConfig",
    "ModeNotifier",
    "ModeSink",
]
