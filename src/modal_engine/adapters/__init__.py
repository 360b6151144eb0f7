"""Host integrations for the engine."""

from .status_stream import ModeStatusStreamer

__all__ = ["ModeStatusStreamer"]
