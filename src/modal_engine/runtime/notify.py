"""Fan-out of mode changes to external observers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, List

from . import telemetry

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from modal_engine.modes.state import EngineMode

ModeSink = Callable[["EngineMode"], None]


class ModeNotifier:
    """Delivers every mode change to each sink, in registration order.

    A sink that raises is logged and skipped; delivery to the remaining
    sinks continues and nothing propagates to the key dispatcher.
    """

    def __init__(self) -> None:
        self._sinks: List[ModeSink] = []
        self.logger = telemetry.get_logger("modal_engine.notify")

    def add_sink(self, sink: ModeSink) -> Callable[[], None]:
        self._sinks.append(sink)

        def remove() -> None:
            if sink in self._sinks:
                self._sinks.remove(sink)

        return remove

    @property
    def sink_count(self) -> int:
        return len(self._sinks)

    def publish(self, mode: "EngineMode") -> None:
        for sink in list(self._sinks):
            try:
                sink(mode)
            except Exception as exc:
                self.logger.warning(
                    "mode sink %r failed for %s: %s", sink, mode.status_name, exc
                )


__all__ = ["ModeNotifier", "ModeSink"]
