"""Timed recognizer for the Insert-mode exit sequence (``jk`` by default)."""

from __future__ import annotations

import time
from typing import Callable, Optional

from modal_engine.runtime.config import ConfigProvider, EngineConfig
from modal_engine.runtime.telemetry import record_event

MAX_BUFFERED_KEYS = 10

Clock = Callable[[], float]


class EscapeSequenceRecognizer:
    """Buffers recent Insert-mode characters and reports the exit sequence.

    The buffer is dropped whenever the gap since the previous key exceeds the
    configured timeout. Sequences shorter than two characters never match.
    At least ``MAX_BUFFERED_KEYS`` keys are kept, more when the sequence is
    longer.
    """

    def __init__(
        self,
        config: ConfigProvider | EngineConfig | None = None,
        *,
        clock: Clock = time.monotonic,
    ) -> None:
        self._clock = clock
        self._buffer: list[str] = []
        self._last_key_at: Optional[float] = None
        self._unsubscribe: Optional[Callable[[], None]] = None
        if isinstance(config, ConfigProvider):
            self._apply(config.config)
            self._unsubscribe = config.subscribe(self._apply)
        else:
            self._apply(config or EngineConfig())

    @property
    def sequence(self) -> tuple[str, ...]:
        return self._sequence

    @property
    def timeout_seconds(self) -> float:
        return self._timeout

    @property
    def pending_keys(self) -> tuple[str, ...]:
        return tuple(self._buffer)

    def add_key(self, key: str) -> bool:
        """Record ``key`` and return ``True`` when the buffer ends with the sequence."""

        now = self._clock()
        if self._last_key_at is not None and now - self._last_key_at > self._timeout:
            self._buffer.clear()
        self._buffer.append(key)
        self._last_key_at = now

        size = len(self._sequence)
        if size >= 2 and tuple(self._buffer[-size:]) == self._sequence:
            self._buffer.clear()
            record_event("escape.sequence", data={"sequence": "".join(self._sequence)})
            return True

        limit = max(MAX_BUFFERED_KEYS, size)
        if len(self._buffer) > limit:
            del self._buffer[: len(self._buffer) - limit]
        return False

    def reset(self) -> None:
        self._buffer.clear()
        self._last_key_at = None

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _apply(self, config: EngineConfig) -> None:
        self._sequence = config.escape_sequence_chars
        self._timeout = config.escape_timeout_seconds


__all__ = ["EscapeSequenceRecognizer", "MAX_BUFFERED_KEYS"]
