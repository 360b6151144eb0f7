"""Engine configuration and the provider that hot-applies changes."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Callable, List, Mapping, Optional

from . import telemetry

ENV_PREFIX = telemetry.ENV_PREFIX

ConfigListener = Callable[["EngineConfig"], None]


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Settings the core consumes.

    Values are taken as given; a host that supplies an empty escape
    sequence or a non-positive timeout simply never sees the sequence match.
    """

    escape_sequence: str = "jk"
    escape_timeout_ms: int = 200
    start_in_insert_mode: bool = True

    @property
    def escape_sequence_chars(self) -> tuple[str, ...]:
        return tuple(self.escape_sequence)

    @property
    def escape_timeout_seconds(self) -> float:
        return self.escape_timeout_ms / 1000.0

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "EngineConfig":
        env = os.environ if environ is None else environ
        defaults = cls()
        sequence = env.get(f"{ENV_PREFIX}ESCAPE_SEQUENCE", defaults.escape_sequence)
        timeout_ms = _env_int(
            env, f"{ENV_PREFIX}ESCAPE_TIMEOUT_MS", defaults.escape_timeout_ms
        )
        raw_insert = env.get(f"{ENV_PREFIX}START_IN_INSERT")
        start_in_insert = (
            defaults.start_in_insert_mode
            if raw_insert is None
            else raw_insert.lower() in {"1", "true", "yes", "on"}
        )
        return cls(
            escape_sequence=sequence,
            escape_timeout_ms=timeout_ms,
            start_in_insert_mode=start_in_insert,
        )


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(key)
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


class ConfigProvider:
    """Owns the live ``EngineConfig`` and notifies subscribers on change."""

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self._config = config or EngineConfig()
        self._listeners: List[ConfigListener] = []
        self.logger = telemetry.get_logger("modal_engine.config")

    @property
    def config(self) -> EngineConfig:
        return self._config

    def subscribe(self, listener: ConfigListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def update(self, **changes: object) -> EngineConfig:
        self._config = replace(self._config, **changes)
        telemetry.record_event(
            "config.update",
            data={key: value for key, value in changes.items()},
            logger_name="modal_engine.config",
        )
        for listener in list(self._listeners):
            listener(self._config)
        return self._config


__all__ = ["EngineConfig", "ConfigProvider", "ConfigListener"]
