"""Mode manager owning the active mode, transitions and key dispatch."""

from __future__ import annotations

from typing import Dict, Optional, Type

from modal_engine.buffer import BufferUnavailableError, InMemoryBuffer, RegisterStore, TextBufferAccess
from modal_engine.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from modal_engine.keymaps.escape import Clock, EscapeSequenceRecognizer
from modal_engine.runtime import telemetry
from modal_engine.runtime.config import ConfigProvider, EngineConfig
from modal_engine.runtime.notify import ModeNotifier

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult, abort
from .insert_mode import InsertMode
from .normal_mode import NormalMode
from .operator_pending_mode import OperatorPendingMode
from .state import EngineMode, EngineState
from .visual_mode import VisualLineMode, VisualMode

DEFAULT_MODES: tuple[Type[Mode], ...] = (
    NormalMode,
    InsertMode,
    VisualMode,
    VisualLineMode,
    OperatorPendingMode,
)


class ModeManager:
    """Owns the active mode, handles transitions, and dispatches key events.

    ``set_mode`` never rejects a transition and always notifies, even when
    the target equals the current mode. Hooks run in a fixed order: the
    outgoing mode's ``on_exit``, then the incoming mode's ``on_enter``.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
        notifier: ModeNotifier | None = None,
    ) -> None:
        self.context = context
        self.notifier = notifier or ModeNotifier()
        self._modes: Dict[EngineMode, Mode] = {}
        self._active: Optional[EngineMode] = None
        self.logger = telemetry.get_logger("modal_engine.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="modal_engine.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="modal_engine.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self.context.extras.setdefault("mode_manager", self)

    @property
    def mode(self) -> EngineMode:
        if self._active is None:
            raise RuntimeError("No active mode; call start() first")
        return self._active

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def state(self) -> EngineState:
        return self.context.state

    def register_mode(self, mode_cls: Type[Mode], /, *args: object, **kwargs: object) -> Mode:
        mode = mode_cls(self.context, *args, **kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name.value}' already registered")
        self._modes[mode.name] = mode
        return mode

    def start(self, mode: EngineMode | str) -> None:
        """Activate the initial mode without publishing a transition."""

        target = EngineMode(mode)
        if target not in self._modes:
            raise KeyError(f"Unknown mode '{target.value}'")
        self._active = target
        self.context.mode = target
        self._modes[target].on_enter(None)
        telemetry.record_event("mode.start", data={"mode": target.value})

    def set_mode(self, mode: EngineMode | str) -> None:
        target = EngineMode(mode)
        if target not in self._modes:
            raise KeyError(f"Unknown mode '{target.value}'")
        previous = self._active
        if previous is not None:
            self._modes[previous].on_exit(target)
        self._active = target
        self.context.mode = target
        self._modes[target].on_enter(previous)
        telemetry.record_event(
            "mode.switch",
            data={"from": previous.value if previous else None, "to": target.value},
        )
        self.context.bus.emit("mode.changed", {"previous": previous, "mode": target})
        self.notifier.publish(target)

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name.value}",
            component=True,
            metadata={
                "key": key.key,
                "mode": mode.name.value,
                "fallback": self.context.buffer.needs_fallback_mode(),
            },
        ) as handle:
            try:
                result = self._dispatch(mode, key)
            except BufferUnavailableError as exc:
                handle.add_metadata("abort", exc.what)
                result = abort(str(exc))
            handle.add_metadata("status", result.status)
        return self._after_mode_result(result)

    def feed(self, key: KeyInput) -> bool:
        """Dispatch ``key`` and report only whether it was consumed."""

        return self.handle_key(key).consumed

    def _dispatch(self, mode: Mode, key: KeyInput) -> ModeResult:
        if mode.name is EngineMode.INSERT:
            return mode.handle_key(key)
        if key.is_escape and mode.name is not EngineMode.NORMAL:
            return ModeResult(consumed=True, switch_to=EngineMode.NORMAL, message="escape")
        return mode.handle_key(key)

    def _after_mode_result(self, result: ModeResult) -> ModeResult:
        if result.status == "abort":
            telemetry.record_event(
                "command.abort", level="info", data={"reason": result.message}
            )
        if result.switch_to is not None:
            self.set_mode(result.switch_to)
        return result


def create_engine(
    buffer: TextBufferAccess | None = None,
    *,
    config: ConfigProvider | EngineConfig | None = None,
    registers: RegisterStore | None = None,
    notifier: ModeNotifier | None = None,
    keymap_registry: KeymapRegistry | None = None,
    clock: Clock | None = None,
) -> ModeManager:
    """Build a ready-to-use engine around ``buffer``.

    The initial mode is Insert unless the configuration disables
    ``start_in_insert_mode``.
    """

    provider = config if isinstance(config, ConfigProvider) else ConfigProvider(config)
    recognizer = (
        EscapeSequenceRecognizer(provider, clock=clock)
        if clock is not None
        else EscapeSequenceRecognizer(provider)
    )
    context = ModeContext(
        buffer=buffer if buffer is not None else InMemoryBuffer(),
        registers=registers or RegisterStore(),
        state=EngineState(),
        bus=ModeBus(),
        config=provider,
        recognizer=recognizer,
    )
    manager = ModeManager(context, keymap_registry=keymap_registry, notifier=notifier)
    for mode_cls in DEFAULT_MODES:
        manager.register_mode(mode_cls)
    initial = EngineMode.INSERT if provider.config.start_in_insert_mode else EngineMode.NORMAL
    manager.start(initial)
    return manager


__all__ = ["DEFAULT_MODES", "ModeManager", "create_engine"]
