"""Minimal Textual adapter that wires ModeManager events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from modal_engine.modes import EngineMode, KeyInput, ModeResult
from modal_engine.modes.mode_manager import ModeManager

# Textual key names the engine knows under another name.
_NAMED_KEYS: Dict[str, str] = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "tab": "TAB",
    "backspace": "BACKSPACE",
}
_MODIFIERS = ("ctrl", "alt", "meta", "shift")


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


def translate_key(
    key: str, character: Optional[str] = None, modifiers: Iterable[str] = ()
) -> KeyInput:
    """Turn a Textual key name (``"ctrl+r"``, ``"escape"``, ``"j"``) into a ``KeyInput``."""

    mods = [str(mod).lower() for mod in modifiers]
    parts = key.split("+")
    while len(parts) > 1 and parts[0] in _MODIFIERS:
        mods.append(parts.pop(0))
    base = "+".join(parts)
    if base in _NAMED_KEYS:
        return KeyInput(key=_NAMED_KEYS[base], modifiers=tuple(mods))
    if character and len(character) == 1 and character.isprintable() and not any(
        mod in ("ctrl", "alt", "meta") for mod in mods
    ):
        return KeyInput(key=character, text=character, modifiers=tuple(mods))
    if len(base) == 1:
        return KeyInput(key=base, modifiers=tuple(mods))
    return KeyInput(key=base.upper(), modifiers=tuple(mods))


class TextualEngineAdapter:
    """Bridges ModeManager + bus events to a Textual-friendly surface."""

    def __init__(self, manager: ModeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_status()

    def handle_textual_key(
        self,
        key: str,
        *,
        character: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        key_input = translate_key(key, character, modifiers)
        self._log_state("key ->", key=key_input.token)
        result = self.manager.handle_key(key_input)
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to.value if result.switch_to else None,
        )
        return result

    def status_text(self) -> str:
        mode = self.manager.mode
        state = self.manager.state
        parts = [mode.display_name]
        pending = state.count_buffer + "".join(state.key_buffer)
        if mode is EngineMode.OPERATOR_PENDING and state.pending_operator is not None:
            count = str(state.count) if state.count > 1 else ""
            pending = f"{count}{state.pending_operator.key}{pending}"
        if pending:
            parts.append(pending)
        return "  ".join(parts)

    def _after_mode_result(self, result: ModeResult) -> None:
        if result.status == "abort" and result.message:
            self.hooks.update_status(f"{self.status_text()}  ({result.message})")
            return
        self._refresh_status()

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        for event in (
            "mode.changed",
            "operator.applied",
            "register.write",
            "visual.selection",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name)
        self.hooks.handle_event(name, payload)
        if name == "mode.changed":
            self._refresh_status()

    def _refresh_status(self) -> None:
        self.hooks.update_status(self.status_text())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.manager.context.buffer
        active_mode = self.manager.active_mode
        return {
            "mode": active_mode.name.value if active_mode else "?",
            "cursor": buffer.get_cursor_offset(),
            "selection": buffer.get_selected_range(),
            "count": self.manager.state.count_buffer,
        }


__all__ = ["TextualEngineAdapter", "TextualUIHooks", "translate_key"]
