from __future__ import annotations

from typing import Any, List

import pytest

from modal_engine.buffer import InMemoryBuffer, RegisterStore
from modal_engine.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from modal_engine.keymaps.escape import EscapeSequenceRecognizer
from modal_engine.modes import (
    EngineMode,
    EngineState,
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    NormalMode,
)
from modal_engine.modes.mode_manager import ModeManager, create_engine
from modal_engine.runtime import ConfigProvider, EngineConfig, ModeNotifier


def make_context(buffer: InMemoryBuffer | None = None) -> ModeContext:
    provider = ConfigProvider()
    return ModeContext(
        buffer=buffer or InMemoryBuffer(),
        registers=RegisterStore(),
        state=EngineState(),
        bus=ModeBus(),
        config=provider,
        recognizer=EscapeSequenceRecognizer(provider),
    )


def make_engine(text: str = "") -> tuple[ModeManager, List[EngineMode]]:
    notifier = ModeNotifier()
    published: List[EngineMode] = []
    notifier.add_sink(published.append)
    manager = create_engine(
        InMemoryBuffer(text),
        config=EngineConfig(start_in_insert_mode=False),
        notifier=notifier,
    )
    return manager, published


def test_start_does_not_notify() -> None:
    manager, published = make_engine()

    assert manager.mode is EngineMode.NORMAL
    assert published == []


def test_every_transition_is_published() -> None:
    manager, published = make_engine("hello")

    for key in ("d", "ESC", "v", "ESC", "i", "ESC"):
        manager.handle_key(KeyInput(key=key))

    assert [mode.status_name for mode in published] == [
        "OPERATOR_PENDING",
        "NORMAL",
        "VISUAL",
        "NORMAL",
        "INSERT",
        "NORMAL",
    ]


def test_set_mode_to_current_mode_still_notifies_and_resets() -> None:
    manager, published = make_engine()
    manager.state.count_buffer = "4"

    manager.set_mode(EngineMode.NORMAL)

    assert published == [EngineMode.NORMAL]
    assert manager.state.count_buffer == ""


def test_mode_changed_event_on_bus() -> None:
    manager, _ = make_engine()
    events: List[Any] = []
    manager.context.bus.subscribe("mode.changed", events.append)

    manager.set_mode("insert")

    assert events == [{"previous": EngineMode.NORMAL, "mode": EngineMode.INSERT}]


def test_failing_sink_does_not_break_dispatch() -> None:
    manager, published = make_engine()

    def broken(mode: EngineMode) -> None:
        raise RuntimeError("gone")

    manager.notifier.add_sink(broken)

    assert manager.feed(KeyInput(key="i")) is True
    assert manager.mode is EngineMode.INSERT
    assert published == [EngineMode.INSERT]


def test_feed_reports_consumed_flag() -> None:
    manager, _ = make_engine("abc")

    assert manager.feed(KeyInput(key="l")) is True
    assert manager.feed(KeyInput(key="z")) is False


def test_register_mode_rejects_duplicates() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    manager = ModeManager(
        make_context(),
        keymap_registry=registry,
        keymap_resolver=KeymapResolver(registry),
    )
    manager.register_mode(NormalMode)

    with pytest.raises(ValueError):
        manager.register_mode(NormalMode)


def test_unknown_modes_raise() -> None:
    manager = ModeManager(make_context())
    manager.register_mode(NormalMode)
    manager.register_mode(InsertMode)

    with pytest.raises(KeyError):
        manager.set_mode(EngineMode.VISUAL)
    with pytest.raises(ValueError):
        manager.set_mode("replace")


def test_handle_key_requires_start() -> None:
    manager = ModeManager(make_context())
    manager.register_mode(NormalMode)

    with pytest.raises(RuntimeError):
        manager.handle_key(KeyInput(key="l"))

    manager.start(EngineMode.NORMAL)
    assert manager.mode is EngineMode.NORMAL


def test_default_keymaps_are_loaded_once_per_manager() -> None:
    manager, _ = make_engine()

    assert manager.keymap_registry.get_binding("normal.i").action_id == "core.enter_insert"
    assert manager.context.extras["keymap_resolver"] is manager.keymap_resolver
