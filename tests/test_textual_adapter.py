from __future__ import annotations

from typing import Any, Dict, List

from modal_engine.adapters.textual.buffer import location_to_offset, offset_to_location
from modal_engine.adapters.textual.controller import (
    TextualEngineAdapter,
    TextualUIHooks,
    translate_key,
)
from modal_engine.buffer import InMemoryBuffer
from modal_engine.modes import EngineMode
from modal_engine.modes.mode_manager import ModeManager, create_engine
from modal_engine.runtime import EngineConfig


def make_manager(text: str = "hello world") -> ModeManager:
    return create_engine(
        InMemoryBuffer(text), config=EngineConfig(start_in_insert_mode=False)
    )


def test_translate_key_names() -> None:
    assert translate_key("escape").is_escape
    assert translate_key("enter", "\r").key == "ENTER"
    assert translate_key("j", "j").key == "j"
    assert translate_key("dollar_sign", "$").key == "$"
    assert translate_key("left").key == "LEFT"

    ctrl = translate_key("ctrl+r", "\x12")
    assert ctrl.key == "r"
    assert ctrl.token == "ctrl+r"


def test_offset_location_helpers() -> None:
    text = "ab\ncde\n"

    assert offset_to_location(text, 0) == (0, 0)
    assert offset_to_location(text, 4) == (1, 1)
    assert offset_to_location(text, 7) == (2, 0)
    assert location_to_offset(text, (1, 1)) == 4
    assert location_to_offset(text, (1, 99)) == 6
    assert location_to_offset(text, (9, 0)) == 7


def test_adapter_updates_status() -> None:
    manager = make_manager()
    statuses: List[str] = []
    hooks = TextualUIHooks(update_status=statuses.append)
    adapter = TextualEngineAdapter(manager, hooks)

    adapter.handle_textual_key("i", character="i")
    assert manager.mode is EngineMode.INSERT
    assert statuses[-1] == "-- INSERT --"

    adapter.handle_textual_key("escape")
    assert statuses[-1] == "-- NORMAL --"


def test_adapter_shows_pending_count_and_operator() -> None:
    manager = make_manager()
    statuses: List[str] = []
    adapter = TextualEngineAdapter(manager, TextualUIHooks(update_status=statuses.append))

    adapter.handle_textual_key("3", character="3")
    assert statuses[-1] == "-- NORMAL --  3"

    adapter.handle_textual_key("d", character="d")
    assert statuses[-1] == "-- (op) --  3d"


def test_adapter_reports_aborts() -> None:
    manager = make_manager()
    statuses: List[str] = []
    adapter = TextualEngineAdapter(manager, TextualUIHooks(update_status=statuses.append))

    adapter.handle_textual_key("d", character="d")
    result = adapter.handle_textual_key("z", character="z")

    assert result.consumed is False
    assert statuses[-1] == "-- NORMAL --  (unmapped)"


def test_adapter_surfaces_engine_events() -> None:
    manager = make_manager()
    events: List[Dict[str, Any]] = []
    hooks = TextualUIHooks(
        handle_event=lambda name, payload: events.append(
            {"name": name, "payload": payload}
        ),
    )
    adapter = TextualEngineAdapter(manager, hooks)

    for key in ("v", "l", "d"):
        adapter.handle_textual_key(key, character=key)

    names = [event["name"] for event in events]
    assert "visual.selection" in names
    assert "register.write" in names
    assert "operator.applied" in names
    assert names.count("mode.changed") == 2


def test_adapter_emits_log_lines() -> None:
    manager = make_manager()
    logs: List[str] = []
    adapter = TextualEngineAdapter(manager, TextualUIHooks(log=logs.append))

    adapter.handle_textual_key("i", character="i")

    assert any(line.startswith("key ->") for line in logs)
    assert any(line.startswith("result <-") for line in logs)
