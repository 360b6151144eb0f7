from __future__ import annotations

from typing import List

from modal_engine.buffer import InMemoryBuffer
from modal_engine.modes import EngineMode, KeyInput, ModeResult
from modal_engine.modes.mode_manager import ModeManager, create_engine
from modal_engine.runtime import EngineConfig


def make_engine(text: str = "", cursor: int = 0) -> tuple[ModeManager, InMemoryBuffer]:
    buffer = InMemoryBuffer(text, cursor=cursor)
    manager = create_engine(buffer, config=EngineConfig(start_in_insert_mode=False))
    return manager, buffer


def press(manager: ModeManager, *keys: str) -> List[ModeResult]:
    """Dispatch keys; unconsumed characters in Insert mode reach the text."""

    results = []
    for key in keys:
        result = manager.handle_key(KeyInput(key=key))
        if not result.consumed and manager.mode is EngineMode.INSERT and len(key) == 1:
            manager.context.buffer.insert_text(key)
        results.append(result)
    return results


def test_word_motion_moves_cursor() -> None:
    manager, buffer = make_engine("hello world")

    (result,) = press(manager, "w")

    assert result.consumed is True
    assert buffer.cursor == 6


def test_count_prefix_repeats_motion() -> None:
    manager, buffer = make_engine("abcdefg")

    press(manager, "3", "l")

    assert buffer.cursor == 3
    assert manager.state.count_buffer == ""


def test_multi_digit_count_and_zero_motion() -> None:
    manager, buffer = make_engine("abcdefghijklmnop", cursor=2)

    press(manager, "0")
    assert buffer.cursor == 0

    press(manager, "1", "0", "l")
    assert buffer.cursor == 10


def test_insert_entry_keys() -> None:
    manager, buffer = make_engine("abc\ndef", cursor=1)

    press(manager, "a")
    assert manager.mode is EngineMode.INSERT
    assert buffer.cursor == 2

    press(manager, "ESC", "A")
    assert buffer.cursor == 3

    press(manager, "ESC", "I")
    assert buffer.cursor == 0


def test_append_at_line_end_does_not_move() -> None:
    manager, buffer = make_engine("abc", cursor=3)

    press(manager, "a")

    assert buffer.cursor == 3


def test_open_line_below_and_above() -> None:
    manager, buffer = make_engine("abc\ndef", cursor=1)

    press(manager, "o")
    assert buffer.text == "abc\n\ndef"
    assert buffer.cursor == 4
    assert manager.mode is EngineMode.INSERT

    manager, buffer = make_engine("abc\ndef", cursor=5)
    press(manager, "O")
    assert buffer.text == "abc\n\ndef"
    assert buffer.cursor == 4


def test_open_line_above_first_line() -> None:
    manager, buffer = make_engine("abc", cursor=1)

    press(manager, "O")

    assert buffer.text == "\nabc"
    assert buffer.cursor == 0


def test_delete_char_writes_register() -> None:
    manager, buffer = make_engine("abc", cursor=1)

    press(manager, "x")

    assert buffer.text == "ac"
    assert buffer.cursor == 1
    assert manager.context.registers.get().text == "b"


def test_delete_char_count_stops_at_line_end() -> None:
    manager, buffer = make_engine("abcdef\nxyz", cursor=4)

    press(manager, "3", "x")

    assert buffer.text == "abcd\nxyz"
    assert buffer.cursor == 3


def test_repeated_delete_char_settles_on_empty_line() -> None:
    manager, buffer = make_engine("ab\ncd", cursor=1)

    press(manager, *["x"] * 5)

    assert buffer.text == "\ncd"
    assert buffer.cursor == 0


def test_delete_char_before() -> None:
    manager, buffer = make_engine("abc\ndef", cursor=6)

    press(manager, "X")
    assert buffer.text == "abc\ndf"
    assert buffer.cursor == 5

    press(manager, "5", "X")
    assert buffer.text == "abc\nf"
    assert buffer.cursor == 4


def test_charwise_paste_after_and_before() -> None:
    manager, buffer = make_engine("abc")

    press(manager, "x", "p")
    assert buffer.text == "bac"

    press(manager, "0", "P")
    assert buffer.text == "abac"


def test_paste_with_empty_register_is_noop() -> None:
    manager, buffer = make_engine("abc")

    (result,) = press(manager, "p")

    assert result.consumed is True
    assert buffer.text == "abc"


def test_linewise_yank_and_paste() -> None:
    manager, buffer = make_engine("one\ntwo")

    press(manager, "y", "y")
    assert buffer.text == "one\ntwo"
    assert manager.context.registers.get().is_linewise is True

    press(manager, "p")
    assert buffer.text == "one\none\ntwo"
    assert buffer.cursor == 4


def test_linewise_paste_before() -> None:
    manager, buffer = make_engine("one\ntwo", cursor=4)

    press(manager, "y", "y", "P")

    assert buffer.text == "one\ntwo\ntwo"
    assert buffer.cursor == 4


def test_undo_with_count() -> None:
    manager, buffer = make_engine("abc")

    press(manager, "x", "x")
    assert buffer.text == "c"

    press(manager, "2", "u")
    assert buffer.text == "abc"


def test_document_motions_through_keymaps() -> None:
    manager, buffer = make_engine("a\nb\nc", cursor=4)

    results = press(manager, "g", "g")
    assert results[0].status == "pending"
    assert buffer.cursor == 0

    press(manager, "G")
    assert buffer.cursor == 4

    press(manager, "2", "G")
    assert buffer.cursor == 2


def test_unknown_sequence_aborts_without_running_second_key() -> None:
    manager, buffer = make_engine("abc")

    results = press(manager, "g", "x")

    assert results[-1].consumed is False
    assert results[-1].status == "abort"
    assert buffer.text == "abc"
    assert manager.state.key_buffer == []


def test_unmapped_key_passes_through() -> None:
    manager, _ = make_engine("abc")

    (result,) = press(manager, "z")

    assert result.consumed is False
    assert result.status == "unmapped"


def test_find_then_repeat() -> None:
    manager, buffer = make_engine("foo.bar.baz")

    press(manager, "f", ".")
    assert buffer.cursor == 3

    press(manager, ";")
    assert buffer.cursor == 7

    press(manager, ",")
    assert buffer.cursor == 3


def test_find_with_count_and_till() -> None:
    manager, buffer = make_engine("a.b.c.d")

    press(manager, "2", "f", ".")
    assert buffer.cursor == 3

    press(manager, "0", "t", "c")
    assert buffer.cursor == 3


def test_repeat_without_previous_find_is_noop() -> None:
    manager, buffer = make_engine("abc", cursor=1)

    press(manager, ";")

    assert buffer.cursor == 1


def test_missing_find_character_keeps_cursor() -> None:
    manager, buffer = make_engine("abc")

    press(manager, "f", "z")

    assert buffer.cursor == 0
    assert manager.state.last_find_motion is not None


def test_unavailable_buffer_aborts_motion() -> None:
    manager, buffer = make_engine("abc")
    buffer.available = False

    (result,) = press(manager, "w")

    assert result.consumed is False
    assert result.status == "abort"
    assert manager.mode is EngineMode.NORMAL
