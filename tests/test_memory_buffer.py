import pytest

from modal_engine.buffer import (
    BufferCapabilities,
    BufferValidationError,
    InMemoryBuffer,
)


def make_buffer(text: str = "hello world", cursor: int = 0) -> InMemoryBuffer:
    return InMemoryBuffer(text, cursor=cursor)


def test_insert_replaces_selection_and_moves_cursor() -> None:
    buffer = make_buffer()
    buffer.set_selected_range(0, 5)

    buffer.insert_text("howdy")

    assert buffer.text == "howdy world"
    assert buffer.get_cursor_offset() == 5
    assert buffer.get_selected_range() == (5, 0)


def test_selected_text_and_replace_selection() -> None:
    buffer = make_buffer()
    buffer.set_selected_range(6, 5)

    assert buffer.get_selected_text() == "world"
    buffer.replace_selection("")

    assert buffer.text == "hello "


def test_delete_backward() -> None:
    buffer = make_buffer("abc", cursor=3)

    buffer.delete_backward()
    assert buffer.text == "ab"

    buffer.set_cursor_offset(0)
    buffer.delete_backward()
    assert buffer.text == "ab"


def test_undo_and_redo_restore_text_and_cursor() -> None:
    buffer = make_buffer("abc", cursor=1)
    buffer.insert_text("X")

    buffer.undo()
    assert buffer.text == "abc"
    assert buffer.cursor == 1

    buffer.redo()
    assert buffer.text == "aXbc"
    assert buffer.cursor == 2


def test_undo_with_empty_history_is_a_noop() -> None:
    buffer = make_buffer("abc")

    buffer.undo()

    assert buffer.text == "abc"


def test_out_of_range_offsets_raise() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(BufferValidationError):
        buffer.set_cursor_offset(4)
    with pytest.raises(BufferValidationError):
        buffer.set_selected_range(2, 5)


def test_unavailable_buffer_reports_none_and_ignores_writes() -> None:
    buffer = make_buffer("abc")
    buffer.available = False

    buffer.insert_text("zzz")

    assert buffer.get_text() is None
    assert buffer.get_cursor_offset() is None
    assert buffer.get_selected_range() is None
    assert buffer.get_selected_text() is None
    assert buffer.text == "abc"


def test_fallback_mode_follows_capabilities() -> None:
    precise = make_buffer()
    simulated = InMemoryBuffer(
        "abc", capabilities=BufferCapabilities(supports_precise_range=False, write_delay=0.05)
    )

    assert precise.needs_fallback_mode() is False
    assert simulated.needs_fallback_mode() is True
    assert simulated.capabilities.write_delay == 0.05
