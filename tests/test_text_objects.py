from __future__ import annotations

import pytest

from modal_engine.motions import TextRange
from modal_engine.text_objects import (
    BracketPair,
    TextObject,
    TextObjectKind,
    resolve_text_object,
    text_object_from_key,
)


def make_object(key: str) -> TextObject:
    obj = text_object_from_key(key)
    assert obj is not None
    return obj


def select(key: str, text: str, position: int, *, inner: bool) -> TextRange | None:
    return resolve_text_object(make_object(key), position, text, inner)


def test_inner_bracket_picks_innermost_pair() -> None:
    assert select("b", "(a (b) c)", 4, inner=True) == TextRange(4, 5)
    assert select("b", "(a (b) c)", 4, inner=False) == TextRange(3, 6)


def test_bracket_on_delimiters() -> None:
    assert select("(", "(a (b) c)", 3, inner=True) == TextRange(4, 5)
    assert select(")", "(a (b) c)", 5, inner=True) == TextRange(4, 5)


def test_bracket_skips_nested_pairs_when_closing() -> None:
    assert select("b", "(a (b) c)", 1, inner=True) == TextRange(1, 8)


def test_other_bracket_kinds() -> None:
    assert select("B", "x = {1, 2}", 6, inner=True) == TextRange(5, 9)
    assert select("[", "a[0]", 2, inner=False) == TextRange(1, 4)
    assert select("<", "<tag>", 2, inner=True) == TextRange(1, 4)


def test_missing_bracket_is_none() -> None:
    assert select("b", "abc", 1, inner=True) is None
    assert select("b", "(abc", 2, inner=True) is None


def test_quoted_inner_and_around() -> None:
    text = 'say "hi there" now'

    assert select('"', text, 6, inner=True) == TextRange(5, 13)
    assert select('"', text, 6, inner=False) == TextRange(4, 14)


def test_quoted_before_first_quote_uses_next_pair() -> None:
    assert select('"', 'say "hi" now', 0, inner=True) == TextRange(5, 7)


def test_quoted_ignores_escaped_quotes() -> None:
    text = "'it\\'s' x"

    assert select("'", text, 2, inner=True) == TextRange(1, 6)


def test_quoted_missing_is_none() -> None:
    assert select("'", "no quotes here", 3, inner=True) is None


def test_word_objects() -> None:
    text = "foo bar baz"

    assert select("w", text, 5, inner=True) == TextRange(4, 7)
    assert select("w", text, 5, inner=False) == TextRange(4, 8)
    assert select("w", text, 9, inner=False) == TextRange(7, 11)
    assert select("w", text, 3, inner=True) == TextRange(3, 4)


def test_word_object_on_punctuation_and_big_word() -> None:
    assert select("w", "a..b", 1, inner=True) == TextRange(1, 3)
    assert select("W", "foo-bar baz", 1, inner=True) == TextRange(0, 7)


def test_sentence_objects() -> None:
    text = "One. Two three. Four"

    assert select("s", text, 6, inner=True) == TextRange(5, 15)
    assert select("s", text, 6, inner=False) == TextRange(4, 16)
    assert select("s", text, 17, inner=True) == TextRange(16, 20)


def test_paragraph_objects() -> None:
    text = "a\nb\n\nc"

    assert select("p", text, 0, inner=True) == TextRange(0, 4)
    assert select("p", text, 0, inner=False) == TextRange(0, 5)


def test_position_past_end_is_none() -> None:
    assert select("w", "abc", 3, inner=True) is None
    assert select("w", "a\n\nb", 2, inner=True) is None
    assert select("w", "a\n\nb", 1, inner=False) is None
    assert select("p", "", 0, inner=True) is None


def test_object_keys_and_validation() -> None:
    assert make_object("b").bracket is BracketPair.PARENTHESES
    assert make_object("s").kind is TextObjectKind.SENTENCE
    assert text_object_from_key("z") is None
    with pytest.raises(ValueError):
        TextObject(TextObjectKind.QUOTED)
    with pytest.raises(ValueError):
        TextObject(TextObjectKind.BRACKET)
