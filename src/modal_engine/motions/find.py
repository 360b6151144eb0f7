"""Find and till motions (f, F, t, T) shared by ``;``/``,`` and operators."""

from __future__ import annotations

from typing import Optional


def find_char(
    text: str, position: int, char: str, *, forward: bool, till_before: bool
) -> Optional[int]:
    """One step of a find; the starting position itself is never matched."""

    if forward:
        index = text.find(char, position + 1)
        if index == -1:
            return None
        return index - 1 if till_before else index
    if position <= 0:
        return None
    index = text.rfind(char, 0, position)
    if index == -1:
        return None
    return index + 1 if till_before else index


def repeat_find(
    text: str,
    position: int,
    char: str,
    *,
    forward: bool,
    till_before: bool,
    count: int = 1,
) -> Optional[int]:
    """Apply ``count`` finds, stopping at the last match that was found.

    Returns ``None`` when not even the first match exists.
    """

    current: Optional[int] = None
    for _ in range(max(count, 1)):
        start = position if current is None else current
        found = find_char(text, start, char, forward=forward, till_before=till_before)
        if found is None:
            break
        current = found
    return current


__all__ = ["find_char", "repeat_find"]
