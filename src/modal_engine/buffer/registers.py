"""Register storage for yanked and deleted text."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping, Optional

UNNAMED_REGISTER = '"'


@dataclass(frozen=True, slots=True)
class RegisterContent:
    text: str
    is_linewise: bool = False


class RegisterStore:
    """Named slots holding the last yank or delete written to each name.

    Writes to a named register are mirrored into the unnamed register so a
    plain ``p`` always pastes the most recent text.
    """

    def __init__(self) -> None:
        self._registers: Dict[str, RegisterContent] = {}

    def get(self, name: str = UNNAMED_REGISTER) -> Optional[RegisterContent]:
        return self._registers.get(name)

    def set(self, name: str, content: RegisterContent) -> None:
        self._registers[name] = content
        if name != UNNAMED_REGISTER:
            self._registers[UNNAMED_REGISTER] = content

    def yank_to(self, name: str, text: str, *, linewise: bool = False) -> RegisterContent:
        content = RegisterContent(text=text, is_linewise=linewise)
        self.set(name, content)
        return content

    def __contains__(self, name: object) -> bool:
        return name in self._registers

    def snapshot(self) -> Mapping[str, RegisterContent]:
        return dict(self._registers)

    def clear(self) -> None:
        self._registers.clear()


__all__ = ["RegisterContent", "RegisterStore", "UNNAMED_REGISTER"]
