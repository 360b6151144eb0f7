"""Built-in keymaps seeding Normal and the visual modes with their commands."""

from __future__ import annotations

from typing import Iterable, Sequence

from .models import ActionRef, Binding, KeySequence
from .registry import KeymapRegistry

VISUAL_MODES: tuple[str, ...] = ("visual", "visual_line")


def default_actions() -> tuple[ActionRef, ...]:
    """Action references for every built-in command.

    Built on demand so the action modules, which depend on the modes, are
    only imported once the keymaps are actually loaded.
    """

    from modal_engine.actions import core, editing, visual

    return (
        ActionRef("core.enter_insert", core.enter_insert_mode, description="Insert before the cursor"),
        ActionRef("core.append", core.append_after_cursor, description="Insert after the cursor"),
        ActionRef("core.insert_line_start", core.insert_at_line_start, description="Insert at line start"),
        ActionRef("core.append_line_end", core.append_at_line_end, description="Insert at line end"),
        ActionRef("core.open_below", core.open_line_below, description="Open a line below"),
        ActionRef("core.open_above", core.open_line_above, description="Open a line above"),
        ActionRef(
            "core.enter_visual",
            core.enter_visual_mode,
            description="Enter visual mode",
            metadata={"mode": "visual"},
        ),
        ActionRef(
            "core.enter_visual_line",
            core.enter_visual_mode,
            description="Enter visual line mode",
            metadata={"mode": "visual_line"},
        ),
        ActionRef("operator.delete", core.start_operator, description="Delete", metadata={"operator": "d"}),
        ActionRef("operator.change", core.start_operator, description="Change", metadata={"operator": "c"}),
        ActionRef("operator.yank", core.start_operator, description="Yank", metadata={"operator": "y"}),
        ActionRef("find.forward", core.start_find, description="Find forward", metadata={"kind": "f"}),
        ActionRef("find.backward", core.start_find, description="Find backward", metadata={"kind": "F"}),
        ActionRef("find.till_forward", core.start_find, description="Till forward", metadata={"kind": "t"}),
        ActionRef("find.till_backward", core.start_find, description="Till backward", metadata={"kind": "T"}),
        ActionRef("find.repeat", core.repeat_find, description="Repeat the last find"),
        ActionRef(
            "find.repeat_reverse",
            core.repeat_find,
            description="Repeat the last find reversed",
            metadata={"reverse": True},
        ),
        ActionRef("motion.document_start", core.go_to_document_start, description="Go to first line"),
        ActionRef("edit.undo", core.undo, description="Undo"),
        ActionRef("edit.delete_char", editing.delete_char, description="Delete under the cursor"),
        ActionRef("edit.delete_char_before", editing.delete_char_before, description="Delete before the cursor"),
        ActionRef("edit.paste_after", editing.paste, description="Paste after", metadata={"after": True}),
        ActionRef("edit.paste_before", editing.paste, description="Paste before", metadata={"after": False}),
        ActionRef(
            "visual.toggle",
            visual.toggle_visual,
            description="Toggle visual mode",
            metadata={"mode": "visual"},
        ),
        ActionRef(
            "visual.toggle_line",
            visual.toggle_visual,
            description="Toggle visual line mode",
            metadata={"mode": "visual_line"},
        ),
        ActionRef(
            "visual.delete",
            visual.operate_on_selection,
            description="Delete the selection",
            metadata={"operator": "d"},
        ),
        ActionRef(
            "visual.change",
            visual.operate_on_selection,
            description="Change the selection",
            metadata={"operator": "c"},
        ),
        ActionRef(
            "visual.yank",
            visual.operate_on_selection,
            description="Yank the selection",
            metadata={"operator": "y"},
        ),
    )


_NORMAL_TABLE: tuple[tuple[str, str, str], ...] = (
    ("i", "core.enter_insert", "Insert before the cursor"),
    ("a", "core.append", "Insert after the cursor"),
    ("I", "core.insert_line_start", "Insert at line start"),
    ("A", "core.append_line_end", "Insert at line end"),
    ("o", "core.open_below", "Open a line below"),
    ("O", "core.open_above", "Open a line above"),
    ("v", "core.enter_visual", "Enter visual mode"),
    ("V", "core.enter_visual_line", "Enter visual line mode"),
    ("d", "operator.delete", "Delete operator"),
    ("c", "operator.change", "Change operator"),
    ("y", "operator.yank", "Yank operator"),
    ("f", "find.forward", "Find character forward"),
    ("F", "find.backward", "Find character backward"),
    ("t", "find.till_forward", "Till character forward"),
    ("T", "find.till_backward", "Till character backward"),
    (";", "find.repeat", "Repeat last find"),
    (",", "find.repeat_reverse", "Repeat last find reversed"),
    ("x", "edit.delete_char", "Delete character"),
    ("X", "edit.delete_char_before", "Delete character before"),
    ("p", "edit.paste_after", "Paste after"),
    ("P", "edit.paste_before", "Paste before"),
    ("u", "edit.undo", "Undo"),
    ("g g", "motion.document_start", "Go to first line"),
)

_VISUAL_TABLE: tuple[tuple[str, str, str], ...] = (
    ("v", "visual.toggle", "Toggle visual mode"),
    ("V", "visual.toggle_line", "Toggle visual line mode"),
    ("d", "visual.delete", "Delete selection"),
    ("x", "visual.delete", "Delete selection"),
    ("c", "visual.change", "Change selection"),
    ("s", "visual.change", "Change selection"),
    ("y", "visual.yank", "Yank selection"),
)


def _binding_id(mode: str, notation: str) -> str:
    return f"{mode}.{notation.replace(' ', '')}"


def _build_bindings() -> tuple[Binding, ...]:
    bindings = [
        Binding(
            id=_binding_id("normal", keys),
            mode="normal",
            sequence=KeySequence.parse(keys),
            action_id=action_id,
            description=description,
            source="defaults",
        )
        for keys, action_id, description in _NORMAL_TABLE
    ]
    for mode in VISUAL_MODES:
        bindings.extend(
            Binding(
                id=_binding_id(mode, keys),
                mode=mode,
                sequence=KeySequence.parse(keys),
                action_id=action_id,
                description=description,
                source="defaults",
            )
            for keys, action_id, description in _VISUAL_TABLE
        )
    return tuple(bindings)


DEFAULT_BINDINGS: tuple[Binding, ...] = _build_bindings()


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register built-in actions and bindings for every mode.

    ``exclude_bindings`` drops built-in bindings by id; ``extra_bindings``
    are registered after the built-ins.
    """

    excluded = set(exclude_bindings or ())

    for action in default_actions():
        registry.register_action(action, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


__all__ = [
    "DEFAULT_BINDINGS",
    "VISUAL_MODES",
    "default_actions",
    "load_default_keymaps",
]
