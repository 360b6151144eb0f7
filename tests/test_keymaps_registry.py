import pytest

from modal_engine.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapConflictError,
    KeymapRegistry,
    load_default_keymaps,
)


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_sequence(*keys: str) -> KeySequence:
    return KeySequence.from_strings(*keys)


def make_binding(
    *,
    binding_id: str,
    mode: str = "normal",
    sequence: KeySequence | None = None,
    action_id: str = "core.test",
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=sequence or make_sequence("g", "g"),
        action_id=action_id,
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    action = make_action()
    registry.register_action(action)
    binding = make_binding(binding_id="normal.gg")

    registry.register_binding(binding)

    assert list(registry.iter_bindings(mode="normal")) == [binding]


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    binding = make_binding(binding_id="normal.gg")
    registry.register_binding(binding)

    with pytest.raises(KeymapConflictError):
        registry.register_binding(make_binding(binding_id="normal.gg.duplicate"))


def test_same_keys_in_different_modes_do_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="normal.gg"))
    registry.register_binding(make_binding(binding_id="visual.gg", mode="visual"))

    assert [b.id for b in registry.iter_bindings(mode="visual")] == ["visual.gg"]


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="normal.gg"))


def test_register_action_rejects_duplicates() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="binding")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]


def test_replace_evicts_conflicting_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="old"))

    registry.register_binding(make_binding(binding_id="new"), replace=True)

    assert [b.id for b in registry.iter_bindings()] == ["new"]


def test_mutations_bump_revision() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    before = registry.revision()

    registry.register_binding(make_binding(binding_id="binding"))
    registry.register_binding(make_binding(binding_id="binding"), replace=True)

    assert registry.revision() == before + 2


def test_load_default_keymaps_seeds_every_mode() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    modes = {binding.mode for binding in registry.iter_bindings()}
    assert modes == {"normal", "visual", "visual_line"}
    assert registry.get_binding("normal.gg").sequence.tokens == ("g", "g")
    assert registry.get_binding("visual.x").action_id == "visual.delete"
    assert registry.get_action("operator.delete").metadata["operator"] == "d"


def test_load_default_keymaps_exclude_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, exclude_bindings=("normal.u",))

    with pytest.raises(KeyError):
        registry.get_binding("normal.u")


def test_load_default_keymaps_extra_bindings() -> None:
    registry = KeymapRegistry()
    extra = Binding(
        id="normal.gi",
        mode="normal",
        sequence=KeySequence.from_strings("g", "i"),
        action_id="core.enter_insert",
    )

    load_default_keymaps(registry, extra_bindings=(extra,))

    assert registry.get_binding("normal.gi").action_id == "core.enter_insert"
    assert registry.get_binding("normal.gg").action_id == "motion.document_start"


def test_extra_binding_conflicting_with_default_is_rejected() -> None:
    registry = KeymapRegistry()
    clash = Binding(
        id="normal.custom_x",
        mode="normal",
        sequence=KeySequence.from_strings("x"),
        action_id="core.enter_insert",
    )

    with pytest.raises(KeymapConflictError):
        load_default_keymaps(registry, extra_bindings=(clash,))


def test_key_sequence_parse_forms() -> None:
    assert KeySequence.parse("gg").tokens == ("g", "g")
    assert KeySequence.parse("g g").tokens == ("g", "g")
    assert KeySequence.from_strings("A").strokes[0].modifiers == ()
