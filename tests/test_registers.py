from modal_engine.buffer import RegisterContent, RegisterStore, UNNAMED_REGISTER


def make_store() -> RegisterStore:
    return RegisterStore()


def test_yank_to_unnamed_register() -> None:
    store = make_store()

    content = store.yank_to(UNNAMED_REGISTER, "hello ")

    assert store.get() == content
    assert content == RegisterContent("hello ", is_linewise=False)


def test_named_register_mirrors_into_unnamed() -> None:
    store = make_store()

    store.yank_to("a", "line\n", linewise=True)

    assert store.get("a") == RegisterContent("line\n", is_linewise=True)
    assert store.get() == store.get("a")
    assert "a" in store


def test_next_write_overwrites_wholesale() -> None:
    store = make_store()
    store.yank_to(UNNAMED_REGISTER, "first", linewise=True)

    store.yank_to(UNNAMED_REGISTER, "second")

    assert store.get() == RegisterContent("second", is_linewise=False)


def test_snapshot_is_a_copy_and_clear_empties() -> None:
    store = make_store()
    store.yank_to("a", "x")

    snapshot = store.snapshot()
    store.clear()

    assert set(snapshot) == {"a", UNNAMED_REGISTER}
    assert store.get() is None
