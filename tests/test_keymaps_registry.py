import pytest

from mdvim.keymaps import (
    DEFAULT_BINDINGS,
    RESTING,
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
    KeyStroke,
    load_default_keymaps,
)


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    mode: str = RESTING,
    token: str = "ctrl+k",
    action_id: str = "core.test",
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        stroke=KeyStroke.parse(token),
        action_id=action_id,
    )


def test_keystroke_parse_normalizes_modifiers() -> None:
    stroke = KeyStroke.parse("shift+ctrl+x")

    assert stroke.key == "x"
    assert stroke.modifiers == ("ctrl", "shift")
    assert stroke.token == "ctrl+shift+x"
    assert KeyStroke.parse("ctrl++").key == "+"
    assert KeyStroke.parse("ctrl+[").token == "ctrl+["


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="resting.k")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode=RESTING)) == [binding]


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="resting.k"))

    with pytest.raises(KeymapConflictError) as excinfo:
        registry.register_binding(make_binding(binding_id="resting.k.duplicate"))

    assert excinfo.value.existing.id == "resting.k"


def test_same_stroke_in_other_mode_does_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="resting.k"))
    registry.register_binding(make_binding(binding_id="other.k", mode="other"))

    assert registry.stats().modes == ("other", RESTING)


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="resting.k"))


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="binding", token="ctrl+j")

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]
    assert registry.lookup_binding(RESTING, "ctrl+k") is None


def test_replace_takes_over_stroke_from_other_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="old"))

    registry.register_binding(make_binding(binding_id="new"), replace=True)

    assert registry.lookup_binding(RESTING, "ctrl+k").id == "new"
    assert registry.stats().binding_count == 1


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)
    before = registry.revision()

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0
    assert registry.revision() == before + 1
    assert registry.unregister_binding("binding") is None


def test_resolve_pairs_binding_with_action() -> None:
    registry = KeymapRegistry()
    action = make_action()
    registry.register_action(action)
    registry.register_binding(make_binding(binding_id="resting.k"))

    match = registry.resolve(RESTING, "ctrl+k")

    assert match is not None
    assert match.action is action
    assert registry.resolve(RESTING, "ctrl+j") is None


def test_load_default_keymaps_registers_every_shortcut() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    tokens = {binding.key_signature for binding in registry.iter_bindings(RESTING)}
    assert tokens == {
        "TAB",
        "shift+BACKTAB",
        "ctrl+b",
        "ctrl+i",
        "ctrl+d",
        "ctrl+h",
        "ctrl+u",
        "ctrl+w",
        "ESC",
        "ctrl+[",
    }
    assert registry.stats().binding_count == len(DEFAULT_BINDINGS)


def test_load_default_keymaps_exclude_and_extra() -> None:
    registry = KeymapRegistry()
    remap = Binding(
        id="resting.enter_composing_alt",
        mode=RESTING,
        stroke=KeyStroke.parse("ctrl+d"),
        action_id="shortcut.bold",
    )

    load_default_keymaps(
        registry,
        exclude_bindings=("resting.ctrl_w",),
        extra_bindings=(remap,),
    )

    assert registry.lookup_binding(RESTING, "ctrl+w") is None
    assert registry.resolve(RESTING, "ctrl+d").action.id == "shortcut.bold"
