import pytest

from pine_editor.keymaps import (
    ActionRef,
    Binding,
    KeymapConflictError,
    KeymapRegistry,
    key_token,
)
from pine_editor.keymaps.defaults import (
    DEFAULT_ACTIONS,
    DEFAULT_BINDINGS,
    load_default_keymaps,
)


def make_action(action_id: str = "edit.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_binding(
    *,
    binding_id: str,
    mode: str = "edit",
    key: str = "TAB",
    action_id: str = "edit.test",
    modifiers: tuple[str, ...] = (),
) -> Binding:
    return Binding(
        id=binding_id, mode=mode, key=key, action_id=action_id, modifiers=modifiers
    )


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="edit.tab")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode="edit")) == [binding]


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="edit.tab"))

    with pytest.raises(KeymapConflictError) as info:
        registry.register_binding(make_binding(binding_id="edit.tab.duplicate"))

    assert [b.id for b in info.value.conflicts] == ["edit.tab"]


def test_same_key_in_other_mode_is_not_a_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="edit.tab"))

    registry.register_binding(make_binding(binding_id="completion.tab", mode="completion"))

    assert registry.stats().modes == ("completion", "edit")


def test_replace_binding_overrides_existing() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_action(make_action("edit.other"))
    registry.register_binding(make_binding(binding_id="edit.tab"))

    replacement = make_binding(binding_id="edit.tab.alt", action_id="edit.other")
    registry.register_binding(replacement, replace=True)

    match = registry.resolve("edit", "TAB")
    assert match is not None
    assert match.binding is replacement
    assert match.action.id == "edit.other"
    assert registry.stats().binding_count == 1


def test_unknown_action_is_rejected() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="edit.tab"))


def test_duplicate_action_requires_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    with pytest.raises(ValueError):
        registry.register_action(make_action())
    registry.register_action(make_action(), replace=True)


def test_modifier_order_does_not_matter() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(
        make_binding(binding_id="edit.run", key="r", modifiers=("shift", "ctrl"))
    )

    assert registry.resolve("edit", "r", ("CTRL", "SHIFT")) is not None
    assert registry.resolve("edit", "r", ("CTRL",)) is None
    assert key_token("r", ("shift", "ctrl")) == "CTRL+SHIFT+r"


def test_unregister_binding_clears_index() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="edit.tab"))

    removed = registry.unregister_binding("edit.tab")

    assert removed is not None
    assert registry.resolve("edit", "TAB") is None
    assert registry.unregister_binding("edit.tab") is None


def test_load_defaults_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, exclude_bindings=["completion.escape"])

    stats = registry.stats()
    assert stats.action_count == len(DEFAULT_ACTIONS)
    assert stats.binding_count == len(DEFAULT_BINDINGS) - 1
    assert registry.resolve("completion", "ESC") is None
    assert registry.resolve("completion", "DOWN").action.id == "completion.next"


def test_load_defaults_include_and_extra() -> None:
    registry = KeymapRegistry()
    extra = Binding(
        id="edit.ctrl_space",
        mode="edit",
        key="SPACE",
        action_id="edit.indent",
        modifiers=("CTRL",),
    )

    load_default_keymaps(
        registry, include_bindings=["edit.enter"], extra_bindings=[extra]
    )

    assert {b.id for b in registry.iter_bindings()} == {"edit.enter", "edit.ctrl_space"}


def test_lookup_by_id() -> None:
    registry = KeymapRegistry()
    action = registry.register_action(make_action())
    binding = registry.register_binding(make_binding(binding_id="edit.tab"))

    assert registry.get_action("edit.test") is action
    assert registry.get_binding("edit.tab") is binding
    with pytest.raises(KeyError):
        registry.get_binding("edit.missing")
