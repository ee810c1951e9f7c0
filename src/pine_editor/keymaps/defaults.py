"""Built-in bindings for the edit and completion modes.

Both tables are declared as plain rows so the key map reads like the
editor's shortcut reference.
"""

from __future__ import annotations

from typing import Iterable, Sequence

from pine_editor.actions import completion as completion_actions
from pine_editor.actions import editing as editing_actions
from pine_editor.actions import script as script_actions

from .models import ActionRef, Binding
from .registry import KeymapRegistry

_ACTION_ROWS = (
    ("edit.delete_backward", editing_actions.delete_backward, "Delete the character before the caret"),
    ("edit.newline", editing_actions.insert_newline, "Insert a line break"),
    ("edit.indent", editing_actions.insert_indent, "Insert one indentation level"),
    ("edit.left", editing_actions.move_left, "Caret left"),
    ("edit.right", editing_actions.move_right, "Caret right"),
    ("edit.up", editing_actions.move_up, "Caret up"),
    ("edit.down", editing_actions.move_down, "Caret down"),
    ("edit.home", editing_actions.move_line_start, "Caret to line start"),
    ("edit.end", editing_actions.move_line_end, "Caret to line end"),
    ("completion.next", completion_actions.select_next, "Select the next suggestion"),
    ("completion.previous", completion_actions.select_previous, "Select the previous suggestion"),
    ("completion.accept", completion_actions.accept_suggestion, "Insert the selected suggestion"),
    ("completion.dismiss", completion_actions.dismiss_suggestions, "Close the suggestion list"),
    ("script.run", script_actions.run_script, "Run the script when it has no errors"),
    ("script.format", script_actions.format_script, "Strip surrounding whitespace from every line"),
)

# (mode, binding suffix, key token, action id)
_BINDING_ROWS = (
    ("edit", "backspace", "BACKSPACE", "edit.delete_backward"),
    ("edit", "enter", "ENTER", "edit.newline"),
    ("edit", "tab", "TAB", "edit.indent"),
    ("edit", "left", "LEFT", "edit.left"),
    ("edit", "right", "RIGHT", "edit.right"),
    ("edit", "up", "UP", "edit.up"),
    ("edit", "down", "DOWN", "edit.down"),
    ("edit", "home", "HOME", "edit.home"),
    ("edit", "end", "END", "edit.end"),
    ("edit", "run", "CTRL+r", "script.run"),
    ("edit", "format", "CTRL+l", "script.format"),
    ("completion", "down", "DOWN", "completion.next"),
    ("completion", "up", "UP", "completion.previous"),
    ("completion", "tab", "TAB", "completion.accept"),
    ("completion", "enter", "ENTER", "completion.accept"),
    ("completion", "escape", "ESC", "completion.dismiss"),
)

DEFAULT_ACTIONS: tuple[ActionRef, ...] = tuple(
    ActionRef(id=action_id, handler=handler, description=description)
    for action_id, handler, description in _ACTION_ROWS
)

DEFAULT_BINDINGS: tuple[Binding, ...] = tuple(
    Binding.from_token(f"{mode}.{suffix}", mode, token, action_id)
    for mode, suffix, token, action_id in _BINDING_ROWS
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register every built-in action and the selected default bindings.

    ``include_bindings`` narrows the defaults to the listed ids and
    ``exclude_bindings`` drops ids from them. ``extra_bindings`` are added
    last and always win their key.
    """

    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace)

    wanted = set(include_bindings) if include_bindings else None
    skipped = set(exclude_bindings or ())
    selected = [
        binding
        for binding in DEFAULT_BINDINGS
        if (wanted is None or binding.id in wanted) and binding.id not in skipped
    ]
    for binding in selected:
        registry.register_binding(binding, replace=replace)
    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=True)


__all__ = ["DEFAULT_ACTIONS", "DEFAULT_BINDINGS", "load_default_keymaps"]
