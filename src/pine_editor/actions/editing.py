"""Text-editing actions shared by the edit and completion modes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

from pine_editor.buffer import BufferDelta
from pine_editor.modes.base_mode import ModeContext, ModeResult

if TYPE_CHECKING:  # pragma: no cover
    from pine_editor.keymaps.models import ResolutionMatch

BUFFER_CHANGED = "buffer.changed"
INDENT = "    "


@dataclass(frozen=True, slots=True)
class EditEvent:
    """Payload of ``buffer.changed``.

    ``suggest`` is false for edits that must not reopen the dropdown, such as
    inserting an accepted suggestion.
    """

    delta: BufferDelta
    suggest: bool = True


def commit_edit(
    context: ModeContext,
    delta: Optional[BufferDelta],
    *,
    suggest: bool = True,
    message: Optional[str] = None,
) -> ModeResult:
    """Broadcast an edit and pick the mode that matches the completion state."""

    if delta is None:
        return ModeResult(consumed=True, status="noop", message=message)
    context.bus.emit(BUFFER_CHANGED, EditEvent(delta=delta, suggest=suggest))
    mode = "completion" if context.completion.is_open else "edit"
    return ModeResult(consumed=True, switch_to=mode, status="edited", message=message)


def insert_text(context: ModeContext, text: str) -> ModeResult:
    return commit_edit(context, context.buffer.insert_text(text))


def delete_backward(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return commit_edit(context, context.buffer.delete_backward())


def insert_newline(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return insert_text(context, "\n")


def insert_indent(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return insert_text(context, INDENT)


def _move(context: ModeContext, target: int, message: str) -> ModeResult:
    context.buffer.set_caret(target)
    context.completion.close()
    return ModeResult(consumed=True, switch_to="edit", status="moved", message=message)


def move_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _move(context, max(context.buffer.caret - 1, 0), "caret_left")


def move_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    buffer = context.buffer
    return _move(context, min(buffer.caret + 1, len(buffer.text)), "caret_right")


def move_line_start(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    before = context.buffer.text_before_caret()
    return _move(context, before.rfind("\n") + 1, "caret_home")


def move_line_end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    text = context.buffer.text
    end = text.find("\n", context.buffer.caret)
    return _move(context, len(text) if end == -1 else end, "caret_end")


def move_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _move(context, _vertical_target(context, -1), "caret_up")


def move_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    return _move(context, _vertical_target(context, 1), "caret_down")


def _vertical_target(context: ModeContext, step: int) -> int:
    lines = context.buffer.lines
    row, column = context.buffer.caret_position()
    target_row = min(max(row + step, 0), len(lines) - 1)
    offset = sum(len(line) + 1 for line in lines[:target_row])
    return offset + min(column, len(lines[target_row]))


__all__ = [
    "BUFFER_CHANGED",
    "EditEvent",
    "commit_edit",
    "delete_backward",
    "insert_indent",
    "insert_newline",
    "insert_text",
    "move_down",
    "move_left",
    "move_line_end",
    "move_line_start",
    "move_right",
    "move_up",
]
