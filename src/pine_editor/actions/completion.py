"""Actions driving the suggestion dropdown."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pine_editor.completion import current_token
from pine_editor.modes.base_mode import ModeContext, ModeResult

from .editing import commit_edit

if TYPE_CHECKING:  # pragma: no cover
    from pine_editor.keymaps.models import ResolutionMatch


def select_next(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = context.completion.next()
    context.bus.emit("completion.select", state)
    return ModeResult(consumed=True, status="completion_select", message=state.current)


def select_previous(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    state = context.completion.previous()
    context.bus.emit("completion.select", state)
    return ModeResult(consumed=True, status="completion_select", message=state.current)


def accept_suggestion(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Replace exactly the caret token with the selected suggestion."""

    del match
    choice = context.completion.accept()
    if choice is None:
        return ModeResult(consumed=False, switch_to="edit", status="completion_empty")
    buffer = context.buffer
    token = current_token(buffer.text, buffer.caret)
    delta = buffer.replace_range(
        token.start, buffer.caret, choice, label="accept_suggestion"
    )
    context.bus.emit("completion.accept", choice)
    return commit_edit(context, delta, suggest=False, message=choice)


def dismiss_suggestions(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.completion.close()
    context.bus.emit("completion.dismiss", None)
    return ModeResult(consumed=True, switch_to="edit", message="completion_dismiss")


__all__ = [
    "accept_suggestion",
    "dismiss_suggestions",
    "select_next",
    "select_previous",
]
