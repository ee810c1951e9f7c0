"""Editing, completion and script verbs bound to keys."""

from .completion import (
    accept_suggestion,
    dismiss_suggestions,
    select_next,
    select_previous,
)
from .editing import (
    BUFFER_CHANGED,
    EditEvent,
    commit_edit,
    delete_backward,
    insert_indent,
    insert_newline,
    insert_text,
    move_down,
    move_left,
    move_line_end,
    move_line_start,
    move_right,
    move_up,
)
from .script import format_script, require_editor, run_script

__all__ = [
    "BUFFER_CHANGED",
    "EditEvent",
    "accept_suggestion",
    "commit_edit",
    "delete_backward",
    "dismiss_suggestions",
    "format_script",
    "insert_indent",
    "insert_newline",
    "insert_text",
    "move_down",
    "move_left",
    "move_line_end",
    "move_line_start",
    "move_right",
    "move_up",
    "require_editor",
    "run_script",
    "select_next",
    "select_previous",
]
