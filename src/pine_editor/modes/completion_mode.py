"""Completion mode: the suggestion list is open.

Arrow keys move the selection, Tab/Enter accept and Escape dismisses.
Every other key behaves as in edit mode, so typing keeps refining the list.
"""

from __future__ import annotations

from typing import Optional

from .edit_mode import EditMode


class CompletionMode(EditMode):
    name = "completion"
    fallback_modes = ("edit",)

    def on_enter(self, previous: Optional[str]) -> None:
        del previous
        self.context.bus.emit("completion.open", self.context.completion.state)

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode
        self.context.completion.close()
        self.context.bus.emit("completion.close", None)
