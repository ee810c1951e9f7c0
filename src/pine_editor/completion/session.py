"""Keyboard-driven suggestion selection.

Two states: closed (no dropdown) and open with a selected index. Moving
the selection wraps around in both directions.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True, slots=True)
class CompletionState:
    suggestions: tuple[str, ...] = ()
    selected: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.selected is not None

    @property
    def current(self) -> Optional[str]:
        if self.selected is None:
            return None
        return self.suggestions[self.selected]


CLOSED = CompletionState()


class CompletionSession:
    """Holds the single active suggestion list of an editor."""

    def __init__(self) -> None:
        self._state = CLOSED

    @property
    def state(self) -> CompletionState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state.is_open

    @property
    def suggestions(self) -> tuple[str, ...]:
        return self._state.suggestions

    @property
    def selected_index(self) -> Optional[int]:
        return self._state.selected

    @property
    def selected(self) -> Optional[str]:
        return self._state.current

    def update(self, suggestions: Sequence[str]) -> CompletionState:
        """Adopt a freshly computed list; an empty list closes the session."""

        items = tuple(suggestions)
        self._state = CompletionState(items, 0) if items else CLOSED
        return self._state

    def move(self, step: int) -> CompletionState:
        if not self._state.is_open:
            return self._state
        count = len(self._state.suggestions)
        index = (self._state.selected + step) % count  # type: ignore[operator]
        self._state = CompletionState(self._state.suggestions, index)
        return self._state

    def next(self) -> CompletionState:
        return self.move(1)

    def previous(self) -> CompletionState:
        return self.move(-1)

    def close(self) -> None:
        self._state = CLOSED

    def accept(self) -> Optional[str]:
        """Close the session and return the suggestion that was selected."""

        choice = self._state.current
        self._state = CLOSED
        return choice


__all__ = ["CLOSED", "CompletionSession", "CompletionState"]
