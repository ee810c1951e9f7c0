"""Script buffer: the single mutable text the editor owns."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, Optional

from pine_editor.runtime import telemetry

from .sync import BufferMirror
from .validation import ensure_offset, ensure_span


@dataclass(frozen=True, slots=True)
class BufferDelta:
    version: int
    text: str
    caret: int
    label: str
    previous_text: str


class ScriptBuffer:
    """Whole-text buffer with a caret offset.

    Every edit swaps the full text; there is no diffing or line index to
    keep in sync. ``version`` increases by one per committed edit.
    """

    def __init__(self, text: str = "", *, name: str = "default", caret: int = 0) -> None:
        self.name = name
        self._text = text
        self._caret = ensure_offset(text, caret)
        self.version = 0

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "ScriptBuffer":
        return cls(text, name=name, caret=len(text))

    @property
    def text(self) -> str:
        return self._text

    @property
    def caret(self) -> int:
        return self._caret

    @property
    def lines(self) -> list[str]:
        return self._text.split("\n")

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self._text,
            caret=self._caret,
            version=self.version,
            attributes=dict(attributes or {}),
        )

    def set_caret(self, offset: int) -> int:
        self._caret = ensure_offset(self._text, offset)
        return self._caret

    def caret_position(self) -> tuple[int, int]:
        """Return the caret as a zero-based ``(row, column)`` pair."""

        before = self._text[: self._caret]
        row = before.count("\n")
        column = len(before) - (before.rfind("\n") + 1)
        return row, column

    def text_before_caret(self) -> str:
        return self._text[: self._caret]

    def replace_all(
        self, text: str, *, caret: Optional[int] = None, label: str = "replace_all"
    ) -> BufferDelta:
        target = ensure_offset(text, len(text) if caret is None else caret)
        with Transaction(self, label):
            previous = self._text
            self._text = text
            self._caret = target
            self.version += 1
        return self._delta(label, previous)

    def replace_range(self, start: int, end: int, text: str, *, label: str) -> BufferDelta:
        start, end = ensure_span(self._text, start, end)
        with Transaction(self, label):
            previous = self._text
            self._text = previous[:start] + text + previous[end:]
            self._caret = start + len(text)
            self.version += 1
        return self._delta(label, previous)

    def insert_text(self, text: str, *, offset: Optional[int] = None) -> BufferDelta:
        position = self._caret if offset is None else offset
        return self.replace_range(position, position, text, label="insert_text")

    def delete_backward(self) -> Optional[BufferDelta]:
        if self._caret == 0:
            return None
        return self.replace_range(
            self._caret - 1, self._caret, "", label="delete_backward"
        )

    def _delta(self, label: str, previous: str) -> BufferDelta:
        return BufferDelta(
            version=self.version,
            text=self._text,
            caret=self._caret,
            label=label,
            previous_text=previous,
        )


class Transaction(AbstractContextManager["Transaction"]):
    def __init__(self, buffer: ScriptBuffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._span_cm is not None:
            self._span_cm.__exit__(exc_type, exc, tb)
        return False
