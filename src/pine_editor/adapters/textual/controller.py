"""Textual adapter that wires PineEditor state and bus events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

from pine_editor.buffer import BufferMirror, BufferSync
from pine_editor.diagnostics import Diagnostic
from pine_editor.modes import ModeResult
from pine_editor.session import PineEditor


def _noop(*_args: object) -> None:  # pragma: no cover
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Widget updaters the adapter calls; only ``update_buffer`` is required."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    show_suggestions: Callable[[Sequence[str], Optional[int]], None] = _noop
    show_diagnostics: Callable[[Sequence[Diagnostic]], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    log: Callable[[str], None] = _noop


FORWARDED_EVENTS = (
    "completion.open",
    "completion.close",
    "completion.select",
    "completion.accept",
    "completion.dismiss",
    "run.started",
    "run.blocked",
    "run.failed",
    "script.saved",
    "script.deleted",
    "script.exported",
    "script.imported",
    "script.updated",
)


class TextualEditorAdapter(BufferSync):
    """Bridges a PineEditor and its bus to a Textual-friendly surface."""

    def __init__(self, editor: PineEditor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        self._subscribe_events()
        self.refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        mods = tuple(str(mod).upper() for mod in modifiers)
        result = self.editor.handle_key(key, text=text, modifiers=mods)
        self._after_mode_result(result)
        self._trace("key", key=key, status=result.status, message=result.message)
        return result

    def pull_buffer(self) -> BufferMirror:
        return self.editor.buffer.mirror(attributes={"mode": self.editor.mode})

    def push_host_edit(self, mirror: BufferMirror) -> None:
        """Adopt text edited outside the key path (paste, file drop)."""

        self.editor.set_text(mirror.text, caret=min(mirror.caret, len(mirror.text)))
        self._trace("host-edit", version=mirror.version)
        self.hooks.update_status(self.status_line())
        self.refresh()

    def refresh(self) -> None:
        self._refresh_buffer()
        self._refresh_suggestions()
        self._refresh_diagnostics()

    def status_line(self) -> str:
        row, column = self.editor.buffer.caret_position()
        return (
            f"{self.editor.mode.upper()}  Ln {row + 1}, Col {column + 1}  "
            f"{self.editor.summary.text}"
        )

    def _after_mode_result(self, result: ModeResult) -> None:
        if result.status.startswith("run_") and result.message:
            self.hooks.update_status(result.message)
        else:
            self.hooks.update_status(self.status_line())
        self.refresh()

    def _subscribe_events(self) -> None:
        bus = self.editor.bus
        for event in FORWARDED_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )
        bus.subscribe("diagnostics.updated", lambda _payload: self._refresh_diagnostics())

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._trace(name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name.startswith("completion"):
            self._refresh_suggestions()
        elif name.startswith("script."):
            self._refresh_buffer()

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.pull_buffer())

    def _refresh_suggestions(self) -> None:
        session = self.editor.completion
        self.hooks.show_suggestions(session.suggestions, session.selected_index)

    def _refresh_diagnostics(self) -> None:
        self.hooks.show_diagnostics(list(self.editor.diagnostics))

    def _trace(self, what: str, **fields: object) -> None:
        """Send one ``[MODE r:c v<version>] what k=v`` line to ``hooks.log``."""

        buffer = self.editor.buffer
        row, column = buffer.caret_position()
        details = " ".join(
            f"{key}={value!r}" for key, value in fields.items() if value is not None
        )
        self.hooks.log(
            f"[{self.editor.mode.upper()} {row + 1}:{column + 1} v{buffer.version}] "
            f"{what} {details}".rstrip()
        )


__all__ = ["FORWARDED_EVENTS", "TextualEditorAdapter", "TextualUIHooks"]
