"""The editor façade: one buffer plus validation, completion and highlighting."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional

from rich.text import Text

from pine_editor.actions.editing import BUFFER_CHANGED, EditEvent
from pine_editor.buffer import BufferDelta, ScriptBuffer, ensure_span
from pine_editor.completion import CompletionSession, suggest
from pine_editor.diagnostics import (
    Diagnostic,
    DiagnosticSink,
    DiagnosticSummary,
    ScriptValidator,
    summarize,
)
from pine_editor.highlight import render, render_rich, tokenize
from pine_editor.language import DEFAULT_KEYWORDS, DEFAULT_SCRIPT, SNIPPETS, KeywordDictionary
from pine_editor.modes import CompletionMode, EditMode, KeyInput, ModeBus, ModeContext, ModeResult
from pine_editor.modes.mode_manager import ModeManager
from pine_editor.runtime import telemetry
from pine_editor.runtime.config import EditorSettings

from .files import PathLike, export_filename, export_script, import_script
from .repository import InMemoryScriptRepository, SavedScript, ScriptRepository
from .runner import ExecutionBackend, RunOutcome, run_if_clean


class PineEditor:
    """Owns the script buffer and keeps every derived view current.

    Each edit runs, in order: buffer update, validation (when
    ``auto_validate`` is on), suggestion recompute (when ``autocomplete`` is
    on). Highlighting is computed on demand from the current buffer.
    Collaborators (repository, sink, backend) are injected; nothing here is
    process-global.
    """

    def __init__(
        self,
        *,
        text: str = DEFAULT_SCRIPT,
        settings: Optional[EditorSettings] = None,
        dictionary: KeywordDictionary = DEFAULT_KEYWORDS,
        repository: Optional[ScriptRepository] = None,
        sink: Optional[DiagnosticSink] = None,
        backend: Optional[ExecutionBackend] = None,
        on_save: Optional[Callable[[str], None]] = None,
        name: str = "default",
    ) -> None:
        self.settings = settings or EditorSettings()
        self.dictionary = dictionary
        self.repository: ScriptRepository = repository or InMemoryScriptRepository()
        self.backend = backend
        self.on_save = on_save
        self._sink = sink
        self.validator = ScriptValidator.from_settings(self.settings, sink=sink)
        self.buffer = ScriptBuffer.from_text(text, name=name)
        self.completion = CompletionSession()
        self.bus = ModeBus()
        self.context = ModeContext(
            buffer=self.buffer,
            completion=self.completion,
            bus=self.bus,
            extras={"editor": self},
        )
        self.modes = ModeManager(self.context)
        self.modes.register_mode(EditMode)
        self.modes.register_mode(CompletionMode)
        self.diagnostics: List[Diagnostic] = []
        self.bus.subscribe(BUFFER_CHANGED, self._on_buffer_changed)
        self.validate()

    # -- derived state -------------------------------------------------

    @property
    def text(self) -> str:
        return self.buffer.text

    @property
    def summary(self) -> DiagnosticSummary:
        return summarize(self.diagnostics)

    @property
    def mode(self) -> str:
        active = self.modes.active_mode
        return active.name if active else "edit"

    def validate(self) -> List[Diagnostic]:
        self.diagnostics = self.validator.validate(self.buffer.text)
        self.bus.emit("diagnostics.updated", list(self.diagnostics))
        return self.diagnostics

    def suggestions(self) -> tuple[str, ...]:
        return suggest(
            self.buffer.text,
            self.buffer.caret,
            self.dictionary,
            min_length=self.settings.min_token_length,
        )

    def highlight(self) -> str:
        return render(
            self.buffer.text, self.dictionary, enabled=self.settings.syntax_highlighting
        )

    def highlight_rich(self) -> Text:
        if not self.settings.syntax_highlighting:
            return Text(self.buffer.text)
        return render_rich(tokenize(self.buffer.text, self.dictionary))

    def line_numbers(self) -> List[int]:
        return list(range(1, len(self.buffer.lines) + 1))

    # -- input ---------------------------------------------------------

    def handle_key(
        self, key: str, *, text: Optional[str] = None, modifiers: tuple[str, ...] = ()
    ) -> ModeResult:
        return self.modes.handle_key(KeyInput(key=key, text=text, modifiers=modifiers))

    def type_text(self, text: str) -> None:
        """Feed ``text`` one character at a time, as a keyboard would."""

        for char in text:
            if char == "\n":
                self.handle_key("ENTER")
            else:
                self.handle_key(char, text=char)

    def set_text(self, text: str, *, caret: Optional[int] = None) -> BufferDelta:
        """Replace the whole buffer (host-side edit) and refresh derived state."""

        delta = self.buffer.replace_all(text, caret=caret, label="set_text")
        self._broadcast(delta, suggest=True)
        return delta

    def set_caret(self, offset: int) -> None:
        self.buffer.set_caret(offset)
        self._close_completion()

    def update_settings(self, settings: EditorSettings) -> None:
        self.settings = settings
        self.validator = ScriptValidator.from_settings(settings, sink=self._sink)
        if not settings.autocomplete:
            self._close_completion()
        self.validate()

    def toggle_setting(self, name: str) -> EditorSettings:
        self.update_settings(self.settings.toggled(name))
        return self.settings

    # -- toolbar operations ---------------------------------------------

    def run(self) -> RunOutcome:
        """Run the script if a fresh validation pass finds no errors."""

        outcome = run_if_clean(self.buffer.text, self.validate(), self.backend)
        if outcome.status == "blocked":
            self.bus.emit("run.blocked", outcome.message)
        elif outcome.status == "failed":
            self.bus.emit("run.failed", outcome.message)
        else:
            self.bus.emit("run.started", outcome)
        return outcome

    def save(self, name: Optional[str]) -> Optional[SavedScript]:
        if not name or not name.strip():
            return None
        script = self.repository.create(
            name, self.buffer.text, has_errors=self._has_errors()
        )
        telemetry.record_event("script.saved", data={"id": script.id, "name": script.name})
        self.bus.emit("script.saved", script)
        if self.on_save is not None:
            self.on_save(self.buffer.text)
        return script

    def saved_scripts(self) -> List[SavedScript]:
        return self.repository.list()

    def delete_script(self, script_id: str) -> SavedScript:
        script = self.repository.delete(script_id)
        self.bus.emit("script.deleted", script)
        return script

    def toggle_script(self, script_id: str) -> SavedScript:
        script = self.repository.toggle(script_id)
        telemetry.record_event(
            "script.toggled", data={"id": script.id, "running": script.is_running}
        )
        return script

    def update_script(self, script_id: str) -> SavedScript:
        """Overwrite a saved script with the current buffer."""

        script = self.repository.update_content(
            script_id, self.buffer.text, has_errors=self._has_errors()
        )
        telemetry.record_event("script.updated", data={"id": script.id, "name": script.name})
        self.bus.emit("script.updated", script)
        return script

    def load(self, script_id: str) -> SavedScript:
        script = self.repository.get(script_id)
        self._replace_document(script.content, label="load")
        self.buffer.name = script.name
        return script

    def export_text(self) -> str:
        return self.buffer.text

    def export_filename(self) -> str:
        return export_filename(self.settings.export_name)

    def export(self, directory: PathLike) -> Path:
        path = export_script(self.buffer.text, directory, name=self.settings.export_name)
        self.bus.emit("script.exported", path)
        return path

    def import_file(self, path: PathLike) -> str:
        content = import_script(path)
        self._replace_document(content, label="import")
        self.bus.emit("script.imported", Path(path))
        return content

    def format_code(self) -> BufferDelta:
        formatted = "\n".join(line.strip() for line in self.buffer.lines)
        caret = min(self.buffer.caret, len(formatted))
        delta = self.buffer.replace_all(formatted, caret=caret, label="format")
        self._broadcast(delta, suggest=False)
        return delta

    def insert_snippet(
        self, snippet: str, *, selection: Optional[tuple[int, int]] = None
    ) -> BufferDelta:
        """Insert a named snippet (or literal text) over ``selection``.

        The caret lands right after the inserted text.
        """

        body = SNIPPETS.get(snippet, snippet)
        start, end = selection or (self.buffer.caret, self.buffer.caret)
        start, end = ensure_span(self.buffer.text, start, end)
        delta = self.buffer.replace_range(start, end, body, label="insert_snippet")
        self._broadcast(delta, suggest=False)
        return delta

    # -- internals -------------------------------------------------------

    def _has_errors(self) -> bool:
        return not summarize(self.validate()).can_run

    def _replace_document(self, text: str, *, label: str) -> None:
        delta = self.buffer.replace_all(text, caret=0, label=label)
        self._broadcast(delta, suggest=False)
        if not self.settings.auto_validate:
            self.validate()

    def _broadcast(self, delta: BufferDelta, *, suggest: bool) -> None:
        self.bus.emit(BUFFER_CHANGED, EditEvent(delta=delta, suggest=suggest))
        self.modes.sync_with_completion()

    def _close_completion(self) -> None:
        self.completion.close()
        self.modes.sync_with_completion()

    def _on_buffer_changed(self, payload: object) -> None:
        if not isinstance(payload, EditEvent):
            return
        if self.settings.auto_validate:
            self.validate()
        if payload.suggest and self.settings.autocomplete:
            self.completion.update(self.suggestions())
        else:
            self.completion.close()


def create_default_editor(
    *,
    text: Optional[str] = None,
    settings: Optional[EditorSettings] = None,
    sink: Optional[DiagnosticSink] = None,
    backend: Optional[ExecutionBackend] = None,
) -> PineEditor:
    """Build an editor with settings taken from the environment."""

    return PineEditor(
        text=DEFAULT_SCRIPT if text is None else text,
        settings=settings or EditorSettings.from_env(),
        sink=sink,
        backend=backend,
    )


__all__ = ["PineEditor", "create_default_editor"]
