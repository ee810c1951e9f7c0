from __future__ import annotations

from typing import Any, List, Optional, Tuple

from pine_editor.adapters.textual import TextualEditorAdapter, TextualUIHooks
from pine_editor.adapters.textual.app import (
    normalize_key,
    render_diagnostics,
    render_document,
    render_suggestions,
)
from pine_editor.buffer import BufferMirror
from pine_editor.diagnostics import CollectingSink, Diagnostic
from pine_editor.runtime import EditorSettings
from pine_editor.session import BLOCKED_MESSAGE, PineEditor


def make_editor(text: str = "", **kwargs) -> PineEditor:
    kwargs.setdefault("sink", CollectingSink())
    return PineEditor(text=text, **kwargs)


class Recorder:
    def __init__(self) -> None:
        self.buffers: List[str] = []
        self.statuses: List[str] = []
        self.suggestions: List[Tuple[Tuple[str, ...], Optional[int]]] = []
        self.diagnostics: List[List[Diagnostic]] = []
        self.events: List[Tuple[str, Any]] = []
        self.logs: List[str] = []

    def hooks(self) -> TextualUIHooks:
        return TextualUIHooks(
            update_buffer=lambda mirror: self.buffers.append(mirror.text),
            update_status=self.statuses.append,
            show_suggestions=lambda items, selected: self.suggestions.append(
                (tuple(items), selected)
            ),
            show_diagnostics=lambda found: self.diagnostics.append(list(found)),
            handle_event=lambda name, payload: self.events.append((name, payload)),
            log=self.logs.append,
        )


def make_adapter(text: str = "", **kwargs) -> Tuple[TextualEditorAdapter, Recorder]:
    recorder = Recorder()
    adapter = TextualEditorAdapter(make_editor(text, **kwargs), recorder.hooks())
    return adapter, recorder


def test_adapter_pushes_initial_state() -> None:
    _adapter, recorder = make_adapter("plot(close")

    assert recorder.buffers == ["plot(close"]
    assert recorder.suggestions == [((), None)]
    assert len(recorder.diagnostics[-1]) == 2


def test_adapter_updates_buffer_suggestions_and_status() -> None:
    adapter, recorder = make_adapter()

    for char in "inp":
        adapter.handle_textual_key(char, text=char)
    adapter.handle_textual_key("DOWN")

    assert recorder.buffers[-1] == "inp"
    assert recorder.suggestions[-1][1] == 1
    assert recorder.statuses[-1].startswith("COMPLETION")
    assert any(name == "completion.open" for name, _ in recorder.events)
    assert recorder.logs[-1].startswith("[COMPLETION 1:4 v3] key key='DOWN'")


def test_adapter_accept_closes_suggestions() -> None:
    adapter, recorder = make_adapter()
    for char in "plots":
        adapter.handle_textual_key(char, text=char)

    adapter.handle_textual_key("ENTER")
    adapter.handle_textual_key("TAB")

    assert recorder.buffers[-1] == "plotshape    "
    assert recorder.suggestions[-1] == ((), None)


def test_adapter_status_shows_run_block() -> None:
    adapter, recorder = make_adapter("plot(close")

    adapter.handle_textual_key("r", modifiers=("ctrl",))

    assert recorder.statuses[-1] == BLOCKED_MESSAGE
    assert ("run.blocked", BLOCKED_MESSAGE) in recorder.events


def test_host_edit_replaces_text() -> None:
    adapter, recorder = make_adapter()

    adapter.push_host_edit(BufferMirror(text="//@version=5\nx = 1", caret=99, version=0))

    assert adapter.editor.text == "//@version=5\nx = 1"
    assert adapter.pull_buffer().caret == len("//@version=5\nx = 1")
    assert recorder.diagnostics[-1] == []
    assert recorder.statuses[-1].endswith("0 errors, 0 warnings")


def test_normalize_key_maps_textual_names() -> None:
    assert normalize_key("escape", None, False) == ("ESC", None, ())
    assert normalize_key("enter", "\r", False) == ("ENTER", None, ())
    assert normalize_key("ctrl+r", "\x12", False) == ("r", None, ("CTRL",))
    assert normalize_key("a", "a", True) == ("a", "a", ())
    assert normalize_key("space", " ", True) == (" ", " ", ())
    assert normalize_key("ctrl+q", None, False) is None
    assert normalize_key("f5", None, False) is None


def test_render_document_marks_caret_and_numbers_lines() -> None:
    editor = make_editor("a\nb")
    mirror = editor.buffer.mirror()

    rendered = render_document(editor, mirror)

    assert rendered.plain == "1 a\n2 b "

    editor.update_settings(EditorSettings(line_numbers=False))
    assert render_document(editor, editor.buffer.mirror()).plain == "a\nb "


def test_render_document_follows_word_wrap() -> None:
    editor = make_editor("x = 1")

    assert render_document(editor, editor.buffer.mirror()).no_wrap is True

    editor.toggle_setting("word_wrap")
    rendered = render_document(editor, editor.buffer.mirror())

    assert rendered.no_wrap is False
    assert rendered.overflow == "fold"


def test_render_panels() -> None:
    assert render_diagnostics([]).plain == "No problems"
    assert render_diagnostics([Diagnostic.error(2, "x")]).plain == "Line 2: x"
    assert render_suggestions(["sma", "ema"], 1).plain == " sma \n ema "
