"""Executable Textual app that hosts the Pine Script editor."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, List, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when the app is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Horizontal, Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use pine_editor.adapters.textual.app"
    ) from exc

from rich.text import Text

from pine_editor.buffer import BufferMirror
from pine_editor.diagnostics import Diagnostic
from pine_editor.runtime import telemetry
from pine_editor.runtime.config import PAREN_CHECK_MODES, EditorSettings
from pine_editor.session import PineEditor, create_default_editor

from .controller import TextualEditorAdapter, TextualUIHooks

NAMED_KEYS = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "tab": "TAB",
    "backspace": "BACKSPACE",
    "up": "UP",
    "down": "DOWN",
    "left": "LEFT",
    "right": "RIGHT",
    "home": "HOME",
    "end": "END",
}


def normalize_key(
    key: str, character: Optional[str], printable: bool
) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
    """Map a Textual key name to the ``(key, text, modifiers)`` the editor binds."""

    *prefix, base = key.split("+")
    modifiers = tuple(part.upper() for part in prefix)
    if key in {"ctrl+c", "ctrl+q"}:
        return None
    if base in NAMED_KEYS:
        return (NAMED_KEYS[base], None, modifiers)
    if character and printable and not {"CTRL", "ALT"} & set(modifiers):
        return (character, character, ())
    if modifiers and len(base) == 1:
        return (base, None, modifiers)
    return None


def render_document(editor: PineEditor, mirror: BufferMirror) -> Text:
    """Highlighted buffer with the caret cell reversed and an optional gutter.

    Long lines are cropped at the view edge unless ``word_wrap`` is on.
    """

    body = editor.highlight_rich()
    if mirror.caret < len(body.plain) and body.plain[mirror.caret] != "\n":
        body.stylize("reverse", mirror.caret, mirror.caret + 1)
    else:
        body = body[: mirror.caret] + Text(" ", style="reverse") + body[mirror.caret :]
    if not editor.settings.line_numbers:
        return _wrapped(body, editor.settings.word_wrap)
    lines = body.split("\n", allow_blank=True)
    width = len(str(len(lines)))
    gutter = Text()
    for number, line in enumerate(lines, start=1):
        if number > 1:
            gutter.append("\n")
        gutter.append(f"{number:>{width}} ", style="dim")
        gutter.append_text(line)
    return _wrapped(gutter, editor.settings.word_wrap)


def _wrapped(text: Text, word_wrap: bool) -> Text:
    text.no_wrap = not word_wrap
    text.overflow = "fold" if word_wrap else "crop"
    return text


def render_diagnostics(diagnostics: Sequence[Diagnostic]) -> Text:
    if not diagnostics:
        return Text("No problems", style="green")
    out = Text()
    for index, diagnostic in enumerate(diagnostics):
        if index:
            out.append("\n")
        style = "bold red" if diagnostic.is_error else "yellow"
        out.append(diagnostic.label(), style=style)
    return out


def render_suggestions(suggestions: Sequence[str], selected: Optional[int]) -> Text:
    out = Text()
    for index, suggestion in enumerate(suggestions):
        if index:
            out.append("\n")
        style = "reverse bold" if index == selected else ""
        out.append(f" {suggestion} ", style=style)
    return out


@dataclass
class UIState:
    status_text: str = ""
    events: List[str] = field(default_factory=list)


class PineEditorApp(App[None]):
    """Terminal UI embedding the Pine Script editor."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#editor-area {
		height: 1fr;
	}

	#buffer-view {
		width: 1fr;
		border: round $accent;
		padding: 0 1;
		overflow: auto;
	}

	#suggestions {
		width: 28;
		border: round $secondary;
		display: none;
	}

	#diagnostics {
		height: 6;
		border: round $warning;
		padding: 0 1;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
        ("ctrl+e", "export", "Export"),
        ("f2", "toggle('syntax_highlighting')", "Highlight"),
        ("f3", "toggle('line_numbers')", "Line numbers"),
        ("f4", "toggle('autocomplete')", "Autocomplete"),
        ("f5", "toggle('word_wrap')", "Wrap"),
    ]
    # keys the app keeps for itself instead of forwarding to the editor
    APP_KEYS = frozenset({"ctrl+c", "ctrl+q", "ctrl+e", "f2", "f3", "f4", "f5"})

    def __init__(self, editor: Optional[PineEditor] = None) -> None:
        super().__init__()
        self.editor = editor or create_default_editor()
        self.adapter: TextualEditorAdapter | None = None
        self._state = UIState()
        self._buffer_widget: Static | None = None
        self._suggestion_widget: Static | None = None
        self._diagnostics_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Horizontal(id="editor-area"):
            self._buffer_widget = Static("", id="buffer-view")
            self._suggestion_widget = Static("", id="suggestions")
            yield self._buffer_widget
            yield self._suggestion_widget
        with Vertical(id="problems"):
            self._diagnostics_widget = Static("", id="diagnostics")
            yield self._diagnostics_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            show_suggestions=self._show_suggestions,
            show_diagnostics=self._show_diagnostics,
            handle_event=self._handle_event,
        )
        self.adapter = TextualEditorAdapter(self.editor, hooks)
        self._update_status(self.adapter.status_line())

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key in self.APP_KEYS:
            return
        normalized = normalize_key(event.key, event.character, event.is_printable)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()
        event.prevent_default()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(render_document(self.editor, mirror))

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _show_suggestions(self, suggestions: Sequence[str], selected: Optional[int]) -> None:
        if not self._suggestion_widget:
            return
        self._suggestion_widget.display = bool(suggestions)
        self._suggestion_widget.update(render_suggestions(suggestions, selected))

    def _show_diagnostics(self, diagnostics: Sequence[Diagnostic]) -> None:
        if self._diagnostics_widget:
            self._diagnostics_widget.update(render_diagnostics(diagnostics))

    def _handle_event(self, name: str, payload: Any | None) -> None:
        self._state.events.append(name)
        if name in {"run.blocked", "run.failed"} and isinstance(payload, str):
            self.notify(payload, severity="error")
        elif name == "run.started":
            self.notify("Script started")

    def action_export(self) -> None:
        path = self.editor.export(Path.cwd())
        self.notify(f"Exported {path.name}")

    def action_toggle(self, setting: str) -> None:
        settings = self.editor.toggle_setting(setting)
        state = "on" if getattr(settings, setting) else "off"
        self.notify(f"{setting.replace('_', ' ').capitalize()} {state}")
        if self.adapter:
            self.adapter.refresh()


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Edit Pine Script in the terminal.")
    parser.add_argument(
        "path",
        nargs="?",
        help="Script to open (.pine or .txt); the starter strategy when omitted",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Enable the strategy.entry id and plot title checks",
    )
    parser.add_argument(
        "--paren-check",
        choices=PAREN_CHECK_MODES,
        default=None,
        help="Parenthesis checking: per line (default) or balanced over the script",
    )
    parser.add_argument(
        "--no-highlight",
        action="store_true",
        help="Render the buffer without syntax colours",
    )
    return parser.parse_args(argv)


def _settings_from_args(args: argparse.Namespace) -> EditorSettings:
    settings = EditorSettings.from_env()
    if args.strict and not settings.strict:
        settings = settings.toggled("strict")
    if args.no_highlight and settings.syntax_highlighting:
        settings = settings.toggled("syntax_highlighting")
    if args.paren_check:
        settings = replace(settings, paren_check=args.paren_check)
    return settings


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset="quiet")
    editor = create_default_editor(settings=_settings_from_args(args))
    if args.path:
        editor.import_file(Path(args.path))
    PineEditorApp(editor).run()


if __name__ == "__main__":  # pragma: no cover - manual launch
    main()
