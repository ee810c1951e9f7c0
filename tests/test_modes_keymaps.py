from __future__ import annotations

from typing import List

from pine_editor.diagnostics import CollectingSink
from pine_editor.runtime import EditorSettings
from pine_editor.session import BLOCKED_MESSAGE, CallbackBackend, PineEditor

HEADER = "//@version=5\n"


def make_editor(text: str = "", **kwargs) -> PineEditor:
    kwargs.setdefault("sink", CollectingSink())
    return PineEditor(text=text, **kwargs)


def test_typing_opens_completion_after_two_characters() -> None:
    editor = make_editor()

    editor.type_text("i")
    assert editor.mode == "edit"
    assert not editor.completion.is_open

    editor.type_text("np")
    assert editor.mode == "completion"
    assert editor.completion.suggestions[:3] == ("input", "input.int", "input.float")
    assert editor.completion.selected_index == 0


def test_arrow_keys_wrap_selection() -> None:
    editor = make_editor()
    editor.type_text("inp")

    editor.handle_key("UP")
    assert editor.completion.selected == "input.string"

    editor.handle_key("DOWN")
    assert editor.completion.selected == "input"


def test_accept_replaces_token_and_positions_caret() -> None:
    editor = make_editor()
    editor.type_text("x = inp")
    editor.handle_key("DOWN")

    result = editor.handle_key("TAB")

    assert result.status == "edited"
    assert editor.text == "x = input.int"
    assert editor.buffer.caret == len("x = input.int")
    assert editor.mode == "edit"
    assert not editor.completion.is_open


def test_enter_accepts_in_completion_but_breaks_line_in_edit() -> None:
    editor = make_editor()
    editor.type_text("plots")
    editor.handle_key("ENTER")
    assert editor.text == "plotshape"

    editor.handle_key("ENTER")
    assert editor.text == "plotshape\n"


def test_accept_keeps_text_after_caret() -> None:
    editor = make_editor("(close)")
    editor.set_caret(0)
    editor.type_text("sm")

    editor.handle_key("TAB")

    assert editor.text == "sma(close)"
    assert editor.buffer.caret == 3


def test_escape_dismisses_without_editing() -> None:
    editor = make_editor()
    editor.type_text("str")
    events: List[str] = []
    editor.bus.subscribe("completion.dismiss", lambda _payload: events.append("dismiss"))

    editor.handle_key("ESC")

    assert editor.text == "str"
    assert editor.mode == "edit"
    assert events == ["dismiss"]


def test_backspace_recomputes_suggestions() -> None:
    editor = make_editor()
    editor.type_text("inp")
    editor.handle_key("ESC")

    editor.handle_key("BACKSPACE")

    assert editor.text == "in"
    assert editor.mode == "completion"
    assert editor.completion.suggestions[0] == "indicator"


def test_typing_past_any_match_closes_list() -> None:
    editor = make_editor()
    editor.type_text("inpx")

    assert editor.mode == "edit"
    assert editor.completion.suggestions == ()


def test_caret_keys_close_completion() -> None:
    editor = make_editor()
    editor.type_text("ab\ncd")

    editor.handle_key("UP")
    assert editor.buffer.caret == 2

    editor.handle_key("HOME")
    assert editor.buffer.caret == 0

    editor.handle_key("END")
    editor.handle_key("RIGHT")
    assert editor.buffer.caret == 3

    editor.type_text("st")
    assert editor.mode == "completion"
    editor.handle_key("LEFT")
    assert editor.mode == "edit"
    assert not editor.completion.is_open


def test_tab_indents_in_edit_mode() -> None:
    editor = make_editor()

    editor.handle_key("TAB")

    assert editor.text == "    "


def test_unbound_keys_are_not_consumed() -> None:
    editor = make_editor()

    result = editor.handle_key("F5")

    assert result.consumed is False
    assert result.message == "F5"


def test_ctrl_letters_are_not_typed() -> None:
    editor = make_editor()

    result = editor.handle_key("x", text="x", modifiers=("CTRL",))

    assert result.consumed is False
    assert editor.text == ""


def test_run_is_blocked_by_errors() -> None:
    calls: List[str] = []
    editor = make_editor("plot(close", backend=CallbackBackend(calls.append))

    result = editor.handle_key("r", modifiers=("CTRL",))

    assert result.status == "run_blocked"
    assert result.message == BLOCKED_MESSAGE
    assert calls == []


def test_warnings_do_not_block_run() -> None:
    calls: List[str] = []
    script = HEADER + "x = security(close)"
    editor = make_editor(script, backend=CallbackBackend(calls.append))

    result = editor.handle_key("r", modifiers=("CTRL",))

    assert editor.summary.warnings == 1
    assert result.status == "run_ran"
    assert calls == [script]


def test_ctrl_l_formats_buffer() -> None:
    editor = make_editor("  a = 1  \n\tplot(a)")

    editor.handle_key("l", modifiers=("CTRL",))

    assert editor.text == "a = 1\nplot(a)"


def test_edits_revalidate_when_enabled() -> None:
    editor = make_editor(HEADER)
    assert editor.diagnostics == []

    editor.type_text("x = (1")

    assert [d.line for d in editor.diagnostics] == [2]


def test_auto_validate_off_skips_live_refresh() -> None:
    editor = make_editor(HEADER, settings=EditorSettings(auto_validate=False))

    editor.type_text("x = (1")

    assert editor.diagnostics == []
    assert len(editor.validate()) == 1


def test_autocomplete_off_never_opens() -> None:
    editor = make_editor(settings=EditorSettings(autocomplete=False))

    editor.type_text("inp")

    assert editor.mode == "edit"
    assert not editor.completion.is_open
