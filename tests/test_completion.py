import pytest

from pine_editor.buffer import BufferValidationError
from pine_editor.completion import (
    CLOSED,
    CompletionSession,
    apply_suggestion,
    current_token,
    suggest,
)
from pine_editor.language import DEFAULT_KEYWORDS, KeywordDictionary


def make_session(*suggestions: str) -> CompletionSession:
    session = CompletionSession()
    session.update(suggestions)
    return session


def test_suggest_after_inp_in_dictionary_order() -> None:
    assert suggest("inp", 3) == (
        "input",
        "input.int",
        "input.float",
        "input.bool",
        "input.string",
    )


def test_suggest_is_sound_and_complete() -> None:
    prefix = "st"
    result = suggest(f"x = {prefix}", 4 + len(prefix))

    assert all(entry.lower().startswith(prefix) for entry in result)
    expected = [entry for entry in DEFAULT_KEYWORDS if entry.lower().startswith(prefix)]
    assert list(result) == expected


def test_suggest_is_case_insensitive() -> None:
    assert suggest("MATH.A", 6) == ("math.abs",)


def test_short_tokens_yield_nothing() -> None:
    assert suggest("", 0) == ()
    assert suggest("s", 1) == ()
    assert suggest("plot(close) ", 12) == ()


def test_min_length_only_raises_the_threshold() -> None:
    assert suggest("s", 1, min_length=1) == ()
    assert suggest("s", 1, min_length=0) == ()
    assert suggest("sm", 2, min_length=3) == ()
    assert "sma" in suggest("sma", 3, min_length=3)


def test_token_only_looks_left_of_caret() -> None:
    text = "plot(close)"

    assert current_token(text, 2).text == "pl"
    assert suggest(text, 2)[:3] == ("plot", "plotshape", "plotchar")


def test_token_spans_punctuation_up_to_whitespace() -> None:
    token = current_token("x = ta.rs", 9)

    assert token.text == "ta.rs"
    assert token.start == 4
    assert token.end == 9


def test_custom_and_empty_dictionaries() -> None:
    custom = KeywordDictionary(["alpha", "alphabet", "beta", "alpha"])

    assert suggest("al", 2, custom) == ("alpha", "alphabet")
    assert suggest("al", 2, KeywordDictionary([])) == ()


def test_caret_outside_buffer_is_rejected() -> None:
    with pytest.raises(BufferValidationError):
        suggest("abc", 5)


def test_apply_suggestion_replaces_exactly_the_token() -> None:
    text, caret = apply_suggestion("x = inp(14)", 7, "input.int")

    assert text == "x = input.int(14)"
    assert caret == 4 + len("input.int")


def test_session_opens_on_first_entry() -> None:
    session = make_session("input", "input.int")

    assert session.is_open
    assert session.selected_index == 0
    assert session.selected == "input"


def test_empty_update_closes() -> None:
    session = make_session("input")

    session.update([])

    assert session.state is CLOSED
    assert session.selected is None


def test_selection_wraps_both_ways() -> None:
    session = make_session("a", "b", "c")

    session.previous()
    assert session.selected_index == 2

    session.next()
    assert session.selected_index == 0

    for _ in range(4):
        session.next()
    assert session.selected == "b"


def test_move_on_closed_session_is_noop() -> None:
    session = CompletionSession()

    assert session.next() is CLOSED
    assert session.accept() is None


def test_accept_returns_choice_and_closes() -> None:
    session = make_session("sma", "stoch")
    session.next()

    assert session.accept() == "stoch"
    assert not session.is_open


def test_extended_dictionary_keeps_order_and_drops_duplicates() -> None:
    extended = DEFAULT_KEYWORDS.extended(["ta.sma", "plot"])

    assert extended.entries[-1] == "ta.sma"
    assert len(extended) == len(DEFAULT_KEYWORDS) + 1
    assert suggest("ta.s", 4, extended) == ("ta.sma",)
