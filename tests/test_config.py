import pytest

from pine_editor.runtime import EditorSettings
from pine_editor.runtime.config import env_flag, env_int


def test_defaults_match_settings_panel() -> None:
    settings = EditorSettings()

    assert settings.syntax_highlighting is True
    assert settings.autocomplete is True
    assert settings.word_wrap is False
    assert settings.auto_validate is True
    assert settings.line_numbers is True
    assert settings.strict is False
    assert settings.paren_check == "line"


def test_from_env_reads_prefixed_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PINE_EDITOR_AUTOCOMPLETE", "off")
    monkeypatch.setenv("PINE_EDITOR_STRICT", "yes")
    monkeypatch.setenv("PINE_EDITOR_PAREN_CHECK", "Balanced")
    monkeypatch.setenv("PINE_EDITOR_MIN_TOKEN_LENGTH", "3")
    monkeypatch.setenv("PINE_EDITOR_EXPORT_NAME", "mine")

    settings = EditorSettings.from_env()

    assert settings.autocomplete is False
    assert settings.strict is True
    assert settings.paren_check == "balanced"
    assert settings.min_token_length == 3
    assert settings.export_name == "mine"


def test_env_helpers_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PINE_EDITOR_MIN_TOKEN_LENGTH", "many")
    monkeypatch.delenv("PINE_EDITOR_WORD_WRAP", raising=False)

    assert env_int("MIN_TOKEN_LENGTH", 2) == 2
    assert env_flag("WORD_WRAP", True) is True


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(ValueError):
        EditorSettings(paren_check="nested")  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        EditorSettings(min_token_length=0)
    with pytest.raises(ValueError):
        EditorSettings(min_token_length=1)


def test_toggled_flips_only_booleans() -> None:
    settings = EditorSettings()

    assert settings.toggled("word_wrap").word_wrap is True
    assert settings.word_wrap is False
    with pytest.raises(TypeError):
        settings.toggled("paren_check")
