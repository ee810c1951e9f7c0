"""Editor settings and ``PINE_EDITOR_*`` environment helpers."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Literal, Optional

ENV_PREFIX = "PINE_EDITOR_"

ParenCheck = Literal["line", "balanced"]
PAREN_CHECK_MODES: tuple[str, ...] = ("line", "balanced")

# one-character tokens never trigger suggestions
MIN_TOKEN_LENGTH = 2

_TRUTHY = {"1", "true", "yes", "on"}


def env(name: str, default: Optional[str] = None) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}", default)


def env_flag(name: str, default: bool) -> bool:
    raw = env(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def env_int(name: str, default: int) -> int:
    raw = env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class LogSettings:
    """How telemetry is written: level, destinations and format."""

    level: str = "INFO"
    console: bool = True
    color: bool = True
    json: bool = False
    log_file: str = ""
    buffered: bool = False
    buffer_size: int = 2048
    logger_name: str = "pine_editor"

    @classmethod
    def from_env(cls) -> "LogSettings":
        defaults = cls()
        return cls(
            level=(env("LOG_LEVEL") or defaults.level).upper(),
            console=not env_flag("DISABLE_CONSOLE", False),
            color=not env_flag("NO_COLOR", False),
            json=env_flag("LOG_JSON", defaults.json),
            log_file=env("LOG_FILE") or defaults.log_file,
            buffered=env_flag("LOG_BUFFERED", defaults.buffered),
            buffer_size=env_int("LOG_BUFFER_SIZE", defaults.buffer_size),
            logger_name=env("LOGGER") or defaults.logger_name,
        )


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """Toggles exposed by the editor's settings panel."""

    syntax_highlighting: bool = True
    autocomplete: bool = True
    word_wrap: bool = False
    auto_validate: bool = True
    line_numbers: bool = True
    strict: bool = False
    paren_check: ParenCheck = "line"
    min_token_length: int = 2
    export_name: str = "pine_script"

    def __post_init__(self) -> None:
        if self.paren_check not in PAREN_CHECK_MODES:
            raise ValueError(
                f"paren_check must be one of {PAREN_CHECK_MODES}, "
                f"got '{self.paren_check}'"
            )
        if self.min_token_length < MIN_TOKEN_LENGTH:
            raise ValueError(f"min_token_length must be at least {MIN_TOKEN_LENGTH}")
        if not self.export_name:
            raise ValueError("export_name cannot be empty")

    @classmethod
    def from_env(cls) -> "EditorSettings":
        defaults = cls()
        return cls(
            syntax_highlighting=env_flag(
                "SYNTAX_HIGHLIGHTING", defaults.syntax_highlighting
            ),
            autocomplete=env_flag("AUTOCOMPLETE", defaults.autocomplete),
            word_wrap=env_flag("WORD_WRAP", defaults.word_wrap),
            auto_validate=env_flag("AUTO_VALIDATE", defaults.auto_validate),
            line_numbers=env_flag("LINE_NUMBERS", defaults.line_numbers),
            strict=env_flag("STRICT", defaults.strict),
            paren_check=(env("PAREN_CHECK") or defaults.paren_check).lower(),  # type: ignore[arg-type]
            min_token_length=env_int("MIN_TOKEN_LENGTH", defaults.min_token_length),
            export_name=env("EXPORT_NAME") or defaults.export_name,
        )

    def toggled(self, name: str) -> "EditorSettings":
        """Return a copy with the boolean setting ``name`` flipped."""

        current = getattr(self, name)
        if not isinstance(current, bool):
            raise TypeError(f"Setting '{name}' is not a toggle")
        return replace(self, **{name: not current})


__all__ = [
    "ENV_PREFIX",
    "EditorSettings",
    "LogSettings",
    "MIN_TOKEN_LENGTH",
    "PAREN_CHECK_MODES",
    "ParenCheck",
    "env",
    "env_flag",
    "env_int",
]
