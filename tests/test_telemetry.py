from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Tuple

import pytest

from pine_editor.runtime import LogSettings
from pine_editor.runtime import telemetry


class FakeConfig:
    def __init__(self) -> None:
        self.calls: List[Tuple[str, Any]] = []

    def __getattr__(self, name: str) -> Any:
        if not name.startswith("with_"):
            raise AttributeError(name)
        return lambda value: self.calls.append((name, value))


class FakeLogger:
    def __init__(self, name: str) -> None:
        self.name = name
        self.records: List[Tuple[str, str, Any]] = []
        self.context: Dict[str, str] = {}
        self.components: List[str] = []

    def info_with(self, message: str, pairs: Any) -> None:
        self.records.append(("info", message, pairs))

    def error_with(self, message: str, pairs: Any) -> None:
        self.records.append(("error", message, pairs))

    def debug(self, message: str) -> None:
        self.records.append(("debug", message, None))

    def add_context(self, key: str, value: str) -> None:
        self.context[key] = value

    def remove_context(self, key: str) -> None:
        self.context.pop(key, None)

    @contextmanager
    def track_component(self, name: str) -> Iterator[None]:
        self.components.append(name)
        yield

    @contextmanager
    def profile(self, name: str) -> Iterator[None]:
        yield


class FakeTelelog:
    Config = FakeConfig

    class Logger:
        @staticmethod
        def with_config(name: str, config: Any) -> FakeLogger:
            return FakeLogger(name)


@pytest.fixture()
def fake_tl(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(telemetry, "tl", FakeTelelog)
    monkeypatch.setattr(telemetry, "_LOGGERS", {})
    monkeypatch.setattr(telemetry, "_config", None)
    monkeypatch.setattr(telemetry, "_settings", LogSettings())
    telemetry.configure(settings=LogSettings())


def test_build_config_translates_settings(fake_tl: None) -> None:
    config = telemetry.build_config(
        LogSettings(level="debug", console=False, log_file="x.log", buffered=True)
    )

    assert ("with_min_level", "DEBUG") in config.calls
    assert ("with_console_output", False) in config.calls
    assert ("with_file_output", "x.log") in config.calls
    assert ("with_buffer_size", 2048) in config.calls
    assert ("with_profiling", True) in config.calls
    assert not any(name == "with_colored_output" for name, _ in config.calls)


def test_preset_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PINE_EDITOR_LOG_FILE", raising=False)
    assert telemetry.preset_settings("QUIET").console is False

    monkeypatch.setenv("PINE_EDITOR_LOG_FILE", "quiet.log")
    assert telemetry.preset_settings("quiet").log_file == "quiet.log"

    with pytest.raises(ValueError):
        telemetry.preset_settings("performance")


def test_configure_rejects_multiple_sources() -> None:
    with pytest.raises(ValueError):
        telemetry.configure(settings=LogSettings(), preset="quiet")


def test_loggers_are_cached_per_name(fake_tl: None) -> None:
    first = telemetry.get_logger("pine_editor.tests")

    assert telemetry.get_logger("pine_editor.tests") is first
    assert telemetry.get_logger().name == "pine_editor"


def test_record_event_uses_structured_method(fake_tl: None) -> None:
    telemetry.record_event("script.saved", data={"id": 7}, logger_name="t")

    level, message, pairs = telemetry.get_logger("t").records[-1]
    assert (level, message) == ("info", "event::script.saved")
    assert pairs == [("event", "script.saved"), ("id", "7")]


def test_record_event_falls_back_to_plain_method(fake_tl: None) -> None:
    telemetry.record_event("mode.switch", level="debug", logger_name="t")

    level, message, _ = telemetry.get_logger("t").records[-1]
    assert level == "debug"
    assert message.startswith("event::mode.switch")


def test_unknown_level_is_rejected(fake_tl: None) -> None:
    with pytest.raises(ValueError):
        telemetry.record_event("x", level="trace", logger_name="t")


def test_span_scopes_context_and_reports_failures(fake_tl: None) -> None:
    logger = telemetry.get_logger("t")

    with pytest.raises(RuntimeError):
        with telemetry.span(
            "validator::validate",
            logger_name="t",
            component=True,
            metadata={"lines": 3},
        ) as handle:
            assert logger.context == {"lines": "3"}
            handle.add_metadata("errors", 1)
            raise RuntimeError("boom")

    assert logger.context == {}
    assert logger.components == ["validator::validate"]
    level, message, pairs = logger.records[-1]
    assert (level, message) == ("error", "span::fail")
    assert ("errors", "1") in pairs
    assert ("reason", "boom") in pairs
