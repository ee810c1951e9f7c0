"""Telemetry for the Pine editor, built on telelog.

Every service logs through this module rather than creating telelog
loggers itself, so one ``configure`` call redirects all output. Loggers are
cached per name and dropped whenever the configuration changes.

``configure(...)`` -- switch to explicit ``LogSettings``, a named preset or a raw ``tl.Config``
``get_logger(name)`` -- cached logger for a dotted service name
``record_event(name, ...)`` -- one structured ``event::<name>`` line
``span(name, ...)`` -- profiled block, optionally tracked as a component
"""

from __future__ import annotations

from contextlib import ExitStack, contextmanager
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Iterator, Mapping, MutableMapping, Optional, Tuple, cast

import telelog  # type: ignore[import]

from .config import LogSettings, env

tl = cast(Any, telelog)

PRESETS: Mapping[str, LogSettings] = MappingProxyType(
    {
        "development": LogSettings(level="DEBUG"),
        "production": LogSettings(
            console=False, log_file="pine_editor.log", buffered=True
        ),
        # hosts that own the terminal (the Textual app) must not print
        "quiet": LogSettings(level="WARNING", console=False),
    }
)

_LOGGERS: MutableMapping[str, Any] = {}
_config: Optional[Any] = None
_settings: LogSettings = LogSettings()


def build_config(settings: LogSettings) -> Any:
    """Translate ``LogSettings`` into a ``tl.Config`` with profiling on."""

    config = tl.Config()
    config.with_min_level(settings.level.upper())
    config.with_console_output(settings.console)
    if settings.console:
        config.with_colored_output(settings.color)
    config.with_json_format(settings.json)
    if settings.log_file:
        config.with_file_output(settings.log_file)
    if settings.buffered:
        config.with_buffering(True)
        config.with_buffer_size(settings.buffer_size)
    config.with_profiling(True)
    return config


def preset_settings(name: str) -> LogSettings:
    try:
        settings = PRESETS[name.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown preset '{name}', expected one of {sorted(PRESETS)}"
        ) from None
    log_file = env("LOG_FILE")
    return replace(settings, log_file=log_file) if log_file else settings


def configure(
    *,
    settings: Optional[LogSettings] = None,
    preset: Optional[str] = None,
    config: Optional[Any] = None,
) -> None:
    """Replace the active configuration and forget cached loggers.

    Parameters
    ----------
    settings:
        Explicit ``LogSettings``.
    preset:
        ``"development"``, ``"production"`` or ``"quiet"``.
    config:
        A ready ``tl.Config``; profiling is forced on.

    At most one may be given. With none, settings come from the
    ``PINE_EDITOR_*`` environment.
    """

    global _config, _settings
    if sum(option is not None for option in (settings, preset, config)) > 1:
        raise ValueError("Provide only one of `settings`, `preset` or `config`.")

    if config is not None:
        config.with_profiling(True)
        _config = config
    else:
        if preset is not None:
            settings = preset_settings(preset)
        _settings = settings or LogSettings.from_env()
        _config = build_config(_settings)
    _LOGGERS.clear()


def get_logger(name: Optional[str] = None) -> Any:
    logger_name = name or _settings.logger_name
    logger = _LOGGERS.get(logger_name)
    if logger is None:
        if _config is None:
            configure()
        logger = _LOGGERS[logger_name] = tl.Logger.with_config(logger_name, _config)
    return logger


def _text(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (dict, list, tuple, set)):
        return repr(value)
    return str(value)


def _write(logger: Any, level: Any, message: str, payload: Dict[str, Any]) -> None:
    """Log through ``<level>_with`` when telelog offers it, else inline the data."""

    level_name = str(level).lower()
    structured = getattr(logger, f"{level_name}_with", None)
    if structured is not None:
        structured(message, [(str(key), _text(value)) for key, value in payload.items()])
        return
    plain = getattr(logger, level_name, None)
    if plain is None:
        raise ValueError(f"Unsupported log level '{level}'.")
    plain(f"{message} {payload}")


def record_event(
    name: str,
    *,
    level: str | Any = "info",
    data: Optional[Dict[str, Any]] = None,
    logger_name: Optional[str] = None,
) -> None:
    _write(get_logger(logger_name), level, f"event::{name}", {"event": name, **(data or {})})


@dataclass
class SpanHandle:
    """Yielded by ``span``; metadata added here rides on the failure record."""

    logger: Any
    span_name: str
    component_name: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = _text(value)

    def fail(self, reason: str) -> None:
        payload: Dict[str, Any] = {"span": self.span_name, **self.metadata}
        if self.component_name:
            payload["component"] = self.component_name
        payload["reason"] = reason
        _write(self.logger, "error", "span::fail", payload)


def _component_name(name: str, component: Optional[str | bool]) -> Optional[str]:
    if component is True:
        return name
    if isinstance(component, str):
        return component
    return None


@contextmanager
def span(
    name: str,
    *,
    logger_name: Optional[str] = None,
    component: Optional[str | bool] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Iterator[SpanHandle]:
    """Profile a block under ``name``.

    ``component=True`` tracks the block as a component named ``name``; a
    string names the component explicitly. ``metadata`` is attached as
    logger context while the block runs. An exception escaping the block is
    logged as ``span::fail`` and re-raised.
    """

    logger = get_logger(logger_name)
    context: Tuple[Tuple[str, str], ...] = tuple(
        (key, _text(value)) for key, value in (metadata or {}).items()
    )
    handle = SpanHandle(
        logger=logger,
        span_name=name,
        component_name=_component_name(name, component),
        metadata=dict(context),
    )
    for key, value in context:
        logger.add_context(key, value)
    try:
        with ExitStack() as stack:
            if handle.component_name:
                stack.enter_context(logger.track_component(handle.component_name))
            stack.enter_context(logger.profile(name))
            try:
                yield handle
            except Exception as exc:
                handle.fail(str(exc))
                raise
    finally:
        for key, _value in context:
            logger.remove_context(key)


__all__ = [
    "PRESETS",
    "SpanHandle",
    "build_config",
    "configure",
    "get_logger",
    "preset_settings",
    "record_event",
    "span",
]
