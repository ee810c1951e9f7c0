"""Destinations for diagnostics produced by a validation pass."""

from __future__ import annotations

from typing import Callable, List, Optional, Protocol, Tuple

from pine_editor.runtime import telemetry

from .models import Severity


class DiagnosticSink(Protocol):
    """Fire-and-forget receiver of ``(line, message, severity)`` triples."""

    def emit(self, line: int, message: str, severity: Severity) -> None:
        ...


class TelemetrySink:
    """Records each diagnostic as a ``compilation.diagnostic`` event."""

    def __init__(
        self, *, context: str = "Pine Script Compilation", logger_name: Optional[str] = None
    ) -> None:
        self.context = context
        self._logger_name = logger_name or "pine_editor.diagnostics"

    def emit(self, line: int, message: str, severity: Severity) -> None:
        telemetry.record_event(
            "compilation.diagnostic",
            level=severity.value,
            data={
                "context": self.context,
                "line": line,
                "message": f"Line {line}: {message}",
                "severity": severity.value,
            },
            logger_name=self._logger_name,
        )


class CollectingSink:
    """Keeps every emitted triple; hosts use it to feed a results panel."""

    def __init__(self) -> None:
        self.records: List[Tuple[int, str, Severity]] = []

    def emit(self, line: int, message: str, severity: Severity) -> None:
        self.records.append((line, message, severity))

    def clear(self) -> None:
        self.records.clear()


class CallbackSink:
    def __init__(self, callback: Callable[[int, str, Severity], None]) -> None:
        self._callback = callback

    def emit(self, line: int, message: str, severity: Severity) -> None:
        self._callback(line, message, severity)


__all__ = ["CallbackSink", "CollectingSink", "DiagnosticSink", "TelemetrySink"]
