"""Run gating in front of the external execution backend."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Literal, Optional, Protocol, Sequence

from pine_editor.diagnostics import Diagnostic, DiagnosticSummary, summarize
from pine_editor.runtime import telemetry

BLOCKED_MESSAGE = "Please fix all errors before running the script."

RunStatus = Literal["ran", "blocked", "failed"]


class ExecutionBackend(Protocol):
    """Service that compiles or runs a script; its contract is external."""

    def run(self, script: str) -> Any:
        ...


class CallbackBackend:
    """Adapts a plain callable (a host's ``on_run`` hook) to ``ExecutionBackend``."""

    def __init__(self, callback: Callable[[str], Any]) -> None:
        self._callback = callback

    def run(self, script: str) -> Any:
        return self._callback(script)


@dataclass(frozen=True, slots=True)
class RunOutcome:
    status: RunStatus
    summary: DiagnosticSummary
    message: Optional[str] = None
    result: Any = None

    @property
    def ran(self) -> bool:
        return self.status == "ran"


def run_if_clean(
    script: str,
    diagnostics: Sequence[Diagnostic],
    backend: Optional[ExecutionBackend],
) -> RunOutcome:
    """Hand ``script`` to ``backend`` only when ``diagnostics`` hold no errors.

    Warnings never block. Backend exceptions are reported as a ``failed``
    outcome rather than propagated, matching the notification-only failure
    surface of the editor.
    """

    summary = summarize(diagnostics)
    if not summary.can_run:
        return RunOutcome(status="blocked", summary=summary, message=BLOCKED_MESSAGE)
    if backend is None:
        return RunOutcome(status="ran", summary=summary, message="no backend configured")

    with telemetry.span(
        "runner::run",
        component="runner",
        metadata={"warnings": summary.warnings, "length": len(script)},
    ) as handle:
        try:
            result = backend.run(script)
        except Exception as exc:
            handle.add_metadata("error", exc)
            telemetry.record_event(
                "run.failed", level="error", data={"error": str(exc)}
            )
            return RunOutcome(status="failed", summary=summary, message=str(exc))
    return RunOutcome(status="ran", summary=summary, result=result)


__all__ = [
    "BLOCKED_MESSAGE",
    "CallbackBackend",
    "ExecutionBackend",
    "RunOutcome",
    "run_if_clean",
]
