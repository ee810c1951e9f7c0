"""Diagnostic value types."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


class Severity(str, Enum):
    """Two-tier severity: errors block running, warnings are informational."""

    ERROR = "error"
    WARNING = "warning"

    @property
    def blocks_run(self) -> bool:
        return self is Severity.ERROR


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Single validation finding."""

    line: int
    message: str
    severity: Severity

    def __post_init__(self) -> None:
        if self.line < 1:
            raise ValueError("diagnostic lines are 1-indexed")
        if not isinstance(self.severity, Severity):
            object.__setattr__(self, "severity", Severity(self.severity))

    @classmethod
    def error(cls, line: int, message: str) -> "Diagnostic":
        return cls(line=line, message=message, severity=Severity.ERROR)

    @classmethod
    def warning(cls, line: int, message: str) -> "Diagnostic":
        return cls(line=line, message=message, severity=Severity.WARNING)

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    def label(self) -> str:
        return f"Line {self.line}: {self.message}"


@dataclass(frozen=True, slots=True)
class DiagnosticSummary:
    errors: int
    warnings: int

    @property
    def can_run(self) -> bool:
        return self.errors == 0

    @property
    def text(self) -> str:
        return f"{self.errors} errors, {self.warnings} warnings"


def summarize(diagnostics: Iterable[Diagnostic]) -> DiagnosticSummary:
    errors = warnings = 0
    for diagnostic in diagnostics:
        if diagnostic.severity.blocks_run:
            errors += 1
        else:
            warnings += 1
    return DiagnosticSummary(errors=errors, warnings=warnings)


__all__ = ["Diagnostic", "DiagnosticSummary", "Severity", "summarize"]
