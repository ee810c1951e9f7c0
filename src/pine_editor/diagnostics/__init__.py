"""Script validation: rules, diagnostics and sinks."""

from .models import Diagnostic, DiagnosticSummary, Severity, summarize
from .rules import (
    ENTRY_NEEDS_ID,
    MISSING_VERSION,
    PLOT_NEEDS_TITLE,
    UNMATCHED_PARENS,
)
from .sink import CallbackSink, CollectingSink, DiagnosticSink, TelemetrySink
from .validator import ScriptValidator, validate

__all__ = [
    "CallbackSink",
    "CollectingSink",
    "Diagnostic",
    "DiagnosticSink",
    "DiagnosticSummary",
    "ENTRY_NEEDS_ID",
    "MISSING_VERSION",
    "PLOT_NEEDS_TITLE",
    "ScriptValidator",
    "Severity",
    "TelemetrySink",
    "UNMATCHED_PARENS",
    "summarize",
    "validate",
]
