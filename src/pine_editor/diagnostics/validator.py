"""Line-oriented script validator."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from pine_editor.language import DEFAULT_DEPRECATIONS, DeprecatedCall
from pine_editor.runtime import telemetry
from pine_editor.runtime.config import PAREN_CHECK_MODES, EditorSettings, ParenCheck

from .models import Diagnostic, summarize
from .rules import (
    STRICT_LINE_RULES,
    LineRule,
    ScriptRule,
    check_balanced_parens,
    check_line_parens,
    check_version_header,
    deprecated_call_rule,
    is_code_line,
)
from .sink import DiagnosticSink, TelemetrySink


class ScriptValidator:
    """Runs the lint rules over a script and forwards findings to a sink.

    Validation never fails on string input: findings are returned as
    ``Diagnostic`` values ordered by line. Rules that share a line keep
    their registration order (version, parentheses, deprecations, strict).
    """

    def __init__(
        self,
        *,
        sink: Optional[DiagnosticSink] = None,
        strict: bool = False,
        paren_check: ParenCheck = "line",
        deprecations: Iterable[DeprecatedCall] = DEFAULT_DEPRECATIONS,
        extra_line_rules: Sequence[LineRule] = (),
    ) -> None:
        if paren_check not in PAREN_CHECK_MODES:
            raise ValueError(f"Unknown paren_check mode '{paren_check}'")
        self.sink = sink if sink is not None else TelemetrySink()
        self.strict = strict
        self.paren_check = paren_check
        self._script_rules: List[ScriptRule] = [check_version_header]
        self._line_rules: List[LineRule] = []
        if paren_check == "balanced":
            self._script_rules.append(check_balanced_parens)
        else:
            self._line_rules.append(check_line_parens)
        self._line_rules.append(deprecated_call_rule(deprecations))
        if strict:
            self._line_rules.extend(STRICT_LINE_RULES)
        self._line_rules.extend(extra_line_rules)

    @classmethod
    def from_settings(
        cls, settings: EditorSettings, *, sink: Optional[DiagnosticSink] = None
    ) -> "ScriptValidator":
        return cls(sink=sink, strict=settings.strict, paren_check=settings.paren_check)

    def validate(self, script_text: str) -> List[Diagnostic]:
        if not isinstance(script_text, str):
            raise TypeError(
                f"script text must be str, not {type(script_text).__name__}"
            )
        lines = script_text.split("\n")
        with telemetry.span(
            "validator::validate",
            logger_name="pine_editor.diagnostics",
            component="validator",
            metadata={"lines": len(lines), "paren_check": self.paren_check},
        ) as handle:
            found: List[Diagnostic] = []
            for script_rule in self._script_rules:
                found.extend(script_rule(lines))
            for number, line in enumerate(lines, start=1):
                if not is_code_line(line):
                    continue
                for line_rule in self._line_rules:
                    found.extend(line_rule(number, line))
            diagnostics = sorted(found, key=lambda diagnostic: diagnostic.line)

            summary = summarize(diagnostics)
            handle.add_metadata("errors", summary.errors)
            handle.add_metadata("warnings", summary.warnings)

        for diagnostic in diagnostics:
            self.sink.emit(diagnostic.line, diagnostic.message, diagnostic.severity)
        return diagnostics


def validate(
    script_text: str, *, sink: Optional[DiagnosticSink] = None, strict: bool = False
) -> List[Diagnostic]:
    """Validate with the default rule set."""

    return ScriptValidator(sink=sink, strict=strict).validate(script_text)


__all__ = ["ScriptValidator", "validate"]
