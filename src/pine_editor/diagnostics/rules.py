"""Heuristic lint rules.

Line rules see one source line at a time and only run on lines that are
neither blank nor ``//`` comments. Script rules see every line at once. None
of them tokenize: matches inside string literals are expected.
"""

from __future__ import annotations

import re
from typing import Callable, Iterable, Iterator, List, Sequence

from pine_editor.language import DEFAULT_DEPRECATIONS, VERSION_MARKER, DeprecatedCall

from .models import Diagnostic

LineRule = Callable[[int, str], Iterable[Diagnostic]]
ScriptRule = Callable[[Sequence[str]], Iterable[Diagnostic]]

MISSING_VERSION = "Missing @version declaration at the beginning"
UNMATCHED_PARENS = "Unmatched parentheses"
ENTRY_NEEDS_ID = "Strategy entry requires a string identifier"
PLOT_NEEDS_TITLE = "Plot function should include a title parameter"

_STRING_OR_COMMENT = re.compile(r"//.*$|\"(?:[^\"\\]|\\.)*\"?|'(?:[^'\\]|\\.)*'?")
_PLOT_CALL = re.compile(r"(?<![\w.])plot\s*\(")
_QUOTED = re.compile(r"[\"']")


def is_code_line(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith("//")


def check_version_header(lines: Sequence[str]) -> Iterator[Diagnostic]:
    """The marker must appear before the first code line.

    Leading comments such as a license banner may precede it. A script with
    no marker at all is flagged at line 1 unless it is blank.
    """

    seen_content = False
    for line in lines:
        if not line.strip():
            continue
        seen_content = True
        if VERSION_MARKER in line:
            return
        if is_code_line(line):
            break
    if seen_content:
        yield Diagnostic.error(1, MISSING_VERSION)


def check_line_parens(number: int, line: str) -> Iterator[Diagnostic]:
    if line.count("(") != line.count(")"):
        yield Diagnostic.error(number, UNMATCHED_PARENS)


def check_balanced_parens(lines: Sequence[str]) -> Iterator[Diagnostic]:
    """Whole-script bracket stack, ignoring string and comment contents.

    Reports one error per line holding an unexpected ``)`` or an ``(`` that
    is never closed.
    """

    open_lines: List[int] = []
    offending: set[int] = set()
    for number, line in enumerate(lines, start=1):
        if not is_code_line(line):
            continue
        for char in _STRING_OR_COMMENT.sub("", line):
            if char == "(":
                open_lines.append(number)
            elif char == ")":
                if open_lines:
                    open_lines.pop()
                else:
                    offending.add(number)
    offending.update(open_lines)
    for number in sorted(offending):
        yield Diagnostic.error(number, UNMATCHED_PARENS)


def deprecated_call_rule(deprecations: Iterable[DeprecatedCall]) -> LineRule:
    patterns = tuple(
        (call, re.compile(rf"(?<![\w.]){re.escape(call.name)}\s*\("))
        for call in deprecations
    )

    def check_deprecated_calls(number: int, line: str) -> Iterator[Diagnostic]:
        for call, pattern in patterns:
            if pattern.search(line):
                yield Diagnostic.warning(number, call.message)

    return check_deprecated_calls


check_deprecated_calls = deprecated_call_rule(DEFAULT_DEPRECATIONS)


def check_strategy_entry_id(number: int, line: str) -> Iterator[Diagnostic]:
    if "strategy.entry" in line and not _QUOTED.search(line):
        yield Diagnostic.error(number, ENTRY_NEEDS_ID)


def check_plot_title(number: int, line: str) -> Iterator[Diagnostic]:
    if _PLOT_CALL.search(line) and "title=" not in line:
        yield Diagnostic.warning(number, PLOT_NEEDS_TITLE)


STRICT_LINE_RULES: tuple[LineRule, ...] = (check_strategy_entry_id, check_plot_title)


__all__ = [
    "ENTRY_NEEDS_ID",
    "LineRule",
    "MISSING_VERSION",
    "PLOT_NEEDS_TITLE",
    "STRICT_LINE_RULES",
    "ScriptRule",
    "UNMATCHED_PARENS",
    "check_balanced_parens",
    "check_deprecated_calls",
    "check_line_parens",
    "check_plot_title",
    "check_strategy_entry_id",
    "check_version_header",
    "deprecated_call_rule",
    "is_code_line",
]
