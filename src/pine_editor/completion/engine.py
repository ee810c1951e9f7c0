"""Prefix-matching autocomplete over the keyword dictionary."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from pine_editor.buffer import ensure_offset
from pine_editor.language import DEFAULT_KEYWORDS, KeywordDictionary
from pine_editor.runtime.config import MIN_TOKEN_LENGTH

_TRAILING_WORD = re.compile(r"\S*\Z")


@dataclass(frozen=True, slots=True)
class CursorToken:
    """Partial word ending at the caret."""

    text: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)


def current_token(buffer: str, caret_offset: int) -> CursorToken:
    """Return the whitespace-delimited fragment immediately left of the caret.

    The fragment is empty when the caret follows whitespace or sits at the
    start of the buffer.
    """

    ensure_offset(buffer, caret_offset)
    before = buffer[:caret_offset]
    match = _TRAILING_WORD.search(before)
    text = match.group(0) if match else ""
    return CursorToken(text=text, start=caret_offset - len(text))


def suggest(
    buffer: str,
    caret_offset: int,
    dictionary: Optional[KeywordDictionary] = None,
    *,
    min_length: int = MIN_TOKEN_LENGTH,
) -> tuple[str, ...]:
    """Dictionary entries extending the token at the caret, in dictionary order.

    ``min_length`` can raise the threshold but never lowers it below
    ``MIN_TOKEN_LENGTH``.
    """

    token = current_token(buffer, caret_offset)
    if len(token.text) < max(min_length, MIN_TOKEN_LENGTH):
        return ()
    keywords = dictionary if dictionary is not None else DEFAULT_KEYWORDS
    return keywords.starting_with(token.text)


def apply_suggestion(buffer: str, caret_offset: int, suggestion: str) -> tuple[str, int]:
    """Replace the caret token with ``suggestion``; return ``(text, caret)``."""

    token = current_token(buffer, caret_offset)
    text = buffer[: token.start] + suggestion + buffer[caret_offset:]
    return text, token.start + len(suggestion)


__all__ = [
    "CursorToken",
    "MIN_TOKEN_LENGTH",
    "apply_suggestion",
    "current_token",
    "suggest",
]
