"""Single-pass tokenizer feeding the highlight renderers."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import List, Optional, Pattern

from pine_editor.language import DEFAULT_KEYWORDS, KeywordDictionary


class TokenKind(str, Enum):
    COMMENT = "comment"
    STRING = "string"
    NUMBER = "number"
    KEYWORD = "keyword"
    TEXT = "text"


@dataclass(frozen=True, slots=True)
class Token:
    kind: TokenKind
    text: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)


_COMMENT = r"//[^\n]*"
_STRING = r"\"(?:[^\"\\\n]|\\.)*\"?|'(?:[^'\\\n]|\\.)*'?"
_NUMBER = r"\b\d+(?:\.\d+)?\b"


@lru_cache(maxsize=8)
def _scanner(keywords: tuple[str, ...]) -> Pattern[str]:
    groups = [
        f"(?P<comment>{_COMMENT})",
        f"(?P<string>{_STRING})",
        f"(?P<number>{_NUMBER})",
    ]
    if keywords:
        # longest first so ``input.int`` wins over ``input``
        ordered = sorted(keywords, key=len, reverse=True)
        alternation = "|".join(re.escape(keyword) for keyword in ordered)
        groups.append(rf"(?P<keyword>(?<!\w)(?:{alternation})(?!\w))")
    return re.compile("|".join(groups))


def tokenize(text: str, dictionary: Optional[KeywordDictionary] = None) -> List[Token]:
    """Split ``text`` into non-overlapping tokens that cover it exactly.

    Comments win over everything on the rest of their line, strings hide
    their contents from the number and keyword patterns, and anything not
    matched is emitted as ``TEXT``.
    """

    keywords = dictionary if dictionary is not None else DEFAULT_KEYWORDS
    scanner = _scanner(tuple(keywords))
    tokens: List[Token] = []
    position = 0
    for match in scanner.finditer(text):
        if match.start() > position:
            tokens.append(Token(TokenKind.TEXT, text[position : match.start()], position))
        kind = TokenKind(match.lastgroup)
        tokens.append(Token(kind, match.group(0), match.start()))
        position = match.end()
    if position < len(text):
        tokens.append(Token(TokenKind.TEXT, text[position:], position))
    return tokens


__all__ = ["Token", "TokenKind", "tokenize"]
