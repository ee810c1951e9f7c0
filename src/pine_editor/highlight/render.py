"""Renderers consuming the token stream once."""

from __future__ import annotations

import html
from types import MappingProxyType
from typing import Iterable, Mapping, Optional

from rich.text import Text

from pine_editor.language import KeywordDictionary

from .tokenizer import Token, TokenKind, tokenize

HTML_STYLES: Mapping[TokenKind, str] = MappingProxyType(
    {
        TokenKind.COMMENT: "color: #6a9955; font-style: italic;",
        TokenKind.STRING: "color: #ce9178;",
        TokenKind.NUMBER: "color: #b5cea8;",
        TokenKind.KEYWORD: "color: #569cd6; font-weight: bold;",
    }
)

RICH_STYLES: Mapping[TokenKind, str] = MappingProxyType(
    {
        TokenKind.COMMENT: "italic #6a9955",
        TokenKind.STRING: "#ce9178",
        TokenKind.NUMBER: "#b5cea8",
        TokenKind.KEYWORD: "bold #569cd6",
    }
)


def render_html(tokens: Iterable[Token]) -> str:
    parts = []
    for token in tokens:
        escaped = html.escape(token.text, quote=False)
        style = HTML_STYLES.get(token.kind)
        if style is None:
            parts.append(escaped)
        else:
            parts.append(f'<span style="{style}">{escaped}</span>')
    return "".join(parts)


def render_rich(tokens: Iterable[Token]) -> Text:
    text = Text()
    for token in tokens:
        text.append(token.text, style=RICH_STYLES.get(token.kind))
    return text


def render(
    script_text: str,
    dictionary: Optional[KeywordDictionary] = None,
    *,
    enabled: bool = True,
) -> str:
    """Markup for ``script_text``; plain escaped text when highlighting is off."""

    if not enabled:
        return html.escape(script_text, quote=False)
    return render_html(tokenize(script_text, dictionary))


__all__ = ["HTML_STYLES", "RICH_STYLES", "render", "render_html", "render_rich"]
