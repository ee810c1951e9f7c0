"""Syntax highlighting: tokenizer plus HTML and Rich renderers."""

from .render import HTML_STYLES, RICH_STYLES, render, render_html, render_rich
from .tokenizer import Token, TokenKind, tokenize

__all__ = [
    "HTML_STYLES",
    "RICH_STYLES",
    "Token",
    "TokenKind",
    "render",
    "render_html",
    "render_rich",
    "tokenize",
]
