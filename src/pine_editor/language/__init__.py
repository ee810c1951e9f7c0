"""Static Pine Script vocabulary shared by validator, completion and highlighter."""

from .keywords import (
    DEFAULT_DEPRECATIONS,
    DEFAULT_KEYWORDS,
    VERSION_MARKER,
    DeprecatedCall,
    KeywordDictionary,
)
from .templates import DEFAULT_SCRIPT, SNIPPETS

__all__ = [
    "DEFAULT_DEPRECATIONS",
    "DEFAULT_KEYWORDS",
    "DEFAULT_SCRIPT",
    "DeprecatedCall",
    "KeywordDictionary",
    "SNIPPETS",
    "VERSION_MARKER",
]
