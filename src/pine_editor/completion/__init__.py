"""Autocomplete engine and selection session."""

from .engine import (
    MIN_TOKEN_LENGTH,
    CursorToken,
    apply_suggestion,
    current_token,
    suggest,
)
from .session import CLOSED, CompletionSession, CompletionState

__all__ = [
    "CLOSED",
    "CompletionSession",
    "CompletionState",
    "CursorToken",
    "MIN_TOKEN_LENGTH",
    "apply_suggestion",
    "current_token",
    "suggest",
]
