"""Host adapters for the Pine Script editor."""

__all__ = ["textual"]
