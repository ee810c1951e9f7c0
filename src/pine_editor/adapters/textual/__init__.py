"""Textual host for the Pine Script editor.

``app`` requires the optional Textual runtime; the controller does not.
"""

from .controller import FORWARDED_EVENTS, TextualEditorAdapter, TextualUIHooks

__all__ = ["FORWARDED_EVENTS", "TextualEditorAdapter", "TextualUIHooks"]
