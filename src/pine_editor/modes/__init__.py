"""Editor modes and key dispatch.

``ModeManager`` lives in :mod:`pine_editor.modes.mode_manager`.
"""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .edit_mode import EditMode
from .completion_mode import CompletionMode

__all__ = [
    "CompletionMode",
    "EditMode",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
]
