"""Key bindings per editor mode.

Default bindings live in :mod:`pine_editor.keymaps.defaults`, which pulls in
the action handlers and is therefore imported on demand.
"""

from .models import (
    ActionRef,
    Binding,
    ResolutionMatch,
    key_token,
    normalize_modifiers,
    parse_token,
)
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats

__all__ = [
    "ActionRef",
    "Binding",
    "KeymapConflictError",
    "KeymapRegistry",
    "RegistryStats",
    "ResolutionMatch",
    "key_token",
    "normalize_modifiers",
    "parse_token",
]
