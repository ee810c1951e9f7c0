"""Pine Script editor core: validation, autocomplete and highlighting."""

__all__ = [
    "actions",
    "adapters",
    "buffer",
    "completion",
    "diagnostics",
    "highlight",
    "keymaps",
    "language",
    "modes",
    "runtime",
    "session",
]

__version__ = "0.1.0"
