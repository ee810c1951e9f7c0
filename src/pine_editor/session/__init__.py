"""Editor session: façade, saved-script storage, file exchange and run gating."""

from .editor import PineEditor, create_default_editor
from .files import (
    IMPORT_SUFFIXES,
    PINE_SUFFIX,
    ScriptImportError,
    export_filename,
    export_script,
    import_script,
)
from .repository import (
    InMemoryScriptRepository,
    SavedScript,
    ScriptNotFoundError,
    ScriptRepository,
)
from .runner import (
    BLOCKED_MESSAGE,
    CallbackBackend,
    ExecutionBackend,
    RunOutcome,
    run_if_clean,
)

__all__ = [
    "BLOCKED_MESSAGE",
    "CallbackBackend",
    "ExecutionBackend",
    "IMPORT_SUFFIXES",
    "InMemoryScriptRepository",
    "PINE_SUFFIX",
    "PineEditor",
    "RunOutcome",
    "SavedScript",
    "ScriptImportError",
    "ScriptNotFoundError",
    "ScriptRepository",
    "create_default_editor",
    "export_filename",
    "export_script",
    "import_script",
    "run_if_clean",
]
