"""Session-scoped storage for named scripts."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Dict, List, Protocol

PREVIEW_LENGTH = 50


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ScriptNotFoundError(KeyError):
    """Raised when a script id is not present in the repository."""

    def __init__(self, script_id: str) -> None:
        super().__init__(script_id)
        self.script_id = script_id

    def __str__(self) -> str:
        return f"Script '{self.script_id}' not found"


@dataclass(frozen=True, slots=True)
class SavedScript:
    id: str
    name: str
    content: str
    last_modified: datetime = field(default_factory=_now)
    is_running: bool = False
    has_errors: bool = False

    @property
    def preview(self) -> str:
        return f"{self.content[:PREVIEW_LENGTH]}..."


class ScriptRepository(Protocol):
    """CRUD surface the editor uses for saved scripts."""

    def list(self) -> List[SavedScript]:
        ...

    def get(self, script_id: str) -> SavedScript:
        ...

    def create(self, name: str, content: str, *, has_errors: bool = False) -> SavedScript:
        ...

    def delete(self, script_id: str) -> SavedScript:
        ...

    def toggle(self, script_id: str) -> SavedScript:
        ...

    def update_content(
        self, script_id: str, content: str, *, has_errors: bool = False
    ) -> SavedScript:
        ...


class InMemoryScriptRepository:
    """Keeps scripts for the lifetime of one editor session, in save order."""

    def __init__(self) -> None:
        self._scripts: Dict[str, SavedScript] = {}

    def __len__(self) -> int:
        return len(self._scripts)

    def list(self) -> List[SavedScript]:
        return list(self._scripts.values())

    def get(self, script_id: str) -> SavedScript:
        try:
            return self._scripts[script_id]
        except KeyError:
            raise ScriptNotFoundError(script_id) from None

    def create(self, name: str, content: str, *, has_errors: bool = False) -> SavedScript:
        if not name.strip():
            raise ValueError("script name cannot be empty")
        script = SavedScript(
            id=uuid.uuid4().hex[:12],
            name=name.strip(),
            content=content,
            has_errors=has_errors,
        )
        self._scripts[script.id] = script
        return script

    def delete(self, script_id: str) -> SavedScript:
        script = self.get(script_id)
        del self._scripts[script_id]
        return script

    def toggle(self, script_id: str) -> SavedScript:
        """Flip the running flag of a saved script."""

        current = self.get(script_id)
        updated = replace(current, is_running=not current.is_running, last_modified=_now())
        self._scripts[script_id] = updated
        return updated

    def update_content(
        self, script_id: str, content: str, *, has_errors: bool = False
    ) -> SavedScript:
        current = self.get(script_id)
        updated = replace(
            current, content=content, has_errors=has_errors, last_modified=_now()
        )
        self._scripts[script_id] = updated
        return updated


__all__ = [
    "InMemoryScriptRepository",
    "PREVIEW_LENGTH",
    "SavedScript",
    "ScriptNotFoundError",
    "ScriptRepository",
]
