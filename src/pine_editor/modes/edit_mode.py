"""Edit mode: plain typing with the suggestion list closed."""

from __future__ import annotations

from typing import Optional

from pine_editor.actions.editing import insert_text
from pine_editor.keymaps import ResolutionMatch
from pine_editor.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult


class EditMode(Mode):
    name = "edit"
    # modes whose bindings apply when this mode has none for a key
    fallback_modes: tuple[str, ...] = ()

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._registry = context.keymap_registry()

    def handle_key(self, key: KeyInput) -> ModeResult:
        match = self._resolve(key)
        if match is not None:
            return self._execute_match(match)
        if key.is_text:
            return insert_text(self.context, key.text or "")
        return ModeResult.miss(key)

    def _resolve(self, key: KeyInput) -> Optional[ResolutionMatch]:
        for mode_name in (self.name, *self.fallback_modes):
            match = self._registry.resolve(mode_name, key.key, key.modifiers)
            if match is not None:
                return match
        return None

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)
