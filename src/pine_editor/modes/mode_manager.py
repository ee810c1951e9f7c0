"""Mode manager: the active mode follows the suggestion list.

``edit`` is active while the list is closed and ``completion`` while it is
open. Actions ask for a mode through ``ModeResult.switch_to``; code that
changes the buffer outside a key press calls ``sync_with_completion``.
"""

from __future__ import annotations

from typing import Dict, Optional, Type

from pine_editor.keymaps import KeymapRegistry
from pine_editor.keymaps.defaults import load_default_keymaps
from pine_editor.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult

EDIT = "edit"
COMPLETION = "completion"

_LOGGER = "pine_editor.modes"


class ModeManager:
    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        load_defaults: bool = True,
    ) -> None:
        if keymap_registry is None:
            keymap_registry = KeymapRegistry(logger_name="pine_editor.keymaps")
            if load_defaults:
                load_default_keymaps(keymap_registry)
        self.context = context
        self.keymap_registry = keymap_registry
        self._modes: Dict[str, Mode] = {}
        self._current: Optional[Mode] = None
        context.extras.setdefault("keymap_registry", keymap_registry)
        context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        return self._current

    @property
    def mode_names(self) -> tuple[str, ...]:
        return tuple(self._modes)

    def register_mode(self, mode_cls: Type[Mode], /, **mode_kwargs: object) -> Mode:
        """Instantiate ``mode_cls``; the first registered mode becomes active."""

        mode = mode_cls(self.context, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._current is None:
            self._current = mode
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> bool:
        """Activate ``name``; returns False when it was already active."""

        target = self._modes.get(name)
        if target is None:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self._current
        if previous is target:
            return False
        if previous is not None:
            previous.on_exit(name)
        self._current = target
        target.on_enter(previous.name if previous is not None else None)
        telemetry.record_event(
            "mode.switch",
            level="debug",
            data={"from": previous.name if previous else None, "to": name},
            logger_name=_LOGGER,
        )
        return True

    def sync_with_completion(self) -> str:
        wanted = COMPLETION if self.context.completion.is_open else EDIT
        if wanted not in self._modes:
            wanted = EDIT
        self.switch_mode(wanted)
        return wanted

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self._current
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            f"mode::{mode.name}",
            component=True,
            metadata={"key": key.token, "mode": mode.name},
        ) as handle:
            result = mode.handle_key(key)
            handle.add_metadata("status", result.status)
        if result.switch_to:
            self.switch_mode(result.switch_to)
        elif not result.consumed:
            telemetry.record_event(
                "key.unhandled",
                level="debug",
                data={"key": key.token, "mode": mode.name},
                logger_name=_LOGGER,
            )
        return result


__all__ = ["COMPLETION", "EDIT", "ModeManager"]
