"""Keymap registry: actions by id and, per mode, one binding per key token."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional, Tuple

from pine_editor.runtime.telemetry import span

from .models import ActionRef, Binding, ResolutionMatch, key_token

SlotKey = Tuple[str, str]


@dataclass(frozen=True, slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """A binding claims a key token that another binding owns in the same mode."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]) -> None:
        self.binding = binding
        self.conflicts = tuple(conflicts)
        owners = ", ".join(existing.id for existing in self.conflicts)
        super().__init__(
            f"'{binding.token}' in mode '{binding.mode}' is already bound by {owners} "
            f"(while registering '{binding.id}')"
        )


class KeymapRegistry:
    def __init__(self, *, logger_name: str | None = None) -> None:
        self._logger_name = logger_name
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._slots: Dict[SlotKey, str] = {}

    def get_action(self, action_id: str) -> ActionRef:
        if action_id not in self._actions:
            raise KeyError(f"Action '{action_id}' is not registered")
        return self._actions[action_id]

    def get_binding(self, binding_id: str) -> Binding:
        if binding_id not in self._bindings:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return self._bindings[binding_id]

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if action.id in self._actions and not replace:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Index ``binding`` under its mode and key token.

        With ``replace`` a binding holding the same token or the same id is
        dropped first; without it either situation raises.
        """

        slot = (binding.mode, binding.token)
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "slot": f"{slot[0]}:{slot[1]}"},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action "
                    f"'{binding.action_id}'"
                )
            owner = self._slots.get(slot)
            if owner is not None and owner != binding.id and not replace:
                raise KeymapConflictError(binding, [self._bindings[owner]])
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            if owner is not None:
                self.unregister_binding(owner)
            self.unregister_binding(binding.id)
            self._bindings[binding.id] = binding
            self._slots[slot] = binding.id
        return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is not None:
            slot = (binding.mode, binding.token)
            if self._slots.get(slot) == binding_id:
                del self._slots[slot]
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        for binding in self._bindings.values():
            if mode is None or binding.mode == mode:
                yield binding

    def resolve(
        self, mode: str, key: str, modifiers: Iterable[str] = ()
    ) -> Optional[ResolutionMatch]:
        binding_id = self._slots.get((mode, key_token(key, modifiers)))
        if binding_id is None:
            return None
        binding = self._bindings[binding_id]
        return ResolutionMatch(binding=binding, action=self._actions[binding.action_id])

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted({mode for mode, _token in self._slots})),
        )


__all__ = ["KeymapConflictError", "KeymapRegistry", "RegistryStats"]
