"""Shared types for editor modes: key input, results, context and the bus."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, DefaultDict, Dict, List, Optional, Tuple

from pine_editor.buffer import ScriptBuffer
from pine_editor.completion import CompletionSession
from pine_editor.keymaps import KeymapRegistry, key_token

Listener = Callable[[object], None]

_COMMAND_MODIFIERS = frozenset({"CTRL", "ALT", "META"})


@dataclass(frozen=True, slots=True)
class KeyInput:
    """One key press as the host reported it.

    ``key`` is the binding key (``ENTER``, ``r``), ``text`` the character it
    produces, if any.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def token(self) -> str:
        return key_token(self.key, self.modifiers)

    @property
    def is_text(self) -> bool:
        """True for printable characters typed without a command modifier."""

        if not self.text or not self.text.isprintable():
            return False
        return not _COMMAND_MODIFIERS.intersection(mod.upper() for mod in self.modifiers)


@dataclass(frozen=True, slots=True)
class ModeResult:
    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None

    @classmethod
    def miss(cls, key: KeyInput) -> "ModeResult":
        return cls(consumed=False, status="miss", message=key.token)


class ModeBus:
    """Synchronous publish/subscribe channel keyed by dotted event names."""

    def __init__(self) -> None:
        self._listeners: DefaultDict[str, List[Listener]] = defaultdict(list)

    def subscribe(self, event: str, listener: Listener) -> Callable[[], None]:
        """Add ``listener`` and return a callable that removes it again."""

        self._listeners[event].append(listener)

        def unsubscribe() -> None:
            listeners = self._listeners.get(event, [])
            if listener in listeners:
                listeners.remove(listener)

        return unsubscribe

    def emit(self, event: str, payload: object | None = None) -> int:
        listeners = tuple(self._listeners.get(event, ()))
        for listener in listeners:
            listener(payload)
        return len(listeners)


@dataclass(slots=True)
class ModeContext:
    """What modes and actions can reach: the buffer, suggestions and the bus.

    ``extras`` carries the collaborators wired in at start-up, notably
    ``editor``, ``keymap_registry`` and ``mode_manager``.
    """

    buffer: ScriptBuffer
    completion: CompletionSession
    bus: ModeBus
    extras: Dict[str, object] = field(default_factory=dict)

    def keymap_registry(self) -> KeymapRegistry:
        registry = self.extras.get("keymap_registry")
        if not isinstance(registry, KeymapRegistry):
            raise RuntimeError("ModeContext.extras missing 'keymap_registry'")
        return registry


class Mode:
    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(self, previous: Optional[str]) -> None:
        """Run after the manager activates this mode."""

    def on_exit(self, next_mode: Optional[str]) -> None:
        """Run before the manager leaves this mode."""

    def handle_key(self, key: KeyInput) -> ModeResult:  # pragma: no cover
        raise NotImplementedError


__all__ = ["KeyInput", "Listener", "Mode", "ModeBus", "ModeContext", "ModeResult"]
