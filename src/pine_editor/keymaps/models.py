"""Key binding value types.

A key press is identified by its token: modifiers in canonical order joined
to the key with ``+`` (``CTRL+r``, ``ENTER``). Named keys are upper case,
printable characters keep their case.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable

if TYPE_CHECKING:  # pragma: no cover
    from pine_editor.modes.base_mode import ModeContext, ModeResult

MODIFIER_ORDER = ("CTRL", "ALT", "META", "SHIFT")


def normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    present = {modifier.strip().upper() for modifier in modifiers if modifier.strip()}
    known = [modifier for modifier in MODIFIER_ORDER if modifier in present]
    return (*known, *sorted(present.difference(MODIFIER_ORDER)))


def key_token(key: str, modifiers: Iterable[str] = ()) -> str:
    return "+".join((*normalize_modifiers(modifiers), key))


def parse_token(token: str) -> tuple[str, tuple[str, ...]]:
    """Split ``CTRL+r`` into ``("r", ("CTRL",))``."""

    *modifiers, key = token.split("+")
    if not key:
        raise ValueError(f"Key token '{token}' has no key")
    return key, normalize_modifiers(modifiers)


ActionHandler = Callable[["ModeContext", "ResolutionMatch"], "ModeResult | None"]


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named editor verb a binding can trigger."""

    id: str
    handler: ActionHandler
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("action id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for '{self.id}' must be callable")

    def __call__(self, context: ModeContext, match: ResolutionMatch) -> ModeResult | None:
        return self.handler(context, match)


@dataclass(frozen=True, slots=True)
class Binding:
    """One key token in one mode mapped to an action id."""

    id: str
    mode: str
    key: str
    action_id: str
    modifiers: tuple[str, ...] = ()
    description: str = ""

    def __post_init__(self) -> None:
        for label in ("id", "mode", "key", "action_id"):
            if not getattr(self, label):
                raise ValueError(f"binding {label} cannot be empty")
        object.__setattr__(self, "modifiers", normalize_modifiers(self.modifiers))

    @classmethod
    def from_token(
        cls, binding_id: str, mode: str, token: str, action_id: str, description: str = ""
    ) -> "Binding":
        key, modifiers = parse_token(token)
        return cls(
            id=binding_id,
            mode=mode,
            key=key,
            action_id=action_id,
            modifiers=modifiers,
            description=description,
        )

    @property
    def token(self) -> str:
        return key_token(self.key, self.modifiers)


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


__all__ = [
    "ActionHandler",
    "ActionRef",
    "Binding",
    "MODIFIER_ORDER",
    "ResolutionMatch",
    "key_token",
    "normalize_modifiers",
    "parse_token",
]
