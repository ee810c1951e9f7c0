"""Keyword dictionary and renamed built-ins for Pine Script."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Sequence

VERSION_MARKER = "@version"


class KeywordDictionary(Sequence[str]):
    """Immutable, ordered collection of known identifiers.

    Order is significant: suggestions are reported in dictionary order.
    Duplicates are dropped, keeping the first occurrence.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Iterable[str]) -> None:
        cleaned = (entry.strip() for entry in entries)
        self._entries: tuple[str, ...] = tuple(
            dict.fromkeys(entry for entry in cleaned if entry)
        )

    def __getitem__(self, index):  # type: ignore[override]
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __contains__(self, item: object) -> bool:
        return item in self._entries

    def __repr__(self) -> str:
        return f"KeywordDictionary({len(self._entries)} entries)"

    @property
    def entries(self) -> tuple[str, ...]:
        return self._entries

    def starting_with(self, prefix: str) -> tuple[str, ...]:
        """Entries whose lowercase form starts with ``prefix`` (case-insensitive)."""

        needle = prefix.lower()
        return tuple(entry for entry in self._entries if entry.lower().startswith(needle))

    def extended(self, extra: Iterable[str]) -> "KeywordDictionary":
        return KeywordDictionary((*self._entries, *extra))


DEFAULT_KEYWORDS = KeywordDictionary(
    (
        "strategy", "study", "indicator", "var", "varip", "if", "else", "for", "while",
        "true", "false", "na", "close", "open", "high", "low", "volume", "time",
        "sma", "ema", "rsi", "macd", "bollinger", "stoch", "atr", "adx",
        "plot", "plotshape", "plotchar", "hline", "fill", "bgcolor",
        "strategy.entry", "strategy.exit", "strategy.close", "strategy.cancel",
        "input", "input.int", "input.float", "input.bool", "input.string",
        "math.abs", "math.max", "math.min", "math.round", "math.floor", "math.ceil",
    )
)


@dataclass(frozen=True, slots=True)
class DeprecatedCall:
    """A built-in that moved into a namespace (``security`` -> ``request.security``)."""

    name: str
    replacement: str

    def __post_init__(self) -> None:
        if not self.name or not self.replacement:
            raise ValueError("deprecated call needs a name and a replacement")
        if "." not in self.replacement:
            raise ValueError("replacement must be a namespaced call")

    @property
    def message(self) -> str:
        return f"{self.name}() is deprecated, use {self.replacement}() instead"


DEFAULT_DEPRECATIONS: tuple[DeprecatedCall, ...] = (
    DeprecatedCall("security", "request.security"),
)


__all__ = [
    "DEFAULT_DEPRECATIONS",
    "DEFAULT_KEYWORDS",
    "DeprecatedCall",
    "KeywordDictionary",
    "VERSION_MARKER",
]
