"""Export and import of raw script text."""

from __future__ import annotations

from pathlib import Path
from typing import Union

PINE_SUFFIX = ".pine"
IMPORT_SUFFIXES: tuple[str, ...] = (".pine", ".txt")

PathLike = Union[str, Path]


class ScriptImportError(ValueError):
    """Raised for files that cannot be loaded as a script."""

    def __init__(self, message: str, *, path: PathLike) -> None:
        super().__init__(message)
        self.path = Path(path)


def export_filename(name: str) -> str:
    stem = name.strip() or "script"
    if stem.lower().endswith(PINE_SUFFIX):
        stem = stem[: -len(PINE_SUFFIX)]
    return f"{stem}{PINE_SUFFIX}"


def export_script(text: str, directory: PathLike, *, name: str) -> Path:
    """Write ``text`` unchanged to ``<directory>/<name>.pine``."""

    target = Path(directory) / export_filename(name)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(text, encoding="utf-8", newline="")
    return target


def import_script(path: PathLike) -> str:
    source = Path(path)
    if source.suffix.lower() not in IMPORT_SUFFIXES:
        raise ScriptImportError(
            f"Unsupported file type '{source.suffix or source.name}', "
            f"expected one of {', '.join(IMPORT_SUFFIXES)}",
            path=source,
        )
    try:
        with source.open(encoding="utf-8", newline="") as handle:
            return handle.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise ScriptImportError(f"Cannot read '{source}': {exc}", path=source) from exc


__all__ = [
    "IMPORT_SUFFIXES",
    "PINE_SUFFIX",
    "ScriptImportError",
    "export_filename",
    "export_script",
    "import_script",
]
