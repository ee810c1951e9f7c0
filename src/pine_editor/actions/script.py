"""Whole-script actions that go through the owning editor."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from pine_editor.modes.base_mode import ModeContext, ModeResult

if TYPE_CHECKING:  # pragma: no cover
    from pine_editor.keymaps.models import ResolutionMatch
    from pine_editor.session.editor import PineEditor


def require_editor(context: ModeContext) -> "PineEditor":
    editor = context.extras.get("editor")
    if editor is None:
        raise RuntimeError("ModeContext.extras missing 'editor'")
    return cast("PineEditor", editor)


def run_script(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    outcome = require_editor(context).run()
    return ModeResult(consumed=True, status=f"run_{outcome.status}", message=outcome.message)


def format_script(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    require_editor(context).format_code()
    return ModeResult(consumed=True, switch_to="edit", status="formatted")


__all__ = ["format_script", "require_editor", "run_script"]
