"""Undo/redo over the cursor history."""

from __future__ import annotations

from heks.keymaps import ResolutionMatch
from heks.modes.base_mode import ModeContext, ModeResult


def undo(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    stack = context.session.stack
    if not stack.can_undo():
        return ModeResult(consumed=True, status="history_oldest")
    context.session.undo()
    context.bus.emit("history.undo", context.session.cursor)
    return ModeResult(consumed=True, status="undo", message="undo")


def redo(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    stack = context.session.stack
    if not stack.can_redo():
        return ModeResult(consumed=True, status="history_newest")
    context.session.redo()
    context.bus.emit("history.redo", context.session.cursor)
    return ModeResult(consumed=True, status="redo", message="redo")


__all__ = ["undo", "redo"]
