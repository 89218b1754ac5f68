"""Cursor movement actions.

Single steps, row moves, grow/shrink and skips edit the current history entry
in place. Paging coalesces into one entry while the same key repeats; home and
end always open a new entry.
"""

from __future__ import annotations

from heks.keymaps import ResolutionMatch
from heks.modes.base_mode import ModeContext, ModeResult
from heks.selection import U64_MAX
from heks.session import CursorEdit


def _fine(context: ModeContext, match: ResolutionMatch, edit: CursorEdit) -> ModeResult:
    context.session.move(edit)
    context.bus.emit("nav.move", {"action": match.action.id})
    return ModeResult(consumed=True, status="moved")


def _coarse(
    context: ModeContext,
    match: ResolutionMatch,
    edit: CursorEdit,
    *,
    coalesce: bool,
) -> ModeResult:
    token = match.binding.key_signature if coalesce else None
    context.session.coarse(edit, token)
    context.bus.emit("nav.jump", {"action": match.action.id})
    return ModeResult(consumed=True, status="checkpoint")


def step_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _fine(context, match, lambda cursor: cursor.increment(1))


def step_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _fine(context, match, lambda cursor: cursor.decrement(1))


def row_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    columns = context.session.columns
    return _fine(context, match, lambda cursor: cursor.increment(columns))


def row_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    columns = context.session.columns
    # On the first row there is no row above; stay put instead of snapping to 0.
    if context.session.cursor.start < columns:
        return ModeResult(consumed=True, status="noop")
    return _fine(context, match, lambda cursor: cursor.decrement(columns))


def grow(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _fine(context, match, lambda cursor: cursor.grow())


def shrink(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _fine(context, match, lambda cursor: cursor.shrink())


def skip_right(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _fine(context, match, lambda cursor: cursor.skip_right())


def skip_left(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _fine(context, match, lambda cursor: cursor.skip_left())


def page_down(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    page = context.session.page_size
    return _coarse(context, match, lambda cursor: cursor.increment(page), coalesce=True)


def page_up(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    page = context.session.page_size
    return _coarse(context, match, lambda cursor: cursor.decrement(page), coalesce=True)


def home(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    return _coarse(
        context, match, lambda cursor: cursor.decrement(U64_MAX), coalesce=False
    )


def end(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    # The real length is unknown here; the next frame clamps to the source.
    return _coarse(
        context, match, lambda cursor: cursor.increment(U64_MAX), coalesce=False
    )


__all__ = [
    "step_right",
    "step_left",
    "row_down",
    "row_up",
    "grow",
    "shrink",
    "skip_right",
    "skip_left",
    "page_down",
    "page_up",
    "home",
    "end",
]
