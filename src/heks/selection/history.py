"""Undo/redo history of whole cursor snapshots."""

from __future__ import annotations

from typing import List, Sequence

from .cursor import Cursor


class CursorStack:
    """Linear cursor history with an undo depth measured from the newest entry.

    Fine-grained edits mutate the current top in place through ``top_mut``;
    coarse navigation opens a new entry with ``checkpoint``.
    """

    def __init__(self, seed: Cursor) -> None:
        self._cursors: List[Cursor] = [seed]
        self._undo_depth: int = 0

    @property
    def cursors(self) -> Sequence[Cursor]:
        return tuple(self._cursors)

    @property
    def undo_depth(self) -> int:
        return self._undo_depth

    def __len__(self) -> int:
        return len(self._cursors)

    def _top_index(self) -> int:
        index = len(self._cursors) - 1
        assert self._cursors, "cursor history must never be empty"
        assert self._undo_depth <= index, "undo depth past oldest entry"
        return index - self._undo_depth

    def top(self) -> Cursor:
        return self._cursors[self._top_index()].copy()

    def top_mut(self) -> Cursor:
        """Return the live top entry; edits to it create no checkpoint."""

        return self._cursors[self._top_index()]

    def push(self, cursor: Cursor) -> None:
        """Append ``cursor``; the undo depth is left alone."""

        self._cursors.append(cursor)

    def set(self, cursor: Cursor) -> None:
        """Replace the top entry and drop everything newer than it."""

        del self._cursors[self._top_index() :]
        self._undo_depth = 0
        self._cursors.append(cursor)

    def checkpoint(self, cursor: Cursor) -> None:
        """Keep the top, drop the redo future, and make ``cursor`` the new top."""

        self.set(self.top())
        self.push(cursor)
        self._undo_depth = 0

    def can_undo(self) -> bool:
        return self._undo_depth < len(self._cursors) - 1

    def can_redo(self) -> bool:
        return self._undo_depth > 0

    def undo(self) -> None:
        if self.can_undo():
            self._undo_depth += 1

    def redo(self) -> None:
        self._undo_depth = max(self._undo_depth - 1, 0)

    def __repr__(self) -> str:
        return (
            f"CursorStack(cursors={self._cursors!r}, undo_depth={self._undo_depth})"
        )


__all__ = ["CursorStack"]
