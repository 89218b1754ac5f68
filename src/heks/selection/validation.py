"""Validation helpers shared by the selection types."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from .cursor import Cursor


class CursorRangeError(ValueError):
    """Raised when a cursor with ``start > end`` reaches an operation."""

    def __init__(self, message: str, *, cursor: "Cursor | None" = None) -> None:
        super().__init__(message)
        self.cursor = cursor


def ensure_ordered(cursor: "Cursor") -> int:
    """Return the cursor width, refusing inverted ranges."""

    if cursor.start > cursor.end:
        raise CursorRangeError(
            f"cursor start {cursor.start:#x} is past end {cursor.end:#x}",
            cursor=cursor,
        )
    return cursor.end - cursor.start
