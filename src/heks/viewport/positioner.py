"""Viewport positioning.

Each frame the cursor is turned into a row-aligned fetch window, the source
is asked for it, and the cursor is clamped into whatever actually came back.
The source decides what exists, so a jump past the end of a short file (or to
``U64_MAX``) settles on the real last bytes after a single frame.
"""

from __future__ import annotations

from dataclasses import dataclass

from heks.selection import U64_MAX, Cursor, CursorStack
from heks.source import ByteSource, Slice


@dataclass(frozen=True, slots=True)
class ViewportWindow:
    """Absolute ``[first, end)`` range to request for one frame."""

    first: int
    end: int
    leading_rows: int = 0

    @property
    def size(self) -> int:
        return self.end - self.first


def compute_window(cursor: Cursor, rows: int, columns: int) -> ViewportWindow:
    """Choose a window that keeps ``cursor`` visible, centred when possible.

    Leading context above the cursor row is ``rows // 2`` rows, fewer near
    offset 0. Zero rows or columns give an empty window at the anchor.
    """

    rows = max(rows, 0)
    columns = max(columns, 0)
    window_size = rows * columns
    # Keep first + window_size representable even after a jump to U64_MAX.
    pos = min(cursor.start, U64_MAX - window_size)
    if window_size == 0:
        return ViewportWindow(first=pos, end=pos)

    column_zero_pos = pos - pos % columns
    pos_row = column_zero_pos // columns
    leading_rows = min(rows // 2, pos_row)
    first = column_zero_pos - leading_rows * columns
    return ViewportWindow(
        first=first, end=first + window_size, leading_rows=leading_rows
    )


def position_viewport(
    stack: CursorStack, source: ByteSource, rows: int, columns: int
) -> Slice:
    """Fetch the frame's slice and clamp the top cursor into it in place."""

    cursor = stack.top()
    window = compute_window(cursor, rows, columns)
    fetched = source.fetch(window.first, window.end)
    aligned = fetched.align_up(columns)
    cursor.clamp(aligned.location)
    live = stack.top_mut()
    live.start, live.end = cursor.start, cursor.end
    return aligned


__all__ = ["ViewportWindow", "compute_window", "position_viewport"]
