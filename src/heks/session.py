"""Viewer session façade combining a source, cursor history, and geometry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from heks.runtime import telemetry
from heks.selection import Cursor, CursorStack
from heks.source import ByteSource, Slice
from heks.viewport import position_viewport

CursorEdit = Callable[[Cursor], None]


@dataclass(frozen=True, slots=True)
class SessionView:
    """Post-positioning snapshot handed to renderers."""

    name: str
    cursor: Cursor
    slice: Slice
    fraction: float
    columns: int
    rows: int
    undo_depth: int
    history_length: int


class Session:
    """One open source plus the selection the user is steering over it."""

    def __init__(
        self,
        source: ByteSource,
        *,
        columns: int = 16,
        rows: int = 0,
        stack: Optional[CursorStack] = None,
    ) -> None:
        self.source = source
        self.columns = columns
        self.rows = rows
        self.stack = stack or CursorStack(Cursor(0, 1))
        self.last_token: Optional[str] = None
        self._slice: Optional[Slice] = None

    @property
    def cursor(self) -> Cursor:
        return self.stack.top()

    @property
    def page_size(self) -> int:
        return self.columns * (self.rows // 2)

    def move(self, edit: CursorEdit) -> None:
        """Apply a fine edit to the current entry without a checkpoint."""

        edit(self.stack.top_mut())

    def coarse(self, edit: CursorEdit, token: Optional[str]) -> None:
        """Apply a coarse edit, coalescing while the same key repeats."""

        cursor = self.stack.top()
        edit(cursor)
        if token is not None and token == self.last_token:
            live = self.stack.top_mut()
            live.start, live.end = cursor.start, cursor.end
        else:
            self.stack.checkpoint(cursor)

    def jump(self, cursor: Cursor) -> None:
        self.stack.checkpoint(cursor)

    def undo(self) -> None:
        self.stack.undo()

    def redo(self) -> None:
        self.stack.redo()

    def note_key(self, token: Optional[str]) -> None:
        self.last_token = token

    def position(self, rows: Optional[int] = None) -> SessionView:
        if rows is not None:
            self.rows = rows
        with telemetry.span(
            "viewport::position",
            component="viewport",
            metadata={"rows": self.rows, "columns": self.columns},
        ) as handle:
            self._slice = position_viewport(
                self.stack, self.source, self.rows, self.columns
            )
            handle.add_metadata(
                "location",
                f"{self._slice.location_start:#x}..{self._slice.location_end:#x}",
            )
        cursor = self.stack.top()
        return SessionView(
            name=self.source.name(),
            cursor=cursor,
            slice=self._slice,
            fraction=self.source.fraction(cursor.start),
            columns=self.columns,
            rows=self.rows,
            undo_depth=self.stack.undo_depth,
            history_length=len(self.stack),
        )

    def selected_bytes(self) -> bytes:
        """Bytes under the cursor in the most recently positioned slice."""

        if self._slice is None:
            return b""
        return self._slice.fetch(self.stack.top())


__all__ = ["Session", "SessionView", "CursorEdit"]
