"""Half-open byte-offset selection over a 64-bit address space.

All movement is saturating: offsets never leave ``[0, U64_MAX]`` and no
operation raises for in-range input. Moves that may hit a boundary fix the far
bound first and rederive the near bound from the width, so the width survives
saturation exactly.
"""

from __future__ import annotations

from dataclasses import dataclass

from .validation import ensure_ordered

U64_MAX = 2**64 - 1


def saturating_add(value: int, delta: int) -> int:
    return min(value + delta, U64_MAX)


def saturating_sub(value: int, delta: int) -> int:
    return max(value - delta, 0)


@dataclass(slots=True)
class Cursor:
    """Selected bytes ``[start, end)``; ``end`` is one past the last byte."""

    start: int
    end: int

    @property
    def width(self) -> int:
        return ensure_ordered(self)

    def copy(self) -> "Cursor":
        return Cursor(self.start, self.end)

    def contains(self, location: int) -> bool:
        return self.start <= location < self.end

    def increment(self, delta: int) -> None:
        width = self.width
        self.end = saturating_add(self.end, delta)
        self.start = self.end - width

    def decrement(self, delta: int) -> None:
        width = self.width
        self.start = saturating_sub(self.start, delta)
        self.end = self.start + width

    def grow(self) -> None:
        self.end = saturating_add(self.end, 1)

    def shrink(self) -> None:
        # A single byte selection stays a single byte.
        if self.end > self.start + 1:
            self.end -= 1

    def skip_right(self) -> None:
        width = self.width
        self.end = saturating_add(self.end, width)
        self.start = self.end - width

    def skip_left(self) -> None:
        width = self.width
        self.start = saturating_sub(self.start, width)
        self.end = self.start + width

    def clamp(self, bounds: range) -> None:
        """Move the cursor the least distance needed to sit inside ``bounds``.

        The width is kept unless ``bounds`` is narrower, in which case the
        cursor becomes ``bounds``. When the cursor overhangs both ends the high
        side wins: the cursor is pinned to ``bounds.stop``.
        """

        lo, hi = bounds.start, bounds.stop
        width = min(self.width, max(hi - lo, 0))
        if self.end > hi:
            self.end = hi
            self.start = self.end - width
        elif self.start < lo:
            self.start = lo
            self.end = self.start + width

    def __repr__(self) -> str:
        return f"Cursor({self.start:#x}, {self.end:#x})"


__all__ = ["U64_MAX", "Cursor", "saturating_add", "saturating_sub"]
