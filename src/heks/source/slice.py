"""Fetched windows of source bytes tagged with their absolute location."""

from __future__ import annotations

from dataclasses import dataclass

from heks.selection import Cursor


@dataclass(frozen=True, slots=True)
class Slice:
    """Bytes available for ``[location_start, location_end)``.

    A slice is only valid until the next ``fetch`` on the source that
    produced it.
    """

    data: bytes | memoryview
    location_start: int
    location_end: int

    @classmethod
    def empty(cls, location: int) -> "Slice":
        return cls(data=b"", location_start=location, location_end=location)

    @property
    def location(self) -> range:
        return range(self.location_start, self.location_end)

    def __len__(self) -> int:
        return len(self.data)

    def align_up(self, align: int) -> "Slice":
        """Drop leading bytes so the slice starts on a multiple of ``align``."""

        if align <= 0:
            return self
        misalignment = self.location_start % align
        offset = align - misalignment if misalignment else 0
        start = min(self.location_start + offset, self.location_end)
        return Slice(
            data=self.data[min(offset, len(self.data)) :],
            location_start=start,
            location_end=self.location_end,
        )

    def fetch(self, cursor: Cursor) -> bytes:
        """Return the bytes under ``cursor``, which should lie inside the slice."""

        inside = cursor.copy()
        inside.clamp(self.location)
        offset = inside.start - self.location_start
        return bytes(self.data[offset : offset + inside.width])


def fit_window(start: int, end: int, length: int) -> range:
    """Slide ``[start, end)`` into ``[0, length)``, keeping its size if possible."""

    size = min(max(end - start, 0), length)
    if start >= length:
        start = length - size
        end = start + size
    elif end >= length:
        end = length
        start = end - size
    return range(start, end)


__all__ = ["Slice", "fit_window"]
