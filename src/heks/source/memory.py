"""In-memory byte source."""

from __future__ import annotations

from .base import fraction_of
from .slice import Slice, fit_window

DEBUG_BYTES = (
    b"\x09\x00\x06\x00hello"
    + bytes(range(0x20))
    + b"\x7f\x80\x90\xa0\xb0\xc0\xd0\xe0"
    + bytes(range(0xF0, 0x100))
    + b"world01234567890"
)


class MemorySource:
    """Serves windows of a bytes object; also backs the ``--debug`` demo."""

    def __init__(self, data: bytes, *, name: str = "memory") -> None:
        self._data = bytes(data)
        self._name = name

    @classmethod
    def debug(cls) -> "MemorySource":
        return cls(DEBUG_BYTES, name="debug")

    def __len__(self) -> int:
        return len(self._data)

    def name(self) -> str:
        return self._name

    def fetch(self, start: int, end: int) -> Slice:
        window = fit_window(start, end, len(self._data))
        return Slice(
            data=memoryview(self._data)[window.start : window.stop],
            location_start=window.start,
            location_end=window.stop,
        )

    def fraction(self, offset: int) -> float:
        return fraction_of(offset, len(self._data))


__all__ = ["DEBUG_BYTES", "MemorySource"]
