"""Protocol every byte source implements."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from .slice import Slice


class ByteSource(Protocol):
    """Supplies windows of bytes and a relative position indicator."""

    def name(self) -> str:
        """Label shown in the title bar."""
        ...

    def fetch(self, start: int, end: int) -> Slice:
        """Return the bytes for ``[start, end)``, possibly narrower or empty."""
        ...

    def fraction(self, offset: int) -> float:
        """Relative position of ``offset`` in the whole source, in ``[0, 1]``."""
        ...


class ByteSourceError(OSError):
    """Raised when a source cannot be opened or mapped."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


def fraction_of(offset: int, length: int) -> float:
    if length == 0:
        return 0.5
    last = length - 1
    if last == 0:
        return 0.0
    return min(max(offset, 0), last) / last


__all__ = ["ByteSource", "ByteSourceError", "fraction_of"]
