"""Read-only memory-mapped file source."""

from __future__ import annotations

import mmap
import os
from pathlib import Path
from typing import Optional

from heks.runtime import telemetry

from .base import ByteSourceError, fraction_of
from .slice import Slice, fit_window


def _memory_map(path: Path) -> Optional[mmap.mmap]:
    size = os.path.getsize(path)
    if size == 0:
        # mmap refuses empty files; an empty source needs no mapping.
        return None
    fd = os.open(path, os.O_RDONLY)
    try:
        return mmap.mmap(fd, size, access=mmap.ACCESS_READ)
    finally:
        # The map keeps its own reference to the file.
        os.close(fd)


class FileSource:
    """Serves windows of a file without loading it into memory."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)
        try:
            self._map = _memory_map(self.path)
        except (OSError, ValueError) as exc:
            raise ByteSourceError(
                f"Unable to open {str(self.path)!r}: {exc}", path=self.path
            ) from exc
        self._length = len(self._map) if self._map is not None else 0
        telemetry.record_event(
            "source.open",
            level="debug",
            data={"path": str(self.path), "length": self._length},
        )

    def __enter__(self) -> "FileSource":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    def __len__(self) -> int:
        return self._length

    def name(self) -> str:
        return str(self.path)

    def fetch(self, start: int, end: int) -> Slice:
        window = fit_window(start, end, self._length)
        if not window or self._map is None:
            return Slice.empty(window.start)
        return Slice(
            data=self._map[window.start : window.stop],
            location_start=window.start,
            location_end=window.stop,
        )

    def fraction(self, offset: int) -> float:
        return fraction_of(offset, self._length)

    def close(self) -> None:
        if self._map is not None:
            self._map.close()
            self._map = None


__all__ = ["FileSource"]
