"""Byte sources and the windows (slices) they hand out."""

from .base import ByteSource, ByteSourceError
from .file import FileSource
from .memory import MemorySource
from .slice import Slice, fit_window

__all__ = [
    "ByteSource",
    "ByteSourceError",
    "FileSource",
    "MemorySource",
    "Slice",
    "fit_window",
]
