"""Byte-range selection and its undo/redo history."""

from .cursor import U64_MAX, Cursor, saturating_add, saturating_sub
from .history import CursorStack
from .validation import CursorRangeError, ensure_ordered
from .values import SelectedValue, interpret

__all__ = [
    "U64_MAX",
    "Cursor",
    "CursorStack",
    "CursorRangeError",
    "SelectedValue",
    "ensure_ordered",
    "interpret",
    "saturating_add",
    "saturating_sub",
]
