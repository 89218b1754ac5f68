"""Numeric interpretation of the selected bytes."""

from __future__ import annotations

from dataclasses import dataclass

MAX_VALUE_BYTES = 16


@dataclass(frozen=True, slots=True)
class SelectedValue:
    unsigned: int
    signed: int
    truncated: bool = False


def interpret(data: bytes) -> SelectedValue:
    """Read up to 16 bytes as a little-endian integer.

    The signed value sign-extends from the last byte read, matching what a
    128-bit two's complement load of the zero/sign-padded selection gives.
    """

    window = bytes(data[:MAX_VALUE_BYTES])
    truncated = len(data) > MAX_VALUE_BYTES
    if not window:
        return SelectedValue(unsigned=0, signed=0, truncated=truncated)
    return SelectedValue(
        unsigned=int.from_bytes(window, "little", signed=False),
        signed=int.from_bytes(window, "little", signed=True),
        truncated=truncated,
    )


__all__ = ["MAX_VALUE_BYTES", "SelectedValue", "interpret"]
