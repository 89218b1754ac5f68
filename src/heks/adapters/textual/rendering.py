"""Pure renderers turning a positioned session into ``rich`` text."""

from __future__ import annotations

import colorsys
from typing import Iterable

from rich.color import Color
from rich.style import Style
from rich.text import Text

from heks.selection import Cursor, interpret

BLOCK_SIZE = 2
BROOM = "🧹"
BROOM_WIDTH = 2

CURSOR_STYLE = Style(color="rgb(96,255,96)", bgcolor="rgb(0,96,0)")
LABEL_STYLE = Style(color="rgb(0,0,255)", bgcolor="rgb(192,192,192)", bold=True)
FIELD_STYLE = Style(color="rgb(0,0,255)", bgcolor="rgb(255,255,255)")
SPACER_STYLE = Style(color="rgb(255,255,255)", bgcolor="rgb(128,128,255)")

_SUPERSCRIPT_HEX = "⁰¹²³⁴⁵⁶⁷⁸⁹ᵃᵇᶜᵈᵉᶠ"


def superscript_hex(byte: int) -> str:
    return _SUPERSCRIPT_HEX[byte >> 4] + _SUPERSCRIPT_HEX[byte & 0xF]


def unicode_glyph(byte: int) -> str:
    """Two-cell glyph for one byte.

    NUL is blank, printable ASCII is itself, everything else (controls, DEL,
    high bytes) is its value in superscript hex digits.
    """

    if byte == 0:
        return "  "
    if 0x20 <= byte <= 0x7E:
        return f"{chr(byte)} "
    return superscript_hex(byte)


def _rows(data: Iterable[int], columns: int) -> Iterable[list[int]]:
    row: list[int] = []
    for value in data:
        row.append(value)
        if len(row) == columns:
            yield row
            row = []
    if row:
        yield row


def render_hex(data: Iterable[int], start: int, cursor: Cursor, columns: int) -> Text:
    text = Text(no_wrap=True)
    location = start
    for index, row in enumerate(_rows(data, columns)):
        if index:
            text.append("\n")
        for column, value in enumerate(row):
            selected = cursor.contains(location)
            style = CURSOR_STYLE if selected else ""
            if column and column % BLOCK_SIZE == 0:
                # The gap before the first selected byte stays unhighlighted.
                text.append(" ", style if location != cursor.start else "")
            text.append(f"{value:02x}", style)
            location += 1
    return text


def render_unicode(
    data: Iterable[int], start: int, cursor: Cursor, columns: int
) -> Text:
    text = Text(no_wrap=True)
    location = start
    for index, row in enumerate(_rows(data, columns)):
        if index:
            text.append("\n")
        for value in row:
            style = CURSOR_STYLE if cursor.contains(location) else ""
            text.append(unicode_glyph(value), style)
            location += 1
    return text


def render_info(cursor: Cursor, selected: bytes) -> Text:
    value = interpret(selected)
    text = Text(no_wrap=True)
    text.append(" ", SPACER_STYLE)
    for label, field in (
        ("cursor", f"{cursor.start:#18x}"),
        ("±", f"{value.signed:>40}"),
        ("+", f"{value.unsigned:>39}"),
    ):
        text.append(f" {label} ", LABEL_STYLE)
        text.append(f" {field} ", FIELD_STYLE)
        text.append("  ", SPACER_STYLE)
    if value.truncated:
        text.append("(first 16 bytes)", SPACER_STYLE)
    return text


def _hsl(hue: float, saturation: float, lightness: float) -> Color:
    red, green, blue = colorsys.hls_to_rgb((hue % 360.0) / 360.0, lightness, saturation)
    return Color.from_rgb(round(red * 255), round(green * 255), round(blue * 255))


def render_position(fraction: float, width: int) -> Text:
    """Rainbow bar with a broom marking the cursor's relative position."""

    text = Text(no_wrap=True)
    if width <= 0:
        return text
    broom_start = int(fraction * max(width - 2, 0))
    broom_start = min(max(broom_start, 0), max(width - 2, 0))
    for column in range(width):
        hue = column * 360.0 / max(width - 1, 1) + fraction * 180.0
        fg = _hsl(hue, 1.0, 0.5)
        bg = _hsl(hue, 1.0, 0.1)
        if column == broom_start:
            text.append(BROOM, Style(color=bg, bgcolor=fg))
        elif broom_start < column < broom_start + BROOM_WIDTH:
            continue
        else:
            text.append("▓", Style(color=fg, bgcolor=bg))
    return text


__all__ = [
    "render_hex",
    "render_info",
    "render_position",
    "render_unicode",
    "superscript_hex",
    "unicode_glyph",
]
