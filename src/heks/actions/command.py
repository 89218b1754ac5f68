"""Actions that evaluate ``:`` command lines."""

from __future__ import annotations

from typing import Callable, Dict, List

from heks.keymaps import ResolutionMatch
from heks.modes.base_mode import ModeContext, ModeResult
from heks.selection import U64_MAX, Cursor, saturating_add

CommandHandler = Callable[[ModeContext, List[str]], ModeResult]


def parse_offset(text: str) -> int:
    """Parse ``123``, ``0x7b``, ``0o173`` or ``0b1111011``; saturates at U64_MAX."""

    cleaned = text.strip().replace("_", "")
    try:
        value = int(cleaned, 0)
    except ValueError:
        # int(..., 0) rejects leading zeros such as "0010".
        value = int(cleaned, 10)
    if value < 0:
        raise ValueError(f"offset must not be negative: {text!r}")
    return min(value, U64_MAX)


def submit_command_line(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    text = context.command_line.take()
    context.bus.emit("command.submit", text)
    if not text:
        return ModeResult(consumed=True, switch_to="normal", status="command_empty")
    command, *args = text.split()
    handler = _COMMAND_HANDLERS.get(command)
    if handler is None:
        return _command_error(context, text, "unknown command")
    return handler(context, args)


def _command_error(context: ModeContext, text: str, reason: str) -> ModeResult:
    context.bus.emit("command.error", {"command": text, "reason": reason})
    return ModeResult(
        consumed=True,
        switch_to="normal",
        status="command_error",
        message=f"{reason}: {text}",
    )


def _handle_goto(context: ModeContext, args: List[str]) -> ModeResult:
    if len(args) != 1:
        return _command_error(context, "goto", "usage: goto OFFSET")
    try:
        offset = parse_offset(args[0])
    except ValueError:
        return _command_error(context, args[0], "bad offset")
    width = max(context.session.cursor.width, 1)
    target = Cursor(0, width)
    target.increment(offset)
    context.session.jump(target)
    context.bus.emit("nav.jump", {"action": "command.goto", "offset": offset})
    return ModeResult(
        consumed=True, switch_to="normal", status="command_goto", message=f"{offset:#x}"
    )


def _handle_width(context: ModeContext, args: List[str]) -> ModeResult:
    if len(args) != 1:
        return _command_error(context, "width", "usage: width N")
    try:
        width = parse_offset(args[0])
    except ValueError:
        return _command_error(context, args[0], "bad width")
    if width < 1:
        return _command_error(context, args[0], "width must be at least 1")
    start = context.session.cursor.start
    context.session.jump(Cursor(start, saturating_add(start, width)))
    return ModeResult(
        consumed=True, switch_to="normal", status="command_width", message=str(width)
    )


def _handle_quit(context: ModeContext, args: List[str]) -> ModeResult:
    del args
    context.bus.emit("app.quit", None)
    return ModeResult(consumed=True, switch_to="normal", status="quit", message="quit")


_COMMAND_HANDLERS: Dict[str, CommandHandler] = {
    "goto": _handle_goto,
    "g": _handle_goto,
    "width": _handle_width,
    "w": _handle_width,
    "quit": _handle_quit,
    "q": _handle_quit,
}


__all__ = ["parse_offset", "submit_command_line"]
