"""Mode switching and lifecycle actions."""

from __future__ import annotations

from heks.keymaps import ResolutionMatch
from heks.modes.base_mode import ModeContext, ModeResult


def enter_command_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="command", message="enter_command")


def exit_to_normal_mode(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, switch_to="normal", message="exit_command")


def request_quit(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    del match
    context.bus.emit("app.quit", None)
    return ModeResult(consumed=True, status="quit", message="quit")


__all__ = [
    "enter_command_mode",
    "exit_to_normal_mode",
    "request_quit",
]
