"""Built-in actions and key bindings for the viewer."""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, Sequence

from heks.actions import command as command_actions
from heks.actions import core as core_actions
from heks.actions import history as history_actions
from heks.actions import navigation as nav_actions

from .models import ActionRef, Binding
from .registry import KeymapRegistry

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef("nav.step_right", nav_actions.step_right, "Move one byte right"),
    ActionRef("nav.step_left", nav_actions.step_left, "Move one byte left"),
    ActionRef("nav.row_down", nav_actions.row_down, "Move one row down"),
    ActionRef("nav.row_up", nav_actions.row_up, "Move one row up"),
    ActionRef("nav.grow", nav_actions.grow, "Select one more byte"),
    ActionRef("nav.shrink", nav_actions.shrink, "Select one less byte"),
    ActionRef("nav.skip_right", nav_actions.skip_right, "Skip a selection right"),
    ActionRef("nav.skip_left", nav_actions.skip_left, "Skip a selection left"),
    ActionRef("nav.page_down", nav_actions.page_down, "Half a screen down"),
    ActionRef("nav.page_up", nav_actions.page_up, "Half a screen up"),
    ActionRef("nav.home", nav_actions.home, "Jump to the first byte"),
    ActionRef("nav.end", nav_actions.end, "Jump to the last byte"),
    ActionRef("history.undo", history_actions.undo, "Undo cursor move"),
    ActionRef("history.redo", history_actions.redo, "Redo cursor move"),
    ActionRef("core.enter_command", core_actions.enter_command_mode, "Command line"),
    ActionRef("core.exit_to_normal", core_actions.exit_to_normal_mode, "Cancel"),
    ActionRef("core.quit", core_actions.request_quit, "Quit"),
    ActionRef(
        "command.submit_line",
        command_actions.submit_command_line,
        "Evaluate the command line",
    ),
)

# (binding id, mode, keys, action id)
_BINDING_TABLE: tuple[tuple[str, str, str, str], ...] = (
    ("normal.l", "normal", "l", "nav.step_right"),
    ("normal.right", "normal", "RIGHT", "nav.step_right"),
    ("normal.h", "normal", "h", "nav.step_left"),
    ("normal.left", "normal", "LEFT", "nav.step_left"),
    ("normal.j", "normal", "j", "nav.row_down"),
    ("normal.down", "normal", "DOWN", "nav.row_down"),
    ("normal.k", "normal", "k", "nav.row_up"),
    ("normal.up", "normal", "UP", "nav.row_up"),
    ("normal.grow", "normal", "L", "nav.grow"),
    ("normal.shrink", "normal", "H", "nav.shrink"),
    ("normal.tab", "normal", "TAB", "nav.skip_right"),
    ("normal.alt_f", "normal", "alt+f", "nav.skip_right"),
    ("normal.backtab", "normal", "BACKTAB", "nav.skip_left"),
    ("normal.alt_b", "normal", "alt+b", "nav.skip_left"),
    ("normal.pagedown", "normal", "PAGEDOWN", "nav.page_down"),
    ("normal.pageup", "normal", "PAGEUP", "nav.page_up"),
    ("normal.home", "normal", "HOME", "nav.home"),
    ("normal.gg", "normal", "g g", "nav.home"),
    ("normal.end", "normal", "END", "nav.end"),
    ("normal.G", "normal", "G", "nav.end"),
    ("normal.undo", "normal", "z", "history.undo"),
    ("normal.redo", "normal", "Z", "history.redo"),
    ("normal.command", "normal", ":", "core.enter_command"),
    ("normal.quit", "normal", "q", "core.quit"),
    ("normal.escape", "normal", "ESC", "core.quit"),
    ("command.escape", "command", "ESC", "core.exit_to_normal"),
    ("command.enter", "command", "ENTER", "command.submit_line"),
)

DEFAULT_BINDINGS: tuple[Binding, ...] = tuple(
    Binding.from_spec(*row) for row in _BINDING_TABLE
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace_existing: bool = False,
    extra_bindings: Iterable[Binding] | None = None,
    sequence_timeout_ms: int | None = None,
    exclude_bindings: Sequence[str] | None = None,
) -> None:
    """Register the built-in actions and bindings."""

    excluded = set(exclude_bindings or ())
    for action in DEFAULT_ACTIONS:
        registry.register_action(action, replace=replace_existing)

    for binding in DEFAULT_BINDINGS:
        if binding.id in excluded:
            continue
        if sequence_timeout_ms is not None:
            binding = replace(
                binding, sequence=binding.sequence.with_timeout(sequence_timeout_ms)
            )
        registry.register_binding(binding, replace=replace_existing)

    for binding in extra_bindings or ():
        registry.register_binding(binding, replace=replace_existing)


__all__ = ["load_default_keymaps", "DEFAULT_ACTIONS", "DEFAULT_BINDINGS"]
