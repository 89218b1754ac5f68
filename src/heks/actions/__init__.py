"""Navigation verbs bound to keys."""

from .command import parse_offset, submit_command_line
from .core import enter_command_mode, exit_to_normal_mode, request_quit
from .history import redo, undo
from .navigation import (
    end,
    grow,
    home,
    page_down,
    page_up,
    row_down,
    row_up,
    shrink,
    skip_left,
    skip_right,
    step_left,
    step_right,
)

__all__ = [
    "end",
    "enter_command_mode",
    "exit_to_normal_mode",
    "grow",
    "home",
    "page_down",
    "page_up",
    "parse_offset",
    "redo",
    "request_quit",
    "row_down",
    "row_up",
    "shrink",
    "skip_left",
    "skip_right",
    "step_left",
    "step_right",
    "submit_command_line",
    "undo",
]
