"""Input modes: normal navigation and the ``:`` command line.

:class:`~heks.modes.mode_manager.ModeManager` is imported from its own module.
"""

from .base_mode import CommandLine, KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .command_mode import CommandMode
from .normal_mode import NormalMode

__all__ = [
    "CommandLine",
    "CommandMode",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "NormalMode",
]
