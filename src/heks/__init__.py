"""Terminal byte inspection engine: selection, history and viewport."""

__all__ = [
    "actions",
    "adapters",
    "keymaps",
    "modes",
    "runtime",
    "selection",
    "session",
    "source",
    "viewport",
]

__version__ = "0.1.0"
