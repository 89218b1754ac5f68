"""Per-frame mapping of the selection onto a row-aligned window."""

from .positioner import ViewportWindow, compute_window, position_viewport

__all__ = ["ViewportWindow", "compute_window", "position_viewport"]
