"""Runtime services: telemetry and settings."""

from . import telemetry
from .settings import SettingsError, ViewerSettings

__all__ = ["SettingsError", "ViewerSettings", "telemetry"]
