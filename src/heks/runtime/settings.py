"""Viewer settings resolved from ``HEKS_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

ENV_PREFIX = "HEKS_"

DEFAULT_COLUMNS = 16
DEFAULT_TICK_HZ = 60.0
DEFAULT_SEQUENCE_TIMEOUT_MS = 1000


class SettingsError(ValueError):
    """Raised when a setting holds a value the viewer cannot use."""

    def __init__(self, message: str, *, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return int(value, 0)
    except ValueError:
        return fallback


def _env_float(env: Mapping[str, str], key: str, fallback: float) -> float:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return float(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class ViewerSettings:
    columns: int = DEFAULT_COLUMNS
    tick_hz: float = DEFAULT_TICK_HZ
    sequence_timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS

    def __post_init__(self) -> None:
        if self.columns < 1:
            raise SettingsError("columns must be at least 1", key="columns")
        if self.tick_hz <= 0:
            raise SettingsError("tick_hz must be positive", key="tick_hz")
        if self.sequence_timeout_ms <= 0:
            raise SettingsError(
                "sequence_timeout_ms must be positive", key="sequence_timeout_ms"
            )

    @property
    def tick_interval(self) -> float:
        return 1.0 / self.tick_hz

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ViewerSettings":
        source = os.environ if env is None else env
        return cls(
            columns=_env_int(source, "COLUMNS", DEFAULT_COLUMNS),
            tick_hz=_env_float(source, "TICK_HZ", DEFAULT_TICK_HZ),
            sequence_timeout_ms=_env_int(
                source, "SEQUENCE_TIMEOUT_MS", DEFAULT_SEQUENCE_TIMEOUT_MS
            ),
        )

    def override(self, **changes: object) -> "ViewerSettings":
        """Return a copy with every non-``None`` change applied."""

        applied = {key: value for key, value in changes.items() if value is not None}
        return replace(self, **applied)


__all__ = ["SettingsError", "ViewerSettings"]
