"""Owns the registered modes and feeds every key to the active one."""

from __future__ import annotations

import time
from typing import Dict, Optional, Type

from heks.keymaps import KeymapRegistry, KeymapResolver
from heks.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult


class ModeManager:
    """Dispatches keys, applies mode switches and expires pending sequences.

    Only the active mode can be waiting for the rest of a key sequence, so a
    single deadline is tracked; switching modes drops it.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry,
        keymap_resolver: KeymapResolver | None = None,
    ) -> None:
        self.context = context
        self.keymap_registry = keymap_registry
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            keymap_registry, logger_name="heks.keymaps"
        )
        context.resolver = self.keymap_resolver
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self._deadline: Optional[float] = None

    @property
    def active_mode(self) -> Optional[Mode]:
        return self._modes.get(self._active) if self._active else None

    @property
    def has_pending_timeout(self) -> bool:
        return self._deadline is not None

    def register_mode(self, mode_cls: Type[Mode], /, **mode_kwargs: object) -> Mode:
        mode = mode_cls(self.context, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        if name not in self._modes:
            raise KeyError(f"Unknown mode '{name}'")
        previous = self.active_mode
        if previous is not None and previous.name == name:
            return
        self.cancel_timeout()
        if previous is not None:
            previous.on_exit(name)
        self._active = name
        self._modes[name].on_enter(previous.name if previous else None)
        telemetry.record_event("mode.switch", level="debug", data={"mode": name})

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            f"mode::{mode.name}",
            component="modes",
            metadata={"key": key.token, "cursor": self.context.session.cursor},
        ) as handle:
            result = mode.handle_key(key)
            handle.add_metadata("status", result.status)
        return self._apply(result)

    def arm_timeout(self, timeout_ms: int) -> None:
        self._deadline = time.monotonic() + timeout_ms / 1000.0

    def cancel_timeout(self) -> None:
        self._deadline = None

    def process_timeouts(self, *, now: float | None = None) -> Dict[str, ModeResult]:
        """Expire the pending sequence if its deadline passed; keyed by mode."""

        mode = self.active_mode
        if mode is None or self._deadline is None:
            return {}
        if (time.monotonic() if now is None else now) < self._deadline:
            return {}
        self._deadline = None
        with telemetry.span(f"mode_timeout::{mode.name}", component="modes"):
            result = mode.handle_timeout()
        return {mode.name: self._apply(result)}

    def _apply(self, result: ModeResult) -> ModeResult:
        if result.timeout_ms:
            self.arm_timeout(result.timeout_ms)
        else:
            self.cancel_timeout()
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result


__all__ = ["ModeManager"]
