"""Textual-facing adapter wiring the ModeManager and Session into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from heks.keymaps import KeymapRegistry, KeymapResolver
from heks.keymaps.defaults import load_default_keymaps
from heks.modes import (
    CommandMode,
    KeyInput,
    ModeContext,
    ModeResult,
    NormalMode,
)
from heks.modes.mode_manager import ModeManager
from heks.runtime import telemetry
from heks.session import Session, SessionView


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def create_default_manager(
    session: Session, *, sequence_timeout_ms: int | None = None
) -> ModeManager:
    """Build a ModeManager with normal + command modes and default keymaps."""

    registry = KeymapRegistry(logger_name="heks.keymaps")
    load_default_keymaps(registry, sequence_timeout_ms=sequence_timeout_ms)
    resolver = KeymapResolver(registry, logger_name="heks.keymaps")
    context = ModeContext(session=session)
    manager = ModeManager(
        context, keymap_registry=registry, keymap_resolver=resolver
    )
    manager.register_mode(NormalMode)
    manager.register_mode(CommandMode)
    return manager


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[SessionView], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_quit: Callable[[], None] = _noop


class TextualHexAdapter:
    """Bridges key input, the cursor history and per-frame positioning.

    Keys mutate the session; ``refresh`` then positions the viewport exactly
    once and hands the resulting view to the host.
    """

    def __init__(self, manager: ModeManager, hooks: TextualUIHooks) -> None:
        self.manager = manager
        self.hooks = hooks
        self.dirty = True
        self.logger = telemetry.get_logger("heks.adapters.textual")
        self._subscribe_events()
        self._refresh_command_line()

    @property
    def session(self) -> Session:
        return self.manager.context.session

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a host key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        result = self.manager.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self.dirty = True
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh_command_line()
        return result

    def process_timeouts(self) -> Dict[str, ModeResult]:
        results = self.manager.process_timeouts()
        for mode_name, outcome in results.items():
            self.hooks.update_status(f"{mode_name}:{outcome.status}")
        if results:
            self.dirty = True
        return results

    def refresh(self, rows: int, *, force: bool = False) -> Optional[SessionView]:
        """Position the viewport for ``rows`` display rows when anything changed."""

        if not (self.dirty or force or rows != self.session.rows):
            return None
        view = self.session.position(rows)
        self.dirty = False
        self.hooks.update_view(view)
        return view

    def _subscribe_events(self) -> None:
        bus = self.manager.context.bus
        for event in (
            "nav.jump",
            "history.undo",
            "history.redo",
            "command.start",
            "command.end",
            "command.submit",
            "command.error",
        ):
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )
        bus.subscribe("app.quit", lambda _payload: self._quit())

    def _handle_event(self, name: str, payload: object | None) -> None:
        self.logger.debug(f"event -> {name} {payload!r}")
        self.hooks.handle_event(name, payload)
        if name.startswith("command"):
            self._refresh_command_line()

    def _quit(self) -> None:
        telemetry.record_event("app.quit")
        self.hooks.request_quit()

    def _refresh_command_line(self) -> None:
        active = self.manager.active_mode
        if active is not None and active.name == "command":
            self.hooks.show_command(f":{self.manager.context.command_line.text}")
        else:
            self.hooks.show_command("")


__all__ = ["TextualHexAdapter", "TextualUIHooks", "create_default_manager"]
