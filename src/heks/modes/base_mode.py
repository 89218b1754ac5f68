"""Types shared by the input modes, their actions and the manager."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from heks.keymaps import KeymapResolver, KeyStroke
from heks.session import Session

EventCallback = Callable[[object], None]


@dataclass(slots=True)
class KeyInput:
    """One key press as the host reports it."""

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @property
    def token(self) -> str:
        return KeyStroke(self.key, self.modifiers).token

    @property
    def printable(self) -> Optional[str]:
        if self.text and self.text.isprintable() and not self.modifiers:
            return self.text
        return None


@dataclass(slots=True)
class ModeResult:
    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    timeout_ms: Optional[int] = None


@dataclass(slots=True)
class CommandLine:
    """Text of the ``:`` prompt while command mode is active."""

    text: str = ""
    active: bool = False
    history: List[str] = field(default_factory=list)

    def take(self) -> str:
        line, self.text = self.text.strip(), ""
        if line:
            self.history.append(line)
        return line


class ModeBus:
    """Synchronous publish/subscribe channel for mode and action events."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, List[EventCallback]] = {}

    def subscribe(self, event: str, callback: EventCallback) -> Callable[[], None]:
        callbacks = self._subscribers.setdefault(event, [])
        callbacks.append(callback)
        return lambda: callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, ())):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Everything a mode or an action may touch."""

    session: Session
    bus: ModeBus = field(default_factory=ModeBus)
    resolver: Optional[KeymapResolver] = None
    command_line: CommandLine = field(default_factory=CommandLine)


class Mode:
    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(self, previous: Optional[str]) -> None:
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode

    def handle_key(self, key: KeyInput) -> ModeResult:  # pragma: no cover
        raise NotImplementedError

    def handle_timeout(self) -> ModeResult:
        """Called when a pending key sequence expires."""

        return ModeResult(consumed=False, status="timeout")


__all__ = [
    "CommandLine",
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
]
