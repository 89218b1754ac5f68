"""``:`` prompt: keys edit ``context.command_line`` until ENTER or ESC."""

from __future__ import annotations

from .base_mode import KeyInput, Mode, ModeResult
from .keymap_helpers import execute_match, resolve_keys


class CommandMode(Mode):
    name = "command"

    @property
    def current_command(self) -> str:
        return self.context.command_line.text

    def on_enter(self, previous: str | None) -> None:
        del previous
        line = self.context.command_line
        line.text, line.active = "", True
        self.context.bus.emit("command.start", None)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        line = self.context.command_line
        line.text, line.active = "", False
        self.context.bus.emit("command.end", None)

    def handle_key(self, key: KeyInput) -> ModeResult:
        # Coarse moves after a command never coalesce with earlier ones.
        self.context.session.note_key(None)
        result = resolve_keys(self.context, self.name, [key.token])
        if result.match is not None:
            return execute_match(self.context, result.match)

        line = self.context.command_line
        if key.key == "BACKSPACE":
            if not line.text:
                return ModeResult(
                    consumed=True, switch_to="normal", message="command_cancel"
                )
            line.text = line.text[:-1]
            return ModeResult(consumed=True, status="editing")

        char = key.printable
        if char is None:
            return ModeResult(consumed=False, status="miss", message="unhandled")
        line.text += char
        return ModeResult(consumed=True, status="editing")
