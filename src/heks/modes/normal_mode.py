"""Normal mode: every key is navigation, resolved through the keymap."""

from __future__ import annotations

from typing import List

from heks.keymaps import ResolutionResult

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import execute_match, resolve_keys


class NormalMode(Mode):
    name = "normal"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._pending: List[str] = []

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._pending.clear()

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        token = key.token
        result = self._resolve([*self._pending, token])
        if result.status == "miss" and self._pending:
            # The key that broke a prefix is tried on its own.
            result = self._resolve([token])

        session = self.context.session
        if result.status == "pending":
            session.note_key(token)
            return ModeResult(
                consumed=True,
                status="pending",
                message=" ".join(self._pending),
                timeout_ms=result.timeout_ms,
            )

        self._pending.clear()
        if result.match is None:
            session.note_key(token)
            return ModeResult(consumed=False, status="miss", message=f"{token} unbound")

        outcome = execute_match(self.context, result.match)
        session.note_key(result.match.binding.key_signature)
        return outcome

    def handle_timeout(self) -> ModeResult:
        abandoned = " ".join(self._pending)
        self._pending.clear()
        return ModeResult(consumed=False, status="timeout", message=abandoned or None)

    def _resolve(self, tokens: List[str]) -> ResolutionResult:
        result = resolve_keys(self.context, self.name, tokens)
        if result.status == "pending":
            self._pending = tokens
        return result
