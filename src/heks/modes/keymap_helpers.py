"""Glue between modes and the keymap resolver."""

from __future__ import annotations

from typing import Sequence

from heks.keymaps import ResolutionMatch, ResolutionResult
from heks.runtime import telemetry

from .base_mode import ModeContext, ModeResult


def resolve_keys(
    context: ModeContext, mode: str, tokens: Sequence[str]
) -> ResolutionResult:
    if context.resolver is None:
        raise RuntimeError("ModeContext has no keymap resolver; use ModeManager")
    return context.resolver.resolve(mode, tokens)


def execute_match(context: ModeContext, match: ResolutionMatch) -> ModeResult:
    """Run the matched action; handlers that return nothing count as consumed."""

    with telemetry.span(
        "keymaps::execute",
        component="keymaps",
        metadata={"binding_id": match.binding.id, "action": match.action.id},
    ):
        outcome = match.action(context, match)
    return outcome if isinstance(outcome, ModeResult) else ModeResult(consumed=True)


__all__ = ["execute_match", "resolve_keys"]
