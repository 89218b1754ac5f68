"""Turns the keys pressed so far into a match, a pending prefix, or a miss."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Literal, Optional, Sequence, Tuple

from heks.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry

Tokens = Tuple[str, ...]


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    next_expected: tuple[str, ...] = ()
    timeout_ms: Optional[int] = None


@dataclass(slots=True)
class _Prefix:
    next_tokens: set[str]
    timeout_ms: int


class KeymapResolver:
    """Resolves token sequences against one mode's bindings.

    A complete sequence wins over a longer one it prefixes, so binding ``g``
    alone would shadow ``g g``.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._prefix_cache: Dict[str, Tuple[int, Dict[Tokens, _Prefix]]] = {}

    def resolve(self, mode: str, tokens: Sequence[str]) -> ResolutionResult:
        keys = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "keys": " ".join(keys)},
        ) as handle:
            binding = self._registry.binding_for(mode, keys)
            if binding is not None:
                handle.add_metadata("binding_id", binding.id)
                action = self._registry.get_action(binding.action_id)
                return ResolutionResult(
                    status="match", match=ResolutionMatch(binding, action)
                )

            prefix = self._prefixes(mode).get(keys)
            if prefix is not None:
                handle.add_metadata("status", "pending")
                return ResolutionResult(
                    status="pending",
                    next_expected=tuple(sorted(prefix.next_tokens)),
                    timeout_ms=prefix.timeout_ms,
                )

            handle.add_metadata("status", "miss")
            return ResolutionResult(status="miss")

    def reset(self, mode: Optional[str] = None) -> None:
        if mode is None:
            self._prefix_cache.clear()
        else:
            self._prefix_cache.pop(mode, None)

    def _prefixes(self, mode: str) -> Dict[Tokens, _Prefix]:
        revision = self._registry.revision()
        cached = self._prefix_cache.get(mode)
        if cached is not None and cached[0] == revision:
            return cached[1]

        prefixes: Dict[Tokens, _Prefix] = {}
        for binding in self._registry.iter_bindings(mode):
            tokens = binding.sequence.tokens
            timeout = binding.sequence.timeout_ms
            for length in range(1, len(tokens)):
                head = tokens[:length]
                entry = prefixes.setdefault(head, _Prefix(set(), timeout))
                entry.next_tokens.add(tokens[length])
                entry.timeout_ms = min(entry.timeout_ms, timeout)
        self._prefix_cache[mode] = (revision, prefixes)
        return prefixes


__all__ = ["KeymapResolver", "ResolutionMatch", "ResolutionResult"]
