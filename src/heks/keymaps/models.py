"""Key and binding value types.

Keys travel as string tokens: the key name, prefixed by its lower-cased,
sorted modifiers (``alt+f``, ``PAGEDOWN``, ``G``). A sequence is written as
space separated tokens, so ``"g g"`` is two presses of ``g``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

DEFAULT_SEQUENCE_TIMEOUT_MS = 1000


@dataclass(frozen=True, slots=True)
class KeyStroke:
    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        cleaned = {mod.strip().lower() for mod in self.modifiers if mod.strip()}
        object.__setattr__(self, "modifiers", tuple(sorted(cleaned)))

    @classmethod
    def parse(cls, spec: str) -> "KeyStroke":
        """Parse ``"alt+f"``; a lone ``"+"`` is the plus key itself."""

        head, _, key = spec.rpartition("+")
        if not key and head:
            head, key = head[:-1], "+"
        if not head:
            return cls(spec)
        return cls(key, tuple(head.split("+")))

    @property
    def token(self) -> str:
        return "+".join(self.modifiers + (self.key,))


@dataclass(frozen=True, slots=True)
class KeySequence:
    strokes: tuple[KeyStroke, ...]
    timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")
        if self.timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")

    @classmethod
    def parse(
        cls, spec: str, *, timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS
    ) -> "KeySequence":
        return cls.from_strings(*spec.split(), timeout_ms=timeout_ms)

    @classmethod
    def from_strings(
        cls, *keys: str, timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS
    ) -> "KeySequence":
        return cls(tuple(KeyStroke.parse(key) for key in keys if key), timeout_ms)

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    def with_timeout(self, timeout_ms: int) -> "KeySequence":
        return KeySequence(self.strokes, timeout_ms)


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named callable invoked as ``handler(context, match)``."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """A key sequence in one mode that triggers an action."""

    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        for name in ("id", "mode", "action_id"):
            if not getattr(self, name):
                raise ValueError(f"binding {name} cannot be empty")

    @classmethod
    def from_spec(
        cls, binding_id: str, mode: str, keys: str, action_id: str
    ) -> "Binding":
        return cls(binding_id, mode, KeySequence.parse(keys), action_id)

    @property
    def key_signature(self) -> str:
        """Tokens joined by spaces; also the coalescing token for repeated keys."""

        return " ".join(self.sequence.tokens)


def signature_of(tokens: Iterable[str]) -> str:
    return " ".join(tokens)


__all__ = [
    "DEFAULT_SEQUENCE_TIMEOUT_MS",
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "signature_of",
]
