from __future__ import annotations

from heks.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeymapRegistry,
    KeymapResolver,
)


def make_binding(
    binding_id: str,
    *,
    mode: str = "normal",
    keys: tuple[str, ...] = ("g", "g"),
    action_id: str = "nav.test",
    timeout_ms: int = 1000,
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=KeySequence.from_strings(*keys, timeout_ms=timeout_ms),
        action_id=action_id,
    )


def build_registry(bindings: list[Binding]) -> KeymapRegistry:
    registry = KeymapRegistry()
    for action_id in {binding.action_id for binding in bindings}:
        registry.register_action(ActionRef(action_id, lambda *args: None))
    for binding in bindings:
        registry.register_binding(binding)
    return registry


def test_resolver_matches_exact_sequence() -> None:
    binding = make_binding("normal.gg")
    resolver = KeymapResolver(build_registry([binding]))

    result = resolver.resolve("normal", ("g", "g"))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.binding.id == binding.id
    assert result.match.action.id == "nav.test"


def test_resolver_reports_pending_for_prefix() -> None:
    resolver = KeymapResolver(
        build_registry([make_binding("normal.gg", timeout_ms=400)])
    )

    result = resolver.resolve("normal", ("g",))

    assert result.status == "pending"
    assert result.match is None
    assert result.next_expected == ("g",)
    assert result.timeout_ms == 400


def test_pending_lists_every_continuation_with_shortest_timeout() -> None:
    resolver = KeymapResolver(
        build_registry(
            [
                make_binding("normal.gg", timeout_ms=700),
                make_binding("normal.ge", keys=("g", "e"), timeout_ms=300),
            ]
        )
    )

    result = resolver.resolve("normal", ("g",))

    assert result.next_expected == ("e", "g")
    assert result.timeout_ms == 300


def test_complete_sequence_wins_over_longer_binding() -> None:
    resolver = KeymapResolver(
        build_registry(
            [
                make_binding("normal.gg"),
                make_binding("normal.g", keys=("g",), action_id="nav.single"),
            ]
        )
    )

    result = resolver.resolve("normal", ("g",))

    assert result.status == "match"
    assert result.match is not None
    assert result.match.action.id == "nav.single"


def test_resolver_miss_for_unknown_key() -> None:
    resolver = KeymapResolver(build_registry([make_binding("normal.gg")]))

    result = resolver.resolve("normal", ("x",))

    assert result.status == "miss"
    assert result.match is None
    assert result.next_expected == ()


def test_resolver_rebuilds_after_registry_change() -> None:
    registry = build_registry([make_binding("normal.gg")])
    resolver = KeymapResolver(registry)
    assert resolver.resolve("normal", ("G",)).status == "miss"
    assert resolver.resolve("normal", ("G", "G")).status == "miss"

    registry.register_binding(make_binding("normal.GGG", keys=("G", "G", "G")))

    assert resolver.resolve("normal", ("G", "G")).status == "pending"


def test_resolver_is_scoped_per_mode() -> None:
    resolver = KeymapResolver(
        build_registry([make_binding("command.enter", mode="command", keys=("ENTER",))])
    )

    assert resolver.resolve("normal", ("ENTER",)).status == "miss"
    assert resolver.resolve("command", ("ENTER",)).status == "match"
