from __future__ import annotations

import time
from typing import List

import pytest

from heks.actions import parse_offset
from heks.keymaps import KeymapRegistry, KeymapResolver
from heks.keymaps.defaults import load_default_keymaps
from heks.modes import CommandMode, KeyInput, ModeBus, ModeContext, NormalMode
from heks.modes.mode_manager import ModeManager
from heks.selection import U64_MAX, Cursor
from heks.session import Session
from heks.source import MemorySource


def make_manager(length: int = 4096, *, rows: int = 10) -> ModeManager:
    registry = KeymapRegistry()
    load_default_keymaps(registry)
    resolver = KeymapResolver(registry)
    session = Session(MemorySource(bytes(length)), columns=16)
    session.position(rows)
    context = ModeContext(session=session, bus=ModeBus())
    manager = ModeManager(context, keymap_registry=registry, keymap_resolver=resolver)
    manager.register_mode(NormalMode)
    manager.register_mode(CommandMode)
    return manager


def press(manager: ModeManager, *keys: str):
    result = None
    for key in keys:
        text = key if len(key) == 1 else None
        result = manager.handle_key(KeyInput(key=key, text=text))
    return result


def type_command(manager: ModeManager, line: str):
    press(manager, ":")
    for char in line:
        press(manager, char)
    return press(manager, "ENTER")


def test_step_moves_without_checkpoint() -> None:
    manager = make_manager()
    session = manager.context.session

    result = press(manager, "l", "l", "RIGHT", "h")

    assert result.status == "moved"
    assert session.cursor == Cursor(2, 3)
    assert len(session.stack) == 1


def test_row_moves_use_column_count() -> None:
    manager = make_manager()
    session = manager.context.session

    press(manager, "j", "j", "k")

    assert session.cursor == Cursor(16, 17)


def test_row_up_on_first_row_is_noop() -> None:
    manager = make_manager()

    result = press(manager, "l", "k")

    assert result.status == "noop"
    assert manager.context.session.cursor == Cursor(1, 2)


def test_grow_shrink_and_skip() -> None:
    manager = make_manager()
    session = manager.context.session

    press(manager, "L", "L", "L")
    assert session.cursor == Cursor(0, 4)
    press(manager, "TAB")
    assert session.cursor == Cursor(4, 8)
    press(manager, "H")
    assert session.cursor == Cursor(4, 7)
    manager.handle_key(KeyInput(key="b", modifiers=("ALT",)))
    assert session.cursor == Cursor(1, 4)


def test_page_down_repeats_coalesce_into_one_entry() -> None:
    manager = make_manager()
    session = manager.context.session

    result = press(manager, "PAGEDOWN", "PAGEDOWN")

    assert result.status == "checkpoint"
    assert session.cursor == Cursor(160, 161)
    assert len(session.stack) == 2

    press(manager, "l", "PAGEDOWN")
    assert len(session.stack) == 3


def test_home_and_end_checkpoint_every_time() -> None:
    manager = make_manager()
    session = manager.context.session

    press(manager, "G")
    assert session.cursor == Cursor(U64_MAX - 1, U64_MAX)
    session.position()
    assert session.cursor == Cursor(4095, 4096)

    press(manager, "g", "g")
    assert session.cursor == Cursor(0, 1)
    press(manager, "HOME")
    assert len(session.stack) == 4


def test_undo_and_redo_keys() -> None:
    manager = make_manager()
    session = manager.context.session
    press(manager, "END")
    session.position()

    undone = press(manager, "z")
    assert undone.status == "undo"
    assert session.cursor == Cursor(0, 1)
    assert press(manager, "z").status == "history_oldest"

    assert press(manager, "Z").status == "redo"
    assert session.cursor == Cursor(4095, 4096)
    assert press(manager, "Z").status == "history_newest"


def test_pending_sequence_times_out() -> None:
    manager = make_manager()

    pending = press(manager, "g")
    assert pending.status == "pending"
    assert manager.has_pending_timeout

    results = manager.process_timeouts(now=time.monotonic() + 5)

    assert results["normal"].status == "timeout"
    assert not manager.has_pending_timeout
    assert manager.active_mode.pending == ()


def test_abandoned_prefix_retries_last_key() -> None:
    manager = make_manager()

    result = press(manager, "g", "l")

    assert result.status == "moved"
    assert manager.context.session.cursor == Cursor(1, 2)


def test_unbound_key_is_not_consumed() -> None:
    manager = make_manager()

    result = press(manager, "x")

    assert result.consumed is False
    assert result.status == "miss"


def test_quit_emits_event() -> None:
    manager = make_manager()
    quits: List[object] = []
    manager.context.bus.subscribe("app.quit", quits.append)

    press(manager, "q")
    press(manager, "ESC")

    assert len(quits) == 2


def test_command_goto_jumps_and_checkpoints() -> None:
    manager = make_manager()
    session = manager.context.session

    result = type_command(manager, "goto 0x40")

    assert result.status == "command_goto"
    assert manager.active_mode.name == "normal"
    assert session.cursor == Cursor(0x40, 0x41)
    press(manager, "z")
    assert session.cursor == Cursor(0, 1)


def test_command_width_resizes_selection() -> None:
    manager = make_manager()
    press(manager, "l", "l")

    result = type_command(manager, "w 4")

    assert result.status == "command_width"
    assert manager.context.session.cursor == Cursor(2, 6)


def test_command_errors_are_reported() -> None:
    manager = make_manager()
    errors: List[object] = []
    manager.context.bus.subscribe("command.error", errors.append)

    unknown = type_command(manager, "frobnicate")
    bad = type_command(manager, "goto nowhere")

    assert unknown.status == "command_error"
    assert bad.status == "command_error"
    assert len(errors) == 2
    assert manager.active_mode.name == "normal"


def test_command_line_editing_and_cancel() -> None:
    manager = make_manager()

    press(manager, ":", "g", "o")
    mode = manager.active_mode
    assert mode.name == "command"
    assert mode.current_command == "go"
    assert manager.context.command_line.text == "go"
    assert manager.context.command_line.active is True

    press(manager, "BACKSPACE", "BACKSPACE")
    assert mode.current_command == ""
    cancelled = press(manager, "BACKSPACE")

    assert cancelled.message == "command_cancel"
    assert manager.active_mode.name == "normal"


def test_escape_leaves_command_mode() -> None:
    manager = make_manager()

    press(manager, ":", "q", "ESC")

    assert manager.active_mode.name == "normal"
    assert manager.context.command_line.active is False
    assert manager.context.command_line.history == []


def test_parse_offset_forms() -> None:
    assert parse_offset("123") == 123
    assert parse_offset("0x7b") == 123
    assert parse_offset("0o173") == 123
    assert parse_offset("0010") == 10
    assert parse_offset("1_000") == 1000
    assert parse_offset(str(2**80)) == U64_MAX

    with pytest.raises(ValueError):
        parse_offset("-1")
    with pytest.raises(ValueError):
        parse_offset("abc")
