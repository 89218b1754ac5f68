from __future__ import annotations

from heks.selection import Cursor, CursorStack


def make_stack() -> CursorStack:
    return CursorStack(Cursor(0, 1))


def test_new_stack_holds_seed() -> None:
    stack = make_stack()

    assert stack.cursors == (Cursor(0, 1),)
    assert stack.undo_depth == 0
    assert len(stack) == 1


def test_push_top_undo_redo() -> None:
    stack = make_stack()
    assert stack.top() == Cursor(0, 1)

    stack.push(Cursor(1, 2))
    assert stack.top() == Cursor(1, 2)
    stack.push(Cursor(3, 4))
    assert stack.top() == Cursor(3, 4)

    stack.undo()
    assert stack.top() == Cursor(1, 2)
    stack.undo()
    assert stack.top() == Cursor(0, 1)
    stack.undo()
    stack.undo()
    assert stack.top() == Cursor(0, 1)
    stack.redo()
    assert stack.top() == Cursor(1, 2)
    stack.redo()
    assert stack.top() == Cursor(3, 4)
    stack.redo()
    stack.redo()
    stack.redo()
    assert stack.top() == Cursor(3, 4)


def test_set_replaces_top_and_drops_future() -> None:
    stack = make_stack()
    stack.set(Cursor(1, 2))
    assert stack.top() == Cursor(1, 2)
    stack.set(Cursor(2, 3))
    assert stack.top() == Cursor(2, 3)
    stack.undo()
    assert stack.top() == Cursor(2, 3)

    stack.push(Cursor(3, 4))
    stack.push(Cursor(5, 6))
    stack.set(Cursor(5, 16))
    assert stack.top() == Cursor(5, 16)
    stack.undo()
    assert stack.top() == Cursor(3, 4)
    stack.undo()
    assert stack.top() == Cursor(2, 3)

    stack.set(Cursor(2, 12))
    assert stack.top() == Cursor(2, 12)
    stack.redo()
    assert stack.top() == Cursor(2, 12)
    assert len(stack) == 1


def test_top_mut_edits_in_place() -> None:
    stack = make_stack()
    stack.top_mut().grow()
    assert stack.top() == Cursor(0, 2)
    stack.top_mut().grow()
    assert stack.top() == Cursor(0, 3)
    stack.undo()
    assert stack.top() == Cursor(0, 3)

    stack.push(Cursor(1, 2))
    stack.push(Cursor(2, 3))
    stack.top_mut().grow()
    assert stack.top() == Cursor(2, 4)
    stack.undo()
    assert stack.top() == Cursor(1, 2)
    stack.undo()
    assert stack.top() == Cursor(0, 3)

    stack.top_mut().grow()
    assert stack.top() == Cursor(0, 4)
    stack.redo()
    assert stack.top() == Cursor(1, 2)
    stack.redo()
    assert stack.top() == Cursor(2, 4)


def test_top_returns_a_copy() -> None:
    stack = make_stack()
    stack.top().grow()

    assert stack.top() == Cursor(0, 1)


def test_push_after_undo_keeps_undo_depth() -> None:
    stack = make_stack()
    stack.push(Cursor(1, 2))
    stack.undo()

    stack.push(Cursor(5, 6))

    assert stack.undo_depth == 1
    assert stack.top() == Cursor(1, 2)
    assert stack.cursors == (Cursor(0, 1), Cursor(1, 2), Cursor(5, 6))
    stack.redo()
    assert stack.top() == Cursor(5, 6)


def test_checkpoint_after_undo_returns_to_newest() -> None:
    stack = make_stack()
    stack.push(Cursor(1, 2))
    stack.undo()

    stack.checkpoint(Cursor(5, 6))

    assert stack.undo_depth == 0
    assert stack.top() == Cursor(5, 6)
    assert stack.cursors == (Cursor(0, 1), Cursor(5, 6))


def test_checkpoint_discards_redo_future() -> None:
    stack = make_stack()
    stack.checkpoint(Cursor(10, 11))
    stack.checkpoint(Cursor(20, 21))
    stack.undo()
    assert stack.top() == Cursor(10, 11)

    stack.checkpoint(Cursor(30, 31))

    assert stack.cursors == (Cursor(0, 1), Cursor(10, 11), Cursor(30, 31))
    assert not stack.can_redo()
    stack.undo()
    assert stack.top() == Cursor(10, 11)
    stack.undo()
    assert stack.top() == Cursor(0, 1)
    assert not stack.can_undo()


def test_checkpoint_keeps_in_place_edits_of_old_top() -> None:
    stack = make_stack()
    stack.top_mut().increment(4)

    stack.checkpoint(Cursor(100, 101))
    stack.undo()

    assert stack.top() == Cursor(4, 5)


def test_can_undo_and_redo_flags() -> None:
    stack = make_stack()
    assert not stack.can_undo()
    assert not stack.can_redo()

    stack.push(Cursor(1, 2))
    assert stack.can_undo()
    stack.undo()
    assert stack.can_redo()
    assert not stack.can_undo()
