from __future__ import annotations

import pytest

from tictactoe.board import Side, empty_board, place
from tictactoe.history import IllegalSnapshotError, Timeline


def _play(timeline, *cells):
    board = timeline.current
    side = Side.X if timeline.step % 2 == 0 else Side.O
    for cell in cells:
        board = place(board, cell, side)
        timeline.append(board)
        side = side.opposite()
    return board


def test_starts_with_single_empty_snapshot():
    timeline = Timeline()
    assert len(timeline) == 1
    assert timeline.current == empty_board()
    assert not timeline.can_undo and not timeline.can_redo
    assert timeline.undo() == 0
    assert timeline.redo() is False


def test_append_after_undo_drops_redo_tail():
    timeline = Timeline()
    _play(timeline, 4, 0)
    discarded = timeline.snapshots[2]
    assert timeline.undo() == 1
    assert timeline.can_redo

    _play(timeline, 8)
    assert len(timeline) == 3
    assert timeline.step == 2
    assert not timeline.can_redo
    assert timeline.redo() is False
    assert discarded not in timeline.snapshots
    assert timeline.current[8] is Side.O


def test_rejects_snapshots_that_are_not_one_move_later():
    timeline = Timeline()
    _play(timeline, 4)
    before = list(timeline.snapshots)

    with pytest.raises(IllegalSnapshotError):
        timeline.append(timeline.current)  # no change
    with pytest.raises(IllegalSnapshotError):
        timeline.append(place(timeline.current, 0, Side.X))  # wrong side
    with pytest.raises(IllegalSnapshotError):
        timeline.append(place(place(timeline.current, 0, Side.O), 1, Side.X))  # two cells
    with pytest.raises(ValueError):
        timeline.append(empty_board())

    assert timeline.snapshots == before
    assert timeline.step == 1


def test_undo_skipping_the_reply():
    timeline = Timeline()
    _play(timeline, 4, 0)
    assert timeline.undo(skip_reply=True) == 2
    assert timeline.step == 0

    timeline.redo()
    timeline.redo()
    _play(timeline, 8)
    # O to move: only one ply goes back even when skipping replies
    assert timeline.undo(skip_reply=True) == 1
    assert timeline.step == 2


def test_undo_single_ply_without_skip():
    timeline = Timeline()
    _play(timeline, 4, 0)
    assert timeline.undo() == 1
    assert timeline.step == 1
    assert timeline.current == place(empty_board(), 4, Side.X)


def test_skip_reply_needs_two_plies():
    timeline = Timeline()
    _play(timeline, 4)
    assert timeline.undo(skip_reply=True) == 1
    assert timeline.step == 0


def test_redo_walks_forward_then_stops():
    timeline = Timeline()
    final = _play(timeline, 0, 1, 2)
    while timeline.undo():
        pass
    assert timeline.step == 0
    assert timeline.redo() and timeline.redo() and timeline.redo()
    assert timeline.redo() is False
    assert timeline.current == final
    assert timeline.is_at_latest


def test_reset():
    timeline = Timeline()
    _play(timeline, 0, 1, 2)
    timeline.undo()
    timeline.reset()
    assert len(timeline) == 1
    assert timeline.step == 0
    assert timeline.current == empty_board()
