from __future__ import annotations

from typing import List

from .board import Board, empty_board, is_successor


class IllegalSnapshotError(ValueError):
    """Raised when a snapshot is not a single legal move after the current one."""


class Timeline:
    """Board snapshots of one game plus a cursor for undo/redo.

    ``snapshots[0]`` is always the empty board. Appending while the cursor is
    behind the last snapshot drops everything after the cursor first.
    """

    def __init__(self) -> None:
        self.snapshots: List[Board] = [empty_board()]
        self.cursor: int = 0

    def __len__(self) -> int:
        return len(self.snapshots)

    @property
    def current(self) -> Board:
        return self.snapshots[self.cursor]

    @property
    def step(self) -> int:
        return self.cursor

    @property
    def can_undo(self) -> bool:
        return self.cursor > 0

    @property
    def can_redo(self) -> bool:
        return self.cursor < len(self.snapshots) - 1

    @property
    def is_at_latest(self) -> bool:
        return not self.can_redo

    def append(self, board: Board) -> None:
        board = tuple(board)
        if not is_successor(self.current, board):
            raise IllegalSnapshotError(
                f"Snapshot at step {self.cursor + 1} is not a single move after step {self.cursor}"
            )
        del self.snapshots[self.cursor + 1:]
        self.snapshots.append(board)
        self.cursor += 1

    def undo(self, skip_reply: bool = False) -> int:
        """Step back and return how many plies were undone.

        With ``skip_reply`` and X to move, the opponent's reply is undone
        together with X's previous move.
        """
        if self.cursor == 0:
            return 0
        plies = 2 if skip_reply and self.cursor >= 2 and self.cursor % 2 == 0 else 1
        self.cursor -= plies
        return plies

    def redo(self) -> bool:
        if not self.can_redo:
            return False
        self.cursor += 1
        return True

    def reset(self) -> None:
        self.snapshots = [empty_board()]
        self.cursor = 0
