from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .board import WINNING_LINES, Cell, Side


@dataclass(frozen=True)
class Outcome:
    """A finished game: ``winner`` is None for a draw."""

    winner: Optional[Side]
    line: Optional[Tuple[int, int, int]] = None

    @property
    def is_draw(self) -> bool:
        return self.winner is None

    def label(self) -> str:
        return "draw" if self.winner is None else self.winner.value


DRAW = Outcome(winner=None)


class Evaluator:
    """Static evaluation for tic-tac-toe positions.

    Returns ``None`` while the game continues, otherwise the ``Outcome``.
    Lines are checked in ``WINNING_LINES`` order and the first complete one is
    reported.
    """

    @classmethod
    def evaluate(cls, board: Sequence[Cell]) -> Optional[Outcome]:
        for line in WINNING_LINES:
            a, b, c = line
            if board[a] is not None and board[a] == board[b] == board[c]:
                return Outcome(winner=board[a], line=line)
        if all(cell is not None for cell in board):
            return DRAW
        return None
