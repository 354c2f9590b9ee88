from __future__ import annotations

from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple


class Side(Enum):
    """The two sides. X always moves first."""

    X = "X"
    O = "O"

    def opposite(self) -> "Side":
        return Side.O if self is Side.X else Side.X


Cell = Optional[Side]
Board = Tuple[Cell, ...]

BOARD_SIZE = 9

# Rows, columns, diagonals. Order matters: the evaluator reports the first match.
WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)


def empty_board() -> Board:
    return (None,) * BOARD_SIZE


def empty_cells(board: Sequence[Cell]) -> List[int]:
    return [i for i, cell in enumerate(board) if cell is None]


def side_to_move(board: Sequence[Cell]) -> Side:
    """X moves whenever both sides have placed the same number of marks."""
    x_count = sum(1 for cell in board if cell is Side.X)
    o_count = sum(1 for cell in board if cell is Side.O)
    return Side.X if x_count == o_count else Side.O


def place(board: Board, index: int, side: Side) -> Board:
    if board[index] is not None:
        raise ValueError(f"Cell {index} is already occupied")
    cells = list(board)
    cells[index] = side
    return tuple(cells)


def is_successor(previous: Sequence[Cell], board: Sequence[Cell]) -> bool:
    """True if ``board`` is ``previous`` plus one mark by the side to move."""
    if len(previous) != BOARD_SIZE or len(board) != BOARD_SIZE:
        return False
    changed = [i for i in range(BOARD_SIZE) if previous[i] != board[i]]
    if len(changed) != 1:
        return False
    index = changed[0]
    return previous[index] is None and board[index] is side_to_move(previous)


def board_from_symbols(symbols: Iterable[Optional[str]]) -> Board:
    """Build a board from ``"X"``/``"O"``/``None`` values (the JSON form)."""
    cells = tuple(Side(symbol) if symbol else None for symbol in symbols)
    if len(cells) != BOARD_SIZE:
        raise ValueError(f"A board has {BOARD_SIZE} cells, got {len(cells)}")
    return cells


def board_to_symbols(board: Sequence[Cell]) -> List[Optional[str]]:
    return [cell.value if cell is not None else None for cell in board]
