from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

import logging
import random

from .board import Cell, Side, empty_cells, side_to_move
from .evaluator import Evaluator

logger = logging.getLogger(__name__)

WIN_SCORE = 10


class Strength(Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, value: "str | Strength") -> "Strength":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ValueError(f"Unknown strength {value!r} (expected one of: {choices})") from None


@dataclass
class SearchResult:
    best_move: Optional[int]
    score: int
    nodes: int
    scored_moves: Optional[List[Tuple[int, int]]] = None


class AIPlayer:
    """Full-depth minimax with a transposition table and strength-based randomization.

    The side to move on the board handed to ``choose_move`` is the maximizing
    side. A win scores ``10 - depth`` and a loss ``depth - 10`` where depth
    counts the plies searched below the root move, so faster wins and slower
    losses are preferred.
    """

    MEDIUM_RANDOM_CHANCE = 0.5

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()
        # key: (board, depth, maximizing side) -> score
        self.transposition_table: Dict[Tuple[Tuple[Cell, ...], int, Side], int] = {}

    def choose_move(self, board: Sequence[Cell], strength: Strength = Strength.HIGH) -> int:
        """Pick a cell index for the side to move.

        Low strength always plays a random empty cell, Medium does so half of
        the time, High always plays the minimax choice.
        """
        available = empty_cells(board)
        if not available or Evaluator.evaluate(board) is not None:
            raise ValueError("No move to choose: the game is already over")

        strength = Strength.parse(strength)
        if strength is Strength.LOW:
            return self.rng.choice(available)
        if strength is Strength.MEDIUM and self.rng.random() < self.MEDIUM_RANDOM_CHANCE:
            return self.rng.choice(available)

        result = self.search(board)
        logger.debug(
            "minimax picked %s (score %s, %s nodes)", result.best_move, result.score, result.nodes
        )
        return result.best_move

    def search(self, board: Sequence[Cell]) -> SearchResult:
        """Score every root move; the first move with the best score wins ties."""
        me = side_to_move(board)
        search_board = list(board)
        best_score = -10**9
        best_move: Optional[int] = None
        nodes = 0
        scored_moves: List[Tuple[int, int]] = []

        for index in empty_cells(search_board):
            search_board[index] = me
            try:
                score, sub_nodes = self._minimax(search_board, 0, maximizing=False, me=me)
                nodes += sub_nodes + 1
            finally:
                # Always restore the cell so the scratch board stays pristine
                search_board[index] = None
            scored_moves.append((index, score))
            if score > best_score:
                best_score = score
                best_move = index

        return SearchResult(best_move=best_move, score=best_score, nodes=nodes, scored_moves=scored_moves)

    def _minimax(self, board: List[Cell], depth: int, maximizing: bool, me: Side) -> Tuple[int, int]:
        key = (tuple(board), depth, me)
        if key in self.transposition_table:
            return self.transposition_table[key], 0

        outcome = Evaluator.evaluate(board)
        if outcome is not None:
            if outcome.winner is me:
                score = WIN_SCORE - depth
            elif outcome.winner is None:
                score = 0
            else:
                score = depth - WIN_SCORE
            self.transposition_table[key] = score
            return score, 1

        nodes = 0
        mover = me if maximizing else me.opposite()
        value = -10**9 if maximizing else 10**9
        for index in empty_cells(board):
            board[index] = mover
            try:
                score, child_nodes = self._minimax(board, depth + 1, not maximizing, me)
                nodes += child_nodes + 1
            finally:
                board[index] = None
            value = max(value, score) if maximizing else min(value, score)

        self.transposition_table[key] = value
        return value, nodes
