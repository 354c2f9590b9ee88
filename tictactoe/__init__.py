"""Tic-tac-toe engine package providing the board, evaluation, search and session state.

Modules:
- board: Cells, sides and the winning-line table
- evaluator: Win/draw detection
- ai: Full-depth minimax with strength-based randomization
- history: Snapshot timeline with undo/redo
- game: Session controller (turns, scores, settings, engine replies)
- commentary: Optional flavour text for each move
"""

from .ai import AIPlayer, Strength
from .board import Side
from .evaluator import Evaluator, Outcome
from .game import Game, GameMode, GameSettings
from .history import IllegalSnapshotError, Timeline

__all__ = [
    "AIPlayer",
    "Evaluator",
    "Game",
    "GameMode",
    "GameSettings",
    "IllegalSnapshotError",
    "Outcome",
    "Side",
    "Strength",
    "Timeline",
]
