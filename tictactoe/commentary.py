"""Short flavour text for each move.

The text is produced by an external collaborator and has no effect on the
game. ``CommentaryFeed`` runs the collaborator off the request path and
always ends up with a string, falling back to a fixed line on any failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Optional, Sequence

import logging

from openai import OpenAI

from .board import Cell, Side
from .evaluator import Outcome

logger = logging.getLogger(__name__)

FALLBACK_COMMENTARY = "The game intensifies..."
EMPTY_REPLY_COMMENTARY = "Nice move."


class Commentator(ABC):
    """Contract for commentary providers."""

    @abstractmethod
    def describe_move(
        self,
        board: Sequence[Cell],
        index: int,
        side: Side,
        outcome: Optional[Outcome],
    ) -> str:
        """Return a short remark on the move just played."""


def status_text(outcome: Optional[Outcome]) -> str:
    if outcome is None:
        return "Game in progress."
    if outcome.is_draw:
        return "It's a draw!"
    return f"{outcome.winner.value} wins!"


def build_prompt(board: Sequence[Cell], index: int, side: Side, outcome: Optional[Outcome]) -> str:
    # Empty cells show their 1-based position so the model can refer to them
    cells = ", ".join(cell.value if cell is not None else str(i + 1) for i, cell in enumerate(board))
    return (
        "You are a witty, slightly sarcastic, but fun tic-tac-toe game master.\n"
        f"The current board state is: [{cells}] (numbers represent empty spots).\n"
        f"Player {side.value} just moved to position {index + 1}.\n"
        f"Current status: {status_text(outcome)}\n\n"
        "Provide a very short (max 15 words) commentary on the current situation. "
        "Be competitive if the computer is 'O'."
    )


class OpenAICommentator(Commentator):
    """Asks an OpenAI chat model for a one-line remark."""

    def __init__(self, api_key: Optional[str] = None, model: str = "gpt-4o-mini", client=None) -> None:
        if client is None:
            client = OpenAI(api_key=api_key)
        self.client = client
        self.model = model

    def describe_move(self, board, index, side, outcome) -> str:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": build_prompt(board, index, side, outcome)}],
            temperature=0.8,
            max_tokens=50,
        )
        content = response.choices[0].message.content or ""
        return content.strip()


class CannedCommentator(Commentator):
    """Offline commentator with fixed phrases."""

    def describe_move(self, board, index, side, outcome) -> str:
        if outcome is None:
            if index == 4:
                return f"{side.value} grabs the center. Bold."
            if index in (0, 2, 6, 8):
                return f"{side.value} takes corner {index + 1}."
            return f"{side.value} settles for edge {index + 1}."
        if outcome.is_draw:
            return "Nobody blinked. It's a draw."
        return f"{outcome.winner.value} seals it. Game over."


class CommentaryFeed:
    """Runs a commentator asynchronously and keeps the latest line.

    Only the most recent request may update ``text``; results of older
    requests are dropped when they arrive.
    """

    def __init__(
        self,
        commentator: Optional[Commentator],
        executor: Optional[Executor] = None,
        fallback: str = FALLBACK_COMMENTARY,
    ) -> None:
        self.commentator = commentator
        self.fallback = fallback
        self.text: Optional[str] = None
        self._owns_executor = executor is None and commentator is not None
        self._executor = executor
        if self._owns_executor:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="commentary")
        self._latest: Optional[Future] = None

    def request(
        self,
        board: Sequence[Cell],
        index: int,
        side: Side,
        outcome: Optional[Outcome],
    ) -> Optional[Future]:
        if self.commentator is None:
            return None
        self._latest = self._executor.submit(self._describe, tuple(board), index, side, outcome)
        return self._latest

    def _describe(self, board, index, side, outcome) -> str:
        try:
            text = self.commentator.describe_move(board, index, side, outcome)
        except Exception as exc:  # noqa: BLE001
            logger.warning("Commentary failed, using fallback: %s", exc)
            return self.fallback
        return text.strip() if text and text.strip() else EMPTY_REPLY_COMMENTARY

    def poll(self) -> Optional[str]:
        """Pick up the latest finished result, if any."""
        latest = self._latest
        if latest is not None and latest.done():
            self._latest = None
            if not latest.cancelled():
                self.text = latest.result()
        return self.text

    def clear(self) -> None:
        if self._latest is not None:
            self._latest.cancel()
        self._latest = None
        self.text = None

    def shutdown(self) -> None:
        self.clear()
        if self._owns_executor:
            self._executor.shutdown(wait=False)
