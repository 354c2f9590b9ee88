from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional

import logging

from .ai import AIPlayer, Strength
from .board import Board, Side, board_to_symbols, place
from .commentary import CommentaryFeed
from .evaluator import Evaluator, Outcome
from .history import Timeline
from .scheduler import ScheduledTask, Scheduler

logger = logging.getLogger(__name__)


class GameMode(Enum):
    HUMAN_VS_HUMAN = "human_vs_human"
    HUMAN_VS_ENGINE = "human_vs_engine"

    @classmethod
    def parse(cls, value: "str | GameMode") -> "GameMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown mode {value!r} (expected one of: {choices})") from None


def _default_names() -> Dict[Side, str]:
    return {Side.X: "Player X", Side.O: "Player O"}


@dataclass
class GameSettings:
    mode: GameMode = GameMode.HUMAN_VS_ENGINE
    strength: Strength = Strength.HIGH
    names: Dict[Side, str] = field(default_factory=_default_names)


@dataclass
class Scores:
    x: int = 0
    o: int = 0
    draws: int = 0

    def record(self, outcome: Outcome) -> None:
        if outcome.is_draw:
            self.draws += 1
        elif outcome.winner is Side.X:
            self.x += 1
        else:
            self.o += 1

    def reset(self) -> None:
        self.x = self.o = self.draws = 0

    def leader(self) -> Optional[Side]:
        if self.x > self.o:
            return Side.X
        if self.o > self.x:
            return Side.O
        return None

    def as_dict(self) -> Dict[str, int]:
        return {"X": self.x, "O": self.o, "draw": self.draws}


@dataclass
class MoveLogEntry:
    side: Side
    name: str
    position: int  # 1-based cell

    def as_dict(self) -> Dict[str, object]:
        return {"side": self.side.value, "name": self.name, "position": self.position}


class Game:
    """One play session: the timeline, the move log, scores and settings.

    Front ends call the command methods and read ``snapshot()`` afterwards.
    In human-vs-engine mode the engine plays O; its reply is scheduled on
    ``scheduler`` and applied when the front end calls ``poll()`` after the
    delay has passed. Every reset, settings change or timeline navigation
    bumps ``generation`` so an engine move scheduled before it is dropped.
    """

    ENGINE_SIDE = Side.O

    def __init__(
        self,
        settings: Optional[GameSettings] = None,
        ai: Optional[AIPlayer] = None,
        scheduler: Optional[Scheduler] = None,
        commentary: Optional[CommentaryFeed] = None,
        engine_delay: float = 0.6,
    ) -> None:
        self.settings = settings or GameSettings()
        self.ai = ai or AIPlayer()
        self.scheduler = scheduler or Scheduler()
        self.commentary = commentary or CommentaryFeed(None)
        self.engine_delay = engine_delay
        self.timeline = Timeline()
        self.move_log: List[MoveLogEntry] = []
        self.scores = Scores()
        self.generation = 0
        self._pending_engine: Optional[ScheduledTask] = None

    # --- read side -------------------------------------------------------

    @property
    def board(self) -> Board:
        return self.timeline.current

    @property
    def turn(self) -> Side:
        return Side.X if self.timeline.step % 2 == 0 else Side.O

    @property
    def outcome(self) -> Optional[Outcome]:
        return Evaluator.evaluate(self.board)

    def is_game_over(self) -> bool:
        return self.outcome is not None

    @property
    def engine_thinking(self) -> bool:
        return self._pending_engine is not None

    def snapshot(self) -> Dict[str, object]:
        outcome = self.outcome
        leader = self.scores.leader()
        return {
            "board": board_to_symbols(self.board),
            "turn": self.turn.value,
            "game_over": outcome is not None,
            "result": outcome.label() if outcome else None,
            "winning_line": list(outcome.line) if outcome and outcome.line else None,
            "scores": self.scores.as_dict(),
            "leader": leader.value if leader else None,
            "step": self.timeline.step,
            "can_undo": self.timeline.can_undo,
            "can_redo": self.timeline.can_redo,
            "engine_thinking": self.engine_thinking,
            "mode": self.settings.mode.value,
            "strength": self.settings.strength.value,
            "names": {side.value: name for side, name in self.settings.names.items()},
            "move_log": [entry.as_dict() for entry in self.move_log],
            "commentary": self.commentary.text,
        }

    # --- commands --------------------------------------------------------

    def request_move(self, index: int) -> bool:
        """Place the current side's mark at ``index``. Returns False if ignored."""
        if self.engine_thinking:
            logger.debug("Ignoring move %r: engine is deciding", index)
            return False
        return self._apply_move(index)

    def undo(self) -> int:
        self._invalidate_pending()
        skip_reply = self.settings.mode is GameMode.HUMAN_VS_ENGINE
        plies = self.timeline.undo(skip_reply=skip_reply)
        self._maybe_schedule_engine()
        return plies

    def redo(self) -> bool:
        self._invalidate_pending()
        moved = self.timeline.redo()
        self._maybe_schedule_engine()
        return moved

    def reset_game(self) -> None:
        self._invalidate_pending()
        self.timeline.reset()
        self.move_log = []
        self.commentary.clear()
        logger.info("New game (%s, %s)", self.settings.mode.value, self.settings.strength.value)

    def reset_scores(self) -> None:
        self.scores.reset()

    def update_settings(
        self,
        mode: "str | GameMode | None" = None,
        strength: "str | Strength | None" = None,
        names: Optional[Mapping] = None,
    ) -> bool:
        """Apply new settings. Returns True if the game was reset.

        A different mode or strength starts a new game; names alone do not.
        """
        new_mode = GameMode.parse(mode) if mode is not None else self.settings.mode
        new_strength = Strength.parse(strength) if strength is not None else self.settings.strength
        if names:
            renamed = {Side(key): str(name) for key, name in names.items()}
            self.settings.names.update(renamed)

        if new_mode is self.settings.mode and new_strength is self.settings.strength:
            return False
        logger.info("Settings changed: mode=%s strength=%s", new_mode.value, new_strength.value)
        self.settings.mode = new_mode
        self.settings.strength = new_strength
        self.reset_game()
        return True

    def poll(self) -> int:
        """Run due engine moves and pick up finished commentary."""
        ran = self.scheduler.run_due()
        self.commentary.poll()
        return ran

    def close(self) -> None:
        self._invalidate_pending()
        self.scheduler.cancel_all()
        self.commentary.shutdown()

    # --- internals -------------------------------------------------------

    def _apply_move(self, index: int) -> bool:
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < 9:
            logger.debug("Ignoring move %r: not a cell index", index)
            return False
        if self.is_game_over():
            logger.debug("Ignoring move %s: game is over", index)
            return False
        board = self.board
        if board[index] is not None:
            logger.debug("Ignoring move %s: cell occupied", index)
            return False

        side = self.turn
        step = self.timeline.step
        new_board = place(board, index, side)
        self.timeline.append(new_board)
        del self.move_log[step:]
        self.move_log.append(MoveLogEntry(side=side, name=self.settings.names[side], position=index + 1))

        outcome = Evaluator.evaluate(new_board)
        if outcome is not None:
            self.scores.record(outcome)
            logger.info("Game finished: %s", outcome.label())
        self.commentary.request(new_board, index, side, outcome)
        self._maybe_schedule_engine()
        return True

    def _maybe_schedule_engine(self) -> None:
        if self._pending_engine is not None:
            return
        if self.settings.mode is not GameMode.HUMAN_VS_ENGINE:
            return
        if self.turn is not self.ENGINE_SIDE or not self.timeline.is_at_latest:
            return
        if self.is_game_over():
            return
        generation = self.generation
        self._pending_engine = self.scheduler.call_later(
            self.engine_delay, lambda: self._play_engine_move(generation)
        )

    def _play_engine_move(self, generation: int) -> None:
        if generation != self.generation:
            logger.debug("Dropping engine move from generation %s", generation)
            return
        # Human input stays blocked until the engine's mark is on the board
        try:
            index = self.ai.choose_move(self.board, self.settings.strength)
            if generation != self.generation or self.turn is not self.ENGINE_SIDE:
                logger.debug("Dropping engine move %s: position changed while deciding", index)
                return
            self._apply_move(index)
        finally:
            if generation == self.generation:
                self._pending_engine = None

    def _invalidate_pending(self) -> None:
        self.generation += 1
        if self._pending_engine is not None:
            self._pending_engine.cancel()
            self._pending_engine = None
