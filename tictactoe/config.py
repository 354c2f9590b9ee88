from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import os

from dotenv import load_dotenv

from .ai import Strength
from .board import Side
from .commentary import CannedCommentator, Commentator, OpenAICommentator
from .game import GameMode, GameSettings


@dataclass
class AppConfig:
    """Runtime settings, read from the environment (and a ``.env`` file if present)."""

    engine_delay: float = 0.6
    mode: GameMode = GameMode.HUMAN_VS_ENGINE
    strength: Strength = Strength.HIGH
    player_x: str = "Player X"
    player_o: str = "Player O"
    openai_api_key: Optional[str] = None
    commentary_model: str = "gpt-4o-mini"

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "AppConfig":
        if load_dotenv_file:
            load_dotenv()
        delay_raw = os.getenv("TTT_ENGINE_DELAY", "0.6")
        try:
            delay = float(delay_raw)
        except ValueError:
            raise ValueError(f"TTT_ENGINE_DELAY must be a number, got {delay_raw!r}") from None
        if delay < 0:
            raise ValueError("TTT_ENGINE_DELAY must not be negative")
        return cls(
            engine_delay=delay,
            mode=GameMode.parse(os.getenv("TTT_MODE", GameMode.HUMAN_VS_ENGINE.value)),
            strength=Strength.parse(os.getenv("TTT_STRENGTH", Strength.HIGH.value)),
            player_x=os.getenv("TTT_PLAYER_X", "Player X"),
            player_o=os.getenv("TTT_PLAYER_O", "Player O"),
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            commentary_model=os.getenv("TTT_COMMENTARY_MODEL", "gpt-4o-mini"),
        )

    def game_settings(self) -> GameSettings:
        return GameSettings(
            mode=self.mode,
            strength=self.strength,
            names={Side.X: self.player_x, Side.O: self.player_o},
        )

    def make_commentator(self) -> Commentator:
        if self.openai_api_key:
            return OpenAICommentator(api_key=self.openai_api_key, model=self.commentary_model)
        return CannedCommentator()
