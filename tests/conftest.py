from __future__ import annotations

from concurrent.futures import Executor, Future

import pytest

from tictactoe import Game, GameMode, GameSettings
from tictactoe.scheduler import Scheduler


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ImmediateExecutor(Executor):
    """Runs submitted work inline so commentary results are ready at once."""

    def submit(self, fn, *args, **kwargs):
        future: Future = Future()
        try:
            future.set_result(fn(*args, **kwargs))
        except Exception as exc:  # noqa: BLE001
            future.set_exception(exc)
        return future


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def pvp_game(clock):
    game = Game(settings=GameSettings(mode=GameMode.HUMAN_VS_HUMAN), scheduler=Scheduler(clock))
    yield game
    game.close()


@pytest.fixture
def pve_game(clock):
    game = Game(settings=GameSettings(mode=GameMode.HUMAN_VS_ENGINE), scheduler=Scheduler(clock))
    yield game
    game.close()
