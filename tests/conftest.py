from __future__ import annotations

import random

import pytest

from galaxywars.config import Settings
from galaxywars.context import GamePhase, SessionState
from galaxywars.entities import EnemyKind
from galaxywars.factories import create_enemy, create_player


class ScriptedRng(random.Random):
    """Random source whose ``random()`` replays a script, then a fixed default."""

    def __init__(self, values=(), default: float = 0.99) -> None:
        super().__init__(0)
        self.values = list(values)
        self.default = default

    def random(self) -> float:
        if self.values:
            return self.values.pop(0)
        return self.default


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def make_state(settings):
    def _make(enemies=(), width=800.0, height=600.0, rng=None, level=1):
        state = SessionState(
            player=create_player(settings, width, height),
            width=width,
            height=height,
            phase=GamePhase.PLAYING,
            level=level,
            settings=settings,
            rng=rng or ScriptedRng(),
        )
        state.enemies = list(enemies)
        return state
    return _make


@pytest.fixture
def enemy(settings):
    def _enemy(kind=EnemyKind.NORMAL, x=100.0, y=60.0, zigzag=False):
        e = create_enemy(settings, kind, x, y)
        e.zigzag = zigzag
        return e
    return _enemy
