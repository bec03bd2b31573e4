"""Enemy roster generation for one level.

Each grid cell draws its enemy kind from ``SPAWN_RULES``, an ordered table
evaluated top to bottom; the first matching rule wins and a cell no rule
claims becomes a Normal. Afterwards the Kamikaze and Tank counts are
capped by demoting the earliest offenders back to Normals.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Optional

from .config import Settings, WaveConfig
from .entities import Enemy, EnemyKind
from .factories import create_enemy

log = logging.getLogger(__name__)


class _Rolls:
    """Two lazily drawn uniform rolls for one grid cell."""

    def __init__(self, rng: random.Random) -> None:
        self.rng = rng
        self._first: Optional[float] = None
        self._second: Optional[float] = None

    @property
    def first(self) -> float:
        if self._first is None:
            self._first = self.rng.random()
        return self._first

    @property
    def second(self) -> float:
        if self._second is None:
            self._second = self.rng.random()
        return self._second


def normal_chance(cfg: WaveConfig, level: int, col: int) -> float:
    return cfg.normal_chance if level < cfg.kamikaze_level else cfg.late_normal_chance


def tank_chance(cfg: WaveConfig, level: int, col: int) -> float:
    return cfg.tank_column_chance if col % 3 == 0 else cfg.tank_chance


def kamikaze_chance(cfg: WaveConfig, level: int, col: int) -> float:
    return tank_chance(cfg, level, col) + cfg.kamikaze_chance


@dataclass(frozen=True)
class SpawnRule:
    kind: EnemyKind
    min_level: Callable[[WaveConfig], int]
    chance: Callable[[WaveConfig, int, int], float]
    use_second_roll: bool

    def matches(self, cfg: WaveConfig, level: int, col: int, rolls: _Rolls) -> bool:
        if level < self.min_level(cfg):
            return False
        roll = rolls.second if self.use_second_roll else rolls.first
        return roll < self.chance(cfg, level, col)


SPAWN_RULES: tuple[SpawnRule, ...] = (
    SpawnRule(EnemyKind.NORMAL, lambda cfg: 1, normal_chance, use_second_roll=False),
    SpawnRule(EnemyKind.TANK, lambda cfg: cfg.tank_level, tank_chance, use_second_roll=True),
    SpawnRule(EnemyKind.KAMIKAZE, lambda cfg: cfg.kamikaze_level, kamikaze_chance, use_second_roll=True),
)


def pick_kind(cfg: WaveConfig, level: int, col: int, rng: random.Random) -> EnemyKind:
    rolls = _Rolls(rng)
    for rule in SPAWN_RULES:
        if rule.matches(cfg, level, col, rolls):
            return rule.kind
    return EnemyKind.NORMAL


def kamikaze_cap(level: int) -> int:
    return 2 + level // 2


def tank_cap(level: int) -> int:
    return 2 + level // 3


def grid_size(level: int, settings: Settings, width: Optional[float] = None) -> tuple[int, int]:
    rows = 3 + level // 2
    cols = 5 + level
    if width is not None:
        wv = settings.wave
        fit = int((width - wv.origin_x - settings.enemy.width) // wv.spacing_x) + 1
        cols = max(1, min(cols, fit))
    return rows, cols


def apply_cap(roster: List[Enemy], kind: EnemyKind, cap: int, settings: Settings, enemy_speed: float) -> int:
    """Demote the first ``kind`` enemies in roster order until at most ``cap`` remain."""
    count = sum(1 for e in roster if e.kind == kind)
    demoted = 0
    while count > cap:
        for i, e in enumerate(roster):
            if e.kind == kind:
                roster[i] = create_enemy(settings, EnemyKind.NORMAL, e.x, e.y, enemy_speed)
                break
        count -= 1
        demoted += 1
    return demoted


def generate_wave(
    level: int,
    settings: Settings,
    rng: random.Random,
    width: Optional[float] = None,
    enemy_speed: float = 1.0,
) -> List[Enemy]:
    wv = settings.wave
    rows, cols = grid_size(level, settings, width)
    roster: List[Enemy] = []
    for row in range(rows):
        for col in range(cols):
            x = wv.origin_x + col * wv.spacing_x
            y = wv.origin_y + row * wv.spacing_y
            kind = pick_kind(wv, level, col, rng)
            roster.append(create_enemy(settings, kind, x, y, enemy_speed))

    demoted = apply_cap(roster, EnemyKind.KAMIKAZE, kamikaze_cap(level), settings, enemy_speed)
    demoted += apply_cap(roster, EnemyKind.TANK, tank_cap(level), settings, enemy_speed)

    log.debug(
        "wave level=%d grid=%dx%d demoted=%d normal=%d tank=%d kamikaze=%d",
        level, rows, cols, demoted,
        sum(1 for e in roster if e.kind == EnemyKind.NORMAL),
        sum(1 for e in roster if e.kind == EnemyKind.TANK),
        sum(1 for e in roster if e.kind == EnemyKind.KAMIKAZE),
    )
    return roster
