from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .geometry import Vector2


Box = tuple[float, float, float, float]


class EnemyKind(str, Enum):
    NORMAL = "normal"
    TANK = "tank"
    KAMIKAZE = "kamikaze"


class PowerUpKind(str, Enum):
    SHIELD = "shield"


@dataclass
class Bullet:
    x: float
    y: float
    r: float = 4.0
    speed: float = 7.0  # upward

    @property
    def box(self) -> Box:
        return self.x - self.r, self.y - self.r, self.r * 2, self.r * 2


@dataclass
class EnemyBullet:
    x: float
    y: float
    r: float = 4.0
    speed: float = 4.0  # downward

    @property
    def box(self) -> Box:
        return self.x - self.r, self.y - self.r, self.r * 2, self.r * 2


@dataclass
class PowerUp:
    kind: PowerUpKind
    x: float
    y: float
    size: float = 20.0
    speed: float = 2.0

    @property
    def box(self) -> Box:
        return self.x, self.y, self.size, self.size


@dataclass
class Enemy:
    """One member of a wave.

    ``kind`` selects the movement routine; the remaining fields are shared
    by all kinds, with ``origin_x``/``zigzag``/``phase`` used by Normal,
    ``speed`` rewritten every tick for Tank and ``target`` tracking the
    player centre for Kamikaze.
    """

    kind: EnemyKind
    x: float
    y: float
    w: float = 40.0
    h: float = 28.0
    health: int = 1
    score_value: int = 10
    origin_x: float = 0.0
    origin_y: float = 0.0
    zigzag: bool = False
    phase: float = 0.0
    speed: float = 1.0
    target: Optional[Vector2] = None

    @property
    def box(self) -> Box:
        return self.x, self.y, self.w, self.h

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.w / 2, self.y + self.h / 2

    @property
    def follows_group(self) -> bool:
        # Enemies that move with the shared direction and take the descend shift.
        if self.kind == EnemyKind.KAMIKAZE:
            return False
        return not (self.kind == EnemyKind.NORMAL and self.zigzag)


@dataclass
class Player:
    x: float
    y: float
    w: float = 50.0
    h: float = 20.0
    speed: float = 5.0
    shield: int = 0
    max_shield: int = 3
    triple_shot: bool = False
    triple_timer: int = 0
    bullet_speed: float = 7.0
    bullet_radius: float = 4.0
    spread: float = 10.0

    @property
    def box(self) -> Box:
        return self.x, self.y, self.w, self.h

    @property
    def center(self) -> tuple[float, float]:
        return self.x + self.w / 2, self.y + self.h / 2

    def shoot(self) -> List[Bullet]:
        bx = self.x + self.w / 2
        shots = [Bullet(bx, self.y, self.bullet_radius, self.bullet_speed)]
        if self.triple_shot:
            shots.append(Bullet(bx - self.spread, self.y, self.bullet_radius, self.bullet_speed))
            shots.append(Bullet(bx + self.spread, self.y, self.bullet_radius, self.bullet_speed))
        return shots

    def add_shield(self, amount: int = 1) -> None:
        self.shield = max(0, min(self.shield + amount, self.max_shield))

    def activate_triple_shot(self, duration: int) -> None:
        self.triple_shot = True
        self.triple_timer = duration

    def tick_triple_shot(self) -> None:
        if not self.triple_shot:
            return
        self.triple_timer -= 1
        if self.triple_timer <= 0:
            self.triple_timer = 0
            self.triple_shot = False
