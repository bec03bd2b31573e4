from __future__ import annotations

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .config import Settings
from .entities import Bullet, Enemy, EnemyBullet, Player, PowerUp


class GamePhase(str, Enum):
    START_SCREEN = "start_screen"
    PLAYING = "playing"
    GAME_OVER = "game_over"


class SoundCue(str, Enum):
    SHOT_FIRED = "shotFired"
    ENEMY_DESTROYED = "enemyDestroyed"
    SHIELD_HIT = "shieldHit"
    PLAYER_DESTROYED = "playerDestroyed"


@dataclass
class InputState:
    # level signals
    move_left: bool = False
    move_right: bool = False
    # edge events, consumed by one tick
    confirm: bool = False
    fire: bool = False


@dataclass
class TickEvents:
    explosions: List[tuple[float, float]] = field(default_factory=list)
    powerups: List[PowerUp] = field(default_factory=list)
    sounds: List[SoundCue] = field(default_factory=list)


@dataclass
class SessionState:
    player: Player
    width: float = 960.0
    height: float = 720.0
    phase: GamePhase = GamePhase.START_SCREEN
    level: int = 1
    score: int = 0
    highscore: int = 0
    enemy_direction: int = 1
    enemy_speed: float = 1.0
    enemy_shoot_timer: int = 0
    enemies: List[Enemy] = field(default_factory=list)
    bullets: List[Bullet] = field(default_factory=list)
    enemy_bullets: List[EnemyBullet] = field(default_factory=list)
    powerups: List[PowerUp] = field(default_factory=list)
    settings: Settings = field(default_factory=Settings)
    rng: random.Random = field(default_factory=random.Random)


@dataclass
class FrameContext:
    """Per-frame hand-off between the pygame processors."""

    raw_events: list = field(default_factory=list)
    intent: InputState = field(default_factory=InputState)
    events: TickEvents = field(default_factory=TickEvents)
