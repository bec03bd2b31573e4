from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Optional

from .config import Settings
from .context import GamePhase, InputState, SessionState, TickEvents
from .factories import create_player
from .geometry import clamp
from .meta import HighscoreStore
from .simulation import step
from .waves import generate_wave

log = logging.getLogger(__name__)


def level_speed(settings: Settings, level: int) -> float:
    d = settings.difficulty
    return min(d.base_speed + level * d.speed_step, d.speed_cap)


def create_session(
    settings: Settings,
    width: float,
    height: float,
    highscore: int = 0,
    rng: Optional[random.Random] = None,
) -> SessionState:
    rng = rng or random.Random()
    state = SessionState(
        player=create_player(settings, width, height),
        width=width,
        height=height,
        highscore=highscore,
        enemy_speed=settings.difficulty.base_speed,
        settings=settings,
        rng=rng,
    )
    state.enemies = generate_wave(state.level, settings, rng, width, state.enemy_speed)
    return state


class GameController:
    """Phase machine around the simulation: start screen, play, game over."""

    def __init__(
        self,
        settings: Settings,
        store: HighscoreStore,
        width: Optional[float] = None,
        height: Optional[float] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.settings = settings
        self.store = store
        self.rng = rng or random.Random()
        w = settings.window.width if width is None else width
        h = settings.window.height if height is None else height
        self.state = create_session(settings, w, h, store.load(), self.rng)
        self._auto_fire_timer = 0

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    def reset(self) -> None:
        s = self.state
        self.state = create_session(self.settings, s.width, s.height, s.highscore, self.rng)
        self._auto_fire_timer = 0

    def start(self) -> None:
        if self.state.phase == GamePhase.GAME_OVER:
            self.reset()
        self.state.phase = GamePhase.PLAYING
        log.info("game started")

    def resize(self, width: float, height: float) -> None:
        s = self.state
        s.width, s.height = width, height
        p = s.player
        p.y = height - p.h - self.settings.player.bottom_margin
        p.x = clamp(p.x, 0, max(0.0, width - p.w))
        self._pull_in_swayers()

    def _pull_in_swayers(self) -> None:
        # Zigzag rows ignore the edge bounce, so keep their sway inside the field.
        s = self.state
        amp = self.settings.enemy.zigzag_amplitude
        for e in s.enemies:
            if not e.zigzag:
                continue
            limit = max(amp, s.width - e.w - amp)
            if e.origin_x > limit:
                e.origin_x = limit
                e.x = clamp(e.x, 0, max(0.0, s.width - e.w))

    def advance_level(self) -> None:
        s = self.state
        s.level += 1
        s.enemy_speed = level_speed(self.settings, s.level)
        s.enemies = generate_wave(s.level, self.settings, self.rng, s.width, s.enemy_speed)
        log.info("level %d, enemy speed %.2f", s.level, s.enemy_speed)

    def _on_game_over(self) -> None:
        s = self.state
        if s.score > s.highscore:
            s.highscore = s.score
            self.store.save(s.score)
            log.info("new highscore %d", s.score)

    def _auto_fire(self) -> bool:
        interval = self.settings.input.auto_fire_interval
        if interval <= 0:
            return False
        self._auto_fire_timer += 1
        if self._auto_fire_timer < interval:
            return False
        self._auto_fire_timer = 0
        return True

    def tick(self, intent: Optional[InputState] = None) -> TickEvents:
        intent = intent or InputState()
        if self.state.phase != GamePhase.PLAYING:
            if intent.confirm or intent.fire:
                self.start()
            # the transition edge never doubles as a shot
            return TickEvents()

        if self._auto_fire():
            intent = replace(intent, fire=True)
        events = step(self.state, intent)

        if self.state.phase == GamePhase.GAME_OVER:
            self._on_game_over()
        elif not self.state.enemies:
            self.advance_level()
        return events
