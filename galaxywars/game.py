from __future__ import annotations

import logging
import random

import esper
import pygame

from .config import Settings, load_settings
from .context import FrameContext
from .controller import GameController
from .effects import ExplosionSystem, StarfieldSystem, spawn_starfield
from .meta import HighscoreStore
from .systems import AudioSystem, InputSystem, RenderSystem, SimulationSystem
from .ui import GameUI

log = logging.getLogger(__name__)


class Game:
    def __init__(self, settings: Settings) -> None:
        self.settings = settings
        self.world = esper.World()
        self.clock = pygame.time.Clock()
        w, h = settings.window.width, settings.window.height
        self.screen = pygame.display.set_mode((w, h), pygame.RESIZABLE)
        pygame.display.set_caption(settings.window.title)

        self.store = HighscoreStore(settings.meta.save_path, settings.meta.highscore_key)
        self.rng = random.Random()
        self.controller = GameController(settings, self.store, w, h, rng=self.rng)
        self.frame = FrameContext()
        self.ui = GameUI(w, h)

        self._setup_world()

    def _setup_world(self) -> None:
        state = self.controller.state
        spawn_starfield(self.world, state.width, state.height, self.rng)

        self.world.add_processor(InputSystem(self.frame, self.controller), priority=100)
        self.world.add_processor(SimulationSystem(self.frame, self.controller), priority=90)
        self.world.add_processor(ExplosionSystem(self.frame, self.rng), priority=80)
        self.world.add_processor(StarfieldSystem(lambda: self.controller.state, self.rng), priority=70)
        self.world.add_processor(AudioSystem(self.frame), priority=60)
        self.world.add_processor(RenderSystem(self.controller, self.screen), priority=0)

    def _resize(self, width: int, height: int) -> None:
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        self.controller.resize(width, height)
        self.ui.resize(width, height)
        log.info("field resized to %dx%d", width, height)

    def run(self) -> None:
        running = True
        fps = self.settings.window.fps
        while running:
            dt = self.clock.tick(fps) / 1000.0
            events = pygame.event.get()
            self.frame.raw_events = events
            for event in events:
                self.ui.process_event(event)
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
                elif event.type == pygame.VIDEORESIZE:
                    self._resize(event.w, event.h)

            # one simulation tick per rendered frame
            self.world.process()

            self.ui.update_hud(self.controller.state)
            self.ui.update(dt)
            self.ui.draw(pygame.display.get_surface())
            pygame.display.flip()

    @staticmethod
    def init_pygame():
        pygame.init()


def run_game() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    Game.init_pygame()
    settings = load_settings()
    game = Game(settings)
    try:
        game.run()
    finally:
        pygame.quit()


if __name__ == "__main__":
    run_game()
