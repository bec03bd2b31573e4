from __future__ import annotations

from pathlib import Path
from typing import Optional

import pygame
import pygame_gui

from .context import GamePhase, SessionState

SCREEN_TEXT = {
    GamePhase.START_SCREEN: ("Galaxy Wars", "Press [Space] to begin"),
    GamePhase.GAME_OVER: ("GAME OVER", "Press [Space] to restart"),
}


class GameUI:
    def __init__(self, width: int, height: int) -> None:
        theme_path = Path('assets/ui/theme.json')
        self.manager = pygame_gui.UIManager((width, height), theme_path if theme_path.exists() else None)
        self.width = width
        self.height = height

        self.score_label: Optional[pygame_gui.elements.UILabel] = None
        self.level_label: Optional[pygame_gui.elements.UILabel] = None
        self.highscore_label: Optional[pygame_gui.elements.UILabel] = None
        self.shield_label: Optional[pygame_gui.elements.UILabel] = None
        self.power_label: Optional[pygame_gui.elements.UILabel] = None
        self.title_label: Optional[pygame_gui.elements.UILabel] = None
        self.subtitle_label: Optional[pygame_gui.elements.UILabel] = None

    def process_event(self, event: pygame.event.Event) -> None:
        self.manager.process_events(event)

    def update(self, dt: float) -> None:
        self.manager.update(dt)

    def draw(self, surface: pygame.Surface) -> None:
        self.manager.draw_ui(surface)

    def resize(self, width: int, height: int) -> None:
        self.width, self.height = width, height
        self.manager.set_window_resolution((width, height))
        # rebuilt lazily at the new anchors
        for label in (self.score_label, self.level_label, self.highscore_label,
                      self.shield_label, self.power_label, self.title_label, self.subtitle_label):
            if label is not None:
                label.kill()
        self.score_label = self.level_label = self.highscore_label = None
        self.shield_label = self.power_label = None
        self.title_label = self.subtitle_label = None

    def ensure_hud(self) -> None:
        if self.score_label is not None:
            return
        m = self.manager
        self.score_label = pygame_gui.elements.UILabel(pygame.Rect(10, 10, 220, 20), text='Score: 0', manager=m)
        self.level_label = pygame_gui.elements.UILabel(pygame.Rect(10, 30, 220, 20), text='Level: 1', manager=m)
        self.highscore_label = pygame_gui.elements.UILabel(pygame.Rect(10, 50, 220, 20), text='Highscore: 0', manager=m)
        self.shield_label = pygame_gui.elements.UILabel(pygame.Rect(10, 70, 220, 20), text='Shield: 0', manager=m)
        self.power_label = pygame_gui.elements.UILabel(pygame.Rect(self.width - 260, 10, 250, 20), text='POWER-UP: TRIPLE SHOT', manager=m)
        self.title_label = pygame_gui.elements.UILabel(pygame.Rect(0, self.height // 2 - 70, self.width, 50), text='', manager=m)
        self.subtitle_label = pygame_gui.elements.UILabel(pygame.Rect(0, self.height // 2 - 10, self.width, 30), text='', manager=m)

    def update_hud(self, state: SessionState) -> None:
        self.ensure_hud()
        playing = state.phase == GamePhase.PLAYING
        self.score_label.set_text(f'Score: {state.score}')
        self.level_label.set_text(f'Level: {state.level}')
        self.highscore_label.set_text(f'Highscore: {state.highscore}')
        self.shield_label.set_text(f'Shield: {state.player.shield}/{state.player.max_shield}')
        if playing and state.player.triple_shot:
            self.power_label.show()
        else:
            self.power_label.hide()

        title, subtitle = SCREEN_TEXT.get(state.phase, ('', ''))
        if title:
            self.title_label.set_text(title)
            self.subtitle_label.set_text(subtitle)
            self.title_label.show()
            self.subtitle_label.show()
        else:
            self.title_label.hide()
            self.subtitle_label.hide()
