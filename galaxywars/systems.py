from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict

import esper
import pygame

from .context import FrameContext, GamePhase, InputState, SoundCue
from .controller import GameController
from .effects import Explosion, Star
from .entities import EnemyKind, PowerUpKind

log = logging.getLogger(__name__)


class InputSystem(esper.Processor):
    """Normalises keyboard and mouse/touch into one ``InputState`` per frame."""

    def __init__(self, frame: FrameContext, controller: GameController) -> None:
        super().__init__()
        self.frame = frame
        self.controller = controller

    def process(self) -> None:
        keys = pygame.key.get_pressed()
        left = bool(keys[pygame.K_LEFT] or keys[pygame.K_a])
        right = bool(keys[pygame.K_RIGHT] or keys[pygame.K_d])
        confirm = fire = False

        width = self.controller.state.width
        # Held touch on the outer thirds acts as a virtual stick.
        if pygame.mouse.get_pressed()[0]:
            mx, _ = pygame.mouse.get_pos()
            if mx < width / 3:
                left = True
            elif mx > width * 2 / 3:
                right = True

        for event in self.frame.raw_events:
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    fire = True
                elif event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                    confirm = True
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                mx, _ = event.pos
                if width / 3 <= mx <= width * 2 / 3:
                    fire = True
                elif self.controller.phase != GamePhase.PLAYING:
                    confirm = True

        self.frame.intent = InputState(move_left=left, move_right=right, confirm=confirm, fire=fire)


class SimulationSystem(esper.Processor):
    def __init__(self, frame: FrameContext, controller: GameController) -> None:
        super().__init__()
        self.frame = frame
        self.controller = controller

    def process(self) -> None:
        self.frame.events = self.controller.tick(self.frame.intent)


class AudioSystem(esper.Processor):
    FILES = {
        SoundCue.SHOT_FIRED: "shot.wav",
        SoundCue.ENEMY_DESTROYED: "explode.wav",
        SoundCue.SHIELD_HIT: "shield.wav",
        SoundCue.PLAYER_DESTROYED: "explode.wav",
    }

    def __init__(self, frame: FrameContext, assets_dir: str | Path = "assets") -> None:
        super().__init__()
        self.frame = frame
        self.sounds: Dict[SoundCue, pygame.mixer.Sound] = {}
        if not pygame.mixer.get_init():
            log.warning("audio mixer unavailable, sound cues are silent")
            return
        base = Path(assets_dir)
        for cue, name in self.FILES.items():
            path = base / name
            if not path.exists():
                log.warning("missing sound asset %s", path)
                continue
            self.sounds[cue] = pygame.mixer.Sound(str(path))

    def process(self) -> None:
        for cue in self.frame.events.sounds:
            snd = self.sounds.get(cue)
            if snd is not None:
                snd.play()


ENEMY_COLORS = {
    EnemyKind.NORMAL: ((100, 0, 0), (200, 50, 50)),
    EnemyKind.TANK: ((60, 60, 90), (120, 120, 170)),
    EnemyKind.KAMIKAZE: ((140, 90, 0), (255, 170, 40)),
}
POWERUP_COLORS = {PowerUpKind.SHIELD: (80, 160, 255)}


class RenderSystem(esper.Processor):
    def __init__(self, controller: GameController, surface: pygame.Surface) -> None:
        super().__init__()
        self.controller = controller
        self.surf = surface

    def process(self) -> None:
        self.surf = pygame.display.get_surface() or self.surf
        self.surf.fill((0, 0, 0))

        for _, star in self.world.get_component(Star):
            c = int(min(255, star.z * 85))
            pygame.draw.circle(self.surf, (c, c, c), (int(star.x), int(star.y)), max(1, int(star.z / 2)))

        for _, boom in self.world.get_component(Explosion):
            for p in boom.particles:
                k = max(0.0, p.alpha) / 255.0
                pygame.draw.circle(self.surf, (int(255 * k), int(150 * k), 0), (int(p.x), int(p.y)), int(p.size / 2) or 1)

        state = self.controller.state
        if state.phase != GamePhase.PLAYING:
            return

        for e in state.enemies:
            body, wing = ENEMY_COLORS[e.kind]
            rect = pygame.Rect(int(e.x), int(e.y), int(e.w), int(e.h))
            pygame.draw.ellipse(self.surf, body, rect.inflate(-int(e.w * 0.3), 0))
            pygame.draw.polygon(self.surf, wing, [
                (rect.left, rect.top + 4), (rect.centerx, rect.centery), (rect.left + 4, rect.bottom)])
            pygame.draw.polygon(self.surf, wing, [
                (rect.right, rect.top + 4), (rect.centerx, rect.centery), (rect.right - 4, rect.bottom)])

        for b in state.bullets:
            pygame.draw.circle(self.surf, (255, 255, 0), (int(b.x), int(b.y)), int(b.r))
        for b in state.enemy_bullets:
            pygame.draw.circle(self.surf, (255, 255, 255), (int(b.x), int(b.y)), int(b.r))
        for p in state.powerups:
            pygame.draw.rect(self.surf, POWERUP_COLORS[p.kind], pygame.Rect(int(p.x), int(p.y), int(p.size), int(p.size)), border_radius=4)

        pl = state.player
        cx, cy = pl.center
        pygame.draw.polygon(self.surf, (0, 255, 255), [
            (cx, pl.y), (pl.x, pl.y + pl.h), (pl.x + pl.w, pl.y + pl.h)])
        pygame.draw.rect(self.surf, (255, 255, 0), pygame.Rect(int(cx - pl.w / 6), int(pl.y + pl.h), int(pl.w / 3), 4))
        if pl.shield > 0:
            pygame.draw.ellipse(self.surf, (80, 160, 255), pygame.Rect(int(pl.x - 6), int(pl.y - 10), int(pl.w + 12), int(pl.h + 20)), pl.shield)
