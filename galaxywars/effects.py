from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import List

import esper

from .context import FrameContext, SessionState


@dataclass
class Particle:
    x: float
    y: float
    vx: float
    vy: float
    size: float
    alpha: float = 255.0


@dataclass
class Explosion:
    particles: List[Particle] = field(default_factory=list)


@dataclass
class Star:
    x: float
    y: float
    z: float  # depth: fall speed and brightness


PARTICLES_PER_EXPLOSION = 20
PARTICLE_FADE = 5.0


def spawn_explosion(world: esper.World, x: float, y: float, rng: random.Random) -> int:
    particles = []
    for _ in range(PARTICLES_PER_EXPLOSION):
        a = rng.uniform(0, 2 * math.pi)
        speed = rng.uniform(1, 4)
        particles.append(Particle(x, y, math.cos(a) * speed, math.sin(a) * speed, rng.uniform(2, 5)))
    return world.create_entity(Explosion(particles))


def spawn_starfield(world: esper.World, width: float, height: float, rng: random.Random, count: int = 100) -> None:
    for _ in range(count):
        world.create_entity(Star(rng.uniform(0, width), rng.uniform(0, height), rng.uniform(1, 3)))


class ExplosionSystem(esper.Processor):
    def __init__(self, frame: FrameContext, rng: random.Random) -> None:
        super().__init__()
        self.frame = frame
        self.rng = rng

    def process(self) -> None:
        for x, y in self.frame.events.explosions:
            spawn_explosion(self.world, x, y, self.rng)
        for ent, boom in self.world.get_component(Explosion):
            for p in boom.particles:
                p.x += p.vx
                p.y += p.vy
                p.alpha -= PARTICLE_FADE
            boom.particles = [p for p in boom.particles if p.alpha > 0]
            if not boom.particles:
                self.world.delete_entity(ent)


class StarfieldSystem(esper.Processor):
    def __init__(self, state_ref, rng: random.Random) -> None:
        super().__init__()
        # callable returning the live SessionState; the controller swaps it on reset
        self.state_ref = state_ref
        self.rng = rng

    def process(self) -> None:
        state: SessionState = self.state_ref()
        for _, star in self.world.get_component(Star):
            star.y += star.z
            if star.y > state.height:
                star.y = 0
                star.x = self.rng.uniform(0, state.width)
