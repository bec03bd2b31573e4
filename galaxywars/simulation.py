"""Per-tick state transition for the playing phase.

``step`` is callable headless: it needs only a ``SessionState`` and an
``InputState`` and reports everything the render and audio layers care
about through the returned ``TickEvents``. All speeds are units per tick.
"""

from __future__ import annotations

import math
from typing import Callable, Dict

from .collisions import resolve_collisions
from .context import InputState, SessionState, SoundCue, TickEvents
from .entities import Enemy, EnemyKind
from .factories import create_enemy_bullet
from .geometry import Vector2, clamp, normalize


def _move_normal(enemy: Enemy, state: SessionState) -> None:
    ec = state.settings.enemy
    if enemy.zigzag:
        enemy.phase += ec.zigzag_step
        enemy.x = enemy.origin_x + math.sin(enemy.phase) * ec.zigzag_amplitude
    else:
        enemy.speed = state.enemy_speed
        enemy.x += state.enemy_direction * enemy.speed


def _move_tank(enemy: Enemy, state: SessionState) -> None:
    enemy.speed = state.enemy_speed * state.settings.enemy.tank_speed_factor
    enemy.x += state.enemy_direction * enemy.speed


def _move_kamikaze(enemy: Enemy, state: SessionState) -> None:
    tx, ty = state.player.center
    enemy.target = Vector2(tx, ty)
    cx, cy = enemy.center
    nx, ny = normalize(tx - cx, ty - cy)
    enemy.x += nx * enemy.speed
    enemy.y += ny * enemy.speed


ENEMY_MOVERS: Dict[EnemyKind, Callable[[Enemy, SessionState], None]] = {
    EnemyKind.NORMAL: _move_normal,
    EnemyKind.TANK: _move_tank,
    EnemyKind.KAMIKAZE: _move_kamikaze,
}


def descend_shift(level: int) -> int:
    return 10 + (level // 2) * 2


def edge_bounce(state: SessionState) -> bool:
    """Flip the group direction and descend once if any group mover left the field."""
    movers = [e for e in state.enemies if e.follows_group]
    if not movers:
        return False
    if state.enemy_direction > 0:
        violated = max(e.x + e.w for e in movers) > state.width
    else:
        violated = min(e.x for e in movers) < 0
    if not violated:
        return False
    state.enemy_direction = -state.enemy_direction
    shift = descend_shift(state.level)
    for e in state.enemies:
        if e.kind != EnemyKind.KAMIKAZE:
            e.y += shift
    return True


def move_player(state: SessionState, intent: InputState) -> None:
    player = state.player
    if intent.move_left:
        player.x -= player.speed
    if intent.move_right:
        player.x += player.speed
    player.x = clamp(player.x, 0, max(0.0, state.width - player.w))


def move_projectiles(state: SessionState) -> None:
    for b in state.bullets:
        b.y -= b.speed
    for b in state.enemy_bullets:
        b.y += b.speed
    for p in state.powerups:
        p.y += p.speed


def move_enemies(state: SessionState) -> None:
    for enemy in state.enemies:
        ENEMY_MOVERS[enemy.kind](enemy, state)
    edge_bounce(state)


def cleanup(state: SessionState) -> None:
    state.bullets = [b for b in state.bullets if b.y > 0]
    state.enemy_bullets = [b for b in state.enemy_bullets if b.y < state.height]
    state.powerups = [p for p in state.powerups if p.y < state.height]


def enemy_shoot(state: SessionState) -> bool:
    if not state.enemies:
        return False
    shooter = state.rng.choice(state.enemies)
    state.enemy_bullets.append(create_enemy_bullet(state.settings, shooter))
    return True


def advance_shoot_cadence(state: SessionState) -> bool:
    state.enemy_shoot_timer += 1
    if state.enemy_shoot_timer < state.settings.enemy.shoot_interval:
        return False
    state.enemy_shoot_timer = 0
    return enemy_shoot(state)


def fire(state: SessionState, events: TickEvents) -> None:
    state.bullets.extend(state.player.shoot())
    events.sounds.append(SoundCue.SHOT_FIRED)


def step(state: SessionState, intent: InputState) -> TickEvents:
    events = TickEvents()
    if intent.fire:
        fire(state, events)
    move_player(state, intent)
    move_projectiles(state)
    move_enemies(state)
    state.player.tick_triple_shot()
    resolve_collisions(state, events)
    cleanup(state)
    advance_shoot_cadence(state)
    return events
