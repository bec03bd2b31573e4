from __future__ import annotations

import logging

from .context import GamePhase, SessionState, SoundCue, TickEvents
from .entities import Enemy, EnemyKind, PowerUpKind
from .factories import create_powerup
from .geometry import aabb_overlap

log = logging.getLogger(__name__)


def _overlaps(a, b) -> bool:
    return aabb_overlap(*a.box, *b.box)


def _kill_enemy(state: SessionState, enemy: Enemy, events: TickEvents) -> None:
    state.score += enemy.score_value
    cx, cy = enemy.center
    events.explosions.append((cx, cy))
    events.sounds.append(SoundCue.ENEMY_DESTROYED)
    pu = state.settings.powerup
    if state.rng.random() < pu.shield_drop_chance:
        drop = create_powerup(state.settings, PowerUpKind.SHIELD, cx, cy)
        state.powerups.append(drop)
        events.powerups.append(drop)
    if state.rng.random() < pu.triple_shot_chance:
        state.player.activate_triple_shot(state.settings.player.triple_shot_duration)


def hit_player(state: SessionState, events: TickEvents) -> bool:
    """Apply one hit to the player; returns True when the hit was fatal."""
    player = state.player
    if player.shield > 0:
        player.add_shield(-1)
        events.sounds.append(SoundCue.SHIELD_HIT)
        return False
    state.phase = GamePhase.GAME_OVER
    events.explosions.append(player.center)
    events.sounds.append(SoundCue.PLAYER_DESTROYED)
    log.info("player destroyed at level %d with score %d", state.level, state.score)
    return True


def bullets_vs_enemies(state: SessionState, events: TickEvents) -> None:
    bullets = state.bullets
    enemies = state.enemies
    for i in range(len(bullets) - 1, -1, -1):
        bullet = bullets[i]
        for j in range(len(enemies) - 1, -1, -1):
            enemy = enemies[j]
            if not _overlaps(bullet, enemy):
                continue
            del bullets[i]
            if enemy.kind == EnemyKind.TANK:
                enemy.health -= 1
                if enemy.health <= 0:
                    del enemies[j]
                    _kill_enemy(state, enemy, events)
            else:
                del enemies[j]
                _kill_enemy(state, enemy, events)
            break


def player_vs_powerups(state: SessionState, events: TickEvents) -> None:
    player = state.player
    kept = []
    for p in state.powerups:
        if not _overlaps(player, p):
            kept.append(p)
            continue
        if p.kind == PowerUpKind.SHIELD:
            player.add_shield(1)
    state.powerups = kept


def enemy_bullets_vs_player(state: SessionState, events: TickEvents) -> None:
    player = state.player
    for i in range(len(state.enemy_bullets) - 1, -1, -1):
        if not _overlaps(state.enemy_bullets[i], player):
            continue
        del state.enemy_bullets[i]
        if hit_player(state, events):
            return


def enemies_vs_player(state: SessionState, events: TickEvents) -> None:
    # Normal and Tank contact deals no damage; only Kamikazes collide.
    player = state.player
    enemies = state.enemies
    for j in range(len(enemies) - 1, -1, -1):
        enemy = enemies[j]
        if enemy.kind != EnemyKind.KAMIKAZE or not _overlaps(enemy, player):
            continue
        del enemies[j]
        events.explosions.append(enemy.center)
        events.sounds.append(SoundCue.ENEMY_DESTROYED)
        if hit_player(state, events):
            return


def resolve_collisions(state: SessionState, events: TickEvents) -> TickEvents:
    bullets_vs_enemies(state, events)
    player_vs_powerups(state, events)
    enemy_bullets_vs_player(state, events)
    if state.phase == GamePhase.GAME_OVER:
        return events
    enemies_vs_player(state, events)
    return events
