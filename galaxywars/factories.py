from __future__ import annotations

from .config import Settings
from .entities import Enemy, EnemyBullet, EnemyKind, Player, PowerUp, PowerUpKind


def create_player(settings: Settings, width: float, height: float) -> Player:
    pc = settings.player
    pr = settings.projectile
    return Player(
        x=width / 2 - pc.width / 2,
        y=height - pc.height - pc.bottom_margin,
        w=pc.width,
        h=pc.height,
        speed=pc.speed,
        max_shield=pc.max_shield,
        bullet_speed=pr.bullet_speed,
        bullet_radius=pr.bullet_radius,
        spread=pc.triple_shot_spread,
    )


def is_zigzag_row(origin_y: float, spacing_y: float) -> bool:
    # Alternating grid rows sway instead of marching with the group.
    return int(origin_y // spacing_y) % 2 == 0


def create_enemy(settings: Settings, kind: EnemyKind, x: float, y: float, enemy_speed: float = 1.0) -> Enemy:
    ec = settings.enemy
    if kind == EnemyKind.TANK:
        return Enemy(
            kind=kind, x=x, y=y, w=ec.width, h=ec.height,
            health=ec.tank_health, score_value=ec.tank_score,
            origin_x=x, origin_y=y,
            speed=enemy_speed * ec.tank_speed_factor,
        )
    if kind == EnemyKind.KAMIKAZE:
        return Enemy(
            kind=kind, x=x, y=y, w=ec.width, h=ec.height,
            health=1, score_value=ec.kamikaze_score,
            origin_x=x, origin_y=y,
            speed=ec.kamikaze_speed,
        )
    return Enemy(
        kind=EnemyKind.NORMAL, x=x, y=y, w=ec.width, h=ec.height,
        health=1, score_value=ec.normal_score,
        origin_x=x, origin_y=y,
        zigzag=is_zigzag_row(y, settings.wave.spacing_y),
        speed=enemy_speed,
    )


def create_enemy_bullet(settings: Settings, shooter: Enemy) -> EnemyBullet:
    pr = settings.projectile
    return EnemyBullet(
        x=shooter.x + shooter.w / 2,
        y=shooter.y + shooter.h,
        r=pr.enemy_bullet_radius,
        speed=pr.enemy_bullet_speed,
    )


def create_powerup(settings: Settings, kind: PowerUpKind, cx: float, cy: float) -> PowerUp:
    pu = settings.powerup
    return PowerUp(kind=kind, x=cx - pu.size / 2, y=cy - pu.size / 2, size=pu.size, speed=pu.fall_speed)
