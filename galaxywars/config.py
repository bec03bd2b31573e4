from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict

import yaml


@dataclass
class WindowConfig:
    width: int = 960
    height: int = 720
    title: str = "Galaxy Wars"
    fps: int = 60


@dataclass
class PlayerConfig:
    width: float = 50.0
    height: float = 20.0
    speed: float = 5.0
    bottom_margin: float = 10.0
    max_shield: int = 3
    triple_shot_duration: int = 300
    triple_shot_spread: float = 10.0


@dataclass
class EnemyConfig:
    width: float = 40.0
    height: float = 28.0
    normal_score: int = 10
    tank_score: int = 30
    tank_health: int = 3
    tank_speed_factor: float = 0.75
    kamikaze_score: int = 20
    kamikaze_speed: float = 2.0
    zigzag_amplitude: float = 20.0
    zigzag_step: float = 0.12
    shoot_interval: int = 60


@dataclass
class WaveConfig:
    origin_x: float = 60.0
    origin_y: float = 60.0
    spacing_x: float = 60.0
    spacing_y: float = 40.0
    normal_chance: float = 0.8
    late_normal_chance: float = 0.65
    tank_level: int = 2
    kamikaze_level: int = 3
    tank_column_chance: float = 0.6
    tank_chance: float = 0.3
    kamikaze_chance: float = 0.35


@dataclass
class DifficultyConfig:
    ruleset: str = "classic"
    base_speed: float = 1.0
    speed_step: float = 0.3
    speed_cap: float = 3.0


# Named (speed_step, speed_cap) pairs for the level speed curve.
RULESETS: Dict[str, tuple[float, float]] = {
    "classic": (0.3, 3.0),
    "touch": (0.25, 2.5),
}


@dataclass
class ProjectileConfig:
    bullet_radius: float = 4.0
    bullet_speed: float = 7.0
    enemy_bullet_radius: float = 4.0
    enemy_bullet_speed: float = 4.0


@dataclass
class PowerUpConfig:
    size: float = 20.0
    fall_speed: float = 2.0
    shield_drop_chance: float = 0.1
    triple_shot_chance: float = 0.05


@dataclass
class InputConfig:
    auto_fire_interval: int = 0


@dataclass
class MetaConfig:
    save_path: str = "save/highscore.json"
    highscore_key: str = "galaxy_wars_highscore"


@dataclass
class Settings:
    window: WindowConfig = field(default_factory=WindowConfig)
    player: PlayerConfig = field(default_factory=PlayerConfig)
    enemy: EnemyConfig = field(default_factory=EnemyConfig)
    wave: WaveConfig = field(default_factory=WaveConfig)
    difficulty: DifficultyConfig = field(default_factory=DifficultyConfig)
    projectile: ProjectileConfig = field(default_factory=ProjectileConfig)
    powerup: PowerUpConfig = field(default_factory=PowerUpConfig)
    input: InputConfig = field(default_factory=InputConfig)
    meta: MetaConfig = field(default_factory=MetaConfig)


def _num(v: Any, default: float, cast=float):
    try:
        return cast(v)
    except (TypeError, ValueError):
        return default


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    sec = raw.get(name, {})
    return sec if isinstance(sec, dict) else {}


def _difficulty(raw: Dict[str, Any]) -> DifficultyConfig:
    name = str(raw.get("ruleset", "classic"))
    step, cap = RULESETS.get(name, RULESETS["classic"])
    return DifficultyConfig(
        ruleset=name if name in RULESETS else "classic",
        base_speed=_num(raw.get("base_speed", 1.0), 1.0),
        speed_step=_num(raw.get("speed_step", step), step),
        speed_cap=_num(raw.get("speed_cap", cap), cap),
    )


def load_settings(path: str | Path = "config/settings.yaml") -> Settings:
    p = Path(path)
    raw: Dict[str, Any] = {}
    if p.exists():
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    if not isinstance(raw, dict):
        raw = {}

    win = _section(raw, "window")
    window = WindowConfig(
        width=_num(win.get("width", 960), 960, int),
        height=_num(win.get("height", 720), 720, int),
        title=str(win.get("title", "Galaxy Wars")),
        fps=_num(win.get("fps", 60), 60, int),
    )

    pl = _section(raw, "player")
    player = PlayerConfig(
        width=_num(pl.get("width", 50.0), 50.0),
        height=_num(pl.get("height", 20.0), 20.0),
        speed=_num(pl.get("speed", 5.0), 5.0),
        bottom_margin=_num(pl.get("bottom_margin", 10.0), 10.0),
        max_shield=_num(pl.get("max_shield", 3), 3, int),
        triple_shot_duration=_num(pl.get("triple_shot_duration", 300), 300, int),
        triple_shot_spread=_num(pl.get("triple_shot_spread", 10.0), 10.0),
    )

    en = _section(raw, "enemy")
    enemy = EnemyConfig(
        width=_num(en.get("width", 40.0), 40.0),
        height=_num(en.get("height", 28.0), 28.0),
        normal_score=_num(_section(en, "normal").get("score", 10), 10, int),
        tank_score=_num(_section(en, "tank").get("score", 30), 30, int),
        tank_health=_num(_section(en, "tank").get("health", 3), 3, int),
        tank_speed_factor=_num(_section(en, "tank").get("speed_factor", 0.75), 0.75),
        kamikaze_score=_num(_section(en, "kamikaze").get("score", 20), 20, int),
        kamikaze_speed=_num(_section(en, "kamikaze").get("speed", 2.0), 2.0),
        zigzag_amplitude=_num(_section(en, "normal").get("zigzag_amplitude", 20.0), 20.0),
        zigzag_step=_num(_section(en, "normal").get("zigzag_step", 0.12), 0.12),
        shoot_interval=_num(en.get("shoot_interval", 60), 60, int),
    )

    wv = _section(raw, "wave")
    wave = WaveConfig(
        origin_x=_num(wv.get("origin_x", 60.0), 60.0),
        origin_y=_num(wv.get("origin_y", 60.0), 60.0),
        spacing_x=_num(wv.get("spacing_x", 60.0), 60.0),
        spacing_y=_num(wv.get("spacing_y", 40.0), 40.0),
        normal_chance=_num(wv.get("normal_chance", 0.8), 0.8),
        late_normal_chance=_num(wv.get("late_normal_chance", 0.65), 0.65),
        tank_level=_num(wv.get("tank_level", 2), 2, int),
        kamikaze_level=_num(wv.get("kamikaze_level", 3), 3, int),
        tank_column_chance=_num(wv.get("tank_column_chance", 0.6), 0.6),
        tank_chance=_num(wv.get("tank_chance", 0.3), 0.3),
        kamikaze_chance=_num(wv.get("kamikaze_chance", 0.35), 0.35),
    )

    difficulty = _difficulty(_section(raw, "difficulty"))

    pr = _section(raw, "projectile")
    projectile = ProjectileConfig(
        bullet_radius=_num(pr.get("bullet_radius", 4.0), 4.0),
        bullet_speed=_num(pr.get("bullet_speed", 7.0), 7.0),
        enemy_bullet_radius=_num(pr.get("enemy_bullet_radius", 4.0), 4.0),
        enemy_bullet_speed=_num(pr.get("enemy_bullet_speed", 4.0), 4.0),
    )

    pu = _section(raw, "powerup")
    powerup = PowerUpConfig(
        size=_num(pu.get("size", 20.0), 20.0),
        fall_speed=_num(pu.get("fall_speed", 2.0), 2.0),
        shield_drop_chance=_num(pu.get("shield_drop_chance", 0.1), 0.1),
        triple_shot_chance=_num(pu.get("triple_shot_chance", 0.05), 0.05),
    )

    inp = _section(raw, "input")
    input_cfg = InputConfig(
        auto_fire_interval=_num(inp.get("auto_fire_interval", 0), 0, int),
    )

    mt = _section(raw, "meta")
    meta = MetaConfig(
        save_path=str(mt.get("save_path", "save/highscore.json")),
        highscore_key=str(mt.get("highscore_key", "galaxy_wars_highscore")),
    )

    return Settings(
        window=window,
        player=player,
        enemy=enemy,
        wave=wave,
        difficulty=difficulty,
        projectile=projectile,
        powerup=powerup,
        input=input_cfg,
        meta=meta,
    )
