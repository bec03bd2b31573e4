import random
from dataclasses import replace

import pytest

from galaxywars.config import DifficultyConfig, InputConfig, Settings
from galaxywars.context import GamePhase, InputState
from galaxywars.controller import GameController, create_session, level_speed
from galaxywars.entities import EnemyBullet, EnemyKind
from galaxywars.factories import create_enemy
from galaxywars.meta import HighscoreStore


@pytest.fixture
def store(tmp_path):
    return HighscoreStore(tmp_path / "highscore.json")


@pytest.fixture
def controller(settings, store):
    return GameController(settings, store, 800, 600, rng=random.Random(5))


def _shoot_player(state):
    cx, cy = state.player.center
    state.enemy_bullets.append(EnemyBullet(cx, cy))


def test_starts_on_start_screen(controller):
    assert controller.phase == GamePhase.START_SCREEN
    controller.tick(InputState())
    assert controller.phase == GamePhase.START_SCREEN


def test_fire_on_start_screen_starts_without_shooting(controller):
    controller.tick(InputState(fire=True))
    assert controller.phase == GamePhase.PLAYING
    assert controller.state.bullets == []


def test_confirm_starts_game(controller):
    controller.tick(InputState(confirm=True))
    assert controller.phase == GamePhase.PLAYING


def test_fire_while_playing_shoots(controller):
    controller.start()
    controller.tick(InputState(fire=True))
    assert len(controller.state.bullets) == 1


def test_start_screen_ignores_movement(controller):
    x = controller.state.player.x
    controller.tick(InputState(move_left=True))
    assert controller.state.player.x == x


def test_game_over_persists_new_highscore(controller, store):
    controller.start()
    controller.state.score = 500
    _shoot_player(controller.state)
    controller.tick(InputState())
    assert controller.phase == GamePhase.GAME_OVER
    assert controller.state.highscore == 500
    assert store.load() == 500


def test_game_over_keeps_higher_stored_score(settings, store):
    store.save(900)
    c = GameController(settings, store, 800, 600, rng=random.Random(1))
    assert c.state.highscore == 900
    c.start()
    c.state.score = 100
    _shoot_player(c.state)
    c.tick(InputState())
    assert c.phase == GamePhase.GAME_OVER
    assert store.load() == 900


def test_shielded_hit_is_not_game_over(controller):
    controller.start()
    controller.state.player.shield = 1
    _shoot_player(controller.state)
    controller.tick(InputState())
    assert controller.phase == GamePhase.PLAYING
    assert controller.state.player.shield == 0


def test_restart_resets_session(controller):
    controller.start()
    s = controller.state
    s.score = 120
    s.level = 4
    _shoot_player(s)
    controller.tick(InputState())
    assert controller.phase == GamePhase.GAME_OVER
    controller.tick(InputState(fire=True))
    fresh = controller.state
    assert fresh is not s
    assert fresh.phase == GamePhase.PLAYING
    assert (fresh.level, fresh.score, fresh.highscore) == (1, 0, 120)
    assert fresh.bullets == [] and fresh.enemy_bullets == []
    assert all(e.kind == EnemyKind.NORMAL for e in fresh.enemies)


def test_level_clear_advances_and_speeds_up(controller):
    controller.start()
    controller.state.enemies = []
    controller.tick(InputState())
    s = controller.state
    assert s.level == 2
    assert s.enemy_speed == pytest.approx(1.6)
    assert len(s.enemies) == 4 * 7


def test_level_speed_is_capped(settings):
    assert level_speed(settings, 2) == pytest.approx(1.6)
    assert level_speed(settings, 10) == 3.0
    touch = replace(settings, difficulty=DifficultyConfig(ruleset="touch", speed_step=0.25, speed_cap=2.5))
    assert level_speed(touch, 4) == pytest.approx(2.0)
    assert level_speed(touch, 20) == 2.5


def test_resize_reanchors_player(controller):
    p = controller.state.player
    p.x = 700
    controller.resize(400, 300)
    assert controller.state.width == 400
    assert p.y == 300 - p.h - 10
    assert p.x == 350


def test_waves_after_resize_fit_new_width(controller):
    controller.start()
    controller.resize(300, 600)
    controller.state.enemies = []
    controller.tick(InputState())
    s = controller.state
    assert all(e.x + e.w <= 300 for e in s.enemies)


def test_auto_fire(store):
    settings = Settings(input=InputConfig(auto_fire_interval=3))
    c = GameController(settings, store, 800, 600, rng=random.Random(2))
    c.start()
    counts = []
    for _ in range(6):
        c.tick(InputState())
        counts.append(len(c.state.bullets))
    assert counts == [0, 0, 1, 1, 1, 2]


def test_create_session_defaults(settings):
    s = create_session(settings, 800, 600, highscore=42, rng=random.Random(0))
    assert s.phase == GamePhase.START_SCREEN
    assert (s.level, s.score, s.highscore) == (1, 0, 42)
    assert s.enemy_direction == 1
    assert s.enemy_speed == 1.0
    assert len(s.enemies) == 18


def test_resize_keeps_swaying_rows_within_reach(controller, settings):
    controller.start()
    s = controller.state
    s.enemies = [create_enemy(settings, EnemyKind.NORMAL, x, 100) for x in (500, 620, 740)]
    assert all(e.zigzag for e in s.enemies)
    controller.resize(400, 600)
    reach = s.width - s.player.w / 2
    for _ in range(500):
        s.enemy_bullets.clear()
        controller.tick(InputState())
        for e in s.enemies:
            assert e.x < reach
            assert e.x + e.w <= s.width
    assert controller.phase == GamePhase.PLAYING
