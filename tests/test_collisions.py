from conftest import ScriptedRng
from galaxywars.collisions import resolve_collisions
from galaxywars.context import GamePhase, SoundCue, TickEvents
from galaxywars.entities import Bullet, EnemyBullet, EnemyKind, PowerUp, PowerUpKind


def _bullet_on(enemy):
    cx, cy = enemy.center
    return Bullet(cx, cy)


def _enemy_bullet_on(player):
    cx, cy = player.center
    return EnemyBullet(cx, cy)


def test_bullet_kills_normal_enemy(make_state, enemy):
    e = enemy()
    state = make_state([e])
    state.bullets = [_bullet_on(e)]
    events = resolve_collisions(state, TickEvents())
    assert state.enemies == []
    assert state.bullets == []
    assert state.score == 10
    assert events.explosions == [e.center]
    assert SoundCue.ENEMY_DESTROYED in events.sounds


def test_tank_survives_until_third_hit(make_state, enemy):
    t = enemy(EnemyKind.TANK)
    state = make_state([t])
    scores = []
    for _ in range(3):
        state.bullets = [_bullet_on(t)]
        events = resolve_collisions(state, TickEvents())
        assert state.bullets == []
        scores.append(state.score)
        if state.enemies:
            assert events.explosions == []
    assert scores == [0, 0, 30]
    assert state.enemies == []
    assert t.health == 0


def test_bullet_hits_at_most_one_enemy(make_state, enemy):
    a = enemy(x=100)
    b = enemy(x=110)
    state = make_state([a, b])
    state.bullets = [Bullet(130, 70)]
    resolve_collisions(state, TickEvents())
    assert len(state.enemies) == 1
    assert state.score == 10


def test_each_bullet_resolves_separately(make_state, enemy):
    a = enemy(x=100)
    b = enemy(x=300)
    state = make_state([a, b])
    state.bullets = [_bullet_on(a), _bullet_on(b), Bullet(700, 300)]
    resolve_collisions(state, TickEvents())
    assert state.enemies == []
    assert [(bl.x, bl.y) for bl in state.bullets] == [(700, 300)]
    assert state.score == 20


def test_shield_drop_spawns_at_enemy_centre(make_state, enemy):
    e = enemy()
    state = make_state([e], rng=ScriptedRng([0.05, 0.99]))
    state.bullets = [_bullet_on(e)]
    events = resolve_collisions(state, TickEvents())
    assert len(state.powerups) == 1
    drop = state.powerups[0]
    assert drop.kind == PowerUpKind.SHIELD
    assert (drop.x + drop.size / 2, drop.y + drop.size / 2) == e.center
    assert events.powerups == [drop]
    assert not state.player.triple_shot


def test_kill_can_grant_triple_shot(make_state, enemy, settings):
    e = enemy()
    state = make_state([e], rng=ScriptedRng([0.99, 0.01]))
    state.bullets = [_bullet_on(e)]
    resolve_collisions(state, TickEvents())
    assert state.powerups == []
    assert state.player.triple_shot
    assert state.player.triple_timer == settings.player.triple_shot_duration


def test_shield_pickup_is_capped(make_state):
    state = make_state()
    p = state.player
    p.shield = p.max_shield - 1
    state.powerups = [
        PowerUp(PowerUpKind.SHIELD, p.x, p.y),
        PowerUp(PowerUpKind.SHIELD, p.x + 5, p.y),
        PowerUp(PowerUpKind.SHIELD, 0, 0),
    ]
    resolve_collisions(state, TickEvents())
    assert p.shield == p.max_shield
    assert [(u.x, u.y) for u in state.powerups] == [(0, 0)]


def test_shield_absorbs_one_hit_per_point(make_state):
    state = make_state()
    state.player.shield = 2
    for expected in (1, 0):
        state.enemy_bullets = [_enemy_bullet_on(state.player)]
        events = resolve_collisions(state, TickEvents())
        assert state.player.shield == expected
        assert state.phase == GamePhase.PLAYING
        assert state.enemy_bullets == []
        assert events.sounds == [SoundCue.SHIELD_HIT]
    state.enemy_bullets = [_enemy_bullet_on(state.player)]
    events = resolve_collisions(state, TickEvents())
    assert state.phase == GamePhase.GAME_OVER
    assert SoundCue.PLAYER_DESTROYED in events.sounds


def test_fatal_hit_stops_bullet_processing(make_state):
    state = make_state()
    state.enemy_bullets = [_enemy_bullet_on(state.player), _enemy_bullet_on(state.player)]
    events = resolve_collisions(state, TickEvents())
    assert state.phase == GamePhase.GAME_OVER
    assert len(state.enemy_bullets) == 1
    assert events.sounds.count(SoundCue.PLAYER_DESTROYED) == 1


def test_kamikaze_contact_uses_shield(make_state, enemy):
    state = make_state()
    p = state.player
    k = enemy(EnemyKind.KAMIKAZE, x=p.x, y=p.y - 10)
    state.enemies = [k]
    state.player.shield = 1
    events = resolve_collisions(state, TickEvents())
    assert state.enemies == []
    assert p.shield == 0
    assert state.phase == GamePhase.PLAYING
    assert events.explosions == [k.center]
    assert state.score == 0


def test_kamikaze_contact_without_shield_ends_game(make_state, enemy):
    state = make_state()
    p = state.player
    state.enemies = [enemy(EnemyKind.KAMIKAZE, x=p.x, y=p.y - 10)]
    resolve_collisions(state, TickEvents())
    assert state.phase == GamePhase.GAME_OVER
    assert state.enemies == []


def test_normal_and_tank_contact_is_a_documented_non_interaction(make_state, enemy):
    state = make_state()
    p = state.player
    state.enemies = [enemy(x=p.x, y=p.y - 10), enemy(EnemyKind.TANK, x=p.x + 5, y=p.y - 5)]
    events = resolve_collisions(state, TickEvents())
    assert len(state.enemies) == 2
    assert state.phase == GamePhase.PLAYING
    assert events.explosions == []


def test_contact_phase_skipped_after_game_over(make_state, enemy):
    state = make_state()
    p = state.player
    state.enemies = [enemy(EnemyKind.KAMIKAZE, x=p.x, y=p.y - 10)]
    state.enemy_bullets = [_enemy_bullet_on(p)]
    resolve_collisions(state, TickEvents())
    assert state.phase == GamePhase.GAME_OVER
    assert len(state.enemies) == 1


def test_empty_state_is_a_noop(make_state):
    state = make_state([])
    events = resolve_collisions(state, TickEvents())
    assert events.explosions == [] and events.sounds == []
    assert state.score == 0
