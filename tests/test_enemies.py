import pytest

from ledge_runner.components import AIMode, Body, EnemyAI, EnemyTag
from ledge_runner.ecs import World
from ledge_runner.enemies import (
    create_enemy, spawn_enemies, is_about_to_fall, update_enemy, enemy_ai_system
)
from ledge_runner.geometry import Rect
from ledge_runner.level import default_level

from conftest import standing_enemy, player_rect_centered_at


WIDE = (Rect(0, 500, 2000, 20),)
SHORT = (Rect(0, 500, 540, 20),)  # right edge at x=540


def test_create_enemy_stands_on_foot_y():
    world = World()
    eid = create_enemy(world, 100, 500)
    body = world.get_component(eid, Body)
    ai = world.get_component(eid, EnemyAI)

    assert body.rect == Rect(100, 460, 40, 40)
    assert body.gravity_first
    assert ai.start_x == 100
    assert ai.direction == 1
    assert ai.alive
    assert ai.mode is AIMode.PATROL
    assert world.has_component(eid, EnemyTag)


def test_spawn_enemies_puts_one_on_each_platform():
    world = World()
    level = default_level()
    ids = spawn_enemies(world, level)

    assert len(ids) == len(level.platforms)
    for eid, plat in zip(ids, level.platforms):
        rect = world.get_component(eid, Body).rect
        assert rect.x == plat.x + plat.width / 2 - 20
        assert rect.bottom == plat.y

    first = world.get_component(ids[0], Body).rect
    assert (first.x, first.y) == (580, 540)


def test_probe_uses_stepped_x_and_one_unit_below_feet():
    rect = Rect(480, 460, 40, 40)
    # Probe at (480 + 2 + 20, 501): inside the platform
    assert not is_about_to_fall(rect, 2, 1, SHORT)
    # Stepping left from the far left of the terrain
    assert is_about_to_fall(Rect(-20, 460, 40, 40), 2, -1, SHORT)
    # Probe at x=542 is past the edge
    assert is_about_to_fall(Rect(520, 460, 40, 40), 2, 1, SHORT)
    # Probe x=540 sits exactly on the edge, which counts as ground
    assert not is_about_to_fall(Rect(518, 460, 40, 40), 2, 1, SHORT)


def test_probe_sees_a_gap_under_the_next_step():
    gap = (Rect(0, 500, 100, 20), Rect(200, 500, 100, 20))
    assert is_about_to_fall(Rect(70, 460, 40, 40), 20, 1, gap)
    assert not is_about_to_fall(Rect(30, 460, 40, 40), 20, 1, gap)


def test_enemy_never_chases_a_distant_player():
    body, ai = standing_enemy(500)
    player = player_rect_centered_at(520 + 700)

    for _ in range(200):
        update_enemy(body, ai, player, WIDE)
        assert not ai.chasing
        assert ai.mode is AIMode.PATROL


def test_enemy_chases_player_within_range():
    body, ai = standing_enemy(500)
    player = player_rect_centered_at(520 + 100)

    update_enemy(body, ai, player, WIDE)

    assert ai.chasing
    assert body.on_ground
    assert body.rect.x == 502
    assert ai.direction == 1


def test_chase_moves_left_toward_player():
    body, ai = standing_enemy(500, direction=1)
    player = player_rect_centered_at(520 - 300)

    update_enemy(body, ai, player, WIDE)

    assert ai.chasing
    assert body.rect.x == 498
    assert ai.direction == -1


def test_chase_step_never_overshoots_player():
    body, ai = standing_enemy(500, speed=10)
    player = player_rect_centered_at(527)

    update_enemy(body, ai, player, WIDE)

    assert body.rect.x == 507
    assert body.rect.center_x == 527


@pytest.mark.parametrize('offset', [-5, -4, 0, 3, 5])
def test_chase_dead_zone_holds_position(offset):
    body, ai = standing_enemy(500, direction=-1)
    player = player_rect_centered_at(520 + offset)

    update_enemy(body, ai, player, WIDE)

    assert ai.chasing
    assert body.rect.x == 500
    assert ai.direction == -1


def test_chase_refuses_to_step_off_ledge():
    body, ai = standing_enemy(520, start_x=450)
    player = player_rect_centered_at(640)

    update_enemy(body, ai, player, SHORT)

    assert ai.chasing
    assert body.rect.x == 520
    assert ai.direction == -1


def test_chase_ledge_refusal_to_the_left():
    ledge = (Rect(100, 500, 400, 20),)
    body, ai = standing_enemy(80, direction=-1)
    player = player_rect_centered_at(0)

    update_enemy(body, ai, player, ledge)

    # Probe at 80 - 2 + 20 = 98, left of the platform
    assert ai.chasing
    assert body.rect.x == 80
    assert ai.direction == 1


def test_patrol_reverses_at_range_edge_within_one_tick():
    body, ai = standing_enemy(600, start_x=500, patrol_range=100, direction=1)
    player = player_rect_centered_at(-1000)

    update_enemy(body, ai, player, WIDE)
    assert body.rect.x == 602
    assert ai.direction == -1

    update_enemy(body, ai, player, WIDE)
    assert body.rect.x == 600


def test_patrol_turns_back_right_below_start():
    body, ai = standing_enemy(500, start_x=500, direction=-1)
    player = player_rect_centered_at(1500)

    update_enemy(body, ai, player, WIDE)

    assert body.rect.x == 498
    assert ai.direction == 1


def test_patrol_walks_back_and_forth_inside_range():
    body, ai = standing_enemy(500)
    player = player_rect_centered_at(-1000)
    xs = []
    for _ in range(300):
        update_enemy(body, ai, player, WIDE)
        xs.append(body.rect.x)

    assert min(xs) >= 500 - ai.speed
    assert max(xs) <= 600 + ai.speed
    assert len(set(xs)) > 10


def test_patrol_reverses_at_ledge_without_moving():
    body, ai = standing_enemy(520, start_x=450, direction=1)
    player = player_rect_centered_at(-1000)

    update_enemy(body, ai, player, SHORT)

    assert not ai.chasing
    assert body.rect.x == 520
    assert ai.direction == -1


def test_airborne_enemy_only_falls():
    body = Body(Rect(500, 0, 40, 40), gravity_first=True)
    ai = EnemyAI(start_x=500)
    player = player_rect_centered_at(520, y=0)

    update_enemy(body, ai, player, WIDE)

    assert not body.on_ground
    assert ai.mode is AIMode.PATROL
    assert body.rect.x == 500
    assert body.rect.y == 0.5


def test_dead_enemy_is_inert():
    body, ai = standing_enemy(500)
    body.rect.y = 100
    ai.alive = False

    update_enemy(body, ai, player_rect_centered_at(600), WIDE)

    assert body.rect == Rect(500, 100, 40, 40)
    assert body.vel_y == 0


def test_enemy_ai_system_updates_every_living_enemy():
    world = World()
    a = create_enemy(world, 100, 500)
    b = create_enemy(world, 1000, 500)
    c = create_enemy(world, 1500, 500)
    world.get_component(c, EnemyAI).alive = False

    enemy_ai_system(world, player_rect_centered_at(250), WIDE)

    assert world.get_component(a, EnemyAI).chasing
    assert world.get_component(a, Body).rect.x == 102
    assert not world.get_component(b, EnemyAI).chasing
    assert world.get_component(b, Body).rect.x == 1002
    assert world.get_component(c, Body).rect.x == 1500
    assert world.get_component(c, Body).vel_y == 0
