from ledge_runner.components import Body, EnemyAI
from ledge_runner.geometry import Rect
from ledge_runner.level import Level


GROUND_Y = 580.0


def flat_level(finish=(2900, 520, 100, 60), spawn=(100, 500), enemies=False,
               platforms=((0, GROUND_Y, 3000, 20),)):
    """One long ground strip; no enemies unless asked."""
    return Level.from_tuples(platforms, finish, player_spawn=spawn,
                             spawn_enemies=enemies)


def standing_enemy(x, foot_y=500.0, speed=2.0, patrol_range=100.0, start_x=None,
                   direction=1):
    """An enemy Body/EnemyAI pair resting with its feet at foot_y."""
    body = Body(rect=Rect(x, foot_y - 40, 40, 40), gravity_first=True)
    ai = EnemyAI(start_x=x if start_x is None else start_x, speed=speed,
                 patrol_range=patrol_range, direction=direction)
    return body, ai


def player_rect_centered_at(center_x, y=450.0):
    return Rect(center_x - 25, y, 50, 50)
