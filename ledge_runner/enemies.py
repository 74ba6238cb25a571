"""
Enemies
========
Enemy entity creation and the patrol/chase state machine.

Each living enemy, every tick:
    fall (physics) → pick mode → chase the player or walk its patrol

Chasing needs ground contact. Both modes refuse to step off a ledge.
"""

import logging
from typing import List, Sequence

from .ecs import World
from .components import Body, EnemyAI, AIMode, EnemyTag
from .geometry import Rect
from .level import Level
from .physics import integrate_body, GRAVITY, TieBreak

logger = logging.getLogger(__name__)


ENEMY_WIDTH = 40.0
ENEMY_HEIGHT = 40.0


# =============================================================================
# CREATION
# =============================================================================

def create_enemy(
    world: World,
    x: float,
    foot_y: float,
    width: float = ENEMY_WIDTH,
    height: float = ENEMY_HEIGHT,
    speed: float = 2.0,
    patrol_range: float = 100.0,
) -> int:
    """
    Create a walker enemy standing with its feet at foot_y.

    x is the left edge and also the left end of the patrol segment.
    """
    entity_id = world.create_entity()

    world.add_component(entity_id, Body(
        rect=Rect(x, foot_y - height, width, height),
        gravity_first=True,
    ))
    world.add_component(entity_id, EnemyAI(
        start_x=x,
        speed=speed,
        patrol_range=patrol_range,
    ))
    world.add_component(entity_id, EnemyTag('walker'))

    return entity_id


def spawn_enemies(world: World, level: Level) -> List[int]:
    """One enemy per platform, centered on it and standing on its top."""
    enemy_ids = []
    for plat in level.platforms:
        x_pos = plat.x + plat.width / 2 - ENEMY_WIDTH / 2
        enemy_ids.append(create_enemy(world, x_pos, plat.y))
    logger.debug('Spawned %d enemies', len(enemy_ids))
    return enemy_ids


# =============================================================================
# AI
# =============================================================================

def is_about_to_fall(rect: Rect, speed: float, direction: int,
                     platforms: Sequence[Rect]) -> bool:
    """
    Check for ground one step ahead.

    The probe sits one unit under the current feet, half a body width
    right of the stepped x. True means no platform holds that point.
    """
    probe_x = rect.x + direction * speed + rect.width / 2
    probe_y = rect.y + rect.height + 1
    for plat in platforms:
        if plat.contains_point(probe_x, probe_y):
            return False
    return True


def update_enemy(body: Body, ai: EnemyAI, player_rect: Rect,
                 platforms: Sequence[Rect],
                 gravity: float = GRAVITY,
                 tie_break: TieBreak = TieBreak.LAST):
    """Run one tick of physics and decision-making for a living enemy."""
    if not ai.alive:
        return

    integrate_body(body, platforms, gravity, tie_break)
    rect = body.rect

    dist_x = player_rect.center_x - rect.center_x

    if abs(dist_x) < ai.chase_range and body.on_ground:
        ai.mode = AIMode.CHASE
    else:
        ai.mode = AIMode.PATROL

    if ai.mode is AIMode.CHASE:
        _chase(rect, ai, dist_x, platforms)
    elif body.on_ground:
        _patrol(rect, ai, platforms)
    # Airborne and not chasing: just fall


def _chase(rect: Rect, ai: EnemyAI, dist_x: float, platforms: Sequence[Rect]):
    if dist_x > ai.dead_zone:
        if not is_about_to_fall(rect, ai.speed, 1, platforms):
            rect.x += min(ai.speed, dist_x)
            ai.direction = 1
        else:
            ai.direction = -1
    elif dist_x < -ai.dead_zone:
        if not is_about_to_fall(rect, ai.speed, -1, platforms):
            rect.x += max(-ai.speed, dist_x)
            ai.direction = -1
        else:
            ai.direction = 1


def _patrol(rect: Rect, ai: EnemyAI, platforms: Sequence[Rect]):
    if is_about_to_fall(rect, ai.speed, ai.direction, platforms):
        ai.direction = -ai.direction
        return

    rect.x += ai.speed * ai.direction
    # Reversal takes effect next tick
    if rect.x > ai.start_x + ai.patrol_range:
        ai.direction = -1
    if rect.x < ai.start_x:
        ai.direction = 1


def enemy_ai_system(world: World, player_rect: Rect,
                    platforms: Sequence[Rect],
                    gravity: float = GRAVITY,
                    tie_break: TieBreak = TieBreak.LAST):
    """Update every living enemy in spawn order."""
    for entity_id, body, ai, _ in world.query(Body, EnemyAI, EnemyTag):
        was_mode = ai.mode
        update_enemy(body, ai, player_rect, platforms, gravity, tie_break)
        if ai.mode is not was_mode:
            logger.debug('Enemy %d: %s -> %s', entity_id,
                         was_mode.name, ai.mode.name)
