"""
Projectile System
==================
Bullet lifecycle: spawn, fly, hit an enemy or run out of range, destroy.

Bullets fly straight and ignore terrain. A spent bullet is marked
inactive and then destroyed at the end of the tick, so the world only
ever holds bullets that are still in flight.
"""

import logging
from typing import Dict, List

from .ecs import World
from .components import Projectile, ProjectileTag, EnemyAI, EnemyTag, Body
from .geometry import Rect

logger = logging.getLogger(__name__)


BULLET_WIDTH = 40.0
BULLET_HEIGHT = 15.0
BULLET_SPEED = 20.0
BULLET_RANGE = 300.0


def spawn_bullet(
    world: World,
    x: float, y: float,
    direction: int,
    speed: float = BULLET_SPEED,
    max_distance: float = BULLET_RANGE,
    owner_id: int = -1,
) -> int:
    """Spawn a single bullet entity. direction is +1 (right) or -1 (left)."""
    eid = world.create_entity()

    world.add_component(eid, Projectile(
        rect=Rect(x, y, BULLET_WIDTH, BULLET_HEIGHT),
        speed=speed * direction,
        max_distance=max_distance,
        owner_id=owner_id,
    ))
    world.add_component(eid, ProjectileTag())

    logger.debug('Bullet %d spawned at (%.1f, %.1f) dir %+d', eid, x, y, direction)
    return eid


def fire_from(world: World, shooter: Rect, facing_right: bool,
              owner_id: int = -1) -> int:
    """
    Fire a bullet from the shooter's leading edge.

    Facing right it appears flush with the right edge; facing left it
    appears one bullet length behind the left edge.
    """
    if facing_right:
        x = shooter.right
        direction = 1
    else:
        x = shooter.x - BULLET_WIDTH
        direction = -1
    y = shooter.y + shooter.height / 2 - 7
    return spawn_bullet(world, x, y, direction, owner_id=owner_id)


def advance_projectile(proj: Projectile):
    """Move one tick and deactivate once the range is used up."""
    if not proj.active:
        return
    proj.rect.x += proj.speed
    proj.distance_traveled += abs(proj.speed)
    if proj.distance_traveled >= proj.max_distance:
        proj.active = False


def projectile_system(world: World) -> List[Dict[str, int]]:
    """
    Update bullets: advance, check enemy hits, schedule spent ones for removal.

    Each bullet moves and then scans living enemies in spawn order; the
    first enemy it overlaps dies and the bullet is spent. Returns a list
    of hit event dicts.
    """
    events = []

    enemies = [
        (enemy_id, body, ai)
        for enemy_id, body, ai, _ in world.query(Body, EnemyAI, EnemyTag)
    ]

    for proj_id, proj, _ in world.query(Projectile, ProjectileTag):
        advance_projectile(proj)

        if proj.active:
            for enemy_id, body, ai in enemies:
                if not ai.alive:
                    continue
                if proj.rect.overlaps(body.rect):
                    ai.alive = False
                    proj.active = False
                    events.append({'bullet': proj_id, 'enemy': enemy_id})
                    logger.debug('Bullet %d killed enemy %d', proj_id, enemy_id)
                    break  # One kill per bullet

        if not proj.active:
            world.destroy_entity(proj_id)

    return events
