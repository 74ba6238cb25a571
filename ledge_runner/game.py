"""
Game State
===========
The world-state aggregate and the once-per-frame tick.

One tick, in order:
    input → player physics → enemy AI → bullets → loss check → win check

Once the outcome leaves PLAYING the world is frozen: tick() does
nothing and fire() is refused. The caller keeps rendering.
"""

import logging
from enum import Enum, auto
from typing import Iterator, List, Optional, Tuple

from .ecs import World
from .components import (
    Body, PlayerControlled, EnemyAI, EnemyTag, Projectile, ProjectileTag
)
from .enemies import spawn_enemies, enemy_ai_system
from .level import Level, default_level
from .physics import integrate_body, GRAVITY, TieBreak
from .player import create_player, apply_player_input, InputState, IDLE_INPUT
from .projectiles import fire_from, projectile_system

logger = logging.getLogger(__name__)


class GameOutcome(Enum):
    PLAYING = auto()
    LOST = auto()
    WON = auto()


class GameState:
    """Central game state container. Owns the world for one session."""

    def __init__(self, level: Optional[Level] = None,
                 gravity: float = GRAVITY,
                 tie_break: TieBreak = TieBreak.LAST):
        self.level = level if level is not None else default_level()
        self.gravity = gravity
        self.tie_break = tie_break

        # These get set up by reset()
        self.world: World = None  # type: ignore
        self.player_id: int = -1
        self.enemy_ids: List[int] = []
        self.outcome = GameOutcome.PLAYING
        self.frame = 0
        self.kills = 0
        self.shots_fired = 0

        self.reset()

    def reset(self):
        """Rebuild the world from the level and start playing again."""
        self.world = World()
        spawn_x, spawn_y = self.level.player_spawn
        self.player_id = create_player(self.world, spawn_x, spawn_y)
        if self.level.spawn_enemies:
            self.enemy_ids = spawn_enemies(self.world, self.level)
        else:
            self.enemy_ids = []
        self.outcome = GameOutcome.PLAYING
        self.frame = 0
        self.kills = 0
        self.shots_fired = 0
        logger.info('Game started: %d platforms, %d enemies',
                    len(self.level.platforms), len(self.enemy_ids))

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def player_body(self) -> Body:
        return self.world.get_component(self.player_id, Body)

    @property
    def player_control(self) -> PlayerControlled:
        return self.world.get_component(self.player_id, PlayerControlled)

    @property
    def is_over(self) -> bool:
        return self.outcome is not GameOutcome.PLAYING

    def enemies(self) -> Iterator[Tuple[int, Body, EnemyAI]]:
        """All enemies in spawn order, dead ones included."""
        for entity_id, body, ai, _ in self.world.query(Body, EnemyAI, EnemyTag):
            yield entity_id, body, ai

    def bullets(self) -> Iterator[Tuple[int, Projectile]]:
        """Bullets currently in flight."""
        for entity_id, proj, _ in self.world.query(Projectile, ProjectileTag):
            yield entity_id, proj

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def fire(self) -> Optional[int]:
        """Fire one bullet from the player. Returns its ID, or None if refused."""
        if self.is_over:
            return None
        ctrl = self.player_control
        bullet_id = fire_from(self.world, self.player_body.rect,
                              ctrl.facing_right, owner_id=self.player_id)
        self.shots_fired += 1
        return bullet_id

    def tick(self, inputs: InputState = IDLE_INPUT) -> GameOutcome:
        """Run one fixed-timestep tick of game logic."""
        if self.is_over:
            return self.outcome

        self.frame += 1
        platforms = self.level.platforms
        body = self.player_body

        apply_player_input(body, self.player_control, inputs)
        integrate_body(body, platforms, self.gravity, self.tie_break)

        enemy_ai_system(self.world, body.rect, platforms,
                        self.gravity, self.tie_break)

        hits = projectile_system(self.world)
        self.kills += len(hits)
        self.world.process_dead_entities()

        self._check_player_enemy_collision()
        if not self.is_over:
            self._check_finish()

        return self.outcome

    # -------------------------------------------------------------------------
    # Terminal conditions
    # -------------------------------------------------------------------------

    def _check_player_enemy_collision(self):
        player_rect = self.player_body.rect
        for entity_id, body, ai in self.enemies():
            if ai.alive and player_rect.overlaps(body.rect):
                self.outcome = GameOutcome.LOST
                logger.info('Player caught by enemy %d on frame %d',
                            entity_id, self.frame)
                return

    def _check_finish(self):
        if self.player_body.rect.overlaps(self.level.finish):
            self.outcome = GameOutcome.WON
            logger.info('Finish reached on frame %d (%d kills)',
                        self.frame, self.kills)
