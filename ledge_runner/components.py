"""
Component Definitions
======================
All components are plain dataclasses with no behavior.
"""

from dataclasses import dataclass
from enum import Enum, auto

from .geometry import Rect


# =============================================================================
# PHYSICS COMPONENTS
# =============================================================================

@dataclass
class Body:
    """
    A moving body: its rectangle plus vertical motion state.

    gravity_first picks the integration order. Enemies accelerate and
    then move; the player moves with last tick's velocity and then
    accelerates. The two orders give different jump arcs.
    """
    rect: Rect
    vel_y: float = 0.0
    on_ground: bool = False
    gravity_first: bool = True


# =============================================================================
# PLAYER COMPONENTS
# =============================================================================

@dataclass
class PlayerControlled:
    """Marks an entity as player-controlled."""
    speed: float = 5.0  # units per tick
    jump_power: float = -12.0
    facing_right: bool = True

    @property
    def facing(self) -> int:
        return 1 if self.facing_right else -1


# =============================================================================
# AI COMPONENTS
# =============================================================================

class AIMode(Enum):
    """AI decision mode. Ground contact lives on the Body."""
    PATROL = auto()
    CHASE = auto()


@dataclass
class EnemyAI:
    """Enemy behavior configuration and state."""
    start_x: float
    speed: float = 2.0
    patrol_range: float = 100.0
    direction: int = 1  # +1 right, -1 left
    alive: bool = True
    mode: AIMode = AIMode.PATROL
    chase_range: float = 400.0
    dead_zone: float = 5.0

    @property
    def chasing(self) -> bool:
        return self.mode is AIMode.CHASE


# =============================================================================
# PROJECTILE COMPONENTS
# =============================================================================

@dataclass
class Projectile:
    """Bullet flight data. Direction is baked into the sign of speed."""
    rect: Rect
    speed: float = 20.0
    distance_traveled: float = 0.0
    max_distance: float = 300.0
    active: bool = True
    owner_id: int = -1


# =============================================================================
# TAG COMPONENTS (empty, used for queries)
# =============================================================================

@dataclass
class PlayerTag:
    """Marks the player entity."""
    pass


@dataclass
class EnemyTag:
    """Marks an enemy entity."""
    enemy_type: str = 'walker'


@dataclass
class ProjectileTag:
    """Marks a projectile entity."""
    pass

