"""
Level Data
===========
Static terrain, the finish zone and the player spawn for one course.

Levels are plain Python data built once before play starts. Platforms
are never mutated afterwards, so they are stored as a tuple.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Tuple

from .errors import LevelError
from .geometry import Rect

logger = logging.getLogger(__name__)


# Original course layout: (x, y, width, height)
DEFAULT_PLATFORMS = [
    (0, 580, 1200, 20),
    (300, 450, 200, 20),
    (150, 350, 150, 20),
    (500, 350, 150, 20),
    (750, 480, 120, 20),
    (900, 450, 100, 20),
    (1050, 400, 150, 20),
    (1250, 460, 100, 20),
    (1400, 430, 130, 20),
    (1600, 390, 150, 20),
    (1800, 460, 100, 20),
    (1950, 420, 120, 20),
    (2100, 380, 150, 20),
    (2300, 460, 200, 20),
]
DEFAULT_FINISH = (2500, 520, 100, 60)
DEFAULT_PLAYER_SPAWN = (100, 500)


@dataclass(frozen=True)
class Level:
    """One course: ordered platforms, finish zone and player spawn."""
    platforms: Tuple[Rect, ...]
    finish: Rect
    player_spawn: Tuple[float, float] = DEFAULT_PLAYER_SPAWN
    spawn_enemies: bool = True

    def __post_init__(self):
        platforms = tuple(self.platforms)
        if not platforms:
            raise LevelError('Level needs at least one platform')
        for i, plat in enumerate(platforms):
            if not isinstance(plat, Rect):
                raise LevelError(f'Platform {i} is not a Rect: {plat!r}')
        if not isinstance(self.finish, Rect):
            raise LevelError(f'Finish zone is not a Rect: {self.finish!r}')
        if self.finish.width == 0 or self.finish.height == 0:
            raise LevelError('Finish zone must have a non-zero area')
        object.__setattr__(self, 'platforms', platforms)

    @property
    def width(self) -> float:
        """Rightmost world x covered by terrain or the finish zone."""
        return max([p.right for p in self.platforms] + [self.finish.right])

    @classmethod
    def from_tuples(cls, platforms: Iterable[Tuple[float, float, float, float]],
                    finish: Tuple[float, float, float, float],
                    **kwargs) -> 'Level':
        """Build a level from raw (x, y, width, height) tuples."""
        return cls(
            platforms=tuple(Rect(*p) for p in platforms),
            finish=Rect(*finish),
            **kwargs
        )


def default_level() -> Level:
    """The built-in course: fourteen platforms, finish box at x=2500."""
    level = Level.from_tuples(DEFAULT_PLATFORMS, DEFAULT_FINISH)
    logger.debug('Built default level: %d platforms, width %.0f',
                 len(level.platforms), level.width)
    return level
