"""
Geometry
=========
Axis-aligned rectangles in world units. Y grows downward.
"""

from dataclasses import dataclass
from typing import Tuple

from .errors import GeometryError


@dataclass
class Rect:
    """Axis-aligned rectangle with inclusive edge tests."""
    x: float
    y: float
    width: float
    height: float

    def __post_init__(self):
        if self.width < 0 or self.height < 0:
            raise GeometryError(
                f'Rect size must be non-negative, got {self.width}x{self.height}'
            )

    @property
    def left(self) -> float:
        return self.x

    @left.setter
    def left(self, value: float):
        self.x = value

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @bottom.setter
    def bottom(self, value: float):
        """Move the rect so its bottom edge sits at value."""
        self.y = value - self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    def overlaps(self, other: 'Rect') -> bool:
        """True if the rects intersect. Touching edges count."""
        return not (
            self.right < other.x or self.x > other.right or
            self.bottom < other.y or self.y > other.bottom
        )

    def contains_point(self, px: float, py: float) -> bool:
        """Inclusive point test on both axes."""
        return self.x <= px <= self.right and self.y <= py <= self.bottom

    def midbottom(self) -> Tuple[float, float]:
        return (self.x + self.width / 2, self.y + self.height)

    def copy(self) -> 'Rect':
        return Rect(self.x, self.y, self.width, self.height)

    def moved(self, dx: float, dy: float) -> 'Rect':
        """Return a shifted copy, leaving this rect untouched."""
        return Rect(self.x + dx, self.y + dy, self.width, self.height)


def overlaps(a: Rect, b: Rect) -> bool:
    return a.overlaps(b)


def contains_point(r: Rect, px: float, py: float) -> bool:
    return r.contains_point(px, py)


def midbottom(r: Rect) -> Tuple[float, float]:
    return r.midbottom()
