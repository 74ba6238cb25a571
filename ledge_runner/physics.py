"""
Physics
========
Gravity integration and landing resolution against static platforms.

Only downward contact is resolved. Bodies pass through platform sides
and undersides and are only ever supported from above.
"""

from enum import Enum
from typing import Optional, Sequence

from .components import Body
from .geometry import Rect


GRAVITY = 0.5  # units per tick squared


class TieBreak(Enum):
    """Which platform wins when a body lands on several in one tick."""
    LAST = 'last'        # every candidate snaps in level order; last wins
    HIGHEST = 'highest'  # only the candidate with the smallest y


def integrate_body(
    body: Body,
    platforms: Sequence[Rect],
    gravity: float = GRAVITY,
    tie_break: TieBreak = TieBreak.LAST,
) -> Optional[Rect]:
    """
    Advance a body one tick and land it on a platform if it fell onto one.

    A platform qualifies when the body overlaps it, is not moving up,
    and its bottom edge less this tick's velocity was at or above the
    platform top. Returns the platform landed on, or None.
    """
    rect = body.rect
    if body.gravity_first:
        body.vel_y += gravity
        rect.y += body.vel_y
    else:
        rect.y += body.vel_y
        body.vel_y += gravity
    body.on_ground = False

    landed = None
    for plat in platforms:
        if not rect.overlaps(plat) or body.vel_y < 0:
            continue
        if rect.bottom - body.vel_y > plat.y:
            continue
        if tie_break is TieBreak.LAST:
            _land(body, plat)
            landed = plat
        elif landed is None or plat.y < landed.y:
            landed = plat

    if landed is not None and tie_break is TieBreak.HIGHEST:
        _land(body, landed)
    return landed


def _land(body: Body, plat: Rect):
    body.rect.bottom = plat.y
    body.vel_y = 0.0
    body.on_ground = True
