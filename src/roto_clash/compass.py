"""Compass model: the rotating frame that direction cards are read in.

The compass holds a direction in degrees, always one of 0, 90, 180 or 270.
A cardinal card's base vector is rotated by that angle before the mover steps.
"""

from __future__ import annotations

import math
import random
from typing import Dict, Optional, Tuple

from .types import Direction, Position, Rotation

COMPASS_DIRECTIONS: Tuple[int, ...] = (0, 90, 180, 270)
BASE_VECTORS: Dict[Direction, Tuple[int, int]] = {
    Direction.NORTH: (0, -1),
    Direction.SOUTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.WEST: (-1, 0),
}
ROTATION_DEGREES: Dict[Rotation, int] = {
    Rotation.CLOCKWISE: 90,
    Rotation.COUNTERCLOCKWISE: -90,
}


def random_direction(rng: Optional[random.Random] = None) -> int:
    generator = rng or random.Random()
    return generator.choice(COMPASS_DIRECTIONS)


def rotate(direction: int, rotation: Rotation) -> int:
    """Turn the compass a quarter turn; the result stays in ``COMPASS_DIRECTIONS``."""

    return (direction + ROTATION_DEGREES[Rotation(rotation)] + 360) % 360


def vector_for(cardinal: Direction, direction: int) -> Tuple[int, int]:
    """Return the absolute step for ``cardinal`` when the compass reads ``direction``.

    For multiples of 90 degrees cos/sin are exactly -1, 0 or 1 once rounded, so
    the result is always a unit grid step. North at 90 degrees is absolute east.
    """

    x, y = BASE_VECTORS[Direction(cardinal)]
    theta = math.radians(direction)
    cos_t = math.cos(theta)
    sin_t = math.sin(theta)
    return round(x * cos_t - y * sin_t), round(x * sin_t + y * cos_t)


def step(pos: Position, cardinal: Direction, direction: int) -> Position:
    """Return the cell one step from ``pos`` along ``cardinal`` under the compass."""

    dx, dy = vector_for(cardinal, direction)
    return Position(pos.x + dx, pos.y + dy)
