import itertools
import random

import pytest

from roto_clash import compass
from roto_clash.types import Direction, Position, Rotation


@pytest.mark.parametrize(
    "direction,expected",
    [
        (0, (0, -1)),
        (90, (1, 0)),
        (180, (0, 1)),
        (270, (-1, 0)),
    ],
)
def test_north_vector_under_each_compass(direction, expected):
    assert compass.vector_for(Direction.NORTH, direction) == expected


def test_vectors_are_unit_steps_without_drift():
    for direction, cardinal in itertools.product(compass.COMPASS_DIRECTIONS, Direction):
        dx, dy = compass.vector_for(cardinal, direction)
        assert isinstance(dx, int) and isinstance(dy, int)
        assert abs(dx) + abs(dy) == 1


def test_east_turns_south_at_ninety():
    assert compass.vector_for(Direction.EAST, 90) == (0, 1)
    assert compass.vector_for(Direction.WEST, 90) == (0, -1)


def test_rotate_wraps_both_ways():
    assert compass.rotate(0, Rotation.CLOCKWISE) == 90
    assert compass.rotate(270, Rotation.CLOCKWISE) == 0
    assert compass.rotate(0, Rotation.COUNTERCLOCKWISE) == 270
    assert compass.rotate(90, "counterclockwise") == 0


def test_compass_closure_over_random_sequences():
    rng = random.Random(7)
    direction = compass.random_direction(rng)
    for _ in range(500):
        direction = compass.rotate(direction, rng.choice(list(Rotation)))
        assert direction in compass.COMPASS_DIRECTIONS


def test_step_uses_compass():
    assert compass.step(Position(0, 4), Direction.NORTH, 90) == Position(1, 4)
    assert compass.step(Position(2, 3), Direction.NORTH, 0) == Position(2, 2)
