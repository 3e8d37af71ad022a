# spritewalk/core/direction.py
"""
Movement directions and the non-moving choices an AI can make.

Coordinate System:
- Origin: Top-left corner of the screen/level.
- X-axis: Increases from left to right.
- Y-axis: Increases from top to bottom, so UP is negative y.
"""
from enum import Enum
from typing import Optional, Tuple

from spritewalk.core.errors import InvalidDirectionError


class Direction(Enum):
    """The four movement directions. Idle is represented by None."""

    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"

    @property
    def vector(self) -> Tuple[int, int]:
        """Unit axis vector in screen coordinates."""
        return _VECTORS[self]

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)

    @classmethod
    def parse(cls, value) -> "Direction":
        """
        Convert a Direction or its name/value ("left", "LEFT") to a Direction.

        Raises:
            InvalidDirectionError: value does not name a direction
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
        raise InvalidDirectionError(value)


class Halt(Enum):
    """Choices that keep an actor in place instead of moving it."""

    STOP = "stop"
    DEATH = "death"

    @classmethod
    def parse(cls, value) -> Optional["Halt"]:
        """Return the matching Halt member, or None if value is not a halt choice."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().lower()
            for member in cls:
                if member.value == key:
                    return member
        return None


_VECTORS = {
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
}


def canonical(direction: Direction, mirror_left: bool = True) -> Direction:
    """
    Direction whose animation asset is actually stored.

    With mirroring, LEFT reuses the RIGHT asset drawn flipped.
    """
    if mirror_left and direction is Direction.LEFT:
        return Direction.RIGHT
    return direction


def canonical_directions(mirror_left: bool = True) -> Tuple[Direction, ...]:
    """All directions the canonical step can produce."""
    if mirror_left:
        return (Direction.RIGHT, Direction.UP, Direction.DOWN)
    return tuple(Direction)


def parse_choice(value):
    """Parse an AI choice: a Halt member if it names one, otherwise a Direction."""
    halt = Halt.parse(value)
    if halt is not None:
        return halt
    return Direction.parse(value)
