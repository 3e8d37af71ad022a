"""
Direction-to-presentation mapping.

MovementResolver turns a movement intent (a Direction, or None for idle) into a
Presentation: the velocity to apply, the animation key to play and whether the
sprite is drawn mirrored. It never touches a body or sprite itself; the
controller applies the returned value, so the resolver runs without a host.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple

from spritewalk.core.direction import Direction
from spritewalk.core.errors import InvalidDirectionError
from spritewalk.entities.animation_catalog import AnimationSet

DEFAULT_SPEED = 150.0


class Presentation(NamedTuple):
    """How an actor should move and look this tick"""
    velocity: Tuple[float, float]
    animation_key: str
    flip_x: bool

    @property
    def moving(self) -> bool:
        return self.velocity != (0, 0)


@dataclass
class MovementState:
    """Per-actor state owned by exactly one resolver"""
    last_facing: Direction = Direction.DOWN
    speed: float = DEFAULT_SPEED


def _check_speed(speed: float) -> float:
    if speed <= 0:
        raise ValueError(f"speed must be > 0, got {speed!r}")
    return speed


class MovementResolver:
    """
    Resolves movement intents for one actor.

    Usage:
        resolver = MovementResolver(AnimationSet.from_prefix("hero"), speed=150)
        resolver.move(Direction.RIGHT)  # Presentation((150, 0), "hero-walk-right", False)
        resolver.move(None)             # Presentation((0, 0), "hero-idle-right", False)
    """

    def __init__(self, animations: AnimationSet, speed: float = DEFAULT_SPEED,
                 facing: Direction = Direction.DOWN):
        """
        Args:
            animations: Walk/idle animation keys for this actor
            speed: Movement speed in pixels per second (> 0)
            facing: Initial facing used for the idle pose before any move
        """
        self.animations = animations
        self.state = MovementState(last_facing=Direction.parse(facing), speed=_check_speed(speed))

    @property
    def speed(self) -> float:
        return self.state.speed

    @speed.setter
    def speed(self, value: float) -> None:
        self.state.speed = _check_speed(value)

    @property
    def last_facing(self) -> Direction:
        return self.state.last_facing

    def move(self, direction: Optional[Direction]) -> Presentation:
        """
        Resolve a movement intent.

        Args:
            direction: Direction to walk, or None to idle in place

        Returns:
            Presentation for this tick

        Raises:
            InvalidDirectionError: direction is neither None nor a Direction
            MissingAnimationError: the animation set lacks the needed slot
        """
        if direction is None:
            return self._idle()
        if not isinstance(direction, Direction):
            raise InvalidDirectionError(direction)

        dx, dy = direction.vector
        speed = self.state.speed
        animation_key = self.animations.walk_key(direction)
        self.state.last_facing = direction
        return Presentation(
            velocity=(dx * speed, dy * speed),
            animation_key=animation_key,
            flip_x=self._mirrored(direction),
        )

    def stop(self) -> Presentation:
        """Halt in place: zero velocity and the idle pose for the last facing."""
        return self._idle()

    def _idle(self) -> Presentation:
        facing = self.state.last_facing
        return Presentation(
            velocity=(0, 0),
            animation_key=self.animations.idle_key(facing),
            flip_x=self._mirrored(facing),
        )

    def _mirrored(self, direction: Direction) -> bool:
        return self.animations.mirror_left and direction is Direction.LEFT
