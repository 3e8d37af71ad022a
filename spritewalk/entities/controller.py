"""
Actor controller: binds an intent source to a MovementResolver and pushes the
result onto the host's body and sprite once per frame.
"""

import logging
import random
from typing import Hashable, Iterable, Mapping, Optional, Protocol

from spritewalk.ai.intent import (
    DEFAULT_AI_CHOICES,
    DEFAULT_RETHINK_TICKS,
    IntentSource,
    PlayerIntentSource,
    TimerIntentSource,
)
from spritewalk.core.direction import Direction, Halt
from spritewalk.core.input import InputAggregator
from spritewalk.entities.animation_catalog import AnimationSet
from spritewalk.entities.movement import DEFAULT_SPEED, MovementResolver, Presentation

logger = logging.getLogger(__name__)


class Body(Protocol):
    """Movable physics body. The controller only ever writes velocity."""

    def set_velocity(self, vx: float, vy: float) -> None: ...


class SpritePresentation(Protocol):
    """Animated sprite. The controller only issues commands, never queries."""

    def set_flip_x(self, flip: bool) -> None: ...

    def play_animation(self, key: str, restart_if_same: bool = False) -> None: ...


class ActorController:
    """
    Drives one actor.

    Usage:
        controller = ActorController.for_player(AnimationSet.from_prefix("hero"), body=body, sprite=sprite)
        controller.inputs.press("KeyD")
        controller.update()  # body moves right, "hero-walk-right" plays
    """

    def __init__(self, resolver: MovementResolver, intent_source: IntentSource,
                 body: Optional[Body] = None, sprite: Optional[SpritePresentation] = None):
        self.resolver = resolver
        self.intent_source = intent_source
        self.body = body
        self.sprite = sprite
        self.last_presentation: Optional[Presentation] = None

    @classmethod
    def for_player(cls, animations: AnimationSet, speed: float = DEFAULT_SPEED,
                   facing: Direction = Direction.DOWN,
                   keymap: Optional[Mapping[Hashable, Direction]] = None,
                   body: Optional[Body] = None,
                   sprite: Optional[SpritePresentation] = None) -> "ActorController":
        """Keyboard-controlled actor with its own InputAggregator."""
        source = PlayerIntentSource(InputAggregator(keymap))
        return cls(MovementResolver(animations, speed, facing), source, body, sprite)

    @classmethod
    def for_autonomous(cls, animations: AnimationSet, speed: float = DEFAULT_SPEED,
                       facing: Direction = Direction.DOWN,
                       choices: Iterable = DEFAULT_AI_CHOICES,
                       rethink_ticks: int = DEFAULT_RETHINK_TICKS,
                       rng: Optional[random.Random] = None,
                       body: Optional[Body] = None,
                       sprite: Optional[SpritePresentation] = None) -> "ActorController":
        """Timer-AI actor that wanders between random choices."""
        source = TimerIntentSource(choices, rethink_ticks, rng)
        return cls(MovementResolver(animations, speed, facing), source, body, sprite)

    @property
    def inputs(self) -> Optional[InputAggregator]:
        """The held-key tracker for player-controlled actors, else None."""
        return getattr(self.intent_source, "aggregator", None)

    def update(self) -> Presentation:
        """Run one tick: resolve intent, compute the presentation and apply it."""
        intent = self.intent_source.resolve_intent()
        if isinstance(intent, Halt):
            presentation = self.resolver.stop()
        else:
            presentation = self.resolver.move(intent)
        self.apply(presentation)
        return presentation

    def apply(self, presentation: Presentation) -> None:
        """Push a presentation onto the bound body and sprite, if any."""
        if self.body is not None:
            # Zero first so no residual motion survives a stop.
            self.body.set_velocity(0, 0)
            if presentation.moving:
                self.body.set_velocity(*presentation.velocity)
        if self.sprite is not None:
            self.sprite.set_flip_x(presentation.flip_x)
            self.sprite.play_animation(presentation.animation_key, False)

        if presentation != self.last_presentation:
            logger.debug("Actor presentation -> %s (flip=%s, v=%s)",
                         presentation.animation_key, presentation.flip_x, presentation.velocity)
        self.last_presentation = presentation
