"""
Intent Sources - where an actor's per-tick movement intent comes from
Player input and the wandering timer AI share one interface so the controller
does not care which one drives it
"""

import logging
import random
from abc import ABC, abstractmethod
from typing import Hashable, Iterable, List, Mapping, Optional, Sequence, Union

from spritewalk.core.direction import Direction, Halt, parse_choice
from spritewalk.core.input import InputAggregator

logger = logging.getLogger(__name__)

Intent = Union[Direction, Halt, None]

DEFAULT_AI_CHOICES = (Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN, Halt.STOP)
DEFAULT_RETHINK_TICKS = 60  # one second at 60 FPS


class IntentSource(ABC):
    """Base class for anything that produces a movement intent each tick"""

    @abstractmethod
    def resolve_intent(self) -> Intent:
        """Return a Direction to walk, a Halt to stand still, or None to idle"""
        pass


class PlayerIntentSource(IntentSource):
    """Keyboard-driven intent: the most recent held key wins"""

    def __init__(self, aggregator: Optional[InputAggregator] = None,
                 keymap: Optional[Mapping[Hashable, Direction]] = None):
        self.aggregator = aggregator if aggregator is not None else InputAggregator()
        self.keymap = keymap

    def resolve_intent(self) -> Optional[Direction]:
        return self.aggregator.resolve_direction(self.keymap)


class TimerIntentSource(IntentSource):
    """
    Wandering AI: keeps a random choice and re-rolls it every few seconds.

    Each tick bumps a counter; once it exceeds `rethink_ticks` a new choice is
    drawn uniformly from `choices` and the counter resets. Choosing DEATH is
    final: the actor stays down.
    """

    def __init__(self, choices: Iterable = DEFAULT_AI_CHOICES,
                 rethink_ticks: int = DEFAULT_RETHINK_TICKS,
                 rng: Optional[random.Random] = None):
        """
        Args:
            choices: Directions and/or Halt members (names like "left"/"stop" accepted)
            rethink_ticks: Ticks to hold a choice before drawing a new one
            rng: Random source; pass a seeded Random for reproducible runs
        """
        self.choices: List[Union[Direction, Halt]] = [parse_choice(c) for c in choices]
        if not self.choices:
            raise ValueError("TimerIntentSource needs at least one choice")
        if rethink_ticks < 0:
            raise ValueError(f"rethink_ticks must be >= 0, got {rethink_ticks!r}")
        self.rethink_ticks = rethink_ticks
        self.rng = rng if rng is not None else random.Random()
        self.elapsed_ticks = 0
        self.current_choice: Union[Direction, Halt] = self.rng.choice(self.choices)

    @property
    def is_dead(self) -> bool:
        return self.current_choice is Halt.DEATH

    def resolve_intent(self) -> Union[Direction, Halt]:
        if self.is_dead:
            return self.current_choice

        self.elapsed_ticks += 1
        if self.elapsed_ticks > self.rethink_ticks:
            self.current_choice = self.rng.choice(self.choices)
            self.elapsed_ticks = 0
            logger.debug("Timer AI picked %s", self.current_choice.value)
        return self.current_choice


class ScriptedIntentSource(IntentSource):
    """Replays a fixed sequence of intents, then idles forever"""

    def __init__(self, intents: Sequence):
        self.intents: List[Intent] = [None if i is None else parse_choice(i) for i in intents]
        self.position = 0

    @property
    def finished(self) -> bool:
        return self.position >= len(self.intents)

    def resolve_intent(self) -> Intent:
        if self.finished:
            return None
        intent = self.intents[self.position]
        self.position += 1
        return intent
