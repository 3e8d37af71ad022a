import os

# pygame-backed tests only use Surfaces and Rects; keep SDL off any real display.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from spritewalk.entities.animation_catalog import AnimationSet


class RecordingBody:
    """Body that records every velocity command"""
    def __init__(self):
        self.commands = []

    def set_velocity(self, vx, vy):
        self.commands.append((vx, vy))

    @property
    def velocity(self):
        return self.commands[-1] if self.commands else (0, 0)


class RecordingSprite:
    """Sprite that records flip and play commands"""
    def __init__(self):
        self.flips = []
        self.plays = []

    def set_flip_x(self, flip):
        self.flips.append(flip)

    def play_animation(self, key, restart_if_same=False):
        self.plays.append((key, restart_if_same))


@pytest.fixture
def hero_animations():
    return AnimationSet.from_prefix("hero")


@pytest.fixture
def body():
    return RecordingBody()


@pytest.fixture
def sprite():
    return RecordingSprite()
