import random

import pytest

from spritewalk.ai.intent import (
    DEFAULT_AI_CHOICES,
    PlayerIntentSource,
    ScriptedIntentSource,
    TimerIntentSource,
)
from spritewalk.core.direction import Direction, Halt
from spritewalk.core.errors import InvalidDirectionError
from spritewalk.core.input import InputAggregator


# --- Player ---

def test_player_source_reads_aggregator():
    inputs = InputAggregator()
    source = PlayerIntentSource(inputs)
    assert source.resolve_intent() is None
    inputs.press("KeyW")
    assert source.resolve_intent() == Direction.UP

def test_player_source_keymap_override():
    inputs = InputAggregator()
    source = PlayerIntentSource(inputs, keymap={"KeyI": Direction.UP})
    inputs.press("KeyW")
    assert source.resolve_intent() is None
    inputs.press("KeyI")
    assert source.resolve_intent() == Direction.UP


# --- Timer AI ---

def test_timer_holds_choice_until_threshold_exceeded():
    source = TimerIntentSource([Direction.LEFT, Direction.RIGHT], rethink_ticks=3, rng=random.Random(7))
    initial = source.current_choice
    # ticks 1..3 do not exceed the threshold
    assert [source.resolve_intent() for _ in range(3)] == [initial] * 3
    assert source.elapsed_ticks == 3
    source.resolve_intent()  # tick 4 re-rolls
    assert source.elapsed_ticks == 0

def test_timer_rerolls_from_configured_choices():
    source = TimerIntentSource(["up", "stop"], rethink_ticks=0, rng=random.Random(1))
    seen = {source.resolve_intent() for _ in range(50)}
    assert seen <= {Direction.UP, Halt.STOP}
    assert seen == {Direction.UP, Halt.STOP}

def test_timer_single_choice_is_constant():
    source = TimerIntentSource([Direction.DOWN], rethink_ticks=1)
    assert all(source.resolve_intent() == Direction.DOWN for _ in range(10))

def test_timer_death_is_final():
    source = TimerIntentSource([Halt.DEATH], rethink_ticks=0)
    assert source.is_dead
    assert source.resolve_intent() is Halt.DEATH
    source.choices.append(Direction.LEFT)
    assert all(source.resolve_intent() is Halt.DEATH for _ in range(20))

def test_timer_default_choices():
    source = TimerIntentSource(rng=random.Random(0))
    assert source.choices == list(DEFAULT_AI_CHOICES)
    assert source.rethink_ticks == 60

def test_timer_validates_configuration():
    with pytest.raises(ValueError):
        TimerIntentSource([])
    with pytest.raises(ValueError):
        TimerIntentSource([Direction.UP], rethink_ticks=-1)
    with pytest.raises(InvalidDirectionError):
        TimerIntentSource(["left", "jump"])


# --- Scripted replay ---

def test_scripted_source_replays_then_idles():
    source = ScriptedIntentSource(["right", None, Halt.STOP])
    assert source.resolve_intent() == Direction.RIGHT
    assert source.resolve_intent() is None
    assert source.resolve_intent() is Halt.STOP
    assert source.finished
    assert source.resolve_intent() is None
