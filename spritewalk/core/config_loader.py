"""Configuration loader for actor movement settings."""

import json
import logging
import os
from typing import Dict, Hashable, List, NamedTuple, Union

from config import (
    ACTOR_CONFIG_PATH,
    AI_CHOICES,
    AI_RETHINK_TICKS,
    DEFAULT_FACING,
    HERO_SPEED,
    MONSTER_SPEED,
)
from spritewalk.core.direction import Direction, Halt, parse_choice
from spritewalk.core.input import DEFAULT_KEYMAP, keymap_from_names, merge_keymaps

logger = logging.getLogger(__name__)


class ActorSettings(NamedTuple):
    speed: float
    facing: Direction = Direction.DOWN
    mirror_left: bool = True


class RuntimeConfig(NamedTuple):
    actors: Dict[str, ActorSettings]
    rethink_ticks: int
    ai_choices: List[Union[Direction, Halt]]
    keymap: Dict[Hashable, Direction]

    def actor(self, actor_type: str) -> ActorSettings:
        """Settings for actor_type, falling back to hero-speed defaults."""
        return self.actors.get(actor_type, ActorSettings(speed=float(HERO_SPEED)))


def default_runtime_config() -> RuntimeConfig:
    facing = Direction.parse(DEFAULT_FACING)
    return RuntimeConfig(
        actors={
            "hero": ActorSettings(speed=float(HERO_SPEED), facing=facing),
            "skeleton": ActorSettings(speed=float(MONSTER_SPEED), facing=facing),
        },
        rethink_ticks=AI_RETHINK_TICKS,
        ai_choices=[parse_choice(c) for c in AI_CHOICES],
        keymap=dict(DEFAULT_KEYMAP),
    )


def _section(data: dict, name: str) -> dict:
    """A JSON object section, empty when absent."""
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ValueError(f"{name} must be a JSON object, got {type(section).__name__}")
    return section


def _parse_actor(name: str, data: dict, fallback: ActorSettings) -> ActorSettings:
    if not isinstance(data, dict):
        raise ValueError(f"actors.{name} must be a JSON object, got {type(data).__name__}")
    speed = float(data.get("speed", fallback.speed))
    if speed <= 0:
        raise ValueError(f"Actor {name!r}: speed must be > 0, got {speed!r}")
    facing = Direction.parse(data.get("facing", fallback.facing))
    mirror_left = data.get("mirror_left", fallback.mirror_left)
    if not isinstance(mirror_left, bool):
        raise ValueError(f"Actor {name!r}: mirror_left must be true or false, got {mirror_left!r}")
    return ActorSettings(speed=speed, facing=facing, mirror_left=mirror_left)


def load_runtime_config(config_path: str = ACTOR_CONFIG_PATH) -> RuntimeConfig:
    """
    Load actor settings from JSON, layered over the defaults in config.py.

    A missing or unreadable file falls back to defaults with a warning. Values
    that are readable but wrong (unknown direction names, non-positive speeds)
    raise, since they are setup bugs.

    Args:
        config_path: Path to the configuration file

    Returns:
        RuntimeConfig: Loaded configuration
    """
    defaults = default_runtime_config()
    if not os.path.exists(config_path):
        logger.warning("Config file not found: %s, using defaults", config_path)
        return defaults

    try:
        with open(config_path, 'r') as f:
            data = json.load(f) or {}
    except (OSError, ValueError) as e:
        logger.warning("Error loading config %s: %s, using defaults", config_path, e)
        return defaults

    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: top level must be a JSON object")

    actors = dict(defaults.actors)
    for name, actor_data in _section(data, "actors").items():
        actors[name] = _parse_actor(name, actor_data, defaults.actor(name))

    ai_cfg = _section(data, "ai")
    rethink_ticks = int(ai_cfg.get("rethink_ticks", defaults.rethink_ticks))
    if rethink_ticks < 0:
        raise ValueError(f"ai.rethink_ticks must be >= 0, got {rethink_ticks!r}")
    if "choices" in ai_cfg:
        if not isinstance(ai_cfg["choices"], list):
            raise ValueError("ai.choices must be a JSON list")
        ai_choices = [parse_choice(c) for c in ai_cfg["choices"]]
        if not ai_choices:
            raise ValueError("ai.choices must not be empty")
    else:
        ai_choices = defaults.ai_choices

    keymap = defaults.keymap
    if "keymap" in data:
        keymap = merge_keymaps(keymap, keymap_from_names(_section(data, "keymap")))

    logger.info("Loaded actor config from %s (%d actors)", config_path, len(actors))
    return RuntimeConfig(actors=actors, rethink_ticks=rethink_ticks, ai_choices=ai_choices, keymap=keymap)


def save_runtime_config(runtime: RuntimeConfig, config_path: str = ACTOR_CONFIG_PATH) -> None:
    """
    Persist a RuntimeConfig as JSON.

    Raises:
        ValueError: If the keymap holds a non-string token, which JSON could
            not restore to the same key
    """
    bad_tokens = [token for token in runtime.keymap if not isinstance(token, str)]
    if bad_tokens:
        raise ValueError(f"Keymap tokens must be strings to be saved, got {bad_tokens!r}")

    directory = os.path.dirname(config_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    data = {
        "actors": {
            name: {"speed": s.speed, "facing": s.facing.value, "mirror_left": s.mirror_left}
            for name, s in runtime.actors.items()
        },
        "ai": {
            "rethink_ticks": int(runtime.rethink_ticks),
            "choices": [c.value for c in runtime.ai_choices],
        },
        "keymap": {token: d.value for token, d in runtime.keymap.items()},
    }

    with open(config_path, 'w') as f:
        json.dump(data, f, indent=2)
