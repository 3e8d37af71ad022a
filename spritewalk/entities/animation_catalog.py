"""
Animation catalog: which animation key plays for each (walk|idle, direction) slot.

Sprite sheets for this game store one horizontal pose (facing right) and draw
it flipped for LEFT. An AnimationSet records that convention in `mirror_left`;
sets built from sheets that do carry left-facing frames can turn it off.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Mapping, NamedTuple

from spritewalk.core.direction import Direction, canonical, canonical_directions
from spritewalk.core.errors import MissingAnimationError


class FrameRange(NamedTuple):
    """Inclusive range of frame indices inside a sprite sheet."""
    start: int
    end: int
    frame_rate: int = 10  # frames per second

    @property
    def indices(self) -> range:
        return range(self.start, self.end + 1)


# 32x32 sheet layout shared by the hero and skeleton sheets (6 columns per row).
DEFAULT_SHEET_LAYOUT: Dict[str, FrameRange] = {
    "idle-down": FrameRange(0, 5),
    "idle-right": FrameRange(6, 11),
    "idle-up": FrameRange(12, 17),
    "walk-down": FrameRange(18, 23),
    "walk-right": FrameRange(24, 29),
    "walk-up": FrameRange(30, 35),
}

# Extra rows for sheets that draw their own left-facing frames.
LEFT_FACING_ROWS: Dict[str, FrameRange] = {
    "idle-left": FrameRange(36, 41),
    "walk-left": FrameRange(42, 47),
}


def sheet_layout(mirror_left: bool = True) -> Dict[str, FrameRange]:
    """Sheet layout matching AnimationSet.from_prefix(prefix, mirror_left)."""
    layout = dict(DEFAULT_SHEET_LAYOUT)
    if not mirror_left:
        layout.update(LEFT_FACING_ROWS)
    return layout


@dataclass(frozen=True)
class AnimationSet:
    """Animation keys for one actor type"""
    walk: Mapping[Direction, str] = field(default_factory=dict)
    idle: Mapping[Direction, str] = field(default_factory=dict)
    mirror_left: bool = True

    def __post_init__(self):
        """Validate that every canonical direction has an idle pose"""
        for direction in canonical_directions(self.mirror_left):
            if direction not in self.idle:
                raise MissingAnimationError(
                    f"AnimationSet has no idle animation for {direction.value}",
                    key=("idle", direction),
                )

    def walk_key(self, direction: Direction) -> str:
        return self._lookup(self.walk, "walk", direction)

    def idle_key(self, direction: Direction) -> str:
        return self._lookup(self.idle, "idle", direction)

    def _lookup(self, slots: Mapping[Direction, str], kind: str, direction: Direction) -> str:
        slot = canonical(direction, self.mirror_left)
        try:
            return slots[slot]
        except KeyError:
            raise MissingAnimationError(
                f"No {kind} animation for {slot.value} (requested {direction.value})",
                key=(kind, slot),
            ) from None

    @classmethod
    def from_prefix(cls, prefix: str, mirror_left: bool = True) -> "AnimationSet":
        """
        Build the set using the "<prefix>-<kind>-<direction>" naming of build_clips().

        Example:
            AnimationSet.from_prefix("hero").walk_key(Direction.UP)  # "hero-walk-up"
        """
        directions = canonical_directions(mirror_left)
        return cls(
            walk={d: f"{prefix}-walk-{d.value}" for d in directions},
            idle={d: f"{prefix}-idle-{d.value}" for d in directions},
            mirror_left=mirror_left,
        )

    @classmethod
    def from_names(cls, walk: Mapping[str, str], idle: Mapping[str, str],
                   mirror_left: bool = True) -> "AnimationSet":
        """Build the set from direction-name keyed mappings ({"right": "hero-walk-right"})."""
        return cls(
            walk={Direction.parse(name): key for name, key in walk.items()},
            idle={Direction.parse(name): key for name, key in idle.items()},
            mirror_left=mirror_left,
        )


class AnimationCatalog:
    """
    Registry of AnimationSets by actor type.

    Usage:
        catalog = AnimationCatalog()
        catalog.register("hero", AnimationSet.from_prefix("hero"))
        animations = catalog.get("hero")
    """

    def __init__(self):
        self._sets: Dict[str, AnimationSet] = {}

    def register(self, actor_type: str, animation_set: AnimationSet) -> None:
        self._sets[actor_type] = animation_set

    def get(self, actor_type: str) -> AnimationSet:
        try:
            return self._sets[actor_type]
        except KeyError:
            raise MissingAnimationError(f"No animations registered for actor type {actor_type!r}",
                                        key=actor_type) from None

    def __contains__(self, actor_type) -> bool:
        return actor_type in self._sets

    def __iter__(self) -> Iterator[str]:
        return iter(self._sets)


def default_catalog() -> AnimationCatalog:
    """Catalog for the demo's hero and skeleton sheets."""
    catalog = AnimationCatalog()
    for actor_type in ("hero", "skeleton"):
        catalog.register(actor_type, AnimationSet.from_prefix(actor_type))
    return catalog
