"""
Keyboard input aggregation for player-controlled actors.

This module implements `InputAggregator`, which keeps the set of currently held
input tokens (key codes such as "ArrowLeft" or "KeyD") in the order they were
first pressed and reduces it to a single movement direction.

Design:
- Last key still held wins. Tokens are appended on first press and never
  reordered, so scanning from the newest end gives the most recent surviving key
  without timestamps.
- Press/release are applied synchronously from the host's event dispatch.
- Raise no exceptions: duplicate presses and stray releases are no-ops.
"""
from typing import Dict, Hashable, List, Mapping, Optional, Tuple
import logging

from spritewalk.core.direction import Direction

logger = logging.getLogger(__name__)


# Arrow keys and WASD, named after the physical key codes.
DEFAULT_KEYMAP: Dict[str, Direction] = {
    "ArrowLeft": Direction.LEFT,
    "ArrowRight": Direction.RIGHT,
    "ArrowUp": Direction.UP,
    "ArrowDown": Direction.DOWN,
    "KeyA": Direction.LEFT,
    "KeyD": Direction.RIGHT,
    "KeyW": Direction.UP,
    "KeyS": Direction.DOWN,
}


class InputAggregator:
    """Held-key tracker with most-recently-pressed-wins resolution.

    Usage:
        inputs = InputAggregator()
        inputs.press("ArrowUp")
        inputs.press("ArrowLeft")
        inputs.release("ArrowLeft")
        inputs.resolve_direction()  # Direction.UP
    """

    def __init__(self, keymap: Optional[Mapping[Hashable, Direction]] = None):
        self.keymap: Dict[Hashable, Direction] = dict(DEFAULT_KEYMAP if keymap is None else keymap)
        self._held: List[Hashable] = []

    def press(self, token: Hashable) -> None:
        """Add token at the most-recent end. Re-pressing a held token does not move it."""
        if token not in self._held:
            self._held.append(token)

    def release(self, token: Hashable) -> None:
        """Drop token if held."""
        if token in self._held:
            self._held.remove(token)

    def handle(self, pressed: bool, token: Hashable) -> None:
        if pressed:
            self.press(token)
        else:
            self.release(token)

    def clear(self) -> None:
        """Forget every held token (e.g. the window lost focus and key-ups were missed)."""
        if self._held:
            logger.debug("Clearing %d held input tokens", len(self._held))
        self._held.clear()

    def resolve_direction(self, keymap: Optional[Mapping[Hashable, Direction]] = None) -> Optional[Direction]:
        """
        Reduce the held set to one direction.

        Args:
            keymap: token -> Direction table; defaults to this aggregator's keymap

        Returns:
            Direction of the most recently pressed token that is still held and
            mapped, or None when nothing held maps to a direction.
        """
        table = self.keymap if keymap is None else keymap
        for token in reversed(self._held):
            direction = table.get(token)
            if direction is not None:
                return direction
        return None

    @property
    def held(self) -> Tuple[Hashable, ...]:
        """Snapshot of held tokens, oldest first."""
        return tuple(self._held)

    def __len__(self) -> int:
        return len(self._held)

    def __contains__(self, token) -> bool:
        return token in self._held


def keymap_from_names(entries: Mapping[Hashable, str]) -> Dict[Hashable, Direction]:
    """Build a keymap from token -> direction-name pairs ("KeyA": "left")."""
    return {token: Direction.parse(name) for token, name in entries.items()}


def merge_keymaps(*keymaps: Mapping[Hashable, Direction]) -> Dict[Hashable, Direction]:
    """Later keymaps override earlier ones token by token."""
    merged: Dict[Hashable, Direction] = {}
    for keymap in keymaps:
        merged.update(keymap)
    return merged
