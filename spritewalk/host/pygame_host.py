"""
pygame implementations of the collaborators the movement layer drives.

PygameBody       - settable velocity, sub-pixel stepping, world-bound clamping
PygameSprite     - play-by-key and horizontal flip over an AnimationPlayer
PhysicsWorld     - steps bodies and blocks registered collider pairs
dispatch_key_event - feeds KEYDOWN/KEYUP into an InputAggregator
"""

import logging
from typing import Dict, List, Optional, Tuple

import pygame

from spritewalk.core.input import InputAggregator
from spritewalk.entities.animation_system import AnimationPlayer

logger = logging.getLogger(__name__)


# Named pygame keys -> physical key code tokens used by the keymaps.
# Letters and digits are derived in key_token.
PYGAME_KEY_TOKENS: Dict[int, str] = {
    pygame.K_LEFT: "ArrowLeft",
    pygame.K_RIGHT: "ArrowRight",
    pygame.K_UP: "ArrowUp",
    pygame.K_DOWN: "ArrowDown",
    pygame.K_SPACE: "Space",
    pygame.K_RETURN: "Enter",
    pygame.K_TAB: "Tab",
    pygame.K_LSHIFT: "ShiftLeft",
    pygame.K_RSHIFT: "ShiftRight",
}


def key_token(key: int):
    """
    Token for a pygame key, in the same naming as the JSON keymap.

    K_a..K_z become "KeyA".."KeyZ" and K_0..K_9 become "Digit0".."Digit9".
    Keys without a name keep their raw key code.
    """
    if key in PYGAME_KEY_TOKENS:
        return PYGAME_KEY_TOKENS[key]
    if pygame.K_a <= key <= pygame.K_z:
        return "Key" + chr(key).upper()
    if pygame.K_0 <= key <= pygame.K_9:
        return "Digit" + chr(key)
    return key


def dispatch_key_event(event: pygame.event.Event, aggregator: InputAggregator) -> bool:
    """
    Apply one pygame event to the held-key set.

    Returns:
        True if the event was a key or focus event and was applied
    """
    if event.type == pygame.KEYDOWN:
        aggregator.press(key_token(event.key))
        return True
    if event.type == pygame.KEYUP:
        aggregator.release(key_token(event.key))
        return True
    if event.type == pygame.WINDOWFOCUSLOST:
        # Key-ups that happen while unfocused never arrive.
        aggregator.clear()
        return True
    return False


class PygameBody:
    """Axis-aligned body with a velocity in pixels per second"""

    def __init__(self, rect: pygame.Rect, world_bounds: Optional[pygame.Rect] = None,
                 collide_world_bounds: bool = True):
        self.rect = pygame.Rect(rect)
        self.world_bounds = pygame.Rect(world_bounds) if world_bounds is not None else None
        self.collide_world_bounds = collide_world_bounds
        self.vx = 0.0
        self.vy = 0.0
        # Float position so slow speeds still move at high frame rates
        self._x = float(self.rect.x)
        self._y = float(self.rect.y)

    def set_velocity(self, vx: float, vy: float) -> None:
        self.vx = float(vx)
        self.vy = float(vy)

    @property
    def velocity(self) -> Tuple[float, float]:
        return (self.vx, self.vy)

    def move_axis(self, axis: int, dt: float) -> None:
        """Move along x (axis 0) or y (axis 1) by velocity * dt, then clamp."""
        if axis == 0:
            self._x += self.vx * dt
            self.rect.x = round(self._x)
        else:
            self._y += self.vy * dt
            self.rect.y = round(self._y)
        self.clamp_to_world()

    def step(self, dt: float) -> None:
        self.move_axis(0, dt)
        self.move_axis(1, dt)

    def clamp_to_world(self) -> None:
        if not self.collide_world_bounds or self.world_bounds is None:
            return
        if not self.world_bounds.contains(self.rect):
            self.rect.clamp_ip(self.world_bounds)
            self._x = float(self.rect.x)
            self._y = float(self.rect.y)

    def restore(self, x: int, y: int) -> None:
        """Put the body back at a previous integer position."""
        self.rect.topleft = (x, y)
        self._x = float(x)
        self._y = float(y)


class PygameSprite:
    """Sprite presentation over an AnimationPlayer, drawn at a body"""

    def __init__(self, player: AnimationPlayer, body: PygameBody):
        self.player = player
        self.body = body

    def set_flip_x(self, flip: bool) -> None:
        self.player.flip_x = bool(flip)

    def play_animation(self, key: str, restart_if_same: bool = False) -> None:
        self.player.play(key, restart_if_same)

    def update(self) -> None:
        self.player.update()

    def draw(self, surf: pygame.Surface) -> bool:
        return self.player.draw(surf, self.body.rect)


class PhysicsWorld:
    """
    Steps bodies each frame and keeps registered pairs from overlapping.

    Usage:
        world = PhysicsWorld(pygame.Rect(0, 0, WIDTH, HEIGHT))
        world.add_body(hero_body)
        world.add_body(skeleton_body)
        world.add_collider(hero_body, skeleton_body)
        world.step(dt)
    """

    def __init__(self, bounds: pygame.Rect):
        self.bounds = pygame.Rect(bounds)
        self.bodies: List[PygameBody] = []
        self.colliders: List[Tuple[PygameBody, PygameBody]] = []

    def add_body(self, body: PygameBody) -> PygameBody:
        if body.world_bounds is None:
            body.world_bounds = pygame.Rect(self.bounds)
        self.bodies.append(body)
        return body

    def add_collider(self, a: PygameBody, b: PygameBody) -> None:
        """Register a pair of bodies that must not pass through each other."""
        if a is b:
            raise ValueError("A body cannot collide with itself")
        self.colliders.append((a, b))

    def _partners(self, body: PygameBody) -> List[PygameBody]:
        partners = []
        for a, b in self.colliders:
            if a is body:
                partners.append(b)
            elif b is body:
                partners.append(a)
        return partners

    def step(self, dt: float) -> None:
        """Move every body one axis at a time, undoing any axis move that overlaps a partner."""
        for body in self.bodies:
            partners = self._partners(body)
            for axis in (0, 1):
                before = body.rect.topleft
                # Pairs already overlapping (e.g. spawned on top of each other) may separate.
                blockers = [o for o in partners if not body.rect.colliderect(o.rect)]
                body.move_axis(axis, dt)
                if any(body.rect.colliderect(other.rect) for other in blockers):
                    body.restore(*before)
                    logger.debug("Collision blocked body at %s on axis %d", before, axis)


def placeholder_sheet(frame_size: Tuple[int, int], frame_count: int = 36, columns: int = 6,
                      color: Tuple[int, int, int] = (200, 200, 200)) -> pygame.Surface:
    """
    Generated stand-in sheet for when the real one cannot be loaded.

    Each frame is a box with a marker on its right edge, so flipping is visible.
    """
    fw, fh = frame_size
    rows = (frame_count + columns - 1) // columns
    sheet = pygame.Surface((fw * columns, fh * rows), pygame.SRCALPHA)
    for i in range(frame_count):
        x, y = (i % columns) * fw, (i // columns) * fh
        body = pygame.Rect(x + fw // 4, y + fh // 4, fw // 2, fh * 3 // 4 - 1)
        pygame.draw.rect(sheet, color, body)
        bob = i % 2
        pygame.draw.rect(sheet, (30, 30, 30), pygame.Rect(body.right - 3, body.top + 3 + bob, 2, 2))
    return sheet
