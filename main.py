import sys

import pygame
import logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

from config import (
    WIDTH,
    HEIGHT,
    FPS,
    BG,
    WHITE,
    FRAME_SIZE,
    SPRITE_SCALE,
    HERO_SHEET_PATH,
    SKELETON_SHEET_PATH,
    HERO_SPAWN,
    SKELETON_SPAWN,
)

from spritewalk.core.config_loader import load_runtime_config
from spritewalk.entities.animation_catalog import AnimationCatalog, AnimationSet, sheet_layout
from spritewalk.entities.animation_system import (
    AnimationPlayer,
    build_clips,
    load_sheet_frames,
    scale_frames,
    slice_sheet,
)
from spritewalk.entities.controller import ActorController
from spritewalk.host.pygame_host import (
    PhysicsWorld,
    PygameBody,
    PygameSprite,
    dispatch_key_event,
    placeholder_sheet,
)
from spritewalk.systems.registry import ActorRegistry


def load_frames(path, color, frame_count):
    """Sheet frames from disk, or generated placeholders if the file is unusable."""
    try:
        return load_sheet_frames(path, FRAME_SIZE, SPRITE_SCALE)
    except (pygame.error, FileNotFoundError) as e:
        logger.warning("Failed to load sprite sheet %s: %s", path, e)
        logger.info("Using placeholder frames instead")
        return scale_frames(slice_sheet(placeholder_sheet(FRAME_SIZE, frame_count, color=color), FRAME_SIZE), SPRITE_SCALE)


class Game:
    def __init__(self):
        pygame.init()
        self.screen = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption("spritewalk")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("consolas", 18)

        self.runtime = load_runtime_config()
        self.catalog = AnimationCatalog()
        self.world = PhysicsWorld(pygame.Rect(0, 0, WIDTH, HEIGHT))
        self.registry = ActorRegistry()
        self.sprites = []

        hero_settings = self.runtime.actor("hero")
        hero_body, hero_sprite = self._spawn("hero", HERO_SHEET_PATH, HERO_SPAWN, (90, 160, 230),
                                             hero_settings.mirror_left)
        self.hero = self.registry.register("hero", ActorController.for_player(
            self.catalog.get("hero"),
            speed=hero_settings.speed,
            facing=hero_settings.facing,
            keymap=self.runtime.keymap,
            body=hero_body,
            sprite=hero_sprite,
        ))

        skeleton_settings = self.runtime.actor("skeleton")
        skeleton_body, skeleton_sprite = self._spawn("skeleton", SKELETON_SHEET_PATH, SKELETON_SPAWN,
                                                     (225, 225, 210), skeleton_settings.mirror_left)
        self.registry.register("skeleton", ActorController.for_autonomous(
            self.catalog.get("skeleton"),
            speed=skeleton_settings.speed,
            facing=skeleton_settings.facing,
            choices=self.runtime.ai_choices,
            rethink_ticks=self.runtime.rethink_ticks,
            body=skeleton_body,
            sprite=skeleton_sprite,
        ))

        # Hero and skeleton block each other
        self.world.add_collider(hero_body, skeleton_body)

    def _spawn(self, actor_type, sheet_path, spawn, color, mirror_left):
        layout = sheet_layout(mirror_left)
        self.catalog.register(actor_type, AnimationSet.from_prefix(actor_type, mirror_left))
        frames = load_frames(sheet_path, color, frame_count=max(r.end for r in layout.values()) + 1)
        player = AnimationPlayer(build_clips(frames, actor_type, layout, fps=FPS))
        fw, fh = FRAME_SIZE
        # Collision box covers the lower half of the scaled frame
        body_rect = pygame.Rect(0, 0, fw * SPRITE_SCALE // 2, fh * SPRITE_SCALE // 2)
        body_rect.center = spawn
        body = self.world.add_body(PygameBody(body_rect))
        sprite = PygameSprite(player, body)
        self.sprites.append(sprite)
        return body, sprite

    def process_events(self):
        for ev in pygame.event.get():
            if ev.type == pygame.QUIT or (ev.type == pygame.KEYDOWN and ev.key == pygame.K_ESCAPE):
                pygame.quit(); sys.exit()
            dispatch_key_event(ev, self.hero.inputs)

    def update(self, dt):
        self.registry.update_all()
        self.world.step(dt)
        for sprite in self.sprites:
            sprite.update()

    def draw(self):
        self.screen.fill(BG)
        # Lower sprites draw last so they overlap the ones behind them
        for sprite in sorted(self.sprites, key=lambda s: s.body.rect.bottom):
            sprite.draw(self.screen)

        facing = self.hero.resolver.last_facing.value
        held = ", ".join(str(t) for t in self.hero.inputs.held) or "-"
        self.screen.blit(self.font.render(f"facing: {facing}   held: {held}", True, WHITE), (10, 10))

    def run(self):
        while True:
            dt = self.clock.tick(FPS) / 1000.0  # Convert milliseconds to seconds
            self.process_events()
            self.update(dt)
            self.draw()
            pygame.display.flip()


if __name__ == "__main__":
    Game().run()
