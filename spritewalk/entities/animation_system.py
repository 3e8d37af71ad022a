"""
Frame-based Animation System for sprite-sheet actors

This module provides the host side of animation playback:
- Slicing a sprite sheet into frames
- Building keyed clips ("hero-walk-right") from frame ranges
- Frame-based playback with configurable speed and looping
- Horizontal flipping when drawing

Which clip plays is decided by MovementResolver; this module only plays it.
"""

import logging
import pygame
from typing import Dict, List, Mapping, Optional, Tuple
from dataclasses import dataclass, field

from spritewalk.core.errors import MissingAnimationError
from spritewalk.entities.animation_catalog import DEFAULT_SHEET_LAYOUT, FrameRange

logger = logging.getLogger(__name__)


@dataclass
class AnimationClip:
    """Configuration for a single animation"""
    frames: List[pygame.Surface] = field(default_factory=list)
    frame_duration: int = 6  # Game frames to display each sheet frame
    loop: bool = True  # Whether animation loops

    def __post_init__(self):
        """Validate configuration"""
        if self.frame_duration < 1:
            self.frame_duration = 1


class AnimationPlayer:
    """
    Plays keyed animation clips for one sprite.

    Usage:
        player = AnimationPlayer(build_clips(frames, "hero"))
        player.play("hero-walk-right")

        # Every frame:
        player.update()
        player.draw(surf, body.rect)
    """

    def __init__(self, clips: Optional[Mapping[str, AnimationClip]] = None):
        """
        Args:
            clips: Initial key -> clip table
        """
        self.clips: Dict[str, AnimationClip] = dict(clips or {})
        self.current_key: Optional[str] = None
        self.current_frame_index: int = 0
        self.frame_timer: int = 0
        self.is_playing: bool = False
        self.flip_x: bool = False

    def add_clip(self, key: str, clip: AnimationClip) -> None:
        self.clips[key] = clip

    def play(self, key: str, restart_if_same: bool = False) -> None:
        """
        Switch to an animation.

        Args:
            key: Clip key to play
            restart_if_same: If False and key is already playing, keep the current frame

        Raises:
            MissingAnimationError: key has no clip
        """
        if key not in self.clips:
            raise MissingAnimationError(f"Animation {key!r} not loaded", key=key)

        if key == self.current_key and self.is_playing and not restart_if_same:
            return

        self.current_key = key
        self.current_frame_index = 0
        self.frame_timer = 0
        self.is_playing = True

    def update(self) -> None:
        """Advance the frame timer. Call this every frame."""
        if not self.is_playing:
            return

        clip = self.clips.get(self.current_key)
        if not clip or not clip.frames:
            return

        self.frame_timer += 1
        if self.frame_timer >= clip.frame_duration:
            self.frame_timer = 0
            self.current_frame_index += 1

            if self.current_frame_index >= len(clip.frames):
                if clip.loop:
                    self.current_frame_index = 0
                else:
                    self.current_frame_index = len(clip.frames) - 1
                    self.is_playing = False

    def get_current_frame(self) -> Optional[pygame.Surface]:
        """Get the current animation frame surface."""
        clip = self.clips.get(self.current_key)
        if not clip or not clip.frames:
            return None

        frame_idx = min(self.current_frame_index, len(clip.frames) - 1)
        return clip.frames[frame_idx]

    def draw(self, surf: pygame.Surface, anchor: pygame.Rect) -> bool:
        """
        Draw the current frame with its bottom centre on the anchor's bottom centre.

        Returns:
            True if a frame was drawn, False if nothing is playing
        """
        frame = self.get_current_frame()
        if frame is None:
            return False

        draw_sprite = pygame.transform.flip(frame, self.flip_x, False)
        sprite_rect = draw_sprite.get_rect()
        sprite_rect.midbottom = anchor.midbottom
        surf.blit(draw_sprite, sprite_rect.topleft)
        return True


# ============================================================================
# Sprite sheet helpers
# ============================================================================

def slice_sheet(sheet: pygame.Surface, frame_size: Tuple[int, int]) -> List[pygame.Surface]:
    """
    Cut a sprite sheet into frames, row by row.

    Partial frames at the right or bottom edge are ignored.
    """
    fw, fh = frame_size
    cols = sheet.get_width() // fw
    rows = sheet.get_height() // fh
    frames = []
    for row in range(rows):
        for col in range(cols):
            frames.append(sheet.subsurface(pygame.Rect(col * fw, row * fh, fw, fh)))
    return frames


def scale_frames(frames: List[pygame.Surface], scale: int) -> List[pygame.Surface]:
    """Integer-scale frames for crisp pixel art."""
    if scale == 1:
        return list(frames)
    return [pygame.transform.scale(f, (f.get_width() * scale, f.get_height() * scale)) for f in frames]


def build_clips(
    frames: List[pygame.Surface],
    prefix: str,
    layout: Mapping[str, FrameRange] = DEFAULT_SHEET_LAYOUT,
    fps: int = 60
) -> Dict[str, AnimationClip]:
    """
    Turn a sheet's frames into looping clips keyed "<prefix>-<name>".

    Example:
        build_clips(frames, "hero")["hero-walk-right"]  # frames 24..29

    Args:
        frames: Frames from slice_sheet()
        prefix: Actor prefix for the keys
        layout: Clip name -> FrameRange
        fps: Game frame rate used to convert each range's frame_rate

    Raises:
        MissingAnimationError: a range points past the end of the sheet
    """
    clips = {}
    for name, frame_range in layout.items():
        key = f"{prefix}-{name}"
        if frame_range.end >= len(frames) or frame_range.start < 0:
            raise MissingAnimationError(
                f"{key}: frames {frame_range.start}-{frame_range.end} outside sheet of {len(frames)} frames",
                key=key,
            )
        clips[key] = AnimationClip(
            frames=[frames[i] for i in frame_range.indices],
            frame_duration=max(1, round(fps / frame_range.frame_rate)),
            loop=True,
        )
    return clips


def load_sheet_frames(path: str, frame_size: Tuple[int, int], scale: int = 1) -> List[pygame.Surface]:
    """Load a sprite sheet from disk and slice it into (scaled) frames."""
    sheet = pygame.image.load(path)
    if pygame.display.get_surface() is not None:
        sheet = sheet.convert_alpha()
    frames = scale_frames(slice_sheet(sheet, frame_size), scale)
    logger.info("Loaded sprite sheet %s: %d frames", path, len(frames))
    return frames
