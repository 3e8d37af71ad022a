# === Global configuration & tuning ===
WIDTH, HEIGHT = 1280, 640
FPS = 60

# Colors
BG = (135, 206, 235)  # Sky blue background
WHITE = (240, 240, 240)
ACCENT = (255, 199, 95)

# Runtime overrides (speeds, AI cadence, keymap)
ACTOR_CONFIG_PATH = "config/actors.json"

# Actor tuning (pixels per second)
HERO_SPEED = 150
MONSTER_SPEED = 80
DEFAULT_FACING = "down"

# Timer AI: ticks a wandering choice is held before re-rolling
AI_RETHINK_TICKS = 60
AI_CHOICES = ["left", "right", "up", "down", "stop"]

# Sprite sheets
FRAME_SIZE = (32, 32)
SPRITE_SCALE = 2
ANIMATION_FRAME_RATE = 10  # sheet frames per second

HERO_SHEET_PATH = "assets/hero/Hero.png"
SKELETON_SHEET_PATH = "assets/monsters/Skeleton.png"

# Spawn points
HERO_SPAWN = (100, 100)
SKELETON_SPAWN = (300, 500)
