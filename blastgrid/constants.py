"""Game-wide tuning values and time conversion helpers."""

WINDOW_WIDTH = 640.0
WINDOW_HEIGHT = 640.0

TILE_SIZE = 48.0

FIXED_UPDATE_FREQUENCY = 60.0

COLOR_BACKGROUND = (0.13, 0.13, 0.23)
COLOR_WALL = (1.0, 1.0, 1.0)
COLOR_WOOD_CRATE = (0.7, 0.4, 0.4)
COLOR_PLAYER = (0.2, 0.7, 0.2)
COLOR_BOMB = (0.9, 0.1, 0.1)
COLOR_EXPLOSION = (1.0, 0.4, 0.0)
COLOR_MAX_BOMBS_POWERUP = (0.0, 1.0, 0.0)
COLOR_BOMB_POWER_POWERUP = (1.0, 0.3, 0.3)
COLOR_PLAYER_SPEED_POWERUP = (0.4, 0.8, 1.0)

ITEM_Z = 5.0
EXPLOSION_Z = 6.0
PLAYER_Z = 7.0
WALL_Z = 8.0

BOMB_EXPLOSION_INITIAL_LIFETIME = 4.0
EXPLOSION_CLEANUP_INITIAL_LIFETIME = 0.5

MAP_SIZE = 25
WOOD_CRATE_SPAWN_RATE = 0.0
POWERUP_DROP_RATE = 1.0
BASE_MOVE_SPEED = 1.5
MOVE_SPEED_LEVEL_INCREASE = 0.4
POWERUP_PICKUP_INVULNERABILITY_TIME = 0.6
HITBOX_TO_TILE_SCALE = 0.7
MAX_CAMERA_TRAUMA = 0.4


def seconds_to_ticks(seconds: float) -> int:
    """Return how many fixed-update ticks fit in ``seconds``, truncated toward zero."""
    return int(seconds * FIXED_UPDATE_FREQUENCY)