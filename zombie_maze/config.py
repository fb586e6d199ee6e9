# === Global configuration & tuning ===
WIDTH, HEIGHT = 800, 600
FPS = 60

# Colors
BG = (0, 0, 0)
WHITE = (255, 255, 255)
PLAYER_COL = (0, 0, 255)
ZOMBIE_COL = (255, 0, 0)
KEY_COL = (255, 255, 0)
WALL_COL = (128, 128, 128)
BULLET_COL = (255, 255, 255)
HEALTH_BG = (255, 0, 0)
HEALTH_FG = (0, 255, 0)

TILE = 32

# === Tile System Constants ===
TILE_OPEN = 0         # Floor - no collision
TILE_WALL = 1         # Wall - full collision from all sides

# Movement tuning (world units per tick)
PLAYER_SPEED = 4
ZOMBIE_SPEED = 2
BULLET_SPEED = 10

# Entity sizes (world units)
PLAYER_SIZE = TILE
ZOMBIE_SIZE = TILE
KEY_SIZE = TILE
BULLET_SIZE = 8

# Bullet lifetime (2 seconds)
BULLET_LIFETIME = 2 * FPS
BULLET_DAMAGE = 1

# === Zombie AI ===
DETECTION_RADIUS = 150
PATROL_INTERVAL = 2 * FPS           # Change patrol direction every 2 seconds
ZOMBIE_RESPAWN_TIME = 15 * FPS      # 15 seconds * 60 frames per second
ZOMBIE_HEALTH_PER_LEVEL = 2

# === Procedural Level Generation Configuration ===
# Level dimensions grow with the level index
BASE_LEVEL_WIDTH = 20   # tiles
BASE_LEVEL_HEIGHT = 15  # tiles
MIN_MAZE_SIZE = 5

# Entity counts grow with the level index
BASE_KEY_COUNT = 3       # + level_index // 2
BASE_ZOMBIE_COUNT = 2    # + level_index

# Chance that an interior wall is knocked out to create rooms/loops
ROOM_CARVE_CHANCE = 0.20

# Player start is sampled from this tile range on both axes
PLAYER_START_MIN = 1
PLAYER_START_MAX = 3

# Keys and zombies must be at least this far (in tiles) from the player start
MIN_SPAWN_DISTANCE = 5

# Retry budgets
MAX_PLACEMENT_ATTEMPTS = 2000
MAX_REPAIR_PASSES = 200


# Default runtime config file
CONFIG_PATH = "config/maze_config.json"
