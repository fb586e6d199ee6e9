"""Level data structures: generation config, per-level difficulty and placements."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from zombie_maze.config import (
    BASE_KEY_COUNT,
    BASE_LEVEL_HEIGHT,
    BASE_LEVEL_WIDTH,
    BASE_ZOMBIE_COUNT,
    BULLET_LIFETIME,
    BULLET_SPEED,
    DETECTION_RADIUS,
    MAX_PLACEMENT_ATTEMPTS,
    MAX_REPAIR_PASSES,
    MIN_SPAWN_DISTANCE,
    PATROL_INTERVAL,
    PLAYER_SPEED,
    ROOM_CARVE_CHANCE,
    TILE,
    ZOMBIE_HEALTH_PER_LEVEL,
    ZOMBIE_RESPAWN_TIME,
    ZOMBIE_SPEED,
)

Cell = Tuple[int, int]


@dataclass
class MazeConfig:
    """Configuration for level generation and zombie AI."""
    tile_size: int = TILE

    # --- GENERATION ---
    # Chance (0.0 to 1.0) that an interior wall is knocked out after carving.
    room_carve_chance: float = ROOM_CARVE_CHANCE
    # Keys and zombies must be at least this many tiles from the player start.
    min_spawn_distance: float = MIN_SPAWN_DISTANCE
    max_placement_attempts: int = MAX_PLACEMENT_ATTEMPTS
    max_repair_passes: int = MAX_REPAIR_PASSES
    # When False, no two keys/zombies may share a tile.
    allow_overlapping_spawns: bool = False
    # Flood-fill the finished grid and fail loudly if it is split.
    verify_connectivity: bool = True

    # --- ZOMBIE AI (ticks and world units) ---
    detection_radius: float = DETECTION_RADIUS
    patrol_speed: float = ZOMBIE_SPEED
    chase_speed: float = ZOMBIE_SPEED
    patrol_interval: int = PATROL_INTERVAL
    respawn_duration: int = ZOMBIE_RESPAWN_TIME
    health_per_level: int = ZOMBIE_HEALTH_PER_LEVEL

    # --- PLAYER / BULLETS ---
    player_speed: float = PLAYER_SPEED
    bullet_speed: float = BULLET_SPEED
    bullet_lifetime: int = BULLET_LIFETIME

    # --- SEED ---
    # "fixed" uses `seed`, "random" draws a fresh seed per session.
    seed_mode: str = "fixed"
    seed: Optional[int] = 12345


@dataclass(frozen=True)
class LevelParams:
    """Difficulty parameters derived from the level index."""
    level_index: int
    width: int
    height: int
    key_count: int
    agent_count: int

    @classmethod
    def for_level(cls, level_index: int) -> "LevelParams":
        if level_index < 1:
            raise ValueError(f"Level index must be >= 1, got {level_index}")
        return cls(
            level_index=level_index,
            width=BASE_LEVEL_WIDTH + level_index,
            height=BASE_LEVEL_HEIGHT + level_index,
            key_count=BASE_KEY_COUNT + level_index // 2,
            agent_count=BASE_ZOMBIE_COUNT + level_index,
        )


@dataclass
class Placement:
    """Tile positions chosen by the entity placer."""
    player_start: Cell
    keys: List[Cell] = field(default_factory=list)
    agents: List[Cell] = field(default_factory=list)
