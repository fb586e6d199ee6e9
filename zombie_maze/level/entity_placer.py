"""
Constrained random placement of the player start, keys and zombie spawns.

Every sampling loop is bounded by config.max_placement_attempts; running out
raises GenerationExhausted instead of spinning forever on a tiny or cramped
grid.
"""

import logging
import random
from typing import Optional, Set

from zombie_maze.config import PLAYER_START_MAX, PLAYER_START_MIN
from zombie_maze.core.errors import GenerationExhausted
from zombie_maze.core.utils import tile_distance
from zombie_maze.level.grid import Grid
from zombie_maze.level.level_data import Cell, LevelParams, MazeConfig, Placement

logger = logging.getLogger(__name__)


def pick_player_start(grid: Grid, rng: random.Random, max_attempts: int) -> Cell:
    """Sample an open tile near the top-left corner."""
    hi_x = min(PLAYER_START_MAX, grid.width - 2)
    hi_y = min(PLAYER_START_MAX, grid.height - 2)
    for _ in range(max_attempts):
        x = rng.randint(PLAYER_START_MIN, hi_x)
        y = rng.randint(PLAYER_START_MIN, hi_y)
        if grid.is_open(x, y):
            return (x, y)
    raise GenerationExhausted("player start placement", max_attempts)


def pick_spawn(
    grid: Grid,
    player_start: Cell,
    rng: random.Random,
    min_distance: float,
    max_attempts: int,
    occupied: Optional[Set[Cell]] = None,
    what: str = "spawn placement",
) -> Cell:
    """
    Sample a uniform random interior tile that is open and far enough from the player.

    Args:
        grid: Finished, connected grid
        player_start: Player start tile
        rng: Random number generator
        min_distance: Minimum Euclidean distance (tiles) from player_start
        max_attempts: Retry budget
        occupied: Tiles that must not be chosen again
        what: Label used in the error message

    Returns:
        The chosen tile
    """
    for _ in range(max_attempts):
        x = rng.randint(1, grid.width - 2)
        y = rng.randint(1, grid.height - 2)
        if not grid.is_open(x, y):
            continue
        if tile_distance((x, y), player_start) < min_distance:
            continue
        if occupied is not None and (x, y) in occupied:
            continue
        return (x, y)
    raise GenerationExhausted(what, max_attempts)


def place_entities(grid: Grid, params: LevelParams, rng: random.Random, config: MazeConfig) -> Placement:
    """Choose player start, key_count keys and agent_count zombie spawns."""
    player_start = pick_player_start(grid, rng, config.max_placement_attempts)
    placement = Placement(player_start=player_start)

    occupied: Optional[Set[Cell]] = None if config.allow_overlapping_spawns else set()

    for i in range(params.key_count):
        cell = pick_spawn(grid, player_start, rng, config.min_spawn_distance,
                          config.max_placement_attempts, occupied, what=f"key {i + 1} placement")
        placement.keys.append(cell)
        if occupied is not None:
            occupied.add(cell)

    for i in range(params.agent_count):
        cell = pick_spawn(grid, player_start, rng, config.min_spawn_distance,
                          config.max_placement_attempts, occupied, what=f"zombie {i + 1} placement")
        placement.agents.append(cell)
        if occupied is not None:
            occupied.add(cell)

    logger.debug("Placed player at %s, keys=%s, zombies=%s",
                 player_start, placement.keys, placement.agents)
    return placement
