"""Recursive-backtracking maze carver.

Produces a perfect maze: the open cells form a spanning tree over the 2-step
lattice rooted at the grid centre, so exactly one simple path joins any two
open cells.
"""

import logging
import random

from zombie_maze.config import MIN_MAZE_SIZE
from zombie_maze.core.errors import InvalidDimensions
from zombie_maze.level.grid import Grid
from zombie_maze.tiles.tile_types import TileType

logger = logging.getLogger(__name__)

# right, left, down, up; two cells per jump
JUMPS = ((2, 0), (-2, 0), (0, 2), (0, -2))


def carve_maze(width: int, height: int, rng: random.Random) -> Grid:
    """Carve a perfect maze into a fresh all-wall grid."""
    if width < MIN_MAZE_SIZE or height < MIN_MAZE_SIZE:
        raise InvalidDimensions(width, height, MIN_MAZE_SIZE)

    grid = Grid(width, height, TileType.WALL)

    start_x = width // 2
    start_y = height // 2
    grid.set(start_x, start_y, TileType.OPEN)

    stack = [(start_x, start_y)]
    while stack:
        x, y = stack[-1]

        jumps = list(JUMPS)
        rng.shuffle(jumps)

        moved = False
        for dx, dy in jumps:
            nx, ny = x + dx, y + dy
            if grid.in_bounds(nx, ny) and grid.get(nx, ny) == TileType.WALL:
                grid.set(x + dx // 2, y + dy // 2, TileType.OPEN)
                grid.set(nx, ny, TileType.OPEN)
                stack.append((nx, ny))
                moved = True
                break

        if not moved:
            stack.pop()

    logger.debug("Carved %dx%d maze with %d open cells", width, height, grid.count_open())
    return grid
