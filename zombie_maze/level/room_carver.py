import logging
import random

from zombie_maze.level.grid import Grid
from zombie_maze.tiles.tile_types import TileType

logger = logging.getLogger(__name__)


def carve_rooms(grid: Grid, probability: float, rng: random.Random) -> int:
    """
    Knock out interior walls at random to turn the perfect maze into rooms and loops.

    Each interior WALL cell (the border is never touched) independently becomes
    OPEN with the given probability. This can split the open area into several
    components, so connectivity must be repaired afterwards.

    Returns:
        Number of cells opened.
    """
    if not 0.0 <= probability <= 1.0:
        raise ValueError(f"Room carve probability must be within [0, 1], got {probability}")

    opened = 0
    for y in range(1, grid.height - 1):
        for x in range(1, grid.width - 1):
            if grid.get(x, y) == TileType.WALL and rng.random() < probability:
                grid.set(x, y, TileType.OPEN)
                opened += 1

    logger.debug("Room carving opened %d cells (p=%.2f)", opened, probability)
    return opened
