"""Connected-component analysis and repair for generated grids."""

import logging
import random
from typing import List, Set, Tuple

from zombie_maze.config import MAX_REPAIR_PASSES
from zombie_maze.core.errors import ConnectivityInvariantViolation, GenerationExhausted
from zombie_maze.level.grid import Grid
from zombie_maze.tiles.tile_types import TileType

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


def flood_fill(grid: Grid, start: Cell) -> List[Cell]:
    """Open tiles reachable from start using 4-way movement, in discovery order."""
    sx, sy = start
    if not grid.is_open(sx, sy):
        return []

    q = [start]
    seen = {start}
    for x, y in q:
        for nx, ny in grid.neighbors4(x, y):
            if (nx, ny) not in seen and grid.get(nx, ny) == TileType.OPEN:
                seen.add((nx, ny))
                q.append((nx, ny))
    return q


def find_components(grid: Grid) -> List[List[Cell]]:
    """
    Enumerate the 4-connected components of open cells.

    Components are discovered in row-major scan order, so the first one always
    contains the top-most, left-most open cell. Cells inside each component
    keep the flood-fill discovery order.
    """
    visited: Set[Cell] = set()
    components: List[List[Cell]] = []
    for y in range(grid.height):
        for x in range(grid.width):
            if grid.get(x, y) != TileType.OPEN or (x, y) in visited:
                continue
            component = flood_fill(grid, (x, y))
            visited.update(component)
            components.append(component)
    return components


def carve_bridge(grid: Grid, a: Cell, b: Cell) -> int:
    """
    Carve an L-shaped corridor from a to b.

    Horizontal run along a's row to b's column, then a vertical run along b's
    column. Returns the number of wall cells opened.
    """
    x1, y1 = a
    x2, y2 = b
    opened = 0
    for x in range(min(x1, x2), max(x1, x2) + 1):
        if grid.get(x, y1) == TileType.WALL:
            grid.set(x, y1, TileType.OPEN)
            opened += 1
    for y in range(min(y1, y2), max(y1, y2) + 1):
        if grid.get(x2, y) == TileType.WALL:
            grid.set(x2, y, TileType.OPEN)
            opened += 1
    return opened


def repair_connectivity(grid: Grid, rng: random.Random, max_passes: int = MAX_REPAIR_PASSES) -> int:
    """
    Bridge open components together until a single one remains.

    Each pass joins a random cell of the primary component to a random cell of
    the next component, then the components are recomputed from scratch since
    a bridge may cut through several of them at once.

    Returns:
        Number of bridges carved.

    Raises:
        GenerationExhausted: components remain after max_passes bridges.
    """
    components = find_components(grid)
    bridges = 0
    while len(components) > 1:
        if bridges >= max_passes:
            raise GenerationExhausted("connectivity repair", bridges)
        primary, other = components[0], components[1]
        a = rng.choice(primary)
        b = rng.choice(other)
        opened = carve_bridge(grid, a, b)
        bridges += 1
        logger.debug("Bridge %d: %s -> %s opened %d cells (%d components before)",
                     bridges, a, b, opened, len(components))
        components = find_components(grid)
    return bridges


def verify_connectivity(grid: Grid) -> None:
    """Raise ConnectivityInvariantViolation unless all open cells form one component."""
    count = len(find_components(grid))
    if count != 1:
        raise ConnectivityInvariantViolation(count)
