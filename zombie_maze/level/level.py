"""
Level assembly: carve -> room-carve -> repair -> verify -> place.

generate_level() builds everything in locals and only constructs the Level
once every stage has succeeded, so a failed generation never leaves a
half-built level behind for the game loop to pick up.
"""

import logging
import random
import time
from dataclasses import dataclass
from typing import List, Optional

import pygame

from zombie_maze.core.utils import make_rng, tile_to_world
from zombie_maze.entities.entities import EntityKind, EntitySpec
from zombie_maze.level.connectivity import repair_connectivity, verify_connectivity
from zombie_maze.level.entity_placer import place_entities
from zombie_maze.level.grid import Grid
from zombie_maze.level.level_data import Cell, LevelParams, MazeConfig
from zombie_maze.level.maze_carver import carve_maze
from zombie_maze.level.room_carver import carve_rooms

logger = logging.getLogger(__name__)


@dataclass
class Level:
    """A generated, playable level. The grid is read-only once generation finishes."""
    params: LevelParams
    grid: Grid
    player_start: Cell
    key_positions: List[Cell]
    agent_spawns: List[Cell]
    tile_size: int
    seed: Optional[int] = None

    @property
    def level_index(self) -> int:
        return self.params.level_index

    def _world(self, cell: Cell) -> pygame.math.Vector2:
        return tile_to_world(cell, self.tile_size)

    def create_entities(self) -> List[EntitySpec]:
        """One record per wall tile, key and zombie, in world coordinates."""
        specs = [
            EntitySpec(EntityKind.WALL, tuple(self._world(cell)))
            for cell in self.grid.wall_cells()
        ]
        specs.extend(EntitySpec(EntityKind.KEY, tuple(self._world(cell))) for cell in self.key_positions)
        specs.extend(EntitySpec(EntityKind.ZOMBIE, tuple(self._world(cell))) for cell in self.agent_spawns)
        return specs

    def get_player_start_position(self) -> pygame.math.Vector2:
        return self._world(self.player_start)

    def get_key_count(self) -> int:
        return self.params.key_count

    def get_agent_spawn_positions(self) -> List[pygame.math.Vector2]:
        return [self._world(cell) for cell in self.agent_spawns]


def generate_level(
    level_index: int,
    rng: Optional[random.Random] = None,
    config: Optional[MazeConfig] = None,
    seed: Optional[int] = None,
) -> Level:
    """
    Generate the level for a given index.

    Args:
        level_index: 1-based level number; drives size and entity counts
        rng: Random source threaded through every stage. Built from `seed`
            when omitted.
        config: Generation configuration (defaults when omitted)
        seed: Seed that rebuilds this level from a fresh RNG, recorded on the
            Level (None when unknown); also seeds the RNG when rng is None

    Returns:
        Level: Fully generated level

    Raises:
        ValueError: level_index < 1
        MazeGenerationError: any stage failed; no Level is produced
    """
    config = config or MazeConfig()
    if rng is None:
        rng = make_rng(seed)
    params = LevelParams.for_level(level_index)

    started = time.perf_counter()

    grid = carve_maze(params.width, params.height, rng)
    opened = carve_rooms(grid, config.room_carve_chance, rng)
    bridges = repair_connectivity(grid, rng, config.max_repair_passes)
    if config.verify_connectivity:
        verify_connectivity(grid)
    placement = place_entities(grid, params, rng, config)

    level = Level(
        params=params,
        grid=grid,
        player_start=placement.player_start,
        key_positions=list(placement.keys),
        agent_spawns=list(placement.agents),
        tile_size=config.tile_size,
        seed=seed,
    )

    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(
        "Level %d: %dx%d grid, %d room cells, %d bridges, %d keys, %d zombies (%.1f ms)",
        level_index, params.width, params.height, opened, bridges,
        len(level.key_positions), len(level.agent_spawns), elapsed_ms,
    )
    if logger.isEnabledFor(logging.DEBUG):
        for row in grid.to_rows():
            logger.debug("  %s", row)
    return level
