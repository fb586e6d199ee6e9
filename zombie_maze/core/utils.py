import math
import random
from typing import Optional, Tuple

import pygame

from zombie_maze.config import TILE


def tile_to_world(tile_pos: Tuple[int, int], tile_size: int = TILE) -> pygame.math.Vector2:
    """Top-left world position of a tile."""
    return pygame.math.Vector2(tile_pos[0] * tile_size, tile_pos[1] * tile_size)


def world_to_tile(pos, tile_size: int = TILE) -> Tuple[int, int]:
    return int(pos[0] // tile_size), int(pos[1] // tile_size)


def tile_distance(a: Tuple[int, int], b: Tuple[int, int]) -> float:
    """Euclidean distance between two tiles, in tiles."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def direction_to(src, dst) -> Optional[pygame.math.Vector2]:
    """Unit vector from src to dst, or None if they coincide."""
    delta = pygame.math.Vector2(dst) - pygame.math.Vector2(src)
    if delta.length_squared() == 0:
        return None
    return delta.normalize()


def make_rng(seed: Optional[int] = None) -> random.Random:
    """Single RNG threaded through generation and simulation."""
    return random.Random(seed)


