import pygame
from typing import List, Optional, Tuple, Union

from zombie_maze.config import TILE
from zombie_maze.core.utils import world_to_tile
from zombie_maze.level.grid import Grid


class TileCollision:
    """
    Axis-aligned bounding-box collision between entities, walls and each other.

    Blocked moves are rolled back to the exact pre-step position. There is no
    sliding or partial correction, so entities can stick on corners.
    """

    def __init__(self, tile_size: int = None):
        self.tile_size = tile_size if tile_size is not None else TILE

    def tile_rect(self, tile_x: int, tile_y: int) -> pygame.Rect:
        return pygame.Rect(tile_x * self.tile_size, tile_y * self.tile_size,
                           self.tile_size, self.tile_size)

    def world_rect(self, grid: Grid) -> pygame.Rect:
        return pygame.Rect(0, 0, grid.width * self.tile_size, grid.height * self.tile_size)

    def get_tiles_in_rect(self, rect: pygame.Rect, grid: Grid) -> List[Tuple[int, int]]:
        """All tile coordinates a rectangle touches, including out-of-bounds ones."""
        start_x, start_y = world_to_tile(rect.topleft, self.tile_size)
        end_x, end_y = world_to_tile((rect.right - 1, rect.bottom - 1), self.tile_size)
        return [
            (x, y)
            for y in range(start_y, end_y + 1)
            for x in range(start_x, end_x + 1)
        ]

    def check_tile_collision(self, rect: pygame.Rect, grid: Grid) -> List[Tuple[int, int]]:
        """Solid tiles overlapping rect. Tiles outside the grid count as solid."""
        hits = []
        for tile_x, tile_y in self.get_tiles_in_rect(rect, grid):
            if not grid.in_bounds(tile_x, tile_y):
                hits.append((tile_x, tile_y))
                continue
            if not grid.get(tile_x, tile_y).is_solid:
                continue
            if rect.colliderect(self.tile_rect(tile_x, tile_y)):
                hits.append((tile_x, tile_y))
        return hits

    def resolve_against_grid(self, entity: Union[pygame.Rect, object], grid: Grid) -> bool:
        """Return True if the entity box intersects a wall or leaves the grid."""
        rect = entity if isinstance(entity, pygame.Rect) else entity.rect
        return bool(self.check_tile_collision(rect, grid))

    @staticmethod
    def resolve_entity_pair(a, b) -> bool:
        """Return True if the two entity boxes overlap."""
        return a.rect.colliderect(b.rect)

    def move_with_rollback(self, entity, grid: Grid, velocity: Optional[pygame.math.Vector2] = None) -> bool:
        """
        Apply one tick of movement, undoing it entirely if the new box is blocked.

        Args:
            entity: Anything with `position`, `velocity` and `rect`
            grid: Level grid
            velocity: Step to apply instead of entity.velocity

        Returns:
            True if the move was blocked and rolled back.
        """
        step = entity.velocity if velocity is None else velocity
        if step.x == 0 and step.y == 0:
            return False

        original = pygame.math.Vector2(entity.position)
        entity.position += step
        if self.resolve_against_grid(entity, grid):
            entity.position = original
            return True
        return False
