"""Tile occupancy grid shared by the generators, the collision layer and the renderer.

Coordinate System:
- Origin: Top-left corner of the level.
- X-axis: Increases from left to right (0 to W-1).
- Y-axis: Increases from top to bottom (0 to H-1).
"""

from typing import Iterator, List, Sequence, Tuple

from zombie_maze.tiles.tile_types import TileType

# right, left, down, up
DIRECTIONS_4 = ((1, 0), (-1, 0), (0, 1), (0, -1))


class Grid:
    """Dense row-major grid of TileType cells (cells[y][x])."""

    def __init__(self, width: int, height: int, fill: TileType = TileType.WALL):
        self.width = width
        self.height = height
        self.cells: List[List[TileType]] = [[fill] * width for _ in range(height)]

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Grid":
        """Build a grid from ASCII rows ('#' wall, '.' open)."""
        height = len(rows)
        width = len(rows[0]) if height else 0
        grid = cls(width, height)
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has width {len(row)}, expected {width}")
            for x, ch in enumerate(row):
                grid.cells[y][x] = TileType.from_char(ch)
        return grid

    def to_rows(self) -> List[str]:
        return [''.join(cell.char for cell in row) for row in self.cells]

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> TileType:
        return self.cells[y][x]

    def set(self, x: int, y: int, tile: TileType) -> None:
        self.cells[y][x] = tile

    def is_open(self, x: int, y: int) -> bool:
        """Out-of-bounds coordinates are never open."""
        return self.in_bounds(x, y) and self.cells[y][x] == TileType.OPEN

    def is_wall(self, x: int, y: int) -> bool:
        return self.in_bounds(x, y) and self.cells[y][x] == TileType.WALL

    def neighbors4(self, x: int, y: int) -> Iterator[Tuple[int, int]]:
        for dx, dy in DIRECTIONS_4:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield nx, ny

    def open_cells(self) -> List[Tuple[int, int]]:
        return [
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if self.cells[y][x] == TileType.OPEN
        ]

    def wall_cells(self) -> List[Tuple[int, int]]:
        return [
            (x, y)
            for y in range(self.height)
            for x in range(self.width)
            if self.cells[y][x] == TileType.WALL
        ]

    def count_open(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell == TileType.OPEN)

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height}, open={self.count_open()})"
