from enum import IntEnum

from zombie_maze.config import TILE_OPEN, TILE_WALL


class TileType(IntEnum):
    """Enumeration of all tile types in the maze."""

    OPEN = TILE_OPEN
    WALL = TILE_WALL

    @property
    def is_solid(self) -> bool:
        """Return True if tile blocks movement completely."""
        return self == TileType.WALL

    @property
    def char(self) -> str:
        """ASCII character used by debug dumps and test fixtures."""
        return '#' if self == TileType.WALL else '.'

    @classmethod
    def from_char(cls, ch: str) -> "TileType":
        if ch not in TILE_CHAR_MAP:
            raise ValueError(f"Unknown tile character: {ch!r}")
        return TILE_CHAR_MAP[ch]


# The canonical mapping of ASCII characters to tile types.
TILE_CHAR_MAP = {
    '#': TileType.WALL,
    '.': TileType.OPEN,
    ' ': TileType.OPEN,
}
