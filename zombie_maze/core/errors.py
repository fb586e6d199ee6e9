"""
Generation errors.

Every failure of the level pipeline derives from MazeGenerationError so the
caller can refuse to start a level with a single except clause.
"""


class MazeGenerationError(Exception):
    """Base class for level generation failures."""


class InvalidDimensions(MazeGenerationError, ValueError):
    """Requested grid is too small to carve a maze into."""

    def __init__(self, width: int, height: int, minimum: int):
        self.width = width
        self.height = height
        self.minimum = minimum
        super().__init__(
            f"Maze needs at least {minimum}x{minimum} tiles, got {width}x{height}"
        )


class GenerationExhausted(MazeGenerationError):
    """A bounded retry loop ran out of attempts."""

    def __init__(self, what: str, attempts: int):
        self.what = what
        self.attempts = attempts
        super().__init__(f"Gave up on {what} after {attempts} attempts")


class ConnectivityInvariantViolation(MazeGenerationError, AssertionError):
    """Open cells are still split into several components after repair."""

    def __init__(self, component_count: int):
        self.component_count = component_count
        super().__init__(
            f"Expected a single open component, found {component_count}"
        )
