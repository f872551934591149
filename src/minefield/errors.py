"""
Exceptions raised by the Minefield game core.
"""


class MinefieldError(Exception):
    """Base class for all game errors."""


class InvalidConfigurationError(MinefieldError, ValueError):
    """Board dimensions or mine count are outside the allowed range."""


class OutOfBoundsError(MinefieldError, IndexError):
    """Coordinates fall outside the grid."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(
            f"Cell ({x}, {y}) is outside the {width}x{height} grid"
        )
        self.x = x
        self.y = y
