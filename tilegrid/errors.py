"""
Exceptions raised by tilegrid.
"""

from typing import Optional


class TileGridError(Exception):
    """Base class for all tilegrid errors."""


class ConfigurationError(TileGridError, ValueError):
    """Raised when a grid configuration is incomplete or out of range."""


class PaletteError(TileGridError, ValueError):
    """Raised when a palette cannot be built (empty, duplicate keys)."""


class UnknownTileError(PaletteError, KeyError):
    """Raised when a rule or lookup names a tile key not in the palette."""

    def __init__(self, key: str, owner: Optional[str] = None):
        self.key = key
        self.owner = owner
        if owner is None:
            message = f"Unknown tile '{key}'"
        else:
            message = f"Tile '{owner}' declares unknown neighbor '{key}'"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class GridError(TileGridError):
    """Raised on grid lifecycle misuse or a broken generation invariant."""


class ContradictionError(TileGridError):
    """
    Raised when the lowest-entropy cell has no candidate left.

    There is no backtracking, so the partially filled grid is discarded.
    """

    def __init__(self, index: int, width: int):
        self.index = index
        self.x = index % width
        self.y = index // width
        super().__init__(
            f"Contradiction at cell {index} ({self.x}, {self.y}): no tile fits its neighbors"
        )
