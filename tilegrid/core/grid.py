"""
Grid lifecycle: an unassigned Grid is consumed by generate() into an AssignedGrid.
"""

import random
from typing import Iterator, Optional, Sequence

from ..errors import GridError
from ..logging_config import get_logger
from ..models import GridConfig, Palette, Tile
from .engine import WFCEngine

logger = get_logger(__name__)


class Grid:
    """
    Grid whose cells are all unassigned.

    `engine` is exposed so callers can connect to its signals before
    calling `generate()`.
    """

    def __init__(self, palette: Palette, width: int, height: int, seed: Optional[int] = None):
        if not isinstance(palette, Palette):
            palette = Palette(palette)
        GridConfig(palette, width, height, seed).validate()

        self.palette = palette
        self.width = width
        self.height = height
        self.seed = seed
        self.engine = WFCEngine(random.Random(seed))
        self._generated = False

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def generate(self) -> 'AssignedGrid':
        """
        Fill every cell. The grid can only be generated once.

        Returns:
            The fully assigned grid

        Raises:
            ContradictionError: If a cell runs out of candidates
            GridError: If the grid was already generated
        """
        if self._generated:
            raise GridError("Grid has already been generated")
        self._generated = True

        logger.debug(
            "Generating %dx%d grid (seed=%s)", self.width, self.height, self.seed
        )
        self.engine.initialize(self.palette, self.width, self.height)
        indices = self.engine.run()

        return AssignedGrid(
            self.palette,
            self.width,
            self.height,
            indices,
            self.engine.assignment_order
        )


class AssignedGrid:
    """Read-only grid in which every cell holds a palette tile."""

    def __init__(self, palette: Palette, width: int, height: int,
                 indices: Sequence[int], assignment_order: Sequence[int] = ()):
        if len(indices) != width * height:
            raise GridError(f"Expected {width * height} cells, got {len(indices)}")

        self.palette = palette
        self.width = width
        self.height = height
        self._indices: tuple[int, ...] = tuple(indices)
        self._tiles: tuple[Tile, ...] = tuple(palette[i] for i in self._indices)
        self._order: tuple[int, ...] = tuple(assignment_order)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles)

    def __len__(self) -> int:
        return len(self._tiles)

    def __repr__(self) -> str:
        return f"AssignedGrid({self.width}x{self.height})"

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def indices(self) -> tuple[int, ...]:
        """Palette index of every cell, row-major."""
        return self._indices

    @property
    def assignment_order(self) -> tuple[int, ...]:
        """Cell indices in the order the engine assigned them."""
        return self._order

    def tile_at(self, x: int, y: int) -> Tile:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Position ({x}, {y}) is outside a {self.width}x{self.height} grid")
        return self._tiles[y * self.width + x]

    def rows(self) -> list[list[Tile]]:
        w = self.width
        return [list(self._tiles[y * w:(y + 1) * w]) for y in range(self.height)]

    def keys(self) -> list[str]:
        return [t.key for t in self._tiles]
