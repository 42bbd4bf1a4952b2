from dataclasses import dataclass, replace
from typing import Iterable, Optional, Union

from ..errors import ConfigurationError
from ..models import GridConfig, Palette, Tile
from .grid import Grid


@dataclass(frozen=True)
class GridBuilder:
    """
    Collects palette, size and seed for a grid.

    Every ``with_*`` call returns a new builder, so a partially configured
    builder can be reused. Missing fields are reported by `seal()`.

    Example::

        grid = (GridBuilder()
                .with_tiles(tiles)
                .with_size((10, 10))
                .with_seed(1)
                .build())
    """
    tiles: Optional[tuple[Tile, ...]] = None
    size: Optional[tuple[int, int]] = None
    seed: Optional[int] = None

    def with_tiles(self, tiles: Union[Palette, Iterable[Tile]]) -> 'GridBuilder':
        return replace(self, tiles=tuple(tiles))

    def with_size(self, size: tuple[int, int]) -> 'GridBuilder':
        width, height = size
        return replace(self, size=(width, height))

    def with_seed(self, seed: Optional[int]) -> 'GridBuilder':
        return replace(self, seed=seed)

    def seal(self) -> GridConfig:
        """
        Validate the collected fields.

        Returns:
            Frozen configuration

        Raises:
            ConfigurationError: If tiles or size are missing or invalid
        """
        if self.tiles is None:
            raise ConfigurationError("No tiles configured; call with_tiles() first")
        if not self.tiles:
            raise ConfigurationError("Palette is empty")
        if self.size is None:
            raise ConfigurationError("No size configured; call with_size() first")

        width, height = self.size
        config = GridConfig(
            palette=Palette(self.tiles),
            width=width,
            height=height,
            seed=self.seed
        )
        return config.validate()

    def build(self) -> Grid:
        """Seal and create the unassigned grid."""
        return self.seal().build()
