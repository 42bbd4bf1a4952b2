from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Type

from ..errors import ConfigurationError
from .palette import Palette
from .tile import Tile

if TYPE_CHECKING:
    from ..core.grid import Grid


@dataclass(frozen=True)
class GridConfig:
    """
    Everything a grid needs before it can be generated.
    A missing seed means ambient, non-reproducible randomness.
    """
    palette: Palette
    width: int
    height: int
    seed: Optional[int] = None

    def validate(self) -> 'GridConfig':
        """Check dimensions and seed. Returns self so calls can be chained."""
        for name in ('width', 'height'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"Grid {name} must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigurationError(f"Grid {name} must be positive, got {value}")
        if self.seed is not None and (isinstance(self.seed, bool) or not isinstance(self.seed, int)):
            raise ConfigurationError(f"Seed must be an integer or None, got {self.seed!r}")
        return self

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def build(self) -> 'Grid':
        """Validate and create the unassigned grid."""
        from ..core.grid import Grid
        self.validate()
        return Grid(self.palette, self.width, self.height, seed=self.seed)

    def to_dict(self) -> dict:
        return {
            'tiles': self.palette.to_dict(),
            'width': self.width,
            'height': self.height,
            'seed': self.seed
        }

    @classmethod
    def from_dict(cls, data: dict, tile_cls: Type[Tile] = Tile,
                  self_adjacent: bool = False) -> 'GridConfig':
        """
        Load a configuration written by `to_dict`.

        Neighbor lists are taken as-is unless `self_adjacent` is set, since
        `to_dict` already stores each tile's own key.
        """
        try:
            tiles = data['tiles']
            width = data['width']
            height = data['height']
        except KeyError as e:
            raise ConfigurationError(f"Missing configuration field: {e.args[0]}") from None
        config = cls(
            palette=Palette.from_dict(tiles, tile_cls=tile_cls, self_adjacent=self_adjacent),
            width=width,
            height=height,
            seed=data.get('seed')
        )
        return config.validate()
