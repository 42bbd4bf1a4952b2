from typing import Iterable, Iterator, Mapping, Optional, Sequence, Type

from ..errors import PaletteError, UnknownTileError
from .rule import Rule, dedupe_rules
from .tile import Tile


class Palette:
    """
    Ordered, immutable collection of distinct tiles.

    Every tile gets an integer index (its position). Cells and the engine
    store these indices instead of the tiles themselves.
    """

    def __init__(self, tiles: Iterable[Tile]):
        self._tiles: tuple[Tile, ...] = tuple(tiles)
        if not self._tiles:
            raise PaletteError("Palette needs at least one tile")

        self._index: dict[str, int] = {}
        for i, tile in enumerate(self._tiles):
            if tile.key in self._index:
                raise PaletteError(f"Tile '{tile.key}' appears twice in the palette")
            self._index[tile.key] = i

        # Resolve every tile's rules to palette indices once
        allowed = []
        for tile in self._tiles:
            indices = set()
            for rule in tile.rules():
                if rule.neighbor not in self._index:
                    raise UnknownTileError(rule.neighbor, owner=tile.key)
                indices.add(self._index[rule.neighbor])
            allowed.append(frozenset(indices))
        self._allowed: tuple[frozenset[int], ...] = tuple(allowed)

    # --- Lookup ---

    def __len__(self) -> int:
        return len(self._tiles)

    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles)

    def __getitem__(self, index: int) -> Tile:
        return self._tiles[index]

    def __contains__(self, tile: object) -> bool:
        if isinstance(tile, str):
            return tile in self._index
        return isinstance(tile, Tile) and tile.key in self._index

    def __repr__(self) -> str:
        return f"Palette({[t.key for t in self._tiles]!r})"

    @property
    def keys(self) -> list[str]:
        return [t.key for t in self._tiles]

    def index_of(self, key: str) -> int:
        """Get the palette index of a tile key."""
        try:
            return self._index[key]
        except KeyError:
            raise UnknownTileError(key) from None

    def get(self, key: str) -> Optional[Tile]:
        """Get a tile by key, or None."""
        i = self._index.get(key)
        return None if i is None else self._tiles[i]

    def allowed_indices(self, index: int) -> frozenset[int]:
        """Indices of the tiles the tile at `index` accepts as neighbors."""
        return self._allowed[index]

    # --- Rules ---

    def global_rules(self) -> list[Rule]:
        """
        Deduplicated union of every tile's declared rules.

        Order is palette order, then declaration order, first occurrence kept.
        """
        return dedupe_rules(rule for tile in self._tiles for rule in tile.rules())

    def global_rule_indices(self) -> list[int]:
        """Global rule set as palette indices."""
        return [self._index[rule.neighbor] for rule in self.global_rules()]

    # --- Serialization ---

    def to_dict(self) -> dict:
        return {tile.key: list(tile.neighbors) for tile in self._tiles}

    @classmethod
    def from_dict(cls, data: Mapping[str, Sequence[str]], tile_cls: Type[Tile] = Tile,
                  self_adjacent: bool = True) -> 'Palette':
        """
        Build a palette from a ``{key: [neighbor keys]}`` mapping.

        Args:
            data: Neighbor lists keyed by tile key, in palette order
            tile_cls: Tile class to instantiate
            self_adjacent: Add each tile's own key to its neighbors

        Returns:
            The new palette
        """
        return cls(
            tile_cls.define(key, *neighbors, self_adjacent=self_adjacent)
            for key, neighbors in data.items()
        )
