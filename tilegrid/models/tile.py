from dataclasses import dataclass
from typing import Optional, Type, TypeVar, Union

from .rule import Rule

T = TypeVar('T', bound='Tile')


@dataclass(frozen=True, eq=False)
class Tile:
    """
    A palette member: an immutable unit that can be placed in a cell.

    Identity is the explicit `key`; two tiles with the same key are equal no
    matter what else they carry. Subclasses add payload (symbol, color, ...)
    and should be declared with ``@dataclass(frozen=True, eq=False)`` so the
    key-based equality is kept.
    """
    key: str                          # e.g. "water"
    neighbors: tuple[str, ...] = ()   # keys of tiles allowed next to this one

    def identity(self) -> str:
        """Stable key used for equality and deduplication."""
        return self.key

    def rules(self) -> list[Rule]:
        """Declared adjacency list, one rule per neighbor key."""
        return [Rule(neighbor=key) for key in self.neighbors]

    def downcast(self, cls: Type[T]) -> Optional[T]:
        """Return this tile as `cls`, or None if it is another variant."""
        if isinstance(self, cls):
            return self
        return None

    @classmethod
    def define(cls: Type[T], key: str, *neighbors: Union['Tile', str],
               self_adjacent: bool = True, **fields) -> T:
        """
        Author a tile from its neighbor list.

        Args:
            key: Identity of the new tile
            *neighbors: Tiles or keys allowed next to it
            self_adjacent: Append the tile's own key (the usual convention)
            **fields: Extra payload for subclasses

        Returns:
            A new tile of type `cls`
        """
        keys = [n if isinstance(n, str) else n.identity() for n in neighbors]
        if self_adjacent:
            keys.append(key)
        return cls(key=key, neighbors=tuple(dict.fromkeys(keys)), **fields)

    def __hash__(self):
        return hash(self.key)

    def __eq__(self, other):
        if isinstance(other, Tile):
            return self.key == other.key
        return False
