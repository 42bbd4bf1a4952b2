from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Union

if TYPE_CHECKING:
    from .tile import Tile


@dataclass(frozen=True)
class Rule:
    """
    Adjacency rule: the declaring tile accepts `neighbor` next to it.
    Rules compare and hash on the neighbor key only.
    """
    neighbor: str                     # key of the tile allowed next to the declaring tile

    @classmethod
    def new(cls, target: Union['Tile', str]) -> 'Rule':
        """Create a rule from a tile or a tile key."""
        if isinstance(target, str):
            return cls(neighbor=target)
        return cls(neighbor=target.identity())


def dedupe_rules(rules: Iterable[Rule]) -> list[Rule]:
    """Drop repeated rules, keeping the first occurrence of each key."""
    return list(dict.fromkeys(rules))
