from .rule import Rule, dedupe_rules
from .tile import Tile
from .palette import Palette
from .config import GridConfig

__all__ = ['Rule', 'dedupe_rules', 'Tile', 'Palette', 'GridConfig']
