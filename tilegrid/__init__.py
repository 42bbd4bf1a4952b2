"""
tilegrid - fill a grid with tiles under adjacency rules, lowest entropy first.
"""

from .errors import (
    TileGridError, ConfigurationError, PaletteError, UnknownTileError,
    GridError, ContradictionError
)
from .models import Tile, Rule, Palette, GridConfig, dedupe_rules
from .core import (
    WFCEngine, EngineState, Grid, AssignedGrid, GridBuilder,
    validate_palette, validate_grid
)

__version__ = "1.0.0"

__all__ = [
    'TileGridError', 'ConfigurationError', 'PaletteError', 'UnknownTileError',
    'GridError', 'ContradictionError',
    'Tile', 'Rule', 'Palette', 'GridConfig', 'dedupe_rules',
    'WFCEngine', 'EngineState', 'Grid', 'AssignedGrid', 'GridBuilder',
    'validate_palette', 'validate_grid'
]
