from .engine import WFCEngine, EngineState
from .grid import Grid, AssignedGrid
from .builder import GridBuilder
from .validation import validate_palette, validate_grid, PaletteValidation, TileValidation

__all__ = [
    'WFCEngine', 'EngineState',
    'Grid', 'AssignedGrid', 'GridBuilder',
    'validate_palette', 'validate_grid', 'PaletteValidation', 'TileValidation'
]
