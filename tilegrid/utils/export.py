"""
Export a generated grid as text or as a PNG image.
"""

from pathlib import Path
from typing import Mapping, Optional, Union

from PIL import Image, ImageDraw

from ..core.grid import AssignedGrid
from ..logging_config import get_logger
from ..models import Tile

logger = get_logger(__name__)

Color = tuple[int, int, int]

# Used for tiles without a color of their own, in palette order
DEFAULT_COLORS: list[Color] = [
    (52, 101, 164),
    (237, 212, 0),
    (115, 210, 22),
    (136, 138, 133),
    (204, 0, 0),
    (117, 80, 123),
    (245, 121, 0),
    (193, 125, 17),
]


def _symbol(tile: Tile, symbols: Optional[Mapping[str, str]]) -> str:
    if symbols and tile.key in symbols:
        return symbols[tile.key]
    symbol = getattr(tile, 'symbol', None)
    if symbol:
        return symbol
    return tile.key[:1].upper()


def _color(tile: Tile, index: int, colors: Optional[Mapping[str, Color]]) -> Color:
    if colors and tile.key in colors:
        return tuple(colors[tile.key])
    color = getattr(tile, 'color', None)
    if color:
        return tuple(color)
    return DEFAULT_COLORS[index % len(DEFAULT_COLORS)]


def render_text(grid: AssignedGrid, symbols: Optional[Mapping[str, str]] = None) -> str:
    """
    One character per cell, one line per row.

    A tile's symbol comes from `symbols`, then its own `symbol` attribute,
    then the first letter of its key.
    """
    return '\n'.join(
        ''.join(_symbol(tile, symbols) for tile in row)
        for row in grid.rows()
    )


def export_grid_to_png(
    filepath: Union[str, Path],
    grid: AssignedGrid,
    colors: Optional[Mapping[str, Color]] = None,
    tile_size: int = 16
) -> bool:
    """
    Export a generated grid to a PNG image, one filled square per cell.

    Args:
        filepath: Output PNG file path
        grid: The generated grid
        colors: RGB color per tile key (falls back to a tile's `color`
                attribute, then to DEFAULT_COLORS by palette index)
        tile_size: Side of each square in pixels

    Returns:
        True if export successful, False otherwise
    """
    if tile_size <= 0:
        raise ValueError(f"tile_size must be positive, got {tile_size}")

    image = Image.new('RGB', (grid.width * tile_size, grid.height * tile_size))
    draw = ImageDraw.Draw(image)

    for i, (tile, palette_index) in enumerate(zip(grid, grid.indices)):
        x = (i % grid.width) * tile_size
        y = (i // grid.width) * tile_size
        draw.rectangle(
            [x, y, x + tile_size - 1, y + tile_size - 1],
            fill=_color(tile, palette_index, colors)
        )

    path = Path(filepath)
    try:
        image.save(path, 'PNG')
    except OSError as e:
        logger.error("Failed to save grid image to %s: %s", path, e)
        return False
    logger.debug("Saved %dx%d grid image to %s", grid.width, grid.height, path)
    return True
