"""
Validation utilities for palettes and generated grids.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import Palette
    from .grid import AssignedGrid


@dataclass
class TileValidation:
    """Validation result for a single tile."""
    tile_key: str
    missing_self: bool = False
    one_way_neighbors: list[str] = field(default_factory=list)  # listed here, but not listing back

    @property
    def is_valid(self) -> bool:
        return not self.missing_self and not self.one_way_neighbors


@dataclass
class PaletteValidation:
    """
    Overall validation result for a palette.

    Orphans are errors: an orphan placed anywhere but a 1x1 grid leaves its
    neighbors without candidates. The rest are warnings that make a
    contradiction more likely.
    """
    tile_results: dict[str, TileValidation] = field(default_factory=dict)
    orphan_tiles: list[str] = field(default_factory=list)       # tiles declaring no rules at all
    unreachable_tiles: list[str] = field(default_factory=list)  # tiles no rule names; only the seed can place them

    @property
    def is_valid(self) -> bool:
        return self.error_count == 0 and self.warning_count == 0

    @property
    def error_count(self) -> int:
        return len(self.orphan_tiles)

    @property
    def warning_count(self) -> int:
        count = len(self.unreachable_tiles)
        for tr in self.tile_results.values():
            count += int(tr.missing_self) + len(tr.one_way_neighbors)
        return count

    def get_tiles_with_issues(self) -> list[str]:
        """Get keys of all tiles that have any issues."""
        issues = set(self.orphan_tiles) | set(self.unreachable_tiles)
        for key, tr in self.tile_results.items():
            if not tr.is_valid:
                issues.add(key)
        return sorted(issues)


def validate_palette(palette: 'Palette') -> PaletteValidation:
    """
    Check a palette for rules likely to cause contradictions.

    Checks:
    1. Every tile declares at least one rule
    2. Every tile lists itself
    3. Every rule is mirrored by the neighbor
    4. Every tile is named by some rule

    Args:
        palette: The palette to validate

    Returns:
        PaletteValidation with details about any issues
    """
    result = PaletteValidation()
    named = {rule.neighbor for rule in palette.global_rules()}

    for tile in palette:
        tile_result = TileValidation(tile_key=tile.key)
        if not tile.neighbors:
            result.orphan_tiles.append(tile.key)
        elif tile.key not in tile.neighbors:
            tile_result.missing_self = True

        for key in tile.neighbors:
            if key == tile.key:
                continue
            if tile.key not in palette.get(key).neighbors:
                tile_result.one_way_neighbors.append(key)

        if tile.key not in named:
            result.unreachable_tiles.append(tile.key)

        result.tile_results[tile.key] = tile_result

    return result


def validate_grid(grid: 'AssignedGrid') -> list[str]:
    """
    Validate all adjacencies in a generated grid.

    For each adjacent pair the later-assigned tile must be listed by the
    earlier-assigned one. When the grid carries no assignment order, both
    tiles must list each other.

    Returns:
        List of error messages (empty if valid)
    """
    errors = []
    rank = {cell: i for i, cell in enumerate(grid.assignment_order)}
    w = grid.width

    for y in range(grid.height):
        for x in range(w):
            index = y * w + x
            # Right and down cover every pair once
            pairs = []
            if x < w - 1:
                pairs.append((index + 1, 'right'))
            if y < grid.height - 1:
                pairs.append((index + w, 'bottom'))

            for other, side in pairs:
                a = grid.tile_at(x, y)
                b = grid.tile_at(other % w, other // w)
                if index in rank and other in rank:
                    first, second = (a, b) if rank[index] < rank[other] else (b, a)
                    if second.key not in first.neighbors:
                        errors.append(
                            f"({x},{y}) '{a.key}' and its {side} neighbor '{b.key}': "
                            f"'{first.key}' does not allow '{second.key}'"
                        )
                elif b.key not in a.neighbors or a.key not in b.neighbors:
                    errors.append(
                        f"({x},{y}) '{a.key}' and its {side} neighbor '{b.key}' do not allow each other"
                    )

    return errors
