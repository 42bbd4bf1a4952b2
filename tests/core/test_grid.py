"""Tests for tilegrid.core.grid and tilegrid.core.builder modules."""

import pytest

from tilegrid import (
    AssignedGrid,
    ConfigurationError,
    ContradictionError,
    Grid,
    GridBuilder,
    GridError,
    Palette,
    PaletteError,
    Tile,
    UnknownTileError,
    validate_grid,
)


def neighbor_pairs(width: int, height: int):
    """Every pair of truly adjacent cells, without row wrap."""
    for y in range(height):
        for x in range(width):
            i = y * width + x
            if x < width - 1:
                yield i, i + 1
            if y < height - 1:
                yield i, i + width


def assert_sound(grid: AssignedGrid):
    """Later-assigned tile must be listed by the earlier-assigned neighbor."""
    rank = {cell: n for n, cell in enumerate(grid.assignment_order)}
    tiles = list(grid)
    for a, b in neighbor_pairs(grid.width, grid.height):
        first, second = (a, b) if rank[a] < rank[b] else (b, a)
        assert tiles[second].key in tiles[first].neighbors, (first, second)


def outcome(palette: Palette, width: int, height: int, seed: int):
    """Keys on success, contradiction index on failure."""
    try:
        return Grid(palette, width, height, seed=seed).generate().keys()
    except ContradictionError as e:
        return ("contradiction", e.index)


class TestGenerate:
    """Tests for Grid.generate."""

    def test_length_and_membership(self, meadow_palette: Palette):
        """Test the output has one palette tile per cell."""
        grid = Grid(meadow_palette, 7, 5, seed=3).generate()
        tiles = list(grid)
        assert len(tiles) == len(grid) == 35
        assert all(t in meadow_palette for t in tiles)

    def test_single_cell(self):
        """Test a 1x1 grid is filled by the seed step alone."""
        palette = Palette([Tile.define("only")])
        grid = Grid(palette, 1, 1, seed=0).generate()
        assert grid.keys() == ["only"]
        assert grid.assignment_order == (0,)

    @pytest.mark.parametrize("seed", range(10))
    def test_adjacency_soundness(self, meadow_palette: Palette, seed):
        """Test every adjacent pair respects the earlier tile's rules."""
        grid = Grid(meadow_palette, 6, 4, seed=seed).generate()
        assert_sound(grid)
        assert validate_grid(grid) == []

    def test_determinism(self, meadow_palette: Palette):
        """Test the same seed gives the same grid."""
        first = Grid(meadow_palette, 8, 6, seed=42).generate()
        second = Grid(meadow_palette, 8, 6, seed=42).generate()
        assert first.keys() == second.keys()
        assert first.assignment_order == second.assignment_order

    def test_seeds_differ(self, meadow_palette: Palette):
        """Test different seeds explore different grids."""
        results = {tuple(Grid(meadow_palette, 6, 6, seed=s).generate().keys()) for s in range(5)}
        assert len(results) > 1

    def test_unseeded(self, meadow_palette: Palette):
        """Test generation without a seed."""
        grid = Grid(meadow_palette, 4, 4).generate()
        assert len(grid) == 16

    def test_accepts_tile_list(self):
        """Test a plain list of tiles is turned into a palette."""
        grid = Grid([Tile.define("x")], 2, 2, seed=1)
        assert isinstance(grid.palette, Palette)
        assert grid.generate().keys() == ["x"] * 4

    def test_generate_twice(self, meadow_palette: Palette):
        """Test an unassigned grid is consumed by generate."""
        grid = Grid(meadow_palette, 2, 2, seed=1)
        grid.generate()
        with pytest.raises(GridError):
            grid.generate()

    def test_zero_size(self, meadow_palette: Palette):
        """Test a grid without cells is rejected."""
        with pytest.raises(ConfigurationError):
            Grid(meadow_palette, 0, 4)

    @pytest.mark.parametrize("size", [(2.0, 2), (2, "2"), (True, 2)])
    def test_non_integer_size(self, meadow_palette: Palette, size):
        """Test non-integer dimensions are a configuration error."""
        with pytest.raises(ConfigurationError, match="integer"):
            Grid(meadow_palette, *size)

    def test_non_integer_seed(self, meadow_palette: Palette):
        """Test the seed must be an integer or None."""
        with pytest.raises(ConfigurationError, match="Seed"):
            Grid(meadow_palette, 2, 2, seed="1")

    def test_engine_signals_reachable(self, meadow_palette: Palette):
        """Test callers can listen to the engine before generating."""
        grid = Grid(meadow_palette, 3, 3, seed=2)
        assigned = []
        grid.engine.cell_assigned.connect(lambda index, key: assigned.append(index))
        result = grid.generate()
        assert assigned == list(result.assignment_order)


class TestTerrain:
    """Tests with the water/beach/land/mountain palette."""

    def test_seed_one_layout(self, terrain_palette: Palette):
        """Test 4x4 with seed 1 produces a fixed, sound layout."""
        grid = Grid(terrain_palette, 4, 4, seed=1).generate()
        assert grid.keys() == [
            "beach", "water", "beach", "beach",
            "water", "water", "water", "water",
            "beach", "water", "beach", "water",
            "beach", "water", "water", "water",
        ]
        assert_sound(grid)
        assert validate_grid(grid) == []

    @pytest.mark.parametrize("seed", range(20))
    def test_never_partial(self, terrain_palette: Palette, seed):
        """Test a run either yields a sound full grid or raises."""
        try:
            grid = Grid(terrain_palette, 4, 4, seed=seed).generate()
        except ContradictionError as e:
            assert 0 <= e.index < 16
            return
        assert len(grid) == 16
        assert_sound(grid)

    def test_mostly_succeeds(self, terrain_palette: Palette):
        """Test most seeds fill a 4x4 grid without contradiction."""
        successes = sum(
            not isinstance(outcome(terrain_palette, 4, 4, s), tuple) for s in range(20)
        )
        assert successes >= 15

    @pytest.mark.parametrize("size", [(12, 1), (1, 12)])
    def test_strip_always_succeeds(self, terrain_palette: Palette, size):
        """Test a single row or column never contradicts."""
        # Cells are filled outward from the seed, so each has one assigned neighbor
        for seed in range(10):
            grid = Grid(terrain_palette, *size, seed=seed).generate()
            assert_sound(grid)

    def test_hundred_by_hundred_seed_213(self, terrain_tiles):
        """Test a 100x100 terrain run completes in one process."""
        grid = GridBuilder().with_tiles(terrain_tiles).with_size((100, 100)).with_seed(213).build()
        try:
            result = grid.generate()
        except ContradictionError as e:
            assert 0 <= e.index < 10000
            assert grid.engine.cells[e.index] is None
            return
        assert len(result) == 10000
        assert validate_grid(result) == []

    def test_downcast_results(self, terrain_palette: Palette, terrain_cls):
        """Test consumers recover the concrete tile class."""
        grid = Grid(terrain_palette, 6, 1, seed=5).generate()
        symbols = [tile.downcast(terrain_cls).symbol for tile in grid]
        assert all(s in "~.#^" for s in symbols)


class TestContradiction:
    """Tests for the contradiction path."""

    def test_hostile_tiles(self, hostile_palette: Palette):
        """Test tiles accepting nothing cannot fill a 2x2 grid."""
        grid = Grid(hostile_palette, 2, 2, seed=0)
        with pytest.raises(ContradictionError):
            grid.generate()

    @pytest.mark.parametrize("seed", range(5))
    def test_hostile_tiles_any_seed(self, hostile_palette: Palette, seed):
        """Test the contradiction does not depend on the seed."""
        with pytest.raises(ContradictionError):
            Grid(hostile_palette, 2, 2, seed=seed).generate()


class TestAssignedGrid:
    """Tests for AssignedGrid read access."""

    @pytest.fixture
    def grid(self, terrain_palette: Palette) -> AssignedGrid:
        # water beach land
        # beach land  mountain
        return AssignedGrid(terrain_palette, 3, 2, [0, 1, 2, 1, 2, 3])

    def test_iteration_is_restartable(self, grid: AssignedGrid):
        """Test iterating twice gives the same sequence."""
        assert list(grid) == list(grid)
        assert [t.key for t in grid] == ["water", "beach", "land", "beach", "land", "mountain"]

    def test_tile_at(self, grid: AssignedGrid):
        """Test positional access is row-major."""
        assert grid.tile_at(0, 0).key == "water"
        assert grid.tile_at(2, 1).key == "mountain"

    def test_tile_at_out_of_bounds(self, grid: AssignedGrid):
        """Test positions outside the grid raise IndexError."""
        with pytest.raises(IndexError):
            grid.tile_at(3, 0)

    def test_rows(self, grid: AssignedGrid):
        """Test rows splits on the grid width."""
        rows = grid.rows()
        assert len(rows) == 2
        assert [t.key for t in rows[1]] == ["beach", "land", "mountain"]

    def test_indices_and_size(self, grid: AssignedGrid):
        """Test raw palette indices and size."""
        assert grid.indices == (0, 1, 2, 1, 2, 3)
        assert grid.size == (3, 2)
        assert grid.assignment_order == ()

    def test_wrong_cell_count(self, terrain_palette: Palette):
        """Test the buffer must match the dimensions."""
        with pytest.raises(GridError):
            AssignedGrid(terrain_palette, 2, 2, [0, 0, 0])


class TestGridBuilder:
    """Tests for GridBuilder."""

    def test_build(self, terrain_tiles):
        """Test a complete builder produces a grid."""
        grid = (GridBuilder()
                .with_tiles(terrain_tiles)
                .with_size((5, 3))
                .with_seed(1)
                .build())
        assert isinstance(grid, Grid)
        assert grid.size == (5, 3)
        assert grid.seed == 1
        assert grid.palette.keys == ["water", "beach", "land", "mountain"]

    def test_seed_is_optional(self, terrain_tiles):
        """Test a builder without seed is complete."""
        config = GridBuilder().with_tiles(terrain_tiles).with_size((2, 2)).seal()
        assert config.seed is None

    def test_missing_tiles(self):
        """Test sealing without tiles names the missing call."""
        with pytest.raises(ConfigurationError, match="with_tiles"):
            GridBuilder().with_size((2, 2)).seal()

    def test_missing_size(self, terrain_tiles):
        """Test sealing without size names the missing call."""
        with pytest.raises(ConfigurationError, match="with_size"):
            GridBuilder().with_tiles(terrain_tiles).build()

    def test_empty_palette(self):
        """Test an empty tile list is a configuration error."""
        with pytest.raises(ConfigurationError, match="empty"):
            GridBuilder().with_tiles([]).with_size((2, 2)).seal()

    def test_zero_size(self, terrain_tiles):
        """Test non-positive sizes are rejected at seal time."""
        with pytest.raises(ConfigurationError):
            GridBuilder().with_tiles(terrain_tiles).with_size((0, 3)).seal()

    def test_palette_errors_surface(self):
        """Test palette problems are reported when sealing."""
        with pytest.raises(UnknownTileError):
            GridBuilder().with_tiles([Tile.define("a", "b")]).with_size((2, 2)).seal()
        with pytest.raises(PaletteError):
            GridBuilder().with_tiles([Tile("a"), Tile("a")]).with_size((2, 2)).seal()

    def test_builders_are_immutable(self, terrain_tiles):
        """Test with_* returns a new builder and leaves the original alone."""
        base = GridBuilder().with_tiles(terrain_tiles)
        sized = base.with_size((3, 3))
        assert base.size is None
        assert sized.size == (3, 3)
        assert sized.with_seed(9).seed == 9
        assert sized.seed is None

    def test_accepts_palette(self, meadow_palette: Palette):
        """Test a Palette can be passed to with_tiles."""
        grid = GridBuilder().with_tiles(meadow_palette).with_size((2, 2)).with_seed(0).build()
        assert grid.palette.keys == meadow_palette.keys

    def test_same_config_same_grid(self, meadow_palette: Palette):
        """Test a sealed config builds identical grids."""
        config = GridBuilder().with_tiles(meadow_palette).with_size((5, 5)).with_seed(11).seal()
        assert config.build().generate().keys() == config.build().generate().keys()
