"""Shared pytest fixtures for tilegrid tests."""

import random
from dataclasses import dataclass

import pytest
from PySide6.QtCore import QCoreApplication

from tilegrid import Palette, Tile


@dataclass(frozen=True, eq=False)
class Terrain(Tile):
    """Tile with a display symbol and color."""
    symbol: str = "?"
    color: tuple[int, int, int] = (0, 0, 0)


class ScriptedRandom(random.Random):
    """Random whose randrange() returns scripted values, then falls back to 0."""

    def __init__(self, values):
        super().__init__(0)
        self.values = list(values)
        self.calls = []

    def randrange(self, start, stop=None, step=1):
        self.calls.append((start, stop))
        return self.values.pop(0) if self.values else 0


@pytest.fixture
def terrain_cls():
    return Terrain


@pytest.fixture
def scripted_random():
    """Factory for a Random that returns the given randrange() values."""
    return ScriptedRandom


@pytest.fixture(scope="session", autouse=True)
def qt_core_app():
    """Core application for the engine's QObject signals."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


# =============================================================================
# Palettes
# =============================================================================

@pytest.fixture
def terrain_tiles() -> list[Terrain]:
    """Water, beach, land and mountain, each adjacent to itself and its ring neighbors."""
    return [
        Terrain.define("water", "beach", symbol="~", color=(52, 101, 164)),
        Terrain.define("beach", "water", "land", symbol=".", color=(237, 212, 0)),
        Terrain.define("land", "beach", "mountain", symbol="#", color=(115, 210, 22)),
        Terrain.define("mountain", "land", symbol="^", color=(136, 138, 133)),
    ]


@pytest.fixture
def terrain_palette(terrain_tiles) -> Palette:
    return Palette(terrain_tiles)


@pytest.fixture
def meadow_palette() -> Palette:
    """Every pair of allowed sets shares grass, so generation cannot contradict."""
    return Palette([
        Tile.define("grass", "flower", "path"),
        Tile.define("flower", "grass"),
        Tile.define("path", "grass"),
    ])


@pytest.fixture
def disjoint_palette() -> Palette:
    """Two tiles that only accept themselves."""
    return Palette([
        Tile.define("a"),
        Tile.define("b"),
    ])


@pytest.fixture
def hostile_palette() -> Palette:
    """Two tiles that accept neither each other nor themselves."""
    return Palette([
        Tile("red"),
        Tile("blue"),
    ])
