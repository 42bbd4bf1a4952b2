"""
Greedy lowest-entropy-first grid filling engine.
"""

import heapq
import random
from enum import Enum, auto
from typing import List, Optional, Tuple

from PySide6.QtCore import QMetaMethod, QObject, Signal

from ..errors import ConfigurationError, ContradictionError, GridError
from ..logging_config import get_logger
from ..models import Palette, Tile

logger = get_logger(__name__)


class EngineState(Enum):
    """Engine states."""
    IDLE = auto()
    RUNNING = auto()
    FINISHED = auto()
    CONTRADICTION = auto()


class WFCEngine(QObject):
    """
    Fills a row-major cell buffer one cell per step.

    Each step picks, among unassigned cells, the one with the fewest global
    rule set entries accepted by all of its assigned up/left/right/down
    neighbors (first in scan order on ties) and assigns it a random
    survivor. There is no propagation and no backtracking.

    Candidate lists are cached per cell and narrowed when a neighbor is
    assigned. A heap of (entropy, index) entries finds the next cell; stale
    entries are skipped when popped.

    Signals are only emitted while something is connected to them.

    Signals:
        cell_assigned(index, key): Emitted when a cell receives a tile
        contradiction_found(index): Emitted when the chosen cell has no candidate
        state_changed(state): Emitted when engine state changes
        finished(success): Emitted when generation ends
        progress_updated(assigned, total): Emitted on progress change
    """

    cell_assigned = Signal(int, str)
    contradiction_found = Signal(int)
    state_changed = Signal(EngineState)
    finished = Signal(bool)
    progress_updated = Signal(int, int)

    def __init__(self, rng: Optional[random.Random] = None, parent=None):
        super().__init__(parent)

        self.rng = rng if rng is not None else random.Random()
        self.palette: Optional[Palette] = None
        self.width: int = 0
        self.height: int = 0
        self.cells: List[Optional[int]] = []
        self.rules: List[int] = []  # global rule set as palette indices

        self._state = EngineState.IDLE
        self._order: List[int] = []
        self._contradiction: Optional[int] = None
        self._candidates: List[List[int]] = []
        self._heap: List[Tuple[int, int]] = []

    @property
    def state(self) -> EngineState:
        return self._state

    @state.setter
    def state(self, value: EngineState):
        if self._state != value:
            self._state = value
            self._emit(self.state_changed, value)

    @property
    def assigned_count(self) -> int:
        return len(self._order)

    @property
    def total_cells(self) -> int:
        return len(self.cells)

    @property
    def assignment_order(self) -> List[int]:
        """Cell indices in the order they were assigned."""
        return list(self._order)

    @property
    def contradiction_index(self) -> Optional[int]:
        return self._contradiction

    def initialize(self, palette: Palette, width: int, height: int):
        """
        Allocate an empty grid and derive the global rule set.

        Args:
            palette: Tiles available for placement
            width: Grid width
            height: Grid height
        """
        if width <= 0 or height <= 0:
            raise ConfigurationError(f"Grid size must be positive, got {width}x{height}")

        self.palette = palette
        self.width = width
        self.height = height
        self.cells = [None] * (width * height)
        self.rules = palette.global_rule_indices()
        self._order = []
        self._contradiction = None
        self._candidates = [list(self.rules) for _ in self.cells]
        # Sorted, so already a valid heap
        self._heap = [(len(self.rules), i) for i in range(self.total_cells)]
        self.state = EngineState.IDLE

        logger.debug(
            "Initialized %dx%d grid with %d tiles, %d global rules",
            width, height, len(palette), len(self.rules)
        )
        self._emit(self.progress_updated, 0, self.total_cells)

    def start(self):
        """Seed one random cell with one random palette tile."""
        if self.palette is None:
            raise GridError("Engine is not initialized")
        if self.state != EngineState.IDLE:
            return

        # Tile first, then cell: the draw order is part of the seeded output
        tile = self.rng.randrange(len(self.palette))
        index = self.rng.randrange(self.total_cells)
        logger.debug("Seeding cell %d with '%s'", index, self.palette[tile].key)

        self.state = EngineState.RUNNING
        self._assign(index, tile)

    def step(self) -> EngineState:
        """Assign the lowest-entropy cell. Returns the resulting state."""
        if self.state in (EngineState.FINISHED, EngineState.CONTRADICTION):
            return self.state
        if self.state == EngineState.IDLE:
            self.start()
            return self.state

        best_index = self._next_cell()

        if best_index is None:
            self.state = EngineState.FINISHED
            logger.info("Generated %dx%d grid", self.width, self.height)
            self._emit(self.finished, True)
            return self.state

        best_candidates = self._candidates[best_index]
        if not best_candidates:
            self._contradiction = best_index
            self.state = EngineState.CONTRADICTION
            logger.warning(
                "Contradiction at cell %d after %d of %d cells",
                best_index, self.assigned_count, self.total_cells
            )
            self._emit(self.contradiction_found, best_index)
            self._emit(self.finished, False)
            return self.state

        tile = best_candidates[self.rng.randrange(len(best_candidates))]
        self._assign(best_index, tile)
        return self.state

    def run(self) -> List[int]:
        """
        Step until every cell is assigned.

        Returns:
            Palette index of every cell, row-major

        Raises:
            ContradictionError: If a cell runs out of candidates
        """
        while self.step() == EngineState.RUNNING:
            pass

        if self.state == EngineState.CONTRADICTION:
            raise ContradictionError(self._contradiction, self.width)
        return [self._require(i) for i in range(self.total_cells)]

    def neighbors(self, index: int) -> List[int]:
        """
        Indices of the up, left, right and down neighbors of a cell.

        The grid does not wrap: the last cell of a row and the first cell of
        the next row are not neighbors.
        """
        w = self.width
        x = index % w
        result = []
        if index >= w:
            result.append(index - w)
        if x > 0:
            result.append(index - 1)
        if x < w - 1:
            result.append(index + 1)
        if index + w < self.total_cells:
            result.append(index + w)
        return result

    def candidates(self, index: int) -> List[int]:
        """
        Global rule set entries accepted by every assigned neighbor of a cell.

        For an assigned neighbor N, tile T survives only if N lists T among
        its rules.
        """
        result = self.rules
        for n in self.neighbors(index):
            tile = self.cells[n]
            if tile is None:
                continue
            allowed = self.palette.allowed_indices(tile)
            result = [c for c in result if c in allowed]
        return list(result)

    def entropy(self, index: int) -> int:
        """Number of candidates left for a cell."""
        return len(self.candidates(index))

    def get_cell(self, x: int, y: int) -> Optional[Tile]:
        """Tile at a position, or None if unassigned or out of bounds."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            return None
        tile = self.cells[y * self.width + x]
        return None if tile is None else self.palette[tile]

    def _next_cell(self) -> Optional[int]:
        """Lowest-entropy unassigned cell, smallest index on ties."""
        heap = self._heap
        while heap:
            entropy, index = heap[0]
            if self.cells[index] is None and entropy == len(self._candidates[index]):
                return index
            heapq.heappop(heap)
        return None

    def _assign(self, index: int, tile: int):
        self.cells[index] = tile
        self._order.append(index)

        allowed = self.palette.allowed_indices(tile)
        for n in self.neighbors(index):
            if self.cells[n] is not None:
                continue
            current = self._candidates[n]
            remaining = [c for c in current if c in allowed]
            if len(remaining) != len(current):
                self._candidates[n] = remaining
                heapq.heappush(self._heap, (len(remaining), n))

        self._emit(self.cell_assigned, index, self.palette[tile].key)
        self._emit(self.progress_updated, self.assigned_count, self.total_cells)

    def _emit(self, signal, *args):
        if self.isSignalConnected(QMetaMethod.fromSignal(signal)):
            signal.emit(*args)

    def _require(self, index: int) -> int:
        tile = self.cells[index]
        if tile is None:
            raise GridError(f"Cell {index} is still unassigned after generation")
        return tile
