"""
Board module for Minesweeper game.

Holds the board configuration and the grid of cells, with mine
placement and adjacent-count calculation.
"""
import logging
import random
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .cell import Cell

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


# ============================================================================
# Configuration
# ============================================================================

class InvalidConfiguration(ValueError):
    """Raised when board dimensions or mine count are not playable."""


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    Attributes:
        rows: Number of rows (board height).
        cols: Number of columns (board width).
        mine_count: Total mines to place.
    """

    rows: int = 12
    cols: int = 10
    mine_count: int = 15

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
        if self.mine_count < 0:
            raise InvalidConfiguration("Number of mines cannot be negative")
        max_mines = self.total_cells - 1
        if self.mine_count > max_mines:
            raise InvalidConfiguration(f"Too many mines (max {max_mines})")

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    @property
    def safe_cells(self) -> int:
        """Number of cells that must be revealed to win."""
        return self.total_cells - self.mine_count


# Reference board
DEFAULT = BoardConfig(12, 10, 15)


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Grid of cells for one game.

    A fresh board has no mines; they are placed once by place_mines()
    and never moved. The board is discarded wholesale on reset.
    """

    config: BoardConfig = field(default_factory=lambda: DEFAULT)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._grid = [
            [Cell() for _ in range(self.config.cols)]
            for _ in range(self.config.rows)
        ]

    # ========================================================================
    # Mine Placement (Low-level)
    # ========================================================================

    def place_mines(
        self, avoid: Position, rng: Optional[random.Random] = None
    ) -> None:
        """
        Place mines uniformly at random, keeping one cell mine-free.

        Args:
            avoid: (row, col) position that must stay safe.
            rng: Random source; the module-level generator if omitted.
        """
        rng = rng or random
        positions = [pos for pos in self.positions() if pos != avoid]
        rng.shuffle(positions)
        mine_positions = positions[:self.config.mine_count]
        for row, col in mine_positions:
            self._grid[row][col].is_mine = True

        if len(mine_positions) < self.config.mine_count:
            logger.warning(
                "Could only place %d/%d mines",
                len(mine_positions), self.config.mine_count,
            )
        logger.debug(
            "Placed %d mines avoiding %s", len(mine_positions), avoid
        )

    def calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all non-mine cells."""
        for row, col in self.positions():
            cell = self._grid[row][col]
            if not cell.is_mine:
                cell.neighboring_mines = self._count_adjacent_mines(row, col)

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self.get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities
    # ========================================================================

    def get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for in-bounds neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.rows and 0 <= col < self.config.cols

    # ========================================================================
    # Accessors
    # ========================================================================

    def positions(self) -> Iterator[Position]:
        """Iterate over every (row, col) in row-major order."""
        for row in range(self.config.rows):
            for col in range(self.config.cols):
                yield row, col

    def get_cell(self, row: int, col: int) -> Optional[Cell]:
        """Get cell at position, or None if invalid."""
        if not self.is_valid_position(row, col):
            return None
        return self._grid[row][col]

    def cell_at(self, position: Position) -> Cell:
        row, col = position
        return self._grid[row][col]

    @property
    def grid(self) -> List[List[Cell]]:
        return self._grid

    def mine_positions(self) -> List[Position]:
        """Positions of all mines (empty before placement)."""
        return [pos for pos in self.positions() if self.cell_at(pos).is_mine]
