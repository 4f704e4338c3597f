"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sweeper import (
    BoardConfig,
    Cell,
    Clock,
    ManualClock,
    MinesweeperEngine,
)


class FixedLayout(random.Random):
    """Random source whose shuffle moves the given positions to the front."""

    def __init__(self, mines: Iterable[Tuple[int, int]]) -> None:
        super().__init__(0)
        self.mines = set(mines)

    def shuffle(self, x: List) -> None:
        x.sort(key=lambda position: position not in self.mines)


# ============================================================================
# Engine Fixtures
# ============================================================================

@pytest.fixture
def make_engine() -> Callable[..., MinesweeperEngine]:
    """
    Factory for engines with a known mine layout.

    The layout takes effect on the first reveal, which must not target
    one of the given mines.
    """
    def factory(
        rows: int,
        cols: int,
        mines: Iterable[Tuple[int, int]],
        clock: Optional[Clock] = None,
    ) -> MinesweeperEngine:
        mines = list(mines)
        config = BoardConfig(rows, cols, len(mines))
        return MinesweeperEngine(config, clock=clock, rng=FixedLayout(mines))

    return factory


@pytest.fixture
def default_engine() -> MinesweeperEngine:
    """Create a default 12x10 engine with 15 mines."""
    return MinesweeperEngine(rng=random.Random(1234))


@pytest.fixture
def small_engine() -> MinesweeperEngine:
    """Create a small 3x3 engine with 1 mine."""
    return MinesweeperEngine(BoardConfig(3, 3, 1), rng=random.Random(7))


@pytest.fixture
def empty_engine() -> MinesweeperEngine:
    """Create an engine with no mines for cascade testing."""
    return MinesweeperEngine(BoardConfig(5, 5, 0))


@pytest.fixture
def manual_clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def row_engine(make_engine, manual_clock) -> MinesweeperEngine:
    """
    1x6 engine with a single mine at (0, 2).

    Counts: 0 1 * 1 0 0
    """
    return make_engine(1, 6, [(0, 2)], clock=manual_clock)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def valid_config() -> BoardConfig:
    """Create a valid board configuration."""
    return BoardConfig(12, 10, 15)
