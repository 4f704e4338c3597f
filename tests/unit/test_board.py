"""
Unit tests for BoardConfig and Board.

Tests configuration validation, mine placement and adjacent counts.
"""
import random

import pytest
from sweeper import (
    Board,
    BoardConfig,
    InvalidConfiguration,
    DEFAULT,
)
from sweeper import board as board_module


# ============================================================================
# Board Configuration Tests
# ============================================================================

class TestBoardConfig:
    """Test board configuration validation."""

    def test_valid_config_creation(self, valid_config: BoardConfig) -> None:
        assert valid_config.rows == 12
        assert valid_config.cols == 10
        assert valid_config.mine_count == 15

    def test_default_matches_reference_board(self) -> None:
        """Default board is 12 rows by 10 columns with 15 mines."""
        assert DEFAULT == BoardConfig(12, 10, 15)
        assert DEFAULT.safe_cells == 105

    def test_zero_rows_raises_error(self) -> None:
        with pytest.raises(InvalidConfiguration, match="dimensions must be positive"):
            BoardConfig(0, 9, 10)

    def test_zero_cols_raises_error(self) -> None:
        with pytest.raises(InvalidConfiguration, match="dimensions must be positive"):
            BoardConfig(9, 0, 10)

    def test_negative_mines_raises_error(self) -> None:
        with pytest.raises(InvalidConfiguration, match="cannot be negative"):
            BoardConfig(9, 9, -1)

    def test_mines_filling_board_raises_error(self) -> None:
        """mine_count must be strictly less than rows * cols."""
        with pytest.raises(InvalidConfiguration, match="Too many mines"):
            BoardConfig(5, 5, 25)

    def test_max_mines_is_valid(self) -> None:
        config = BoardConfig(3, 3, 8)
        assert config.safe_cells == 1

    def test_invalid_configuration_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            BoardConfig(2, 2, 4)

    def test_only_reference_board_is_predefined(self) -> None:
        """Board sizes come from rows/cols/mine_count, not named levels."""
        for name in ("BEGINNER", "INTERMEDIATE", "EXPERT", "PRESETS"):
            assert not hasattr(board_module, name)


# ============================================================================
# Mine Placement Tests
# ============================================================================

class TestMinePlacement:
    """Test random mine placement."""

    def test_new_board_has_no_mines(self) -> None:
        assert Board(DEFAULT).mine_positions() == []

    @pytest.mark.parametrize(
        "rows,cols,mines",
        [(12, 10, 15), (3, 3, 8), (1, 2, 1), (5, 5, 0), (16, 30, 99)],
    )
    def test_places_exact_mine_count(
        self, rows: int, cols: int, mines: int
    ) -> None:
        board = Board(BoardConfig(rows, cols, mines))
        board.place_mines((0, 0), random.Random(3))
        assert len(board.mine_positions()) == mines

    def test_avoided_cell_is_never_a_mine(self) -> None:
        """The avoided cell stays safe even on a nearly full board."""
        for seed in range(50):
            board = Board(BoardConfig(3, 3, 8))
            board.place_mines((1, 1), random.Random(seed))
            assert board.get_cell(1, 1).is_mine is False

    def test_same_seed_gives_same_layout(self) -> None:
        first = Board(DEFAULT)
        second = Board(DEFAULT)
        first.place_mines((4, 4), random.Random(99))
        second.place_mines((4, 4), random.Random(99))
        assert first.mine_positions() == second.mine_positions()


# ============================================================================
# Neighbor Tests
# ============================================================================

class TestNeighbors:
    """Test neighbor enumeration and adjacent counts."""

    @pytest.mark.parametrize(
        "position,expected",
        [((0, 0), 3), ((0, 4), 5), ((4, 4), 8), ((11, 9), 3)],
    )
    def test_neighbor_count_by_position(self, position, expected: int) -> None:
        board = Board(DEFAULT)
        assert len(board.get_neighbors(*position)) == expected

    def test_neighbors_exclude_center(self) -> None:
        board = Board(DEFAULT)
        assert (4, 4) not in board.get_neighbors(4, 4)

    def test_invalid_position(self) -> None:
        board = Board(DEFAULT)
        assert board.is_valid_position(-1, 0) is False
        assert board.is_valid_position(0, 10) is False
        assert board.get_cell(12, 0) is None

    @pytest.mark.parametrize("seed", range(10))
    def test_adjacent_counts_match_brute_force(self, seed: int) -> None:
        """Every non-mine cell counts exactly its in-bounds mine neighbors."""
        board = Board(BoardConfig(8, 7, 20))
        board.place_mines((0, 0), random.Random(seed))
        board.calculate_adjacent_mines()

        mines = set(board.mine_positions())
        for row, col in board.positions():
            cell = board.get_cell(row, col)
            if cell.is_mine:
                continue
            expected = sum(
                (row + dr, col + dc) in mines
                for dr in (-1, 0, 1)
                for dc in (-1, 0, 1)
                if (dr, dc) != (0, 0)
            )
            assert cell.neighboring_mines == expected
