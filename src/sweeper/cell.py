"""
Cell module for Minesweeper game.

Represents individual cells on the game board with their flags
(mine/revealed/flagged) and their adjacent mine count, plus the frozen
view handed out in snapshots.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class CellState(Enum):
    """Possible visual states of a cell."""

    HIDDEN = auto()
    REVEALED = auto()
    FLAGGED = auto()


# ============================================================================
# Display Helpers
# ============================================================================

class _CellDisplay:
    """Display state shared by mutable cells and frozen views."""

    is_mine: bool
    is_revealed: bool
    is_flagged: bool
    neighboring_mines: int

    @property
    def state(self) -> CellState:
        """Display state; a revealed cell shows as revealed even if flagged."""
        if self.is_revealed:
            return CellState.REVEALED
        if self.is_flagged:
            return CellState.FLAGGED
        return CellState.HIDDEN

    @property
    def is_hidden(self) -> bool:
        """Check if cell is covered and unflagged."""
        return self.state == CellState.HIDDEN

    def to_observation(self) -> int:
        """
        Convert cell to its numeric observation value.

        Returns:
            -1: Hidden cell
            -2: Flagged cell
            0-8: Revealed cell with adjacent mine count
            9: Revealed mine (game over state)
        """
        state = self.state
        if state == CellState.HIDDEN:
            return -1
        if state == CellState.FLAGGED:
            return -2
        if self.is_mine:
            return 9
        return self.neighboring_mines


# ============================================================================
# Cell Data Classes
# ============================================================================

@dataclass(frozen=True)
class CellView(_CellDisplay):
    """Read-only copy of a cell at one point in time."""

    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    neighboring_mines: int = 0


@dataclass
class Cell(_CellDisplay):
    """
    Represents a single cell in the Minesweeper grid.

    Revealed and flagged are independent: a flagged mine that is revealed
    when the game is lost keeps its flag so the display stays consistent
    until the next reset.

    Attributes:
        is_mine: Whether this cell contains a mine.
        is_revealed: Whether the cell has been uncovered.
        is_flagged: Whether the player (or a win) put a flag on it.
        neighboring_mines: Count of mines in neighboring cells (0-8).
    """

    is_mine: bool = False
    is_revealed: bool = False
    is_flagged: bool = False
    neighboring_mines: int = 0

    def reveal(self) -> bool:
        """
        Reveal this cell.

        Returns:
            True if cell was revealed, False if already revealed or flagged.
        """
        if self.is_revealed or self.is_flagged:
            return False
        self.is_revealed = True
        return True

    def toggle_flag(self) -> bool:
        """
        Toggle flag on this cell.

        Returns:
            True if flag was toggled, False if cell is revealed.
        """
        if self.is_revealed:
            return False
        self.is_flagged = not self.is_flagged
        return True

    def view(self) -> CellView:
        """Freeze the current values into a CellView."""
        return CellView(
            is_mine=self.is_mine,
            is_revealed=self.is_revealed,
            is_flagged=self.is_flagged,
            neighboring_mines=self.neighboring_mines,
        )
