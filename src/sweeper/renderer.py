"""
Text renderer for Minesweeper snapshots.

Draws an info bar and the grid as plain text. The renderer only reads
snapshots; player input goes to the engine directly.
"""
from typing import List, Union

from .cell import Cell, CellState, CellView
from .engine import GameSnapshot, GameState


# ============================================================================
# Constants
# ============================================================================

FACES = {
    GameState.PLAYING: ":)",
    GameState.WON: "B)",
    GameState.LOST: "X(",
}

BANNERS = {
    GameState.WON: "Congratulations!",
    GameState.LOST: "Game Over!",
}


# ============================================================================
# Text Renderer
# ============================================================================

class TextRenderer:
    """
    Render snapshots as ASCII text.

    Symbols:
        . hidden cell
        F flagged cell
        * revealed mine
        (blank) revealed cell with no adjacent mines
        1-8 revealed cell with adjacent mine count
    """

    def __init__(self, show_coordinates: bool = False) -> None:
        """
        Initialize the renderer.

        Args:
            show_coordinates: Prefix rows and columns with their indices.
        """
        self.show_coordinates = show_coordinates

    def render(self, snapshot: GameSnapshot) -> str:
        """Render info bar, grid and, once the game is over, a banner."""
        lines = [self.render_info_bar(snapshot), ""]
        lines.extend(self.render_grid(snapshot))
        banner = BANNERS.get(snapshot.state)
        if banner:
            lines.extend(["", banner])
        return "\n".join(lines)

    def render_info_bar(self, snapshot: GameSnapshot) -> str:
        """Flags remaining, status face and elapsed time on one line."""
        return (
            f"F {snapshot.flags_remaining:<4d} "
            f"{FACES[snapshot.state]} "
            f"{snapshot.elapsed_time:>4d} s"
        )

    def render_grid(self, snapshot: GameSnapshot) -> List[str]:
        width = 1
        if self.show_coordinates:
            width = len(str(max(snapshot.rows, snapshot.cols) - 1))
        lines = []

        if self.show_coordinates:
            header = " ".join(
                f"{col:>{width}}" for col in range(snapshot.cols)
            )
            lines.append(" " * (width + 1) + header)

        for row in range(snapshot.rows):
            symbols = [
                f"{self.cell_symbol(cell):>{width}}"
                for cell in snapshot.cells[row]
            ]
            line = " ".join(symbols)
            if self.show_coordinates:
                line = f"{row:>{width}} " + line
            lines.append(line.rstrip())
        return lines

    @staticmethod
    def cell_symbol(cell: Union[Cell, CellView]) -> str:
        state = cell.state
        if state == CellState.HIDDEN:
            return "."
        if state == CellState.FLAGGED:
            return "F"
        if cell.is_mine:
            return "*"
        if cell.neighboring_mines == 0:
            return " "
        return str(cell.neighboring_mines)
