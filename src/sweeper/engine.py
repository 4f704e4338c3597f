"""
Game engine for Minesweeper.

Owns the game session (board, state, flag counter, first-move flag and
elapsed time) and implements reveal, flagging, win/loss transitions and
change notification. Presentation layers read immutable snapshots and
forward player intents as method calls.
"""
import functools
import logging
import random
import threading
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, List, Optional, Tuple

import numpy as np

from .board import DEFAULT, Board, BoardConfig, Position
from .cell import CellView
from .clock import Clock, NullClock

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


def _observation(grid) -> np.ndarray:
    """
    Encode a grid of cells as an int8 array.

    Values: -1 hidden, -2 flagged, 0-8 revealed count, 9 revealed mine.
    """
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    obs = np.zeros((rows, cols), dtype=np.int8)
    for row in range(rows):
        for col in range(cols):
            obs[row, col] = grid[row][col].to_observation()
    return obs


# ============================================================================
# Snapshot
# ============================================================================

@dataclass(frozen=True)
class GameSnapshot:
    """
    Read-only view of a game session at one point in time.

    Cells are frozen CellView copies taken when the snapshot was made.
    """

    config: BoardConfig
    cells: Tuple[Tuple[CellView, ...], ...]
    state: GameState
    flags_placed: int
    elapsed_time: int

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def cols(self) -> int:
        return self.config.cols

    @property
    def mine_count(self) -> int:
        return self.config.mine_count

    @property
    def flags_remaining(self) -> int:
        """Mines minus flags; negative when the player over-flags."""
        return self.config.mine_count - self.flags_placed

    def cell(self, row: int, col: int) -> CellView:
        return self.cells[row][col]

    def get_observation(self) -> np.ndarray:
        return _observation(self.cells)


Listener = Callable[[GameSnapshot], None]


# ============================================================================
# Engine
# ============================================================================

class MinesweeperEngine:
    """
    Single-player Minesweeper game engine.

    Invalid player input (out of bounds, game over, revealed or flagged
    targets) is silently ignored: the action methods return False and
    leave the session untouched. Every public call is serialized through
    one re-entrant lock so a clock may tick from another thread.
    """

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        clock: Optional[Clock] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """
        Initialize the engine and start a fresh game.

        Args:
            config: Board configuration (default: 12x10 with 15 mines).
            clock: Tick source signalled on game start and end.
            rng: Random source for mine placement.
        """
        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self.clock = clock or NullClock()
        self.rng = rng or random.Random()

        self._session = 0
        self._config = config or DEFAULT
        self._new_session(self._config)

    def _new_session(self, config: BoardConfig) -> None:
        # Ticks bound to an earlier session are ignored.
        self._session += 1
        self._config = config
        self._board = Board(config)
        self._state = GameState.PLAYING
        self._flags_placed = 0
        self._first_move_pending = True
        self._elapsed_time = 0
        self._safe_cells_revealed = 0

    # ========================================================================
    # Game Actions
    # ========================================================================

    def reset(
        self,
        rows: Optional[int] = None,
        cols: Optional[int] = None,
        mine_count: Optional[int] = None,
    ) -> None:
        """
        Start a new game, optionally with a different board size.

        Omitted arguments keep the current configuration's values.

        Raises:
            InvalidConfiguration: If the resulting configuration is not
                playable. The current game is left untouched.
        """
        with self._lock:
            config = BoardConfig(
                rows=self._config.rows if rows is None else rows,
                cols=self._config.cols if cols is None else cols,
                mine_count=(
                    self._config.mine_count
                    if mine_count is None else mine_count
                ),
            )
            self.clock.stop()
            self._new_session(config)
            logger.debug(
                "New game %dx%d with %d mines",
                config.rows, config.cols, config.mine_count,
            )
            self._notify()

    def reveal_cell(self, row: int, col: int) -> bool:
        """
        Reveal a cell at the given position.

        On the first move, places mines avoiding this cell and starts the
        clock. A zero-count cell flood-fills its region; a mine loses.

        Returns:
            True if the session changed, False if the move was ignored.
        """
        with self._lock:
            if self._state != GameState.PLAYING:
                return False
            if not self._board.is_valid_position(row, col):
                return False

            changed = False
            if self._first_move_pending:
                self._handle_first_move(row, col)
                changed = True

            cell = self._board.cell_at((row, col))
            if not cell.reveal():
                if changed:
                    self._notify()
                return changed

            if cell.is_mine:
                self._finish(GameState.LOST)
            else:
                self._safe_cells_revealed += 1
                if cell.neighboring_mines == 0:
                    self._flood_fill(row, col)
                self._check_win_condition()

            self._notify()
            return True

    def _handle_first_move(self, row: int, col: int) -> None:
        """Place mines, calculate counts and start the clock."""
        self._board.place_mines((row, col), self.rng)
        self._board.calculate_adjacent_mines()
        self._first_move_pending = False
        self.clock.bind(functools.partial(self._tick, self._session))
        self.clock.start()

    def _flood_fill(self, row: int, col: int) -> None:
        """Reveal the region around an empty cell with an explicit stack."""
        stack: List[Position] = [(row, col)]
        while stack:
            current_row, current_col = stack.pop()
            for position in self._board.get_neighbors(current_row, current_col):
                neighbor = self._board.cell_at(position)
                # Revealed doubles as visited.
                if not neighbor.reveal():
                    continue
                # Neighbors of an empty cell are never mines.
                self._safe_cells_revealed += 1
                if neighbor.neighboring_mines == 0:
                    stack.append(position)

    def _check_win_condition(self) -> None:
        """Win once every non-mine cell is revealed."""
        if self._safe_cells_revealed == self._config.safe_cells:
            self._finish(GameState.WON)

    def _finish(self, outcome: GameState) -> None:
        """Enter a terminal state; no-op if the game already ended."""
        if self._state != GameState.PLAYING:
            return
        self._state = outcome
        self.clock.stop()

        if outcome == GameState.LOST:
            self._reveal_all_mines()
            logger.info("Game lost after %ds", self._elapsed_time)
        else:
            self._flag_remaining_mines()
            logger.info("Game won in %ds", self._elapsed_time)

    def _reveal_all_mines(self) -> None:
        for position in self._board.mine_positions():
            self._board.cell_at(position).is_revealed = True

    def _flag_remaining_mines(self) -> None:
        for position in self._board.mine_positions():
            cell = self._board.cell_at(position)
            if not cell.is_flagged:
                cell.is_flagged = True
                self._flags_placed += 1

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a hidden cell.

        The flag count is not capped at the mine count.

        Returns:
            True if flag was toggled, False otherwise.
        """
        with self._lock:
            if self._state != GameState.PLAYING:
                return False
            if not self._board.is_valid_position(row, col):
                return False
            cell = self._board.cell_at((row, col))
            if not cell.toggle_flag():
                return False
            self._flags_placed += 1 if cell.is_flagged else -1
            self._notify()
            return True

    def tick(self) -> bool:
        """
        Advance elapsed time by one unit for the current game.

        A tick that arrives when no game is running (over, or waiting for
        its first move) stops the clock and is ignored.

        Returns:
            True if elapsed time advanced.
        """
        with self._lock:
            return self._tick(self._session)

    def _tick(self, session: int) -> bool:
        """Clock callback; ticks from an earlier session are dropped."""
        with self._lock:
            if session != self._session:
                return False
            if self._state != GameState.PLAYING or self._first_move_pending:
                self.clock.stop()
                return False
            self._elapsed_time += 1
            self._notify()
            return True

    # ========================================================================
    # Change Notification
    # ========================================================================

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener called with a snapshot after every change.

        Listeners run while the engine lock is held and must not block.

        Returns:
            Function that removes the listener again.
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    # ========================================================================
    # State Accessors
    # ========================================================================

    def snapshot(self) -> GameSnapshot:
        """Get an immutable copy of the current session."""
        with self._lock:
            cells = tuple(
                tuple(cell.view() for cell in row)
                for row in self._board.grid
            )
            return GameSnapshot(
                config=self._config,
                cells=cells,
                state=self._state,
                flags_placed=self._flags_placed,
                elapsed_time=self._elapsed_time,
            )

    @property
    def config(self) -> BoardConfig:
        return self._config

    @property
    def state(self) -> GameState:
        """Get current game state."""
        return self._state

    @property
    def flags_placed(self) -> int:
        return self._flags_placed

    @property
    def elapsed_time(self) -> int:
        return self._elapsed_time

    @property
    def first_move_pending(self) -> bool:
        """Whether mines are still waiting to be placed."""
        return self._first_move_pending

    @property
    def is_playing(self) -> bool:
        return self._state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        return self._state == GameState.WON

    @property
    def is_lost(self) -> bool:
        return self._state == GameState.LOST

    def get_cell(self, row: int, col: int) -> Optional[CellView]:
        """Get a frozen view of the cell at position, or None if invalid."""
        with self._lock:
            cell = self._board.get_cell(row, col)
            return None if cell is None else cell.view()

    def get_observation(self) -> np.ndarray:
        """Get board state as an int8 numpy array."""
        with self._lock:
            return _observation(self._board.grid)

    def get_valid_actions(self) -> List[Position]:
        """
        Get list of cells a reveal would act on.

        Returns:
            (row, col) positions that are neither revealed nor flagged.
        """
        with self._lock:
            return [
                position for position in self._board.positions()
                if self._board.cell_at(position).is_hidden
            ]
