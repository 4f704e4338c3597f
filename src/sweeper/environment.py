"""
Gymnasium environment wrapper for Minesweeper.

Exposes the engine through the standard RL interface so automated
players can drive it.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import DEFAULT, BoardConfig
from .engine import MinesweeperEngine
from .renderer import TextRenderer


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine (after a loss)

    Actions:
        Discrete action space of size rows * cols.
        Action i reveals the cell at (i // cols, i % cols).

    Rewards:
        - +1 for revealing a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for invalid action (already revealed/flagged)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Board configuration (default: 12x10 with 15 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or DEFAULT
        self.engine = MinesweeperEngine(self.config)
        self.render_mode = render_mode
        self._renderer = TextRenderer()

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(self.config.total_cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment for a new episode.

        Args:
            seed: Random seed; the same seed and first move give the
                same mine layout.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self.engine.rng.seed(seed)
        self.engine.reset()
        self._steps = 0

        return self.engine.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to reveal (row * cols + col).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        row, col = self._action_to_position(action)
        self._steps += 1

        reward = self._calculate_reward(row, col)
        observation = self.engine.get_observation()
        terminated = not self.engine.is_playing

        return observation, reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Tuple[int, int]:
        """Convert flat action index to (row, col) position."""
        return int(action) // self.config.cols, int(action) % self.config.cols

    def _calculate_reward(self, row: int, col: int) -> float:
        """Reveal a cell and score the outcome."""
        if not self.engine.reveal_cell(row, col):
            return -0.1

        if self.engine.is_won:
            return 10.0
        if self.engine.is_lost:
            return -10.0
        # The first move may land on a flagged cell: mines get placed
        # but nothing is revealed.
        cell = self.engine.get_cell(row, col)
        if cell is None or not cell.is_revealed:
            return -0.1
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        snapshot = self.engine.snapshot()
        revealed = sum(
            1 for row in snapshot.cells for cell in row
            if cell.is_revealed and not cell.is_mine
        )
        return {
            "steps": self._steps,
            "revealed": revealed,
            "total_safe": self.config.safe_cells,
            "flags_placed": snapshot.flags_placed,
            "game_state": snapshot.state.name,
            "valid_actions": len(self.engine.get_valid_actions()),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self._renderer.render(self.engine.snapshot())
        if self.render_mode == "human":
            print(self._renderer.render(self.engine.snapshot()))
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        for row, col in self.engine.get_valid_actions():
            mask[row * self.config.cols + col] = True
        return mask

