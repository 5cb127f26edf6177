"""
Gymnasium environment wrapper for the minefield core.

Exposes the reveal intent through a standard RL interface.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import BoardState, new_game_from_config
from .config import BoardConfig
from .coordinate import Coordinate
from .tile import OBS_COVERED, OBS_MARKED, OBS_MINE


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment over a BoardState.

    Observation:
        2D array where:
        - -1 = covered cell
        - -2 = marked cell
        - 0-8 = uncovered cell with adjacent mine count
        - 9 = uncovered mine

    Actions:
        Discrete action space of size width * height.
        Action i reveals the cell at (i // width, i % width); revealing
        an uncovered cell attempts a chord.

    Rewards:
        - +1 for a reveal that uncovers safe cells
        - +10 for completing the board
        - -10 for hitting a mine
        - -0.1 for a rejected reveal
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[BoardConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or BoardConfig()
        self.render_mode = render_mode
        self.board: Optional[BoardState] = None

        self.observation_space = spaces.Box(
            low=OBS_MARKED,
            high=OBS_MINE,
            shape=(self.config.height, self.config.width),
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
        Start a new round.

        Args:
            seed: Random seed for reproducible layouts.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        rng = random.Random(int(self.np_random.integers(2**32)))
        self.board = new_game_from_config(self.config, rng)
        self._steps = 0
        return self.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Reveal the cell selected by action.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        if self.board is None:
            raise RuntimeError("Call reset() before step()")
        self._steps += 1

        outcome = self.board.reveal(self._action_to_position(action))
        if outcome.is_detonated:
            reward = -10.0
        elif outcome.completed:
            reward = 10.0
        elif outcome.is_uncovered:
            reward = 1.0
        else:
            reward = -0.1

        terminated = outcome.is_detonated or outcome.completed
        return self.board.get_observation(), reward, terminated, False, self._get_info()

    def _action_to_position(self, action: int) -> Coordinate:
        """Convert flat action index to a Coordinate."""
        return Coordinate(int(action) // self.config.width, int(action) % self.config.width)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "steps": self._steps,
            "covered": self.board.covered_count,
            "marked": self.board.marked_count,
            "total_safe": self.config.safe_cells,
            "completed": self.board.is_completed(),
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.board is None:
            return None
        if self.render_mode == "ansi":
            return self.board.render()
        if self.render_mode == "human":
            print(self.board.render())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of revealable cells.

        Returns:
            Boolean array where True = covered and unmarked.
        """
        return (self.board.get_observation() == OBS_COVERED).flatten()
