"""
Gymnasium environment wrapper for Minesweeper.

Lets scripted players and agents drive a Game through the standard
reset/step interface.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .field import FieldConfig, Minefield
from .grid import Coordinate
from .render import render_text
from .session import Game, GameStatus


# ============================================================================
# Rewards
# ============================================================================

REWARD_SAFE = 1.0
REWARD_WIN = 10.0
REWARD_LOSS = -10.0
REWARD_FLAG = 0.0
REWARD_INVALID = -0.1


# ============================================================================
# Minesweeper Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minesweeper.

    Observation:
        2D int8 array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = opened cell with adjacent mine count
        - 9 = opened mine

    Actions:
        Discrete action space of size 2 * rows * cols.
        Action i < cells opens cell (i // cols, i % cols); action
        cells + i toggles the flag on the same cell.

    Rewards:
        - +1 for opening a safe cell
        - +10 for winning the game
        - -10 for hitting a mine
        - 0 for toggling a flag
        - -0.1 for an invalid action (opened cell, flagged open)
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[FieldConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            config: Field configuration (default: 10x10 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or FieldConfig()
        self.render_mode = render_mode
        self._cells = self.config.total_cells
        self.game = Game(field=Minefield(self.config, self.np_random))

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.rows, self.config.cols),
            dtype=np.int8,
        )

        # One open and one flag action per cell
        self.action_space = spaces.Discrete(2 * self._cells)

        self._steps = 0

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.game = Game(field=Minefield(self.config, self.np_random))
        self._steps = 0

        return self.game.field.to_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to open, or cells + index to flag.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        is_flag, coord = self._decode_action(int(action))
        self._steps += 1

        if is_flag:
            reward = self._flag(coord)
        else:
            reward = self._open(coord)

        observation = self.game.field.to_observation()
        terminated = not self.game.is_playing
        truncated = False

        return observation, reward, terminated, truncated, self._get_info()

    def _decode_action(self, action: int) -> Tuple[bool, Coordinate]:
        """Split an action into (is_flag, coordinate)."""
        is_flag = action >= self._cells
        index = action % self._cells
        row, col = divmod(index, self.config.cols)
        return is_flag, Coordinate(row, col)

    def _open(self, coord: Coordinate) -> float:
        """Open a cell and score the result."""
        field = self.game.field
        if not self.game.is_playing:
            return REWARD_INVALID
        if field.opened.get(coord) or field.flags.get(coord):
            return REWARD_INVALID

        self.game.click(coord)

        if self.game.is_won:
            return REWARD_WIN
        if self.game.is_lost:
            return REWARD_LOSS
        return REWARD_SAFE

    def _flag(self, coord: Coordinate) -> float:
        """Toggle a flag and score the result."""
        if not self.game.is_playing or self.game.field.opened.get(coord):
            return REWARD_INVALID
        self.game.toggle_flag(coord)
        return REWARD_FLAG

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "opened": self.game.field.opened_count,
            "total_safe": self._cells - self.config.num_mines,
            "flags_remaining": self.game.field.flags_remaining,
            "game_state": self.game.status.name,
        }

    def render(self) -> Optional[str]:
        """Render the current field state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        return f"{self.game.status_line()}\n{render_text(self.game.field)}"

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of valid actions.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.game.status != GameStatus.IN_PROGRESS:
            return mask
        field = self.game.field
        closed = ~field.opened.data
        mask[: self._cells] = closed & ~field.flags.data
        mask[self._cells :] = closed
        return mask
