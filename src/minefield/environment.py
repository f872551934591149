"""
Gymnasium environment wrapper for Minefield.

Provides a standard RL interface over the game state machine.
"""
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import GameConfig, GameState


# ============================================================================
# Minefield Environment
# ============================================================================

class MinesweeperEnv(gym.Env):
    """
    Gymnasium environment for Minefield.

    Observation:
        2D array where:
        - -1 = hidden cell
        - -2 = flagged cell
        - 0-8 = revealed cell with adjacent mine count
        - 9 = revealed mine

    Actions:
        Discrete action space of size 2 * width * height.
        Action i < width * height is a primary action (reveal, then chord)
        on cell (i % width, i // width). The upper half holds the matching
        secondary actions (flag, then chord-flag).

    Rewards:
        - +1 per cell revealed by the action
        - +10 for winning the game
        - -10 for hitting a mine
        - -0.1 for an action that changed nothing
    """

    metadata = {"render_modes": []}

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        max_steps: Optional[int] = None,
    ) -> None:
        """
        Initialize the environment.

        Args:
            config: Board configuration (default: 10x10 with 15 mines).
            max_steps: Truncate episodes after this many steps.
        """
        super().__init__()

        self.config = config or GameConfig()
        self.max_steps = max_steps
        self.game = GameState(self.config, rng=self.np_random)

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )

        # One primary and one secondary action per cell
        self.action_space = spaces.Discrete(2 * self.config.cell_count)

        self._steps = 0
        self._total_safe_cells = self.config.cell_count - self.config.mine_count

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Start a new game.

        Args:
            seed: Random seed for reproducible mine layouts.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        self.game = GameState(self.config, rng=self.np_random)
        self._steps = 0

        return self.game.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Flat action index, see class docstring.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        x, y, secondary = self._decode_action(action)
        self._steps += 1

        reward = self._calculate_reward(x, y, secondary)

        observation = self.game.get_observation()
        terminated = not self.game.is_playing
        truncated = (
            not terminated
            and self.max_steps is not None
            and self._steps >= self.max_steps
        )

        return observation, reward, terminated, truncated, self._get_info()

    def _decode_action(self, action: int) -> Tuple[int, int, bool]:
        """Convert flat action index to (x, y, is_secondary)."""
        action = int(action)
        secondary = action >= self.config.cell_count
        cell_index = action % self.config.cell_count
        return (
            cell_index % self.config.width,
            cell_index // self.config.width,
            secondary,
        )

    def _calculate_reward(self, x: int, y: int, secondary: bool) -> float:
        """Apply the action and score its outcome."""
        revealed_before = self.game.revealed_count

        if secondary:
            changed = self.game.secondary_action(x, y)
        else:
            changed = self.game.primary_action(x, y)

        if not changed:
            return -0.1
        if self.game.is_won:
            return 10.0
        if self.game.is_over:
            return -10.0
        return float(self.game.revealed_count - revealed_before)

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.game.revealed_count,
            "total_safe": self._total_safe_cells,
            "game_state": self.game.status.name,
            "flags": self.game.flags_placed,
        }

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that may change state.

        Primary actions apply to hidden cells, secondary actions to hidden
        or flagged ones, and both to revealed numbers, which can chord.

        Returns:
            Boolean array where True = valid action. All False once the
            game has ended.
        """
        if not self.game.is_playing:
            return np.zeros(self.action_space.n, dtype=bool)
        obs = self.game.get_observation().ravel()
        numbered = (obs > 0) & (obs < 9)
        return np.concatenate([(obs == -1) | numbered, (obs < 0) | numbered])
