"""
Gymnasium environment wrapper for Minesweeper.

Drives the pure session transitions so agents and scripted players see
exactly the rules a human gets, minus the clock.
"""
import random
from typing import Any, Dict, Optional, SupportsFloat, Tuple

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .board import Level
from .session import GamePhase, Session, click, new_session, toggle_flag


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
        - 0-8 = clicked cell with adjacent bomb count
        - 9 = clicked bomb

    Actions:
        Discrete action space of size 2 * width * height.
        Action i < width * height clicks cell (i // width, i % width);
        the upper half toggles the flag on the matching cell.

    Rewards:
        - +1 for a click that reveals cells
        - +10 for winning the game
        - -10 for clicking a bomb
        - 0 for a flag toggle
        - -0.1 for an action that changes nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        level: Level = Level.EASY,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the Minesweeper environment.

        Args:
            level: Difficulty level (default: easy).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.level = level
        self.config = level.config
        self.render_mode = render_mode
        self._rng = random.Random()
        self.session: Session = new_session(level, self._rng)

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(self.config.height, self.config.width),
            dtype=np.int8,
        )

        self._cell_count = self.config.height * self.config.width
        self.action_space = spaces.Discrete(2 * self._cell_count)

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
            seed: Seed for bomb placement.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        if seed is not None:
            self._rng.seed(seed)
        self.session = new_session(self.level, self._rng)
        self._steps = 0

        return self.session.board.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Cell index to click, offset by width * height to flag.

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        flag, row, col = self._decode_action(action)
        self._steps += 1

        before = self.session
        if flag:
            self.session = toggle_flag(before, row, col)
        else:
            self.session = click(before, row, col)
        reward = self._calculate_reward(before, self.session, flag)

        observation = self.session.board.get_observation()
        terminated = self.session.phase.is_terminal
        return observation, reward, terminated, False, self._get_info()

    def _decode_action(self, action: int) -> Tuple[bool, int, int]:
        """
        Convert flat action index to (is_flag, row, col).

        Raises:
            ValueError: If the action lies outside the action space.
        """
        if not 0 <= action < self.action_space.n:
            raise ValueError(
                f"Action {action} outside [0, {self.action_space.n})"
            )
        flag = action >= self._cell_count
        row, col = divmod(int(action) % self._cell_count, self.config.width)
        return flag, row, col

    def _calculate_reward(
        self, before: Session, after: Session, flag: bool
    ) -> float:
        """Reward for the transition from one session to the next."""
        if after is before:
            return -0.1
        if after.phase is GamePhase.WON:
            return 10.0
        if after.phase is GamePhase.LOST:
            return -10.0
        if flag:
            return 0.0
        return 1.0

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self.session.board.clicked_count(),
            "bombs_remaining": self.session.bombs_remaining,
            "game_state": self.session.phase.name,
        }

    def render(self) -> Optional[str]:
        """Render the current board state."""
        if self.render_mode == "ansi":
            return self.session.board.render()
        if self.render_mode == "human":
            print(self.session.board.render())
        return None

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that would change the session.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self.session.phase.is_terminal:
            return mask
        for cell in self.session.board.cells():
            index = cell.row * self.config.width + cell.col
            if cell.is_hidden:
                mask[index] = True
            if not cell.is_clicked:
                mask[self._cell_count + index] = True
        return mask
