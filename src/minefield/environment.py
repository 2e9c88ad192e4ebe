"""
Gymnasium environment wrapper for the minefield engine.

Provides a standard RL interface over a single Minefield.
"""
import random
from typing import Any, Dict, Optional, Tuple, SupportsFloat

import gymnasium as gym
import numpy as np
from gymnasium import spaces

from .field import FieldConfig, Minefield
from .spot import FlagToggleResult, SpotState, StepResult


# ============================================================================
# Constants
# ============================================================================

ACTION_STEP = 0
ACTION_FLAG = 1
ACTION_AUTO_STEP = 2
NUM_ACTION_KINDS = 3

REWARD_WIN = 10.0
REWARD_LOSS = -10.0
REWARD_REVEAL = 1.0
REWARD_FLAG = 0.0
REWARD_INVALID = -0.1


# ============================================================================
# Minefield Environment
# ============================================================================

class MinefieldEnv(gym.Env):
    """
    Gymnasium environment for the minefield.

    Observation:
        2D int8 array of shape (height, width) where:
        - -1 = hidden spot
        - -2 = flagged spot
        - 0-8 = revealed spot with neighboring mine count
        - 9 = exploded mine

    Actions:
        Discrete action space of size 3 * width * height.
        ``kind, index = divmod(action, width * height)`` and the spot is
        ``(index % width, index // width)``. Kind 0 steps, kind 1 toggles
        a flag, kind 2 auto-steps around a revealed spot.

    Rewards:
        - +1 for a step or auto-step that revealed spots
        - 0 for toggling a flag
        - +10 when the field is cleared
        - -10 for stepping on a mine
        - -0.1 for an action that changed nothing
    """

    metadata = {"render_modes": ["human", "ansi"], "render_fps": 4}

    def __init__(
        self,
        config: Optional[FieldConfig] = None,
        render_mode: Optional[str] = None,
    ) -> None:
        """
        Initialize the minefield environment.

        Args:
            config: Field configuration (default: 9x9 with 10 mines).
            render_mode: How to render the environment.
        """
        super().__init__()

        self.config = config or FieldConfig()
        self.render_mode = render_mode
        self.field = Minefield(self.config.width, self.config.height)

        width, height = self.field.width, self.field.height
        self._num_spots = width * height

        self.observation_space = spaces.Box(
            low=-2,
            high=9,
            shape=(height, width),
            dtype=np.int8,
        )
        self.action_space = spaces.Discrete(NUM_ACTION_KINDS * self._num_spots)

        self._steps = 0
        self._exploded = False
        self._last_result: Optional[str] = None

    def reset(
        self,
        *,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[np.ndarray, Dict[str, Any]]:
        """
        Reset the environment with a freshly mined field.

        Args:
            seed: Random seed for reproducibility.
            options: Additional options (unused).

        Returns:
            Tuple of (observation, info dict).
        """
        super().reset(seed=seed)
        rng = random.Random(int(self.np_random.integers(2**32)))
        self.field = Minefield.from_config(self.config, rng)
        self._steps = 0
        self._exploded = False
        self._last_result = None

        return self.field.get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[np.ndarray, SupportsFloat, bool, bool, Dict[str, Any]]:
        """
        Execute one action in the environment.

        Args:
            action: Flat action index (see class docstring).

        Returns:
            Tuple of (observation, reward, terminated, truncated, info).
        """
        kind, x, y = self.decode_action(action)
        self._steps += 1

        reward = self._apply(kind, x, y)

        terminated = self._exploded or self.field.is_cleared()
        return (
            self.field.get_observation(),
            reward,
            terminated,
            False,
            self._get_info(),
        )

    def decode_action(self, action: int) -> Tuple[int, int, int]:
        """Convert flat action index to (kind, x, y)."""
        kind, index = divmod(int(action), self._num_spots)
        y, x = divmod(index, self.field.width)
        return kind, x, y

    def encode_action(self, kind: int, x: int, y: int) -> int:
        """Convert (kind, x, y) to flat action index."""
        return kind * self._num_spots + y * self.field.width + x

    def _apply(self, kind: int, x: int, y: int) -> float:
        """Run the field command for an action and score it."""
        if kind == ACTION_FLAG:
            flag_result = self.field.toggle_flag(x, y)
            self._last_result = flag_result.name
            if flag_result == FlagToggleResult.NONE:
                return REWARD_INVALID
            return REWARD_WIN if self.field.is_cleared() else REWARD_FLAG

        revealed_before = self._count_revealed()
        if kind == ACTION_STEP:
            result = self.field.step(x, y)
        elif kind == ACTION_AUTO_STEP:
            result = self.field.auto_step(x, y)
        else:
            raise ValueError(f"Unknown action kind: {kind}")
        self._last_result = result.name

        if result == StepResult.BOOM:
            self._exploded = True
            return REWARD_LOSS
        if result == StepResult.INVALID:
            return REWARD_INVALID
        if self.field.is_cleared():
            return REWARD_WIN
        if self._count_revealed() == revealed_before:
            return REWARD_INVALID
        return REWARD_REVEAL

    def _count_revealed(self) -> int:
        return sum(
            1 for _, spot in self.field.spots()
            if spot.state == SpotState.REVEALED_EMPTY
        )

    def _get_info(self) -> Dict[str, Any]:
        """Get info dictionary for current state."""
        return {
            "steps": self._steps,
            "revealed": self._count_revealed(),
            "flags": self.field.flag_count(),
            "mines": self.field.mines,
            "last_result": self._last_result,
            "cleared": self.field.is_cleared(),
            "exploded": self._exploded,
        }

    def render(self) -> Optional[str]:
        """Render the current field state."""
        if self.render_mode == "ansi":
            return self._render_ansi()
        if self.render_mode == "human":
            print(self._render_ansi())
        return None

    def _render_ansi(self) -> str:
        """Render field as ASCII string."""
        symbols = {-1: ".", -2: "F", 9: "*", 0: " "}
        lines = []
        for row in self.field.get_observation():
            lines.append(" ".join(symbols.get(int(v), str(v)) for v in row))
        return "\n".join(lines)

    def get_action_mask(self) -> np.ndarray:
        """
        Get mask of actions that can change the field.

        Returns:
            Boolean array where True = valid action.
        """
        mask = np.zeros(self.action_space.n, dtype=bool)
        if self._exploded:
            return mask

        for (x, y), spot in self.field.spots():
            if spot.is_hidden:
                mask[self.encode_action(ACTION_STEP, x, y)] = True
            if spot.is_hidden or spot.is_flagged:
                mask[self.encode_action(ACTION_FLAG, x, y)] = True
            if (
                spot.state == SpotState.REVEALED_EMPTY
                and self._can_auto_step(x, y, spot.neighboring_mines)
            ):
                mask[self.encode_action(ACTION_AUTO_STEP, x, y)] = True
        return mask

    def _can_auto_step(self, x: int, y: int, neighboring_mines: int) -> bool:
        """Check if a chord at (x, y) would fire and reveal something."""
        flags = 0
        hidden = 0
        for nx, ny in self.field.neighbors(x, y):
            neighbor = self.field.spot(nx, ny)
            if neighbor.is_flagged:
                flags += 1
            elif neighbor.is_hidden:
                hidden += 1
        return hidden > 0 and flags == neighboring_mines


# ============================================================================
# Vectorized Environment Factory
# ============================================================================

def make_vec_env(
    n_envs: int = 4,
    config: Optional[FieldConfig] = None,
) -> gym.vector.VectorEnv:
    """
    Create vectorized environment for batched rollouts.

    Args:
        n_envs: Number of environments.
        config: Field configuration.

    Returns:
        Vectorized environment.
    """
    def make_env() -> MinefieldEnv:
        return MinefieldEnv(config=config)

    return gym.vector.SyncVectorEnv([make_env for _ in range(n_envs)])
