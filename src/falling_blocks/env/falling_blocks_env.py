from __future__ import annotations

from enum import IntEnum
from typing import Any, Dict, Optional, Tuple

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from falling_blocks.game import Command, GameConfig, GameState, TetrominoType, init, snapshot, tick, update


class EnvAction(IntEnum):
    NONE = 0
    LEFT = 1
    RIGHT = 2
    ROTATE = 3
    BOOST_ON = 4
    BOOST_OFF = 5


ACTION_TO_COMMAND: Dict[EnvAction, Optional[Command]] = {
    EnvAction.NONE: None,
    EnvAction.LEFT: Command.MOVE_LEFT,
    EnvAction.RIGHT: Command.MOVE_RIGHT,
    EnvAction.ROTATE: Command.ROTATE,
    EnvAction.BOOST_ON: Command.BOOST_ON,
    EnvAction.BOOST_OFF: Command.BOOST_OFF,
}


class FallingBlocksEnv(gym.Env):
    """Agent-facing wrapper around the engine.

    Every step applies one action and then advances a simulated clock by
    ``frame_ms`` before ticking gravity. The reward is the score gained
    during the step.
    """

    metadata = {"render_modes": ["rgb_array"], "render_fps": 10}

    def __init__(self, config: Optional[GameConfig] = None, render_mode: Optional[str] = None,
                 frame_ms: float = 100.0, max_episode_steps: int = 10000) -> None:
        super().__init__()
        self.config = config or GameConfig()
        self.render_mode = render_mode
        self.frame_ms = float(frame_ms)
        self.max_episode_steps = int(max_episode_steps)

        h, w = self.config.height, self.config.width
        n_kinds = len(TetrominoType)
        # Landed cells are positive tags, the falling piece negative tags.
        self.observation_space = spaces.Box(low=-n_kinds, high=n_kinds, shape=(h, w), dtype=np.int8)
        self.action_space = spaces.Discrete(len(EnvAction))

        self.state: GameState = self._start(0)
        self._now = 0.0
        self._steps = 0

    def _start(self, seed: int) -> GameState:
        state = update(init(seed, self.config), Command.TOGGLE_PLAY, self.config)
        # First tick only schedules the first drop.
        return tick(state, 0.0, self.config)

    def _get_obs(self) -> np.ndarray:
        return snapshot(self.state).board().astype(np.int8)

    def _get_info(self) -> Dict[str, Any]:
        return {
            "score": self.state.score,
            "lines": self.state.lines,
            "steps": self._steps,
            "next_piece": int(self.state.next_block.kind),
        }

    def reset(self, *, seed: Optional[int] = None, options: Optional[dict] = None) -> Tuple[np.ndarray, Dict[str, Any]]:
        super().reset(seed=seed)
        engine_seed = int(self.np_random.integers(0, 2**32))
        self.state = self._start(engine_seed)
        self._now = 0.0
        self._steps = 0
        return self._get_obs(), self._get_info()

    def step(self, action: int):
        command = ACTION_TO_COMMAND[EnvAction(int(action))]
        score_before = self.state.score

        if command is not None:
            self.state = update(self.state, command, self.config)
        self._now += self.frame_ms
        self.state = tick(self.state, self._now, self.config)
        self._steps += 1

        reward = float(self.state.score - score_before)
        terminated = bool(self.state.game_over)
        truncated = self._steps >= self.max_episode_steps and not terminated
        return self._get_obs(), reward, terminated, truncated, self._get_info()

    def render(self) -> Optional[np.ndarray]:
        if self.render_mode == "rgb_array":
            board = self._get_obs()
            cell = 12
            h, w = board.shape
            img = np.zeros((h * cell, w * cell, 3), dtype=np.uint8)
            for y in range(h):
                for x in range(w):
                    if board[y, x] > 0:
                        color = (70, 200, 120)
                    elif board[y, x] < 0:
                        color = (230, 230, 90)
                    else:
                        color = (30, 30, 36)
                    img[y * cell : (y + 1) * cell, x * cell : (x + 1) * cell, :] = color
            return img
        return None

    def close(self) -> None:
        pass
