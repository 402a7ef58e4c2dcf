"""
Tetris Gymnasium Environment.

This module provides a Gymnasium-compatible environment for training
or evaluating agents on the falling-block game.
"""
from typing import Dict, Tuple, Any, Optional, List
import numpy as np
import gymnasium as gym
from gymnasium import spaces

from tetris.config import GameConfig
from tetris.renderer import Renderer
from tetris.session import Command, DropResult, GameSession
from tetris.shapes import NUM_PIECES, get_piece_index


class TetrisEnv(gym.Env):
    """
    Gymnasium environment for Tetris.

    Every step applies the chosen action and then one gravity drop, so
    the clock is measured in drops rather than milliseconds.

    Observation Space:
        Dictionary with:
        - 'board': (rows, cols) int8 array, 0=empty, 1-7=piece kind,
          active piece drawn in
        - 'piece': (4, 4) int8 array, active piece matrix padded to 4x4
        - 'position': (2,) int32 array, (x, y) of the piece matrix
        - 'next_piece': index 0-6 of the lookahead kind

    Action Space:
        Discrete(6): 0=noop, 1=left, 2=right, 3=rotate cw, 4=rotate ccw,
        5=soft drop (one extra row)
    """

    metadata = {"render_modes": ["human", "ansi"]}

    NOOP = 0
    LEFT = 1
    RIGHT = 2
    ROTATE_CW = 3
    ROTATE_CCW = 4
    SOFT_DROP = 5

    ACTION_COMMANDS = {
        LEFT: Command.MOVE_LEFT,
        RIGHT: Command.MOVE_RIGHT,
        ROTATE_CW: Command.ROTATE_CW,
        ROTATE_CCW: Command.ROTATE_CCW,
    }
    ACTION_SPACE_SIZE = 6
    PIECE_SIZE = 4

    def __init__(
        self,
        render_mode: Optional[str] = None,
        reward_config: Optional[Dict[str, float]] = None,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
    ):
        """
        Initialize the Tetris environment.

        Args:
            render_mode: 'human' for console output, 'ansi' for string return
            reward_config: Custom reward configuration
            config: Game settings
            seed: Random seed for reproducibility
        """
        super().__init__()

        self.render_mode = render_mode
        self.seed_value = seed
        self.renderer = Renderer()

        # Rewards scaled so a single row clear is worth about 1
        self.reward_config = {
            'points': 0.1,
            'landing': 0.01,
            'hole_penalty': -0.05,
            'game_over_penalty': -1.0,
        }
        if reward_config:
            self.reward_config.update(reward_config)

        self.session = GameSession(config=config, seed=seed)
        self.session.resume()
        rows, cols = self.session.arena.shape

        self.observation_space = spaces.Dict({
            'board': spaces.Box(
                low=0, high=NUM_PIECES,
                shape=(rows, cols),
                dtype=np.int8
            ),
            'piece': spaces.Box(
                low=0, high=NUM_PIECES,
                shape=(self.PIECE_SIZE, self.PIECE_SIZE),
                dtype=np.int8
            ),
            'position': spaces.Box(
                low=-self.PIECE_SIZE, high=max(rows, cols),
                shape=(2,),
                dtype=np.int32
            ),
            'next_piece': spaces.Discrete(NUM_PIECES),
        })

        self.action_space = spaces.Discrete(self.ACTION_SPACE_SIZE)

        self._prev_holes = 0
        self._steps = 0
        self._total_rows = 0

    def _get_observation(self) -> Dict[str, Any]:
        """Get the current observation."""
        snapshot = self.session.snapshot()

        piece = np.zeros((self.PIECE_SIZE, self.PIECE_SIZE), dtype=np.int8)
        h, w = snapshot.piece_matrix.shape
        piece[:h, :w] = snapshot.piece_matrix

        return {
            'board': self.renderer.compose(snapshot).astype(np.int8),
            'piece': piece,
            'position': np.array(snapshot.piece_position, dtype=np.int32),
            'next_piece': get_piece_index(snapshot.next_kind),
        }

    def _calculate_reward(self, results: List[DropResult]) -> float:
        """
        Calculate reward for a step.

        Args:
            results: Drops that happened during the step

        Returns:
            Reward value
        """
        reward = 0.0

        for result in results:
            reward += result.score_gained * self.reward_config['points']
            if result.landed:
                reward += self.reward_config['landing']
            if result.game_over:
                reward += self.reward_config['game_over_penalty']

        # Only penalize new holes when the stack actually changed
        if any(r.landed and not r.game_over for r in results):
            current_holes = self.session.arena.count_holes()
            hole_delta = current_holes - self._prev_holes
            if hole_delta > 0:
                reward += hole_delta * self.reward_config['hole_penalty']
            self._prev_holes = current_holes

        return reward

    def reset(
        self,
        seed: Optional[int] = None,
        options: Optional[Dict[str, Any]] = None,
    ) -> Tuple[Dict[str, Any], Dict[str, Any]]:
        """
        Reset the environment to initial state.

        Args:
            seed: Random seed
            options: Additional options (unused)

        Returns:
            Tuple of (observation, info)
        """
        super().reset(seed=seed)

        if seed is not None:
            self.seed_value = seed

        self.session.reset(seed=self.seed_value)
        self.session.resume()
        self._prev_holes = 0
        self._steps = 0
        self._total_rows = 0

        return self._get_observation(), self._get_info()

    def step(
        self, action: int
    ) -> Tuple[Dict[str, Any], float, bool, bool, Dict[str, Any]]:
        """
        Take a step in the environment.

        Args:
            action: Action index (0-5)

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        if not self.action_space.contains(action):
            raise ValueError(f"Invalid action: {action}. Valid actions: 0-{self.ACTION_SPACE_SIZE - 1}")

        action = int(action)
        if action in self.ACTION_COMMANDS:
            self.session.handle_input(self.ACTION_COMMANDS[action])

        results = []
        if action == self.SOFT_DROP:
            results.append(self.session.drop())
        if not self.session.is_game_over():
            results.append(self.session.drop())

        self._steps += 1
        self._total_rows += sum(r.rows_cleared for r in results)

        reward = self._calculate_reward(results)
        terminated = self.session.is_game_over()
        truncated = False

        observation = self._get_observation()
        info = self._get_info(results)

        if self.render_mode == "human":
            self.render()

        return observation, reward, terminated, truncated, info

    def _get_info(self, results: Optional[List[DropResult]] = None) -> Dict[str, Any]:
        """Get info dictionary."""
        info = {
            'score': self.session.score,
            'high_score': self.session.high_score,
            'steps': self._steps,
            'rows_cleared': self._total_rows,
            'fall_interval': self.session.timer.interval,
            'holes': self.session.arena.count_holes(),
        }
        if results:
            info['last_step'] = {
                'landed': any(r.landed for r in results),
                'rows_cleared': sum(r.rows_cleared for r in results),
                'score_gained': sum(r.score_gained for r in results),
            }
        return info

    def render(self) -> Optional[str]:
        """Render the current game state."""
        frame = self.renderer.render(self.session.snapshot())
        if self.render_mode == "ansi":
            return frame
        elif self.render_mode == "human":
            print("\033[2J\033[H")  # Clear screen
            print(frame)
        return None

    def close(self) -> None:
        """Clean up resources."""
        pass


gym.register(
    id='Tetris-v0',
    entry_point='environment.tetris_env:TetrisEnv',
    max_episode_steps=10000,
)


if __name__ == "__main__":
    print("Testing TetrisEnv...")
    env = TetrisEnv(render_mode="ansi")

    obs, info = env.reset(seed=42)
    print(f"Initial observation shapes:")
    print(f"  board: {obs['board'].shape}")
    print(f"  piece: {obs['piece'].shape}")

    total_reward = 0
    done = False
    steps = 0
    while not done and steps < 5000:
        obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
        total_reward += reward
        done = terminated or truncated
        steps += 1

    print(env.render())
    print(f"\nGame over after {steps} steps")
    print(f"Rows cleared: {info['rows_cleared']}")
    print(f"Total reward: {total_reward:.2f}")

    env.close()
