"""
Tests for the Gymnasium environment.
"""
import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from environment.tetris_env import TetrisEnv
from tetris.piece import ActivePiece


class TestEnvironmentCreation:
    """Test environment creation."""

    def test_create_env(self):
        """Test basic environment creation."""
        env = TetrisEnv()
        assert env.action_space.n == 6
        assert not env.session.paused

    def test_observation_space(self):
        """Test observation space definition."""
        env = TetrisEnv()
        spaces = env.observation_space.spaces
        assert spaces['board'].shape == (20, 10)
        assert spaces['piece'].shape == (4, 4)
        assert spaces['position'].shape == (2,)
        assert spaces['next_piece'].n == 7


class TestEnvironmentReset:
    """Test environment reset."""

    def test_reset(self):
        """Reset returns an observation inside the space."""
        env = TetrisEnv()
        obs, info = env.reset(seed=0)
        assert env.observation_space.contains(obs)
        assert info['score'] == 0

    def test_reset_with_seed(self):
        """Test deterministic reset."""
        env = TetrisEnv()
        obs1, _ = env.reset(seed=42)
        obs2, _ = env.reset(seed=42)
        assert np.array_equal(obs1['piece'], obs2['piece'])
        assert obs1['next_piece'] == obs2['next_piece']

    def test_board_shows_active_piece(self):
        """The active piece is drawn into the board observation."""
        env = TetrisEnv()
        obs, _ = env.reset(seed=1)
        assert np.count_nonzero(obs['board']) == 4


class TestEnvironmentStep:
    """Test stepping."""

    def test_step_falls_one_row(self):
        """A no-op step applies one gravity drop."""
        env = TetrisEnv()
        obs, _ = env.reset(seed=3)
        y = obs['position'][1]
        obs, reward, terminated, truncated, info = env.step(TetrisEnv.NOOP)
        assert obs['position'][1] == y + 1
        assert not terminated
        assert not truncated

    def test_soft_drop_falls_two_rows(self):
        """Soft drop adds an extra row."""
        env = TetrisEnv()
        obs, _ = env.reset(seed=3)
        y = obs['position'][1]
        obs, *_ = env.step(TetrisEnv.SOFT_DROP)
        assert obs['position'][1] == y + 2

    def test_move_left(self):
        """Left moves the piece one column."""
        env = TetrisEnv()
        obs, _ = env.reset(seed=3)
        x = obs['position'][0]
        obs, *_ = env.step(TetrisEnv.LEFT)
        assert obs['position'][0] == x - 1

    def test_line_clear_reward(self):
        """Clearing a row gives a positive reward and updates the info."""
        env = TetrisEnv()
        env.reset(seed=3)
        env.session.arena.grid[19, 2:] = 1
        env.session.piece = ActivePiece.create("O", x=0, y=18)

        obs, reward, terminated, truncated, info = env.step(TetrisEnv.NOOP)

        assert reward > 0
        assert info['score'] == 10
        assert info['rows_cleared'] == 1
        assert info['last_step']['rows_cleared'] == 1

    def test_invalid_action(self):
        """Out-of-range actions are rejected."""
        env = TetrisEnv()
        env.reset(seed=0)
        with pytest.raises(ValueError):
            env.step(6)

    def test_random_episode_terminates(self):
        """A random player eventually tops out."""
        env = TetrisEnv()
        env.reset(seed=0)
        env.action_space.seed(0)
        terminated = False
        for _ in range(20000):
            obs, reward, terminated, truncated, info = env.step(env.action_space.sample())
            assert env.observation_space['board'].contains(obs['board'])
            if terminated:
                break
        assert terminated
        assert reward < 0
        assert info['score'] == 0

    def test_render_ansi(self):
        """ANSI rendering returns the frame."""
        env = TetrisEnv(render_mode="ansi")
        env.reset(seed=0)
        frame = env.render()
        assert "Score:" in frame
        assert len(frame.splitlines()) == 21
