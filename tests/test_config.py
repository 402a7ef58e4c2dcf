"""
Tests for configuration loading and the event logger.
"""
import pytest
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np

from tetris.config import GameConfig, load_config
from tetris.spawner import Difficulty
from utils.logger import EventLogger, MetricsTracker, convert_to_serializable


PROJECT_ROOT = Path(__file__).parent.parent


class TestGameConfig:
    """Test configuration handling."""

    def test_defaults(self):
        """Defaults match the classic game."""
        config = GameConfig()
        assert (config.rows, config.cols) == (20, 10)
        assert config.default_drop_interval == 1000
        assert config.min_drop_interval == 50
        assert config.row_points == 10
        assert config.difficulty_tier is Difficulty.NORMAL

    def test_load_default_yaml(self):
        """The shipped config file loads."""
        config = load_config(PROJECT_ROOT / "config" / "default.yaml")
        assert config == GameConfig()

    def test_load_flat_yaml(self, tmp_path):
        """Settings may also sit at the top level."""
        path = tmp_path / "custom.yaml"
        path.write_text("rows: 12\ncols: 6\ndifficulty: hard\n")
        config = load_config(path)
        assert config.rows == 12
        assert config.cols == 6
        assert config.difficulty_tier is Difficulty.HARD

    def test_no_path_gives_defaults(self):
        """No path means defaults."""
        assert load_config(None) == GameConfig()

    def test_unknown_key(self):
        """Unknown keys are rejected."""
        with pytest.raises(ValueError):
            GameConfig.from_dict({"rowz": 20})

    def test_bad_values(self):
        """Invalid values fail fast."""
        with pytest.raises(ValueError):
            GameConfig(difficulty="impossible")
        with pytest.raises(ValueError):
            GameConfig(rows=2)

    def test_round_trip_dict(self):
        """to_dict feeds back into from_dict."""
        config = GameConfig(seed=5, difficulty="EASY")
        assert GameConfig.from_dict(config.to_dict()) == config


class TestEventLogger:
    """Test the JSONL event logger."""

    def test_log_event(self, tmp_path):
        """Events are appended as JSON lines."""
        logger = EventLogger(str(tmp_path), "test")
        logger.log_event("rows_cleared", rows=np.int64(2), difficulty=Difficulty.HARD)
        logger.log_event("game_over", score=30)

        records = logger.read_events()
        assert [r['event'] for r in records] == ["rows_cleared", "game_over"]
        assert records[0]['rows'] == 2
        assert records[0]['difficulty'] == "HARD"
        assert records[1]['seq'] == 2
        assert logger.read_events("game_over")[0]['score'] == 30

    def test_summary(self, tmp_path):
        """The summary counts events by name."""
        logger = EventLogger(str(tmp_path), "test")
        logger.log_event("paused")
        logger.log_event("paused")
        summary_file = logger.save_summary()
        summary = json.loads(summary_file.read_text())
        assert summary['events'] == {"paused": 2}
        assert summary['total_events'] == 2

    def test_convert(self):
        """Numpy values become plain Python."""
        data = convert_to_serializable({'a': np.float32(1.5), 'b': np.zeros(2, dtype=np.int8)})
        assert data == {'a': 1.5, 'b': [0, 0]}


class TestMetricsTracker:
    """Test rolling metrics."""

    def test_window(self):
        """Only the last window_size values are kept."""
        tracker = MetricsTracker(window_size=3)
        for value in [1, 2, 3, 4]:
            tracker.add('score', value)
        summary = tracker.get_summary('score')
        assert summary['mean'] == 3.0
        assert summary['min'] == 2.0
        assert summary['last'] == 4.0

    def test_missing_metric(self):
        """Unknown metrics summarize to zeros."""
        assert MetricsTracker().get_summary('nothing')['mean'] == 0.0
