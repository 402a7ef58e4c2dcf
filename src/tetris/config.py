"""
Game configuration.

Settings can be given in code or loaded from a YAML file such as
config/default.yaml.
"""
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union
import yaml

from .spawner import Difficulty


@dataclass
class GameConfig:
    """Tunable settings for a game session."""
    # Arena
    rows: int = 20
    cols: int = 10

    # Gravity (milliseconds)
    default_drop_interval: int = 1000
    min_drop_interval: int = 50
    drop_interval_step: int = 10

    # Scoring
    row_points: int = 10
    high_score_namespace: str = "tetris-game-high-score"

    # Piece selection
    difficulty: str = "NORMAL"
    easy_i_retries: int = 2
    persistent_i_block: bool = False
    seed: Optional[int] = None

    def __post_init__(self):
        if self.rows < 4 or self.cols < 4:
            raise ValueError(f"Arena must be at least 4x4, got {self.rows}x{self.cols}")
        if self.row_points < 0:
            raise ValueError(f"row_points must be non-negative, got {self.row_points}")
        # Validates the name
        Difficulty.from_name(self.difficulty)

    @property
    def difficulty_tier(self) -> Difficulty:
        return Difficulty.from_name(self.difficulty)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "GameConfig":
        """Create from dictionary, rejecting unknown keys."""
        data = dict(data or {})
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown config keys: {unknown}. Valid keys: {sorted(known)}")
        return cls(**data)


def load_yaml(config_path: Union[str, Path]) -> Dict[str, Any]:
    """Load a YAML file into a dictionary."""
    with open(config_path, 'r') as f:
        return yaml.safe_load(f) or {}


def load_config(config_path: Optional[Union[str, Path]] = None) -> GameConfig:
    """
    Load configuration from a YAML file.

    The file may hold the settings at the top level or under a `game`
    section (other sections are ignored). Without a path the defaults are
    returned.
    """
    if config_path is None:
        return GameConfig()

    data = load_yaml(config_path)
    if 'game' in data:
        data = data['game']
    return GameConfig.from_dict(data)
