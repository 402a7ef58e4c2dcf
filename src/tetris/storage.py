"""
High score persistence.

The engine only talks to a small key-value port; where the values end up
(memory, a JSON file, something remote) is up to the implementation.
"""
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Union
import json


def high_score_key(namespace: str, difficulty) -> str:
    """Build the storage key for a difficulty tier, e.g. 'tetris-game-high-score-normal'."""
    tier = getattr(difficulty, "value", difficulty)
    return f"{namespace}-{str(tier).lower()}"


class HighScoreStore(ABC):
    """Key-value port mapping string keys to non-negative integers."""

    @abstractmethod
    def get(self, key: str, default: int = 0) -> int:
        """Read a value, returning `default` when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: int) -> None:
        """Write a value."""


class InMemoryStore(HighScoreStore):
    """Store that lives only as long as the process."""

    def __init__(self, initial: Dict[str, int] = None):
        self.data: Dict[str, int] = dict(initial or {})

    def get(self, key: str, default: int = 0) -> int:
        return int(self.data.get(key, default))

    def set(self, key: str, value: int) -> None:
        self.data[key] = int(value)

    def __repr__(self) -> str:
        return f"InMemoryStore({self.data})"


class JsonFileStore(HighScoreStore):
    """
    Store backed by a JSON object on disk.

    A missing file reads as empty; the file is rewritten on every set.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _load(self) -> Dict[str, int]:
        if not self.path.exists():
            return {}
        with open(self.path, 'r') as f:
            return json.load(f)

    def get(self, key: str, default: int = 0) -> int:
        return int(self._load().get(key, default))

    def set(self, key: str, value: int) -> None:
        data = self._load()
        data[key] = int(value)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w') as f:
            json.dump(data, f, indent=2)

    def __repr__(self) -> str:
        return f"JsonFileStore({str(self.path)!r})"
