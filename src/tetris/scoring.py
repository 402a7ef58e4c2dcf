"""Score and per-difficulty high score tracking."""
from typing import Optional

from .spawner import Difficulty
from .storage import HighScoreStore, InMemoryStore, high_score_key


class ScoreKeeper:
    """
    Tracks the current score and the high score of the active tier.

    New high scores are written through to the store as soon as they are
    reached, keyed by "<namespace>-<tier>".
    """

    DEFAULT_NAMESPACE = "tetris-game-high-score"

    def __init__(
        self,
        store: Optional[HighScoreStore] = None,
        difficulty: Difficulty = Difficulty.NORMAL,
        namespace: str = DEFAULT_NAMESPACE,
    ):
        self.store = store if store is not None else InMemoryStore()
        self.namespace = namespace
        self.difficulty = difficulty
        self._score = 0
        self._high_score = self.store.get(self.key, 0)

    @property
    def key(self) -> str:
        """Storage key for the active tier."""
        return high_score_key(self.namespace, self.difficulty)

    @property
    def score(self) -> int:
        return self._score

    @property
    def high_score(self) -> int:
        return self._high_score

    def award(self, points: int) -> bool:
        """
        Add points to the current score.

        Returns:
            True if this award set a new high score
        """
        self._score += points
        if self._score > self._high_score:
            self._high_score = self._score
            self.store.set(self.key, self._high_score)
            return True
        return False

    def reset(self) -> None:
        """Reset the current score (the high score is kept)."""
        self._score = 0

    def select_difficulty(self, difficulty: Difficulty) -> None:
        """Switch tiers, loading that tier's high score and zeroing the score."""
        self.difficulty = difficulty
        self._high_score = self.store.get(self.key, 0)
        self._score = 0

    def __repr__(self) -> str:
        return (f"ScoreKeeper(score={self._score}, high_score={self._high_score}, "
                f"difficulty={self.difficulty.name})")
