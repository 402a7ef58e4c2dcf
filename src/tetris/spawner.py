"""
Piece spawning with a difficulty-weighted lookahead.

The spawner keeps one piece kind queued ahead of the active piece so it can
be previewed, and biases how that lookahead is drawn:
- EASY: re-draws a few times hoping for an I piece
- NORMAL: uniform draw
- HARD: throttles I pieces through a block flag
"""
from enum import Enum
from typing import Optional
import numpy as np

from .piece import ActivePiece
from .shapes import PIECE_NAMES, NUM_PIECES


class Difficulty(Enum):
    """Difficulty tiers."""
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"

    @classmethod
    def from_name(cls, name: str) -> "Difficulty":
        """Look a tier up by name, case-insensitively."""
        try:
            return cls[name.upper()]
        except KeyError:
            raise ValueError(
                f"Unknown difficulty: {name}. Valid difficulties: {[d.name for d in cls]}"
            ) from None


class Spawner:
    """
    Chooses piece kinds and creates new active pieces.

    Args:
        difficulty: Tier controlling the lookahead bias
        rng: Random generator (a fresh unseeded one if omitted)
        easy_i_retries: Extra draws allowed on EASY while the draw is not I
        persistent_i_block: Keep HARD mode's I block flag between draws
            instead of starting every draw with it cleared
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.NORMAL,
        rng: Optional[np.random.Generator] = None,
        easy_i_retries: int = 2,
        persistent_i_block: bool = False,
    ):
        self.difficulty = difficulty
        self.rng = rng if rng is not None else np.random.default_rng()
        self.easy_i_retries = easy_i_retries
        self.persistent_i_block = persistent_i_block
        self.next_kind: Optional[str] = None
        self._block_i = False

    def reseed(self, seed: Optional[int]) -> None:
        self.rng = np.random.default_rng(seed)
        self.next_kind = None
        self._block_i = False

    def _random_kind(self) -> str:
        return PIECE_NAMES[int(self.rng.integers(NUM_PIECES))]

    def draw_lookahead(self) -> str:
        """Draw the next lookahead kind using the difficulty bias."""
        kind = self._random_kind()

        if self.difficulty is Difficulty.EASY:
            for _ in range(self.easy_i_retries):
                if kind == "I":
                    break
                kind = self._random_kind()

        elif self.difficulty is Difficulty.HARD and kind == "I":
            # Without persistence the flag starts cleared on every draw, so
            # the I always passes and only the flag gets armed.
            should_block = self._block_i if self.persistent_i_block else False
            if should_block:
                kind = self._random_kind()
                should_block = False
            else:
                should_block = True
            if self.persistent_i_block:
                self._block_i = should_block

        return kind

    def next_piece_kind(self) -> str:
        """Consume the lookahead (or draw uniformly on the first spawn) and queue a new one."""
        kind = self.next_kind if self.next_kind is not None else self._random_kind()
        self.next_kind = self.draw_lookahead()
        return kind

    def spawn(self, cols: int) -> ActivePiece:
        """
        Create the next active piece, centered at the top of the arena.

        Args:
            cols: Arena width in columns

        Returns:
            Fresh ActivePiece; the caller checks it for a blocked spawn
        """
        piece = ActivePiece.create(self.next_piece_kind())
        piece.x = cols // 2 - piece.width // 2
        piece.y = 0
        return piece
