"""Active (falling) piece state."""
from dataclasses import dataclass
from typing import Iterator, Tuple
import numpy as np

from .matrix import clone_matrix
from .shapes import create_piece


@dataclass
class ActivePiece:
    """
    The player-controlled piece.

    `matrix` is a private copy of the kind's shape and may be rotated;
    (x, y) is the arena column/row of the matrix's top-left cell.
    """
    kind: str
    matrix: np.ndarray
    x: int = 0
    y: int = 0

    @classmethod
    def create(cls, kind: str, x: int = 0, y: int = 0) -> "ActivePiece":
        """Create a piece of the given kind with a fresh shape copy."""
        return cls(kind=kind, matrix=create_piece(kind), x=x, y=y)

    @property
    def width(self) -> int:
        """Return the side length of the local matrix."""
        return self.matrix.shape[1]

    @property
    def height(self) -> int:
        return self.matrix.shape[0]

    @property
    def position(self) -> Tuple[int, int]:
        return self.x, self.y

    def cells(self) -> Iterator[Tuple[int, int, int]]:
        """Yield (row, col, value) in arena coordinates for each occupied cell."""
        rows, cols = np.nonzero(self.matrix)
        for ly, lx in zip(rows.tolist(), cols.tolist()):
            yield self.y + ly, self.x + lx, int(self.matrix[ly, lx])

    def copy(self) -> "ActivePiece":
        """Create a deep copy of this piece."""
        return ActivePiece(self.kind, clone_matrix(self.matrix), self.x, self.y)

    def __repr__(self) -> str:
        return f"ActivePiece({self.kind}, x={self.x}, y={self.y})"
