"""
Tetris Arena Module.

This module implements the playfield with:
- 20x10 grid representation (configurable)
- Collision testing for the active piece
- Merging landed pieces
- Full row clearing with cascading multipliers
- Height and hole statistics for observers
"""
from dataclasses import dataclass, field
from typing import List
import numpy as np

from .piece import ActivePiece
from .shapes import get_piece_kind


@dataclass
class ClearResult:
    """Outcome of one bottom-to-top row clearing pass."""
    multipliers: List[int] = field(default_factory=list)

    @property
    def rows_cleared(self) -> int:
        return len(self.multipliers)

    @property
    def combo(self) -> bool:
        """True when the pass cleared at least one row."""
        return self.rows_cleared > 0

    def points(self, row_points: int = 10) -> List[int]:
        """Points awarded for each cleared row, in clearing order."""
        return [multiplier * row_points for multiplier in self.multipliers]


class Arena:
    """
    Represents the Tetris playfield.

    The arena is a 2D numpy array where:
    - 0 = empty cell
    - 1-7 = landed cell, value encodes the piece kind
    """

    DEFAULT_ROWS = 20
    DEFAULT_COLS = 10

    def __init__(self, rows: int = DEFAULT_ROWS, cols: int = DEFAULT_COLS):
        """Initialize an empty arena."""
        self.rows = rows
        self.cols = cols
        self.grid = np.zeros((rows, cols), dtype=np.int8)

    def copy(self) -> "Arena":
        """Create a deep copy of this arena."""
        new_arena = Arena(self.rows, self.cols)
        new_arena.grid = self.grid.copy()
        return new_arena

    def reset(self) -> None:
        """Clear the arena."""
        self.grid.fill(0)

    @property
    def shape(self):
        return self.grid.shape

    @property
    def total_blocks(self) -> int:
        """Return total number of filled cells."""
        return int(np.count_nonzero(self.grid))

    def get_cell(self, row: int, col: int) -> int:
        """Get the value of a cell."""
        return int(self.grid[row, col])

    def is_empty(self, row: int, col: int) -> bool:
        """Check if a cell is empty."""
        return self.grid[row, col] == 0

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if coordinates are within arena bounds."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def collide(self, piece: ActivePiece) -> bool:
        """
        Check if a piece overlaps a wall, the floor, or a landed cell.

        Rows above the arena (negative row index) count as open space.

        Args:
            piece: The piece to test at its current position

        Returns:
            True if any occupied piece cell is blocked
        """
        rows, cols = self.rows, self.cols
        grid = self.grid
        for r, c, _ in piece.cells():
            # Walls and floor
            if c < 0 or c >= cols or r >= rows:
                return True
            if r < 0:
                continue
            if grid[r, c] != 0:
                return True
        return False

    def merge(self, piece: ActivePiece) -> None:
        """
        Write a landed piece's cells into the arena.

        Args:
            piece: The piece to merge at its current position
        """
        for r, c, value in piece.cells():
            if r >= 0:
                self.grid[r, c] = value

    def is_row_full(self, row: int) -> bool:
        return bool(np.all(self.grid[row, :] != 0))

    def find_full_rows(self) -> List[int]:
        """Find the indices of all full rows, top to bottom."""
        return [row for row in range(self.rows) if self.is_row_full(row)]

    def _remove_row(self, row: int) -> None:
        """Drop a row and shift everything above it down by one."""
        self.grid[1:row + 1, :] = self.grid[0:row, :].copy()
        self.grid[0, :] = 0

    def clear_full_rows(self) -> ClearResult:
        """
        Clear full rows scanning from the bottom up.

        Rows stacking into the same index are cleared repeatedly; the
        multiplier doubles with each clear at that index and resets to 1
        once the index no longer holds a full row.

        Returns:
            ClearResult with the multiplier of each cleared row
        """
        result = ClearResult()
        multiplier = 1

        for row in range(self.rows - 1, -1, -1):
            while self.is_row_full(row):
                self._remove_row(row)
                result.multipliers.append(multiplier)
                multiplier *= 2

            if multiplier > 1:
                multiplier = 1

        return result

    def get_height_map(self) -> np.ndarray:
        """
        Get the "height" of each column (topmost filled cell).
        Useful for heuristic evaluation.
        """
        heights = np.zeros(self.cols, dtype=np.int32)
        for col in range(self.cols):
            filled = np.nonzero(self.grid[:, col])[0]
            if filled.size:
                heights[col] = self.rows - filled[0]
        return heights

    def count_holes(self) -> int:
        """Count empty cells with a filled cell somewhere above them."""
        holes = 0
        heights = self.get_height_map()
        for col in range(self.cols):
            top = self.rows - heights[col]
            holes += int(np.sum(self.grid[top:, col] == 0))
        return holes

    def get_state(self) -> np.ndarray:
        """Get the arena state as a numpy array."""
        return self.grid.copy()

    def set_state(self, state: np.ndarray) -> None:
        """Set the arena state from a numpy array of the same shape."""
        if state.shape != self.grid.shape:
            raise ValueError(f"Expected shape {self.grid.shape}, got {state.shape}")
        self.grid[...] = state

    def __str__(self) -> str:
        """Create a string visualization of the arena."""
        lines = []
        for row in range(self.rows):
            cells = [
                get_piece_kind(int(value)) if value else "·"
                for value in self.grid[row]
            ]
            lines.append("|" + " ".join(cells) + "|")
        lines.append("+" + "-" * (self.cols * 2 - 1) + "+")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Arena(rows={self.rows}, cols={self.cols}, blocks={self.total_blocks})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Arena):
            return False
        return np.array_equal(self.grid, other.grid)

    def __hash__(self) -> int:
        return hash(self.grid.tobytes())
