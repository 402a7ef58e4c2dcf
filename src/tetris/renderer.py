"""
Tetris Text Renderer.

Provides an ASCII view of a session snapshot. Graphical front ends can
read the same snapshot and draw it however they like.
"""
from typing import List, Optional
import numpy as np

from .shapes import PIECE_NAMES, create_piece


class Renderer:
    """
    ASCII renderer for Tetris snapshots.

    Occupied cells show the letter of the piece kind that filled them.
    """

    EMPTY = "·"
    WALL = "|"

    def _cell(self, value: int) -> str:
        return PIECE_NAMES[value - 1] if value else self.EMPTY

    def compose(self, snapshot) -> np.ndarray:
        """Overlay the active piece on a copy of the arena."""
        grid = snapshot.arena.copy()
        rows, cols = grid.shape
        x, y = snapshot.piece_position
        for ly, lx in zip(*np.nonzero(snapshot.piece_matrix)):
            r, c = y + ly, x + lx
            if 0 <= r < rows and 0 <= c < cols:
                grid[r, c] = snapshot.piece_matrix[ly, lx]
        return grid

    def render_grid(self, grid: np.ndarray) -> List[str]:
        """Render a grid as bordered text lines."""
        lines = []
        for row in grid:
            lines.append(self.WALL + " ".join(self._cell(int(v)) for v in row) + self.WALL)
        lines.append("+" + "-" * (grid.shape[1] * 2 - 1) + "+")
        return lines

    def render_preview(self, kind: Optional[str]) -> List[str]:
        """Render the next piece box."""
        lines = ["Next:"]
        if kind is None:
            return lines
        for row in create_piece(kind):
            line = " ".join(self._cell(int(v)) if v else " " for v in row)
            if line.strip():
                lines.append("  " + line.rstrip())
        return lines

    def render(self, snapshot) -> str:
        """
        Render a full frame: arena with the active piece, next piece preview
        and a status line.

        Args:
            snapshot: Snapshot from GameSession.snapshot()

        Returns:
            Multi-line string
        """
        board_lines = self.render_grid(self.compose(snapshot))
        side = self.render_preview(snapshot.next_kind)
        side += [
            "",
            f"Score: {snapshot.score}",
            f"High:  {snapshot.high_score}",
            f"Mode:  {snapshot.difficulty.name}",
        ]
        if snapshot.status.value == "game_over":
            side.append("GAME OVER")
        if snapshot.paused:
            side.append("PAUSED - press p to play")

        width = len(board_lines[0])
        lines = []
        for i, line in enumerate(board_lines):
            extra = side[i] if i < len(side) else ""
            lines.append(f"{line.ljust(width)}  {extra}".rstrip())
        return "\n".join(lines)
