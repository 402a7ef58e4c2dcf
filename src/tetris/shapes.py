"""
Tetromino Shape Catalog.

This module defines the 7 tetromino kinds used by the game.
Each kind is stored as an immutable square matrix of cell values, where the
nonzero value encodes the kind (I=1, J=2, L=3, O=4, S=5, T=6, Z=7).
"""
from typing import Dict, List, Tuple
import numpy as np


Shape = Tuple[Tuple[int, ...], ...]


# =============================================================================
# CANONICAL SHAPES
# =============================================================================

I: Shape = (
    (0, 1, 0, 0),
    (0, 1, 0, 0),
    (0, 1, 0, 0),
    (0, 1, 0, 0),
)

J: Shape = (
    (0, 2, 0),
    (0, 2, 0),
    (2, 2, 0),
)

L: Shape = (
    (0, 3, 0),
    (0, 3, 0),
    (0, 3, 3),
)

O: Shape = (
    (4, 4),
    (4, 4),
)

S: Shape = (
    (0, 5, 5),
    (5, 5, 0),
    (0, 0, 0),
)

T: Shape = (
    (0, 0, 0),
    (6, 6, 6),
    (0, 6, 0),
)

Z: Shape = (
    (7, 7, 0),
    (0, 7, 7),
    (0, 0, 0),
)


SHAPES: Dict[str, Shape] = {
    "I": I,
    "J": J,
    "L": L,
    "O": O,
    "S": S,
    "T": T,
    "Z": Z,
}

# Order matters: index + 1 is the cell value of the kind
PIECE_NAMES: List[str] = list(SHAPES.keys())
NUM_PIECES: int = len(PIECE_NAMES)

assert NUM_PIECES == 7, f"Expected 7 pieces, got {NUM_PIECES}"


def _check_kind(kind: str) -> None:
    if kind not in SHAPES:
        raise ValueError(f"Unknown piece: {kind}. Valid pieces: {PIECE_NAMES}")


def create_piece(kind: str) -> np.ndarray:
    """
    Get a fresh copy of a piece's canonical matrix.

    Args:
        kind: Piece kind tag, one of I, J, L, O, S, T, Z

    Returns:
        Square int8 array the caller is free to mutate
    """
    _check_kind(kind)
    return np.array(SHAPES[kind], dtype=np.int8)


def get_piece_value(kind: str) -> int:
    """Get the cell value used to mark a kind on the arena."""
    _check_kind(kind)
    return PIECE_NAMES.index(kind) + 1


def get_piece_kind(value: int) -> str:
    """Get the kind tag for a nonzero cell value."""
    if not 1 <= value <= NUM_PIECES:
        raise ValueError(f"Cell value must be 1-{NUM_PIECES}, got {value}")
    return PIECE_NAMES[value - 1]


def get_piece_index(kind: str) -> int:
    """Get the 0-based index of a kind (useful for one-hot encodings)."""
    return get_piece_value(kind) - 1


def visualize_piece(kind: str) -> str:
    """Create a string visualization of a piece."""
    lines = []
    for row in create_piece(kind):
        line = "".join(kind if cell else " " for cell in row)
        lines.append(line.rstrip())
    return "\n".join(line for line in lines if line)


if __name__ == "__main__":
    for name in PIECE_NAMES:
        size = len(SHAPES[name])
        print(f"\n{name} ({size}x{size}, value {get_piece_value(name)}):")
        print(visualize_piece(name))
