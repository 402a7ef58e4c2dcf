"""
Matrix helpers.

Matrices are 2D int8 numpy arrays. Rotation works in place on square
matrices so that a piece keeps its own buffer while it is being turned.
"""
import numpy as np


CLOCKWISE = 1
COUNTER_CLOCKWISE = -1


def create_matrix(rows: int, cols: int) -> np.ndarray:
    """Create an all-zero matrix."""
    return np.zeros((rows, cols), dtype=np.int8)


def clone_matrix(matrix: np.ndarray) -> np.ndarray:
    """Create an independent copy of a matrix."""
    return np.array(matrix, dtype=np.int8, copy=True)


def rotate(matrix: np.ndarray, direction: int) -> None:
    """
    Rotate a square matrix by 90 degrees in place.

    The matrix is transposed, then each row is reversed for a clockwise
    turn (direction > 0) or the row order is reversed for a
    counter-clockwise turn.

    Args:
        matrix: Square matrix to rotate
        direction: CLOCKWISE (1) or COUNTER_CLOCKWISE (-1)
    """
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"Only square matrices can be rotated, got shape {matrix.shape}")

    matrix[...] = matrix.T.copy()

    if direction > 0:
        matrix[...] = matrix[:, ::-1].copy()
    else:
        matrix[...] = matrix[::-1, :].copy()
