"""
Tests for moving, dropping and rotating the active piece.
"""
import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tetris.arena import Arena
from tetris.controller import PieceController
from tetris.piece import ActivePiece
from tetris.shapes import create_piece


@pytest.fixture
def arena():
    return Arena()


@pytest.fixture
def controller(arena):
    return PieceController(arena)


class TestMove:
    """Test horizontal movement."""

    def test_o_piece_to_left_wall(self, controller):
        """An O spawned at column 4 reaches column 0 and stops."""
        piece = ActivePiece.create("O", x=4, y=0)
        moved = [controller.move(piece, -1) for _ in range(5)]
        assert moved == [True, True, True, True, False]
        assert piece.x == 0
        assert not controller.move(piece, -1)
        assert piece.x == 0

    def test_right_wall(self, controller):
        """Moving right stops at the last column."""
        piece = ActivePiece.create("O", x=4, y=0)
        for _ in range(10):
            controller.move(piece, 1)
        assert piece.x == 8

    def test_blocked_by_stack(self, arena, controller):
        """Landed cells block sideways moves."""
        arena.grid[0:2, 3] = 2
        piece = ActivePiece.create("O", x=4, y=0)
        assert not controller.move(piece, -1)
        assert piece.x == 4

    def test_move_keeps_matrix(self, controller):
        """Moving does not touch the shape."""
        piece = ActivePiece.create("T", x=4, y=0)
        controller.move(piece, 1)
        assert np.array_equal(piece.matrix, create_piece("T"))


class TestFall:
    """Test gravity steps."""

    def test_fall_until_floor(self, controller):
        """An O falls to rows 18-19 and then lands."""
        piece = ActivePiece.create("O", x=4, y=0)
        falls = 0
        while controller.fall(piece):
            falls += 1
        assert falls == 18
        assert piece.y == 18

    def test_lands_on_stack(self, arena, controller):
        """A piece stops on top of landed cells."""
        arena.grid[19, :] = 1
        piece = ActivePiece.create("O", x=4, y=0)
        while controller.fall(piece):
            pass
        assert piece.y == 17


class TestRotate:
    """Test rotation and wall kicks."""

    def test_free_rotation(self, controller):
        """In open space the piece rotates without moving."""
        piece = ActivePiece.create("T", x=4, y=5)
        assert controller.rotate(piece, 1)
        assert piece.x == 4
        assert piece.matrix.tolist() == [[0, 6, 0], [6, 6, 0], [0, 6, 0]]

    def test_i_kicks_off_right_wall(self, arena, controller):
        """A vertical I at x=7 (column 8) kicks left to x=6 when turned flat."""
        piece = ActivePiece.create("I", x=7, y=0)
        assert not arena.collide(piece)

        assert controller.rotate(piece, 1)

        assert piece.x == 6
        assert not arena.collide(piece)
        assert piece.matrix[1].tolist() == [1, 1, 1, 1]

    def test_i_kicks_off_left_wall(self, arena, controller):
        """A vertical I hugging the left wall kicks right."""
        piece = ActivePiece.create("I", x=-1, y=0)
        assert controller.rotate(piece, 1)
        assert piece.x == 0
        assert not arena.collide(piece)

    def test_abort_restores_piece(self, arena, controller):
        """When no kick fits the rotation is undone."""
        # Walls of landed cells either side of a one-wide shaft
        arena.grid[:, :4] = 3
        arena.grid[:, 5:] = 3
        piece = ActivePiece.create("I", x=3, y=10)
        assert not arena.collide(piece)

        assert not controller.rotate(piece, 1)

        assert piece.x == 3
        assert np.array_equal(piece.matrix, create_piece("I"))

    def test_counter_clockwise(self, controller):
        """Counter-clockwise turns go the other way."""
        piece = ActivePiece.create("L", x=4, y=5)
        controller.rotate(piece, -1)
        assert piece.matrix.tolist() == [[0, 0, 3], [3, 3, 3], [0, 0, 0]]

    def test_four_rotations_restore(self, controller):
        """Four turns in open space give back the original piece."""
        piece = ActivePiece.create("S", x=4, y=5)
        for _ in range(4):
            controller.rotate(piece, 1)
        assert piece.x == 4
        assert np.array_equal(piece.matrix, create_piece("S"))
