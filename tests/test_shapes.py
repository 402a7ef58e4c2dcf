"""
Tests for the shape catalog and matrix rotation.
"""
import pytest
import numpy as np
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tetris.shapes import (
    SHAPES, PIECE_NAMES, NUM_PIECES,
    create_piece, get_piece_value, get_piece_kind, get_piece_index, visualize_piece,
)
from tetris.matrix import rotate, create_matrix, clone_matrix, CLOCKWISE, COUNTER_CLOCKWISE


class TestCatalog:
    """Test the canonical shapes."""

    def test_seven_kinds(self):
        """There are exactly 7 kinds in IJLOSTZ order."""
        assert NUM_PIECES == 7
        assert PIECE_NAMES == ["I", "J", "L", "O", "S", "T", "Z"]

    def test_values(self):
        """Each kind's cells carry its own value."""
        for value, name in enumerate(PIECE_NAMES, start=1):
            shape = create_piece(name)
            assert get_piece_value(name) == value
            assert set(np.unique(shape).tolist()) - {0} == {value}

    def test_square_shapes(self):
        """All shapes are square with side 2, 3 or 4."""
        sizes = {name: create_piece(name).shape for name in PIECE_NAMES}
        assert sizes["I"] == (4, 4)
        assert sizes["O"] == (2, 2)
        for name in "JLSTZ":
            assert sizes[name] == (3, 3)

    def test_four_cells_each(self):
        """Every tetromino has 4 cells."""
        for name in PIECE_NAMES:
            assert np.count_nonzero(create_piece(name)) == 4

    def test_i_is_vertical_in_column_one(self):
        """The I piece starts vertical in its second column."""
        shape = create_piece("I")
        assert np.all(shape[:, 1] == 1)
        assert np.count_nonzero(shape[:, [0, 2, 3]]) == 0

    def test_copies_are_independent(self):
        """Mutating a returned shape leaves the catalog untouched."""
        shape = create_piece("T")
        shape[:] = 0
        assert np.count_nonzero(create_piece("T")) == 4
        assert SHAPES["T"][1] == (6, 6, 6)

    def test_unknown_kind(self):
        """Unknown kinds fail fast."""
        with pytest.raises(ValueError):
            create_piece("X")
        with pytest.raises(ValueError):
            get_piece_kind(0)
        with pytest.raises(ValueError):
            get_piece_kind(8)

    def test_kind_lookup(self):
        """Values and indices map back to kinds."""
        assert get_piece_kind(1) == "I"
        assert get_piece_kind(7) == "Z"
        assert get_piece_index("O") == 3

    def test_visualize(self):
        """Visualization shows the occupied cells."""
        assert visualize_piece("O") == "OO\nOO"


class TestRotation:
    """Test in-place matrix rotation."""

    def test_clockwise(self):
        """Clockwise turn of a 3x3 matrix."""
        m = np.array([[1, 2, 3], [4, 5, 6], [7, 1, 2]], dtype=np.int8)
        rotate(m, CLOCKWISE)
        assert m.tolist() == [[7, 4, 1], [1, 5, 2], [2, 6, 3]]

    def test_counter_clockwise(self):
        """Counter-clockwise turn of a 3x3 matrix."""
        m = np.array([[1, 2, 3], [4, 5, 6], [7, 1, 2]], dtype=np.int8)
        rotate(m, COUNTER_CLOCKWISE)
        assert m.tolist() == [[3, 6, 2], [2, 5, 1], [1, 4, 7]]

    def test_rotation_is_in_place(self):
        """The same buffer is rotated."""
        m = create_piece("L")
        buffer = m
        rotate(m, CLOCKWISE)
        assert m is buffer
        assert m.tolist() == [[0, 0, 0], [3, 3, 3], [3, 0, 0]]

    @pytest.mark.parametrize("name", PIECE_NAMES)
    def test_four_turns_identity(self, name):
        """Four clockwise turns restore every piece."""
        m = create_piece(name)
        for _ in range(4):
            rotate(m, CLOCKWISE)
        assert np.array_equal(m, create_piece(name))

    @pytest.mark.parametrize("name", PIECE_NAMES)
    def test_opposite_turns_cancel(self, name):
        """A clockwise turn is undone by a counter-clockwise one."""
        m = create_piece(name)
        rotate(m, CLOCKWISE)
        rotate(m, COUNTER_CLOCKWISE)
        assert np.array_equal(m, create_piece(name))

    def test_one_by_one(self):
        """1x1 matrices are unchanged."""
        m = np.array([[5]], dtype=np.int8)
        rotate(m, CLOCKWISE)
        assert m.tolist() == [[5]]

    def test_non_square_rejected(self):
        """Non-square matrices cannot be rotated."""
        with pytest.raises(ValueError):
            rotate(create_matrix(2, 3), CLOCKWISE)

    def test_create_and_clone(self):
        """Matrix helpers create zeroed and independent copies."""
        m = create_matrix(20, 10)
        assert m.shape == (20, 10)
        assert not m.any()
        c = clone_matrix(m)
        c[0, 0] = 1
        assert m[0, 0] == 0
