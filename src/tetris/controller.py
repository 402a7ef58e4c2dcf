"""
Active piece controller.

Moves, rotates and drops the falling piece, consulting the arena for
collisions and reverting any change that does not fit.
"""
from .arena import Arena
from .matrix import rotate
from .piece import ActivePiece


class PieceController:
    """Applies player and gravity moves to an ActivePiece on an Arena."""

    def __init__(self, arena: Arena):
        self.arena = arena

    def move(self, piece: ActivePiece, direction: int) -> bool:
        """
        Shift a piece one column left (-1) or right (+1).

        Returns:
            True if the piece moved, False if it was blocked
        """
        piece.x += direction
        if self.arena.collide(piece):
            piece.x -= direction
            return False
        return True

    def fall(self, piece: ActivePiece) -> bool:
        """
        Move a piece down one row.

        Returns:
            True if the piece moved, False if it landed (position unchanged)
        """
        piece.y += 1
        if self.arena.collide(piece):
            piece.y -= 1
            return False
        return True

    def rotate(self, piece: ActivePiece, direction: int) -> bool:
        """
        Rotate a piece, kicking it sideways off walls and stack if needed.

        Kicks are tried as cumulative shifts of +1, -2, +3, -4, ... so the
        piece visits x+1, x-1, x+2, x-2, ... until it fits. The search stops
        once the next shift is wider than the piece, in which case the
        rotation is undone.

        Args:
            piece: The piece to rotate
            direction: 1 for clockwise, -1 for counter-clockwise

        Returns:
            True if the rotation was kept, False if it was aborted
        """
        rotate(piece.matrix, direction)

        starting_x = piece.x
        offset = 1
        while self.arena.collide(piece):
            piece.x += offset
            offset = -(offset + (1 if offset > 0 else -1))
            if abs(offset) > piece.width:
                rotate(piece.matrix, -direction)
                piece.x = starting_x
                return False
        return True
