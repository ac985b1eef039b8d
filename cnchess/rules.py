"""Ownership and game-outcome checks."""

from .board import Board
from .constants import (
    PALACE_UP_TOP,
    PALACE_UP_BOTTOM,
    PALACE_UP_LEFT,
    PALACE_UP_RIGHT,
    PALACE_DOWN_TOP,
    PALACE_DOWN_BOTTOM,
    PALACE_DOWN_LEFT,
    PALACE_DOWN_RIGHT,
)
from .move import Move
from .piece import Piece, Side, piece_side


def is_own_piece(board: Board, move: Move, side: Side) -> bool:
    """Check that the piece on the move's begin cell belongs to side."""
    return piece_side(board.get(move.begin_row, move.begin_col)) == side


def _palace_has(
    board: Board, piece: Piece, top: int, bottom: int, left: int, right: int
) -> bool:
    for row in range(top, bottom + 1):
        for col in range(left, right + 1):
            if board.get(row, col) is piece:
                return True
    return False


def check_winner(board: Board) -> Side:
    """Return the winning side, or NEITHER while both generals stand.

    A general can only be found inside its own palace. If both generals are
    gone, which normal play cannot reach, DOWN is reported.
    """
    up_alive = _palace_has(
        board, Piece.UP_GENERAL,
        PALACE_UP_TOP, PALACE_UP_BOTTOM, PALACE_UP_LEFT, PALACE_UP_RIGHT,
    )
    down_alive = _palace_has(
        board, Piece.DOWN_GENERAL,
        PALACE_DOWN_TOP, PALACE_DOWN_BOTTOM, PALACE_DOWN_LEFT, PALACE_DOWN_RIGHT,
    )

    if up_alive and down_alive:
        return Side.NEITHER
    if up_alive:
        return Side.UP
    return Side.DOWN
