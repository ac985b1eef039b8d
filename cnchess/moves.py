"""Move generation.

Moves are pseudo-legal: they follow the movement rules of each piece and the
board edges, but a move that leaves the mover's own general attackable is
still generated.
"""

from typing import List

from .board import Board
from .constants import (
    ROW_BEGIN,
    ROW_END,
    COL_BEGIN,
    COL_END,
    RIVER_UP,
    RIVER_DOWN,
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
from .piece import Piece, PieceKind, Side, piece_kind, piece_side

ORTHOGONAL_DIRECTIONS = [(-1, 0), (1, 0), (0, -1), (0, 1)]  # up, down, left, right


def _add_if_reachable(
    board: Board, moves: List[Move], row: int, col: int, to_row: int, to_col: int
) -> None:
    """Add the move unless it leaves the board or lands on a friendly piece."""
    target = board.get(to_row, to_col)
    if target is Piece.OUT:
        return
    if piece_side(board.get(row, col)) != piece_side(target):
        moves.append(Move(row, col, to_row, to_col))


def _generate_pawn_moves(
    board: Board, moves: List[Move], row: int, col: int, side: Side
) -> None:
    if side == Side.UP:
        _add_if_reachable(board, moves, row, col, row + 1, col)
        if row > RIVER_UP:
            _add_if_reachable(board, moves, row, col, row, col - 1)
            _add_if_reachable(board, moves, row, col, row, col + 1)
    else:
        _add_if_reachable(board, moves, row, col, row - 1, col)
        if row < RIVER_DOWN:
            _add_if_reachable(board, moves, row, col, row, col - 1)
            _add_if_reachable(board, moves, row, col, row, col + 1)


def _generate_cannon_moves(
    board: Board, moves: List[Move], row: int, col: int, side: Side
) -> None:
    enemy = side.reverse()
    for dr, dc in ORTHOGONAL_DIRECTIONS:
        to_row, to_col = row + dr, col + dc
        piece_at = board.get(to_row, to_col)
        while piece_at is Piece.EMPTY:
            moves.append(Move(row, col, to_row, to_col))
            to_row, to_col = to_row + dr, to_col + dc
            piece_at = board.get(to_row, to_col)

        if piece_at is Piece.OUT:
            continue

        # piece_at is the screen; the first piece behind it may be captured
        to_row, to_col = to_row + dr, to_col + dc
        piece_at = board.get(to_row, to_col)
        while piece_at is Piece.EMPTY:
            to_row, to_col = to_row + dr, to_col + dc
            piece_at = board.get(to_row, to_col)
        if piece_side(piece_at) == enemy:
            moves.append(Move(row, col, to_row, to_col))


def _generate_rook_moves(
    board: Board, moves: List[Move], row: int, col: int, side: Side
) -> None:
    enemy = side.reverse()
    for dr, dc in ORTHOGONAL_DIRECTIONS:
        to_row, to_col = row + dr, col + dc
        piece_at = board.get(to_row, to_col)
        while piece_at is Piece.EMPTY:
            moves.append(Move(row, col, to_row, to_col))
            to_row, to_col = to_row + dr, to_col + dc
            piece_at = board.get(to_row, to_col)
        if piece_side(piece_at) == enemy:
            moves.append(Move(row, col, to_row, to_col))


# Leg offset -> the two leaps it blocks.
KNIGHT_LEAPS = [
    ((1, 0), [(2, 1), (2, -1)]),
    ((-1, 0), [(-2, 1), (-2, -1)]),
    ((0, 1), [(1, 2), (-1, 2)]),
    ((0, -1), [(1, -2), (-1, -2)]),
]


def _generate_knight_moves(
    board: Board, moves: List[Move], row: int, col: int, side: Side
) -> None:
    for (leg_dr, leg_dc), leaps in KNIGHT_LEAPS:
        if board.get(row + leg_dr, col + leg_dc) is not Piece.EMPTY:
            continue
        for dr, dc in leaps:
            _add_if_reachable(board, moves, row, col, row + dr, col + dc)


def _generate_bishop_moves(
    board: Board, moves: List[Move], row: int, col: int, side: Side
) -> None:
    """Bishop moves: two cells diagonally, never across the river.

    Each leap needs its eye (the diagonal cell in between) to be empty.
    """
    if side == Side.UP:
        forward = 1
        may_advance = row + 2 <= RIVER_UP
    else:
        forward = -1
        may_advance = row - 2 >= RIVER_DOWN

    directions = [(-forward, 1), (-forward, -1)]
    if may_advance:
        directions = [(forward, 1), (forward, -1)] + directions

    for dr, dc in directions:
        if board.get(row + dr, col + dc) is Piece.EMPTY:
            _add_if_reachable(board, moves, row, col, row + 2 * dr, col + 2 * dc)


def _palace_bounds(side: Side):
    if side == Side.UP:
        return PALACE_UP_TOP, PALACE_UP_BOTTOM, PALACE_UP_LEFT, PALACE_UP_RIGHT
    return PALACE_DOWN_TOP, PALACE_DOWN_BOTTOM, PALACE_DOWN_LEFT, PALACE_DOWN_RIGHT


def _generate_advisor_moves(
    board: Board, moves: List[Move], row: int, col: int, side: Side
) -> None:
    top, bottom, left, right = _palace_bounds(side)
    for dr, dc in [(1, 1), (1, -1), (-1, 1), (-1, -1)]:
        to_row, to_col = row + dr, col + dc
        if top <= to_row <= bottom and left <= to_col <= right:
            _add_if_reachable(board, moves, row, col, to_row, to_col)


def _generate_general_moves(
    board: Board, moves: List[Move], row: int, col: int, side: Side
) -> None:
    """General moves: one step inside the palace, plus the flying capture.

    Generals may not face each other on an open column, so a general that
    sees the enemy general with nothing in between may capture it.
    """
    top, bottom, left, right = _palace_bounds(side)
    for dr, dc in [(1, 0), (-1, 0), (0, 1), (0, -1)]:
        to_row, to_col = row + dr, col + dc
        if top <= to_row <= bottom and left <= to_col <= right:
            _add_if_reachable(board, moves, row, col, to_row, to_col)

    if side == Side.UP:
        enemy_general = Piece.DOWN_GENERAL
        scan = range(row + 1, ROW_END)
    else:
        enemy_general = Piece.UP_GENERAL
        scan = range(row - 1, ROW_BEGIN - 1, -1)

    for to_row in scan:
        piece_at = board.get(to_row, col)
        if piece_at is Piece.EMPTY:
            continue
        if piece_at is enemy_general:
            moves.append(Move(row, col, to_row, col))
        break


def _generate_moves_for_piece(
    board: Board, moves: List[Move], row: int, col: int, kind: PieceKind, side: Side
) -> None:
    if kind == PieceKind.PAWN:
        _generate_pawn_moves(board, moves, row, col, side)
    elif kind == PieceKind.CANNON:
        _generate_cannon_moves(board, moves, row, col, side)
    elif kind == PieceKind.ROOK:
        _generate_rook_moves(board, moves, row, col, side)
    elif kind == PieceKind.KNIGHT:
        _generate_knight_moves(board, moves, row, col, side)
    elif kind == PieceKind.BISHOP:
        _generate_bishop_moves(board, moves, row, col, side)
    elif kind == PieceKind.ADVISOR:
        _generate_advisor_moves(board, moves, row, col, side)
    elif kind == PieceKind.GENERAL:
        _generate_general_moves(board, moves, row, col, side)


def generate_moves(board: Board, side: Side) -> List[Move]:
    """Generate all pseudo-legal moves for side (UP or DOWN).

    Pieces are visited row by row from the top, left to right, so the order
    of the result is deterministic.
    """
    moves: List[Move] = []
    if side == Side.NEITHER:
        return moves
    for row in range(ROW_BEGIN, ROW_END):
        for col in range(COL_BEGIN, COL_END):
            piece = board.get(row, col)
            if piece_side(piece) == side:
                _generate_moves_for_piece(board, moves, row, col, piece_kind(piece), side)
    return moves


def is_legal_move(board: Board, move: Move) -> bool:
    """Check that move is one of the moves its piece's side can play."""
    side = piece_side(board.get(move.begin_row, move.begin_col))
    if side == Side.NEITHER:
        return False
    return move in generate_moves(board, side)
