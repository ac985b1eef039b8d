"""Static evaluation."""

from .board import Board
from .constants import ROW_BEGIN, ROW_END, COL_BEGIN, COL_END
from .piece import Piece, PIECE_INFO

# Plain-int (value, position rows) copies of the piece tables, read at every
# leaf of the search.
_SCORE_TABLES = {
    piece: (info.value, info.positions.tolist())
    for piece, info in PIECE_INFO.items()
    if piece is not Piece.EMPTY and piece is not Piece.OUT
}


def evaluate(board: Board) -> int:
    """Score a position from material and piece placement.

    UP pieces count negative and DOWN pieces positive, so UP prefers low
    scores and DOWN prefers high ones.
    """
    score = 0
    grid = board.grid
    for row in range(ROW_BEGIN, ROW_END):
        cells = grid[row]
        for col in range(COL_BEGIN, COL_END):
            table = _SCORE_TABLES.get(cells[col])
            if table is None:
                continue
            value, positions = table
            score += value + positions[row - ROW_BEGIN][col - COL_BEGIN]
    return score
