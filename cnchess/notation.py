"""Conversion between file/rank notation and padded board coordinates.

Files run "a".."i" from left to right. Ranks run "0".."9" from the bottom
(DOWN side's back rank) to the top, so "e0" is the DOWN general's start
square and "e9" the UP general's.
"""

from typing import Tuple

from .constants import ROW_BEGIN, COL_BEGIN, PLAY_ROWS, PLAY_COLS
from .move import Move

FILES = "abcdefghi"
RANKS = "0123456789"


def square_to_coords(square: str) -> Tuple[int, int]:
    """Convert a square such as "e0" to (row, col).

    Raises:
        ValueError: if the square is malformed.
    """
    if len(square) != 2 or square[0] not in FILES or square[1] not in RANKS:
        raise ValueError(f"Invalid square: {square!r}")
    col = FILES.index(square[0]) + COL_BEGIN
    row = (PLAY_ROWS - 1) - RANKS.index(square[1]) + ROW_BEGIN
    return (row, col)


def coords_to_square(row: int, col: int) -> str:
    """Convert (row, col) in the playable region to a square name.

    Raises:
        ValueError: if the coordinates are outside the playable region.
    """
    play_row = row - ROW_BEGIN
    play_col = col - COL_BEGIN
    if not (0 <= play_row < PLAY_ROWS and 0 <= play_col < PLAY_COLS):
        raise ValueError(f"Not a board square: ({row}, {col})")
    return f"{FILES[play_col]}{RANKS[PLAY_ROWS - 1 - play_row]}"


def is_move_string(text: str) -> bool:
    """Check whether text starts with two squares, e.g. "b2e2"."""
    if len(text) < 4:
        return False
    return (
        text[0] in FILES
        and text[1] in RANKS
        and text[2] in FILES
        and text[3] in RANKS
    )


def parse_move(text: str) -> Move:
    """Parse a move such as "b2e2".

    Raises:
        ValueError: if text is not a move.
    """
    text = text.strip()
    if not is_move_string(text):
        raise ValueError(f"Invalid move: {text!r}")
    begin_row, begin_col = square_to_coords(text[0:2])
    end_row, end_col = square_to_coords(text[2:4])
    return Move(begin_row, begin_col, end_row, end_col)


def move_to_string(move: Move) -> str:
    return coords_to_square(move.begin_row, move.begin_col) + coords_to_square(
        move.end_row, move.end_col
    )
