"""Piece identities and their static properties."""

from enum import Enum
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping

import numpy as np

from .constants import PLAY_ROWS, PLAY_COLS


class Side(Enum):
    """Player sides."""

    UP = "UP"  # Top of the board, the AI side in the console game
    DOWN = "DOWN"  # Bottom of the board
    NEITHER = "NEITHER"  # Empty and off-board cells, or "no winner"

    def reverse(self) -> "Side":
        """Return the opponent; NEITHER maps to itself."""
        if self is Side.UP:
            return Side.DOWN
        if self is Side.DOWN:
            return Side.UP
        return Side.NEITHER


class PieceKind(Enum):
    """Piece kinds, including the two sentinel kinds."""

    PAWN = "PAWN"
    CANNON = "CANNON"
    ROOK = "ROOK"
    KNIGHT = "KNIGHT"
    BISHOP = "BISHOP"
    ADVISOR = "ADVISOR"
    GENERAL = "GENERAL"
    EMPTY = "EMPTY"
    OUT = "OUT"


class Piece(Enum):
    """Everything a board cell can hold."""

    UP_PAWN = "UP_PAWN"
    UP_CANNON = "UP_CANNON"
    UP_ROOK = "UP_ROOK"
    UP_KNIGHT = "UP_KNIGHT"
    UP_BISHOP = "UP_BISHOP"
    UP_ADVISOR = "UP_ADVISOR"
    UP_GENERAL = "UP_GENERAL"
    DOWN_PAWN = "DOWN_PAWN"
    DOWN_CANNON = "DOWN_CANNON"
    DOWN_ROOK = "DOWN_ROOK"
    DOWN_KNIGHT = "DOWN_KNIGHT"
    DOWN_BISHOP = "DOWN_BISHOP"
    DOWN_ADVISOR = "DOWN_ADVISOR"
    DOWN_GENERAL = "DOWN_GENERAL"
    EMPTY = "EMPTY"
    OUT = "OUT"

    def __str__(self) -> str:
        return piece_char(self)


@dataclass(frozen=True)
class PieceInfo:
    """Static properties of a piece identity."""

    side: Side
    kind: PieceKind
    char: str
    value: int  # negative for UP, positive for DOWN
    positions: np.ndarray  # PLAY_ROWS x PLAY_COLS, read-only


def _table(rows: List[List[int]]) -> np.ndarray:
    table = np.array(rows, dtype=np.int32)
    if table.shape != (PLAY_ROWS, PLAY_COLS):
        raise ValueError(f"Position table must be {PLAY_ROWS}x{PLAY_COLS}, got {table.shape}")
    table.setflags(write=False)
    return table


_ZERO_TABLE = _table([[0] * PLAY_COLS for _ in range(PLAY_ROWS)])

# Position tables, indexed by playable row (0 = top) and column (0 = file a).
_UP_PAWN_POS = _table([
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [2, 0, 2, 0, -6, 0, 2, 0, 2],
    [-3, 0, -4, 0, -7, 0, -4, 0, -3],
    [-10, -18, -22, -35, -40, -35, -22, -18, -10],
    [-20, -27, -30, -40, -42, -40, -30, -27, -20],
    [-20, -30, -45, -55, -55, -55, -45, -30, -20],
    [-20, -30, -50, -65, -70, -65, -50, -30, -20],
    [0, 0, 0, -2, -4, -2, 0, 0, 0],
])

_UP_CANNON_POS = _table([
    [0, 0, -1, -3, -3, -3, -1, 0, 0],
    [0, -1, -2, -2, -2, -2, -2, -1, 0],
    [-1, 0, -4, -3, -5, -3, -4, 0, -1],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [1, 0, -3, 0, -4, 0, -3, 0, 1],
    [0, 0, 0, 0, -4, 0, 0, 0, 0],
    [0, -3, -3, -2, -4, -2, -3, -3, 0],
    [-1, -1, 0, 5, 4, 5, 0, -1, -1],
    [-2, -2, 0, 4, 7, 4, 0, -2, -2],
    [-4, -4, 0, 5, 6, 5, 0, -4, -4],
])

_UP_ROOK_POS = _table([
    [6, -6, -4, -12, 0, -12, -4, -6, 6],
    [-5, -8, -6, -12, 0, -12, -6, -8, -5],
    [2, -8, -4, -12, -12, -12, -4, -8, 2],
    [-4, -9, -4, -12, -14, -12, -4, -9, -4],
    [-8, -12, -12, -14, -15, -14, -12, -12, -8],
    [-8, -11, -11, -14, -15, -14, -11, -11, -8],
    [-6, -13, -13, -16, -16, -16, -13, -13, -6],
    [-6, -8, -7, -14, -16, -14, -7, -8, -6],
    [-6, -12, -9, -16, -33, -16, -9, -12, -6],
    [-6, -8, -7, -13, -14, -13, -7, -8, -6],
])

_UP_KNIGHT_POS = _table([
    [0, 3, -2, 0, -2, 0, -2, 3, 0],
    [3, -2, -4, -5, 10, -5, -4, -2, 3],
    [-5, -4, -6, -7, -4, -7, -6, -4, -5],
    [-4, -6, -10, -7, -10, -7, -10, -6, -4],
    [-2, -10, -13, -14, -15, -14, -13, -10, -2],
    [-2, -12, -11, -15, -16, -15, -11, -12, -2],
    [-5, -20, -12, -19, -12, -19, -12, -20, -5],
    [-4, -10, -11, -15, -11, -15, -11, -10, -4],
    [-2, -8, -15, -9, -6, -9, -15, -8, -2],
    [-2, -2, -2, -8, -2, -8, -2, -2, -2],
])

_UP_BISHOP_POS = _table([
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [2, 0, 0, 0, -3, 0, 0, 0, 2],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
])

_UP_ADVISOR_POS = _table([
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, -3, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
])

_UP_GENERAL_POS = _table([
    [0, 0, 0, -1, -5, -1, 0, 0, 0],
    [0, 0, 0, 8, 8, 8, 0, 0, 0],
    [0, 0, 0, 9, 9, 9, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
])

_DOWN_PAWN_POS = _table([
    [0, 0, 0, 2, 4, 2, 0, 0, 0],
    [20, 30, 50, 65, 70, 65, 50, 30, 20],
    [20, 30, 45, 55, 55, 55, 45, 30, 20],
    [20, 27, 30, 40, 42, 40, 30, 27, 20],
    [10, 18, 22, 35, 40, 35, 22, 18, 10],
    [3, 0, 4, 0, 7, 0, 4, 0, 3],
    [-2, 0, -2, 0, 6, 0, -2, 0, -2],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
])

_DOWN_CANNON_POS = _table([
    [4, 4, 0, -5, -6, -5, 0, 4, 4],
    [2, 2, 0, -4, -7, -4, 0, 2, 2],
    [1, 1, 0, -5, -4, -5, 0, 1, 1],
    [0, 3, 3, 2, 4, 2, 3, 3, 0],
    [0, 0, 0, 0, 4, 0, 0, 0, 0],
    [-1, 0, 3, 0, 4, 0, 3, 0, -1],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [1, 0, 4, 3, 5, 3, 4, 0, 1],
    [0, 1, 2, 2, 2, 2, 2, 1, 0],
    [0, 0, 1, 3, 3, 3, 1, 0, 0],
])

_DOWN_ROOK_POS = _table([
    [6, 8, 7, 13, 14, 13, 7, 8, 6],
    [6, 12, 9, 16, 33, 16, 9, 12, 6],
    [6, 8, 7, 14, 16, 14, 7, 8, 6],
    [6, 13, 13, 16, 16, 16, 13, 13, 6],
    [8, 11, 11, 14, 15, 14, 11, 11, 8],
    [8, 12, 12, 14, 15, 14, 12, 12, 8],
    [4, 9, 4, 12, 14, 12, 4, 9, 4],
    [-2, 8, 4, 12, 12, 12, 4, 8, -2],
    [5, 8, 6, 12, 0, 12, 6, 8, 5],
    [-6, 6, 4, 12, 0, 12, 4, 6, -6],
])

_DOWN_KNIGHT_POS = _table([
    [2, 2, 2, 8, 2, 8, 2, 2, 2],
    [2, 8, 15, 9, 6, 9, 15, 8, 2],
    [4, 10, 11, 15, 11, 15, 11, 10, 4],
    [5, 20, 12, 19, 12, 19, 12, 20, 5],
    [2, 12, 11, 15, 16, 15, 11, 12, 2],
    [2, 10, 13, 14, 15, 14, 13, 10, 2],
    [4, 6, 10, 7, 10, 7, 10, 6, 4],
    [5, 4, 6, 7, 4, 7, 6, 4, 5],
    [-3, 2, 4, 5, -10, 5, 4, 2, -3],
    [0, -3, 2, 0, 2, 0, 2, -3, 0],
])

_DOWN_BISHOP_POS = _table([
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [-2, 0, 0, 0, 3, 0, 0, 0, -2],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
])

_DOWN_ADVISOR_POS = _table([
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 3, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
])

_DOWN_GENERAL_POS = _table([
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 0, 0, 0, 0],
    [0, 0, 0, -9, -9, -9, 0, 0, 0],
    [0, 0, 0, -8, -8, -8, 0, 0, 0],
    [0, 0, 0, 1, 5, 1, 0, 0, 0],
])


PIECE_INFO: Mapping[Piece, PieceInfo] = MappingProxyType({
    Piece.UP_PAWN: PieceInfo(Side.UP, PieceKind.PAWN, "P", -20, _UP_PAWN_POS),
    Piece.UP_CANNON: PieceInfo(Side.UP, PieceKind.CANNON, "C", -50, _UP_CANNON_POS),
    Piece.UP_ROOK: PieceInfo(Side.UP, PieceKind.ROOK, "R", -100, _UP_ROOK_POS),
    Piece.UP_KNIGHT: PieceInfo(Side.UP, PieceKind.KNIGHT, "N", -50, _UP_KNIGHT_POS),
    Piece.UP_BISHOP: PieceInfo(Side.UP, PieceKind.BISHOP, "B", -10, _UP_BISHOP_POS),
    Piece.UP_ADVISOR: PieceInfo(Side.UP, PieceKind.ADVISOR, "A", -10, _UP_ADVISOR_POS),
    Piece.UP_GENERAL: PieceInfo(Side.UP, PieceKind.GENERAL, "G", -10000, _UP_GENERAL_POS),
    Piece.DOWN_PAWN: PieceInfo(Side.DOWN, PieceKind.PAWN, "p", 20, _DOWN_PAWN_POS),
    Piece.DOWN_CANNON: PieceInfo(Side.DOWN, PieceKind.CANNON, "c", 50, _DOWN_CANNON_POS),
    Piece.DOWN_ROOK: PieceInfo(Side.DOWN, PieceKind.ROOK, "r", 100, _DOWN_ROOK_POS),
    Piece.DOWN_KNIGHT: PieceInfo(Side.DOWN, PieceKind.KNIGHT, "n", 50, _DOWN_KNIGHT_POS),
    Piece.DOWN_BISHOP: PieceInfo(Side.DOWN, PieceKind.BISHOP, "b", 10, _DOWN_BISHOP_POS),
    Piece.DOWN_ADVISOR: PieceInfo(Side.DOWN, PieceKind.ADVISOR, "a", 10, _DOWN_ADVISOR_POS),
    Piece.DOWN_GENERAL: PieceInfo(Side.DOWN, PieceKind.GENERAL, "g", 10000, _DOWN_GENERAL_POS),
    Piece.EMPTY: PieceInfo(Side.NEITHER, PieceKind.EMPTY, ".", 0, _ZERO_TABLE),
    Piece.OUT: PieceInfo(Side.NEITHER, PieceKind.OUT, "#", 0, _ZERO_TABLE),
})

_PIECE_BY_SIDE_KIND: Mapping = MappingProxyType({
    (info.side, info.kind): piece
    for piece, info in PIECE_INFO.items()
    if info.side is not Side.NEITHER
})

_PIECE_BY_CHAR: Mapping[str, Piece] = MappingProxyType({
    info.char: piece for piece, info in PIECE_INFO.items()
})


def piece_side(piece: Piece) -> Side:
    return PIECE_INFO[piece].side


def piece_kind(piece: Piece) -> PieceKind:
    return PIECE_INFO[piece].kind


def piece_char(piece: Piece) -> str:
    return PIECE_INFO[piece].char


def piece_value(piece: Piece) -> int:
    """Material value; negative for UP pieces, positive for DOWN pieces."""
    return PIECE_INFO[piece].value


def piece_pos_value(piece: Piece, row: int, col: int) -> int:
    """Positional bonus at playable-region coordinates (0-based)."""
    return int(PIECE_INFO[piece].positions[row, col])


def make_piece(side: Side, kind: PieceKind) -> Piece:
    """Look up the piece identity for a side and kind.

    Raises:
        KeyError: if side is NEITHER or kind is a sentinel kind.
    """
    return _PIECE_BY_SIDE_KIND[(side, kind)]


def piece_from_char(char: str) -> Piece:
    """Inverse of piece_char.

    Raises:
        KeyError: if the glyph is unknown.
    """
    return _PIECE_BY_CHAR[char]
